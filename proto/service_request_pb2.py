"""
Hand-written Python stub matching proto/service_request.proto.

Mirrors the proto messages:
  - ServiceRequestData, NewServiceRequestData, ServiceRequestSummary,
    ServiceCommitmentData, AvailableFilter, AvailableRange
  - one request/response pair per ServiceRequest RPC

Replace with real protoc output when proto toolchain is available.
"""

from proto.message import Message

# Values of the remote `state` column
STATE_PENDING = 0
STATE_PROVIDER_SELECTED = 1
STATE_IN_PROGRESS = 2
STATE_COMPLETED = 3


class ServiceRequestData(Message):
    """Mirrors proto/service_request.proto ServiceRequestData."""

    FIELDS = {
        "id": "",
        "requestor": "",
        "provider": "",
        "title": "",
        "description": "",
        "category": "",
        "state": STATE_PENDING,
        "rate": 0.0,
        "applicants": [],
        "created_at": "",
        "updated_at": "",
        "completed_at": "",
    }


class NewServiceRequestData(Message):
    """Mirrors proto/service_request.proto NewServiceRequestData."""

    FIELDS = {
        "title": "",
        "description": "",
        "category": "",
        "rate": 0.0,
    }


class ServiceRequestSummary(Message):
    """Requests a user is involved in, grouped by role."""

    FIELDS = {
        "as_requestor": [],
        "as_provider": [],
        "applications": [],
    }
    MESSAGES = {
        "as_requestor": ServiceRequestData,
        "as_provider": ServiceRequestData,
        "applications": ServiceRequestData,
    }


class ServiceCommitmentData(Message):
    """On-chain commitment of a completed request."""

    FIELDS = {
        "requestor": "",
        "provider": "",
        "amount": 0.0,
        "is_completed": False,
    }


class AvailableFilter(Message):
    FIELDS = {"by": "", "value": ""}


class AvailableRange(Message):
    """Inclusive row range, forwarded as-is to the backend."""

    FIELDS = {"start": 0, "end": 0}


class CreateRequest(Message):
    FIELDS = {"requestor": "", "request_data": None}
    MESSAGES = {"request_data": NewServiceRequestData}


class CreateResponse(Message):
    FIELDS = {"request": None}
    MESSAGES = {"request": ServiceRequestData}


class GetRequest(Message):
    FIELDS = {"key": "", "value": ""}


class GetResponse(Message):
    FIELDS = {"requests": []}
    MESSAGES = {"requests": ServiceRequestData}


class GetByIdRequest(Message):
    FIELDS = {"request_id": ""}


class GetByIdResponse(Message):
    FIELDS = {"request": None}
    MESSAGES = {"request": ServiceRequestData}


class UpdateRequest(Message):
    """`body` is a JSON object with the columns to change."""

    FIELDS = {"request_id": "", "body": ""}


class UpdateResponse(Message):
    FIELDS = {"request": None}
    MESSAGES = {"request": ServiceRequestData}


class DeleteRequest(Message):
    FIELDS = {"request_id": ""}


class DeleteResponse(Message):
    FIELDS = {}


class ApplyProviderRequest(Message):
    FIELDS = {"request_id": "", "provider": ""}


class ApplyProviderResponse(Message):
    FIELDS = {}


class SelectProviderRequest(Message):
    FIELDS = {"request_id": "", "provider": "", "caller": ""}


class SelectProviderResponse(Message):
    FIELDS = {}


class StartServiceRequest(Message):
    FIELDS = {"request_id": "", "user_id": ""}


class StartServiceResponse(Message):
    FIELDS = {}


class CompleteServiceRequest(Message):
    FIELDS = {"request_id": "", "user_id": ""}


class CompleteServiceResponse(Message):
    FIELDS = {}


class GetAvailableRequest(Message):
    FIELDS = {"filter": None, "range": None}
    MESSAGES = {"filter": AvailableFilter, "range": AvailableRange}


class GetAvailableResponse(Message):
    FIELDS = {"requests": []}
    MESSAGES = {"requests": ServiceRequestData}


class GetSummaryForUserRequest(Message):
    FIELDS = {"user_id": ""}


class GetSummaryForUserResponse(Message):
    FIELDS = {"summary": None}
    MESSAGES = {"summary": ServiceRequestSummary}


class GetCommitmentRequest(Message):
    FIELDS = {"request_id": ""}


class GetCommitmentResponse(Message):
    FIELDS = {"commitment": None}
    MESSAGES = {"commitment": ServiceCommitmentData}
