"""
ServiceRequest gRPC Service Implementation.

Implements ServiceRequestServicer from proto/service_request_pb2_grpc.py on
top of ServiceRequestClient:
  - Create / Get / GetById / Update / Delete: request rows
  - ApplyProvider / SelectProvider / StartService / CompleteService:
    lifecycle transitions, each a single stored procedure
  - GetAvailable: pending requests with an optional filter and row range
  - GetSummaryForUser: requests a user takes part in
  - GetCommitment: on-chain commitment of a completed request

CompleteService mirrors the completed request onto the ledger after the
database write succeeds. That commit is advisory: its failure is logged and
never changes the RPC outcome.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import grpc

from backend.client import ClientError
from backend.service_request import ServiceRequestClient
from ledger.contract_client import LedgerClient, LedgerError
from proto import service_request_pb2 as pb
from proto import status
from proto.service_request_pb2_grpc import ServiceRequestServicer

logger = logging.getLogger(__name__)

# Transition-sensitive columns only change through their procedures
PROTECTED_COLUMNS = frozenset({"id", "requestor", "provider", "state", "applicants", "completed_at"})


class ServiceRequestServiceImpl(ServiceRequestServicer):
    """Production implementation of the ServiceRequest gRPC service."""

    def __init__(
        self,
        client: Optional[ServiceRequestClient] = None,
        ledger: Optional[LedgerClient] = None,
    ) -> None:
        self.client = client or ServiceRequestClient()
        self.ledger = ledger

    # ========================================================================
    # ROWS
    # ========================================================================

    def Create(self, request: pb.CreateRequest, context) -> pb.CreateResponse:
        if not request.requestor or request.request_data is None:
            return status.invalid_argument(context, pb.CreateResponse())
        try:
            created = self.client.create(request.requestor, request.request_data)
        except ClientError as exc:
            return status.client_error(context, exc, pb.CreateResponse())

        logger.info("[ServiceRequestService] Created request: id=%s requestor=%s", created.id, created.requestor)
        return pb.CreateResponse(request=created)

    def Get(self, request: pb.GetRequest, context) -> pb.GetResponse:
        if not request.key or not request.value:
            return status.invalid_argument(context, pb.GetResponse())
        try:
            requests = self.client.get(request.key, request.value)
        except ClientError as exc:
            return status.client_error(context, exc, pb.GetResponse())
        return pb.GetResponse(requests=requests)

    def GetById(self, request: pb.GetByIdRequest, context) -> pb.GetByIdResponse:
        if not request.request_id:
            return status.invalid_argument(context, pb.GetByIdResponse())
        try:
            found = self.client.get_by_id(request.request_id)
        except ClientError as exc:
            return status.client_error(context, exc, pb.GetByIdResponse())
        if found is None:
            return status.not_found(context, pb.GetByIdResponse())
        return pb.GetByIdResponse(request=found)

    def Update(self, request: pb.UpdateRequest, context) -> pb.UpdateResponse:
        """
        Patch free-form columns of a request.

        A JSON column must be sent whole: PostgREST replaces the value, it
        does not merge into it.
        """
        patch = status.decode_patch(request.body, PROTECTED_COLUMNS)
        if not request.request_id or patch is None:
            return status.invalid_argument(context, pb.UpdateResponse())
        try:
            updated = self.client.update(request.request_id, patch)
        except ClientError as exc:
            return status.client_error(context, exc, pb.UpdateResponse())
        return pb.UpdateResponse(request=updated)

    def Delete(self, request: pb.DeleteRequest, context) -> pb.DeleteResponse:
        if not request.request_id:
            return status.invalid_argument(context, pb.DeleteResponse())
        try:
            self.client.delete(request.request_id)
        except ClientError as exc:
            return status.client_error(context, exc, pb.DeleteResponse())

        logger.info("[ServiceRequestService] Deleted request: id=%s", request.request_id)
        return pb.DeleteResponse()

    # ========================================================================
    # TRANSITIONS
    # ========================================================================

    def ApplyProvider(self, request: pb.ApplyProviderRequest, context) -> pb.ApplyProviderResponse:
        if not request.request_id or not request.provider:
            return status.invalid_argument(context, pb.ApplyProviderResponse())
        try:
            self.client.apply_provider(request.request_id, request.provider)
        except ClientError as exc:
            return status.client_error(context, exc, pb.ApplyProviderResponse())

        logger.info(
            "[ServiceRequestService] Provider applied: request=%s provider=%s",
            request.request_id,
            request.provider,
        )
        return pb.ApplyProviderResponse()

    def SelectProvider(self, request: pb.SelectProviderRequest, context) -> pb.SelectProviderResponse:
        """Only the requestor may select; the procedure enforces it."""
        if not request.request_id or not request.provider or not request.caller:
            return status.invalid_argument(context, pb.SelectProviderResponse())
        try:
            self.client.select_provider(request.request_id, request.provider, request.caller)
        except ClientError as exc:
            return status.client_error(context, exc, pb.SelectProviderResponse())

        logger.info(
            "[ServiceRequestService] Provider selected: request=%s provider=%s",
            request.request_id,
            request.provider,
        )
        return pb.SelectProviderResponse()

    def StartService(self, request: pb.StartServiceRequest, context) -> pb.StartServiceResponse:
        if not request.request_id or not request.user_id:
            return status.invalid_argument(context, pb.StartServiceResponse())
        try:
            self.client.start_service(request.request_id, request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, pb.StartServiceResponse())

        logger.info("[ServiceRequestService] Service started: request=%s", request.request_id)
        return pb.StartServiceResponse()

    def CompleteService(self, request: pb.CompleteServiceRequest, context) -> pb.CompleteServiceResponse:
        if not request.request_id or not request.user_id:
            return status.invalid_argument(context, pb.CompleteServiceResponse())
        try:
            self.client.complete_service(request.request_id, request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, pb.CompleteServiceResponse())

        logger.info("[ServiceRequestService] Service completed: request=%s", request.request_id)
        self._commit_to_ledger(request.request_id)
        return pb.CompleteServiceResponse()

    def _commit_to_ledger(self, request_id: str) -> None:
        """Mirror a completed request on-chain. Failures are only logged."""
        if self.ledger is None:
            logger.debug("No ledger configured, skipping commitment for %s", request_id)
            return

        try:
            completed = self.client.get_by_id(request_id)
            if completed is None:
                logger.warning("Ledger commit skipped: request %s not found after completion", request_id)
                return
            timestamp = completed.completed_at or datetime.now(timezone.utc).isoformat()
            self.ledger.commit_service_request(
                completed.id,
                completed.requestor,
                completed.provider,
                completed.rate,
                timestamp,
            )
        except (ClientError, LedgerError) as exc:
            logger.warning("Ledger commit failed for request %s: %s", request_id, exc)
        except Exception:
            logger.exception("Ledger commit failed unexpectedly for request %s", request_id)

    # ========================================================================
    # LISTINGS
    # ========================================================================

    def GetAvailable(self, request: pb.GetAvailableRequest, context) -> pb.GetAvailableResponse:
        filter_by, filter_value = "", ""
        if request.filter is not None:
            if not request.filter.by or not request.filter.value:
                return status.invalid_argument(context, pb.GetAvailableResponse())
            filter_by, filter_value = request.filter.by, request.filter.value

        start = end = None
        if request.range is not None:
            start, end = request.range.start, request.range.end
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in (start, end)):
                return status.invalid_argument(context, pb.GetAvailableResponse())
            if start < 0 or end < start:
                return status.invalid_argument(context, pb.GetAvailableResponse())

        try:
            requests = self.client.get_available(filter_by, filter_value, start, end)
        except ClientError as exc:
            return status.client_error(context, exc, pb.GetAvailableResponse())
        return pb.GetAvailableResponse(requests=requests)

    def GetSummaryForUser(
        self, request: pb.GetSummaryForUserRequest, context
    ) -> pb.GetSummaryForUserResponse:
        if not request.user_id:
            return status.invalid_argument(context, pb.GetSummaryForUserResponse())
        try:
            summary = self.client.get_summary_for_user(request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, pb.GetSummaryForUserResponse())
        return pb.GetSummaryForUserResponse(summary=summary)

    def GetCommitment(self, request: pb.GetCommitmentRequest, context) -> pb.GetCommitmentResponse:
        if not request.request_id:
            return status.invalid_argument(context, pb.GetCommitmentResponse())
        if self.ledger is None:
            logger.error("Ledger read requested for %s but no ledger is configured", request.request_id)
            return status.fail(
                context, grpc.StatusCode.INTERNAL, status.UNKNOWN, pb.GetCommitmentResponse()
            )
        try:
            commitment = self.ledger.get_commitment_of(request.request_id)
        except LedgerError as exc:
            logger.error("Ledger read failed for request %s: %s", request.request_id, exc)
            return status.fail(
                context, grpc.StatusCode.INTERNAL, status.UNKNOWN, pb.GetCommitmentResponse()
            )
        return pb.GetCommitmentResponse(commitment=commitment)
