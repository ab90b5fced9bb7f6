"""
Hand-written Python stub matching proto/rating.proto.

Mirrors the proto messages:
  - RatingData, NewRatingData
  - Create, Get, GetById, GetForRequest, Update, Delete request/response pairs

Replace with real protoc output when proto toolchain is available.
"""

from proto.message import Message

RATING_FOR_REQUESTOR = "requestor"
RATING_FOR_PROVIDER = "provider"


class RatingData(Message):
    """Mirrors proto/rating.proto RatingData (one `ratings` row)."""

    FIELDS = {
        "id": "",
        "request_id": "",
        "author": "",
        "rating_for": "",
        "value": 0,
        "comment": "",
        "created_at": "",
    }


class NewRatingData(Message):
    """Mirrors proto/rating.proto NewRatingData."""

    FIELDS = {
        "request_id": "",
        "author": "",
        "value": 0,
        "comment": "",
    }


class CreateRequest(Message):
    FIELDS = {"rating": None}
    MESSAGES = {"rating": NewRatingData}


class CreateResponse(Message):
    FIELDS = {"rating": None}
    MESSAGES = {"rating": RatingData}


class GetRequest(Message):
    FIELDS = {"key": "", "value": ""}


class GetResponse(Message):
    FIELDS = {"ratings": []}
    MESSAGES = {"ratings": RatingData}


class GetByIdRequest(Message):
    FIELDS = {"request_id": "", "rating_for": ""}


class GetByIdResponse(Message):
    FIELDS = {"rating": None}
    MESSAGES = {"rating": RatingData}


class GetForRequestRequest(Message):
    FIELDS = {"request_id": ""}


class GetForRequestResponse(Message):
    FIELDS = {"ratings": []}
    MESSAGES = {"ratings": RatingData}


class UpdateRequest(Message):
    """`body` is a JSON object with the columns to change."""

    FIELDS = {"rating_id": "", "body": ""}


class UpdateResponse(Message):
    FIELDS = {"rating": None}
    MESSAGES = {"rating": RatingData}


class DeleteRequest(Message):
    FIELDS = {"rating_id": ""}


class DeleteResponse(Message):
    FIELDS = {}
