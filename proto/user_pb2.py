"""
Hand-written Python stub matching proto/user.proto.

Mirrors the proto messages:
  - UserProfile, NewUserProfile, ProfileSummary, CreditTransaction
  - Get, GetById, Update, GetProfile, GetCreditBalance,
    GetTransactionHistory request/response pairs

Replace with real protoc output when proto toolchain is available.
"""

from proto.message import Message


class UserProfile(Message):
    """Mirrors proto/user.proto UserProfile (one `profiles` row)."""

    FIELDS = {
        "user_id": "",
        "username": "",
        "email": "",
        "first_name": "",
        "last_name": "",
        "phone": "",
        "skills": [],
        "credits": 0.0,
        "created_at": "",
    }


class NewUserProfile(Message):
    """Mirrors proto/user.proto NewUserProfile."""

    FIELDS = {
        "username": "",
        "first_name": "",
        "last_name": "",
        "phone": "",
        "skills": [],
    }


class ProfileSummary(Message):
    """Mirrors proto/user.proto ProfileSummary."""

    FIELDS = {
        "user": None,
        "requestor_rating": 0.0,
        "provider_rating": 0.0,
        "requests_made": 0,
        "services_provided": 0,
    }
    MESSAGES = {"user": UserProfile}


class CreditTransaction(Message):
    """Mirrors proto/user.proto CreditTransaction."""

    FIELDS = {
        "id": "",
        "request_id": "",
        "sender": "",
        "recipient": "",
        "amount": 0.0,
        "created_at": "",
    }


class GetRequest(Message):
    FIELDS = {"key": "", "value": ""}


class GetResponse(Message):
    FIELDS = {"users": []}
    MESSAGES = {"users": UserProfile}


class GetByIdRequest(Message):
    FIELDS = {"user_id": ""}


class GetByIdResponse(Message):
    FIELDS = {"user": None}
    MESSAGES = {"user": UserProfile}


class UpdateRequest(Message):
    """`body` is a JSON object with the columns to change."""

    FIELDS = {"user_id": "", "body": ""}


class UpdateResponse(Message):
    FIELDS = {"user": None}
    MESSAGES = {"user": UserProfile}


class GetProfileRequest(Message):
    FIELDS = {"user_id": ""}


class GetProfileResponse(Message):
    FIELDS = {"profile": None}
    MESSAGES = {"profile": ProfileSummary}


class GetCreditBalanceRequest(Message):
    FIELDS = {"user_id": ""}


class GetCreditBalanceResponse(Message):
    FIELDS = {"balance": 0.0}


class GetTransactionHistoryRequest(Message):
    FIELDS = {"user_id": ""}


class GetTransactionHistoryResponse(Message):
    FIELDS = {"transactions": []}
    MESSAGES = {"transactions": CreditTransaction}
