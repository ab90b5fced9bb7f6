"""
User gRPC Service Implementation.

Implements UserServicer from proto/user_pb2_grpc.py on top of UserClient:
  - Get / GetById: profile rows by column or by user id
  - Update: patch free-form profile columns
  - GetProfile: profile summary with ratings and counters
  - GetCreditBalance / GetTransactionHistory: account procedures
"""

import logging
from typing import Optional

from backend.client import ClientError
from backend.user import UserClient
from proto import status, user_pb2
from proto.user_pb2_grpc import UserServicer

logger = logging.getLogger(__name__)

# `credits` is derived server-side from the transaction history
PROTECTED_COLUMNS = frozenset({"user_id", "credits"})


class UserServiceImpl(UserServicer):
    """Production implementation of the User gRPC service."""

    def __init__(self, client: Optional[UserClient] = None) -> None:
        self.client = client or UserClient()

    def Get(self, request: user_pb2.GetRequest, context) -> user_pb2.GetResponse:
        if not request.key or not request.value:
            return status.invalid_argument(context, user_pb2.GetResponse())
        try:
            users = self.client.get(request.key, request.value)
        except ClientError as exc:
            return status.client_error(context, exc, user_pb2.GetResponse())
        return user_pb2.GetResponse(users=users)

    def GetById(self, request: user_pb2.GetByIdRequest, context) -> user_pb2.GetByIdResponse:
        if not request.user_id:
            return status.invalid_argument(context, user_pb2.GetByIdResponse())
        try:
            user = self.client.get_by_id(request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, user_pb2.GetByIdResponse())
        if user is None:
            return status.not_found(context, user_pb2.GetByIdResponse())
        return user_pb2.GetByIdResponse(user=user)

    def Update(self, request: user_pb2.UpdateRequest, context) -> user_pb2.UpdateResponse:
        """Update profile columns; the body must be a JSON object."""
        patch = status.decode_patch(request.body, PROTECTED_COLUMNS)
        if not request.user_id or patch is None:
            return status.invalid_argument(context, user_pb2.UpdateResponse())
        try:
            user = self.client.update(request.user_id, patch)
        except ClientError as exc:
            return status.client_error(context, exc, user_pb2.UpdateResponse())

        logger.info("[UserService] Updated profile: user=%s columns=%s", request.user_id, sorted(patch))
        return user_pb2.UpdateResponse(user=user)

    def GetProfile(self, request: user_pb2.GetProfileRequest, context) -> user_pb2.GetProfileResponse:
        if not request.user_id:
            return status.invalid_argument(context, user_pb2.GetProfileResponse())
        try:
            profile = self.client.get_profile(request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, user_pb2.GetProfileResponse())
        return user_pb2.GetProfileResponse(profile=profile)

    def GetCreditBalance(
        self, request: user_pb2.GetCreditBalanceRequest, context
    ) -> user_pb2.GetCreditBalanceResponse:
        if not request.user_id:
            return status.invalid_argument(context, user_pb2.GetCreditBalanceResponse())
        try:
            balance = self.client.get_credit_balance(request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, user_pb2.GetCreditBalanceResponse())
        return user_pb2.GetCreditBalanceResponse(balance=balance)

    def GetTransactionHistory(
        self, request: user_pb2.GetTransactionHistoryRequest, context
    ) -> user_pb2.GetTransactionHistoryResponse:
        if not request.user_id:
            return status.invalid_argument(context, user_pb2.GetTransactionHistoryResponse())
        try:
            transactions = self.client.get_transaction_history(request.user_id)
        except ClientError as exc:
            return status.client_error(context, exc, user_pb2.GetTransactionHistoryResponse())
        return user_pb2.GetTransactionHistoryResponse(transactions=transactions)
