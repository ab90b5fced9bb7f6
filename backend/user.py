"""
Supabase client for user accounts.

Tables used:
- profiles: one row per user, keyed by `user_id`
"""

import logging
from typing import Any, Dict, List, Optional

from backend.client import (
    BackendClient,
    InternalError,
    decode_object,
    decode_rows,
    first_or_default,
)
from backend.rpc import UserRpc
from proto.user_pb2 import CreditTransaction, NewUserProfile, ProfileSummary, UserProfile

logger = logging.getLogger(__name__)


class UserClient:
    """Profile reads/updates plus the account procedures."""

    TABLE = "profiles"

    def __init__(self, backend: Optional[BackendClient] = None) -> None:
        self.backend = backend or BackendClient()

    def get(self, column: str, value: str) -> List[UserProfile]:
        rows = self.backend.execute(self.backend.query(self.TABLE).select("*").eq(column, value))
        return decode_rows(rows, UserProfile)

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        users = self.get("user_id", user_id)
        return users[0] if users else None

    def update(self, user_id: str, patch: Dict[str, Any]) -> UserProfile:
        rows = self.backend.execute(
            self.backend.query(self.TABLE).update(patch).eq("user_id", user_id)
        )
        return first_or_default(rows, UserProfile)

    def get_profile(self, user_id: str) -> ProfileSummary:
        value = self.backend.call(UserRpc.GET_PROFILE, {"_user_id": user_id})
        return decode_object(value, ProfileSummary)

    def get_credit_balance(self, user_id: str) -> float:
        value = self.backend.call(UserRpc.GET_CREDIT_BALANCE, {"_user_id": user_id})
        try:
            return float(value or 0)
        except (TypeError, ValueError) as exc:
            raise InternalError(f"parsing error : {exc}") from exc

    def get_transaction_history(self, user_id: str) -> List[CreditTransaction]:
        rows = self.backend.call(UserRpc.GET_TRANSACTION_HISTORY, {"_user_id": user_id})
        return decode_rows(rows, CreditTransaction)

    def create_new_profile(self, user_id: str, profile: NewUserProfile) -> UserProfile:
        rows = self.backend.call(
            UserRpc.HANDLE_NEW_USER,
            {"_user_id": user_id, "_profile": profile.to_dict()},
        )
        return first_or_default(rows, UserProfile)

    def check_if_email_exist(self, email: str) -> bool:
        value = self.backend.call(UserRpc.CHECK_IF_EMAIL_EXIST, {"_email": email})
        if not isinstance(value, bool):
            raise InternalError(f"parsing error : expected bool, got {type(value).__name__}")
        return value
