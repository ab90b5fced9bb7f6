"""
Supabase client for service ratings.

Tables used:
- ratings: one row per (request_id, rating_for)

Creation goes through role-specific procedures; reads, updates and deletes
are plain table operations.
"""

import logging
from typing import Any, Dict, List, Optional

from backend.client import BackendClient, decode_rows, first_or_default
from backend.rpc import RatingRpc
from proto.rating_pb2 import NewRatingData, RatingData

logger = logging.getLogger(__name__)


def _rating_params(rating: NewRatingData) -> Dict[str, Any]:
    return {
        "_request_id": rating.request_id,
        "_author": rating.author,
        "_value": rating.value,
        "_comment": rating.comment,
    }


class RatingClient:
    TABLE = "ratings"

    def __init__(self, backend: Optional[BackendClient] = None) -> None:
        self.backend = backend or BackendClient()

    def create_for_requestor(self, rating: NewRatingData) -> RatingData:
        """Rate the requestor of a completed request."""
        rows = self.backend.call(RatingRpc.CREATE_FOR_REQUESTOR, _rating_params(rating))
        return first_or_default(rows, RatingData)

    def create_for_provider(self, rating: NewRatingData) -> RatingData:
        """Rate the provider of a completed request."""
        rows = self.backend.call(RatingRpc.CREATE_FOR_PROVIDER, _rating_params(rating))
        return first_or_default(rows, RatingData)

    def get(self, column: str, value: str) -> List[RatingData]:
        rows = self.backend.execute(self.backend.query(self.TABLE).select("*").eq(column, value))
        return decode_rows(rows, RatingData)

    def get_for_request(self, request_id: str) -> List[RatingData]:
        return self.get("request_id", request_id)

    def get_by_id(self, request_id: str, rating_for: str) -> Optional[RatingData]:
        rows = self.backend.execute(
            self.backend.query(self.TABLE)
            .select("*")
            .eq("request_id", request_id)
            .eq("rating_for", rating_for)
        )
        ratings = decode_rows(rows, RatingData)
        return ratings[0] if ratings else None

    def update(self, rating_id: str, patch: Dict[str, Any]) -> RatingData:
        rows = self.backend.execute(self.backend.query(self.TABLE).update(patch).eq("id", rating_id))
        return first_or_default(rows, RatingData)

    def delete(self, rating_id: str) -> None:
        self.backend.execute(self.backend.query(self.TABLE).delete().eq("id", rating_id))
