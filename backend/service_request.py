"""
Supabase client for service requests.

Tables used:
- service_requests: one row per request; `state` holds the lifecycle
  (0 pending, 1 provider selected, 2 in progress, 3 completed)

State transitions are stored procedures. The rules that guard them
(who may select a provider, which state allows applications, ...) live in
those procedures and are not repeated here.
"""

import logging
from typing import Any, Dict, List, Optional

from backend.client import BackendClient, decode_object, decode_rows, first_or_default
from backend.rpc import ServiceRequestRpc
from proto.service_request_pb2 import (
    STATE_PENDING,
    NewServiceRequestData,
    ServiceRequestData,
    ServiceRequestSummary,
)

logger = logging.getLogger(__name__)


class ServiceRequestClient:
    TABLE = "service_requests"

    def __init__(self, backend: Optional[BackendClient] = None) -> None:
        self.backend = backend or BackendClient()

    # ========================================================================
    # ROWS
    # ========================================================================

    def create(self, requestor: str, request_data: NewServiceRequestData) -> ServiceRequestData:
        rows = self.backend.call(
            ServiceRequestRpc.CREATE,
            {"_requestor": requestor, "_request": request_data.to_dict()},
        )
        return first_or_default(rows, ServiceRequestData)

    def get(self, column: str, value: str) -> List[ServiceRequestData]:
        rows = self.backend.execute(self.backend.query(self.TABLE).select("*").eq(column, value))
        return decode_rows(rows, ServiceRequestData)

    def get_by_id(self, request_id: str) -> Optional[ServiceRequestData]:
        requests = self.get("id", request_id)
        return requests[0] if requests else None

    def update(self, request_id: str, patch: Dict[str, Any]) -> ServiceRequestData:
        rows = self.backend.execute(
            self.backend.query(self.TABLE).update(patch).eq("id", request_id)
        )
        return first_or_default(rows, ServiceRequestData)

    def delete(self, request_id: str) -> None:
        self.backend.call(ServiceRequestRpc.DELETE, {"_request_id": request_id})

    def get_available(
        self,
        filter_by: str = "",
        filter_value: str = "",
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> List[ServiceRequestData]:
        """Fetch pending requests, optionally narrowed by one column and a row range."""
        query = self.backend.query(self.TABLE).select("*").eq("state", str(STATE_PENDING))
        if filter_by:
            query = query.eq(filter_by, filter_value)
        if start is not None and end is not None:
            query = query.range(start, end)
        logger.debug("Available requests: filter=%s=%s range=%s..%s", filter_by, filter_value, start, end)
        return decode_rows(self.backend.execute(query), ServiceRequestData)

    def get_summary_for_user(self, user_id: str) -> ServiceRequestSummary:
        value = self.backend.call(ServiceRequestRpc.GET_SUMMARY_FOR_USER, {"_user_id": user_id})
        return decode_object(value, ServiceRequestSummary)

    # ========================================================================
    # TRANSITIONS
    # ========================================================================

    def apply_provider(self, request_id: str, provider: str) -> None:
        self.backend.call(
            ServiceRequestRpc.APPLY_PROVIDER,
            {"_request_id": request_id, "_provider": provider},
        )

    def select_provider(self, request_id: str, provider: str, caller: str) -> None:
        self.backend.call(
            ServiceRequestRpc.SELECT_PROVIDER,
            {"_caller": caller, "_request_id": request_id, "_provider": provider},
        )

    def start_service(self, request_id: str, user_id: str) -> None:
        self.backend.call(
            ServiceRequestRpc.START_SERVICE,
            {"_request_id": request_id, "_user_id": user_id},
        )

    def complete_service(self, request_id: str, user_id: str) -> None:
        self.backend.call(
            ServiceRequestRpc.COMPLETE_SERVICE,
            {"_request_id": request_id, "_user_id": user_id},
        )
