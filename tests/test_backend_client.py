import json
import logging
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest import SyncPostgrestClient
from postgrest.exceptions import APIError

from backend.client import (
    BackendClient,
    BackendError,
    InternalError,
    PostgrestError,
    decode_object,
    decode_rows,
    first_or_default,
)
from backend.rpc import ServiceRequestRpc
from proto.rating_pb2 import RatingData
from proto.user_pb2 import ProfileSummary


@pytest.fixture
def supabase():
    return MagicMock()


def test_call_posts_procedure_name_and_params(supabase):
    supabase.rpc.return_value.execute.return_value.data = [{"id": "sr-1"}]

    result = BackendClient(client=supabase).call(ServiceRequestRpc.CREATE, {"_requestor": "u-1"})

    supabase.rpc.assert_called_once_with("service_request_create", {"_requestor": "u-1"})
    assert result == [{"id": "sr-1"}]


def test_api_error_becomes_backend_error(supabase):
    supabase.rpc.return_value.execute.side_effect = APIError(
        {"code": "P0001", "message": "request is not pending", "hint": None, "details": None}
    )

    with pytest.raises(BackendError) as excinfo:
        BackendClient(client=supabase).call("service_request_apply_provider", {})

    assert excinfo.value.error == PostgrestError(code="P0001", message="request is not pending")


def test_transport_error_becomes_internal_error(supabase):
    builder = MagicMock()
    builder.execute.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(InternalError, match="request error"):
        BackendClient(client=supabase).execute(builder)


def _postgrest(handler):
    """Real postgrest client whose HTTP session is served by `handler`."""
    client = SyncPostgrestClient("http://db.test/rest/v1")
    client.session = httpx.Client(
        base_url="http://db.test/rest/v1",
        transport=httpx.MockTransport(handler),
    )
    return client


def test_non_json_error_body_becomes_internal_error(caplog):
    html = "<html>Bad Gateway from upstream proxy 10.0.0.7</html>"
    client = _postgrest(lambda request: httpx.Response(502, text=html))

    with caplog.at_level(logging.ERROR), pytest.raises(InternalError) as excinfo:
        BackendClient(client=client).call(ServiceRequestRpc.APPLY_PROVIDER, {"_request_id": "sr-1"})

    assert "10.0.0.7" not in str(excinfo.value)
    assert "10.0.0.7" in caplog.text


def test_json_error_body_becomes_backend_error():
    body = {"code": "P0001", "message": "request is not pending", "hint": None, "details": None}
    client = _postgrest(lambda request: httpx.Response(400, json=body))

    with pytest.raises(BackendError) as excinfo:
        BackendClient(client=client).call(ServiceRequestRpc.APPLY_PROVIDER, {"_request_id": "sr-1"})

    assert excinfo.value.error.code == "P0001"
    assert excinfo.value.error.message == "request is not pending"


def test_rpc_success_over_http():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[{"id": "sr-1"}])

    result = BackendClient(client=_postgrest(handler)).call(ServiceRequestRpc.CREATE, {"_requestor": "u-1"})

    assert result == [{"id": "sr-1"}]
    assert seen[0].url.path == "/rest/v1/rpc/service_request_create"
    assert json.loads(seen[0].content) == {"_requestor": "u-1"}


def test_postgrest_error_json():
    error = PostgrestError(code="23505", message="duplicate key", hint="h", details="d")

    assert json.loads(error.to_json()) == {
        "code": "23505",
        "message": "duplicate key",
        "hint": "h",
        "details": "d",
    }


def test_decode_rows_accepts_null_and_rejects_non_arrays():
    assert decode_rows(None, RatingData) == []
    with pytest.raises(InternalError):
        decode_rows({"id": "r"}, RatingData)


def test_first_or_default_returns_zero_value_for_empty_result():
    assert first_or_default([], RatingData) == RatingData()


def test_decode_object_accepts_singleton_array():
    summary = decode_object([{"requests_made": 4}], ProfileSummary)

    assert summary.requests_made == 4


def test_decode_object_rejects_scalars():
    with pytest.raises(InternalError):
        decode_object("nope", ProfileSummary)
