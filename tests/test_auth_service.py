import logging
from unittest.mock import MagicMock

import grpc
import pytest
import requests

from backend.auth import AuthClient
from backend.client import BackendError, InternalError
from backend.user import UserClient
from config.settings import DatabaseConfig
from conftest import rejection
from proto import auth_pb2, status
from proto.auth_service_impl import AuthServiceImpl
from proto.user_pb2 import NewUserProfile


def _sign_up_request(**overrides):
    fields = {
        "email": "ada@example.com",
        "password": "s3cret-pass",
        "profile": NewUserProfile(username="ada", first_name="Ada", skills=["sewing"]),
    }
    fields.update(overrides)
    return auth_pb2.SignUpRequest(**fields)


@pytest.fixture
def auth_client():
    client = MagicMock()
    client.sign_up.return_value = "auth-123"
    return client


@pytest.fixture
def service(backend, auth_client):
    backend.responses["check_if_email_exist"] = False
    backend.responses["handle_new_user"] = [{"user_id": "auth-123", "username": "ada"}]
    return AuthServiceImpl(auth_client, UserClient(backend))


def test_sign_up_creates_auth_user_and_profile(service, backend, auth_client, context):
    response = service.SignUp(_sign_up_request(), context)

    assert context.code is None
    assert response.user_id == "auth-123"
    auth_client.sign_up.assert_called_once_with("ada@example.com", "s3cret-pass")
    name, params = backend.calls[-1]
    assert name == "handle_new_user"
    assert params["_user_id"] == "auth-123"
    assert params["_profile"]["username"] == "ada"


def test_sign_up_existing_email(service, backend, auth_client, context):
    backend.responses["check_if_email_exist"] = True

    service.SignUp(_sign_up_request(), context)

    assert context.code == grpc.StatusCode.ALREADY_EXISTS
    assert context.details == status.ALREADY_EXISTS
    auth_client.sign_up.assert_not_called()


def test_sign_up_requires_profile(service, backend, context):
    service.SignUp(_sign_up_request(profile=None), context)

    assert context.code == grpc.StatusCode.INVALID_ARGUMENT
    assert backend.calls == []


def test_sign_up_auth_rejection(service, auth_client, backend, context):
    auth_client.sign_up.side_effect = rejection("weak_password", "Password should be at least 6 characters")

    service.SignUp(_sign_up_request(), context)

    assert context.code == grpc.StatusCode.UNKNOWN
    assert [name for name, _ in backend.calls] == ["check_if_email_exist"]


def test_sign_up_orphaned_auth_user(service, backend, context, caplog):
    backend.responses["handle_new_user"] = InternalError("request error : timeout")

    with caplog.at_level(logging.ERROR):
        response = service.SignUp(_sign_up_request(), context)

    assert context.code == grpc.StatusCode.INTERNAL
    assert response.user_id == ""
    assert "auth user auth-123 is orphaned" in caplog.text


def _response(status_code, body):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = body
    response.text = str(body)
    return response


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def gotrue(http):
    settings = DatabaseConfig(
        supabase_url="https://project.supabase.co", supabase_service_key="key", supabase_auth_url=""
    )
    return AuthClient(settings, session=http)


def test_auth_client_posts_signup(gotrue, http):
    http.post.return_value = _response(200, {"user": {"id": "auth-1"}, "access_token": "t"})

    assert gotrue.sign_up("a@example.com", "pw") == "auth-1"
    http.post.assert_called_once_with(
        "https://project.supabase.co/auth/v1/signup",
        headers={"apikey": "key"},
        json={"email": "a@example.com", "password": "pw"},
        timeout=10,
    )


def test_auth_client_accepts_bare_user_body(gotrue, http):
    http.post.return_value = _response(200, {"id": "auth-2", "email": "a@example.com"})

    assert gotrue.sign_up("a@example.com", "pw") == "auth-2"


def test_auth_client_error_body(gotrue, http):
    http.post.return_value = _response(422, {"error_code": "weak_password", "msg": "too short"})

    with pytest.raises(BackendError) as excinfo:
        gotrue.sign_up("a@example.com", "pw")

    assert excinfo.value.error.code == "weak_password"
    assert excinfo.value.error.message == "too short"


def test_auth_client_rate_limited(gotrue, http):
    http.post.return_value = _response(429, {"msg": "slow down"})

    with pytest.raises(InternalError):
        gotrue.sign_up("a@example.com", "pw")


def test_auth_client_transport_failure(gotrue, http):
    http.post.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(InternalError):
        gotrue.sign_up("a@example.com", "pw")
