"""
GoTrue client used by sign-up.

POSTs to `<auth_url>/signup` with the project `apikey` header and returns
the id of the newly created auth user.
"""

import logging
from typing import Any, Dict, Optional

import requests

from backend.client import BackendError, InternalError, PostgrestError
from config.settings import DatabaseConfig, get_config

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = 10


def _auth_error(status: int, body: Dict[str, Any]) -> PostgrestError:
    """Map a GoTrue error body onto the shared error shape."""
    code = body.get("error_code") or body.get("code") or body.get("error") or status
    message = body.get("msg") or body.get("message") or body.get("error_description")
    return PostgrestError(code=str(code), message=message, hint=body.get("hint"))


class AuthClient:
    def __init__(self, settings: Optional[DatabaseConfig] = None, session: Optional[requests.Session] = None) -> None:
        settings = settings or get_config().database
        self.signup_url = f"{settings.auth_url}/signup"
        self.api_key = settings.supabase_service_key
        self.session = session or requests.Session()

    def sign_up(self, email: str, password: str) -> str:
        try:
            response = self.session.post(
                self.signup_url,
                headers={"apikey": self.api_key},
                json={"email": email, "password": password},
                timeout=_REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as exc:
            raise InternalError(f"request error : {exc}") from exc

        if response.status_code == 429:
            raise InternalError(f"request error : {response.text}")

        try:
            body = response.json()
        except ValueError as exc:
            raise InternalError(f"parsing error : {exc}") from exc
        if not isinstance(body, dict):
            raise InternalError("parsing error : expected object from auth endpoint")

        if not response.ok:
            raise BackendError(_auth_error(response.status_code, body))

        # Autoconfirm projects wrap the user in a session object.
        user = body.get("user") if isinstance(body.get("user"), dict) else body
        user_id = user.get("id")
        if not user_id:
            raise InternalError("parsing error : auth response carries no user id")

        logger.info("Created auth user %s", user_id)
        return user_id
