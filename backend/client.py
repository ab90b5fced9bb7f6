"""
Supabase Backend Client
=======================

Single transport for the two shapes of backend call:
  - call(procedure, params): POST /rpc/<procedure> (stored procedure)
  - query(table) + execute(builder): filtered table read/update/delete

Every failure leaves this module as one of two ClientError variants:
  - InternalError: transport failure, undecodable payload, unexpected shape
  - BackendError:  structured PostgREST rejection (code, message, hint, details)

Nothing here retries or caches.
"""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from config.settings import DatabaseConfig, get_config
from proto.message import Message

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Message)

# postgrest raises APIError with this message when the response body is not JSON
UNPARSED_ERROR_MESSAGE = "JSON could not be generated"


@dataclass
class PostgrestError:
    """Decoded PostgREST / GoTrue error body."""
    code: str = ""
    message: Optional[str] = None
    hint: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def from_api_error(cls, error: APIError) -> "PostgrestError":
        return cls(
            code=str(error.code or ""),
            message=error.message,
            hint=error.hint,
            details=error.details if error.details is None else str(error.details),
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self))


class ClientError(Exception):
    """Base class for every backend interaction failure."""


class InternalError(ClientError):
    """Failure not attributable to a structured backend rejection."""


class BackendError(ClientError):
    """Structured rejection returned by the remote database."""

    def __init__(self, error: PostgrestError) -> None:
        super().__init__(error.message or error.code)
        self.error = error


class BackendClient:
    """Thin wrapper over one long-lived supabase.Client.

    create_client attaches the `apikey` and `Authorization: Bearer` headers
    to every outbound request.
    """

    def __init__(self, settings: Optional[DatabaseConfig] = None, client: Optional[Client] = None) -> None:
        if client is None:
            settings = settings or get_config().database
            client = create_client(settings.supabase_url, settings.supabase_service_key)
            logger.info("Supabase backend client initialized for %s", settings.supabase_url)
        self.client = client

    def call(self, procedure: str, params: Dict[str, Any]) -> Any:
        """Invoke a stored procedure and return its decoded JSON body."""
        name = getattr(procedure, "value", procedure)
        logger.debug("rpc %s", name)
        return self.execute(self.client.rpc(name, params))

    def query(self, table: str) -> Any:
        """Start a request builder against `table`; finish with execute()."""
        return self.client.table(table)

    def execute(self, builder: Any) -> Any:
        try:
            response = builder.execute()
        except APIError as exc:
            if exc.message == UNPARSED_ERROR_MESSAGE:
                logger.error("Backend returned a non-JSON error: status=%s body=%s", exc.code, exc.details)
                raise InternalError(f"parsing error : status {exc.code}") from exc
            error = PostgrestError.from_api_error(exc)
            logger.warning("Backend rejected request: code=%s message=%s", error.code, error.message)
            raise BackendError(error) from exc
        except httpx.HTTPError as exc:
            logger.error("Backend request failed: %s", exc)
            raise InternalError(f"request error : {exc}") from exc
        return response.data


# ============================================================================
# ROW DECODING
# ============================================================================

def decode_rows(rows: Any, message_cls: Type[M]) -> List[M]:
    """Decode a JSON array of rows into messages."""
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise InternalError(
            f"parsing error : expected array of {message_cls.__name__}, got {type(rows).__name__}"
        )
    try:
        return [message_cls.from_dict(row) for row in rows]
    except (TypeError, ValueError) as exc:
        raise InternalError(f"parsing error : {exc}") from exc


def first_or_default(rows: Any, message_cls: Type[M]) -> M:
    """First decoded row, or the message's zero value when there is none."""
    values = decode_rows(rows, message_cls)
    return values[0] if values else message_cls()


def decode_object(value: Any, message_cls: Type[M]) -> M:
    """Decode a procedure result that is a single JSON object.

    A singleton array is accepted too, since some procedures return
    `SETOF` rows.
    """
    if isinstance(value, list):
        return first_or_default(value, message_cls)
    try:
        return message_cls.from_dict(value)
    except (TypeError, ValueError) as exc:
        raise InternalError(f"parsing error : {exc}") from exc
