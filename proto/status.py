"""
gRPC status helpers shared by the service implementations.

Callers only ever see the fixed messages below. Structured backend errors
travel in the `error` trailing-metadata key as JSON; internal detail is
logged and never returned.
"""

import json
import logging
from typing import Any, Dict, FrozenSet, Optional, TypeVar

import grpc

from backend.client import BackendError, ClientError

logger = logging.getLogger(__name__)

R = TypeVar("R")

INVALID_PAYLOAD = "INVALID PAYLOAD"
UNKNOWN = "AN ERROR HAS OCCURRED"
ALREADY_EXISTS = "ITEM ALREADY EXISTS"
NOT_FOUND = "ITEM NOT FOUND"

ERROR_METADATA_KEY = "error"

# SQLSTATE raised by `RAISE EXCEPTION` inside a stored procedure
PROCEDURE_REJECTION_CODE = "P0001"


def fail(context, code: grpc.StatusCode, details: str, response: R) -> R:
    context.set_code(code)
    context.set_details(details)
    return response


def invalid_argument(context, response: R, details: str = INVALID_PAYLOAD) -> R:
    return fail(context, grpc.StatusCode.INVALID_ARGUMENT, details, response)


def not_found(context, response: R) -> R:
    return fail(context, grpc.StatusCode.NOT_FOUND, NOT_FOUND, response)


def client_error(context, exc: ClientError, response: R) -> R:
    """Map a ClientError onto the call's status and return `response`."""
    if isinstance(exc, BackendError):
        code = (
            grpc.StatusCode.FAILED_PRECONDITION
            if exc.error.code == PROCEDURE_REJECTION_CODE
            else grpc.StatusCode.UNKNOWN
        )
        context.set_trailing_metadata(((ERROR_METADATA_KEY, exc.error.to_json()),))
        return fail(context, code, UNKNOWN, response)

    logger.error("Internal error: %s", exc)
    return fail(context, grpc.StatusCode.INTERNAL, UNKNOWN, response)


def decode_patch(body: str, protected: FrozenSet[str]) -> Optional[Dict[str, Any]]:
    """Parse an update body; None when it is not a usable JSON object.

    Columns in `protected` are refused: they change only through their
    dedicated procedures or are owned by the database.
    """
    if not body:
        return None
    try:
        patch = json.loads(body)
    except ValueError:
        return None
    if not isinstance(patch, dict) or not patch:
        return None
    if protected.intersection(patch):
        logger.info("Rejected patch touching protected columns: %s", sorted(protected.intersection(patch)))
        return None
    return patch
