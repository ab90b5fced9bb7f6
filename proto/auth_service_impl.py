"""
Auth gRPC Service Implementation.

SignUp creates a GoTrue user and then its profile row. The two writes go to
different systems and are not atomic: when the profile write fails the auth
user is left in place and reported as orphaned in the log.
"""

import logging
from typing import Optional

import grpc

from backend.auth import AuthClient
from backend.client import ClientError
from backend.user import UserClient
from proto import auth_pb2, status
from proto.auth_pb2_grpc import AuthServicer

logger = logging.getLogger(__name__)


class AuthServiceImpl(AuthServicer):
    """Production implementation of the Auth gRPC service."""

    def __init__(
        self,
        auth_client: Optional[AuthClient] = None,
        user_client: Optional[UserClient] = None,
    ) -> None:
        self.auth_client = auth_client or AuthClient()
        self.user_client = user_client or UserClient()

    def SignUp(self, request: auth_pb2.SignUpRequest, context) -> auth_pb2.SignUpResponse:
        if not request.email or not request.password or request.profile is None:
            return status.invalid_argument(context, auth_pb2.SignUpResponse())

        try:
            exists = self.user_client.check_if_email_exist(request.email)
        except ClientError as exc:
            return status.client_error(context, exc, auth_pb2.SignUpResponse())
        if exists:
            return status.fail(
                context, grpc.StatusCode.ALREADY_EXISTS, status.ALREADY_EXISTS, auth_pb2.SignUpResponse()
            )

        try:
            user_id = self.auth_client.sign_up(request.email, request.password)
        except ClientError as exc:
            return status.client_error(context, exc, auth_pb2.SignUpResponse())

        try:
            self.user_client.create_new_profile(user_id, request.profile)
        except ClientError as exc:
            logger.error("[AuthService] Profile creation failed, auth user %s is orphaned: %s", user_id, exc)
            return status.fail(context, grpc.StatusCode.INTERNAL, status.UNKNOWN, auth_pb2.SignUpResponse())

        logger.info("[AuthService] Signed up user: id=%s", user_id)
        return auth_pb2.SignUpResponse(user_id=user_id)
