"""
Hand-written Python stub matching proto/auth.proto.

Mirrors the proto messages:
  - SignUpRequest, SignUpResponse

Replace with real protoc output when proto toolchain is available.
"""

from proto.message import Message
from proto.user_pb2 import NewUserProfile


class SignUpRequest(Message):
    FIELDS = {"email": "", "password": "", "profile": None}
    MESSAGES = {"profile": NewUserProfile}


class SignUpResponse(Message):
    FIELDS = {"user_id": ""}
