"""
Hand-written gRPC service stub matching proto/auth.proto.

Provides:
  - AuthServicer: Base class for server implementation
  - AuthStub: Client stub
  - add_AuthServicer_to_server: Registration function

Replace with real protoc output when proto toolchain is available.
"""

import grpc

from proto import auth_pb2

SERVICE_NAME = "timebank.auth.Auth"


class AuthServicer:
    """Base class for Auth gRPC service implementation."""

    def SignUp(self, request, context) -> None:
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details("Method not implemented!")
        raise NotImplementedError("Method not implemented!")


def add_AuthServicer_to_server(servicer, server) -> None:
    """Register AuthServicer with a gRPC server."""
    rpc_method_handlers = {
        "SignUp": grpc.unary_unary_rpc_method_handler(
            servicer.SignUp,
            request_deserializer=auth_pb2.SignUpRequest.FromString,
            response_serializer=lambda resp: resp.SerializeToString(),
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME, rpc_method_handlers
    )
    server.add_generic_rpc_handlers((generic_handler,))


class AuthStub:
    """Client stub for calling Auth."""

    def __init__(self, channel) -> None:
        self.SignUp = channel.unary_unary(
            f"/{SERVICE_NAME}/SignUp",
            request_serializer=lambda req: req.SerializeToString(),
            response_deserializer=auth_pb2.SignUpResponse.FromString,
        )
