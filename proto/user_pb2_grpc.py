"""
Hand-written gRPC service stub matching proto/user.proto.

Provides:
  - UserServicer: Base class for server implementation
  - UserStub: Client stub
  - add_UserServicer_to_server: Registration function

Replace with real protoc output when proto toolchain is available.
"""

import grpc

from proto import user_pb2

SERVICE_NAME = "timebank.user.User"

_METHODS = {
    "Get": (user_pb2.GetRequest, user_pb2.GetResponse),
    "GetById": (user_pb2.GetByIdRequest, user_pb2.GetByIdResponse),
    "Update": (user_pb2.UpdateRequest, user_pb2.UpdateResponse),
    "GetProfile": (user_pb2.GetProfileRequest, user_pb2.GetProfileResponse),
    "GetCreditBalance": (
        user_pb2.GetCreditBalanceRequest,
        user_pb2.GetCreditBalanceResponse,
    ),
    "GetTransactionHistory": (
        user_pb2.GetTransactionHistoryRequest,
        user_pb2.GetTransactionHistoryResponse,
    ),
}


def _unimplemented(context) -> None:
    context.set_code(grpc.StatusCode.UNIMPLEMENTED)
    context.set_details("Method not implemented!")
    raise NotImplementedError("Method not implemented!")


class UserServicer:
    """Base class for User gRPC service implementation."""

    def Get(self, request, context) -> None:
        _unimplemented(context)

    def GetById(self, request, context) -> None:
        _unimplemented(context)

    def Update(self, request, context) -> None:
        _unimplemented(context)

    def GetProfile(self, request, context) -> None:
        _unimplemented(context)

    def GetCreditBalance(self, request, context) -> None:
        _unimplemented(context)

    def GetTransactionHistory(self, request, context) -> None:
        _unimplemented(context)


def add_UserServicer_to_server(servicer, server) -> None:
    """Register UserServicer with a gRPC server."""
    rpc_method_handlers = {
        name: grpc.unary_unary_rpc_method_handler(
            getattr(servicer, name),
            request_deserializer=request_cls.FromString,
            response_serializer=lambda resp: resp.SerializeToString(),
        )
        for name, (request_cls, _) in _METHODS.items()
    }
    generic_handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME, rpc_method_handlers
    )
    server.add_generic_rpc_handlers((generic_handler,))


class UserStub:
    """Client stub for calling User."""

    def __init__(self, channel) -> None:
        for name, (_, response_cls) in _METHODS.items():
            setattr(self, name, channel.unary_unary(
                f"/{SERVICE_NAME}/{name}",
                request_serializer=lambda req: req.SerializeToString(),
                response_deserializer=response_cls.FromString,
            ))
