"""
Hand-written gRPC service stub matching proto/rating.proto.

Provides:
  - RatingServicer: Base class for server implementation
  - RatingStub: Client stub
  - add_RatingServicer_to_server: Registration function

Replace with real protoc output when proto toolchain is available.
"""

import grpc

from proto import rating_pb2

SERVICE_NAME = "timebank.rating.Rating"

_METHODS = {
    "CreateForRequestor": (rating_pb2.CreateRequest, rating_pb2.CreateResponse),
    "CreateForProvider": (rating_pb2.CreateRequest, rating_pb2.CreateResponse),
    "Get": (rating_pb2.GetRequest, rating_pb2.GetResponse),
    "GetById": (rating_pb2.GetByIdRequest, rating_pb2.GetByIdResponse),
    "GetForRequest": (rating_pb2.GetForRequestRequest, rating_pb2.GetForRequestResponse),
    "Update": (rating_pb2.UpdateRequest, rating_pb2.UpdateResponse),
    "Delete": (rating_pb2.DeleteRequest, rating_pb2.DeleteResponse),
}


def _unimplemented(context) -> None:
    context.set_code(grpc.StatusCode.UNIMPLEMENTED)
    context.set_details("Method not implemented!")
    raise NotImplementedError("Method not implemented!")


class RatingServicer:
    """Base class for Rating gRPC service implementation."""

    def CreateForRequestor(self, request, context) -> None:
        _unimplemented(context)

    def CreateForProvider(self, request, context) -> None:
        _unimplemented(context)

    def Get(self, request, context) -> None:
        _unimplemented(context)

    def GetById(self, request, context) -> None:
        _unimplemented(context)

    def GetForRequest(self, request, context) -> None:
        _unimplemented(context)

    def Update(self, request, context) -> None:
        _unimplemented(context)

    def Delete(self, request, context) -> None:
        _unimplemented(context)


def add_RatingServicer_to_server(servicer, server) -> None:
    """Register RatingServicer with a gRPC server."""
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


class RatingStub:
    """Client stub for calling Rating."""

    def __init__(self, channel) -> None:
        for name, (_, response_cls) in _METHODS.items():
            setattr(self, name, channel.unary_unary(
                f"/{SERVICE_NAME}/{name}",
                request_serializer=lambda req: req.SerializeToString(),
                response_deserializer=response_cls.FromString,
            ))
