"""
Hand-written gRPC service stub matching proto/service_request.proto.

Provides:
  - ServiceRequestServicer: Base class for server implementation
  - ServiceRequestStub: Client stub
  - add_ServiceRequestServicer_to_server: Registration function

Replace with real protoc output when proto toolchain is available.
"""

import grpc

from proto import service_request_pb2 as pb

SERVICE_NAME = "timebank.servicerequest.ServiceRequest"

_METHODS = {
    "Create": (pb.CreateRequest, pb.CreateResponse),
    "Get": (pb.GetRequest, pb.GetResponse),
    "GetById": (pb.GetByIdRequest, pb.GetByIdResponse),
    "Update": (pb.UpdateRequest, pb.UpdateResponse),
    "Delete": (pb.DeleteRequest, pb.DeleteResponse),
    "ApplyProvider": (pb.ApplyProviderRequest, pb.ApplyProviderResponse),
    "SelectProvider": (pb.SelectProviderRequest, pb.SelectProviderResponse),
    "StartService": (pb.StartServiceRequest, pb.StartServiceResponse),
    "CompleteService": (pb.CompleteServiceRequest, pb.CompleteServiceResponse),
    "GetAvailable": (pb.GetAvailableRequest, pb.GetAvailableResponse),
    "GetSummaryForUser": (pb.GetSummaryForUserRequest, pb.GetSummaryForUserResponse),
    "GetCommitment": (pb.GetCommitmentRequest, pb.GetCommitmentResponse),
}


def _unimplemented(context) -> None:
    context.set_code(grpc.StatusCode.UNIMPLEMENTED)
    context.set_details("Method not implemented!")
    raise NotImplementedError("Method not implemented!")


class ServiceRequestServicer:
    """Base class for ServiceRequest gRPC service implementation."""

    def Create(self, request, context) -> None:
        _unimplemented(context)

    def Get(self, request, context) -> None:
        _unimplemented(context)

    def GetById(self, request, context) -> None:
        _unimplemented(context)

    def Update(self, request, context) -> None:
        _unimplemented(context)

    def Delete(self, request, context) -> None:
        _unimplemented(context)

    def ApplyProvider(self, request, context) -> None:
        _unimplemented(context)

    def SelectProvider(self, request, context) -> None:
        _unimplemented(context)

    def StartService(self, request, context) -> None:
        _unimplemented(context)

    def CompleteService(self, request, context) -> None:
        _unimplemented(context)

    def GetAvailable(self, request, context) -> None:
        _unimplemented(context)

    def GetSummaryForUser(self, request, context) -> None:
        _unimplemented(context)

    def GetCommitment(self, request, context) -> None:
        _unimplemented(context)


def add_ServiceRequestServicer_to_server(servicer, server) -> None:
    """Register ServiceRequestServicer with a gRPC server."""
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


class ServiceRequestStub:
    """Client stub for calling ServiceRequest."""

    def __init__(self, channel) -> None:
        for name, (_, response_cls) in _METHODS.items():
            setattr(self, name, channel.unary_unary(
                f"/{SERVICE_NAME}/{name}",
                request_serializer=lambda req: req.SerializeToString(),
                response_deserializer=response_cls.FromString,
            ))
