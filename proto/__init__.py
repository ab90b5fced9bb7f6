"""
Timebank gRPC services.

Message classes (`*_pb2`) and servicer stubs (`*_pb2_grpc`) are hand-written
to match the `.proto` files in this directory; messages travel as JSON.
The `*_service_impl` modules hold the service implementations and
`timebank_server` wires them into a running server.
"""
