"""
Timebank gRPC Server Bootstrap.

Starts the User, Rating, ServiceRequest and Auth services plus the standard
gRPC health service on SOCKET_ADDRESS.

Usage:
    python -m proto.timebank_server
    SOCKET_ADDRESS=[::]:50051 timebank-server
"""

import logging
import signal
import sys
from concurrent import futures
from typing import Optional, Tuple

import grpc
from dotenv import load_dotenv
from grpc_health.v1 import health as grpc_health
from grpc_health.v1 import health_pb2, health_pb2_grpc

from backend.auth import AuthClient
from backend.client import BackendClient
from backend.rating import RatingClient
from backend.service_request import ServiceRequestClient
from backend.user import UserClient
from config.settings import TimebankConfig, get_config
from ledger.contract_client import LedgerClient
from proto import auth_pb2_grpc, rating_pb2_grpc, service_request_pb2_grpc, user_pb2_grpc
from proto.auth_service_impl import AuthServiceImpl
from proto.interceptors import RequestLoggerInterceptor
from proto.rating_service_impl import RatingServiceImpl
from proto.service_request_service_impl import ServiceRequestServiceImpl
from proto.user_service_impl import UserServiceImpl

logger = logging.getLogger(__name__)

SERVICE_NAMES = (
    user_pb2_grpc.SERVICE_NAME,
    rating_pb2_grpc.SERVICE_NAME,
    service_request_pb2_grpc.SERVICE_NAME,
    auth_pb2_grpc.SERVICE_NAME,
)


def build_server(
    config: TimebankConfig,
    backend: Optional[BackendClient] = None,
    ledger: Optional[LedgerClient] = None,
    auth_client: Optional[AuthClient] = None,
) -> Tuple[grpc.Server, int]:
    """Create a server with every service registered and the port bound.

    The server is returned unstarted, together with the bound port.
    """
    backend = backend or BackendClient(config.database)
    ledger = ledger or LedgerClient(config.ledger)
    auth_client = auth_client or AuthClient(config.database)
    user_client = UserClient(backend)

    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=config.server.max_workers),
        interceptors=[RequestLoggerInterceptor()],
    )

    user_pb2_grpc.add_UserServicer_to_server(UserServiceImpl(user_client), server)
    rating_pb2_grpc.add_RatingServicer_to_server(RatingServiceImpl(RatingClient(backend)), server)
    service_request_pb2_grpc.add_ServiceRequestServicer_to_server(
        ServiceRequestServiceImpl(ServiceRequestClient(backend), ledger), server
    )
    auth_pb2_grpc.add_AuthServicer_to_server(AuthServiceImpl(auth_client, user_client), server)

    health_servicer = grpc_health.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_servicer, server)
    for name in SERVICE_NAMES + ("",):
        health_servicer.set(name, health_pb2.HealthCheckResponse.SERVING)

    port = server.add_insecure_port(config.server.socket_address)
    return server, port


def serve(config: Optional[TimebankConfig] = None) -> None:
    """Start the Timebank gRPC server and block until it stops."""
    config = config or get_config()
    server, port = build_server(config)
    server.start()

    logger.info("Timebank gRPC server started on %s (port %d)", config.server.socket_address, port)
    for name in SERVICE_NAMES:
        logger.info("  %s", name)

    # Graceful shutdown on SIGTERM/SIGINT
    def _shutdown(signum, frame):
        logger.info("Shutting down timebank gRPC server...")
        server.stop(grace=config.server.shutdown_grace_seconds)

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)

    server.wait_for_termination()


def main() -> None:
    load_dotenv()
    try:
        config = get_config()
        logging.basicConfig(
            level=config.monitoring.log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        config.validate()
    except ValueError as exc:
        logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(1)

    serve(config)


if __name__ == "__main__":
    main()
