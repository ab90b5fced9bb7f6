"""
Request logging interceptor for the gRPC server.

Logs every unary call on arrival and again on completion with its latency.
"""

import logging
import time

import grpc

logger = logging.getLogger("timebank.requests")


class RequestLoggerInterceptor(grpc.ServerInterceptor):
    """Logs method name and elapsed time of each unary RPC."""

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None or handler.unary_unary is None:
            return handler

        method = handler_call_details.method
        behavior = handler.unary_unary

        def logged(request, context):
            logger.info("--> %s", method)
            started = time.monotonic()
            try:
                return behavior(request, context)
            finally:
                elapsed_ms = (time.monotonic() - started) * 1000
                logger.info("<-- %s (%.1f ms)", method, elapsed_ms)

        return grpc.unary_unary_rpc_method_handler(
            logged,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
