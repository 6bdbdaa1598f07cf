"""The unary pattern: one greeting request, one greeting response."""

import logging

import grpc

from .messages import HelloRequest, HelloResponse

logger = logging.getLogger(__name__)

SERVICE_NAME = "api.Hi"
METHOD_NAME = "HelloWorld"


class GreetingError(Exception):
    """Raised when a greeting cannot be obtained from the server."""


class HiServer:
    """Answers a greeting request with a single greeting."""

    def hello_world(self, request: HelloRequest, context) -> HelloResponse:
        logger.info("received hello request for name: %s", request.name)
        return HelloResponse(message=f"Hello {request.name}")


def register_hi_server(server, servicer) -> None:
    """Expose the servicer's unary greeting method on a gRPC server."""
    handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            METHOD_NAME: grpc.unary_unary_rpc_method_handler(
                servicer.hello_world,
                request_deserializer=HelloRequest.from_bytes,
                response_serializer=HelloResponse.to_bytes,
            )
        },
    )
    server.add_generic_rpc_handlers((handler,))


class HiClient:
    """Calls the unary greeting method over a channel."""

    def __init__(self, channel):
        self._hello_world = channel.unary_unary(
            f"/{SERVICE_NAME}/{METHOD_NAME}",
            request_serializer=HelloRequest.to_bytes,
            response_deserializer=HelloResponse.from_bytes,
        )

    def hello_world(self, request: HelloRequest) -> HelloResponse:
        return self._hello_world(request)


class GreetingService:
    """Asks the server for a greeting and prints it."""

    def __init__(self, hi_client):
        self._hi_client = hi_client

    def get_greeting_from_server(self, name: str) -> str:
        """Fetch, print and return the greeting for name."""
        try:
            response = self._hi_client.hello_world(HelloRequest(name=name))
        except grpc.RpcError as err:
            raise GreetingError(f"error trying to get the greeting: {err}") from err
        if response is None:
            raise GreetingError("the message is empty")
        print(response.message)
        return response.message