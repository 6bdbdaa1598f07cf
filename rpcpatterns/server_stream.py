"""The server-streaming pattern: one request, a stream of greetings back."""

import logging
from collections.abc import Iterator

import grpc

from .messages import HelloRequest, HelloResponse
from .unary import GreetingError

logger = logging.getLogger(__name__)

SERVICE_NAME = "api.Hi"
METHOD_NAME = "HelloWorld"


def _wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


class HiStreamServer:
    """Streams the greeting back as many times as requested."""

    def hello_world(self, request: HelloRequest, context) -> Iterator[HelloResponse]:
        logger.info("received hello request for name %s", request.name)
        logger.info("send by gRPC the greeting %d times", request.times)
        for count in range(1, request.times + 1):
            yield HelloResponse(message=f"Hello {request.name} for {count} time")


def register_hi_stream_server(server, servicer) -> None:
    """Expose the servicer's streaming greeting method on a gRPC server."""
    handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            METHOD_NAME: grpc.unary_stream_rpc_method_handler(
                servicer.hello_world,
                request_deserializer=HelloRequest.from_bytes,
                response_serializer=HelloResponse.to_bytes,
            )
        },
    )
    server.add_generic_rpc_handlers((handler,))


class HiStreamClient:
    """Calls the streaming greeting method over a channel."""

    def __init__(self, channel):
        self._hello_world = channel.unary_stream(
            f"/{SERVICE_NAME}/{METHOD_NAME}",
            request_serializer=HelloRequest.to_bytes,
            response_deserializer=HelloResponse.from_bytes,
        )

    def hello_world(self, request: HelloRequest) -> Iterator[HelloResponse]:
        return self._hello_world(request)


class StreamingGreetingService:
    """Asks the server for a stream of greetings and prints each one."""

    def __init__(self, hi_client):
        self._hi_client = hi_client

    def get_greeting_from_server(self, name: str, times: int) -> list[str]:
        """Fetch the greetings, printing each as it arrives, and return them."""
        logger.info("sending the name %s and %d times to print the name", name, times)
        request = HelloRequest(name=name, times=_wrap_int32(times))
        logger.info("starting the streaming")
        try:
            stream = self._hi_client.hello_world(request)
        except grpc.RpcError as err:
            raise GreetingError(f"error trying to get the greeting: {err}") from err
        messages = []
        try:
            for response in stream:
                print(response.message)
                messages.append(response.message)
        except grpc.RpcError as err:
            raise GreetingError(f"error receiving the message {err}") from err
        return messages