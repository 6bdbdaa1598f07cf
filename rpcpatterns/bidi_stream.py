"""The bidirectional-streaming pattern: each message sent is echoed back."""

import logging
import queue
from collections.abc import Iterator

import grpc

from .messages import MessageRequest, MessageResponse
from .unary import GreetingError

logger = logging.getLogger(__name__)

SERVICE_NAME = "api.Echo"
METHOD_NAME = "EchoMessage"


class EchoServer:
    """Answers every incoming message with an echo of it."""

    def echo_message(
        self, request_iterator: Iterator[MessageRequest], context
    ) -> Iterator[MessageResponse]:
        for request in request_iterator:
            logger.info("request message received %s", request.message)
            yield MessageResponse(message=f"echo {request.message}")


def register_echo_server(server, servicer) -> None:
    """Expose the servicer's echo method on a gRPC server."""
    handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            METHOD_NAME: grpc.stream_stream_rpc_method_handler(
                servicer.echo_message,
                request_deserializer=MessageRequest.from_bytes,
                response_serializer=MessageResponse.to_bytes,
            )
        },
    )
    server.add_generic_rpc_handlers((handler,))


class EchoClient:
    """Calls the echo method over a channel."""

    def __init__(self, channel):
        self._echo_message = channel.stream_stream(
            f"/{SERVICE_NAME}/{METHOD_NAME}",
            request_serializer=MessageRequest.to_bytes,
            response_deserializer=MessageResponse.from_bytes,
        )

    def echo_message(self, request_iterator: Iterator[MessageRequest]) -> Iterator[MessageResponse]:
        return self._echo_message(request_iterator)


class EchoService:
    """Sends a message, then sends each echo back, a fixed number of times."""

    def __init__(self, echo_client):
        self._echo_client = echo_client

    def get_echoes_message_from_server(self, message: str, times: int) -> list[str]:
        """Bounce the message off the server times times and return each echo."""
        logger.info("sending the message to the stream to get the echoes")
        outgoing: queue.Queue = queue.Queue()
        try:
            responses = iter(self._echo_client.echo_message(iter(outgoing.get, None)))
        except grpc.RpcError as err:
            raise GreetingError(f"error creating the streaming instance: {err}") from err

        echoes = []
        try:
            for _ in range(times):
                outgoing.put(MessageRequest(message=message))
                try:
                    response = next(responses)
                except StopIteration:
                    raise GreetingError(
                        "error trying to receiving the value: stream ended"
                    ) from None
                except grpc.RpcError as err:
                    raise GreetingError(f"error trying to receiving the value: {err}") from err
                message = response.message
                logger.info("message received: %s", message)
                echoes.append(message)
        finally:
            outgoing.put(None)
        return echoes