"""The client-streaming pattern: a stream of values, one total back."""

import logging
from collections.abc import Iterable, Iterator

import grpc

from .messages import SumItemRequest, SumResponse
from .unary import GreetingError

logger = logging.getLogger(__name__)

SERVICE_NAME = "api.Sum"
METHOD_NAME = "SumItems"


def _wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


class SumServer:
    """Adds up every value the client streams in and answers with the total."""

    def sum_items(self, request_iterator: Iterator[SumItemRequest], context) -> SumResponse:
        total = 0
        for request in request_iterator:
            logger.info("request value received %d", request.value)
            total += request.value
        return SumResponse(total=_wrap_int32(total))


def register_sum_server(server, servicer) -> None:
    """Expose the servicer's streaming sum method on a gRPC server."""
    handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            METHOD_NAME: grpc.stream_unary_rpc_method_handler(
                servicer.sum_items,
                request_deserializer=SumItemRequest.from_bytes,
                response_serializer=SumResponse.to_bytes,
            )
        },
    )
    server.add_generic_rpc_handlers((handler,))


class SumClient:
    """Calls the streaming sum method over a channel."""

    def __init__(self, channel):
        self._sum_items = channel.stream_unary(
            f"/{SERVICE_NAME}/{METHOD_NAME}",
            request_serializer=SumItemRequest.to_bytes,
            response_deserializer=SumResponse.from_bytes,
        )

    def sum_items(self, request_iterator: Iterable[SumItemRequest]) -> SumResponse:
        return self._sum_items(iter(request_iterator))


class SumService:
    """Streams numbers to the server and reports the total it computes."""

    def __init__(self, sum_client):
        self._sum_client = sum_client

    def get_sum_from_server(self, values: Iterable[int]) -> int:
        """Send every value, then log and return the server's total."""
        logger.info("sending the numbers as streaming")
        requests = (SumItemRequest(value=_wrap_int32(value)) for value in values)
        try:
            response = self._sum_client.sum_items(requests)
        except grpc.RpcError as err:
            raise GreetingError(f"error trying to get the response: {err}") from err
        logger.info("the result of the sum is %d", response.total)
        return response.total