from concurrent.futures import ThreadPoolExecutor

import grpc
import pytest

from rpcpatterns.messages import HelloRequest, HelloResponse
from rpcpatterns.unary import (
    GreetingError,
    GreetingService,
    HiClient,
    HiServer,
    register_hi_server,
)


@pytest.fixture
def channel():
    server = grpc.server(ThreadPoolExecutor(max_workers=2))
    register_hi_server(server, HiServer())
    port = server.add_insecure_port("localhost:0")
    server.start()
    try:
        with grpc.insecure_channel(f"localhost:{port}") as chan:
            yield chan
    finally:
        server.stop(None)


class _FailingClient:
    def hello_world(self, request):
        raise grpc.RpcError("unavailable")


class _EmptyClient:
    def hello_world(self, request):
        return None


def test_server_builds_greeting():
    response = HiServer().hello_world(HelloRequest(name="Gopher"), None)
    assert response == HelloResponse(message="Hello Gopher")


def test_client_matches_direct_server_call(channel):
    request = HelloRequest(name="Gopher")
    assert HiClient(channel).hello_world(request) == HiServer().hello_world(request, None)


def test_empty_name_over_the_wire(channel):
    assert HiClient(channel).hello_world(HelloRequest()).message == "Hello "


def test_service_prints_and_returns_greeting(channel, capsys):
    result = GreetingService(HiClient(channel)).get_greeting_from_server("Gopher")
    assert capsys.readouterr().out == result + "\n"
    assert result == HiServer().hello_world(HelloRequest(name="Gopher"), None).message


def test_rpc_failure_raises_greeting_error():
    with pytest.raises(GreetingError, match="error trying to get the greeting"):
        GreetingService(_FailingClient()).get_greeting_from_server("Gopher")


def test_missing_response_raises_greeting_error():
    with pytest.raises(GreetingError, match="the message is empty"):
        GreetingService(_EmptyClient()).get_greeting_from_server("Gopher")


def test_unknown_method_on_server_is_unimplemented(channel):
    call = channel.unary_unary(
        "/api.Hi/Missing",
        request_serializer=HelloRequest.to_bytes,
        response_deserializer=HelloResponse.from_bytes,
    )
    with pytest.raises(grpc.RpcError) as info:
        call(HelloRequest(name="x"))
    assert info.value.code() == grpc.StatusCode.UNIMPLEMENTED