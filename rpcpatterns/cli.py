"""Command line entry point: run a server or a client for one of the patterns."""

import argparse
import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

import grpc

from .bidi_stream import EchoClient, EchoServer, EchoService, register_echo_server
from .client_stream import SumClient, SumServer, SumService, register_sum_server
from .server_stream import (
    HiStreamClient,
    HiStreamServer,
    StreamingGreetingService,
    register_hi_stream_server,
)
from .unary import GreetingError, GreetingService, HiClient, HiServer, register_hi_server

logger = logging.getLogger(__name__)

DEFAULT_PORT = 50051
SERVER_ADDRESS = f"[::]:{DEFAULT_PORT}"
CLIENT_ADDRESS = f"localhost:{DEFAULT_PORT}"
NAME_TO_SEND = "World"
GREETING_TIMES = 10
SUM_VALUES = (1, 2, 3, 4, 5, 6, 7, 8, 9)
ECHO_MESSAGE = "Hello World"
ECHO_TIMES = 5


class Pattern(Enum):
    """The four gRPC call patterns."""

    UNARY = "unary"
    SERVER_STREAM = "server-stream"
    CLIENT_STREAM = "client-stream"
    BIDI_STREAM = "bidi-stream"


_SERVERS = {
    Pattern.UNARY: (HiServer, register_hi_server),
    Pattern.SERVER_STREAM: (HiStreamServer, register_hi_stream_server),
    Pattern.CLIENT_STREAM: (SumServer, register_sum_server),
    Pattern.BIDI_STREAM: (EchoServer, register_echo_server),
}

_CLIENTS = {
    Pattern.UNARY: lambda channel: GreetingService(HiClient(channel)).get_greeting_from_server(
        NAME_TO_SEND
    ),
    Pattern.SERVER_STREAM: lambda channel: StreamingGreetingService(
        HiStreamClient(channel)
    ).get_greeting_from_server(NAME_TO_SEND, GREETING_TIMES),
    Pattern.CLIENT_STREAM: lambda channel: SumService(SumClient(channel)).get_sum_from_server(
        SUM_VALUES
    ),
    Pattern.BIDI_STREAM: lambda channel: EchoService(
        EchoClient(channel)
    ).get_echoes_message_from_server(ECHO_MESSAGE, ECHO_TIMES),
}

_CLIENT_FAILURES = {
    Pattern.UNARY: "error trying to get the greetings from server",
    Pattern.SERVER_STREAM: "error trying to get the greetings from server",
    Pattern.CLIENT_STREAM: "error trying to get the greetings from server",
    Pattern.BIDI_STREAM: "error trying to get the echos message from server",
}


def build_server(pattern, address):
    """Create an unstarted server for the pattern bound to address; return (server, port)."""
    pattern = Pattern(pattern)
    servicer_class, register = _SERVERS[pattern]
    server = grpc.server(ThreadPoolExecutor(max_workers=10))
    register(server, servicer_class())
    port = server.add_insecure_port(address)
    if not port:
        raise RuntimeError(f"cannot listen on {address}")
    return server, port


def run_client(pattern, address):
    """Connect to address and run the pattern's client; return what it received."""
    pattern = Pattern(pattern)
    logger.info("creating the grpc client")
    with grpc.insecure_channel(address) as channel:
        return _CLIENTS[pattern](channel)


def _serve(pattern: Pattern, address: str) -> int:
    logger.info("starting grpc server")
    try:
        server, port = build_server(pattern, address)
    except RuntimeError as err:
        logger.error("error listening the port %s: %s", address, err)
        return 1
    logger.info("listening grpc server on port %s", port)
    server.start()
    try:
        server.wait_for_termination()
    except KeyboardInterrupt:
        server.stop(None)
    return 0


def _call(pattern: Pattern, address: str) -> int:
    try:
        run_client(pattern, address)
    except GreetingError as err:
        logger.error("%s: %s", _CLIENT_FAILURES[pattern], err)
        return 1
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="rpcpatterns", description="Run a server or client for a gRPC call pattern."
    )
    parser.add_argument("role", choices=("server", "client"))
    parser.add_argument("pattern", choices=[p.value for p in Pattern])
    parser.add_argument("--address", default=None, help="address to listen on or connect to")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    pattern = Pattern(args.pattern)
    if args.role == "server":
        return _serve(pattern, args.address or SERVER_ADDRESS)
    return _call(pattern, args.address or CLIENT_ADDRESS)