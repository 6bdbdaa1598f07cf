# rpcpatterns

Small, complete servers and clients for the four gRPC call patterns:

| Pattern | Service / method | What the server does |
|---|---|---|
| unary | `api.Hi/HelloWorld` | Answers one name with one greeting: `Hello <name>` |
| server streaming | `api.Hi/HelloWorld` | Sends `Hello <name> for <n> time` for n = 1 up to the requested number of times |
| client streaming | `api.Sum/SumItems` | Adds up a stream of integers and returns the total (as a 32-bit integer) |
| bidirectional | `api.Echo/EchoMessage` | Answers every message with `echo <message>` |

Messages are encoded in the protocol buffers wire format by hand, with no
generated code; see `rpcpatterns.messages`.

## Installation

```
pip install .
```

## Command line

Start a server for one pattern. By default it listens on `[::]:50051`:

```
rpcpatterns server unary
```

In another terminal, run the matching client. By default it connects to
`localhost:50051`:

```
rpcpatterns client unary
```

The pattern names are `unary`, `server-stream`, `client-stream` and
`bidi-stream`. The `--address` option sets the address to listen on or
connect to:

```
rpcpatterns server bidi-stream --address localhost:6000
rpcpatterns client bidi-stream --address localhost:6000
```

Run `rpcpatterns --help` to see every option. The server runs until it is
interrupted with Ctrl-C.

The clients send fixed data:

- unary: the name `World`, printing `Hello World`;
- server streaming: the name `World` with 10 repetitions, printing each
  greeting as it arrives;
- client streaming: the numbers 1 to 9, logging their sum (45);
- bidirectional: `Hello World`, sending each echo back to the server five
  times and logging every reply, so the last one is
  `echo echo echo echo echo Hello World`.

If the client cannot get its answer (for example because no server is
running), it logs the error and the command exits with status 1.

## Library use

```python
import grpc
from rpcpatterns.cli import Pattern, build_server
from rpcpatterns.unary import GreetingService, HiClient

server, port = build_server(Pattern.UNARY, "localhost:0")
server.start()
with grpc.insecure_channel(f"localhost:{port}") as channel:
    greeting = GreetingService(HiClient(channel)).get_greeting_from_server("Ada")
server.stop(None)
assert greeting == "Hello Ada"
```

`build_server(pattern, address)` returns an unstarted `grpc.Server` and the
port it was bound to; `run_client(pattern, address)` runs a pattern's client
against an address and returns what it received.

Each pattern module contains the servicer, a function that registers it on
a `grpc.Server`, a thin client stub over a channel, and a service that drives
the call the way the command-line client does:

| Module | Servicer | Register | Client | Service |
|---|---|---|---|---|
| `rpcpatterns.unary` | `HiServer` | `register_hi_server` | `HiClient` | `GreetingService.get_greeting_from_server(name)` |
| `rpcpatterns.server_stream` | `HiStreamServer` | `register_hi_stream_server` | `HiStreamClient` | `StreamingGreetingService.get_greeting_from_server(name, times)` |
| `rpcpatterns.client_stream` | `SumServer` | `register_sum_server` | `SumClient` | `SumService.get_sum_from_server(values)` |
| `rpcpatterns.bidi_stream` | `EchoServer` | `register_echo_server` | `EchoClient` | `EchoService.get_echoes_message_from_server(message, times)` |

The services raise `rpcpatterns.unary.GreetingError` when a call fails.

`rpcpatterns.messages` holds the frozen dataclasses `HelloRequest`,
`HelloResponse`, `SumItemRequest`, `SumResponse`, `MessageRequest` and
`MessageResponse`, each with `to_bytes()` and `from_bytes(data)`. Fields
holding their default are left out when encoding; when decoding, unknown
fields are skipped and the last of repeated fields wins. Malformed input
raises `DecodeError` (a `ValueError`); encoding an integer outside the
32-bit range raises `ValueError`.

## What it does not do

Connections are plain and unencrypted: there is no TLS or authentication.
Servers and clients are synchronous; there is no asyncio variant.

## Tests

```
pip install .[test]
pytest
```