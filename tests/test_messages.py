import pytest

from rpcpatterns.messages import (
    DecodeError,
    HelloRequest,
    HelloResponse,
    MessageRequest,
    MessageResponse,
    SumItemRequest,
    SumResponse,
)


@pytest.mark.parametrize(
    "message",
    [
        HelloRequest(),
        HelloRequest(name="Gopher"),
        HelloRequest(name="Gopher", times=10),
        HelloRequest(name="ñandú ✓", times=-3),
        HelloResponse(message="Hello Gopher"),
        SumItemRequest(value=7),
        SumItemRequest(value=-(2**31)),
        SumItemRequest(value=2**31 - 1),
        SumResponse(total=45),
        SumResponse(total=-1),
        MessageRequest(message="Hello World"),
        MessageResponse(message="echo Hello World"),
    ],
)
def test_round_trip(message):
    assert type(message).from_bytes(message.to_bytes()) == message


def test_default_message_encodes_to_nothing():
    assert HelloRequest().to_bytes() == b""


def test_wire_bytes_of_hello_request():
    assert HelloRequest(name="a", times=1).to_bytes() == b"\x0a\x01a\x10\x01"


def test_negative_int32_uses_ten_byte_varint():
    assert SumItemRequest(value=-1).to_bytes() == b"\x08" + b"\xff" * 9 + b"\x01"


def test_empty_bytes_decode_to_defaults():
    assert SumResponse.from_bytes(b"") == SumResponse()


def test_unknown_fields_are_skipped():
    known = HelloResponse(message="x").to_bytes()
    extra = b"\x10\x05" + b"\x1a\x02zz" + b"\x25\x00\x00\x00\x00" + b"\x29" + b"\x00" * 8
    assert HelloResponse.from_bytes(extra + known) == HelloResponse(message="x")


def test_last_duplicate_wins():
    data = MessageRequest(message="first").to_bytes() + MessageRequest(message="second").to_bytes()
    assert MessageRequest.from_bytes(data) == MessageRequest(message="second")


def test_accepts_bytearray_and_memoryview():
    raw = SumResponse(total=9).to_bytes()
    assert SumResponse.from_bytes(bytearray(raw)) == SumResponse.from_bytes(memoryview(raw))


def test_string_messages_share_encoding():
    assert MessageRequest(message="hi").to_bytes() == MessageResponse(message="hi").to_bytes()


@pytest.mark.parametrize(
    "data",
    [
        b"\x0a\x05ab",
        b"\x08",
        b"\x08\xff\xff\xff\xff\xff\xff\xff\xff\xff\xff\xff",
        b"\x0a\x01\xff",
        b"\x08\x01",
        b"\x00\x01",
        b"\x0b",
    ],
)
def test_invalid_bytes_raise_decode_error(data):
    with pytest.raises(DecodeError):
        HelloResponse.from_bytes(data)


def test_int32_field_with_wrong_wire_type():
    with pytest.raises(DecodeError):
        SumItemRequest.from_bytes(b"\x0a\x01a")


def test_decode_error_is_a_value_error():
    with pytest.raises(ValueError):
        HelloRequest.from_bytes(b"\x0a\x09")


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1])
def test_out_of_range_int32_is_rejected(value):
    with pytest.raises(ValueError):
        SumItemRequest(value=value).to_bytes()