"""Request and response messages, encoded in the protocol buffer wire format."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, NamedTuple

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
_MAX_VARINT_BYTES = 10


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded into a message."""


class _WireType(IntEnum):
    VARINT = 0
    I64 = 1
    LEN = 2
    I32 = 5


class _Kind(Enum):
    STRING = "string"
    INT32 = "int32"


class _Field(NamedTuple):
    name: str
    number: int
    kind: _Kind


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        bits = value & 0x7F
        value >>= 7
        if value:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for shift in range(0, 7 * _MAX_VARINT_BYTES, 7):
        if pos >= len(data):
            raise DecodeError("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & _MASK64, pos
    raise DecodeError("varint is too long")


def _tag(number: int, wire: _WireType) -> bytes:
    return _encode_varint((number << 3) | wire)


def _take(data: bytes, pos: int, length: int) -> tuple[bytes, int]:
    end = pos + length
    if end > len(data):
        raise DecodeError("truncated field")
    return data[pos:end], end


def _convert(field: _Field, wire: int, raw):
    if field.kind is _Kind.STRING:
        if wire != _WireType.LEN:
            raise DecodeError(f"field {field.name!r} must be length-delimited")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise DecodeError(f"field {field.name!r} is not valid UTF-8") from err
    if wire != _WireType.VARINT:
        raise DecodeError(f"field {field.name!r} must be a varint")
    value = raw & _MASK32
    return value - (1 << 32) if value > INT32_MAX else value


def _encode(message, schema: tuple[_Field, ...]) -> bytes:
    """Encode a message; fields holding their default are left out."""
    out = bytearray()
    for field in schema:
        value = getattr(message, field.name)
        if field.kind is _Kind.STRING:
            if value:
                raw = value.encode("utf-8")
                out += _tag(field.number, _WireType.LEN)
                out += _encode_varint(len(raw))
                out += raw
        else:
            if not INT32_MIN <= value <= INT32_MAX:
                raise ValueError(f"field {field.name!r} out of int32 range: {value}")
            if value:
                out += _tag(field.number, _WireType.VARINT)
                out += _encode_varint(value & _MASK64)
    return bytes(out)


def _decode(cls, schema: tuple[_Field, ...], data):
    """Decode a message; unknown fields are skipped, the last duplicate wins."""
    data = bytes(data)
    by_number = {field.number: field for field in schema}
    values = {}
    pos = 0
    while pos < len(data):
        key, pos = _read_varint(data, pos)
        number, wire = key >> 3, key & 0x7
        if number == 0:
            raise DecodeError("field number 0 is invalid")
        if wire == _WireType.VARINT:
            raw, pos = _read_varint(data, pos)
        elif wire == _WireType.I64:
            raw, pos = _take(data, pos, 8)
        elif wire == _WireType.LEN:
            length, pos = _read_varint(data, pos)
            raw, pos = _take(data, pos, length)
        elif wire == _WireType.I32:
            raw, pos = _take(data, pos, 4)
        else:
            raise DecodeError(f"unsupported wire type {wire}")
        field = by_number.get(number)
        if field is not None:
            values[field.name] = _convert(field, wire, raw)
    return cls(**values)


@dataclass(frozen=True)
class HelloRequest:
    """A greeting request: who to greet and, for streams, how many times."""

    name: str = ""
    times: int = 0

    _SCHEMA: ClassVar[tuple[_Field, ...]] = (
        _Field("name", 1, _Kind.STRING),
        _Field("times", 2, _Kind.INT32),
    )

    def to_bytes(self) -> bytes:
        """Encode the message; fields holding their default are left out."""
        return _encode(self, self._SCHEMA)

    @classmethod
    def from_bytes(cls, data) -> "HelloRequest":
        """Decode a message; unknown fields are skipped, the last duplicate wins."""
        return _decode(cls, cls._SCHEMA, data)


@dataclass(frozen=True)
class HelloResponse:
    """A greeting sent back by the server."""

    message: str = ""

    _SCHEMA: ClassVar[tuple[_Field, ...]] = (_Field("message", 1, _Kind.STRING),)

    def to_bytes(self) -> bytes:
        """Encode the message; fields holding their default are left out."""
        return _encode(self, self._SCHEMA)

    @classmethod
    def from_bytes(cls, data) -> "HelloResponse":
        """Decode a message; unknown fields are skipped, the last duplicate wins."""
        return _decode(cls, cls._SCHEMA, data)


@dataclass(frozen=True)
class SumItemRequest:
    """One value of a streamed sum."""

    value: int = 0

    _SCHEMA: ClassVar[tuple[_Field, ...]] = (_Field("value", 1, _Kind.INT32),)

    def to_bytes(self) -> bytes:
        """Encode the message; fields holding their default are left out."""
        return _encode(self, self._SCHEMA)

    @classmethod
    def from_bytes(cls, data) -> "SumItemRequest":
        """Decode a message; unknown fields are skipped, the last duplicate wins."""
        return _decode(cls, cls._SCHEMA, data)


@dataclass(frozen=True)
class SumResponse:
    """The total of all streamed values."""

    total: int = 0

    _SCHEMA: ClassVar[tuple[_Field, ...]] = (_Field("total", 1, _Kind.INT32),)

    def to_bytes(self) -> bytes:
        """Encode the message; fields holding their default are left out."""
        return _encode(self, self._SCHEMA)

    @classmethod
    def from_bytes(cls, data) -> "SumResponse":
        """Decode a message; unknown fields are skipped, the last duplicate wins."""
        return _decode(cls, cls._SCHEMA, data)


@dataclass(frozen=True)
class MessageRequest:
    """A message to be echoed."""

    message: str = ""

    _SCHEMA: ClassVar[tuple[_Field, ...]] = (_Field("message", 1, _Kind.STRING),)

    def to_bytes(self) -> bytes:
        """Encode the message; fields holding their default are left out."""
        return _encode(self, self._SCHEMA)

    @classmethod
    def from_bytes(cls, data) -> "MessageRequest":
        """Decode a message; unknown fields are skipped, the last duplicate wins."""
        return _decode(cls, cls._SCHEMA, data)


@dataclass(frozen=True)
class MessageResponse:
    """An echoed message."""

    message: str = ""

    _SCHEMA: ClassVar[tuple[_Field, ...]] = (_Field("message", 1, _Kind.STRING),)

    def to_bytes(self) -> bytes:
        """Encode the message; fields holding their default are left out."""
        return _encode(self, self._SCHEMA)

    @classmethod
    def from_bytes(cls, data) -> "MessageResponse":
        """Decode a message; unknown fields are skipped, the last duplicate wins."""
        return _decode(cls, cls._SCHEMA, data)