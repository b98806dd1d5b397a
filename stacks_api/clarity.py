"""
Clarity Value Codec - Hex wire format for read-only call arguments and results.

Decoded values form a closed variant (``ClarityValue``):

- ``None``: absent (``none`` optional or ``err`` response)
- ``str``: ``string-ascii`` / ``string-utf8``
- ``TaggedValue``: ``int``, ``uint``, ``bool``, ``buffer``, ``principal``
- ``dict``: tuple records, field name to value
- ``list``: Clarity lists

``(ok x)`` and ``(some x)`` are unwrapped to ``x``. Plain ``bool`` and ``int``
are also members of the variant for values produced outside the codec
(mock interfaces, JSON payloads).
"""

import struct
from dataclasses import dataclass
from typing import Any, Union

from stacks_api.address import (
    C32_ALPHABET,
    HASH160_LENGTH,
    c32_address,
    c32_address_decode,
    is_valid_contract_name,
)
from stacks_api.exceptions import ClarityDecodeError


# Wire type ids
TYPE_INT = 0x00
TYPE_UINT = 0x01
TYPE_BUFFER = 0x02
TYPE_TRUE = 0x03
TYPE_FALSE = 0x04
TYPE_STANDARD_PRINCIPAL = 0x05
TYPE_CONTRACT_PRINCIPAL = 0x06
TYPE_RESPONSE_OK = 0x07
TYPE_RESPONSE_ERR = 0x08
TYPE_OPTIONAL_NONE = 0x09
TYPE_OPTIONAL_SOME = 0x0A
TYPE_LIST = 0x0B
TYPE_TUPLE = 0x0C
TYPE_STRING_ASCII = 0x0D
TYPE_STRING_UTF8 = 0x0E

INT128_MIN = -(2 ** 127)
INT128_MAX = 2 ** 127 - 1
UINT128_MAX = 2 ** 128 - 1


@dataclass(frozen=True)
class TaggedValue:
    """A typed scalar: ``type`` is the Clarity type name, ``value`` its payload."""
    type: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


ClarityValue = Union[
    None,
    bool,
    int,
    str,
    TaggedValue,
    dict[str, Any],
    list[Any],
]


# ─────────────────────────────────────────────────────────────
# Serialization
# ─────────────────────────────────────────────────────────────

def _hex(data: bytes) -> str:
    return "0x" + data.hex()


def encode_uint(value: int) -> str:
    """Serialize a ``uint`` argument."""
    if not 0 <= value <= UINT128_MAX:
        raise ValueError(f"uint out of range: {value}")
    return _hex(bytes([TYPE_UINT]) + value.to_bytes(16, "big"))


def encode_int(value: int) -> str:
    """Serialize an ``int`` argument."""
    if not INT128_MIN <= value <= INT128_MAX:
        raise ValueError(f"int out of range: {value}")
    return _hex(bytes([TYPE_INT]) + value.to_bytes(16, "big", signed=True))


def encode_bool(value: bool) -> str:
    return _hex(bytes([TYPE_TRUE if value else TYPE_FALSE]))


def encode_string_ascii(value: str) -> str:
    raw = value.encode("ascii")
    return _hex(bytes([TYPE_STRING_ASCII]) + struct.pack(">I", len(raw)) + raw)


def encode_principal(value: str) -> str:
    """Serialize a standard principal or a ``principal.contract-name`` identifier."""
    principal, _, contract_name = value.partition(".")
    decoded = c32_address_decode(principal)
    head = bytes([decoded.version]) + decoded.hash160

    if not contract_name:
        return _hex(bytes([TYPE_STANDARD_PRINCIPAL]) + head)

    if not is_valid_contract_name(contract_name):
        raise ValueError(f"Invalid contract name: {contract_name!r}")
    name = contract_name.encode("ascii")
    return _hex(bytes([TYPE_CONTRACT_PRINCIPAL]) + head + bytes([len(name)]) + name)


# ─────────────────────────────────────────────────────────────
# Deserialization
# ─────────────────────────────────────────────────────────────

class _Reader:
    """Cursor over a serialized value."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def read(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ClarityDecodeError(
                f"Unexpected end of data (need {size} bytes)",
                raw_hex=self.data.hex(),
                offset=self.offset,
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def read_byte(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return struct.unpack(">I", self.read(4))[0]


def _read_principal(reader: _Reader) -> str:
    version = reader.read_byte()
    if version >= len(C32_ALPHABET):
        raise ClarityDecodeError(
            f"Invalid principal version: {version}",
            raw_hex=reader.data.hex(),
            offset=reader.offset,
        )
    return c32_address(version, reader.read(HASH160_LENGTH))


def _read_value(reader: _Reader) -> ClarityValue:
    type_id = reader.read_byte()

    if type_id == TYPE_INT:
        return TaggedValue("int", int.from_bytes(reader.read(16), "big", signed=True))
    if type_id == TYPE_UINT:
        return TaggedValue("uint", int.from_bytes(reader.read(16), "big"))
    if type_id == TYPE_BUFFER:
        return TaggedValue("buffer", "0x" + reader.read(reader.read_u32()).hex())
    if type_id == TYPE_TRUE:
        return TaggedValue("bool", True)
    if type_id == TYPE_FALSE:
        return TaggedValue("bool", False)
    if type_id == TYPE_STANDARD_PRINCIPAL:
        return TaggedValue("principal", _read_principal(reader))
    if type_id == TYPE_CONTRACT_PRINCIPAL:
        principal = _read_principal(reader)
        name = reader.read(reader.read_byte()).decode("ascii")
        return TaggedValue("principal", f"{principal}.{name}")
    if type_id in (TYPE_RESPONSE_OK, TYPE_OPTIONAL_SOME):
        return _read_value(reader)
    if type_id == TYPE_RESPONSE_ERR:
        # Decode to keep the cursor consistent, then report absence
        _read_value(reader)
        return None
    if type_id == TYPE_OPTIONAL_NONE:
        return None
    if type_id == TYPE_LIST:
        return [_read_value(reader) for _ in range(reader.read_u32())]
    if type_id == TYPE_TUPLE:
        record: dict[str, Any] = {}
        for _ in range(reader.read_u32()):
            key = reader.read(reader.read_byte()).decode("ascii")
            record[key] = _read_value(reader)
        return record
    if type_id == TYPE_STRING_ASCII:
        return reader.read(reader.read_u32()).decode("ascii")
    if type_id == TYPE_STRING_UTF8:
        return reader.read(reader.read_u32()).decode("utf-8")

    raise ClarityDecodeError(
        f"Unknown Clarity type id: 0x{type_id:02x}",
        raw_hex=reader.data.hex(),
        offset=reader.offset - 1,
    )


def decode_hex(raw: str) -> ClarityValue:
    """
    Decode a ``0x``-prefixed serialized Clarity value.

    Raises:
        ClarityDecodeError: If the payload is malformed or has trailing bytes
    """
    text = raw[2:] if raw.startswith(("0x", "0X")) else raw
    try:
        data = bytes.fromhex(text)
    except ValueError as e:
        raise ClarityDecodeError("Invalid hex payload", raw_hex=raw, original_error=e)

    reader = _Reader(data)
    try:
        value = _read_value(reader)
    except UnicodeDecodeError as e:
        raise ClarityDecodeError(
            "Invalid string payload",
            raw_hex=raw,
            offset=reader.offset,
            original_error=e,
        )

    if reader.offset != len(data):
        raise ClarityDecodeError(
            f"Trailing bytes after value ({len(data) - reader.offset})",
            raw_hex=raw,
            offset=reader.offset,
        )
    return value
