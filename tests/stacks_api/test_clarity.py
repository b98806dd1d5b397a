"""
Clarity Codec Tests.

============================================================
PURPOSE
============================================================
Serialization of call arguments and decoding of call results.

TEST CATEGORIES:
- Encoding: uint, int, bool, strings, principals
- Decoding: scalars, responses, optionals, tuples, lists
- Malformed payloads

============================================================
"""

import struct

import pytest

from stacks_api import (
    ClarityDecodeError,
    TaggedValue,
    decode_hex,
    encode_bool,
    encode_int,
    encode_principal,
    encode_string_ascii,
    encode_uint,
)


BOOT = "SP000000000000000000002Q6VF78"


def _uint(value: int) -> bytes:
    return b"\x01" + value.to_bytes(16, "big")


def _ascii(text: str) -> bytes:
    raw = text.encode("ascii")
    return b"\x0d" + struct.pack(">I", len(raw)) + raw


def _tuple(**fields: bytes) -> bytes:
    body = b""
    for key, value in sorted(fields.items()):
        name = key.replace("_", "-").encode("ascii")
        body += bytes([len(name)]) + name + value
    return b"\x0c" + struct.pack(">I", len(fields)) + body


def _hex(data: bytes) -> str:
    return "0x" + data.hex()


# ============================================================
# ENCODING TESTS
# ============================================================

class TestEncoding:
    """Tests for argument serialization."""

    def test_encode_uint(self):
        """Test uint is a type byte plus 16 big-endian bytes."""
        assert encode_uint(0) == "0x01" + "00" * 16
        assert encode_uint(1) == "0x01" + "00" * 15 + "01"
        assert encode_uint(256) == "0x01" + "00" * 14 + "0100"

    def test_encode_uint_out_of_range(self):
        """Test negative and oversized uints are rejected."""
        with pytest.raises(ValueError):
            encode_uint(-1)
        with pytest.raises(ValueError):
            encode_uint(2 ** 128)

    def test_encode_int_negative(self):
        """Test int uses two's complement."""
        assert encode_int(-1) == "0x00" + "ff" * 16

    def test_encode_bool(self):
        assert encode_bool(True) == "0x03"
        assert encode_bool(False) == "0x04"

    def test_encode_string_ascii(self):
        assert encode_string_ascii("hi") == "0x0d000000026869"

    def test_encode_principal(self):
        """Test standard and contract principals."""
        assert encode_principal(BOOT) == "0x0516" + "00" * 20
        assert encode_principal(f"{BOOT}.pox") == "0x0616" + "00" * 20 + "03" + "706f78"

    def test_encode_principal_invalid(self):
        with pytest.raises(ValueError):
            encode_principal("not-a-principal")


# ============================================================
# DECODING TESTS
# ============================================================

class TestDecoding:
    """Tests for result decoding."""

    def test_decode_uint(self):
        assert decode_hex(encode_uint(42)) == TaggedValue("uint", 42)

    def test_decode_int(self):
        assert decode_hex(encode_int(-7)) == TaggedValue("int", -7)

    def test_decode_bool(self):
        assert decode_hex("0x03") == TaggedValue("bool", True)
        assert decode_hex("0x04") == TaggedValue("bool", False)

    def test_decode_strings(self):
        """Test ASCII and UTF-8 strings decode to plain str."""
        utf8 = "héllo".encode("utf-8")

        assert decode_hex(encode_string_ascii("Upgrade")) == "Upgrade"
        assert decode_hex(_hex(b"\x0e" + struct.pack(">I", len(utf8)) + utf8)) == "héllo"

    def test_decode_buffer(self):
        assert decode_hex("0x0200000002beef") == TaggedValue("buffer", "0xbeef")

    def test_decode_principals(self):
        """Test principals decode to their string form."""
        assert decode_hex(encode_principal(BOOT)) == TaggedValue("principal", BOOT)
        assert decode_hex(encode_principal(f"{BOOT}.pox")) == TaggedValue("principal", f"{BOOT}.pox")

    def test_ok_and_some_unwrap(self):
        """Test (ok x) and (some x) decode to x."""
        assert decode_hex(_hex(b"\x07" + _uint(3))) == TaggedValue("uint", 3)
        assert decode_hex(_hex(b"\x0a" + _ascii("yes"))) == "yes"
        assert decode_hex(_hex(b"\x07\x0a" + _uint(9))) == TaggedValue("uint", 9)

    def test_err_and_none_absent(self):
        """Test (err x) and none decode to None."""
        assert decode_hex(_hex(b"\x08" + _uint(404))) is None
        assert decode_hex("0x09") is None

    def test_decode_tuple(self):
        """Test tuples decode to field dictionaries."""
        raw = _tuple(title=_ascii("Upgrade"), status=_uint(1))

        assert decode_hex(_hex(raw)) == {
            "status": TaggedValue("uint", 1),
            "title": "Upgrade",
        }

    def test_decode_nested_list(self):
        raw = b"\x0b" + struct.pack(">I", 2) + _uint(1) + _tuple(yes_votes=_uint(5))

        assert decode_hex(_hex(raw)) == [
            TaggedValue("uint", 1),
            {"yes-votes": TaggedValue("uint", 5)},
        ]

    def test_prefix_optional(self):
        """Test a payload without the 0x prefix."""
        assert decode_hex("03") == TaggedValue("bool", True)


# ============================================================
# MALFORMED PAYLOAD TESTS
# ============================================================

class TestMalformedPayloads:
    """Tests for decode failures."""

    def test_invalid_hex(self):
        with pytest.raises(ClarityDecodeError):
            decode_hex("0xzz")

    def test_unknown_type(self):
        with pytest.raises(ClarityDecodeError, match="Unknown Clarity type"):
            decode_hex("0xff")

    def test_truncated(self):
        with pytest.raises(ClarityDecodeError) as exc_info:
            decode_hex("0x01" + "00" * 4)

        assert exc_info.value.offset == 1

    def test_trailing_bytes(self):
        with pytest.raises(ClarityDecodeError, match="Trailing bytes"):
            decode_hex("0x0303")

    def test_error_serializes(self):
        """Test decode errors carry the raw payload."""
        with pytest.raises(ClarityDecodeError) as exc_info:
            decode_hex("0xff")

        data = exc_info.value.to_dict()
        assert data["error_type"] == "ClarityDecodeError"
        assert data["raw_hex"] == "ff"
