"""
Stacks Address Validation - c32check principals and contract identifiers.

A standard principal is ``S`` + the c32 character of its version byte +
c32(hash160 || checksum), where the checksum is the first four bytes of
sha256(sha256(version || hash160)). A contract identifier is a standard
principal followed by ``.`` and a contract name.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import Optional

from stacks_api.models import NETWORKS, Network


C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

HASH160_LENGTH = 20
CHECKSUM_LENGTH = 4
MAX_CONTRACT_NAME_LENGTH = 128

_CONTRACT_NAME_RE = re.compile(r"[a-zA-Z]([a-zA-Z0-9]|[-_])*")


@dataclass(frozen=True)
class StandardPrincipal:
    """A decoded standard principal."""
    version: int
    hash160: bytes

    @property
    def address(self) -> str:
        return c32_address(self.version, self.hash160)


@dataclass(frozen=True)
class ContractAddress:
    """A contract identifier split into principal and contract name."""
    principal: str
    contract_name: str

    @property
    def contract_id(self) -> str:
        return f"{self.principal}.{self.contract_name}"

    def __str__(self) -> str:
        return self.contract_id


# ─────────────────────────────────────────────────────────────
# c32 encoding
# ─────────────────────────────────────────────────────────────

def c32_normalize(text: str) -> str:
    """Uppercase and map the ambiguous characters O, L and I."""
    return text.upper().replace("O", "0").replace("L", "1").replace("I", "1")


def c32_encode(data: bytes) -> str:
    """Encode bytes, keeping one ``0`` character per leading zero byte."""
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    value = int.from_bytes(data, "big")

    digits = []
    while value > 0:
        value, remainder = divmod(value, 32)
        digits.append(C32_ALPHABET[remainder])

    return C32_ALPHABET[0] * leading_zeros + "".join(reversed(digits))


def c32_decode(text: str) -> bytes:
    """Decode a c32 string into bytes."""
    text = c32_normalize(text)
    value = 0
    for char in text:
        index = C32_ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"Invalid c32 character: {char!r}")
        value = value * 32 + index

    leading_zeros = len(text) - len(text.lstrip(C32_ALPHABET[0]))
    body = value.to_bytes((value.bit_length() + 7) // 8, "big") if value else b""
    return b"\x00" * leading_zeros + body


def c32_checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:CHECKSUM_LENGTH]


def c32_address(version: int, hash160: bytes) -> str:
    """Build a standard principal string from its version and hash."""
    if not 0 <= version < 32:
        raise ValueError(f"Invalid address version: {version}")
    checksum = c32_checksum(bytes([version]) + hash160)
    return "S" + C32_ALPHABET[version] + c32_encode(hash160 + checksum)


def c32_address_decode(address: str) -> StandardPrincipal:
    """
    Decode and checksum-verify a standard principal.

    Raises:
        ValueError: If the address is malformed or the checksum mismatches
    """
    address = c32_normalize(address.strip())
    if len(address) <= 5 or address[0] != "S":
        raise ValueError(f"Not a Stacks address: {address!r}")

    version = C32_ALPHABET.find(address[1])
    if version < 0:
        raise ValueError(f"Invalid address version character: {address[1]!r}")

    payload = c32_decode(address[2:])
    if len(payload) != HASH160_LENGTH + CHECKSUM_LENGTH:
        raise ValueError(f"Invalid address payload length: {len(payload)}")

    hash160, checksum = payload[:-CHECKSUM_LENGTH], payload[-CHECKSUM_LENGTH:]
    if c32_checksum(bytes([version]) + hash160) != checksum:
        raise ValueError("Address checksum mismatch")

    return StandardPrincipal(version=version, hash160=hash160)


# ─────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────

def parse_principal(
    principal: str,
    network: Optional[Network] = None,
) -> Optional[StandardPrincipal]:
    """
    Decode a standard principal, optionally restricted to one network.

    Returns None instead of raising on malformed input. Only the canonical
    spelling is accepted: no surrounding whitespace, no lowercase and none
    of the ambiguous characters the c32 decoder would remap.
    """
    try:
        decoded = c32_address_decode(principal)
    except ValueError:
        return None
    if decoded.address != principal:
        return None

    if network is not None:
        if not NETWORKS[network].accepts_version(decoded.version):
            return None
    elif not any(cfg.accepts_version(decoded.version) for cfg in NETWORKS.values()):
        return None

    return decoded


def is_valid_contract_name(name: str) -> bool:
    """Check Clarity contract name syntax."""
    return (
        0 < len(name) <= MAX_CONTRACT_NAME_LENGTH
        and _CONTRACT_NAME_RE.fullmatch(name) is not None
    )


def parse_contract_address(
    address: str,
    network: Optional[Network] = None,
) -> Optional[ContractAddress]:
    """
    Split ``<principal>.<contract-name>`` on the first dot and validate both parts.

    Args:
        address: Contract identifier
        network: Restrict the principal to this network's address versions

    Returns:
        ContractAddress or None if malformed
    """
    if not isinstance(address, str) or "." not in address:
        return None

    principal, contract_name = address.strip().split(".", 1)
    if not is_valid_contract_name(contract_name):
        return None
    if parse_principal(principal, network) is None:
        return None

    return ContractAddress(principal=principal, contract_name=contract_name)


def is_valid_address(address: str, network: Optional[Network] = None) -> bool:
    """Check a standard principal or a contract identifier."""
    if not isinstance(address, str):
        return False
    if "." in address:
        return parse_contract_address(address, network) is not None
    return parse_principal(address, network) is not None
