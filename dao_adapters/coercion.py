"""
Value Coercion - The normalization boundary between contract encodings and the domain model.

Every adapter strategy goes through these functions; none of them inspect
raw contract values on their own.
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional

from dao_adapters.models import ProposalStatus
from stacks_api.clarity import ClarityValue, TaggedValue


MICRO_STX_PER_STX = Decimal(1_000_000)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

_PASSED_MARKERS = ("pass", "executed")
_REJECTED_MARKERS = ("reject", "failed")

_INT_TYPES = ("int", "uint")


def _parse_int(value: Any) -> Optional[int]:
    """Parse a leading decimal integer; floats are truncated. None if there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else None
    return None


def _number_or_none(value: ClarityValue) -> Optional[int]:
    if isinstance(value, TaggedValue):
        return _parse_int(value.value)
    return _parse_int(value)


def to_number(value: ClarityValue) -> int:
    """Coerce a contract value to an integer, 0 when not numeric."""
    number = _number_or_none(value)
    return number if number is not None else 0


def is_numeric(value: ClarityValue) -> bool:
    """Check whether ``to_number`` would find a real number."""
    return _number_or_none(value) is not None


def to_text(value: ClarityValue) -> str:
    """Coerce a contract value to a string, empty when not textual."""
    if isinstance(value, str):
        return value
    if isinstance(value, TaggedValue):
        return str(value.value)
    return ""


def _status_from_text(text: str) -> ProposalStatus:
    lower = text.lower()
    if any(marker in lower for marker in _PASSED_MARKERS):
        return ProposalStatus.PASSED
    if any(marker in lower for marker in _REJECTED_MARKERS):
        return ProposalStatus.REJECTED
    return ProposalStatus.ACTIVE


def to_status(value: ClarityValue) -> ProposalStatus:
    """
    Coerce a contract value to a proposal status.

    Rules:
    - strings: substring "pass"/"executed" -> Passed, "reject"/"failed" -> Rejected
    - tagged bool: True -> Passed, False -> Rejected
    - tagged int/uint: 1 -> Passed, 2 -> Rejected, anything else -> Active
    - tagged strings follow the string rule
    - everything else -> Active (unrecognized states are not reclassified)
    """
    if isinstance(value, str):
        return _status_from_text(value)

    if isinstance(value, TaggedValue):
        if value.type == "bool":
            return ProposalStatus.PASSED if value.value else ProposalStatus.REJECTED
        if value.type in _INT_TYPES:
            code = _parse_int(value.value)
            if code == 1:
                return ProposalStatus.PASSED
            if code == 2:
                return ProposalStatus.REJECTED
            return ProposalStatus.ACTIVE
        if "string" in value.type and isinstance(value.value, str):
            return _status_from_text(value.value)

    return ProposalStatus.ACTIVE


def first_field(record: dict[str, Any], *names: str) -> ClarityValue:
    """First present (non-None) field among ``names``."""
    for name in names:
        value = record.get(name)
        if value is not None:
            return value
    return None


def first_text(record: dict[str, Any], *names: str) -> str:
    """First field among ``names`` that coerces to a non-empty string."""
    for name in names:
        text = to_text(record.get(name))
        if text:
            return text
    return ""


def micro_to_stx(micro: Any) -> Decimal:
    """Convert micro-STX (int or decimal string) to STX."""
    if isinstance(micro, Decimal):
        amount = micro
    else:
        try:
            amount = Decimal(str(micro).strip())
        except ArithmeticError:
            amount = Decimal(0)
    if not amount.is_finite():
        amount = Decimal(0)
    return amount / MICRO_STX_PER_STX


def extract_dao_name(contract_address: str) -> str:
    """Title-case the contract name: ``my-awesome-dao`` -> ``My Awesome Dao``."""
    parts = contract_address.split(".")
    if len(parts) != 2 or not parts[1]:
        return "Unknown DAO"
    return " ".join(word[:1].upper() + word[1:] for word in parts[1].split("-"))
