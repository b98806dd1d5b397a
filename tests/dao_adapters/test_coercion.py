"""
Value Coercion Tests.

============================================================
PURPOSE
============================================================
Shared normalization rules used by every adapter.

TEST CATEGORIES:
- Numbers: plain, tagged, strings with leading digits
- Text
- Status mapping
- Name extraction and unit conversion

============================================================
"""

from decimal import Decimal

import pytest

from dao_adapters import ProposalStatus, extract_dao_name, is_numeric, micro_to_stx, to_number, to_status, to_text
from dao_adapters.coercion import first_field, first_text
from stacks_api import TaggedValue


# ============================================================
# NUMBER TESTS
# ============================================================

class TestToNumber:
    """Tests for to_number and is_numeric."""

    @pytest.mark.parametrize("value,expected", [
        (5, 5),
        (-3, -3),
        ("42", 42),
        ("12abc", 12),
        ("  7 blocks", 7),
        (TaggedValue("uint", 500000000), 500000000),
        (TaggedValue("uint", "7"), 7),
        (TaggedValue("int", -9), -9),
        (2500000.0, 2500000),
        (7.9, 7),
    ])
    def test_numeric_values(self, value, expected):
        assert to_number(value) == expected
        assert is_numeric(value)

    @pytest.mark.parametrize("value", [
        None,
        "abc",
        "",
        True,
        TaggedValue("bool", True),
        TaggedValue("principal", "SP000000000000000000002Q6VF78"),
        {"count": TaggedValue("uint", 3)},
        [1, 2],
        float("nan"),
        float("inf"),
    ])
    def test_non_numeric_values(self, value):
        """Test non-numeric inputs coerce to 0."""
        assert to_number(value) == 0
        assert not is_numeric(value)

    def test_zero_is_numeric(self):
        """Test a real zero is distinguished from 'not a number'."""
        assert to_number(TaggedValue("uint", 0)) == 0
        assert is_numeric(TaggedValue("uint", 0))


# ============================================================
# TEXT TESTS
# ============================================================

class TestToText:
    """Tests for to_text and field lookups."""

    def test_strings_pass_through(self):
        assert to_text("Upgrade") == "Upgrade"

    def test_tagged_values_stringified(self):
        assert to_text(TaggedValue("uint", 12)) == "12"
        assert to_text(TaggedValue("principal", "SP000000000000000000002Q6VF78")) == "SP000000000000000000002Q6VF78"

    def test_everything_else_empty(self):
        assert to_text(None) == ""
        assert to_text({"title": "x"}) == ""
        assert to_text(["x"]) == ""

    def test_first_field_skips_absent(self):
        record = {"status": None, "state": TaggedValue("uint", 1)}

        assert first_field(record, "status", "state") == TaggedValue("uint", 1)
        assert first_field(record, "missing") is None

    def test_first_text_skips_empty(self):
        record = {"title": "", "name": "Grant round"}

        assert first_text(record, "title", "name", "description") == "Grant round"
        assert first_text({}, "title") == ""


# ============================================================
# STATUS TESTS
# ============================================================

class TestToStatus:
    """Tests for to_status."""

    @pytest.mark.parametrize("value,expected", [
        ("passed", ProposalStatus.PASSED),
        ("Executed", ProposalStatus.PASSED),
        ("rejected", ProposalStatus.REJECTED),
        ("FAILED", ProposalStatus.REJECTED),
        ("pending", ProposalStatus.ACTIVE),
        ("", ProposalStatus.ACTIVE),
        (TaggedValue("bool", True), ProposalStatus.PASSED),
        (TaggedValue("bool", False), ProposalStatus.REJECTED),
        (TaggedValue("uint", 0), ProposalStatus.ACTIVE),
        (TaggedValue("uint", 1), ProposalStatus.PASSED),
        (TaggedValue("uint", 2), ProposalStatus.REJECTED),
        (TaggedValue("int", "2"), ProposalStatus.REJECTED),
        (TaggedValue("uint", 9), ProposalStatus.ACTIVE),
        (TaggedValue("string-ascii", "passed"), ProposalStatus.PASSED),
        (None, ProposalStatus.ACTIVE),
        (1, ProposalStatus.ACTIVE),
        ({"status": "passed"}, ProposalStatus.ACTIVE),
    ])
    def test_status_mapping(self, value, expected):
        assert to_status(value) == expected


# ============================================================
# NAME AND UNIT TESTS
# ============================================================

class TestNamesAndUnits:
    """Tests for extract_dao_name and micro_to_stx."""

    def test_extract_dao_name(self):
        assert extract_dao_name("SP000000000000000000002Q6VF78.my-awesome-dao") == "My Awesome Dao"
        assert extract_dao_name("SP000000000000000000002Q6VF78.dao") == "Dao"

    def test_extract_dao_name_fallback(self):
        assert extract_dao_name("SP000000000000000000002Q6VF78") == "Unknown DAO"
        assert extract_dao_name("a.b.c") == "Unknown DAO"
        assert extract_dao_name("SP000000000000000000002Q6VF78.") == "Unknown DAO"

    def test_micro_to_stx(self):
        assert micro_to_stx("500000000") == Decimal(500)
        assert micro_to_stx(2500000) == Decimal("2.5")
        assert micro_to_stx(1) == Decimal("0.000001")

    def test_micro_to_stx_garbage(self):
        assert micro_to_stx("not a number") == Decimal(0)
