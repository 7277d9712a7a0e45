import pytest
from lattice import InvalidInput
from rules import ElementaryRule, apply_rule

@pytest.mark.parametrize(
    "pattern,rule,expected",
    [
        (0b000, 0, 0),
        (0b111, 0, 0),
        (0b101, 0, 0),
        (0b000, 1, 1),
        (0b001, 1, 0),
        (0b111, 1, 0),
        (0b100, 30, 1),
        (0b101, 30, 0),
        (0b111, 255, 1),
    ],
)
def test_apply_rule(pattern, rule, expected):
    assert apply_rule(pattern, rule) == expected


def test_apply_rule_reads_every_bit():
    """Each of the 8 patterns picks out exactly its own bit of the rule."""
    for pattern in range(8):
        assert apply_rule(pattern, 1 << pattern) == 1
        assert apply_rule(pattern, 255 ^ (1 << pattern)) == 0


def test_rule30_table():
    rule = ElementaryRule(30)
    # Rule 30 is 00011110: 100, 011, 010, 001 -> 1
    assert rule.table == [0, 1, 1, 1, 1, 0, 0, 0]
    assert rule.bits == "00011110"
    assert rule(0b100) == 1
    assert rule(0b111) == 0


def test_from_bits_roundtrip():
    for code in (0, 1, 30, 90, 110, 184, 255):
        rule = ElementaryRule(code)
        assert ElementaryRule.from_bits(rule.bits) == rule
        assert int(rule) == code


@pytest.mark.parametrize("bad", [-1, 256, 1000])
def test_rule_out_of_range(bad):
    with pytest.raises(InvalidInput):
        ElementaryRule(bad)


def test_rule_rejects_non_int():
    with pytest.raises(InvalidInput):
        ElementaryRule("30")
    with pytest.raises(InvalidInput):
        ElementaryRule(True)


def test_from_bits_invalid():
    """Bit-strings must be exactly 8 binary digits."""
    with pytest.raises(InvalidInput):
        ElementaryRule.from_bits("0001111")
    with pytest.raises(InvalidInput):
        ElementaryRule.from_bits("000111102")


def test_coerce_passes_rule_through():
    rule = ElementaryRule(110)
    assert ElementaryRule.coerce(rule) is rule
    assert ElementaryRule.coerce(110) == rule
