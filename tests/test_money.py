from decimal import Decimal

import pytest

from wallet_client.utils.money import Money, format_grouped, parse_whole_amount


def test_create_money_from_string():
    m = Money("50000")
    assert m.amount == 50000

def test_create_money_from_integral_float():
    m = Money(50000.0)
    assert m.amount == 50000

def test_create_money_from_decimal_string_with_zero_cents():
    assert Money("75000.00").amount == 75000
    assert Money(Decimal("75000.00")).amount == 75000

def test_fractional_amount_rejected():
    with pytest.raises(ValueError):
        Money("19.99")

def test_boolean_amount_rejected():
    with pytest.raises(ValueError):
        parse_whole_amount(True)

def test_garbage_amount_rejected():
    with pytest.raises(ValueError):
        parse_whole_amount("fifty")

def test_str_and_repr():
    m = Money(1250000)
    assert str(m) == "Rp1,250,000"
    assert repr(m) == "Money(1250000)"

def test_signed():
    assert Money(50000).signed("-") == "-50,000"

@pytest.mark.parametrize(
    "value, separator, expected",
    [
        (0, None, "0"),
        (999, None, "999"),
        (1000, None, "1,000"),
        (2000000, None, "2,000,000"),
        (2000000, ".", "2.000.000"),
    ],
)
def test_format_grouped(value, separator, expected):
    assert format_grouped(value, separator) == expected
