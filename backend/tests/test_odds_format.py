import pytest

from tokentoss.services.odds_format import decimal_to_american, format_american, format_line


@pytest.mark.parametrize(
    "decimal, american",
    [
        (2.0, 100),
        (2.5, 150),
        (3.125, 213),  # 212.5 rounds away from zero
        (1.5, -200),
        (1.8, -125),
        (1.91, -110),
    ],
)
def test_decimal_to_american(decimal, american):
    assert decimal_to_american(decimal) == american


@pytest.mark.parametrize("decimal", [1.0, 0.5, 0])
def test_decimal_to_american_rejects_no_payout_prices(decimal):
    with pytest.raises(ValueError):
        decimal_to_american(decimal)


def test_format_american():
    assert format_american(150) == "+150"
    assert format_american(-110) == "-110"
    assert format_american(None) == "N/A"


def test_format_line():
    assert format_line(3.5) == "+3.5"
    assert format_line(-3.5) == "-3.5"
    assert format_line(0.0) == "0.0"
    assert format_line(None) == "N/A"
