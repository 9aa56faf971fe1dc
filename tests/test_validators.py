from decimal import Decimal

import pytest

from gov_payroll.common.datetime_utils import month_bounds, month_name, require_iso_date
from gov_payroll.common.money import to_money
from gov_payroll.common.validators import (
    optional_reference,
    parse_bool,
    parse_decimal,
    require_money_range,
    require_month,
    require_year,
)
from gov_payroll.core.exceptions import ValidationError


@pytest.mark.parametrize("value, expected", [(None, None), ("", None), (0, None), ("0", None), ("7", 7)])
def test_optional_reference_treats_zero_as_absent(value, expected):
    assert optional_reference(value, "Position ID") == expected


def test_parse_decimal_keeps_exact_cents():
    assert parse_decimal(0.1, "Amount") + parse_decimal("0.2", "Amount") == Decimal("0.3")
    assert parse_decimal(None, "Amount") == Decimal("0")


@pytest.mark.parametrize("value", ["abc", True, "NaN", "Infinity"])
def test_parse_decimal_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_decimal(value, "Amount")


def test_month_and_year_bounds():
    assert require_month("12") == 12
    with pytest.raises(ValidationError, match="Month must be between 1 and 12"):
        require_month(0)
    assert require_year(2100, min_year=2000, max_year=2100) == 2100
    with pytest.raises(ValidationError, match="Invalid year"):
        require_year("1999", min_year=2000, max_year=2100)


def test_iso_date_errors():
    with pytest.raises(ValidationError, match="Date is required"):
        require_iso_date("", "Date")
    with pytest.raises(ValidationError, match="Use YYYY-MM-DD"):
        require_iso_date("2024/01/01", "Date")


def test_month_helpers():
    assert month_bounds(2024, 2)[1].day == 29
    assert month_name(6) == "Juni"


def test_to_money_rounds_half_up():
    assert to_money("1.005") == Decimal("1.01")
    assert to_money(None) == Decimal("0.00")


def test_money_range_matches_decimal_15_2():
    assert require_money_range(Decimal("9999999999999.99"), "Amount") == Decimal("9999999999999.99")
    assert require_money_range(Decimal("-5"), "Amount") == Decimal("-5")
    with pytest.raises(ValidationError, match="Amount must not exceed"):
        require_money_range(Decimal("10000000000000"), "Amount")
    with pytest.raises(ValidationError):
        require_money_range(Decimal("-10000000000000"), "Amount")


@pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
def test_parse_bool_accepts_only_json_booleans(value):
    with pytest.raises(ValidationError, match="is_active must be true or false"):
        parse_bool(value, "is_active")


def test_parse_bool_passes_booleans_through():
    assert parse_bool(False, "is_active") is False
    assert parse_bool(True, "is_active") is True
