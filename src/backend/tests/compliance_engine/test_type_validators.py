from datetime import date
from decimal import Decimal

import pytest

from common.compliance_engine.type_validators import (
    fits_decimal,
    is_boolean,
    is_number_14,
    is_number_14_1,
    is_number_14_2,
    is_number_14_4,
    is_past_date,
    is_valid_currency,
    is_valid_date,
    is_valid_email,
    is_valid_entity_type,
    is_valid_frn,
    is_valid_lei,
    is_valid_percentage,
    is_valid_sector_code,
    is_valid_text,
    is_yes_no,
    is_yes_no_na,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12345678901234.56", True),
        ("123456789012345.00", False),
        ("1.234", False),
        ("-1000.5", True),
        (Decimal("0.01"), True),
        (1000000, True),
        ("", False),
        ("abc", False),
        (None, False),
        (True, False),
        ("1e5", False),
    ],
)
def test_is_number_14_2(value, expected):
    assert is_number_14_2(value) is expected


def test_other_numeric_profiles():
    assert is_number_14_1("12345678901234.5")
    assert not is_number_14_1("1.25")
    assert is_number_14_4("12345678901234.1234")
    assert not is_number_14_4("1.12345")
    assert is_number_14("12345678901234")
    assert not is_number_14("1.5")
    assert not is_number_14("123456789012345")


def test_fits_decimal_counts_fraction_digits_from_representation():
    assert fits_decimal("10.10", 4, 2)
    assert not fits_decimal("100.10", 4, 2)


@pytest.mark.parametrize("value,expected", [("0", True), ("100", True), ("99.99", True), ("100.01", False), ("-1", False), ("5.555", False)])
def test_is_valid_percentage(value, expected):
    assert is_valid_percentage(value) is expected


def test_dates():
    assert is_valid_date("2024-02-29")
    assert not is_valid_date("2023-02-29")
    assert not is_valid_date("2024-13-01")
    assert not is_valid_date("31/12/2024")
    assert not is_valid_date(None)
    assert is_valid_date(date(2024, 1, 1))

    today = date(2025, 12, 31)
    assert is_past_date("2025-12-31", today=today)
    assert not is_past_date("2026-01-01", today=today)
    assert not is_past_date("not-a-date", today=today)


def test_text_bounds():
    assert is_valid_text(None)
    assert not is_valid_text(None, min_length=1)
    assert is_valid_text("x" * 255)
    assert not is_valid_text("x" * 256)
    assert not is_valid_text(42)


def test_email():
    assert is_valid_email("ops@bank.com.sg")
    assert not is_valid_email("ops@bank")
    assert not is_valid_email("a b@bank.com")
    assert not is_valid_email(("a" * 250) + "@x.com")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("5493001KJTIIGC8Y1R12", True),
        ("529900T8BM49AURSDO55", True),
        ("HWUPKR0MPOU8FGXBT394", True),
        ("5493001KJTIIGC8Y1R13", False),
        ("5493001KJTIIGC8Y1R1", False),
        ("5493001KJTIIGC8Y1R1!", False),
        (None, False),
    ],
)
def test_is_valid_lei(value, expected):
    assert is_valid_lei(value) is expected


def test_codes():
    assert is_valid_frn("AB12345678")
    assert not is_valid_frn("AB1234567")
    assert is_valid_currency("SGD")
    assert not is_valid_currency("sgd")
    assert not is_valid_currency("XYZ")
    assert is_valid_sector_code("41001")
    assert not is_valid_sector_code("4100")
    assert not is_valid_sector_code("4100A")
    assert is_valid_entity_type("Banks")
    assert not is_valid_entity_type("Bank")


def test_flags():
    assert is_yes_no("0") and is_yes_no(1)
    assert not is_yes_no("2")
    assert is_yes_no_na("2")
    assert not is_yes_no_na(True)
    assert is_boolean(True) and is_boolean(0)
    assert not is_boolean(2)
