"""Scalar predicates for regulatory return field types.

Every predicate is total: absent or malformed input yields ``False``.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any, Optional, Pattern

from .snapshot import parse_iso_date

VALID_CURRENCIES = frozenset({"SGD", "USD", "EUR", "JPY", "GBP", "AUD", "CNY", "HKD"})

VALID_ENTITY_TYPES = frozenset(
    {
        "Non-financial Corporates",
        "Natural persons",
        "Non-Bank Financial Institutions (NBFI)",
        "Banks",
        "Public Sector Entities",
        "Governments",
    }
)

_NUMBER = re.compile(r"^-?[0-9]*(\.[0-9]*)?$")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LEI = re.compile(r"^[A-Z0-9]{20}$")
_FRN = re.compile(r"^[A-Z]{2}[0-9]{8}$")
_SECTOR_CODE = re.compile(r"^[0-9]{5}$")

EMAIL_MAX_LENGTH = 255
TEXT_MAX_LENGTH = 255


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(str(value))
    elif isinstance(value, str):
        s = value.strip()
        if not s or not _NUMBER.match(s) or not any(ch.isdigit() for ch in s):
            return None
        try:
            d = Decimal(s)
        except InvalidOperation:
            return None
    else:
        return None
    if not d.is_finite():
        return None
    return d


def fits_decimal(value: Any, total_digits: int, fraction_digits: int) -> bool:
    d = to_decimal(value)
    if d is None:
        return False
    exponent = d.as_tuple().exponent
    fraction = max(0, -int(exponent))
    integer_part = abs(d).to_integral_value(rounding=ROUND_DOWN)
    integer = len(str(int(integer_part)))
    if fraction > fraction_digits:
        return False
    if integer > total_digits - fraction_digits:
        return False
    return integer + fraction <= total_digits


def is_number_14_2(value: Any) -> bool:
    return fits_decimal(value, 16, 2)


def is_number_14_1(value: Any) -> bool:
    return fits_decimal(value, 15, 1)


def is_number_14_4(value: Any) -> bool:
    return fits_decimal(value, 18, 4)


def is_number_14(value: Any) -> bool:
    return fits_decimal(value, 14, 0)


def is_valid_percentage(value: Any) -> bool:
    if not fits_decimal(value, 5, 2):
        return False
    d = to_decimal(value)
    return d is not None and Decimal("0") <= d <= Decimal("100")


def is_valid_date(value: Any) -> bool:
    return parse_iso_date(value) is not None


def is_past_date(value: Any, today: Optional[date] = None) -> bool:
    parsed = parse_iso_date(value)
    if parsed is None:
        return False
    return parsed <= (today or date.today())


def is_valid_text(
    value: Any,
    max_length: int = TEXT_MAX_LENGTH,
    min_length: int = 0,
    pattern: Optional[Pattern[str]] = None,
) -> bool:
    if value is None:
        return min_length == 0
    if not isinstance(value, str):
        return False
    if len(value) < min_length or len(value) > max_length:
        return False
    if pattern is not None and not pattern.search(value):
        return False
    return True


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    s = value.strip()
    return len(s) <= EMAIL_MAX_LENGTH and bool(_EMAIL.match(s))


def is_valid_lei(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    s = value.strip().upper()
    if not _LEI.match(s):
        return False
    # ISO 17442 / ISO 7064 MOD 97-10: letters map to 10..35, remainder must be 1.
    numeric = "".join(str(int(ch, 36)) for ch in s)
    return int(numeric) % 97 == 1


def is_valid_frn(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return bool(_FRN.match(value.strip().upper()))


def is_valid_currency(value: Any) -> bool:
    return isinstance(value, str) and value in VALID_CURRENCIES


def is_valid_sector_code(value: Any) -> bool:
    return isinstance(value, str) and bool(_SECTOR_CODE.match(value))


def is_valid_entity_type(value: Any) -> bool:
    return isinstance(value, str) and value in VALID_ENTITY_TYPES


def _code(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        return str(value).strip()
    return None


def is_yes_no(value: Any) -> bool:
    return _code(value) in {"0", "1"}


def is_yes_no_na(value: Any) -> bool:
    return _code(value) in {"0", "1", "2"}


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return value in (0, 1)
    if isinstance(value, str):
        return value.strip().lower() in {"true", "false", "1", "0"}
    return False
