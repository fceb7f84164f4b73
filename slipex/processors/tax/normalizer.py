"""
Text Normalization and Value Coercion

Shared helpers used by every pipeline stage:
- Whitespace normalization (identical for classifier and extractor)
- Amount parsing and rounding
- Coercion of captured strings into tagged values
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

from slipex.models.tax_document import ExtractedValue, ValueKind

_WHITESPACE = re.compile(r'\s+')

DATE_SHAPES = (
    re.compile(r'^\d{1,2}/\d{1,2}/\d{2,4}$'),   # MM/DD/YYYY or DD/MM/YY
    re.compile(r'^\d{1,2}-\d{1,2}-\d{2,4}$'),   # MM-DD-YYYY
    re.compile(r'^\d{4}-\d{2}-\d{2}$'),         # ISO
)
YEAR_SHAPE = re.compile(r'^\d{4}$')
NUMBER_SHAPE = re.compile(r'^[-+]?(?:\d+\.?\d*|\.\d+)$')

YEAR_MIN = 1900
YEAR_MAX = 2100

DECIMAL_PLACES = 2


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim"""
    return _WHITESPACE.sub(' ', text).strip()


def round_amount(value: Union[Decimal, float, int, str], places: int = DECIMAL_PLACES) -> float:
    """Round half away from zero to a fixed number of places"""
    decimal_val = value if isinstance(value, Decimal) else Decimal(str(value))
    quantize_str = '0.' + '0' * places if places > 0 else '0'
    return float(decimal_val.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP))


def parse_amount(value: str) -> Optional[float]:
    """Parse a number with optional thousands separators, or None"""
    cleaned = value.strip().replace(',', '')
    if not NUMBER_SHAPE.match(cleaned):
        return None
    try:
        return round_amount(Decimal(cleaned))
    except InvalidOperation:
        return None


def is_date_like(value: str) -> bool:
    return any(shape.match(value) for shape in DATE_SHAPES)


def is_year_like(value: str) -> bool:
    return bool(YEAR_SHAPE.match(value)) and YEAR_MIN <= int(value) <= YEAR_MAX


def coerce_value(raw: Optional[str]) -> Optional[ExtractedValue]:
    """
    Coerce a captured string into a tagged value.

    Order matters: date shape, then year shape, then number, else text.
    A plausible year is never turned into an amount.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    if is_date_like(value):
        return ExtractedValue(kind=ValueKind.DATE, value=value)

    if is_year_like(value):
        return ExtractedValue(kind=ValueKind.YEAR, value=value)

    amount = parse_amount(value)
    if amount is not None:
        return ExtractedValue(kind=ValueKind.NUMBER, value=amount)

    return ExtractedValue(kind=ValueKind.TEXT, value=value)


def as_number(value: Any) -> Optional[float]:
    """Numeric view of a raw field value; strings and bools are not numbers"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return None
