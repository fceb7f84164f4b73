"""
Expense helpers for driver bookkeeping: category, business-use share and quarter.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from slipex.processors.tax.normalizer import round_amount
from slipex.models.tax_document import DocumentType, resolve_document_type

logger = logging.getLogger(__name__)

BUSINESS = 'business'
MIXED = 'mixed'
PERSONAL = 'personal'

EXPENSE_CATEGORIES = {
    DocumentType.GAS_RECEIPT: BUSINESS,
    DocumentType.MAINTENANCE_RECEIPT: BUSINESS,
    DocumentType.PARKING_RECEIPT: BUSINESS,
    DocumentType.MEAL_RECEIPT: BUSINESS,
    DocumentType.PHONE_BILL: MIXED,
    DocumentType.INSURANCE_DOC: MIXED,
    DocumentType.INSURANCE_RECEIPT: MIXED,
}

# Tried in order; MM/DD is preferred over DD/MM
_DATE_FORMATS = ('%m/%d/%Y', '%m/%d/%y', '%m-%d-%Y', '%m-%d-%y', '%Y-%m-%d', '%d/%m/%Y', '%d-%m-%Y')


def categorize_expense(document_type: Any) -> str:
    """business, mixed (phone, insurance) or personal"""
    return EXPENSE_CATEGORIES.get(resolve_document_type(document_type), PERSONAL)


def calculate_business_use_percentage(business_km: Any, total_km: Any) -> float:
    """
    Share of distance driven for business, 0-100 with two decimals.

    Non-positive or non-numeric inputs give 0. The share is capped at 100.
    """
    try:
        business = float(business_km)
        total = float(total_km)
    except (TypeError, ValueError):
        return 0.0

    if business <= 0 or total <= 0:
        return 0.0

    return min(100.0, round_amount(business / total * 100))


def get_quarter(date_string: Optional[str]) -> Optional[int]:
    """Calendar quarter (1-4) of a date string, or None when it cannot be parsed"""
    if not date_string:
        return None

    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(date_string.strip(), fmt)
        except ValueError:
            continue
        return (parsed.month - 1) // 3 + 1

    logger.debug(f"Could not parse date for quarter: {date_string!r}")
    return None
