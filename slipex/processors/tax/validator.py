"""
Field Validator

Validates extracted fields against plausibility and consistency rules.
Flags issues for human review rather than silently failing: errors make a
document invalid, warnings only lower its confidence.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from slipex.processors.base import BaseProcessor
from slipex.processors.tax.normalizer import as_number
from slipex.models.tax_document import (
    DocumentType,
    FieldMap,
    FieldValues,
    ValidationResult,
    ValidationSettings,
    EMPLOYMENT_SLIPS,
    OTHER_INCOME_SLIPS,
    PLATFORM_SUMMARIES,
)

logger = logging.getLogger(__name__)

_YEAR_IN_TEXT = re.compile(r'\d{4}')
_SLASH_DATE = re.compile(r'^(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})$')
_ISO_DATE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')
_ANNUAL_MARKERS = ('annual', 'year', 'annuel', 'année')

# Gross/net field names per platform summary
PLATFORM_FIELDS = MappingProxyType({
    DocumentType.UBER_SUMMARY: ('gross_fares', 'net_earnings'),
    DocumentType.LYFT_SUMMARY: ('gross_fares', 'net_earnings'),
    DocumentType.TAXI_STATEMENT: ('gross_income', 'net_income'),
})

# Monetary and distance fields checked by the all-zero rule
AMOUNT_FIELDS = MappingProxyType({
    DocumentType.UBER_SUMMARY: (
        'gross_fares', 'uber_eats_fares', 'tips', 'tolls', 'distance',
        'service_fees', 'net_earnings', 'gst_collected', 'qst_collected',
    ),
    DocumentType.LYFT_SUMMARY: ('gross_fares', 'tips', 'distance', 'platform_fees', 'net_earnings'),
    DocumentType.TAXI_STATEMENT: ('gross_income', 'tips', 'dispatch_fees', 'net_income'),
})

# Income boxes summed into the primary income of other-income slips
OTHER_INCOME_BOXES = MappingProxyType({
    DocumentType.T4A: ('pension', 'lump_sum', 'self_employment'),
    DocumentType.RL2: ('qpp', 'old_age_security'),
})

# Primary amount field per receipt kind
RECEIPT_AMOUNT_FIELDS = MappingProxyType({
    DocumentType.GAS_RECEIPT: ('total',),
    DocumentType.MAINTENANCE_RECEIPT: ('total',),
    DocumentType.INSURANCE_DOC: ('premium', 'total'),
    DocumentType.INSURANCE_RECEIPT: ('premium', 'total'),
    DocumentType.PARKING_RECEIPT: ('amount', 'total'),
    DocumentType.PHONE_BILL: ('total',),
    DocumentType.MEAL_RECEIPT: ('total', 'amount'),
})

VENDOR_FIELDS = ('vendor', 'restaurant', 'station', 'insurer', 'provider')


@dataclass
class ValidationReport:
    """Accumulates findings for one document"""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    confidence: int = 100

    def error(self, message: str, penalty: int) -> None:
        self.errors.append(message)
        self.confidence -= penalty

    def warn(self, message: str, penalty: int) -> None:
        self.warnings.append(message)
        self.confidence -= penalty

    def result(self) -> ValidationResult:
        return ValidationResult(
            is_valid=not self.errors,
            errors=list(self.errors),
            warnings=list(self.warnings),
            confidence_score=max(0, min(100, self.confidence)),
        )


def _raw_values(fields: FieldValues) -> Dict[str, Any]:
    if isinstance(fields, FieldMap):
        return fields.to_dict()
    return dict(fields)


def _number(data: Mapping[str, Any], name: str) -> Optional[float]:
    return as_number(data.get(name))


def _first_number(data: Mapping[str, Any], names: Sequence[str]) -> Optional[float]:
    for name in names:
        value = _number(data, name)
        if value is not None:
            return value
    return None


def _sum_present(data: Mapping[str, Any], names: Iterable[str]) -> float:
    return sum(_number(data, name) or 0.0 for name in names)


def is_valid_amount(amount: Any, minimum: float = 0, maximum: float = 1000000) -> bool:
    """Whether a value is a number within [minimum, maximum]"""
    value = as_number(amount)
    return value is not None and minimum <= value <= maximum


def is_valid_date(value: Any, current_year: int, year_range: int = 5) -> bool:
    """
    Whether a date falls within [current_year - year_range, current_year + 1].

    Accepts date objects, MM/DD/YYYY style dates (two-digit years are taken as 20xx) and ISO dates.
    """
    if isinstance(value, date):
        return current_year - year_range <= value.year <= current_year + 1
    if not isinstance(value, str) or not value:
        return False

    match = _SLASH_DATE.match(value)
    if match:
        year = int(match.group(3))
        if year < 100:
            year += 2000
    else:
        match = _ISO_DATE.match(value)
        if not match:
            return False
        year = int(match.group(1))

    return current_year - year_range <= year <= current_year + 1


def is_annual_period(period: Any) -> bool:
    """A period is annual when it is a bare year or mentions a year/annual span"""
    if period is None:
        return False
    text = str(period).strip().lower()
    if re.fullmatch(r'\d{4}', text):
        return True
    return any(marker in text for marker in _ANNUAL_MARKERS)


def _check_year_window(report: ValidationReport, raw_year: Any, settings: ValidationSettings, label: str) -> None:
    if raw_year is None:
        return
    match = _YEAR_IN_TEXT.search(str(raw_year))
    if not match:
        return
    year = int(match.group(0))
    low, high = settings.year_window
    if year < low or year > high:
        report.warn(
            f"{label} {year} seems outside reasonable range ({low}-{high})",
            settings.penalties.year_out_of_range,
        )


def validate_employment_slip(data: Mapping[str, Any], doc_type: DocumentType, settings: ValidationSettings) -> ValidationResult:
    """T4 and RL-1 rules"""
    report = ValidationReport()
    penalties = settings.penalties
    box_label = 'Box 14' if doc_type == DocumentType.T4 else 'Box A'

    income = _number(data, 'employment_income')
    if income is None or income <= 0:
        report.error(
            f"Employment income ({box_label}) is required and must be positive",
            penalties.missing_required,
        )
        income = 0.0
    elif not is_valid_amount(income, 0, settings.employment_income_ceiling):
        report.warn("Employment income seems unusually high", penalties.unusual_value)

    if doc_type == DocumentType.T4:
        deduction_fields = ('cpp', 'qpp', 'ei', 'income_tax')
    else:
        deduction_fields = ('qpp', 'ei', 'ppip', 'income_tax')
    deductions = _sum_present(data, deduction_fields)
    if income > 0 and deductions > income * settings.deductions_ratio:
        report.warn(
            f"Total deductions exceed {settings.deductions_ratio:.0%} of employment income",
            penalties.deductions_ratio,
        )

    limits = (
        ('cpp', settings.cpp_qpp_max, 'CPP contribution'),
        ('qpp', settings.cpp_qpp_max, 'QPP contribution'),
        ('ei', settings.ei_max, 'EI premium'),
        ('ppip', settings.ppip_max, 'PPIP premium'),
    )
    for name, maximum, label in limits:
        value = _number(data, name)
        if value is not None and value > maximum:
            report.warn(f"{label} seems high", penalties.minor)

    _check_year_window(report, data.get('year'), settings, 'Tax year')

    return report.result()


def validate_other_income_slip(data: Mapping[str, Any], doc_type: DocumentType, settings: ValidationSettings) -> ValidationResult:
    """T4A and RL-2 rules: income is spread over several boxes"""
    report = ValidationReport()
    penalties = settings.penalties
    boxes = OTHER_INCOME_BOXES[doc_type]

    income = _sum_present(data, boxes)
    if income <= 0:
        report.error(
            f"At least one income amount ({', '.join(boxes)}) is required and must be positive",
            penalties.missing_required,
        )
    else:
        if not is_valid_amount(income, 0, settings.employment_income_ceiling):
            report.warn("Reported income seems unusually high", penalties.unusual_value)
        tax = _number(data, 'income_tax') or 0.0
        if tax > income * settings.deductions_ratio:
            report.warn(
                f"Income tax deducted exceeds {settings.deductions_ratio:.0%} of reported income",
                penalties.deductions_ratio,
            )

    _check_year_window(report, data.get('year'), settings, 'Tax year')

    return report.result()


def validate_platform_summary(data: Mapping[str, Any], doc_type: DocumentType, settings: ValidationSettings) -> ValidationResult:
    """Uber, Lyft and taxi summary rules"""
    report = ValidationReport()
    penalties = settings.penalties
    gross_field, net_field = PLATFORM_FIELDS[doc_type]

    gross = _number(data, gross_field)
    net = _number(data, net_field)
    period = data.get('period')
    annual = is_annual_period(period)
    has_period = period is not None or data.get('start_date') is not None

    if annual:
        income_ceiling = settings.annual_income_ceiling
        distance_ceiling = settings.annual_distance_ceiling
        span = 'an annual'
    else:
        income_ceiling = settings.short_period_income_ceiling
        distance_ceiling = settings.short_period_distance_ceiling
        span = 'a weekly/monthly'

    numeric = [_number(data, name) for name in AMOUNT_FIELDS[doc_type]]
    numeric = [value for value in numeric if value is not None]

    if gross is None:
        report.error(
            f"Gross earnings ({gross_field}) are required",
            penalties.missing_required,
        )
    elif gross == 0 and all(value == 0 for value in numeric):
        if has_period:
            report.warn(
                "All amounts are zero - this is likely an inactive reporting period",
                penalties.all_zero,
            )
        else:
            report.warn(
                "All amounts are zero and no period was found - extraction may have failed",
                penalties.all_zero,
            )
    elif gross == 0:
        report.warn(
            "Gross earnings are zero while other amounts are not",
            penalties.unusual_value,
        )
    elif not is_valid_amount(gross, 0, income_ceiling):
        report.warn(f"Earnings seem unusually high for {span} period", penalties.unusual_value)

    if net is not None and gross is not None and gross > 0 and net > gross:
        report.error(
            f"Net earnings ({net:.2f}) cannot exceed gross earnings ({gross:.2f})",
            penalties.impossible_value,
        )

    distance = _number(data, 'distance')
    if distance is not None and (distance < 0 or distance > distance_ceiling):
        report.warn(f"Distance seems unreasonable for {span} period", penalties.unusual_value)

    if not has_period:
        report.warn("No time period information found", penalties.missing_period)

    _check_year_window(report, period, settings, 'Year')

    return report.result()


def validate_expense_receipt(data: Mapping[str, Any], doc_type: DocumentType, settings: ValidationSettings) -> ValidationResult:
    """Receipt and bill rules"""
    report = ValidationReport()
    penalties = settings.penalties

    amount = _first_number(data, RECEIPT_AMOUNT_FIELDS[doc_type])
    if amount is None or amount <= 0:
        report.error("Receipt amount is required and must be positive", penalties.missing_required)
    else:
        window = settings.receipt_range(doc_type)
        if window and not is_valid_amount(amount, window.minimum, window.maximum):
            report.warn(
                f"{window.label} seems unusual (expected ${window.minimum:,.0f}-${window.maximum:,.0f})",
                penalties.unusual_value,
            )

        subtotal = _number(data, 'subtotal')
        total = _number(data, 'total')
        if subtotal is not None and total is not None and total > 0 and subtotal > total:
            report.error(
                f"Subtotal ({subtotal:.2f}) cannot exceed total ({total:.2f})",
                penalties.impossible_value,
            )

    if doc_type == DocumentType.GAS_RECEIPT:
        _check_fuel(report, data, amount, settings)

    receipt_date = data.get('date')
    reference_year = settings.reference_year or date.today().year
    if receipt_date is None:
        report.warn("No date found on receipt", penalties.missing_date)
    elif not is_valid_date(receipt_date, reference_year, settings.receipt_years_back):
        report.warn("Receipt date seems invalid or outside the current tax years", penalties.invalid_date)

    if not any(data.get(name) for name in VENDOR_FIELDS):
        report.warn("No vendor information found", penalties.missing_vendor)

    return report.result()


def _check_fuel(report: ValidationReport, data: Mapping[str, Any], amount: Optional[float], settings: ValidationSettings) -> None:
    liters = _number(data, 'liters')
    low, high = settings.fuel_litres_range
    if liters is not None and (liters < low or liters > high):
        report.warn("Fuel volume seems unusual", settings.penalties.minor)

    price = _number(data, 'price_per_liter')
    if liters and price and amount:
        expected = liters * price
        if abs(expected - amount) > amount * settings.fuel_price_tolerance:
            report.warn(
                f"Litres x price per litre ({expected:.2f}) does not match total ({amount:.2f})",
                settings.penalties.minor,
            )


Rule = Callable[[Mapping[str, Any], DocumentType, ValidationSettings], ValidationResult]

VALIDATORS: Mapping[DocumentType, Rule] = MappingProxyType({
    DocumentType.T4: validate_employment_slip,
    DocumentType.RL1: validate_employment_slip,
    DocumentType.T4A: validate_other_income_slip,
    DocumentType.RL2: validate_other_income_slip,
    **{doc_type: validate_platform_summary for doc_type in PLATFORM_FIELDS},
    **{doc_type: validate_expense_receipt for doc_type in RECEIPT_AMOUNT_FIELDS},
})

_missing = set(DocumentType) - {DocumentType.UNKNOWN} - set(VALIDATORS)
if _missing:
    raise RuntimeError(f"No validation rules for: {sorted(t.value for t in _missing)}")


class DocumentValidator(BaseProcessor):
    """
    Validates extracted fields for a document type.

    Features:
    - Per-family rule functions sharing one accumulation shape
    - Periodicity-aware ceilings for driver summaries
    - Configurable penalties and thresholds (`validation` section)
    """

    config_section = 'validation'

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.settings = ValidationSettings(**self.section_settings())

    def process(self, fields: FieldValues, document_type: Any) -> ValidationResult:
        return self.validate(fields, document_type)

    def validate(self, fields: FieldValues, document_type: Any) -> ValidationResult:
        """
        Validate extracted fields.

        Args:
            fields: FieldMap or plain mapping of raw values
            document_type: DocumentType member (or its value)

        Returns:
            ValidationResult
        """
        doc_type = self.resolve_type(document_type)
        rule = VALIDATORS.get(doc_type)
        if rule is None:
            return ValidationResult(
                is_valid=False,
                errors=['Unknown document type'],
                warnings=[],
                confidence_score=0,
            )

        result = rule(_raw_values(fields), doc_type, self.settings)
        logger.debug(
            f"Validated {doc_type.value}: valid={result.is_valid} "
            f"errors={len(result.errors)} warnings={len(result.warnings)}"
        )
        return result


def validate_fields(fields: FieldValues, document_type: Any, config: Dict[str, Any] = None) -> ValidationResult:
    """
    Standalone function to validate extracted fields.

    Args:
        fields: FieldMap or plain mapping of raw values
        document_type: DocumentType member (or its value)
        config: Optional validation settings overrides

    Returns:
        ValidationResult
    """
    validator = DocumentValidator(config=config)
    return validator.validate(fields, document_type)


def is_duplicate(new_fields: FieldValues, existing_entries: Iterable[FieldValues], document_type: Any) -> bool:
    """
    Whether a document duplicates one the caller has already recorded.

    Employment slips match on income, year and employer, other-income slips
    on year and every income box. Driver summaries match on period or
    on start/end dates with the same gross; receipts on date, amount and vendor.
    """
    doc_type = BaseProcessor.resolve_type(document_type)
    new = _raw_values(new_fields)

    for existing in existing_entries or ():
        entry = _raw_values(existing)

        if doc_type in EMPLOYMENT_SLIPS:
            if (
                entry.get('employment_income') == new.get('employment_income')
                and entry.get('year') == new.get('year')
                and entry.get('employer_name') == new.get('employer_name')
            ):
                return True

        elif doc_type in OTHER_INCOME_SLIPS:
            if entry.get('year') == new.get('year') and all(
                entry.get(box) == new.get(box) for box in OTHER_INCOME_BOXES[doc_type]
            ):
                return True

        elif doc_type in PLATFORM_SUMMARIES:
            gross_field = PLATFORM_FIELDS[doc_type][0]
            same_period = new.get('period') is not None and entry.get('period') == new.get('period')
            same_span = (
                new.get('start_date') is not None
                and entry.get('start_date') == new.get('start_date')
                and entry.get('end_date') == new.get('end_date')
                and entry.get(gross_field) == new.get(gross_field)
            )
            if same_period or same_span:
                return True

        else:
            same_amount = (
                (new.get('total') is not None and entry.get('total') == new.get('total'))
                or (new.get('amount') is not None and entry.get('amount') == new.get('amount'))
            )
            same_vendor = (
                entry.get('vendor') == new.get('vendor')
                or (new.get('station') is not None and entry.get('station') == new.get('station'))
            )
            if entry.get('date') == new.get('date') and same_amount and same_vendor:
                return True

    return False
