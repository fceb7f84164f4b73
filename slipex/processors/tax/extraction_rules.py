"""
Field Extraction Rule Tables

Declarative field name -> alternative patterns tables, one per document
type. Tables are built once at import and never mutated; the traversal and
coercion logic lives in extractor.py.

Patterns run against whitespace-normalized text, so every label may be
followed by arbitrary spacing and optional punctuation.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Tuple

from slipex.models.tax_document import DocumentType

# Optional two-letter regional marker before the currency symbol (CA$12.00)
MONEY = r'(?:CA|US)?\$?\s*([\d,]+\.?\d*)'
# Receipt totals always carry cents
CENTS = r'(?:CA|US)?\$?\s*([0-9,]+\.[0-9]{2})'
SLIP_BOX = r'(?:Box|Case)\s+{box}[:\s]*([\d,]+\.?\d*)'
SLASH_DATE = r'(\d{1,2}/\d{1,2}/\d{2,4})'


@dataclass(frozen=True)
class FieldMatch:
    """Raw capture for one field, with the span it was captured from"""
    field: str
    raw: str
    span: Tuple[int, int]


@dataclass(frozen=True)
class ExtractionRule:
    """A field and the alternative patterns that can locate it"""
    field: str
    patterns: Tuple[Pattern[str], ...]

    def search(self, text: str) -> Optional[FieldMatch]:
        """
        Try each alternative in order; commit to the first one that matches
        and return its first non-empty captured group.
        """
        for pattern in self.patterns:
            match = pattern.search(text)
            if not match:
                continue
            for index in range(1, (match.lastindex or 0) + 1):
                group = match.group(index)
                if group and group.strip():
                    return FieldMatch(self.field, group, match.span(index))
            return None
        return None


def rule(field: str, *patterns: str, flags: int = re.IGNORECASE) -> ExtractionRule:
    """Compile a rule from one or more alternative pattern strings"""
    return ExtractionRule(field, tuple(re.compile(p, flags) for p in patterns))


def box(field: str, box_label: str) -> ExtractionRule:
    """Rule for a numbered slip box, accepting the English and French labels"""
    return rule(field, SLIP_BOX.format(box=box_label))


# T4 (Canadian employment income)
T4_RULES = (
    box('employment_income', '14'),
    box('income_tax', '22'),
    box('cpp', '16'),
    box('ei', '18'),
    box('qpp', '17'),
    box('ppip', '55'),
    box('union_dues', '44'),
    rule('employer_name', r'(?:Employer|Employeur)[:\s]*([A-Za-z0-9\s&.-]+?)(?:\n|Box|Case)'),
    rule('year', r'(?:Year|Année|Tax Year)[:\s]*(\d{4})'),
)

# T4A (pension, retirement, annuity and other income)
T4A_RULES = (
    box('pension', '16'),
    box('lump_sum', '18'),
    box('self_employment', '20'),
    box('income_tax', '22'),
    rule('year', r'(?:Year|Année|Tax Year)[:\s]*(\d{4})'),
)

# RL-1 (Quebec employment income)
RL1_RULES = (
    box('employment_income', 'A'),
    box('qpp', r'B\.A'),
    box('ei', 'C'),
    box('ppip', 'H'),
    box('income_tax', 'E'),
    box('union_dues', 'F'),
    rule('employer_name', r'(?:Employer|Employeur)[:\s]*([A-Za-z0-9\s&.-]+?)(?:\n|Box|Case)'),
    rule('year', r'(?:Year|Année)[:\s]*(\d{4})'),
)

# RL-2 (Quebec retirement and annuity benefits)
RL2_RULES = (
    box('qpp', 'A'),
    box('old_age_security', 'C'),
    box('income_tax', 'D'),
    rule('year', r'(?:Year|Année)[:\s]*(\d{4})'),
)

UBER_RULES = (
    # Section total after a gross fares heading, or a simple labelled amount
    rule(
        'gross_fares',
        r'(?:(?:GROSS\s+FARES\s+BREAKDOWN|Gross\s+Fares?|Total\s+Fares?|Revenue)[\s\S]{0,500}?Total[\s:]*'
        + MONEY
        + r'|(?:Gross\s+Fares?|Total\s+Fares?|Revenue)[\s:]*'
        + MONEY
        + r')',
    ),
    # Eats is reported as its own section and summed into gross_fares later
    rule('uber_eats_fares', r'UBER\s+EATS\s*-?\s*GROSS\s+FARES[\s\S]{0,300}?Total[\s:]*' + MONEY),
    rule('tips', r'Tips?[\s:]*' + MONEY),
    rule('tolls', r'Tolls?[\s:]*' + MONEY),
    rule(
        'distance',
        r'Online\s+Mileage[\s:]*(\d+(?:\.\d+)?)\s*(?:km|kilometers?|kilometres?)?',
        r'(?:Total\s+)?(?:Distance|Kilometers?|Kilometres?|Mileage)[\s:]*(\d+(?:\.\d+)?)\s*(?:km|kilometers?|kilometres?)?',
    ),
    rule('trips', r'(?:Total\s+)?(?:Trips?|Rides?)[\s:]*(\d+)'),
    rule(
        'service_fees',
        r'(?:(?:FEES\s+BREAKDOWN|Service\s+Fee|Uber\s+Fee)[\s\S]{0,300}?Total[\s:]*'
        + MONEY
        + r'|(?:Service\s+Fee|Uber\s+Fee)[\s:]*'
        + MONEY
        + r')',
    ),
    rule('net_earnings', r'(?:Net\s+Earnings?|Total\s+Payout)[\s:]*' + MONEY),
    rule(
        'period',
        r'(?:Tax\s+summary\s+for\s+the\s+period|Week|Period)[\s:]*'
        r'(\d{4}|[A-Za-z]+\s+\d+\s*-\s*[A-Za-z]+\s+\d+,?\s*\d{4})',
    ),
    rule('start_date', r'(?:From|Start)[\s:]*' + SLASH_DATE),
    rule('end_date', r'(?:To|End)[\s:]*' + SLASH_DATE),
    rule('gst_collected', r'GST\s+you\s+collected.*?' + MONEY),
    rule('qst_collected', r'QST\s+you\s+collected.*?' + MONEY),
)

LYFT_RULES = (
    rule('gross_fares', r'(?:Gross\s+Earnings?|Driver\s+Earnings?|Total\s+Earnings?)[:\s]*' + MONEY),
    rule('tips', r'Tips[:\s]*' + MONEY),
    rule('distance', r'(?:Total\s+)?(?:Miles?|Distance)[:\s]*([\d,]+\.?\d*)\s*(?:mi|miles?)?'),
    rule('rides', r'(?:Total\s+)?Rides?[:\s]*(\d+)'),
    rule('platform_fees', r'(?:Platform\s+Fee|Lyft\s+Fee)[:\s]*' + MONEY),
    rule('net_earnings', r'(?:Net\s+Earnings?|Total\s+Payout)[:\s]*' + MONEY),
    rule('period', r'(?:Week|Period)[:\s]*([A-Za-z]+\s+\d+\s*-\s*[A-Za-z]+\s+\d+,?\s*\d{4})'),
)

TAXI_RULES = (
    rule('gross_income', r'(?:Gross\s+Income|Total\s+Fares?|Revenue)[:\s]*' + MONEY),
    rule('tips', r'Tips[:\s]*' + MONEY),
    rule('dispatch_fees', r'(?:Dispatch\s+Fee|Commission)[:\s]*' + MONEY),
    rule('net_income', r'(?:Net\s+Income|Take\s+Home)[:\s]*' + MONEY),
    rule('period', r'(?:Period|Month)[:\s]*([A-Za-z]+\s+\d{4})'),
)

GAS_RECEIPT_RULES = (
    rule('vendor', r'(Esso|Petro-Canada|Shell|Ultramar|Irving|Canadian Tire|Costco)'),
    rule('total', r'\b(?:Total|Montant|Amount)[:\s]*' + CENTS),
    # A labelled volume wins over a bare "45.5 L" so a trailing amount is never read as litres
    rule(
        'liters',
        r'(?:Liters?|Litres?|Volume)[:\s]*([0-9]+\.[0-9]{1,3})',
        r'([0-9]+\.[0-9]{1,3})\s*(?:L|Litres?|Liters?)\b',
    ),
    rule('price_per_liter', r'(?:Price\s+per\s+L|PPL)[:\s]*' + MONEY),
    rule('date', r'(\d{2}[-/]\d{2}[-/]\d{2,4})'),
    rule('odometer', r'(?:Odomètre|Odometer|KM)[:\s]*([0-9,]+)'),
    rule('station', r'(Shell|Esso|Petro-Canada|Canadian Tire Gas|Ultramar|Costco|Irving)'),
)

MAINTENANCE_RECEIPT_RULES = (
    rule('vendor', r'(Canadian Tire|Midas|Mr\. Lube|Jiffy Lube|Garage|Concessionnaire|Dealer)'),
    rule('service_type', r'(Oil Change|Tire Rotation|Brake Service|Inspection|Alignment|Vidange|Freins)'),
    rule('parts', r'(?:Parts|Pièces)[:\s]*' + CENTS),
    rule('labor', r"(?:Labor|Labour|Main-d'œuvre)[:\s]*" + CENTS),
    # Word boundary so "Subtotal" is not read as the total
    rule('total', r'\b(?:Total|Grand Total|Montant Total)[:\s]*' + CENTS),
    rule('subtotal', r'(?:Subtotal|Sub-Total)[:\s]*' + MONEY),
    rule('tax', r'(?:Tax|GST|QST|HST)[:\s]*' + MONEY),
    rule('date', r'(?:Date)[:\s]*' + SLASH_DATE),
)

INSURANCE_RULES = (
    rule('provider', r'(Intact|Desjardins|Bélairdirect|TD Insurance|Aviva|La Capitale)'),
    rule('premium', r'(?:Prime|Premium|Monthly Payment)[:\s]*' + CENTS),
    rule(
        'period',
        r'(?:Coverage Period|Période)[:\s]*(\d{2}[-/]\d{2}[-/]\d{2,4})\s*(?:to|à)\s*(\d{2}[-/]\d{2}[-/]\d{2,4})',
    ),
    rule('vehicle_year', r'(\d{4})\s+(?:Honda|Toyota|Ford|Chevrolet|Nissan|Mazda|Hyundai|Kia)'),
    rule('vehicle_make', r'(Honda|Toyota|Ford|Chevrolet|Nissan|Mazda|Hyundai|Kia)'),
    rule('policy_number', r'(?:Policy\s+Number|Policy\s+#)[:\s]*([\w-]+)'),
    rule('effective_date', r'(?:Effective\s+Date|Start\s+Date)[:\s]*' + SLASH_DATE),
    rule('expiry_date', r'(?:Expiry\s+Date|End\s+Date)[:\s]*' + SLASH_DATE),
    rule('insurer', r"(?:Insurer|Company)[:\s]*([A-Za-z0-9\s&'-]+?)(?:\n|Policy)"),
)

PARKING_RULES = (
    rule('amount', r'\b(?:Amount|Total)[:\s]*' + MONEY),
    rule('date', r'(?:Date)[:\s]*' + SLASH_DATE),
    rule('location', r'(?:Location|Zone)[:\s]*([A-Za-z0-9\s,-]+?)(?:\n|Date|Amount)'),
    rule('duration', r'(?:Duration|Hours?)[:\s]*([\d.]+)\s*(?:hours?|hrs?|h)?'),
)

PHONE_BILL_RULES = (
    rule('total', r'\b(?:Total|Amount\s+Due|Balance\s+Due)[:\s]*' + MONEY),
    rule('plan_cost', r'(?:Plan|Monthly\s+Plan)[:\s]*' + MONEY),
    rule('data', r'(?:Data\s+Usage)[:\s]*([\d.]+)\s*(?:GB|MB)?'),
    rule('billing_period', r'(?:Billing\s+Period)[:\s]*([A-Za-z]+\s+\d+\s*-\s*[A-Za-z]+\s+\d+,?\s*\d{4})'),
    rule('account_number', r'(?:Account\s+Number|Account\s+#)[:\s]*([\w-]+)'),
)

MEAL_RECEIPT_RULES = (
    rule('total', r'\b(?:Total|Amount)[:\s]*' + MONEY),
    rule('subtotal', r'(?:Subtotal|Sub-Total)[:\s]*' + MONEY),
    rule('tip', r'(?:Tip|Gratuity)[:\s]*' + MONEY),
    rule('tax', r'(?:Tax|GST|QST|HST)[:\s]*' + MONEY),
    rule('date', r'(?:Date)[:\s]*' + SLASH_DATE),
    rule('restaurant', r"^([A-Za-z0-9\s&'-]+?)(?:\n|Date|Total)", flags=re.IGNORECASE | re.MULTILINE),
)

EXTRACTION_RULES: Mapping[DocumentType, Tuple[ExtractionRule, ...]] = MappingProxyType({
    DocumentType.T4: T4_RULES,
    DocumentType.T4A: T4A_RULES,
    DocumentType.RL1: RL1_RULES,
    DocumentType.RL2: RL2_RULES,
    DocumentType.UBER_SUMMARY: UBER_RULES,
    DocumentType.LYFT_SUMMARY: LYFT_RULES,
    DocumentType.TAXI_STATEMENT: TAXI_RULES,
    DocumentType.GAS_RECEIPT: GAS_RECEIPT_RULES,
    DocumentType.MAINTENANCE_RECEIPT: MAINTENANCE_RECEIPT_RULES,
    DocumentType.INSURANCE_DOC: INSURANCE_RULES,
    DocumentType.INSURANCE_RECEIPT: INSURANCE_RULES,
    DocumentType.PARKING_RECEIPT: PARKING_RULES,
    DocumentType.PHONE_BILL: PHONE_BILL_RULES,
    DocumentType.MEAL_RECEIPT: MEAL_RECEIPT_RULES,
})

# Post-extraction summing: primary field <- primary + secondary
AGGREGATIONS: Mapping[DocumentType, Tuple[Tuple[str, str], ...]] = MappingProxyType({
    DocumentType.UBER_SUMMARY: (('gross_fares', 'uber_eats_fares'),),
})

_missing = set(DocumentType) - {DocumentType.UNKNOWN} - set(EXTRACTION_RULES)
if _missing:
    raise RuntimeError(f"No extraction rules for: {sorted(t.value for t in _missing)}")
