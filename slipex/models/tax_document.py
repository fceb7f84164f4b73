"""
Tax Document Data Models with Pydantic Validation

Typed values produced by the classification, extraction and validation
stages. Every result is an immutable value object created fresh per call.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field, ConfigDict, model_validator


class DocumentType(str, Enum):
    """Supported document kinds"""
    T4 = "T4"
    T4A = "T4A"
    RL1 = "RL-1"
    RL2 = "RL-2"
    UBER_SUMMARY = "UBER_SUMMARY"
    LYFT_SUMMARY = "LYFT_SUMMARY"
    TAXI_STATEMENT = "TAXI_STATEMENT"
    GAS_RECEIPT = "GAS_RECEIPT"
    MAINTENANCE_RECEIPT = "MAINTENANCE_RECEIPT"
    INSURANCE_DOC = "INSURANCE_DOC"
    INSURANCE_RECEIPT = "INSURANCE_RECEIPT"
    PARKING_RECEIPT = "PARKING_RECEIPT"
    PHONE_BILL = "PHONE_BILL"
    MEAL_RECEIPT = "MEAL_RECEIPT"
    UNKNOWN = "UNKNOWN"

    @property
    def hint_key(self) -> str:
        """Type name as matched against filename hints"""
        return self.name.lower().replace('_', '').replace('-', '')


EMPLOYMENT_SLIPS = frozenset({DocumentType.T4, DocumentType.RL1})
OTHER_INCOME_SLIPS = frozenset({DocumentType.T4A, DocumentType.RL2})
PLATFORM_SUMMARIES = frozenset({
    DocumentType.UBER_SUMMARY,
    DocumentType.LYFT_SUMMARY,
    DocumentType.TAXI_STATEMENT,
})
EXPENSE_RECEIPTS = frozenset({
    DocumentType.GAS_RECEIPT,
    DocumentType.MAINTENANCE_RECEIPT,
    DocumentType.INSURANCE_DOC,
    DocumentType.INSURANCE_RECEIPT,
    DocumentType.PARKING_RECEIPT,
    DocumentType.PHONE_BILL,
    DocumentType.MEAL_RECEIPT,
})


class UnsupportedDocumentTypeError(ValueError):
    """Raised when a caller passes something that is not a DocumentType"""


def resolve_document_type(value: Any) -> DocumentType:
    """
    Resolve a DocumentType member from a member or its string value/name.

    Raises:
        UnsupportedDocumentTypeError: If the value is not in the enumeration
    """
    if isinstance(value, DocumentType):
        return value
    if isinstance(value, str):
        try:
            return DocumentType(value)
        except ValueError:
            pass
        try:
            return DocumentType[value.upper().replace('-', '')]
        except KeyError:
            pass
    raise UnsupportedDocumentTypeError(f"Unsupported document type: {value!r}")


class ValueKind(str, Enum):
    """Kinds of extracted values"""
    NUMBER = "NUMBER"
    DATE = "DATE"
    YEAR = "YEAR"
    TEXT = "TEXT"


class ExtractedValue(BaseModel):
    """A single extracted field value tagged with its kind"""
    model_config = ConfigDict(frozen=True)

    kind: ValueKind
    value: Union[float, str]

    @model_validator(mode='after')
    def check_kind(self) -> 'ExtractedValue':
        """Numbers are floats, everything else stays a string"""
        if self.kind == ValueKind.NUMBER and not isinstance(self.value, float):
            raise ValueError("NUMBER values must be floats")
        if self.kind != ValueKind.NUMBER and not isinstance(self.value, str):
            raise ValueError(f"{self.kind.value} values must be strings")
        return self

    @property
    def is_number(self) -> bool:
        return self.kind == ValueKind.NUMBER


class FieldMap(BaseModel):
    """
    Ordered field name -> value mapping extracted from one document.

    Fields without a match are absent. Item access returns the raw value;
    use value() for the tagged ExtractedValue.
    """
    model_config = ConfigDict(frozen=True)

    document_type: DocumentType
    entries: Dict[str, ExtractedValue] = Field(default_factory=dict)

    def __getitem__(self, name: str) -> Union[float, str]:
        return self.entries[name].value

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str, default: Any = None) -> Any:
        entry = self.entries.get(name)
        return entry.value if entry is not None else default

    def value(self, name: str) -> Optional[ExtractedValue]:
        return self.entries.get(name)

    def names(self) -> List[str]:
        return list(self.entries)

    def to_dict(self) -> Dict[str, Union[float, str]]:
        """Plain ordered mapping of raw values"""
        return {name: entry.value for name, entry in self.entries.items()}


class ClassificationResult(BaseModel):
    """Result of classifying one text blob"""
    model_config = ConfigDict(frozen=True)

    document_type: DocumentType
    confidence: int = Field(..., ge=0, le=100)
    method: Literal['scored', 'fallback', 'none'] = 'none'
    scores: Dict[str, int] = Field(default_factory=dict)


class ValidationResult(BaseModel):
    """Plausibility verdict for one field map"""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    confidence_score: int = Field(..., ge=0, le=100)


class DocumentProcessingResult(BaseModel):
    """Outcome of running one document through the full pipeline"""
    model_config = ConfigDict(frozen=True)

    success: bool
    document_type: DocumentType = DocumentType.UNKNOWN
    classification: Optional[ClassificationResult] = None
    fields: Optional[FieldMap] = None
    validation: Optional[ValidationResult] = None

    filename: Optional[str] = None
    raw_text: Optional[str] = None

    error: Optional[str] = None
    error_stage: Optional[str] = None

    stage_times: Dict[str, int] = Field(default_factory=dict)
    processing_time_ms: int = 0

    def summary(self) -> Dict[str, Any]:
        """Compact, serializable view used by the CLI"""
        return {
            'filename': self.filename,
            'success': self.success,
            'document_type': self.document_type.value,
            'classification_confidence': self.classification.confidence if self.classification else 0,
            'fields': self.fields.to_dict() if self.fields else {},
            'is_valid': self.validation.is_valid if self.validation else False,
            'errors': list(self.validation.errors) if self.validation else [],
            'warnings': list(self.validation.warnings) if self.validation else [],
            'validation_confidence': self.validation.confidence_score if self.validation else 0,
            'error': self.error,
        }


class ClassifierSettings(BaseModel):
    """Tunable classifier constants"""
    model_config = ConfigDict(frozen=True)

    # Below this best score the single-pattern fallback table is used
    min_score: int = Field(2, ge=0)
    # Assumed realistic maximum raw score when converting to a percentage
    realistic_max_score: int = Field(10, gt=0)
    fallback_confidence: int = Field(50, ge=0, le=100)


class ReceiptRange(BaseModel):
    """Plausible amount window for one receipt kind"""
    model_config = ConfigDict(frozen=True)

    minimum: float = Field(..., ge=0)
    maximum: float = Field(..., ge=0)
    label: str


class ValidationPenalties(BaseModel):
    """Confidence penalties, ordered by severity"""
    model_config = ConfigDict(frozen=True)

    missing_required: int = 50
    impossible_value: int = 30
    all_zero: int = 30
    missing_period: int = 20
    missing_date: int = 20
    deductions_ratio: int = 15
    year_out_of_range: int = 15
    invalid_date: int = 15
    unusual_value: int = 10
    missing_vendor: int = 10
    minor: int = 5


def _default_receipt_ranges() -> Dict[str, ReceiptRange]:
    return {
        'GAS_RECEIPT': ReceiptRange(minimum=5, maximum=500, label='Gas receipt amount'),
        'MAINTENANCE_RECEIPT': ReceiptRange(minimum=20, maximum=5000, label='Maintenance cost'),
        'INSURANCE_DOC': ReceiptRange(minimum=500, maximum=10000, label='Insurance premium'),
        'INSURANCE_RECEIPT': ReceiptRange(minimum=500, maximum=10000, label='Insurance premium'),
        'PARKING_RECEIPT': ReceiptRange(minimum=1, maximum=100, label='Parking fee'),
        'PHONE_BILL': ReceiptRange(minimum=20, maximum=300, label='Phone bill'),
        'MEAL_RECEIPT': ReceiptRange(minimum=5, maximum=100, label='Meal cost'),
    }


class ValidationSettings(BaseModel):
    """Tunable plausibility thresholds"""
    model_config = ConfigDict(frozen=True)

    penalties: ValidationPenalties = Field(default_factory=ValidationPenalties)

    # Slips
    employment_income_ceiling: float = 500000
    deductions_ratio: float = Field(0.5, gt=0, le=1)
    cpp_qpp_max: float = 4000
    ei_max: float = 1200
    ppip_max: float = 600

    # Platform summaries
    short_period_income_ceiling: float = 50000
    short_period_distance_ceiling: float = 10000
    annual_income_ceiling: float = 300000
    annual_distance_ceiling: float = 150000

    year_window: Tuple[int, int] = (2020, 2030)

    # Receipts
    reference_year: Optional[int] = None
    receipt_years_back: int = Field(5, ge=0)
    fuel_litres_range: Tuple[float, float] = (5, 200)
    fuel_price_tolerance: float = Field(0.10, ge=0)
    receipt_ranges: Dict[str, ReceiptRange] = Field(default_factory=_default_receipt_ranges)

    @model_validator(mode='after')
    def check_windows(self) -> 'ValidationSettings':
        """Windows must be ordered low to high"""
        if self.year_window[0] > self.year_window[1]:
            raise ValueError("year_window must be (low, high)")
        if self.fuel_litres_range[0] > self.fuel_litres_range[1]:
            raise ValueError("fuel_litres_range must be (low, high)")
        return self

    def receipt_range(self, document_type: DocumentType) -> Optional[ReceiptRange]:
        return self.receipt_ranges.get(document_type.name)


# Values handed to the validator may come from a FieldMap or a plain mapping
FieldValues = Union[FieldMap, Mapping[str, Any]]
