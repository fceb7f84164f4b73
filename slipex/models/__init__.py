from .tax_document import (
    DocumentType,
    ValueKind,
    ExtractedValue,
    FieldMap,
    ClassificationResult,
    ValidationResult,
    DocumentProcessingResult,
    ClassifierSettings,
    ValidationSettings,
    ValidationPenalties,
    ReceiptRange,
    UnsupportedDocumentTypeError,
    resolve_document_type,
    EMPLOYMENT_SLIPS,
    OTHER_INCOME_SLIPS,
    PLATFORM_SUMMARIES,
    EXPENSE_RECEIPTS,
)

__all__ = [
    'DocumentType',
    'ValueKind',
    'ExtractedValue',
    'FieldMap',
    'ClassificationResult',
    'ValidationResult',
    'DocumentProcessingResult',
    'ClassifierSettings',
    'ValidationSettings',
    'ValidationPenalties',
    'ReceiptRange',
    'UnsupportedDocumentTypeError',
    'resolve_document_type',
    'EMPLOYMENT_SLIPS',
    'OTHER_INCOME_SLIPS',
    'PLATFORM_SUMMARIES',
    'EXPENSE_RECEIPTS',
]
