"""
SlipEX - Canadian Tax Document Extraction Library

Classifies already-extracted text from Canadian tax slips, rideshare driver
summaries and vehicle expense receipts, extracts typed fields and validates
them for plausibility.

Basic usage:
    from slipex import DocumentPipeline

    pipeline = DocumentPipeline()
    result = pipeline.process(text, filename='t4_2024.txt')

    print(result.document_type)
    print(result.fields.to_dict())
    print(result.validation.warnings)
"""

from slipex.config.slipex_config import SlipEXConfig
from slipex.models.tax_document import DocumentType, UnsupportedDocumentTypeError
from slipex.processors.tax import (
    DocumentClassifier,
    FieldExtractor,
    DocumentValidator,
    DocumentPipeline,
    classify_document,
    extract_fields,
    validate_fields,
    process_document,
)

__all__ = [
    'SlipEXConfig',
    'DocumentType',
    'UnsupportedDocumentTypeError',
    'DocumentClassifier',
    'FieldExtractor',
    'DocumentValidator',
    'DocumentPipeline',
    'classify_document',
    'extract_fields',
    'validate_fields',
    'process_document',
]

__version__ = '1.0.0'
