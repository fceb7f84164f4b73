"""
Tax Document Processing Module

Provides rule-driven processors for Canadian tax slips, driver summaries
and expense receipts.

Components:
- DocumentClassifier: Keyword/pattern scoring with a strict fallback
- FieldExtractor: Per-type regex extraction with value coercion
- DocumentValidator: Plausibility and consistency rules
- DocumentPipeline: classify -> extract -> validate
"""

from .classifier import DocumentClassifier, classify_document
from .extractor import FieldExtractor, extract_fields
from .validator import DocumentValidator, validate_fields, is_duplicate
from .expenses import categorize_expense, calculate_business_use_percentage, get_quarter
from .pipeline import DocumentPipeline, PipelineStage, PipelineContext, process_document, process_batch

__all__ = [
    # Processors
    'DocumentClassifier',
    'FieldExtractor',
    'DocumentValidator',
    'DocumentPipeline',

    # Utilities
    'classify_document',
    'extract_fields',
    'validate_fields',
    'process_document',
    'process_batch',
    'is_duplicate',
    'categorize_expense',
    'calculate_business_use_percentage',
    'get_quarter',

    # Types
    'PipelineStage',
    'PipelineContext'
]
