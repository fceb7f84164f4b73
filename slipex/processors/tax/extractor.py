"""
Field Extractor

Extracts typed fields from document text using the per-type rule tables.
Handles:
- Alternative patterns per field (first successful match wins)
- Date / year / number / text coercion
- Multi-section totals summed in a separate pass
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from slipex.processors.base import BaseProcessor
from slipex.processors.tax.extraction_rules import AGGREGATIONS, EXTRACTION_RULES, FieldMatch
from slipex.processors.tax.normalizer import coerce_value, normalize_text, round_amount
from slipex.models.tax_document import (
    DocumentType,
    ExtractedValue,
    FieldMap,
    ValueKind,
)

logger = logging.getLogger(__name__)


class FieldExtractor(BaseProcessor):
    """
    Extracts a FieldMap from document text for a known document type.

    Types without a rule table (UNKNOWN) produce an empty map. Passing
    anything that is not a DocumentType raises UnsupportedDocumentTypeError.
    """

    def process(self, text: str, document_type: Any) -> FieldMap:
        return self.extract(text, document_type)

    def extract(self, text: str, document_type: Any) -> FieldMap:
        """
        Extract fields for a document type.

        Args:
            text: Raw document text
            document_type: DocumentType member (or its value)

        Returns:
            FieldMap with only the fields that matched
        """
        doc_type = self.resolve_type(document_type)
        clean = normalize_text(self.require_text(text))

        values: Dict[str, ExtractedValue] = {}
        spans: Dict[str, tuple] = {}

        for rule in EXTRACTION_RULES.get(doc_type, ()):
            found: Optional[FieldMatch] = rule.search(clean)
            if found is None:
                continue
            value = coerce_value(found.raw)
            if value is not None:
                values[rule.field] = value
                spans[rule.field] = found.span

        self._apply_aggregations(doc_type, values, spans)

        return FieldMap(document_type=doc_type, entries=values)

    def _apply_aggregations(
        self,
        doc_type: DocumentType,
        values: Dict[str, ExtractedValue],
        spans: Dict[str, tuple]
    ) -> None:
        """Overwrite each primary total with primary + secondary; keep the secondary"""
        for primary, secondary in AGGREGATIONS.get(doc_type, ()):
            base = values.get(primary)
            extra = values.get(secondary)
            if base is None or extra is None or not (base.is_number and extra.is_number):
                continue

            # Both rules landed on the same total (only one section present)
            if spans.get(primary) == spans.get(secondary):
                logger.debug(f"{primary} and {secondary} share one total; not summing")
                continue

            combined = round_amount(Decimal(str(base.value)) + Decimal(str(extra.value)))
            logger.debug(f"Summed {primary} ({base.value}) + {secondary} ({extra.value}) = {combined}")
            values[primary] = ExtractedValue(kind=ValueKind.NUMBER, value=combined)


def extract_fields(text: str, document_type: Any) -> FieldMap:
    """
    Standalone function to extract fields from document text.

    Args:
        text: Raw document text
        document_type: DocumentType member (or its value)

    Returns:
        FieldMap
    """
    extractor = FieldExtractor()
    return extractor.extract(text, document_type)
