"""
Document Classifier

Assigns a DocumentType to normalized text using two tiers:
1. Keyword/structural-pattern scoring across SCORING_RULES
2. A strict single-pattern fallback when no score clears the threshold
"""

import logging
from typing import Any, Dict, Optional

from slipex.processors.base import BaseProcessor
from slipex.processors.tax.classification_rules import FALLBACK_PATTERNS, SCORING_RULES
from slipex.processors.tax.normalizer import normalize_text
from slipex.models.tax_document import (
    ClassificationResult,
    ClassifierSettings,
    DocumentType,
)

logger = logging.getLogger(__name__)


class DocumentClassifier(BaseProcessor):
    """
    Classifies tax slips, driver summaries and expense receipts.

    Ties are not broken explicitly: the first type in table order holding
    the highest score wins. The threshold and the score-to-percentage
    divisor are heuristics and can be tuned under the `classifier`
    configuration section.
    """

    config_section = 'classifier'

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.settings = ClassifierSettings(**self.section_settings())

    def process(self, text: str, filename: Optional[str] = '') -> ClassificationResult:
        return self.classify(text, filename)

    def classify(self, text: str, filename: Optional[str] = '') -> ClassificationResult:
        """
        Classify document text.

        Args:
            text: Raw document text
            filename: Optional filename hint (adds one point to a type whose
                name appears in it)

        Returns:
            ClassificationResult with type, confidence and per-type scores
        """
        clean = normalize_text(self.require_text(text))
        lowered = clean.lower()
        hint = (filename or '').lower()

        scores: Dict[str, int] = {}
        best_type = DocumentType.UNKNOWN
        best_score = 0

        for rule in SCORING_RULES:
            score = rule.score(clean, lowered, hint)
            scores[rule.document_type.value] = score
            if score > best_score:
                best_score = score
                best_type = rule.document_type

        if best_score < self.settings.min_score:
            for document_type, pattern in FALLBACK_PATTERNS:
                if pattern.search(clean):
                    logger.debug(
                        f"Fallback pattern matched {document_type.value} (best score {best_score})"
                    )
                    return ClassificationResult(
                        document_type=document_type,
                        confidence=self.settings.fallback_confidence,
                        method='fallback',
                        scores=scores,
                    )

            logger.debug(f"No document type recognized (best score {best_score})")
            return ClassificationResult(
                document_type=DocumentType.UNKNOWN,
                confidence=self._score_to_percent(best_score),
                method='none',
                scores=scores,
            )

        logger.debug(f"Classified as {best_type.value} with score {best_score}")
        return ClassificationResult(
            document_type=best_type,
            confidence=self._score_to_percent(best_score),
            method='scored',
            scores=scores,
        )

    def _score_to_percent(self, score: int) -> int:
        """Convert a raw score to 0-100 against the assumed realistic maximum"""
        return min(100, int(score * 100 / self.settings.realistic_max_score + 0.5))


def classify_document(text: str, filename: Optional[str] = '', config: Dict[str, Any] = None) -> ClassificationResult:
    """
    Standalone function to classify document text.

    Args:
        text: Raw document text
        filename: Optional filename hint
        config: Optional classifier settings overrides

    Returns:
        ClassificationResult
    """
    classifier = DocumentClassifier(config=config)
    return classifier.classify(text, filename)
