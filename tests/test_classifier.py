"""
Tests for DocumentClassifier

Covers scoring, tie-breaking, the fallback table and filename hints.
"""

import pytest

from slipex.config.slipex_config import SlipEXConfig
from slipex.models.tax_document import DocumentType
from slipex.processors.tax.classification_rules import SCORING_RULES
from slipex.processors.tax.classifier import DocumentClassifier, classify_document

from sample_documents import (
    GAS_TEXT,
    INSURANCE_TEXT,
    LYFT_TEXT,
    MAINTENANCE_TEXT,
    MEAL_TEXT,
    PARKING_TEXT,
    PHONE_TEXT,
    RANDOM_TEXT,
    RL1_TEXT,
    RL2_TEXT,
    T4_TEXT,
    T4A_TEXT,
    TAXI_TEXT,
    UBER_ANNUAL_TEXT,
    UBER_ZERO_TEXT,
)


class TestScoredClassification:
    """Tests for keyword/pattern scoring"""

    @pytest.mark.parametrize("text,expected", [
        (T4_TEXT, DocumentType.T4),
        (RL1_TEXT, DocumentType.RL1),
        (T4A_TEXT, DocumentType.T4A),
        (RL2_TEXT, DocumentType.RL2),
        (UBER_ANNUAL_TEXT, DocumentType.UBER_SUMMARY),
        (LYFT_TEXT, DocumentType.LYFT_SUMMARY),
        (GAS_TEXT, DocumentType.GAS_RECEIPT),
        (MAINTENANCE_TEXT, DocumentType.MAINTENANCE_RECEIPT),
        (INSURANCE_TEXT, DocumentType.INSURANCE_RECEIPT),
    ])
    def test_document_types(self, text, expected):
        result = classify_document(text)
        assert result.document_type == expected
        assert result.method == 'scored'

    def test_t4_confidence(self):
        """T4 sample scores 3 keywords + 2 patterns = 7 points"""
        result = classify_document(T4_TEXT)
        assert result.scores['T4'] == 7
        assert result.confidence == 70

    def test_confidence_is_capped(self):
        result = classify_document(UBER_ANNUAL_TEXT)
        assert result.confidence == 100

    def test_zero_activity_uber_summary(self):
        result = classify_document(UBER_ZERO_TEXT)
        assert result.document_type == DocumentType.UBER_SUMMARY
        assert result.confidence == 100

    def test_scores_cover_every_scored_type(self):
        result = classify_document(GAS_TEXT)
        assert set(result.scores) == {rule.document_type.value for rule in SCORING_RULES}

    def test_tie_resolves_to_earlier_entry(self):
        result = classify_document("box 14 case a")
        assert result.scores['T4'] == result.scores['RL-1'] == 3
        assert result.document_type == DocumentType.T4
        assert result.confidence == 30

    def test_filename_hint_breaks_tie(self):
        result = classify_document("box 14 case a", filename="rl1_2024.txt")
        assert result.scores['RL-1'] == 4
        assert result.document_type == DocumentType.RL1

    def test_idempotent(self):
        classifier = DocumentClassifier()
        assert classifier.classify(LYFT_TEXT) == classifier.classify(LYFT_TEXT)


class TestFallbackClassification:
    """Tests for the strict single-pattern fallback"""

    @pytest.mark.parametrize("text,expected", [
        (TAXI_TEXT, DocumentType.TAXI_STATEMENT),
        (PARKING_TEXT, DocumentType.PARKING_RECEIPT),
        (PHONE_TEXT, DocumentType.PHONE_BILL),
        (MEAL_TEXT, DocumentType.MEAL_RECEIPT),
    ])
    def test_fallback_types(self, text, expected):
        result = classify_document(text)
        assert result.document_type == expected
        assert result.method == 'fallback'
        assert result.confidence == 50

    def test_unrecognized_text(self):
        result = classify_document(RANDOM_TEXT)
        assert result.document_type == DocumentType.UNKNOWN
        assert result.confidence == 0
        assert result.method == 'none'

    def test_empty_text(self):
        result = classify_document("")
        assert result.document_type == DocumentType.UNKNOWN
        assert result.confidence == 0


class TestClassifierSettings:
    """Tests for configuration-driven thresholds"""

    def test_overrides_passed_directly(self):
        classifier = DocumentClassifier({'realistic_max_score': 20})
        assert classifier.classify(T4_TEXT).confidence == 35

    def test_global_configuration(self):
        SlipEXConfig().set('classifier.min_score', 100)
        result = DocumentClassifier().classify(T4_TEXT)
        assert result.document_type == DocumentType.T4
        assert result.method == 'fallback'
        assert result.confidence == 50


class TestContractViolations:
    """Non-string input is rejected"""

    def test_non_string_text(self):
        with pytest.raises(TypeError):
            classify_document(None)

        with pytest.raises(TypeError):
            classify_document(b"T4 Box 14")
