"""
Tests for DocumentPipeline

classify -> extract -> validate, per document and in batches.
"""

import pytest

from slipex.models.tax_document import DocumentType
from slipex.processors.tax.pipeline import (
    DocumentPipeline,
    PipelineStage,
    process_batch,
    process_document,
)

from sample_documents import GAS_TEXT, RANDOM_TEXT, T4_TEXT, UBER_ANNUAL_TEXT, UBER_ZERO_TEXT


class TestDocumentPipeline:
    """Tests for single-document processing"""

    def test_t4(self):
        result = process_document(T4_TEXT, filename='t4_2024.txt')
        assert result.success
        assert result.document_type == DocumentType.T4
        assert result.classification.confidence == 80
        assert result.fields['employment_income'] == 65000.0
        assert result.validation.is_valid
        assert result.filename == 't4_2024.txt'
        assert set(result.stage_times) == {'classify', 'extract', 'validate'}

    def test_uber_summary(self):
        result = process_document(UBER_ANNUAL_TEXT)
        assert result.document_type == DocumentType.UBER_SUMMARY
        assert result.fields['gross_fares'] == 2000.0
        assert result.validation.is_valid

    def test_zero_activity_summary(self):
        result = process_document(UBER_ZERO_TEXT)
        assert result.success
        assert result.validation.is_valid
        assert any('inactive' in warning for warning in result.validation.warnings)

    def test_unknown_document_stops_after_classification(self):
        result = process_document(RANDOM_TEXT)
        assert not result.success
        assert result.document_type == DocumentType.UNKNOWN
        assert result.error == 'Could not identify document type'
        assert result.error_stage == 'classify'
        assert result.fields is None
        assert result.validation is None
        assert set(result.stage_times) == {'classify'}

    def test_failure_is_reported_not_raised(self):
        result = DocumentPipeline().process(None)
        assert not result.success
        assert result.error_stage == 'classify'
        assert 'must be a string' in result.error
        assert result.fields is None

    def test_summary(self):
        summary = process_document(GAS_TEXT, 'receipt.txt').summary()
        assert summary['filename'] == 'receipt.txt'
        assert summary['document_type'] == 'GAS_RECEIPT'
        assert summary['fields']['total'] == 65.98
        assert summary['error'] is None

    def test_validation_config(self):
        pipeline = DocumentPipeline({'validation': {'reference_year': 2040}})
        result = pipeline.process(GAS_TEXT)
        assert any('Receipt date' in warning for warning in result.validation.warnings)


class TestStageCallbacks:
    """Tests for on_stage callbacks"""

    def test_callbacks_receive_context(self):
        pipeline = DocumentPipeline()
        seen = []
        pipeline.on_stage(PipelineStage.CLASSIFY, lambda ctx: seen.append(ctx.document_type))
        pipeline.on_stage(PipelineStage.VALIDATE, lambda ctx: seen.append(ctx.validation.is_valid))

        pipeline.process(T4_TEXT)
        assert seen == [DocumentType.T4, True]

    def test_failing_callback_does_not_abort(self):
        pipeline = DocumentPipeline()

        def broken(ctx):
            raise RuntimeError("callback failure")

        pipeline.on_stage(PipelineStage.EXTRACT, broken)
        result = pipeline.process(T4_TEXT)
        assert result.success
        assert result.validation.is_valid


class TestBatchProcessing:
    """Tests for thread-pooled batches"""

    def test_order_is_preserved(self):
        results = process_batch(
            [('t4.txt', T4_TEXT), GAS_TEXT, RANDOM_TEXT, UBER_ANNUAL_TEXT],
            max_workers=3
        )
        assert [r.document_type for r in results] == [
            DocumentType.T4,
            DocumentType.GAS_RECEIPT,
            DocumentType.UNKNOWN,
            DocumentType.UBER_SUMMARY,
        ]
        assert results[0].filename == 't4.txt'
        assert results[1].filename is None

    def test_one_failure_does_not_abort_batch(self):
        results = DocumentPipeline().process_batch([T4_TEXT, ('bad.txt', None)])
        assert results[0].success
        assert not results[1].success

    def test_empty_batch(self):
        assert process_batch([]) == []

    @pytest.mark.parametrize("workers", [1, 8])
    def test_results_match_sequential(self, workers):
        texts = [T4_TEXT, GAS_TEXT, UBER_ZERO_TEXT] * 3
        pipeline = DocumentPipeline()
        batch = pipeline.process_batch(texts, max_workers=workers)
        sequential = [pipeline.process(text) for text in texts]
        assert [r.fields for r in batch] == [r.fields for r in sequential]
        assert [r.validation for r in batch] == [r.validation for r in sequential]
