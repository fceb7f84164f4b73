"""
Tax Document Processing Pipeline

End-to-end pipeline for tax documents:
classify -> extract -> validate

Provides a single entry point per document, stage callbacks and a
thread-pooled batch runner. Failures are reported per document instead
of aborting a batch.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from slipex.processors.base import BaseProcessor
from slipex.processors.tax.classifier import DocumentClassifier
from slipex.processors.tax.extractor import FieldExtractor
from slipex.processors.tax.validator import DocumentValidator
from slipex.models.tax_document import (
    ClassificationResult,
    DocumentProcessingResult,
    DocumentType,
    FieldMap,
    ValidationResult,
)

logger = logging.getLogger(__name__)

UNIDENTIFIED_DOCUMENT = "Could not identify document type"


class PipelineStage(str, Enum):
    """Pipeline processing stages"""
    CLASSIFY = "classify"
    EXTRACT = "extract"
    VALIDATE = "validate"
    COMPLETE = "complete"


@dataclass
class PipelineContext:
    """Context passed through pipeline stages"""
    text: str
    filename: Optional[str] = None

    # Stage results
    classification: Optional[ClassificationResult] = None
    fields: Optional[FieldMap] = None
    validation: Optional[ValidationResult] = None

    current_stage: PipelineStage = PipelineStage.CLASSIFY

    # Timing
    stage_times: Dict[str, int] = field(default_factory=dict)
    total_time_ms: int = 0

    # Errors
    error: Optional[str] = None
    error_stage: Optional[PipelineStage] = None

    @property
    def document_type(self) -> DocumentType:
        return self.classification.document_type if self.classification else DocumentType.UNKNOWN


# A batch item is raw text or a (filename, text) pair
BatchItem = Union[str, Tuple[str, str]]


class DocumentPipeline(BaseProcessor):
    """
    Classify, extract and validate one document at a time.
    Documents classified as UNKNOWN stop after classification.

    Usage:
        pipeline = DocumentPipeline()
        result = pipeline.process(text, filename='t4_2024.txt')

    config keys:
        classifier: overrides for the classifier settings
        validation: overrides for the validation settings
    """

    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self.classifier = DocumentClassifier(self.config.get('classifier'))
        self.extractor = FieldExtractor()
        self.validator = DocumentValidator(self.config.get('validation'))

        self._stage_callbacks: Dict[PipelineStage, List[Callable]] = {}

    def process(self, text: str, filename: Optional[str] = '') -> DocumentProcessingResult:
        """
        Process one document through every stage.

        Args:
            text: Already-extracted document text
            filename: Optional filename hint

        Returns:
            DocumentProcessingResult (success=False with the failing stage on error)
        """
        start_time = time.time()
        ctx = PipelineContext(text=text, filename=filename or None)

        try:
            self._run_stage(ctx, PipelineStage.CLASSIFY, self._stage_classify)
            self._run_stage(ctx, PipelineStage.EXTRACT, self._stage_extract)
            self._run_stage(ctx, PipelineStage.VALIDATE, self._stage_validate)
            if ctx.error is None:
                ctx.current_stage = PipelineStage.COMPLETE
        except Exception as e:
            logger.exception(f"Pipeline failed for {filename or '<text>'}: {e}")

        ctx.total_time_ms = int((time.time() - start_time) * 1000)
        return self._build_result(ctx)

    def _run_stage(self, ctx: PipelineContext, stage: PipelineStage, stage_func: Callable) -> None:
        """Run a pipeline stage with timing and error handling"""
        if ctx.error:
            return

        ctx.current_stage = stage
        start = time.time()

        try:
            stage_func(ctx)

            for callback in self._stage_callbacks.get(stage, []):
                try:
                    callback(ctx)
                except Exception as e:
                    logger.warning(f"Stage callback failed: {e}")

        except Exception as e:
            ctx.error = str(e)
            ctx.error_stage = stage
            raise

        finally:
            ctx.stage_times[stage.value] = int((time.time() - start) * 1000)

    def _stage_classify(self, ctx: PipelineContext) -> None:
        ctx.classification = self.classifier.classify(ctx.text, ctx.filename or '')

        if ctx.document_type == DocumentType.UNKNOWN:
            ctx.error = UNIDENTIFIED_DOCUMENT
            ctx.error_stage = PipelineStage.CLASSIFY

    def _stage_extract(self, ctx: PipelineContext) -> None:
        ctx.fields = self.extractor.extract(ctx.text, ctx.document_type)

    def _stage_validate(self, ctx: PipelineContext) -> None:
        ctx.validation = self.validator.validate(ctx.fields, ctx.document_type)

    def _build_result(self, ctx: PipelineContext) -> DocumentProcessingResult:
        return DocumentProcessingResult(
            success=ctx.error is None,
            document_type=ctx.document_type,
            classification=ctx.classification,
            fields=ctx.fields,
            validation=ctx.validation,
            filename=ctx.filename,
            raw_text=ctx.text[:1000] if isinstance(ctx.text, str) else None,
            error=ctx.error,
            error_stage=ctx.error_stage.value if ctx.error_stage else None,
            stage_times=ctx.stage_times,
            processing_time_ms=ctx.total_time_ms,
        )

    def process_batch(self, documents: Iterable[BatchItem], max_workers: int = 4) -> List[DocumentProcessingResult]:
        """
        Process many documents concurrently.

        Args:
            documents: Raw texts or (filename, text) pairs
            max_workers: Thread pool size

        Returns:
            Results in input order
        """
        items = [(None, doc) if isinstance(doc, str) else tuple(doc) for doc in documents]
        if not items:
            return []

        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            futures = [executor.submit(self.process, text, name) for name, text in items]
            return [future.result() for future in futures]

    def on_stage(self, stage: PipelineStage, callback: Callable) -> None:
        """Register a callback for a pipeline stage"""
        if stage not in self._stage_callbacks:
            self._stage_callbacks[stage] = []
        self._stage_callbacks[stage].append(callback)


def process_document(text: str, filename: Optional[str] = '', config: Dict[str, Any] = None) -> DocumentProcessingResult:
    """
    Convenience function to process one document.

    Args:
        text: Already-extracted document text
        filename: Optional filename hint
        config: Optional pipeline configuration

    Returns:
        DocumentProcessingResult
    """
    return DocumentPipeline(config).process(text, filename)


def process_batch(
    documents: Iterable[BatchItem],
    max_workers: int = 4,
    config: Dict[str, Any] = None
) -> List[DocumentProcessingResult]:
    """Convenience function to process many documents"""
    return DocumentPipeline(config).process_batch(documents, max_workers)
