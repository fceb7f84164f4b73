from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from slipex.config import SlipEXConfig
from slipex.models.tax_document import DocumentType, resolve_document_type


class BaseProcessor(ABC):
    """Base class for SlipEX pipeline stages

    Stages are stateless: configuration is read once at construction and
    every call to process() depends only on its arguments.
    """

    # Top-level configuration section this stage reads its settings from
    config_section: Optional[str] = None

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    @abstractmethod
    def process(self, *args, **kwargs) -> Any:
        """Run this stage

        Returns:
            The stage's immutable result object
        """
        pass

    def section_settings(self) -> Dict[str, Any]:
        """
        Settings for this stage: the global configuration section with any
        explicitly passed overrides applied on top.
        """
        settings: Dict[str, Any] = {}
        if self.config_section:
            settings.update(SlipEXConfig().get(self.config_section, {}) or {})
        settings.update(self.config)
        return settings

    @staticmethod
    def resolve_type(document_type: Any) -> DocumentType:
        """Resolve a document type, raising UnsupportedDocumentTypeError on contract violations"""
        return resolve_document_type(document_type)

    @staticmethod
    def require_text(text: Any) -> str:
        """Reject non-string input; any string, even empty, is acceptable"""
        if not isinstance(text, str):
            raise TypeError(f"Document text must be a string, got {type(text).__name__}")
        return text
