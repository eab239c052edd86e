"""Extraction sub-package: parsing, detection, field extraction and rendering."""

from .context import DocumentContext
from .detection import DetectionSignals, detect_best_template, score_signals
from .markdown import format_record, html_to_markdown, record_to_text
from .metadata import extract_metadata
from .schema import FieldFilter, FieldSpec, extract_field, extract_with_schema
from .validation import FieldValidation, validate_field, validate_record

__all__ = [
    "DetectionSignals",
    "DocumentContext",
    "FieldFilter",
    "FieldSpec",
    "FieldValidation",
    "detect_best_template",
    "extract_field",
    "extract_metadata",
    "extract_with_schema",
    "format_record",
    "html_to_markdown",
    "record_to_text",
    "score_signals",
    "validate_field",
    "validate_record",
]
