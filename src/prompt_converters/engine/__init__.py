"""Conversion and validation engines."""

from prompt_converters.engine.conversion_engine import BatchResult, ConversionEngine, FileConversion
from prompt_converters.engine.validation_engine import (
    ValidationEngine,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    format_validation_errors,
)

__all__ = [
    "BatchResult",
    "ConversionEngine",
    "FileConversion",
    "ValidationEngine",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "format_validation_errors",
]
