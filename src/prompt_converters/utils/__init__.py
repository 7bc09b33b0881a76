"""Shared helpers."""

from prompt_converters.utils.helpers import (
    default_output_path,
    format_from_path,
    package_stem,
    sanitize_filename,
)

__all__ = ["default_output_path", "format_from_path", "package_stem", "sanitize_filename"]
