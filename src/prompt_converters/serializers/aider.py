"""Serializer for Aider conventions files (``CONVENTIONS.md``)."""

from typing import Any

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.serializers.base import PlainMarkdownSerializer, is_plain_markdown
from prompt_converters.utils.helpers import sanitize_filename


class AiderSerializer(PlainMarkdownSerializer):
    name = "aider"
    format = Format.AIDER
    unsupported = {
        "persona": "Persona section skipped (not supported by Aider)",
        "tools": "Tools section skipped (not supported by Aider)",
    }


def to_aider(pkg: CanonicalPackage, options: dict | None = None) -> ConversionResult:
    """Convert a canonical package to an Aider conventions file."""
    return AiderSerializer(options).serialize(pkg)


def generate_aider_filename(pkg: CanonicalPackage, config: Any = None) -> str:
    """Suggest a ``<dir>/CONVENTIONS.md`` path for a package; Aider takes no options."""
    return f"{sanitize_filename(pkg.name)}/CONVENTIONS.md"


def is_aider_format(content: str) -> bool:
    return is_plain_markdown(content)
