"""Serializer for Trae rules (``.trae/rules/*.md``)."""

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.serializers.base import PlainMarkdownSerializer, is_plain_markdown


class TraeSerializer(PlainMarkdownSerializer):
    name = "trae"
    format = Format.TRAE
    unsupported = {
        "persona": "Persona section skipped (not supported by Trae)",
        "tools": "Tools section skipped (not supported by Trae)",
    }


def to_trae(pkg: CanonicalPackage, options: dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Trae rules file."""
    return TraeSerializer(options).serialize(pkg)


def is_trae_format(content: str) -> bool:
    return is_plain_markdown(content)
