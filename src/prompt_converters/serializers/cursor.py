"""Serializer for Cursor rules (``.cursor/rules/*.mdc``)."""

import re

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import CursorConfig
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer

HEADING_PATTERN = re.compile(r"^#{1,6} ", re.MULTILINE)


class CursorSerializer(MarkdownSerializer):
    """Renders MDC: a small YAML header followed by markdown."""

    name = "cursor"
    format = Format.CURSOR
    options_type = CursorConfig
    unsupported = {"tools": "Tools section skipped (Claude-specific)"}

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        extras = pkg.metadata
        if extras and extras.copilot_config and extras.copilot_config.apply_to:
            warnings.append("Copilot path-specific configuration (applyTo) is not supported by Cursor")

        if pkg.subtype == Subtype.SLASH_COMMAND:
            return ""

        config: CursorConfig = self.options or CursorConfig()
        description = config.description or (extras.description if extras else None) or pkg.display_description
        globs = config.globs or (extras.globs if extras else None)
        always_apply = config.always_apply
        if always_apply is None:
            always_apply = bool(extras and extras.always_apply)

        return build_frontmatter(
            [
                ("description", description or None),
                ("globs", globs or None),
                ("alwaysApply", always_apply),
            ],
            quote=True,
        )

    def validate(self, content: str, pkg: CanonicalPackage, warnings: list[str]) -> list[str]:
        return self.validate_against_schema(content, pkg, warnings)


def to_cursor(pkg: CanonicalPackage, options: CursorConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Cursor rule."""
    return CursorSerializer(options).serialize(pkg)


def is_cursor_format(content: str) -> bool:
    """Cursor MDC: frontmatter with Cursor keys, or plain markdown headings."""
    document = split_frontmatter(content)
    if document.has_frontmatter:
        return "globs" in document.frontmatter or "alwaysApply" in document.frontmatter
    return bool(HEADING_PATTERN.search(content)) and '"systemMessage"' not in content
