"""Serializer for Ruler rules (``.ruler/*.md``).

Ruler concatenates plain markdown files into each agent's config, so the
package identity travels in HTML comments ahead of the body.
"""

import re

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.serializers.base import MarkdownSerializer

HEADING_PATTERN = re.compile(r"^#+\s", re.MULTILINE)
RULE_WORDS_PATTERN = re.compile(r"rule|instruction|guideline|convention", re.IGNORECASE)


class RulerSerializer(MarkdownSerializer):
    name = "ruler"
    format = Format.RULER
    unsupported = {
        "persona": "Persona section skipped (not supported by Ruler)",
    }

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        copilot = pkg.metadata.copilot_config if pkg.metadata else None
        if copilot is not None and copilot.apply_to:
            warnings.append("Path-specific configuration (applyTo) is not supported by Ruler and was skipped")

        lines = [f"<!-- Package: {pkg.name} -->", f"<!-- Author: {pkg.author or 'Unknown'} -->"]
        if pkg.description:
            lines.append(f"<!-- Description: {pkg.description} -->")
        return "\n".join(lines)

    def render_metadata(self, section, warnings):
        lines = [f"# {section.data.title}"]
        if section.data.description:
            lines += ["", section.data.description]
        return "\n".join(lines)

    def example_heading(self, description, good):
        heading = f"### {description}"
        if good is None:
            return heading
        return f"{heading}\n\n*{'Good' if good else 'Bad'} example*"

    def validate(self, content: str, pkg: CanonicalPackage, warnings: list[str]) -> list[str]:
        return self.validate_against_schema(content, pkg, warnings)


def to_ruler(pkg: CanonicalPackage, options: dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Ruler rules file."""
    return RulerSerializer(options).serialize(pkg)


def is_ruler_format(content: str) -> bool:
    """No frontmatter, and either headings or rule vocabulary."""
    if content.strip().split("\n")[0] == "---":
        return False
    return bool(HEADING_PATTERN.search(content) or RULE_WORDS_PATTERN.search(content))
