"""Serializer for Windsurf rules (``.windsurf/rules/*.md`` or ``.windsurfrules``)."""

import re

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.parsers.frontmatter import has_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer

MARKDOWN_HEADING = re.compile(r"^#{1,6}\s+.+$", re.MULTILINE)
DEFAULT_PERSONA_ICON = "🤖"


class WindsurfSerializer(MarkdownSerializer):
    """Plain markdown: no frontmatter, tools listed rather than dropped."""

    name = "windsurf"
    format = Format.WINDSURF
    rule_example_template = "   - Example: {}"

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        lines = [f"# {pkg.icon} {pkg.title}" if pkg.icon else f"# {pkg.title}"]
        if pkg.display_description:
            lines += ["", pkg.display_description]

        for section in pkg.sections:
            if section.type == "metadata":
                continue
            text = self.render_section(section, pkg, warnings)
            if text:
                lines += ["", text]
        return "\n".join(lines).strip() + "\n"

    def render_persona(self, section, warnings):
        data = section.data
        lines = [self.title_line("Role"), ""]
        if data.name:
            lines.append(f"{data.icon or DEFAULT_PERSONA_ICON} **{data.name}** - {data.role or 'Assistant'}")
        elif data.role:
            lines.append(data.role)
        if data.style:
            lines += ["", f"**Style:** {', '.join(data.style)}"]
        if data.expertise:
            lines += ["", "**Expertise:**"]
            lines += [f"- {area}" for area in data.expertise]
        return "\n".join(lines)

    def example_heading(self, description, good):
        return f"### {description}"

    def render_tools(self, section, warnings):
        warnings.append("Tools configuration may not be supported by Windsurf")
        if not section.tools:
            return ""
        lines = ["**Available Tools:**", ""]
        lines += [f"- **{tool}**" for tool in section.tools]
        if section.description:
            lines += ["", section.description]
        return "\n".join(lines)

    def validate(self, content, pkg, warnings):
        return self.validate_against_schema(content, pkg, warnings)


def to_windsurf(pkg: CanonicalPackage, options: None = None) -> ConversionResult:
    """Convert a canonical package to Windsurf rules."""
    return WindsurfSerializer(options).serialize(pkg)


def is_windsurf_format(content: str) -> bool:
    """Markdown headings and no frontmatter."""
    return bool(MARKDOWN_HEADING.search(content)) and not has_frontmatter(content)
