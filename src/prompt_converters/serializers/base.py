"""Base classes for serializers from the canonical model to tool formats."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from prompt_converters.canonical.formats import Format, Priority, Subtype
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.canonical.sections import (
    ContextSection,
    CustomSection,
    ExamplesSection,
    HookSection,
    InstructionsSection,
    MetadataSection,
    PersonaSection,
    RulesSection,
    Section,
    ToolsSection,
)
from prompt_converters.serializers.scoring import ScoringContext, score_for

logger = logging.getLogger(__name__)


class Serializer(ABC):
    """Base class for all serializers.

    Subclasses implement ``render`` and may override ``validate``.
    ``serialize`` never raises: failures become a zero-score result whose
    warnings carry the error message.
    """

    name: str = ""
    format: Format = Format.GENERIC
    options_type: type | None = None

    def __init__(self, options: Any = None):
        if options is not None and self.options_type is not None and isinstance(options, dict):
            options = self.options_type.model_validate(options)
        self.options = options

    def serialize(self, pkg: CanonicalPackage) -> ConversionResult:
        """Convert a canonical package to this serializer's format.

        Args:
            pkg: Package to convert

        Returns:
            ConversionResult with content, warnings and quality score
        """
        warnings: list[str] = []
        try:
            content = self.render(pkg, warnings)
            validation_errors = self.validate(content, pkg, warnings)
        except Exception as e:
            logger.warning("Conversion of %s to %s failed: %s", pkg.id, self.name, e)
            warnings.append(f"Conversion error: {e}")
            return ConversionResult(
                content="",
                format=self.format.value,
                warnings=warnings,
                lossy_conversion=True,
                quality_score=0,
            )

        ctx = ScoringContext(package=pkg, warnings=warnings, validation_errors=validation_errors)
        score = score_for(self.name, ctx)
        return ConversionResult(
            content=content,
            format=self.format.value,
            warnings=ctx.warnings,
            validation_errors=validation_errors,
            lossy_conversion=ctx.lossy,
            quality_score=score,
        )

    @abstractmethod
    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        """Render the package, appending to ``warnings`` for dropped content."""
        pass

    def validate(self, content: str, pkg: CanonicalPackage, warnings: list[str]) -> list[str]:
        """Check rendered output; return validation error messages."""
        return []

    def validate_against_schema(
        self,
        content: str,
        pkg: CanonicalPackage,
        warnings: list[str],
        subtype: Subtype | None = None,
    ) -> list[str]:
        """Validate rendered markdown against the bundled format schema."""
        from prompt_converters.engine.validation_engine import ValidationEngine

        result = ValidationEngine().validate_markdown(self.name, content, subtype or pkg.subtype)
        warnings.extend(i.message for i in result.warnings)
        return [i.message for i in result.errors]


class MarkdownSerializer(Serializer):
    """Shared rendering for markdown-based formats.

    Class attributes control the small differences between formats; the
    ``render_*`` methods can be overridden for bigger ones.
    """

    good_label = "✅ Good"
    bad_label = "❌ Bad"
    important_label = "**Important:**"
    rationale_template = "   - *Rationale: {}*"
    rule_example_template = "   - Example: `{}`"
    heading = "##"
    label: str | None = None
    unsupported: dict[str, str] = {}

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        body = self.render_body(pkg, warnings)
        header = self.render_header(pkg, warnings)
        return f"{header}\n\n{body}".strip() if header else body

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        """Frontmatter or other preamble; empty by default."""
        return ""

    def render_body(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        parts = []
        for section in pkg.sections:
            text = self.render_section(section, pkg, warnings)
            if text:
                parts.append(text)
        return "\n\n".join(parts).strip()

    def render_section(self, section: Section, pkg: CanonicalPackage, warnings: list[str]) -> str:
        if section.type in self.unsupported:
            warnings.append(self.unsupported[section.type])
            return ""

        renderer = getattr(self, f"render_{section.type}", None)
        if renderer is None:
            warnings.append(f"Unknown section type: {section.type}")
            return ""
        return renderer(section, warnings)

    def title_line(self, title: str) -> str:
        return f"{self.heading} {title}" if title else ""

    def render_metadata(self, section: MetadataSection, warnings: list[str]) -> str:
        data = section.data
        lines = [f"# {data.icon} {data.title}" if data.icon else f"# {data.title}"]
        if data.description:
            lines += ["", data.description]
        return "\n".join(lines)

    def render_instructions(self, section: InstructionsSection, warnings: list[str]) -> str:
        lines = []
        if section.title:
            lines += [self.title_line(section.title), ""]
        if section.priority == Priority.HIGH:
            lines += [self.important_label, ""]
        lines.append(section.content)
        return "\n".join(lines)

    def render_rules(self, section: RulesSection, warnings: list[str]) -> str:
        lines = [self.title_line(section.title), ""] if section.title else []
        for index, rule in enumerate(section.items, start=1):
            prefix = f"{index}." if section.ordered else "-"
            lines.append(f"{prefix} {rule.content}")
            if rule.rationale:
                lines.append(self.rationale_template.format(rule.rationale))
            for example in rule.examples or []:
                lines.append(self.rule_example_template.format(example))
        return "\n".join(lines)

    def example_heading(self, description: str, good: bool | None) -> str:
        label = self.bad_label if good is False else self.good_label
        return f"{self.heading}# {label}: {description}"

    def render_examples(self, section: ExamplesSection, warnings: list[str]) -> str:
        lines = [self.title_line(section.title), ""] if section.title else []
        for example in section.examples:
            lines += [
                self.example_heading(example.description, example.good),
                "",
                f"```{example.language or ''}",
                example.code,
                "```",
                "",
            ]
        return "\n".join(lines).rstrip()

    def render_persona(self, section: PersonaSection, warnings: list[str]) -> str:
        data = section.data
        lines = [self.title_line("Role"), ""]
        if data.name:
            lines.append(f"{data.icon} **{data.name}** - {data.role}" if data.icon else f"**{data.name}** - {data.role}")
        elif data.role:
            lines.append(data.role)
        if data.style:
            lines += ["", f"**Style:** {', '.join(data.style)}"]
        if data.expertise:
            lines += ["", "**Expertise:**"]
            lines += [f"- {area}" for area in data.expertise]
        return "\n".join(lines)

    def render_context(self, section: ContextSection, warnings: list[str]) -> str:
        return "\n".join([self.title_line(section.title), "", section.content])

    def render_tools(self, section: ToolsSection, warnings: list[str]) -> str:
        warnings.append(f"Tools section skipped (not supported by {self.display_name})")
        return ""

    def render_hook(self, section: HookSection, warnings: list[str]) -> str:
        warnings.append(f"Hook section skipped (not supported by {self.display_name})")
        return ""

    def render_custom(self, section: CustomSection, warnings: list[str]) -> str:
        if not section.editor_type or section.editor_type == self.name:
            if section.title:
                return "\n".join([self.title_line(section.title), "", section.content])
            return section.content
        warnings.append(f"Custom {section.editor_type} section skipped")
        return ""

    @property
    def display_name(self) -> str:
        return self.label or self.name.capitalize()


class PlainMarkdownSerializer(MarkdownSerializer):
    """Title, description and sections with no required header.

    Shared by the tools that read plain markdown rule files (AGENTS.md,
    Aider conventions, Trae and Zencoder rules).
    """

    rationale_template = "   - Rationale: {}"

    def render_body(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        lines = [f"# {pkg.title}"]
        description = self.body_description(pkg)
        if description:
            lines += ["", description]
        for section in pkg.sections:
            if section.type == "metadata":
                continue
            text = self.render_section(section, pkg, warnings)
            if text:
                lines += ["", text]
        return "\n".join(lines).strip()

    def body_description(self, pkg: CanonicalPackage) -> str:
        return pkg.display_description

    def render_instructions(self, section: InstructionsSection, warnings: list[str]) -> str:
        lines = [self.title_line(section.title), ""] if section.title else []
        lines.append(section.content)
        return "\n".join(lines)

    def example_heading(self, description: str, good: bool | None) -> str:
        if good is False:
            return f"### ❌ Avoid: {description}"
        if good is True:
            return f"### ✅ Preferred: {description}"
        return f"### {description}"


# Frontmatter keys of other tools; plain rule files never contain them.
FOREIGN_MARKERS = ("inclusion:", "applyTo:", "tools:")


def is_plain_markdown(content: str) -> bool:
    """Headed markdown with no frontmatter and no other tool's keys."""
    if content.startswith("---\n"):
        return False
    return "#" in content and not any(marker in content for marker in FOREIGN_MARKERS)
