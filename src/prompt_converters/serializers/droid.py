"""Serializer for Factory Droid skills and commands.

Skills live in ``.factory/skills/<name>/SKILL.md`` and slash commands in
``.factory/commands/*.md``; both are markdown behind YAML frontmatter.
"""

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import DroidConfig
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer
from prompt_converters.serializers.scoring import DROID_SECTION_TYPES

DROID_KEYS = ("argument-hint", "allowed-tools")


class DroidSerializer(MarkdownSerializer):
    """Frontmatter plus an untitled instructions body; tools go to ``allowed-tools``.

    Section types Droid has no place for are dropped together, with one
    warning naming them.
    """

    name = "droid"
    label = "Factory Droid"
    format = Format.DROID
    options_type = DroidConfig

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        config = self.options or DroidConfig()
        stored = pkg.metadata.droid if pkg.metadata and pkg.metadata.droid else DroidConfig()
        tools_section = pkg.get_section("tools")
        section_tools = tools_section.tools if tools_section is not None else None
        return build_frontmatter(
            [
                ("name", pkg.title or pkg.name),
                ("description", pkg.display_description or None),
                ("argument-hint", config.argument_hint or stored.argument_hint),
                ("allowed-tools", config.allowed_tools or stored.allowed_tools or section_tools or None),
            ]
        )

    def render_body(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        parts = []
        skipped = []
        for section in pkg.sections:
            if section.type not in DROID_SECTION_TYPES:
                skipped.append(section.type)
                continue
            if section.type == "metadata":
                continue
            text = self.render_section(section, pkg, warnings)
            if text:
                parts.append(text)
        if skipped:
            warnings.append(
                f"Factory Droid does not support these section types: {', '.join(skipped)}. They were skipped."
            )
        return "\n\n".join(parts).strip()

    def render_persona(self, section, warnings):
        warnings.append("Persona section converted to Role heading")
        return f"# Role\n\n{section.data.role}"

    def render_instructions(self, section, warnings):
        return section.content

    def render_tools(self, section, warnings):
        # Listed as allowed-tools in the frontmatter
        return ""


def to_droid(pkg: CanonicalPackage, options: DroidConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Factory Droid skill or command."""
    return DroidSerializer(options).serialize(pkg)


def is_droid_format(content: str) -> bool:
    """Frontmatter with ``argument-hint`` or ``allowed-tools``."""
    document = split_frontmatter(content)
    return document.has_frontmatter and any(key in document.frontmatter for key in DROID_KEYS)
