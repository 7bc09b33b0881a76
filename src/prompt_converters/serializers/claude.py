"""Serializer for Claude agents, skills and slash commands."""

from prompt_converters.canonical.formats import Format, SectionType, Subtype
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.canonical.sections import PersonaSection, ToolsSection
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer

# Sections emitted outside the main loop.
HOISTED = (SectionType.METADATA.value, SectionType.TOOLS.value, SectionType.PERSONA.value)


class ClaudeSerializer(MarkdownSerializer):
    """Renders YAML frontmatter, a title, persona prose, then sections."""

    name = "claude"
    format = Format.CLAUDE
    important_label = "**IMPORTANT:**"
    rationale_template = "   *{}*"
    rule_example_template = "   Example: `{}`"

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        parts = [self.render_header(pkg, warnings), f"# {pkg.icon} {pkg.title}" if pkg.icon else f"# {pkg.title}"]

        persona = pkg.get_section(SectionType.PERSONA)
        if persona is not None and (persona.data.name or persona.data.role):
            parts.append(self.render_persona_prose(persona))

        for section in pkg.sections:
            if section.type in HOISTED:
                continue
            text = self.render_section(section, pkg, warnings)
            if text:
                parts.append(text)
        return "\n\n".join(parts).strip()

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        metadata = pkg.metadata_section
        description = (metadata.data.description if metadata else "") or pkg.display_description
        agent = (metadata.data.claude_agent if metadata else None) or (
            pkg.metadata.claude_agent if pkg.metadata else None
        )

        tools: ToolsSection | None = pkg.get_section(SectionType.TOOLS)
        tools_key = "allowed-tools" if pkg.subtype in (Subtype.SKILL, Subtype.SLASH_COMMAND) else "tools"
        return build_frontmatter(
            [
                ("name", pkg.name),
                ("description", description),
                ("icon", pkg.icon),
                (tools_key, ", ".join(tools.tools) if tools and tools.tools else None),
                ("model", agent.model if agent else None),
            ]
        )

    def render_persona_prose(self, section: PersonaSection) -> str:
        data = section.data
        if data.name:
            lines = [f"You are {data.name}, {data.role}." if data.role else f"You are {data.name}."]
        else:
            lines = [f"You are {data.role}."]
        if data.style:
            lines += ["", f"Your communication style is {', '.join(data.style)}."]
        if data.expertise:
            lines += ["", "Your areas of expertise include:"]
            lines += [f"- {area}" for area in data.expertise]
        return "\n".join(lines)

    def example_heading(self, description: str, good: bool | None) -> str:
        if good is False:
            return f"### ❌ Incorrect: {description}"
        return f"### ✓ {description}"


def to_claude(pkg: CanonicalPackage, options: None = None) -> ConversionResult:
    """Convert a canonical package to a Claude markdown document."""
    return ClaudeSerializer(options).serialize(pkg)


def is_claude_format(content: str) -> bool:
    """Claude documents open with frontmatter that names the agent."""
    document = split_frontmatter(content)
    return document.has_frontmatter and "name" in document.frontmatter
