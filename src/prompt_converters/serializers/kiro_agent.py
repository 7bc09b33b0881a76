"""Serializer for Kiro agent JSON configurations."""

import json
from typing import Any

from prompt_converters.canonical.formats import Format, SectionType
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.canonical.sections import (
    ContextSection,
    CustomSection,
    ExamplesSection,
    InstructionsSection,
    PersonaSection,
    RulesSection,
    ToolsSection,
)
from prompt_converters.serializers.base import Serializer


class KiroAgentSerializer(Serializer):
    """Builds an agent JSON object; sections become the ``prompt`` text.

    The prompt uses ``## Instructions``, ``## Rules`` and ``## Examples``
    headings so that it parses back into the same sections.
    """

    name = "kiro-agent"
    format = Format.KIRO

    def build_agent(self, pkg: CanonicalPackage, warnings: list[str]) -> dict[str, Any]:
        agent: dict[str, Any] = {"name": pkg.name}
        if pkg.display_description:
            agent["description"] = pkg.display_description

        prompt = self.build_prompt(pkg, warnings)
        if prompt:
            agent["prompt"] = prompt

        settings = pkg.metadata.kiro_agent.to_dict() if pkg.metadata and pkg.metadata.kiro_agent else {}
        tools = pkg.get_section(SectionType.TOOLS)
        if isinstance(tools, ToolsSection) and tools.tools and "tools" not in settings:
            settings["tools"] = tools.tools
        agent_model = pkg.metadata.claude_agent.model if pkg.metadata and pkg.metadata.claude_agent else None
        if agent_model and "model" not in settings:
            settings["model"] = agent_model
        agent.update(settings)
        return agent

    def build_prompt(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        parts: list[str] = []
        for section in pkg.sections:
            if isinstance(section, PersonaSection):
                parts.append(_persona_text(section))
            elif isinstance(section, InstructionsSection):
                parts.append(f"## {section.title or 'Instructions'}\n\n{section.content}")
            elif isinstance(section, RulesSection):
                lines = [f"## {section.title or 'Rules'}", ""]
                for rule in section.items:
                    lines.append(f"- {rule.content}")
                    if rule.rationale:
                        lines.append(f"   - *Rationale: {rule.rationale}*")
                parts.append("\n".join(lines))
            elif isinstance(section, ExamplesSection):
                lines = [f"## {section.title or 'Examples'}"]
                for example in section.examples:
                    lines += ["", f"### {example.description}", "", f"```{example.language or ''}", example.code, "```"]
                parts.append("\n".join(lines))
            elif isinstance(section, (ContextSection, CustomSection)):
                if isinstance(section, CustomSection) and section.editor_type not in (None, "kiro"):
                    warnings.append(f"Custom {section.editor_type} section skipped")
                    continue
                parts.append(f"## {section.title or 'Context'}\n\n{section.content}")
            elif section.type == SectionType.HOOK.value:
                warnings.append("Hook section skipped (not supported by Kiro agents)")
        return "\n\n".join(p for p in parts if p).strip()

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        return json.dumps(self.build_agent(pkg, warnings), indent=2, ensure_ascii=False)

    def validate(self, content, pkg, warnings):
        from prompt_converters.engine.validation_engine import ValidationEngine

        result = ValidationEngine().validate_format("kiro", json.loads(content), "agent")
        return [i.message for i in result.errors]


def _persona_text(section: PersonaSection) -> str:
    data = section.data
    sentences = []
    if data.name:
        sentences.append(f"You are {data.name}, {data.role}." if data.role else f"You are {data.name}.")
    elif data.role:
        sentences.append(f"You are {data.role}.")
    if data.style:
        sentences.append(f"Your communication style is {', '.join(data.style)}.")
    if data.expertise:
        sentences.append(f"You specialize in: {', '.join(data.expertise)}.")
    return " ".join(sentences)


def to_kiro_agent(pkg: CanonicalPackage, options: None = None) -> ConversionResult:
    """Convert a canonical package to a Kiro agent JSON configuration."""
    return KiroAgentSerializer(options).serialize(pkg)


def is_kiro_agent_format(content: str) -> bool:
    """A JSON object with a name or description and agent fields."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return False
    if not isinstance(data, dict) or not (data.get("name") or data.get("description")):
        return False
    return bool(data.get("prompt") or data.get("tools") or data.get("mcpServers"))
