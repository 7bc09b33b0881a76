"""Parser for Kiro agent configurations (``.kiro/agents/*.json``)."""

import json
import re
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import (
    CustomSection,
    Example,
    ExamplesSection,
    InstructionsSection,
    MetadataData,
    MetadataSection,
    Rule,
    RulesSection,
    Section,
)
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.config.base import KiroAgentConfig, KiroConfig, KiroInclusion
from prompt_converters.errors import ParseError
from prompt_converters.parsers.markdown import parse_examples, parse_rule_items

SECTION_SPLIT = re.compile(r"(?:^|\n)## ")
SUBSECTION_SPLIT = re.compile(r"(?:^|\n)### ")
AGENT_SETTINGS = (
    "tools",
    "mcpServers",
    "toolAliases",
    "allowedTools",
    "toolsSettings",
    "resources",
    "hooks",
    "useLegacyMcpJson",
    "model",
)


def from_kiro_agent(
    content: str,
    metadata: SourceMetadata | dict[str, Any] | None = None,
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Kiro agent JSON configuration.

    The ``prompt`` is split on ``## `` headings into instructions, rules,
    examples, and Kiro-specific custom sections. Tool and MCP settings are
    kept in the ``kiro_agent`` extension so they survive a round trip.

    Args:
        content: JSON text
        metadata: Optional caller-supplied identity; defaults to the agent name
        explicit_subtype: Optional subtype hint; defaults to ``agent``

    Returns:
        CanonicalPackage

    Raises:
        ParseError: If the content is not a JSON object
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse Kiro agent JSON: {e}", format="kiro-agent") from e
    if not isinstance(data, dict):
        raise ParseError("Kiro agent configuration must be a JSON object", format="kiro-agent")

    agent_name = data.get("name") or "kiro-agent"
    meta = SourceMetadata.coerce(metadata if metadata is not None else {"id": agent_name})
    description = data.get("description") or meta.description or ""

    metadata_data = MetadataData(title=data.get("name") or meta.name or "Kiro Agent", description=description)
    sections: list[Section] = [MetadataSection(data=metadata_data)]
    prompt = data.get("prompt")
    if isinstance(prompt, str) and prompt:
        intro = _parse_prompt(prompt, sections)
        if intro and not metadata_data.description:
            metadata_data.description = intro

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or agent_name,
        description=description or metadata_data.description,
        author=meta.author or "unknown",
        tags=list(meta.tags or []),
        metadata=PackageMetadata(
            title=metadata_data.title,
            description=metadata_data.description or None,
            kiro_config=KiroConfig(inclusion=KiroInclusion.ALWAYS),
            kiro_agent=KiroAgentConfig.model_validate(
                {key: data[key] for key in AGENT_SETTINGS if data.get(key) is not None}
            ),
        ),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.KIRO, resolve_subtype(explicit_subtype, default=Subtype.AGENT))


def _parse_prompt(prompt: str, sections: list[Section]) -> str:
    """Append the prompt's sections; return the text before the first heading."""
    if prompt.startswith("file://"):
        sections.append(
            InstructionsSection(title="Instructions", content=f"Loads instructions from: {prompt}")
        )
        return ""

    parts = SECTION_SPLIT.split(prompt)
    intro = parts[0].strip()
    for part in parts[1:]:
        title, _, body = part.partition("\n")
        title = title.strip()
        body = body.strip()
        kind = title.lower()
        if kind == "instructions":
            sections.append(InstructionsSection(title=title, content=body))
        elif kind == "rules":
            sections.append(RulesSection(title=title, items=_parse_rules(body)))
        elif kind == "examples":
            sections.append(ExamplesSection(title=title, examples=_parse_examples(body)))
        else:
            sections.append(CustomSection(editor_type="kiro", title=title, content=body))
    return intro


def _parse_rules(text: str) -> list[Rule]:
    if "### " not in text:
        return parse_rule_items(text.split("\n"))[0]

    rules = []
    for chunk in SUBSECTION_SPLIT.split(text):
        if not chunk.strip():
            continue
        title, _, description = chunk.partition("\n")
        description = description.strip()
        rules.append(Rule(content=f"{title.strip()}: {description}" if description else title.strip()))
    return rules


def _parse_examples(text: str) -> list[Example]:
    examples = parse_examples(text.split("\n"))
    if examples:
        return examples

    # headings with prose but no fenced code
    result = []
    for chunk in SUBSECTION_SPLIT.split(text):
        if not chunk.strip():
            continue
        title, _, body = chunk.partition("\n")
        result.append(Example(description=title.strip() or "Example", code=body.strip()))
    return result
