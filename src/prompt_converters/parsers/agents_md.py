"""Parser for AGENTS.md files (OpenAI Codex and compatible agents)."""

import re
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import MetadataData, MetadataSection, Section
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.config.base import AgentsMdConfig
from prompt_converters.parsers.frontmatter import split_frontmatter
from prompt_converters.parsers.markdown import keyword_sections, split_markdown

MAX_TAGS = 6

# keyword found in the document -> tag
TAG_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("typescript", "typescript"),
    ("javascript", "javascript"),
    ("python", "python"),
    ("react", "react"),
    ("test", "testing"),
    ("api", "api"),
    ("docker", "docker"),
    ("codex", "codex"),
)


def from_agents_md(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse an AGENTS.md file.

    Args:
        content: Markdown with optional ``project``/``scope`` frontmatter
        metadata: Caller-supplied identity
        explicit_subtype: Optional subtype hint

    Returns:
        CanonicalPackage
    """
    meta = SourceMetadata.coerce(metadata)
    document = split_frontmatter(content, format=Format.AGENTS_MD.value)
    fm = document.frontmatter

    body = split_markdown(document.body)
    title = body.title or meta.name or meta.id
    description = meta.description or body.description or ""

    sections: list[Section] = [
        MetadataSection(data=MetadataData(title=title, description=description, icon=body.icon))
    ]
    sections.extend(keyword_sections(body))

    agents_md_config = None
    if fm.get("project") or fm.get("scope"):
        agents_md_config = AgentsMdConfig(
            project=str(fm["project"]) if fm.get("project") else None,
            scope=str(fm["scope"]) if fm.get("scope") else None,
        )

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or meta.id,
        description=description,
        author=meta.author or "unknown",
        tags=_tags(meta.tags, document.body, agents_md_config),
        metadata=PackageMetadata(
            title=title,
            description=description or None,
            icon=body.icon,
            agents_md_config=agents_md_config,
        ),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.AGENTS_MD, resolve_subtype(explicit_subtype, fm))


def _tags(provided: list[str] | None, body: str, config: AgentsMdConfig | None) -> list[str]:
    """Caller tags plus ``agents.md`` and inferred technology tags."""
    tags = list(provided or [])
    if "agents.md" not in tags:
        tags.append("agents.md")

    lowered = body.lower()
    if config and config.scope:
        lowered = f"{lowered} {config.scope.lower()}"
    for keyword, tag in TAG_KEYWORDS:
        if len(tags) >= MAX_TAGS:
            break
        if tag not in tags and re.search(rf"\b{keyword}", lowered):
            tags.append(tag)
    return tags
