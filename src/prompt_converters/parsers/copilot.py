"""Parser for GitHub Copilot instruction files."""

from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import MetadataData, MetadataSection, Section
from prompt_converters.canonical.taxonomy import normalize_subtype, set_taxonomy
from prompt_converters.config.base import CopilotConfig
from prompt_converters.parsers.frontmatter import split_frontmatter
from prompt_converters.parsers.markdown import keyword_sections, split_markdown

COPILOT_SUBTYPES = (Subtype.CHATMODE, Subtype.TOOL, Subtype.PROMPT, Subtype.AGENT)


def from_copilot(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse ``copilot-instructions.md`` or a ``*.instructions.md`` file.

    Args:
        content: Markdown with optional ``applyTo`` frontmatter
        metadata: Caller-supplied identity
        explicit_subtype: Optional subtype hint

    Returns:
        CanonicalPackage
    """
    meta = SourceMetadata.coerce(metadata)
    document = split_frontmatter(content, format=Format.COPILOT.value)
    fm = document.frontmatter

    apply_to = fm.get("applyTo")
    if isinstance(apply_to, list):
        apply_to = [str(p) for p in apply_to]
        if len(apply_to) == 1:
            apply_to = apply_to[0]
    elif apply_to is not None:
        apply_to = str(apply_to)

    body = split_markdown(document.body)
    title = body.title or meta.name or meta.id
    description = meta.description or body.description or str(fm.get("description") or "")

    sections: list[Section] = [
        MetadataSection(data=MetadataData(title=title, description=description, icon=body.icon))
    ]
    sections.extend(keyword_sections(body))

    subtype = normalize_subtype(explicit_subtype)
    if subtype is None:
        declared = normalize_subtype(fm.get("subtype")) or normalize_subtype(fm.get("type"))
        subtype = declared if declared in COPILOT_SUBTYPES else Subtype.RULE

    copilot_config = None
    if apply_to or fm.get("excludeAgent"):
        copilot_config = CopilotConfig(
            apply_to=apply_to,
            exclude_agent=str(fm["excludeAgent"]) if fm.get("excludeAgent") else None,
        )

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or meta.id,
        description=description,
        author=meta.author or "unknown",
        tags=list(meta.tags or ["copilot"]),
        metadata=PackageMetadata(
            title=title,
            description=description or None,
            icon=body.icon,
            copilot_config=copilot_config,
        ),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.COPILOT, subtype)
