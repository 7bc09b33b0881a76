"""Parser for Windsurf rules files.

Windsurf rules are plain markdown with no structured header, so the body
after the title and description is kept whole as one instructions section.
"""

import logging
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import (
    InstructionsSection,
    MetadataData,
    MetadataSection,
    Section,
)
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.config.base import WindsurfConfig
from prompt_converters.parsers.markdown import MarkdownDocument, read_description, split_icon

logger = logging.getLogger(__name__)

WINDSURF_CHARACTER_LIMIT = 12_000


def from_windsurf(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Windsurf rules file.

    A leading ``# `` heading becomes the title and the paragraph under it
    the description, provided more text follows. Everything else is a
    single untitled instructions section. Files over the 12,000 character limit are accepted with a
    logged warning.

    Args:
        content: Markdown rules text
        metadata: Caller-supplied identity
        explicit_subtype: Optional subtype hint

    Returns:
        CanonicalPackage
    """
    meta = SourceMetadata.coerce(metadata)
    text = content.replace("\r\n", "\n")
    character_count = len(text)
    if character_count > WINDSURF_CHARACTER_LIMIT:
        logger.warning(
            "Windsurf rules for %s are %d characters, over the %d character limit",
            meta.id,
            character_count,
            WINDSURF_CHARACTER_LIMIT,
        )

    header = MarkdownDocument()
    lines = text.strip().split("\n")
    start = 0
    if lines and lines[0].startswith("# "):
        header.icon, header.title = split_icon(lines[0][2:])
        start = read_description(lines, 1, header)
        if not "\n".join(lines[start:]).strip():
            # A lone paragraph under the title is the rule text itself
            header.description = None
            start = 1
    instructions = "\n".join(lines[start:]).strip()

    title = header.title or meta.name or meta.id
    description = header.description or meta.description or ""

    sections: list[Section] = [
        MetadataSection(data=MetadataData(title=title, description=description, icon=header.icon))
    ]
    if instructions:
        sections.append(InstructionsSection(title="", content=instructions))

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or meta.id,
        description=description,
        author=meta.author or "unknown",
        tags=list(meta.tags or []),
        metadata=PackageMetadata(
            title=title,
            description=description or None,
            icon=header.icon,
            windsurf_config=WindsurfConfig(character_count=character_count),
        ),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.WINDSURF, resolve_subtype(explicit_subtype))
