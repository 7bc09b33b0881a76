"""Parser for Ruler rules files (``.ruler/*.md``).

Ruler files are plain markdown. The package identity is read from
``<!-- Package: ... -->``, ``<!-- Author: ... -->`` and
``<!-- Description: ... -->`` comments when present.
"""

import re
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import MetadataData, MetadataSection, Section
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.parsers.markdown import keyword_sections, split_markdown

COMMENT_PATTERN = re.compile(r"<!--\s*(Package|Author|Description):\s*(.*?)\s*-->", re.IGNORECASE)
DEFAULT_NAME = "ruler-rule"


def from_ruler(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Ruler rules file.

    Comment fields win over caller metadata. Text before the first heading
    is the description; without it, the paragraph under the H1 is used.

    Args:
        content: Markdown rules text
        metadata: Caller-supplied identity
        explicit_subtype: Optional subtype hint

    Returns:
        CanonicalPackage
    """
    meta = SourceMetadata.coerce(metadata)
    text = content.replace("\r\n", "\n")
    fields = {key.lower(): value for key, value in COMMENT_PATTERN.findall(text)}
    intro, rest = _split_intro(COMMENT_PATTERN.sub("", text).strip())

    body = split_markdown(rest)
    name = fields.get("package") or meta.name or DEFAULT_NAME
    title = body.title or name
    description = fields.get("description") or meta.description or intro or body.description or ""

    sections: list[Section] = [
        MetadataSection(data=MetadataData(title=title, description=description, icon=body.icon))
    ]
    sections.extend(keyword_sections(body))

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=name,
        description=description,
        author=fields.get("author") or meta.author or "unknown",
        tags=list(meta.tags or []),
        metadata=PackageMetadata(title=title, description=description or None, icon=body.icon),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.RULER, resolve_subtype(explicit_subtype))


def _split_intro(text: str) -> tuple[str, str]:
    """Split off the paragraphs ahead of the first heading."""
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if line.startswith("#"):
            intro = " ".join(part.strip() for part in lines[:index] if part.strip())
            return intro, "\n".join(lines[index:])
    return "", text
