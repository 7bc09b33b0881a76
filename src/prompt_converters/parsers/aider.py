"""Parser for Aider conventions files (``CONVENTIONS.md``).

Conventions files are plain markdown without frontmatter. Their ``##``
sections are typed by a wider keyword list than other plain formats use,
since conventions often sit under headings such as "Requirements" or
"Usage".
"""

from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import ContextSection, MetadataData, MetadataSection, Section
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.parsers.markdown import keyword_section, split_markdown

MAX_DESCRIPTION_LENGTH = 200
MAX_INFERRED_TAGS = 5

TECH_KEYWORDS = (
    "typescript",
    "javascript",
    "python",
    "react",
    "testing",
    "api",
    "backend",
    "frontend",
    "database",
    "security",
)

AIDER_EXAMPLE_WORDS = ("example", "sample", "usage")
AIDER_RULE_WORDS = ("rule", "guideline", "standard", "convention", "requirement", "must", "should")
AIDER_CONTEXT_WORDS = ("context", "background", "overview", "about", "introduction")


def from_aider(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse an Aider conventions file.

    The first paragraph under the H1 is the description (cut to 200
    characters), other text before the first ``##`` becomes a "Project
    Overview" context section, and conventions files are rules unless a
    subtype is given.

    Args:
        content: Markdown conventions text
        metadata: Caller-supplied identity
        explicit_subtype: Optional subtype hint

    Returns:
        CanonicalPackage
    """
    meta = SourceMetadata.coerce(metadata)
    body = split_markdown(content)
    title = body.title or meta.name or meta.id
    description = meta.description or (body.description or "")[:MAX_DESCRIPTION_LENGTH]

    sections: list[Section] = [
        MetadataSection(data=MetadataData(title=title, description=description, icon=body.icon))
    ]
    if body.preamble:
        sections.append(ContextSection(title="Project Overview", content=body.preamble))
    sections.extend(
        keyword_section(block, AIDER_EXAMPLE_WORDS, AIDER_RULE_WORDS, AIDER_CONTEXT_WORDS)
        for block in body.blocks
    )

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or meta.id,
        description=description,
        author=meta.author or "unknown",
        tags=list(meta.tags) if meta.tags else ["aider", *infer_tags(content)],
        metadata=PackageMetadata(title=title, description=description or None, icon=body.icon),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.AIDER, resolve_subtype(explicit_subtype))


def infer_tags(content: str) -> list[str]:
    """Technology keywords mentioned in the text, at most five."""
    lowered = content.lower()
    return [keyword for keyword in TECH_KEYWORDS if keyword in lowered][:MAX_INFERRED_TAGS]
