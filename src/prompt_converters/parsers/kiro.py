"""Parser for Kiro steering files (``.kiro/steering/*.md``)."""

import re
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import MetadataData, MetadataSection, Section
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.config.base import FoundationalType, KiroConfig, KiroInclusion
from prompt_converters.errors import ParseError
from prompt_converters.parsers.frontmatter import Frontmatter, split_frontmatter
from prompt_converters.parsers.markdown import keyword_sections, split_markdown

PATTERN_SEGMENT = re.compile(r"/([^/*]+)/")


def from_kiro(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Kiro steering file.

    Args:
        content: Markdown with YAML frontmatter
        metadata: Caller-supplied identity; ``name`` is treated as the file name
        explicit_subtype: Optional subtype hint

    Returns:
        CanonicalPackage

    Raises:
        ParseError: If the frontmatter is missing, unparsable, lacks a valid
            ``inclusion``, or uses ``fileMatch`` without a pattern
    """
    meta = SourceMetadata.coerce(metadata)
    document = split_frontmatter(content, strict=True, format=Format.KIRO.value)
    fm = document.frontmatter
    inclusion = _inclusion(fm)
    pattern = fm.get("fileMatchPattern")
    if inclusion is KiroInclusion.FILE_MATCH and not pattern:
        raise ParseError(
            "fileMatch inclusion mode requires fileMatchPattern",
            format=Format.KIRO.value,
            field="fileMatchPattern",
        )

    filename = (meta.name or meta.id).removesuffix(".md")
    foundational = _foundational_type(filename)
    domain = str(fm.get("domain") or filename.replace("-", " "))

    body = split_markdown(document.body)
    title = body.title or meta.name or meta.id
    description = meta.description or body.description or ""

    sections: list[Section] = [
        MetadataSection(data=MetadataData(title=title, description=description, icon=body.icon))
    ]
    sections.extend(keyword_sections(body))

    kiro_config = KiroConfig(
        filename=filename,
        inclusion=inclusion,
        file_match_pattern=str(pattern) if pattern else None,
        domain=domain,
        foundational_type=foundational,
    )
    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or meta.id,
        description=description,
        author=meta.author or "unknown",
        tags=list(meta.tags) if meta.tags else ["kiro", *_infer_tags(kiro_config)],
        metadata=PackageMetadata(
            title=title,
            description=description or None,
            icon=body.icon,
            kiro_config=kiro_config,
        ),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, Format.KIRO, resolve_subtype(explicit_subtype, fm))


def _inclusion(fm: Frontmatter) -> KiroInclusion:
    value = fm.get("inclusion")
    try:
        return KiroInclusion(value)
    except ValueError:
        detail = f" (always|fileMatch|manual), got {value!r}" if value else ""
        raise ParseError(
            f"Kiro steering files require inclusion field in frontmatter{detail}",
            format=Format.KIRO.value,
            field="inclusion",
        ) from None


def _foundational_type(filename: str) -> FoundationalType | None:
    try:
        return FoundationalType(filename.lower())
    except ValueError:
        return None


def _infer_tags(config: KiroConfig) -> list[str]:
    tags = []
    if config.foundational_type:
        tags.append(f"kiro-{config.foundational_type.value}")
    if config.inclusion:
        tags.append(f"kiro-{config.inclusion.value}")
    if config.file_match_pattern:
        match = PATTERN_SEGMENT.search(config.file_match_pattern)
        if match:
            tags.append(match.group(1))
    return tags
