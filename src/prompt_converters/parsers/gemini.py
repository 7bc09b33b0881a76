"""Parser for Gemini CLI custom commands (``.gemini/commands/*.toml``)."""

import tomllib
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import InstructionsSection, MetadataData, MetadataSection
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.errors import ParseError


def from_gemini(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Gemini TOML command.

    The prompt is kept verbatim as a single instructions section.

    Args:
        content: TOML text with a ``prompt`` and optional ``description``
        metadata: Caller-supplied identity
        explicit_subtype: Optional subtype hint; defaults to ``slash-command``

    Returns:
        CanonicalPackage

    Raises:
        ParseError: If the TOML is invalid or has no string ``prompt``
    """
    meta = SourceMetadata.coerce(metadata)
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(
            f"Failed to parse Gemini TOML: {e}",
            format=Format.GEMINI.value,
        ) from e

    prompt = data.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise ParseError(
            'Gemini command must have a "prompt" field',
            format=Format.GEMINI.value,
            field="prompt",
        )

    description = data.get("description")
    description = description if isinstance(description, str) else meta.description or ""
    title = meta.name or meta.id

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=meta.name or meta.id,
        description=description,
        author=meta.author or "unknown",
        tags=list(meta.tags or []),
        metadata=PackageMetadata(title=title, description=description or None),
    )
    pkg.content.sections = [
        MetadataSection(data=MetadataData(title=title, description=description)),
        InstructionsSection(title="Instructions", content=prompt),
    ]
    return set_taxonomy(
        pkg,
        Format.GEMINI,
        resolve_subtype(explicit_subtype, default=Subtype.SLASH_COMMAND),
    )
