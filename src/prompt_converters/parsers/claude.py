"""Parser for Claude agents, skills and commands.

Cursor rules, Continue rules and Factory Droid files share this document
shape, so their parsers are thin wrappers that relabel the result.
"""

from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, PackageMetadata, SourceMetadata
from prompt_converters.canonical.sections import (
    InstructionsSection,
    MetadataData,
    MetadataSection,
    PersonaSection,
    Section,
    ToolsSection,
)
from prompt_converters.canonical.taxonomy import resolve_subtype, set_taxonomy
from prompt_converters.config.base import ClaudeAgentConfig, ContinueConfig, DroidConfig
from prompt_converters.parsers.frontmatter import Frontmatter, as_list, split_frontmatter
from prompt_converters.parsers.markdown import (
    claude_section,
    is_persona_text,
    parse_persona,
    split_markdown,
)


def from_claude(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    source_format: Format | str = Format.CLAUDE,
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Claude markdown document into a canonical package.

    Args:
        content: Markdown with optional YAML frontmatter
        metadata: Caller-supplied identity (id, name, version, ...)
        source_format: Format tag to stamp on the package
        explicit_subtype: Subtype hint that overrides frontmatter

    Returns:
        CanonicalPackage
    """
    meta = SourceMetadata.coerce(metadata)
    document = split_frontmatter(content, format=str(source_format))
    fm = document.frontmatter

    name = _str(fm.get("name")) or meta.name or meta.id
    description = _str(fm.get("description")) or meta.description or ""
    model = _str(fm.get("model"))
    claude_agent = ClaudeAgentConfig(model=model) if model else None

    body = split_markdown(document.body, extract_description=False)
    title = body.title or name
    icon = body.icon or _str(fm.get("icon"))

    sections: list[Section] = [
        MetadataSection(
            data=MetadataData(
                title=title,
                description=description,
                icon=icon,
                version=_str(fm.get("version")) or meta.version or "1.0.0",
                author=_str(fm.get("author")) or meta.author,
                claude_agent=claude_agent,
            )
        )
    ]

    tools = as_list(fm.get("tools")) or as_list(fm.get("allowed-tools"))
    if tools:
        sections.append(ToolsSection(tools=tools))

    if body.preamble:
        if is_persona_text(body.preamble):
            sections.append(PersonaSection(data=parse_persona(body.preamble)))
        else:
            sections.append(InstructionsSection(title="Overview", content=body.preamble))

    sections.extend(claude_section(block) for block in body.blocks)

    pkg = CanonicalPackage(
        id=meta.id,
        version=meta.version or "1.0.0",
        name=name,
        description=description,
        author=meta.author or _str(fm.get("author")) or "unknown",
        tags=list(meta.tags or []),
        metadata=PackageMetadata(
            title=title,
            description=description or None,
            icon=icon,
            version=_str(fm.get("version")),
            globs=as_list(fm.get("globs")) or None,
            always_apply=fm.get("alwaysApply") if isinstance(fm.get("alwaysApply"), bool) else None,
            claude_agent=claude_agent,
        ),
    )
    pkg.content.sections = sections
    return set_taxonomy(pkg, source_format, resolve_subtype(explicit_subtype, fm))


def from_cursor(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Cursor rule; Cursor rules are read like Claude documents."""
    pkg = from_claude(content, metadata, Format.CURSOR, explicit_subtype)
    return _relabel(pkg, Format.CURSOR)


def from_continue(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Continue rule or prompt; same shape as a Claude document."""
    pkg = from_claude(content, metadata, Format.CONTINUE, explicit_subtype)
    fm = split_frontmatter(content).frontmatter
    if "invokable" in fm and explicit_subtype is None and fm.get("invokable") is True:
        pkg.subtype = Subtype.PROMPT
    continue_config = _continue_config(fm)
    if continue_config is not None and pkg.metadata is not None:
        pkg.metadata.continue_config = continue_config
    return _relabel(pkg, Format.CONTINUE)


def from_droid(
    content: str,
    metadata: SourceMetadata | dict[str, Any],
    explicit_subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse a Factory Droid skill or command; same shape as a Claude document.

    ``allowed-tools`` becomes a tools section and ``argument-hint`` is kept
    in the package metadata.
    """
    pkg = from_claude(content, metadata, Format.DROID, explicit_subtype)
    hint = _str(split_frontmatter(content).frontmatter.get("argument-hint"))
    if hint and pkg.metadata is not None:
        pkg.metadata.droid = DroidConfig(argument_hint=hint)
    return _relabel(pkg, Format.DROID)


def _relabel(pkg: CanonicalPackage, fmt: Format) -> CanonicalPackage:
    pkg.format = fmt
    pkg.source_format = fmt
    return pkg


def _continue_config(fm: Frontmatter) -> ContinueConfig | None:
    keys = ("globs", "regex", "alwaysApply", "version", "schema")
    if not any(key in fm for key in keys):
        return None
    data = {key: fm[key] for key in keys if fm.get(key) is not None}
    for key in ("version", "schema"):
        if key in data:
            data[key] = str(data[key])
    return ContinueConfig.model_validate(data)


def _str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
