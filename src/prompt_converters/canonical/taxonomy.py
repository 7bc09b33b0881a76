"""Format and subtype classification helpers.

All functions are pure except ``set_taxonomy``, which writes the two
taxonomy fields of the package it is given.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from prompt_converters.canonical.formats import Format, Subtype

if TYPE_CHECKING:
    from prompt_converters.canonical.package import CanonicalPackage


# Checked in order; the first name found inside the input wins.
FORMAT_PRIORITY: tuple[tuple[str, Format], ...] = (
    ("agents.md", Format.AGENTS_MD),
    ("agents-md", Format.AGENTS_MD),
    ("agentsmd", Format.AGENTS_MD),
    ("claude", Format.CLAUDE),
    ("cursor", Format.CURSOR),
    ("continue", Format.CONTINUE),
    ("windsurf", Format.WINDSURF),
    ("copilot", Format.COPILOT),
    ("kiro", Format.KIRO),
    ("gemini", Format.GEMINI),
    ("opencode", Format.OPENCODE),
    ("ruler", Format.RULER),
    ("droid", Format.DROID),
    ("trae", Format.TRAE),
    ("aider", Format.AIDER),
    ("zencoder", Format.ZENCODER),
    ("replit", Format.REPLIT),
    ("mcp", Format.MCP),
)

# Frontmatter keys that older packages used to declare their subtype.
SUBTYPE_FIELDS = ("type", "agentType", "skillType", "commandType")

SUBTYPE_ALIASES: dict[str, Subtype] = {
    "command": Subtype.SLASH_COMMAND,
    "slash_command": Subtype.SLASH_COMMAND,
    "slashcommand": Subtype.SLASH_COMMAND,
    "slash command": Subtype.SLASH_COMMAND,
    "rules": Subtype.RULE,
    "agents": Subtype.AGENT,
    "skills": Subtype.SKILL,
    "prompts": Subtype.PROMPT,
    "chat-mode": Subtype.CHATMODE,
    "chat_mode": Subtype.CHATMODE,
}

# Directory conventions used by editors, mapped to the subtype they imply.
PATH_SUBTYPES: tuple[tuple[str, Subtype], ...] = (
    (".claude/commands/", Subtype.SLASH_COMMAND),
    (".claude/agents/", Subtype.AGENT),
    (".claude/skills/", Subtype.SKILL),
    (".cursor/commands/", Subtype.SLASH_COMMAND),
    (".factory/commands/", Subtype.SLASH_COMMAND),
    (".factory/skills/", Subtype.SKILL),
    (".continue/prompts/", Subtype.PROMPT),
    (".gemini/commands/", Subtype.SLASH_COMMAND),
    (".github/chatmodes/", Subtype.CHATMODE),
    (".github/prompts/", Subtype.PROMPT),
    (".kiro/agents/", Subtype.AGENT),
    (".windsurf/workflows/", Subtype.WORKFLOW),
)


def normalize_format(value: Format | str | None) -> Format:
    """Map a loosely written format name to a known ``Format``.

    An exact match wins; otherwise the first name in ``FORMAT_PRIORITY``
    contained in the value is used. Anything else is ``generic``.

    Args:
        value: Format name such as ``"Claude"``, ``"cursor-rules"`` or ``"agents.md"``

    Returns:
        The matching Format, or ``Format.GENERIC``
    """
    if isinstance(value, Format):
        return value
    if not value:
        return Format.GENERIC

    lowered = value.strip().lower()
    try:
        return Format(lowered)
    except ValueError:
        pass

    for name, fmt in FORMAT_PRIORITY:
        if name in lowered:
            return fmt
    return Format.GENERIC


def normalize_subtype(value: Subtype | str | None) -> Subtype | None:
    """Map a subtype name or alias to ``Subtype``; None when unknown."""
    if isinstance(value, Subtype):
        return value
    if not value or not isinstance(value, str):
        return None

    lowered = value.strip().lower()
    try:
        return Subtype(lowered)
    except ValueError:
        return SUBTYPE_ALIASES.get(lowered)


def detect_subtype_from_frontmatter(frontmatter: Mapping[str, Any] | None) -> Subtype:
    """Read the subtype declared in frontmatter.

    Args:
        frontmatter: Parsed frontmatter mapping

    Returns:
        The first recognizable value of ``type``, ``agentType``,
        ``skillType`` or ``commandType``; ``rule`` when none is present
    """
    if not frontmatter:
        return Subtype.RULE

    for key in SUBTYPE_FIELDS:
        subtype = normalize_subtype(frontmatter.get(key))
        if subtype is not None:
            return subtype

    # agentType: true style flags
    if frontmatter.get("agentType") is True:
        return Subtype.AGENT
    if frontmatter.get("skillType") is True:
        return Subtype.SKILL
    if frontmatter.get("commandType") is True:
        return Subtype.SLASH_COMMAND
    return Subtype.RULE


def resolve_subtype(
    explicit: Subtype | str | None,
    frontmatter: Mapping[str, Any] | None = None,
    default: Subtype = Subtype.RULE,
) -> Subtype:
    """Apply subtype precedence: explicit hint, then frontmatter, then default."""
    subtype = normalize_subtype(explicit)
    if subtype is not None:
        return subtype

    if frontmatter:
        for key in SUBTYPE_FIELDS:
            if key in frontmatter:
                return detect_subtype_from_frontmatter(frontmatter)
    return default


def subtype_from_path(path: str | None) -> Subtype | None:
    """Infer a subtype from editor directory conventions."""
    if not path:
        return None

    normalized = "/" + str(path).replace("\\", "/").lstrip("/")
    for marker, subtype in PATH_SUBTYPES:
        if "/" + marker in normalized:
            return subtype
    if normalized.endswith(".chatmode.md"):
        return Subtype.CHATMODE
    if normalized.endswith(".prompt.md"):
        return Subtype.PROMPT
    return None


def set_taxonomy(
    pkg: "CanonicalPackage",
    format: Format | str,
    subtype: Subtype | str | None = None,
) -> "CanonicalPackage":
    """Stamp a package with its format and subtype.

    The subtype falls back to the package's current value and finally to
    ``rule``, so it is never empty afterwards. ``source_format`` is filled
    in when the parser left it unset.

    Args:
        pkg: Package to update in place
        format: Format name or enum
        subtype: Optional subtype name or enum

    Returns:
        The same package
    """
    pkg.format = normalize_format(format)
    pkg.subtype = normalize_subtype(subtype) or normalize_subtype(pkg.subtype) or Subtype.RULE
    if pkg.source_format is None:
        pkg.source_format = pkg.format
    return pkg
