"""Utility helper functions."""

import re
from pathlib import Path, PurePath

from prompt_converters.canonical.formats import Subtype
from prompt_converters.errors import UnsupportedFormatError


def sanitize_filename(name: str) -> str:
    """Lowercase a name and reduce it to ``[a-z0-9-]``.

    Args:
        name: Display name or title

    Returns:
        Filesystem-safe slug
    """
    slug = re.sub(r"[^a-z0-9-]", "-", name.lower())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def default_output_path(
    format_name: str,
    stem: str,
    subtype: Subtype | str | None = None,
    root: str | Path = ".",
) -> Path:
    """Where a converted file conventionally lives for a target tool.

    Args:
        format_name: Target format name (``cursor``, ``kiro-agent``, ...)
        stem: Base name of the output file, without extension
        subtype: Package subtype, which picks the directory for some tools
        root: Project root the path is relative to

    Returns:
        Path of the converted file

    Raises:
        UnsupportedFormatError: If the format has no known location
    """
    subtype = Subtype(subtype) if subtype else None
    root = Path(root)

    if format_name == "cursor":
        if subtype == Subtype.SLASH_COMMAND:
            return root / ".cursor" / "commands" / f"{stem}.md"
        return root / ".cursor" / "rules" / f"{stem}.mdc"
    if format_name == "claude":
        if subtype == Subtype.SKILL:
            return root / ".claude" / "skills" / stem / "SKILL.md"
        if subtype == Subtype.SLASH_COMMAND:
            return root / ".claude" / "commands" / f"{stem}.md"
        return root / ".claude" / "agents" / f"{stem}.md"
    if format_name == "windsurf":
        return root / ".windsurf" / "rules" / f"{stem}.md"
    if format_name == "kiro":
        return root / ".kiro" / "steering" / f"{stem}.md"
    if format_name == "kiro-agent":
        return root / ".kiro" / "agents" / f"{stem}.json"
    if format_name == "copilot":
        return root / ".github" / "instructions" / f"{stem}.instructions.md"
    if format_name == "continue":
        if subtype in (Subtype.SLASH_COMMAND, Subtype.PROMPT):
            return root / ".continue" / "prompts" / f"{stem}.md"
        return root / ".continue" / "rules" / f"{stem}.md"
    if format_name == "agents.md":
        return root / "AGENTS.md"
    if format_name == "gemini":
        return root / ".gemini" / "commands" / f"{stem}.toml"
    if format_name == "aider":
        return root / "CONVENTIONS.md"
    if format_name == "ruler":
        return root / ".ruler" / f"{stem}.md"
    if format_name == "droid":
        if subtype == Subtype.SLASH_COMMAND:
            return root / ".factory" / "commands" / f"{stem}.md"
        return root / ".factory" / "skills" / stem / "SKILL.md"
    if format_name == "trae":
        return root / ".trae" / "rules" / f"{stem}.md"
    if format_name == "zencoder":
        return root / ".zencoder" / "rules" / f"{stem}.md"
    raise UnsupportedFormatError(format_name, "output path")


def format_from_path(path: str | Path) -> str | None:
    """Guess a format name from editor directory and file-name conventions."""
    text = "/" + str(path).replace("\\", "/").lstrip("/")
    name = PurePath(text).name.lower()

    if name.endswith(".mdc") or "/.cursor/rules" in text or "/.cursor/commands" in text:
        return "cursor"
    if "/.claude/" in text:
        return "claude"
    if "/.windsurf/" in text or name == ".windsurfrules":
        return "windsurf"
    if "/.kiro/agents/" in text and name.endswith(".json"):
        return "kiro-agent"
    if "/.kiro/steering" in text:
        return "kiro"
    if "copilot-instructions" in name or "/.github/instructions" in text or name.endswith(".instructions.md"):
        return "copilot"
    if "/.continue/" in text or name == ".continuerules":
        return "continue"
    if name == "agents.md":
        return "agents.md"
    if name.endswith(".toml") or "/.gemini/commands" in text:
        return "gemini"
    if name == "conventions.md":
        return "aider"
    if "/.ruler/" in text:
        return "ruler"
    if "/.factory/" in text:
        return "droid"
    if "/.trae/" in text:
        return "trae"
    if "/.zencoder/" in text:
        return "zencoder"
    return None


def package_stem(path: str | Path) -> str:
    """Base name a source file is known by.

    ``SKILL.md`` takes its directory name and the ``.instructions`` and
    ``.kiro`` infixes are dropped.
    """
    path = PurePath(path)
    if path.name.upper() == "SKILL.MD" and path.parent.name:
        return path.parent.name
    stem = path.stem
    for infix in (".instructions", ".chatmode", ".prompt", ".kiro"):
        stem = stem.removesuffix(infix)
    return stem
