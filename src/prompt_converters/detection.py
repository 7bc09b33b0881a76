"""Best-effort detection of which tool a document was written for.

Detection is heuristic. Path conventions are trusted first; content checks
run from the most to the least distinctive format, so a document that would
satisfy several checks is attributed to the most specific one.
"""

import logging
from pathlib import Path

from prompt_converters.parsers.frontmatter import has_frontmatter
from prompt_converters.serializers import (
    is_agents_md_format,
    is_claude_format,
    is_continue_format,
    is_copilot_format,
    is_cursor_format,
    is_gemini_format,
    is_kiro_agent_format,
    is_kiro_format,
    is_windsurf_format,
)
from prompt_converters.utils.helpers import format_from_path

logger = logging.getLogger(__name__)

# Ruler keeps the package identity in a leading HTML comment.
RULER_MARKER = "<!-- Package:"

# Formats that are recognized by frontmatter keys, most specific first.
FRONTMATTER_CHECKS = (
    ("kiro", is_kiro_format),
    ("copilot", is_copilot_format),
    ("continue", is_continue_format),
    ("claude", is_claude_format),
    ("cursor", is_cursor_format),
    ("agents.md", is_agents_md_format),
)


def detect_format(content: str, path: str | Path | None = None) -> str | None:
    """Guess the format name of a document.

    Args:
        content: File content
        path: Optional file path; editor directory conventions win over content

    Returns:
        A registered format name, or None when nothing matches
    """
    if path is not None:
        detected = format_from_path(path)
        if detected is not None:
            logger.debug("Detected %s from path %s", detected, path)
            return detected

    return detect_format_from_content(content)


def detect_format_from_content(content: str) -> str | None:
    """Guess the format name from content alone."""
    stripped = content.lstrip()
    if stripped.startswith("{"):
        return "kiro-agent" if is_kiro_agent_format(content) else None
    if is_gemini_format(content):
        return "gemini"
    if stripped.startswith(RULER_MARKER):
        return "ruler"

    if has_frontmatter(content):
        for name, check in FRONTMATTER_CHECKS:
            if check(content):
                return name
        return None

    # Plain markdown is read as Windsurf, which has no header of its own.
    if is_windsurf_format(content):
        return "windsurf"
    return None
