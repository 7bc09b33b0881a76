"""Parsers from tool-native formats into the canonical model."""

from prompt_converters.parsers.agents_md import from_agents_md
from prompt_converters.parsers.aider import from_aider
from prompt_converters.parsers.claude import from_claude, from_continue, from_cursor, from_droid
from prompt_converters.parsers.copilot import from_copilot
from prompt_converters.parsers.frontmatter import FrontmatterDocument, split_frontmatter
from prompt_converters.parsers.gemini import from_gemini
from prompt_converters.parsers.kiro import from_kiro
from prompt_converters.parsers.kiro_agent import from_kiro_agent
from prompt_converters.parsers.ruler import from_ruler
from prompt_converters.parsers.windsurf import from_windsurf

__all__ = [
    "from_agents_md",
    "from_aider",
    "from_claude",
    "from_continue",
    "from_copilot",
    "from_cursor",
    "from_droid",
    "from_gemini",
    "from_kiro",
    "from_kiro_agent",
    "from_ruler",
    "from_windsurf",
    "FrontmatterDocument",
    "split_frontmatter",
]
