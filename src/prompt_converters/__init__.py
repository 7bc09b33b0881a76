"""
prompt-converters - Convert AI coding assistant configuration between tools.

Claude agents and skills, Cursor rules, Continue rules, Windsurf rules,
Copilot instructions, Kiro steering files and agents, AGENTS.md, Gemini
commands, Aider conventions, Ruler rules and Factory Droid files are parsed into one canonical package and serialized back out with
a quality score and a list of what could not be carried over.
"""

__version__ = "0.1.0"

from prompt_converters.canonical import CanonicalPackage, ConversionResult, Format, Subtype, set_taxonomy
from prompt_converters.detection import detect_format
from prompt_converters.engine.conversion_engine import ConversionEngine
from prompt_converters.engine.validation_engine import ValidationEngine
from prompt_converters.errors import ConversionError, ParseError, UnsupportedFormatError
from prompt_converters.parsers import (
    from_agents_md,
    from_aider,
    from_claude,
    from_continue,
    from_copilot,
    from_cursor,
    from_droid,
    from_gemini,
    from_kiro,
    from_kiro_agent,
    from_ruler,
    from_windsurf,
)
from prompt_converters.registry import FormatRegistry, get_global_format_registry
from prompt_converters.serializers import (
    to_agents_md,
    to_aider,
    to_claude,
    to_continue,
    to_copilot,
    to_cursor,
    to_droid,
    to_gemini,
    to_kiro,
    to_kiro_agent,
    to_ruler,
    to_trae,
    to_windsurf,
    to_zencoder,
)

__all__ = [
    "CanonicalPackage",
    "ConversionResult",
    "Format",
    "Subtype",
    "set_taxonomy",
    "detect_format",
    "ConversionEngine",
    "ValidationEngine",
    "FormatRegistry",
    "get_global_format_registry",
    "ConversionError",
    "ParseError",
    "UnsupportedFormatError",
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
    "to_agents_md",
    "to_aider",
    "to_claude",
    "to_continue",
    "to_copilot",
    "to_cursor",
    "to_droid",
    "to_gemini",
    "to_kiro",
    "to_kiro_agent",
    "to_ruler",
    "to_trae",
    "to_windsurf",
    "to_zencoder",
]
