"""Serializers from the canonical model to tool-native formats."""

from prompt_converters.serializers.base import MarkdownSerializer, PlainMarkdownSerializer, Serializer
from prompt_converters.serializers.agents_md import (
    AgentsMdSerializer,
    generate_agents_md_filename,
    is_agents_md_format,
    to_agents_md,
)
from prompt_converters.serializers.aider import AiderSerializer, generate_aider_filename, is_aider_format, to_aider
from prompt_converters.serializers.claude import ClaudeSerializer, is_claude_format, to_claude
from prompt_converters.serializers.continue_dev import ContinueSerializer, is_continue_format, to_continue
from prompt_converters.serializers.copilot import (
    CopilotSerializer,
    generate_copilot_filename,
    is_copilot_format,
    to_copilot,
)
from prompt_converters.serializers.cursor import CursorSerializer, is_cursor_format, to_cursor
from prompt_converters.serializers.droid import DroidSerializer, is_droid_format, to_droid
from prompt_converters.serializers.gemini import GeminiSerializer, is_gemini_format, to_gemini
from prompt_converters.serializers.kiro import (
    KiroSerializer,
    generate_kiro_filename,
    is_kiro_format,
    to_kiro,
    validate_kiro_config,
)
from prompt_converters.serializers.kiro_agent import KiroAgentSerializer, is_kiro_agent_format, to_kiro_agent
from prompt_converters.serializers.ruler import RulerSerializer, is_ruler_format, to_ruler
from prompt_converters.serializers.trae import TraeSerializer, is_trae_format, to_trae
from prompt_converters.serializers.windsurf import WindsurfSerializer, is_windsurf_format, to_windsurf
from prompt_converters.serializers.zencoder import ZencoderSerializer, is_zencoder_format, to_zencoder

__all__ = [
    "Serializer",
    "MarkdownSerializer",
    "PlainMarkdownSerializer",
    "AgentsMdSerializer",
    "AiderSerializer",
    "ClaudeSerializer",
    "ContinueSerializer",
    "CopilotSerializer",
    "CursorSerializer",
    "DroidSerializer",
    "GeminiSerializer",
    "KiroSerializer",
    "KiroAgentSerializer",
    "RulerSerializer",
    "TraeSerializer",
    "WindsurfSerializer",
    "ZencoderSerializer",
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
    "is_agents_md_format",
    "is_aider_format",
    "is_claude_format",
    "is_continue_format",
    "is_copilot_format",
    "is_cursor_format",
    "is_droid_format",
    "is_gemini_format",
    "is_kiro_format",
    "is_kiro_agent_format",
    "is_ruler_format",
    "is_trae_format",
    "is_windsurf_format",
    "is_zencoder_format",
    "generate_agents_md_filename",
    "generate_aider_filename",
    "generate_copilot_filename",
    "generate_kiro_filename",
    "validate_kiro_config",
]
