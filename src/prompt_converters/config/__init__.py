"""Conversion options and batch profiles."""

from prompt_converters.config.base import (
    AgentsMdConfig,
    CamelModel,
    ClaudeAgentConfig,
    ContinueConfig,
    ConversionOptions,
    ConversionProfile,
    CopilotConfig,
    CursorConfig,
    DroidConfig,
    ErrorPolicy,
    FoundationalType,
    KiroAgentConfig,
    KiroConfig,
    KiroInclusion,
    SourceSpec,
    WindsurfConfig,
    ZencoderConfig,
)
from prompt_converters.config.loader import ProfileLoader, load_profile

__all__ = [
    "AgentsMdConfig",
    "CamelModel",
    "ClaudeAgentConfig",
    "ContinueConfig",
    "ConversionOptions",
    "ConversionProfile",
    "CopilotConfig",
    "CursorConfig",
    "DroidConfig",
    "ErrorPolicy",
    "FoundationalType",
    "KiroAgentConfig",
    "KiroConfig",
    "KiroInclusion",
    "SourceSpec",
    "WindsurfConfig",
    "ZencoderConfig",
    "ProfileLoader",
    "load_profile",
]
