"""Format Registry for managing the available converters."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage
from prompt_converters.errors import UnsupportedFormatError
from prompt_converters.serializers.base import Serializer

Parser = Callable[..., CanonicalPackage]
Detector = Callable[[str], bool]
# (package, serializer options, default stem) -> output file stem
OutputName = Callable[[CanonicalPackage, Any, str | None], str]
# (package, serializer options) -> "<dir>/<fixed file name>"
ProjectFile = Callable[[CanonicalPackage, Any], str]


@dataclass
class FormatHandler:
    """Everything the engine needs to read and write one format.

    ``output_name`` picks the output file stem from serializer options.
    ``project_file`` is set for tools that read one fixed file per project;
    batch runs with several sources give each source its own directory.
    """

    name: str
    format: Format
    parser: Parser | None = None
    serializer: type[Serializer] | None = None
    detector: Detector | None = None
    extensions: tuple[str, ...] = (".md",)
    description: str = ""
    output_name: OutputName | None = None
    project_file: ProjectFile | None = None

    @property
    def can_parse(self) -> bool:
        return self.parser is not None

    @property
    def can_serialize(self) -> bool:
        return self.serializer is not None


class FormatRegistry:
    """Registry for format handlers.

    Handlers are keyed by format name (``kiro`` and ``kiro-agent`` are
    separate handlers for the same ``Format``) and provide factory
    methods for serializers.
    """

    def __init__(self):
        self._handlers: dict[str, FormatHandler] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in formats."""
        from prompt_converters import parsers
        from prompt_converters import serializers

        self.register(
            FormatHandler(
                "cursor",
                Format.CURSOR,
                parsers.from_cursor,
                serializers.CursorSerializer,
                serializers.is_cursor_format,
                (".mdc", ".md"),
                "Cursor rules (.cursor/rules/*.mdc)",
            )
        )
        self.register(
            FormatHandler(
                "claude",
                Format.CLAUDE,
                parsers.from_claude,
                serializers.ClaudeSerializer,
                serializers.is_claude_format,
                (".md",),
                "Claude agents, skills and slash commands",
            )
        )
        self.register(
            FormatHandler(
                "continue",
                Format.CONTINUE,
                parsers.from_continue,
                serializers.ContinueSerializer,
                serializers.is_continue_format,
                (".md",),
                "Continue rules and prompts",
            )
        )
        self.register(
            FormatHandler(
                "windsurf",
                Format.WINDSURF,
                parsers.from_windsurf,
                serializers.WindsurfSerializer,
                serializers.is_windsurf_format,
                (".md",),
                "Windsurf rules (plain markdown, 12k character limit)",
            )
        )
        self.register(
            FormatHandler(
                "copilot",
                Format.COPILOT,
                parsers.from_copilot,
                serializers.CopilotSerializer,
                serializers.is_copilot_format,
                (".instructions.md", ".md"),
                "GitHub Copilot instructions",
                serializers.generate_copilot_filename,
            )
        )
        self.register(
            FormatHandler(
                "kiro",
                Format.KIRO,
                parsers.from_kiro,
                serializers.KiroSerializer,
                serializers.is_kiro_format,
                (".md",),
                "Kiro steering files (inclusion frontmatter)",
                serializers.generate_kiro_filename,
            )
        )
        self.register(
            FormatHandler(
                "kiro-agent",
                Format.KIRO,
                parsers.from_kiro_agent,
                serializers.KiroAgentSerializer,
                serializers.is_kiro_agent_format,
                (".json",),
                "Kiro agent configurations (JSON)",
            )
        )
        self.register(
            FormatHandler(
                "agents.md",
                Format.AGENTS_MD,
                parsers.from_agents_md,
                serializers.AgentsMdSerializer,
                serializers.is_agents_md_format,
                (".md",),
                "AGENTS.md project instructions",
                project_file=serializers.generate_agents_md_filename,
            )
        )
        self.register(
            FormatHandler(
                "gemini",
                Format.GEMINI,
                parsers.from_gemini,
                serializers.GeminiSerializer,
                serializers.is_gemini_format,
                (".toml",),
                "Gemini CLI custom commands (TOML)",
            )
        )
        self.register(
            FormatHandler(
                "aider",
                Format.AIDER,
                parsers.from_aider,
                serializers.AiderSerializer,
                serializers.is_aider_format,
                (".md",),
                "Aider conventions (CONVENTIONS.md)",
                project_file=serializers.generate_aider_filename,
            )
        )
        self.register(
            FormatHandler(
                "ruler",
                Format.RULER,
                parsers.from_ruler,
                serializers.RulerSerializer,
                serializers.is_ruler_format,
                (".md",),
                "Ruler rules (.ruler/*.md)",
            )
        )
        self.register(
            FormatHandler(
                "droid",
                Format.DROID,
                parsers.from_droid,
                serializers.DroidSerializer,
                serializers.is_droid_format,
                (".md",),
                "Factory Droid skills and commands (.factory/)",
            )
        )
        self.register(
            FormatHandler(
                "trae",
                Format.TRAE,
                None,
                serializers.TraeSerializer,
                serializers.is_trae_format,
                (".md",),
                "Trae rules (.trae/rules/*.md), write only",
            )
        )
        self.register(
            FormatHandler(
                "zencoder",
                Format.ZENCODER,
                None,
                serializers.ZencoderSerializer,
                serializers.is_zencoder_format,
                (".md",),
                "Zencoder rules (.zencoder/rules/*.md), write only",
            )
        )

    def register(self, handler: FormatHandler) -> None:
        """Register a handler, replacing any handler with the same name.

        Args:
            handler: The format handler to register
        """
        self._handlers[handler.name] = handler

    def get(self, name: Format | str) -> FormatHandler | None:
        """Get a handler by format name.

        Args:
            name: Format name or enum; ``agents-md`` is accepted for ``agents.md``

        Returns:
            The handler or None if not found
        """
        return self._handlers.get(self._key(name))

    def require(self, name: Format | str, operation: str = "convert") -> FormatHandler:
        """Get a handler or raise.

        Raises:
            UnsupportedFormatError: If no handler is registered
        """
        handler = self.get(name)
        if handler is None:
            raise UnsupportedFormatError(str(self._key(name)), operation)
        return handler

    def get_parser(self, name: Format | str) -> Parser:
        """Get the parser function for a format.

        Raises:
            UnsupportedFormatError: If the format cannot be parsed
        """
        handler = self.require(name, "parse")
        if handler.parser is None:
            raise UnsupportedFormatError(handler.name, "parse")
        return handler.parser

    def create_serializer(self, name: Format | str, options: Any = None) -> Serializer:
        """Create a serializer instance.

        Args:
            name: Target format name
            options: Format options model or dict

        Returns:
            A serializer instance

        Raises:
            UnsupportedFormatError: If the format cannot be serialized
        """
        handler = self.require(name, "serialize")
        if handler.serializer is None:
            raise UnsupportedFormatError(handler.name, "serialize")
        return handler.serializer(options)

    def list_formats(self) -> list[str]:
        """List all registered format names."""
        return list(self._handlers.keys())

    def handlers(self) -> list[FormatHandler]:
        return list(self._handlers.values())

    def unregister(self, name: Format | str) -> bool:
        """Remove a handler from the registry.

        Args:
            name: The format name to remove

        Returns:
            True if removed, False if not found
        """
        key = self._key(name)
        if key in self._handlers:
            del self._handlers[key]
            return True
        return False

    def __contains__(self, name: Format | str) -> bool:
        """Check if a format is registered."""
        return self._key(name) in self._handlers

    @staticmethod
    def _key(name: Format | str) -> str:
        key = name.value if isinstance(name, Format) else str(name).strip().lower()
        if key in ("agents-md", "agentsmd"):
            return "agents.md"
        return key


_global_registry: FormatRegistry | None = None


def get_global_format_registry() -> FormatRegistry:
    """Get the global format registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = FormatRegistry()
    return _global_registry
