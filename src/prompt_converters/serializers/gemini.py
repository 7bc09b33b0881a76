"""Serializer for Gemini CLI custom commands."""

import tomllib

import tomli_w

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.serializers.base import MarkdownSerializer


class GeminiSerializer(MarkdownSerializer):
    """Flattens every section into the TOML ``prompt`` string."""

    name = "gemini"
    format = Format.GEMINI
    heading = "#"

    def build_command(self, pkg: CanonicalPackage, warnings: list[str]) -> dict[str, str]:
        command = {}
        if pkg.display_description:
            command["description"] = pkg.display_description
        command["prompt"] = self.render_body(pkg, warnings)
        return command

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        return tomli_w.dumps(self.build_command(pkg, warnings), multiline_strings=True)

    def render_metadata(self, section, warnings):
        return ""

    def render_instructions(self, section, warnings):
        # prompts read as prose; section titles are dropped
        if section.priority == "high":
            return f"{self.important_label}\n\n{section.content}"
        return section.content

    def validate(self, content, pkg, warnings):
        from prompt_converters.engine.validation_engine import ValidationEngine

        result = ValidationEngine().validate_format(self.name, tomllib.loads(content), pkg.subtype)
        warnings.extend(i.message for i in result.warnings)
        return [i.message for i in result.errors]


def to_gemini(pkg: CanonicalPackage, options: None = None) -> ConversionResult:
    """Convert a canonical package to a Gemini TOML command."""
    return GeminiSerializer(options).serialize(pkg)


def is_gemini_format(content: str) -> bool:
    """TOML with a string ``prompt`` key."""
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError:
        return False
    return isinstance(data.get("prompt"), str)
