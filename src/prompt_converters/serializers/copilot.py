"""Serializer for GitHub Copilot instructions (``.github/``)."""

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import CopilotConfig
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer
from prompt_converters.utils.helpers import sanitize_filename


class CopilotSerializer(MarkdownSerializer):
    """Repository-wide instructions, or path-specific ones with ``applyTo``."""

    name = "copilot"
    format = Format.COPILOT
    options_type = CopilotConfig
    good_label = "✅ Do"
    bad_label = "❌ Don't"
    unsupported = {
        "persona": "Persona section skipped (not supported by Copilot)",
        "tools": "Tools section skipped (not supported by Copilot)",
    }

    @property
    def config(self) -> CopilotConfig:
        return self.options or CopilotConfig()

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        config = self.config
        if config.apply_to is None and pkg.metadata and pkg.metadata.copilot_config:
            config = pkg.metadata.copilot_config

        lines = [f"# {config.instruction_name or pkg.title}"]
        if pkg.display_description:
            lines += ["", pkg.display_description]
        for section in pkg.sections:
            if section.type == "metadata":
                continue
            text = self.render_section(section, pkg, warnings)
            if text:
                lines += ["", text]
        body = "\n".join(lines).strip()

        if not config.apply_to:
            return body
        patterns = config.apply_to if isinstance(config.apply_to, list) else [config.apply_to]
        header = build_frontmatter([("applyTo", patterns), ("excludeAgent", config.exclude_agent)])
        return f"{header}\n\n{body}"

    def render_instructions(self, section, warnings):
        lines = [self.title_line(section.title), ""] if section.title else []
        lines.append(section.content)
        return "\n".join(lines)


def to_copilot(pkg: CanonicalPackage, options: CopilotConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to Copilot instructions."""
    return CopilotSerializer(options).serialize(pkg)


def generate_copilot_filename(
    pkg: CanonicalPackage,
    config: CopilotConfig | None = None,
    default: str | None = None,
) -> str:
    """Suggest a file name (without ``.instructions.md``) for a package."""
    if config and config.instruction_name:
        return sanitize_filename(config.instruction_name)
    if default:
        return default
    return sanitize_filename(pkg.title or pkg.name or pkg.id)


def is_copilot_format(content: str) -> bool:
    """``applyTo`` frontmatter, or plain markdown without frontmatter."""
    document = split_frontmatter(content)
    if document.has_frontmatter:
        return "applyTo" in document.frontmatter
    return "#" in content
