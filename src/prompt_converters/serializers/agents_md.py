"""Serializer for AGENTS.md files."""

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import AgentsMdConfig
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import PlainMarkdownSerializer
from prompt_converters.utils.helpers import sanitize_filename

AGENTS_MD_KEYS = {"project", "scope"}


class AgentsMdSerializer(PlainMarkdownSerializer):
    name = "agents.md"
    label = "AGENTS.md"
    format = Format.AGENTS_MD
    options_type = AgentsMdConfig
    unsupported = {
        "persona": "Persona section skipped (not supported by AGENTS.md)",
        "tools": "Tools section skipped (not supported by AGENTS.md)",
    }

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        config: AgentsMdConfig | None = self.options
        if config is None or not config.include_frontmatter or not (config.project or config.scope):
            return ""
        return build_frontmatter([("project", config.project), ("scope", config.scope)])


def to_agents_md(pkg: CanonicalPackage, options: AgentsMdConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to an AGENTS.md file."""
    return AgentsMdSerializer(options).serialize(pkg)


def generate_agents_md_filename(pkg: CanonicalPackage, config: AgentsMdConfig | None = None) -> str:
    """Suggest a ``<dir>/AGENTS.md`` path for a package."""
    package_name = sanitize_filename(pkg.name)
    if config and config.scope:
        return f"{sanitize_filename(config.scope)}-{package_name}/AGENTS.md"
    return f"{package_name}/AGENTS.md"


def is_agents_md_format(content: str) -> bool:
    """Markdown with no frontmatter, or frontmatter of only project/scope."""
    document = split_frontmatter(content)
    if document.has_frontmatter:
        keys = set(document.frontmatter)
        return bool(keys) and keys <= AGENTS_MD_KEYS
    return "#" in content and "inclusion:" not in content and "applyTo:" not in content
