"""Serializer for Kiro steering files."""

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import KiroConfig, KiroInclusion
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer
from prompt_converters.utils.helpers import sanitize_filename


class KiroSerializer(MarkdownSerializer):
    """Steering markdown behind a required ``inclusion`` frontmatter."""

    name = "kiro"
    format = Format.KIRO
    options_type = KiroConfig
    good_label = "✅ Preferred"
    bad_label = "❌ Avoid"
    unsupported = {
        "persona": "Persona section skipped (not supported by Kiro)",
        "tools": "Tools section skipped (not supported by Kiro)",
    }

    def resolve_config(self, pkg: CanonicalPackage) -> KiroConfig:
        """Explicit options win over what the package was parsed with."""
        config = self.options or (pkg.metadata.kiro_config if pkg.metadata else None)
        error = validate_kiro_config(config or KiroConfig())
        if error:
            raise ValueError(error)
        return config

    def render(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        config = self.resolve_config(pkg)
        header = build_frontmatter(
            [
                ("inclusion", config.inclusion.value),
                ("fileMatchPattern", config.file_match_pattern if config.inclusion is KiroInclusion.FILE_MATCH else None),
                ("domain", config.domain),
            ]
        )

        title = self.options.domain if self.options and self.options.domain else pkg.title
        lines = [f"# {title}"]
        if pkg.display_description:
            lines += ["", pkg.display_description]
        for section in pkg.sections:
            if section.type == "metadata":
                continue
            text = self.render_section(section, pkg, warnings)
            if text:
                lines += ["", text]
        return f"{header}\n\n" + "\n".join(lines).strip()

    def render_instructions(self, section, warnings):
        lines = [self.title_line(section.title), ""] if section.title else []
        lines.append(section.content)
        return "\n".join(lines)

    def validate(self, content, pkg, warnings):
        return self.validate_against_schema(content, pkg, warnings, Subtype.RULE)


def validate_kiro_config(config: KiroConfig) -> str | None:
    """Return why a Kiro config cannot be serialized, or None when it can."""
    if config.inclusion is None:
        return "Kiro format requires inclusion mode (always|fileMatch|manual)"
    if config.inclusion is KiroInclusion.FILE_MATCH and not config.file_match_pattern:
        return "fileMatch inclusion mode requires fileMatchPattern"
    return None


def to_kiro(pkg: CanonicalPackage, options: KiroConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Kiro steering file."""
    return KiroSerializer(options).serialize(pkg)


def generate_kiro_filename(
    pkg: CanonicalPackage,
    config: KiroConfig | None = None,
    default: str | None = None,
) -> str:
    """Suggest a steering file name (without ``.md``).

    An explicit ``filename`` wins over ``domain``. Without either, the
    ``default`` stem is kept and the package title is the last resort.
    """
    if config and config.filename:
        return sanitize_filename(config.filename)
    if config and config.domain:
        return sanitize_filename(config.domain)
    if default:
        return default
    return sanitize_filename(pkg.title or pkg.name or pkg.id)


def is_kiro_format(content: str) -> bool:
    """Kiro steering files declare ``inclusion`` in frontmatter."""
    document = split_frontmatter(content)
    return document.has_frontmatter and "inclusion" in document.frontmatter
