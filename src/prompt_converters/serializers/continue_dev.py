"""Serializer for Continue rules and prompts (``.continue/``)."""

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import ContinueConfig
from prompt_converters.parsers.frontmatter import build_frontmatter, format_yaml_value, split_frontmatter
from prompt_converters.serializers.base import MarkdownSerializer

INVOKABLE_SUBTYPES = (Subtype.SLASH_COMMAND, Subtype.PROMPT)


class ContinueSerializer(MarkdownSerializer):
    """Prompts get ``invokable: true``; rules get globs and alwaysApply."""

    name = "continue"
    format = Format.CONTINUE
    options_type = ContinueConfig
    unsupported = {
        "persona": "Persona section skipped (not supported in Continue)",
        "tools": "Tools section skipped (not supported in Continue)",
    }

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        title = pkg.title
        description = pkg.display_description or None

        if pkg.subtype in INVOKABLE_SUBTYPES:
            return build_frontmatter([("name", title), ("description", description), ("invokable", True)])

        config: ContinueConfig = self.options or (pkg.metadata.continue_config if pkg.metadata else None) or ContinueConfig()
        globs = config.globs or (pkg.metadata.globs if pkg.metadata else None)
        always_apply = config.always_apply
        if always_apply is None and pkg.metadata:
            always_apply = pkg.metadata.always_apply

        lines = [
            "---",
            f"name: {format_yaml_value(title)}",
        ]
        if description:
            lines.append(f'description: "{_escape(description)}"')
        if isinstance(globs, str):
            globs = [globs]
        if globs and len(globs) == 1:
            lines.append(f'globs: "{_escape(globs[0])}"')
        elif globs:
            lines.append("globs:")
            lines += [f'  - "{_escape(glob)}"' for glob in globs]
        if config.regex:
            regex = config.regex if isinstance(config.regex, str) else config.regex[0]
            lines.append(f"regex: {format_yaml_value(regex)}")
        if always_apply is not None:
            lines.append(f"alwaysApply: {'true' if always_apply else 'false'}")
        lines.append("---")
        return "\n".join(lines)

    def render_instructions(self, section, warnings):
        # Continue has no priority marker
        lines = [self.title_line(section.title), ""] if section.title else []
        lines.append(section.content)
        return "\n".join(lines)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def to_continue(pkg: CanonicalPackage, options: ContinueConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Continue rule or prompt."""
    return ContinueSerializer(options).serialize(pkg)


def is_continue_format(content: str) -> bool:
    """Continue files carry ``invokable`` or a ``name`` plus rule keys."""
    document = split_frontmatter(content)
    fm = document.frontmatter
    if not document.has_frontmatter:
        return False
    return "invokable" in fm or ("name" in fm and ("globs" in fm or "regex" in fm or "alwaysApply" in fm))
