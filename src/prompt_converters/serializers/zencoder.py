"""Serializer for Zencoder rules (``.zencoder/rules/*.md``)."""

from prompt_converters.canonical.formats import Format
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult
from prompt_converters.config.base import ZencoderConfig
from prompt_converters.parsers.frontmatter import build_frontmatter, split_frontmatter
from prompt_converters.serializers.base import PlainMarkdownSerializer, is_plain_markdown


class ZencoderSerializer(PlainMarkdownSerializer):
    """Plain rules with optional ``description``/``globs``/``alwaysApply`` frontmatter.

    Frontmatter is written when asked for, or by default when the options or
    the package carry any of its fields.
    """

    name = "zencoder"
    format = Format.ZENCODER
    options_type = ZencoderConfig
    unsupported = {
        "persona": "Persona section skipped (not supported by Zencoder)",
        "tools": "Tools section skipped (not supported by Zencoder)",
    }

    @property
    def config(self) -> ZencoderConfig:
        return self.options or ZencoderConfig()

    def render_header(self, pkg: CanonicalPackage, warnings: list[str]) -> str:
        config = self.config
        meta = pkg.metadata
        globs = config.globs or (meta.globs if meta else None)
        always_apply = config.always_apply if config.always_apply is not None else (meta.always_apply if meta else None)

        include = config.include_frontmatter
        if include is None:
            include = bool(config.description or globs or always_apply is not None)
        if not include:
            return ""

        description = config.description or pkg.display_description or None
        if description is None and not globs and always_apply is None:
            return ""
        return build_frontmatter(
            [("description", description), ("globs", globs or None), ("alwaysApply", always_apply)]
        )

    def body_description(self, pkg: CanonicalPackage) -> str:
        # A description given in the options lives in the frontmatter only
        if self.config.description:
            return ""
        return pkg.display_description


def to_zencoder(pkg: CanonicalPackage, options: ZencoderConfig | dict | None = None) -> ConversionResult:
    """Convert a canonical package to a Zencoder rule."""
    return ZencoderSerializer(options).serialize(pkg)


def is_zencoder_format(content: str) -> bool:
    """``globs``/``alwaysApply`` frontmatter, or plain headed markdown."""
    document = split_frontmatter(content)
    if document.has_frontmatter:
        return "globs" in document.frontmatter or "alwaysApply" in document.frontmatter
    return is_plain_markdown(content)
