"""The canonical package and conversion result models."""

import json
from typing import Any, Literal

from pydantic import Field

from prompt_converters.canonical.formats import Format, SectionType, Subtype
from prompt_converters.canonical.sections import MetadataSection, Section
from prompt_converters.config.base import (
    AgentsMdConfig,
    CamelModel,
    ClaudeAgentConfig,
    ContinueConfig,
    CopilotConfig,
    DroidConfig,
    KiroAgentConfig,
    KiroConfig,
    WindsurfConfig,
    ZencoderConfig,
)


class SourceMetadata(CamelModel):
    """Identity supplied by the caller alongside raw content."""

    id: str = Field(..., description="Package id")
    name: str | None = None
    version: str | None = None
    author: str | None = None
    description: str | None = None
    tags: list[str] | None = None

    @classmethod
    def coerce(cls, value: "SourceMetadata | dict[str, Any]") -> "SourceMetadata":
        if isinstance(value, SourceMetadata):
            return value
        return cls.model_validate(value)


class PackageMetadata(CamelModel):
    """Format-specific extension bag of a canonical package."""

    title: str | None = None
    description: str | None = None
    icon: str | None = None
    version: str | None = None
    author: str | None = None
    globs: list[str] | None = None
    always_apply: bool | None = None
    claude_agent: ClaudeAgentConfig | None = None
    copilot_config: CopilotConfig | None = None
    kiro_config: KiroConfig | None = None
    kiro_agent: KiroAgentConfig | None = None
    agents_md_config: AgentsMdConfig | None = None
    windsurf_config: WindsurfConfig | None = None
    continue_config: ContinueConfig | None = None
    zencoder_config: ZencoderConfig | None = None
    droid: DroidConfig | None = None


class CanonicalContent(CamelModel):
    format: Literal["canonical"] = "canonical"
    version: Literal["1.0"] = "1.0"
    sections: list[Section] = Field(default_factory=list)


class CanonicalPackage(CamelModel):
    """Format-neutral representation of a prompt, rule, agent or skill.

    Sections are rendered in list order. ``format`` and ``subtype`` always
    hold a value; parsers set them through ``set_taxonomy``.
    """

    id: str = Field(..., description="Package id")
    version: str = Field(default="1.0.0", description="Package version")
    name: str = Field(..., description="Package name")
    description: str = Field(default="", description="Package description")
    author: str = Field(default="unknown", description="Package author")
    organization: str | None = None
    tags: list[str] = Field(default_factory=list)
    format: Format = Field(default=Format.GENERIC, description="Source format tag")
    subtype: Subtype = Field(default=Subtype.RULE, description="Package subtype")
    source_format: Format | None = None
    source_url: str | None = None
    license: str | None = None
    repository: str | None = None
    homepage: str | None = None
    keywords: list[str] | None = None
    category: str | None = None
    format_scores: dict[str, int] | None = None
    content: CanonicalContent = Field(default_factory=CanonicalContent)
    metadata: PackageMetadata | None = None

    @property
    def sections(self) -> list[Section]:
        return self.content.sections

    def get_sections(self, section_type: SectionType | str) -> list[Section]:
        """Return every section of a type, in document order."""
        wanted = SectionType(section_type).value
        return [s for s in self.content.sections if s.type == wanted]

    def get_section(self, section_type: SectionType | str) -> Section | None:
        """Return the first section of a type, or None."""
        found = self.get_sections(section_type)
        return found[0] if found else None

    def has_section(self, section_type: SectionType | str) -> bool:
        return self.get_section(section_type) is not None

    @property
    def metadata_section(self) -> MetadataSection | None:
        return self.get_section(SectionType.METADATA)

    @property
    def title(self) -> str:
        """Best display title: metadata section, then extension bag, then name."""
        section = self.metadata_section
        if section and section.data.title:
            return section.data.title
        if self.metadata and self.metadata.title:
            return self.metadata.title
        return self.name or self.id

    @property
    def display_description(self) -> str:
        """Package description, falling back to the metadata section's."""
        if self.description:
            return self.description
        section = self.metadata_section
        if section and section.data.description:
            return section.data.description
        if self.metadata and self.metadata.description:
            return self.metadata.description
        return ""

    @property
    def icon(self) -> str | None:
        section = self.metadata_section
        if section and section.data.icon:
            return section.data.icon
        return self.metadata.icon if self.metadata else None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the camelCase JSON the registry stores."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str | dict[str, Any]) -> "CanonicalPackage":
        """Load a package from stored canonical JSON."""
        if isinstance(data, str):
            data = json.loads(data)
        return cls.model_validate(data)


class ConversionResult(CamelModel):
    """Output of a serializer."""

    content: str = Field(..., description="Rendered target document")
    format: str = Field(..., description="Target format")
    warnings: list[str] = Field(default_factory=list)
    validation_errors: list[str] = Field(default_factory=list)
    lossy_conversion: bool = False
    quality_score: int = Field(default=100, ge=0, le=100)

    @property
    def succeeded(self) -> bool:
        return bool(self.content)
