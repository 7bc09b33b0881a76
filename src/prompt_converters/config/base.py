"""Configuration models for format-specific conversion options.

These models are used in two places:
- as serializer options (e.g. the Kiro inclusion mode to emit)
- inside the canonical package extension bag, to remember what a
  parser found in the source document

Keys serialize in camelCase so that stored canonical JSON stays compatible
with the registry, while snake_case names are accepted on input.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads snake_case or camelCase and dumps camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class KiroInclusion(str, Enum):
    """When Kiro loads a steering file."""

    ALWAYS = "always"
    FILE_MATCH = "fileMatch"
    MANUAL = "manual"


class FoundationalType(str, Enum):
    """Kiro's three foundational steering documents."""

    PRODUCT = "product"
    TECH = "tech"
    STRUCTURE = "structure"


class ErrorPolicy(str, Enum):
    """What a batch run does when one source fails to convert."""

    SKIP = "skip"
    ABORT = "abort"


class ClaudeAgentConfig(CamelModel):
    """Claude agent settings carried in frontmatter."""

    model: str | None = Field(default=None, description="Model the agent runs on")


class CursorConfig(CamelModel):
    """Options for Cursor MDC output."""

    description: str | None = Field(default=None, description="Override for the MDC description")
    globs: list[str] | None = Field(default=None, description="File globs the rule attaches to")
    always_apply: bool | None = Field(default=None, description="Attach the rule to every request")


class CopilotConfig(CamelModel):
    """Options for GitHub Copilot instruction files."""

    instruction_name: str | None = Field(default=None, description="Name of the instruction file")
    apply_to: str | list[str] | None = Field(default=None, description="Path glob(s) for path-specific instructions")
    exclude_agent: str | None = Field(default=None, description="Agent that should ignore the instructions")


class KiroConfig(CamelModel):
    """Options for Kiro steering files."""

    filename: str | None = Field(default=None, description="Steering file name without extension")
    inclusion: KiroInclusion | None = Field(default=None, description="Inclusion mode")
    file_match_pattern: str | None = Field(default=None, description="Glob used with fileMatch inclusion")
    domain: str | None = Field(default=None, description="Domain heading for the steering file")
    foundational_type: FoundationalType | None = Field(default=None, description="Foundational document type")


class KiroAgentConfig(CamelModel):
    """Kiro agent JSON configuration preserved across conversions."""

    tools: list[str] | None = None
    mcp_servers: dict[str, Any] | None = None
    tool_aliases: dict[str, str] | None = None
    allowed_tools: list[str] | None = None
    tools_settings: dict[str, Any] | None = None
    resources: list[str] | None = None
    hooks: dict[str, Any] | None = None
    use_legacy_mcp_json: bool | None = None
    model: str | None = None


class AgentsMdConfig(CamelModel):
    """Options for AGENTS.md output."""

    project: str | None = Field(default=None, description="Project name for frontmatter")
    scope: str | None = Field(default=None, description="Scope the file applies to")
    include_frontmatter: bool = Field(default=False, description="Emit a YAML frontmatter block")


class ZencoderConfig(CamelModel):
    """Options for Zencoder rules."""

    description: str | None = Field(default=None, description="Description for frontmatter")
    globs: list[str] | None = Field(default=None, description="File patterns the rule applies to")
    always_apply: bool | None = Field(default=None, description="Keep the rule active for every request")
    include_frontmatter: bool | None = Field(
        default=None, description="Emit a YAML frontmatter block; defaults to whether any field is set"
    )


class DroidConfig(CamelModel):
    """Factory Droid skill and command frontmatter."""

    argument_hint: str | None = Field(default=None, description="Usage hint shown for slash commands")
    allowed_tools: list[str] | None = Field(default=None, description="Tools the command may use")


class ContinueConfig(CamelModel):
    """Options for Continue rules and prompts."""

    globs: str | list[str] | None = None
    regex: str | list[str] | None = None
    always_apply: bool | None = None
    version: str | None = None
    schema_version: str | None = Field(default=None, alias="schema")


class WindsurfConfig(CamelModel):
    """Facts recorded about a Windsurf rules file."""

    character_count: int | None = None


class ConversionOptions(CamelModel):
    """Per-format serializer options, keyed by target format."""

    cursor: CursorConfig | None = None
    copilot: CopilotConfig | None = None
    kiro: KiroConfig | None = None
    agents_md: AgentsMdConfig | None = Field(default=None, alias="agents.md")
    continue_: ContinueConfig | None = Field(default=None, alias="continue")
    zencoder: ZencoderConfig | None = None
    droid: DroidConfig | None = None

    def for_format(self, name: str) -> CamelModel | None:
        """Return the options that apply to a target format name."""
        return {
            "cursor": self.cursor,
            "copilot": self.copilot,
            "kiro": self.kiro,
            "agents.md": self.agents_md,
            "continue": self.continue_,
            "zencoder": self.zencoder,
            "droid": self.droid,
        }.get(name)


class SourceSpec(CamelModel):
    """A single document to convert in a batch run."""

    path: str = Field(..., description="Path to the source document")
    format: str | None = Field(default=None, description="Source format, detected when omitted")
    subtype: str | None = Field(default=None, description="Explicit subtype hint")
    id: str | None = Field(default=None, description="Package id, defaults to the file stem")


class ConversionProfile(CamelModel):
    """Declarative description of a batch conversion."""

    name: str = Field(..., description="Profile name")
    description: str = Field(default="", description="Profile description")
    targets: list[str] = Field(default_factory=list, description="Target format names")
    sources: list[SourceSpec] = Field(default_factory=list, description="Documents to convert")
    output_dir: str = Field(default="./converted", description="Directory for converted files")
    on_error: ErrorPolicy = Field(default=ErrorPolicy.SKIP, description="Policy for failing sources")
    options: ConversionOptions = Field(default_factory=ConversionOptions, description="Serializer options")
