"""Typed sections that make up the body of a canonical package."""

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from prompt_converters.canonical.formats import Priority
from prompt_converters.config.base import CamelModel, ClaudeAgentConfig


class MetadataData(CamelModel):
    """Display metadata: title, description and icon."""

    title: str = Field(..., description="Display title")
    description: str = Field(default="", description="One-paragraph summary")
    icon: str | None = Field(default=None, description="Leading emoji")
    version: str | None = None
    author: str | None = None
    claude_agent: ClaudeAgentConfig | None = None


class MetadataSection(CamelModel):
    type: Literal["metadata"] = "metadata"
    data: MetadataData


class InstructionsSection(CamelModel):
    """Free-form prose instructions."""

    type: Literal["instructions"] = "instructions"
    title: str = ""
    content: str
    priority: Priority | None = None


class Rule(CamelModel):
    """A single rule.

    ``content`` holds the rule text, including an optional bold title
    such as ``**Naming**: use snake_case``.
    """

    content: str
    rationale: str | None = None
    examples: list[str] | None = None


class RulesSection(CamelModel):
    type: Literal["rules"] = "rules"
    title: str = "Rules"
    items: list[Rule] = Field(default_factory=list)
    ordered: bool | None = None


class Example(CamelModel):
    """A code example, optionally marked good or bad."""

    description: str = "Example"
    code: str
    language: str | None = None
    good: bool | None = None


class ExamplesSection(CamelModel):
    type: Literal["examples"] = "examples"
    title: str = "Examples"
    examples: list[Example] = Field(default_factory=list)


class ToolsSection(CamelModel):
    type: Literal["tools"] = "tools"
    tools: list[str] = Field(default_factory=list)
    description: str | None = None


class PersonaData(CamelModel):
    name: str | None = None
    role: str = ""
    icon: str | None = None
    style: list[str] | None = None
    expertise: list[str] | None = None


class PersonaSection(CamelModel):
    type: Literal["persona"] = "persona"
    data: PersonaData


class ContextSection(CamelModel):
    type: Literal["context"] = "context"
    title: str = "Context"
    content: str


class HookSection(CamelModel):
    """An executable hook attached to an editor event."""

    type: Literal["hook"] = "hook"
    event: str
    language: str = "bash"
    code: str
    description: str = ""


class CustomSection(CamelModel):
    """Generic content, optionally owned by a single editor."""

    type: Literal["custom"] = "custom"
    editor_type: str | None = None
    title: str | None = None
    content: str
    metadata: dict[str, Any] | None = None


Section = Annotated[
    Union[
        MetadataSection,
        InstructionsSection,
        RulesSection,
        ExamplesSection,
        ToolsSection,
        PersonaSection,
        ContextSection,
        HookSection,
        CustomSection,
    ],
    Field(discriminator="type"),
]
