"""Shared fixtures for the converter tests."""

import logging

import pytest

from prompt_converters.canonical import (
    CanonicalPackage,
    Example,
    ExamplesSection,
    Format,
    InstructionsSection,
    MetadataData,
    MetadataSection,
    PersonaData,
    PersonaSection,
    Rule,
    RulesSection,
    Subtype,
    ToolsSection,
)


CLAUDE_AGENT = """---
name: code-reviewer
description: Reviews pull requests for correctness
tools: Read, Grep
model: sonnet
---

# Code Reviewer

You are a senior engineer, focused on correctness.

## Instructions

Read every diff carefully before commenting.

## Review Rules

- Point out bugs before style issues
- Suggest a fix with every comment
"""

KIRO_STEERING = """---
inclusion: fileMatch
fileMatchPattern: "src/api/**/*.ts"
---

# API Standards

Conventions for REST endpoints.

## Guidelines

- Use plural nouns for collections
- Version every endpoint
"""

WINDSURF_RULES = """# Project Rules

Rules for the whole repository.

Always run the tests before committing.
Prefer small pull requests.
"""

GEMINI_COMMAND = '''description = "Summarize the staged changes"
prompt = """
Summarize the staged changes in three bullet points.
"""
'''

KIRO_AGENT = """{
  "name": "reviewer",
  "description": "Reviews code",
  "prompt": "## Instructions\\n\\nReview the diff.\\n\\n## Rules\\n\\n- Be concise",
  "tools": ["fs_read"],
  "useLegacyMcpJson": true
}"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger("prompt_converters")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_package():
    """A package using most section types."""
    pkg = CanonicalPackage(
        id="code-reviewer",
        name="code-reviewer",
        description="Reviews pull requests",
        format=Format.CLAUDE,
        subtype=Subtype.AGENT,
    )
    pkg.content.sections = [
        MetadataSection(data=MetadataData(title="Code Reviewer", description="Reviews pull requests")),
        PersonaSection(data=PersonaData(name="Rex", role="a careful reviewer", style=["direct", "kind"])),
        ToolsSection(tools=["Read", "Grep"]),
        InstructionsSection(title="Instructions", content="Read every diff."),
        RulesSection(
            title="Rules",
            items=[
                Rule(content="Flag bugs first", rationale="Bugs cost more than style"),
                Rule(content="**Naming**: use snake_case"),
            ],
        ),
        ExamplesSection(
            title="Examples",
            examples=[
                Example(description="Descriptive names", code="total = sum(items)", language="python", good=True),
                Example(description="Cryptic names", code="t = s(i)", language="python", good=False),
            ],
        ),
    ]
    return pkg


@pytest.fixture
def rules_only_package():
    """A package with metadata and rules but no instructions or description."""
    pkg = CanonicalPackage(id="style", name="style")
    pkg.content.sections = [
        MetadataSection(data=MetadataData(title="Style")),
        RulesSection(items=[Rule(content="Use type hints")]),
    ]
    return pkg


@pytest.fixture
def claude_agent_content():
    return CLAUDE_AGENT


@pytest.fixture
def kiro_steering_content():
    return KIRO_STEERING


@pytest.fixture
def windsurf_content():
    return WINDSURF_RULES


@pytest.fixture
def gemini_content():
    return GEMINI_COMMAND


@pytest.fixture
def kiro_agent_content():
    return KIRO_AGENT


@pytest.fixture
def project_dir(tmp_path):
    """A project tree with one Claude agent and one Gemini command."""
    agent = tmp_path / ".claude" / "agents" / "code-reviewer.md"
    agent.parent.mkdir(parents=True)
    agent.write_text(CLAUDE_AGENT, encoding="utf-8")

    command = tmp_path / ".gemini" / "commands" / "summarize.toml"
    command.parent.mkdir(parents=True)
    command.write_text(GEMINI_COMMAND, encoding="utf-8")
    return tmp_path
