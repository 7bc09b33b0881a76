"""Tests for the format parsers."""

import pytest

from prompt_converters.canonical import (
    ContextSection,
    CustomSection,
    ExamplesSection,
    Format,
    InstructionsSection,
    PersonaSection,
    RulesSection,
    SectionType,
    Subtype,
    ToolsSection,
)
from prompt_converters.config.base import KiroInclusion
from prompt_converters.errors import ParseError
from prompt_converters.parsers import (
    from_agents_md,
    from_aider,
    from_claude,
    from_continue,
    from_copilot,
    from_cursor,
    from_droid,
    from_gemini,
    from_kiro,
    from_kiro_agent,
    from_ruler,
    from_windsurf,
    split_frontmatter,
)
from prompt_converters.parsers.frontmatter import as_list, build_frontmatter, format_yaml_value
from prompt_converters.parsers.markdown import (
    MarkdownBlock,
    claude_section,
    parse_examples,
    parse_persona,
    parse_rule_items,
    split_markdown,
)


# =============================================================================
# Frontmatter Tests
# =============================================================================


class TestFrontmatter:
    """Tests for frontmatter splitting and rendering."""

    def test_split(self):
        doc = split_frontmatter("---\nname: x\ntags: [a, b]\n---\n# Body\n")

        assert doc.has_frontmatter
        assert doc.frontmatter == {"name": "x", "tags": ["a", "b"]}
        assert doc.body == "# Body\n"

    def test_no_frontmatter(self):
        doc = split_frontmatter("# Just markdown")

        assert not doc.has_frontmatter
        assert doc.frontmatter == {}
        assert doc.body == "# Just markdown"

    def test_crlf_normalized(self):
        doc = split_frontmatter("---\r\nname: x\r\n---\r\nbody")

        assert doc.frontmatter == {"name": "x"}
        assert doc.body == "body"

    def test_invalid_yaml_falls_back_to_key_value(self):
        doc = split_frontmatter("---\nname: x\ndescription: [unclosed\n---\nbody")

        assert doc.frontmatter["name"] == "x"
        assert doc.frontmatter["description"] == "[unclosed"

    def test_invalid_yaml_strict(self):
        with pytest.raises(ParseError, match="Failed to parse YAML frontmatter"):
            split_frontmatter("---\nname: [unclosed\n---\nbody", strict=True)

    def test_dates_become_strings(self):
        doc = split_frontmatter("---\ncreated: 2024-01-02\n---\n")

        assert doc.frontmatter["created"] == "2024-01-02"

    def test_as_list(self):
        assert as_list("Read, Grep") == ["Read", "Grep"]
        assert as_list(["a", "b"]) == ["a", "b"]
        assert as_list(None) == []

    def test_format_yaml_value_quotes_when_needed(self):
        assert format_yaml_value("plain") == "plain"
        assert format_yaml_value("yes") == '"yes"'
        assert format_yaml_value("a: b") == '"a: b"'
        assert format_yaml_value("**/*.py") == '"**/*.py"'
        assert format_yaml_value(True) == "true"

    def test_build_frontmatter(self):
        block = build_frontmatter([("name", "x"), ("skip", None), ("globs", ["*.py"])])

        assert block == '---\nname: x\nglobs:\n  - "*.py"\n---'

    def test_format_yaml_value_quotes_scalars_that_read_back_differently(self):
        assert format_yaml_value("on") == '"on"'
        assert format_yaml_value("1.0") == '"1.0"'
        assert format_yaml_value("null") == '"null"'
        assert format_yaml_value("it's") == "it's"
        assert split_frontmatter(f"---\nv: {format_yaml_value('on')}\n---\n").frontmatter["v"] == "on"

    def test_build_frontmatter_quoted_strings(self):
        block = build_frontmatter([("name", "x"), ("version", "2.0")], quote=True)

        assert block == '---\nname: "x"\nversion: "2.0"\n---'


# =============================================================================
# Markdown Tests
# =============================================================================


class TestMarkdown:
    """Tests for markdown splitting and section typing."""

    def test_split_title_description_and_blocks(self):
        doc = split_markdown("# 🚀 Title\n\nShort summary.\n\nPreamble text.\n\n## One\n\nBody one\n")

        assert doc.icon == "🚀"
        assert doc.title == "Title"
        assert doc.description == "Short summary."
        assert doc.preamble == "Preamble text."
        assert [b.title for b in doc.blocks] == ["One"]

    def test_headings_in_code_do_not_split(self):
        doc = split_markdown("## Examples\n\n```md\n## Not a heading\n```\n")

        assert len(doc.blocks) == 1

    def test_rule_items_with_rationale(self):
        rules, ordered = parse_rule_items([
            "1. Use type hints",
            "   - *Rationale: catches bugs early*",
            "2. Keep functions short",
        ])

        assert ordered
        assert [r.content for r in rules] == ["Use type hints", "Keep functions short"]
        assert rules[0].rationale == "catches bugs early"

    def test_top_level_bullet_with_trailing_italic_is_a_rule(self):
        rules, ordered = parse_rule_items([
            "* Keep functions small",
            "* Prefer composition over *inheritance*",
            "* Name things well",
        ])

        assert not ordered
        assert [r.content for r in rules] == [
            "Keep functions small",
            "Prefer composition over *inheritance*",
            "Name things well",
        ]
        assert all(r.rationale is None for r in rules)

    def test_why_line_is_a_rationale(self):
        rules, _ = parse_rule_items(["- Use type hints", "  - Why: mypy runs in CI"])

        assert len(rules) == 1
        assert rules[0].rationale == "mypy runs in CI"

    def test_examples_with_good_and_bad(self):
        examples = parse_examples([
            "### ✅ Good: Clear names",
            "```python",
            "total = 1",
            "```",
            "### ❌ Bad: Cryptic names",
            "```python",
            "t = 1",
            "```",
        ])

        assert len(examples) == 2
        assert examples[0].good is True
        assert examples[0].description == "Clear names"
        assert examples[0].language == "python"
        assert examples[1].good is False
        assert examples[1].code == "t = 1"

    def test_parse_persona(self):
        persona = parse_persona("You are Rex, a careful reviewer. Your communication style is direct, kind.")

        assert persona.name == "Rex"
        assert persona.role == "careful reviewer"
        assert persona.style == ["direct", "kind"]

    def test_claude_section_typing(self):
        assert isinstance(claude_section(MarkdownBlock("Background", ["Some history."])), ContextSection)
        assert isinstance(claude_section(MarkdownBlock("Steps", ["- one", "- two"])), RulesSection)
        assert isinstance(claude_section(MarkdownBlock("Usage", ["```", "x", "```"])), ExamplesSection)
        assert isinstance(claude_section(MarkdownBlock("Notes", ["Plain prose."])), InstructionsSection)


# =============================================================================
# Claude / Cursor / Continue Tests
# =============================================================================


class TestFromClaude:
    """Tests for from_claude."""

    def test_parse_agent(self, claude_agent_content):
        pkg = from_claude(claude_agent_content, {"id": "code-reviewer"}, explicit_subtype="agent")

        assert pkg.format == Format.CLAUDE
        assert pkg.subtype == Subtype.AGENT
        assert pkg.name == "code-reviewer"
        assert pkg.description == "Reviews pull requests for correctness"
        assert pkg.title == "Code Reviewer"
        assert pkg.metadata.claude_agent.model == "sonnet"

    def test_sections(self, claude_agent_content):
        pkg = from_claude(claude_agent_content, {"id": "code-reviewer"})
        types = [s.type for s in pkg.sections]

        assert types == ["metadata", "tools", "persona", "instructions", "rules"]
        tools = pkg.get_section(SectionType.TOOLS)
        assert isinstance(tools, ToolsSection)
        assert tools.tools == ["Read", "Grep"]
        rules = pkg.get_section(SectionType.RULES)
        assert [r.content for r in rules.items] == [
            "Point out bugs before style issues",
            "Suggest a fix with every comment",
        ]

    def test_subtype_from_frontmatter(self):
        pkg = from_claude("---\nname: x\ntype: skill\n---\nDo it.", {"id": "x"})

        assert pkg.subtype == Subtype.SKILL

    def test_defaults_without_frontmatter(self):
        pkg = from_claude("Just do the thing.", {"id": "thing"})

        assert pkg.name == "thing"
        assert pkg.title == "thing"
        assert pkg.subtype == Subtype.RULE
        assert pkg.sections[1].content == "Just do the thing."

    def test_from_cursor_relabels(self):
        pkg = from_cursor('---\ndescription: "Style"\nglobs: ["*.py"]\nalwaysApply: true\n---\n# Style\n', {"id": "style"})

        assert pkg.format == Format.CURSOR
        assert pkg.source_format == Format.CURSOR
        assert pkg.metadata.globs == ["*.py"]
        assert pkg.metadata.always_apply is True

    def test_from_continue_invokable_is_prompt(self):
        pkg = from_continue("---\nname: plan\ninvokable: true\n---\nPlan the work.", {"id": "plan"})

        assert pkg.format == Format.CONTINUE
        assert pkg.subtype == Subtype.PROMPT

    def test_from_continue_keeps_config(self):
        pkg = from_continue("---\nname: r\nglobs: \"*.ts\"\nversion: 1\n---\nRule.", {"id": "r"})

        assert pkg.metadata.continue_config.globs == "*.ts"
        assert pkg.metadata.continue_config.version == "1"


# =============================================================================
# Windsurf Tests
# =============================================================================


class TestFromWindsurf:
    """Tests for from_windsurf."""

    def test_parse(self, windsurf_content):
        pkg = from_windsurf(windsurf_content, {"id": "project"})

        assert pkg.format == Format.WINDSURF
        assert pkg.title == "Project Rules"
        assert pkg.description == "Rules for the whole repository."
        instructions = pkg.get_section(SectionType.INSTRUCTIONS)
        assert instructions.title == ""
        assert instructions.content == "Always run the tests before committing.\nPrefer small pull requests."

    def test_records_character_count(self, windsurf_content):
        pkg = from_windsurf(windsurf_content, {"id": "project"})

        assert pkg.metadata.windsurf_config.character_count == len(windsurf_content)

    def test_over_limit_is_accepted(self, caplog):
        content = "# Big\n\n" + "x" * 13_000
        pkg = from_windsurf(content, {"id": "big"})

        assert pkg.get_section(SectionType.INSTRUCTIONS) is not None
        assert "over the 12000 character limit" in caplog.text

    def test_without_heading(self):
        pkg = from_windsurf("Be brief.", {"id": "brief", "name": "Brief"})

        assert pkg.title == "Brief"
        assert pkg.get_section(SectionType.INSTRUCTIONS).content == "Be brief."

    def test_single_paragraph_is_the_rule_text(self):
        pkg = from_windsurf("# T\nline1\nline2\n", {"id": "t"})

        assert pkg.title == "T"
        assert pkg.description == ""
        assert pkg.get_section(SectionType.INSTRUCTIONS).content == "line1\nline2"


# =============================================================================
# Kiro Tests
# =============================================================================


class TestFromKiro:
    """Tests for from_kiro."""

    def test_parse_file_match(self, kiro_steering_content):
        pkg = from_kiro(kiro_steering_content, {"id": "api-standards"})

        assert pkg.format == Format.KIRO
        config = pkg.metadata.kiro_config
        assert config.inclusion == KiroInclusion.FILE_MATCH
        assert config.file_match_pattern == "src/api/**/*.ts"
        assert config.domain == "api standards"
        assert pkg.title == "API Standards"
        assert pkg.description == "Conventions for REST endpoints."
        assert isinstance(pkg.get_section(SectionType.RULES), RulesSection)

    def test_inferred_tags(self, kiro_steering_content):
        pkg = from_kiro(kiro_steering_content, {"id": "api-standards"})

        assert pkg.tags == ["kiro", "kiro-fileMatch", "api"]

    def test_foundational_type(self):
        pkg = from_kiro("---\ninclusion: always\n---\n# Tech\n", {"id": "tech"})

        assert pkg.metadata.kiro_config.foundational_type.value == "tech"
        assert "kiro-tech" in pkg.tags

    def test_missing_frontmatter(self):
        with pytest.raises(ParseError, match="inclusion field in frontmatter"):
            from_kiro("# R", {"id": "r"})

    def test_invalid_inclusion(self):
        with pytest.raises(ParseError, match="always\\|fileMatch\\|manual"):
            from_kiro("---\ninclusion: sometimes\n---\n# R", {"id": "r"})

    def test_file_match_requires_pattern(self):
        with pytest.raises(ParseError, match="fileMatchPattern"):
            from_kiro("---\ninclusion: fileMatch\n---\n# R", {"id": "r"})

    def test_invalid_yaml(self):
        with pytest.raises(ParseError, match="Failed to parse YAML frontmatter"):
            from_kiro("---\ninclusion: [always\n---\n# R", {"id": "r"})


class TestFromKiroAgent:
    """Tests for from_kiro_agent."""

    def test_parse(self, kiro_agent_content):
        pkg = from_kiro_agent(kiro_agent_content)

        assert pkg.id == "reviewer"
        assert pkg.format == Format.KIRO
        assert pkg.subtype == Subtype.AGENT
        assert pkg.description == "Reviews code"
        assert pkg.get_section(SectionType.INSTRUCTIONS).content == "Review the diff."
        assert pkg.get_section(SectionType.RULES).items[0].content == "Be concise"

    def test_settings_preserved(self, kiro_agent_content):
        pkg = from_kiro_agent(kiro_agent_content)

        assert pkg.metadata.kiro_agent.tools == ["fs_read"]
        assert pkg.metadata.kiro_agent.use_legacy_mcp_json is True
        assert pkg.metadata.kiro_config.inclusion == KiroInclusion.ALWAYS

    def test_unknown_headings_become_custom(self):
        pkg = from_kiro_agent('{"name": "a", "prompt": "Intro text\\n\\n## Workflow\\n\\nStep one"}')

        custom = pkg.get_section(SectionType.CUSTOM)
        assert isinstance(custom, CustomSection)
        assert custom.editor_type == "kiro"
        assert custom.title == "Workflow"
        assert pkg.description == "Intro text"

    def test_file_prompt(self):
        pkg = from_kiro_agent('{"name": "a", "prompt": "file://./prompt.md"}')

        assert "file://./prompt.md" in pkg.get_section(SectionType.INSTRUCTIONS).content

    def test_missing_name(self):
        pkg = from_kiro_agent('{"prompt": "Do things"}')

        assert pkg.id == "kiro-agent"

    def test_invalid_json(self):
        with pytest.raises(ParseError, match="Kiro agent JSON"):
            from_kiro_agent("{not json")

    def test_not_an_object(self):
        with pytest.raises(ParseError, match="JSON object"):
            from_kiro_agent("[1, 2]")


# =============================================================================
# Copilot / AGENTS.md Tests
# =============================================================================


class TestFromCopilot:
    """Tests for from_copilot."""

    def test_repository_instructions(self):
        pkg = from_copilot("# Team Conventions\n\n## Coding Standards\n\n- Use tabs\n", {"id": "team"})

        assert pkg.format == Format.COPILOT
        assert pkg.subtype == Subtype.RULE
        assert pkg.tags == ["copilot"]
        assert pkg.metadata.copilot_config is None
        assert isinstance(pkg.get_section(SectionType.RULES), RulesSection)

    def test_path_specific(self):
        content = '---\napplyTo: "**/*.ts"\nexcludeAgent: code-review\n---\n# TS\n\nUse strict mode.\n'
        pkg = from_copilot(content, {"id": "ts"})

        assert pkg.metadata.copilot_config.apply_to == "**/*.ts"
        assert pkg.metadata.copilot_config.exclude_agent == "code-review"

    def test_apply_to_list(self):
        pkg = from_copilot("---\napplyTo:\n  - a\n  - b\n---\n# X\n", {"id": "x"})

        assert pkg.metadata.copilot_config.apply_to == ["a", "b"]

    def test_declared_chatmode(self):
        pkg = from_copilot("---\ntype: chatmode\n---\n# Plan\n", {"id": "plan"})

        assert pkg.subtype == Subtype.CHATMODE


class TestFromAgentsMd:
    """Tests for from_agents_md."""

    def test_parse(self):
        content = "# My Project\n\nA TypeScript API.\n\n## Overview\n\nMonorepo.\n\n## Testing Guidelines\n\n- Run pytest\n"
        pkg = from_agents_md(content, {"id": "agents"})

        assert pkg.format == Format.AGENTS_MD
        assert pkg.title == "My Project"
        assert pkg.description == "A TypeScript API."
        assert isinstance(pkg.get_section(SectionType.CONTEXT), ContextSection)
        assert isinstance(pkg.get_section(SectionType.RULES), RulesSection)

    def test_inferred_tags(self):
        pkg = from_agents_md("# P\n\nUses Python and Docker. Run the tests.\n", {"id": "p"})

        assert pkg.tags[0] == "agents.md"
        assert {"python", "docker", "testing"} <= set(pkg.tags)
        assert len(pkg.tags) <= 6

    def test_project_and_scope(self):
        pkg = from_agents_md("---\nproject: shop\nscope: backend\n---\n# Shop\n", {"id": "shop"})

        assert pkg.metadata.agents_md_config.project == "shop"
        assert pkg.metadata.agents_md_config.scope == "backend"


# =============================================================================
# Gemini Tests
# =============================================================================


class TestFromGemini:
    """Tests for from_gemini."""

    def test_minimal_prompt(self):
        pkg = from_gemini('prompt = "x"', {"id": "a"})

        assert pkg.format == Format.GEMINI
        assert pkg.subtype == Subtype.SLASH_COMMAND
        instructions = pkg.get_sections(SectionType.INSTRUCTIONS)
        assert len(instructions) == 1
        assert instructions[0].content == "x"

    def test_description(self, gemini_content):
        pkg = from_gemini(gemini_content, {"id": "summarize"})

        assert pkg.description == "Summarize the staged changes"
        assert pkg.get_section(SectionType.INSTRUCTIONS).content.startswith("Summarize the staged changes in three")

    def test_missing_prompt(self):
        with pytest.raises(ParseError, match='Gemini command must have a "prompt" field'):
            from_gemini('description = "d"', {"id": "a"})

    def test_invalid_toml(self):
        with pytest.raises(ParseError, match="Failed to parse Gemini TOML"):
            from_gemini("prompt = ", {"id": "a"})

    def test_explicit_subtype(self):
        pkg = from_gemini('prompt = "x"', {"id": "a"}, explicit_subtype="prompt")

        assert pkg.subtype == Subtype.PROMPT


# =============================================================================
# Aider / Ruler / Droid Tests
# =============================================================================

AIDER_CONVENTIONS = """# Python Conventions

Coding standards for the billing service.

This repository uses FastAPI and PostgreSQL.

## Requirements

- Use type hints
  - Why: mypy runs in CI

## Usage

### Good: Dependency injection

```python
def handler(db=Depends(get_db)): ...
```

## About

Owned by the payments team.
"""

RULER_RULES = """<!-- Package: api-style -->
<!-- Author: platform-team -->

Conventions for HTTP handlers.

# API Style

## Guidelines

- Return JSON errors

## Examples

```md
## Not a section
```
"""

DROID_COMMAND = """---
name: review
description: Review a branch
argument-hint: <branch>
allowed-tools: Read, Grep
---

Review the changes on the given branch.
"""


class TestFromAider:
    """Tests for from_aider."""

    def test_parse(self):
        pkg = from_aider(AIDER_CONVENTIONS, {"id": "conventions"})

        assert pkg.format == Format.AIDER
        assert pkg.subtype == Subtype.RULE
        assert pkg.title == "Python Conventions"
        assert pkg.description == "Coding standards for the billing service."

    def test_section_typing(self):
        pkg = from_aider(AIDER_CONVENTIONS, {"id": "conventions"})
        sections = pkg.sections[1:]

        assert isinstance(sections[0], ContextSection)
        assert sections[0].title == "Project Overview"
        assert sections[0].content == "This repository uses FastAPI and PostgreSQL."
        assert isinstance(sections[1], RulesSection)
        assert sections[1].items[0].rationale == "mypy runs in CI"
        assert isinstance(sections[2], ExamplesSection)
        assert isinstance(sections[3], ContextSection)

    def test_inferred_tags(self):
        pkg = from_aider(AIDER_CONVENTIONS, {"id": "conventions"})

        assert pkg.tags == ["aider", "python", "api"]
        assert from_aider(AIDER_CONVENTIONS, {"id": "c", "tags": ["billing"]}).tags == ["billing"]

    def test_description_is_truncated(self):
        pkg = from_aider("# Long\n\n" + "x" * 300, {"id": "long"})

        assert len(pkg.description) == 200

    def test_title_falls_back_to_name(self):
        pkg = from_aider("- Use tabs", {"id": "tabs", "name": "Tabs"})

        assert pkg.title == "Tabs"


class TestFromRuler:
    """Tests for from_ruler."""

    def test_comment_metadata(self):
        pkg = from_ruler(RULER_RULES, {"id": "api"})

        assert pkg.format == Format.RULER
        assert pkg.name == "api-style"
        assert pkg.author == "platform-team"
        assert pkg.title == "API Style"
        assert pkg.description == "Conventions for HTTP handlers."

    def test_headings_in_code_are_not_sections(self):
        pkg = from_ruler(RULER_RULES, {"id": "api"})

        assert len(pkg.sections) == 3
        assert isinstance(pkg.sections[1], RulesSection)
        assert all(getattr(s, "title", None) != "Not a section" for s in pkg.sections)

    def test_defaults(self):
        pkg = from_ruler("# Rules\n\nBe nice to reviewers.\n\n## Guidelines\n\n- Reply within a day", {"id": "r"})

        assert pkg.name == "ruler-rule"
        assert pkg.author == "unknown"
        assert pkg.description == "Be nice to reviewers."

    def test_description_comment_wins(self):
        content = "<!-- Description: From the comment -->\n\nIntro text.\n\n# Rules\n"

        assert from_ruler(content, {"id": "r"}).description == "From the comment"


class TestFromDroid:
    """Tests for from_droid."""

    def test_parse(self):
        pkg = from_droid(DROID_COMMAND, {"id": "review"})

        assert pkg.format == Format.DROID
        assert pkg.source_format == Format.DROID
        assert pkg.description == "Review a branch"
        assert pkg.get_section(SectionType.TOOLS).tools == ["Read", "Grep"]

    def test_argument_hint_kept(self):
        pkg = from_droid(DROID_COMMAND, {"id": "review"})

        assert pkg.metadata.droid.argument_hint == "<branch>"

    def test_without_argument_hint(self):
        pkg = from_droid("---\nname: x\n---\n\nDo x.", {"id": "x"})

        assert pkg.metadata.droid is None
