"""Tests for the canonical model and taxonomy helpers."""

import json

import pytest
from pydantic import ValidationError

from prompt_converters.canonical import (
    CanonicalPackage,
    ConversionResult,
    Format,
    MetadataData,
    MetadataSection,
    PackageMetadata,
    RulesSection,
    SectionType,
    Subtype,
    detect_subtype_from_frontmatter,
    normalize_format,
    normalize_subtype,
    resolve_subtype,
    set_taxonomy,
    subtype_from_path,
)


# =============================================================================
# CanonicalPackage Tests
# =============================================================================


class TestCanonicalPackage:
    """Tests for CanonicalPackage."""

    def test_defaults(self):
        pkg = CanonicalPackage(id="x", name="x")

        assert pkg.version == "1.0.0"
        assert pkg.author == "unknown"
        assert pkg.format == Format.GENERIC
        assert pkg.subtype == Subtype.RULE
        assert pkg.sections == []

    def test_get_section(self, sample_package):
        rules = sample_package.get_section(SectionType.RULES)

        assert isinstance(rules, RulesSection)
        assert len(rules.items) == 2
        assert sample_package.get_section("context") is None
        assert sample_package.has_section("persona")

    def test_title_fallbacks(self):
        pkg = CanonicalPackage(id="pkg-id", name="pkg-name")
        assert pkg.title == "pkg-name"

        pkg.metadata = PackageMetadata(title="From Extras")
        assert pkg.title == "From Extras"

        pkg.content.sections = [MetadataSection(data=MetadataData(title="From Section"))]
        assert pkg.title == "From Section"

    def test_display_description_falls_back_to_metadata(self):
        pkg = CanonicalPackage(id="x", name="x")
        pkg.content.sections = [MetadataSection(data=MetadataData(title="X", description="From section"))]

        assert pkg.display_description == "From section"

    def test_to_dict_uses_camel_case(self, sample_package):
        data = sample_package.to_dict()

        assert data["content"]["format"] == "canonical"
        assert data["content"]["version"] == "1.0"
        assert "sourceFormat" not in data
        assert data["content"]["sections"][0]["type"] == "metadata"

    def test_json_round_trip(self, sample_package):
        restored = CanonicalPackage.from_json(sample_package.to_json())

        assert restored == sample_package

    def test_sections_parsed_by_type(self):
        data = {
            "id": "x",
            "name": "x",
            "content": {
                "format": "canonical",
                "version": "1.0",
                "sections": [
                    {"type": "rules", "title": "Rules", "items": [{"content": "Be kind"}]},
                ],
            },
        }

        pkg = CanonicalPackage.from_json(json.dumps(data))

        assert isinstance(pkg.sections[0], RulesSection)
        assert pkg.sections[0].items[0].content == "Be kind"

    def test_unknown_section_type_rejected(self):
        data = {"id": "x", "name": "x", "content": {"sections": [{"type": "nope", "content": "x"}]}}

        with pytest.raises(ValidationError):
            CanonicalPackage.from_json(data)


class TestConversionResult:
    """Tests for ConversionResult."""

    def test_quality_score_bounds(self):
        with pytest.raises(ValidationError):
            ConversionResult(content="x", format="cursor", quality_score=101)

    def test_succeeded_requires_content(self):
        assert ConversionResult(content="x", format="cursor").succeeded
        assert not ConversionResult(content="", format="cursor").succeeded


# =============================================================================
# Taxonomy Tests
# =============================================================================


class TestNormalizeFormat:
    """Tests for normalize_format."""

    def test_exact_name(self):
        assert normalize_format("kiro") == Format.KIRO
        assert normalize_format("agents.md") == Format.AGENTS_MD

    def test_case_insensitive(self):
        assert normalize_format("Claude") == Format.CLAUDE

    def test_contained_name(self):
        assert normalize_format("cursor-rules") == Format.CURSOR
        assert normalize_format("agents-md") == Format.AGENTS_MD

    def test_unknown_is_generic(self):
        assert normalize_format("notepad") == Format.GENERIC
        assert normalize_format(None) == Format.GENERIC


class TestSubtypes:
    """Tests for subtype normalization and detection."""

    def test_normalize_aliases(self):
        assert normalize_subtype("command") == Subtype.SLASH_COMMAND
        assert normalize_subtype("Slash-Command") == Subtype.SLASH_COMMAND
        assert normalize_subtype("agents") == Subtype.AGENT
        assert normalize_subtype("whatever") is None

    def test_detect_from_frontmatter(self):
        assert detect_subtype_from_frontmatter({"type": "skill"}) == Subtype.SKILL
        assert detect_subtype_from_frontmatter({"agentType": True}) == Subtype.AGENT
        assert detect_subtype_from_frontmatter({"name": "x"}) == Subtype.RULE
        assert detect_subtype_from_frontmatter(None) == Subtype.RULE

    def test_explicit_subtype_wins(self):
        assert resolve_subtype("agent", {"type": "skill"}) == Subtype.AGENT

    def test_frontmatter_then_default(self):
        assert resolve_subtype(None, {"type": "skill"}) == Subtype.SKILL
        assert resolve_subtype(None, {"name": "x"}) == Subtype.RULE
        assert resolve_subtype(None, None, default=Subtype.SLASH_COMMAND) == Subtype.SLASH_COMMAND

    def test_subtype_from_path(self):
        assert subtype_from_path(".claude/skills/review/SKILL.md") == Subtype.SKILL
        assert subtype_from_path("/repo/.claude/commands/fix.md") == Subtype.SLASH_COMMAND
        assert subtype_from_path(".github/prompts/plan.prompt.md") == Subtype.PROMPT
        assert subtype_from_path("docs/README.md") is None
        assert subtype_from_path(None) is None


class TestSetTaxonomy:
    """Tests for set_taxonomy."""

    def test_subtype_never_empty(self):
        pkg = set_taxonomy(CanonicalPackage(id="x", name="x"), "cursor")

        assert pkg.format == Format.CURSOR
        assert pkg.subtype == Subtype.RULE

    def test_explicit_subtype(self):
        pkg = set_taxonomy(CanonicalPackage(id="x", name="x"), Format.CLAUDE, "skill")

        assert pkg.subtype == Subtype.SKILL

    def test_keeps_existing_subtype(self):
        pkg = CanonicalPackage(id="x", name="x", subtype=Subtype.AGENT)
        set_taxonomy(pkg, "claude", "not-a-subtype")

        assert pkg.subtype == Subtype.AGENT

    def test_fills_source_format(self):
        pkg = set_taxonomy(CanonicalPackage(id="x", name="x"), "gemini")

        assert pkg.source_format == Format.GEMINI
