"""Tests for the Conversion Engine."""

import json

import pytest

from prompt_converters.canonical import Format, Subtype
from prompt_converters.config.base import (
    ConversionOptions,
    ConversionProfile,
    CopilotConfig,
    ErrorPolicy,
    KiroConfig,
    SourceSpec,
)
from prompt_converters.engine.conversion_engine import ConversionEngine, FileConversion
from prompt_converters.errors import ConversionError, ParseError, UnsupportedFormatError


AGENT_PATH = ".claude/agents/code-reviewer.md"
COMMAND_PATH = ".gemini/commands/summarize.toml"


@pytest.fixture
def engine():
    return ConversionEngine()


def _profile(targets, sources, on_error=ErrorPolicy.SKIP, options=None):
    return ConversionProfile(
        name="test_profile",
        targets=targets,
        sources=[SourceSpec(path=s) for s in sources],
        output_dir="out",
        on_error=on_error,
        options=options or ConversionOptions(),
    )


# =============================================================================
# Content Conversion Tests
# =============================================================================


class TestConvertContent:
    """Tests for parse, serialize and convert."""

    def test_convert(self, engine):
        result = engine.convert('prompt = "Explain the code"', "gemini", "claude", {"id": "explain"})

        assert result.format == "claude"
        assert "name: explain" in result.content
        assert "Explain the code" in result.content

    def test_parse_with_subtype(self, engine, claude_agent_content):
        pkg = engine.parse(claude_agent_content, "claude", {"id": "a"}, "skill")

        assert pkg.subtype == Subtype.SKILL

    def test_unknown_source_format(self, engine):
        with pytest.raises(UnsupportedFormatError, match="parse"):
            engine.parse("x", "notepad", {"id": "a"})

    def test_parse_error_propagates(self, engine):
        with pytest.raises(ParseError):
            engine.convert("# no frontmatter", "kiro", "cursor", {"id": "a"})

    def test_detect(self, engine):
        assert engine.detect('prompt = "x"') == "gemini"

    def test_detect_failure(self, engine):
        with pytest.raises(UnsupportedFormatError, match="detection"):
            engine.detect("just words")

    def test_list_formats(self, engine):
        assert "kiro-agent" in engine.list_formats()


# =============================================================================
# File Conversion Tests
# =============================================================================


class TestConvertFile:
    """Tests for file loading and conversion."""

    def test_load_file(self, engine, project_dir):
        pkg = engine.load_file(project_dir / AGENT_PATH)

        assert pkg.id == "code-reviewer"
        assert pkg.format == Format.CLAUDE
        assert pkg.subtype == Subtype.AGENT

    def test_load_missing_file(self, engine, tmp_path):
        with pytest.raises(FileNotFoundError, match="Source file not found"):
            engine.load_file(tmp_path / "missing.md")

    def test_convert_file_does_not_write(self, engine, project_dir):
        conversion = engine.convert_file(project_dir / AGENT_PATH, "cursor", root=project_dir)

        assert conversion.succeeded
        assert conversion.output_path == project_dir / ".cursor" / "rules" / "code-reviewer.mdc"
        assert not conversion.output_path.exists()

    def test_write(self, engine, project_dir):
        conversion = engine.convert_file(project_dir / AGENT_PATH, "windsurf", root=project_dir)
        path = engine.write(conversion)

        assert conversion.written
        assert path.read_text(encoding="utf-8").startswith("# Code Reviewer")

    def test_write_adds_trailing_newline(self, engine, project_dir):
        conversion = engine.convert_file(project_dir / AGENT_PATH, "kiro-agent", root=project_dir)
        path = engine.write(conversion)

        assert path.name == "code-reviewer.json"
        assert path.read_text(encoding="utf-8").endswith("}\n")

    def test_subtype_from_path_picks_directory(self, engine, project_dir):
        conversion = engine.convert_file(project_dir / COMMAND_PATH, "claude", root=project_dir)

        assert conversion.output_path == project_dir / ".claude" / "commands" / "summarize.md"

    def test_explicit_output_path(self, engine, project_dir):
        target = project_dir / "custom" / "rules.md"
        conversion = engine.convert_file(project_dir / AGENT_PATH, "agents.md", output_path=target)

        assert conversion.output_path == target

    def test_failed_conversion(self, engine, project_dir):
        conversion = engine.convert_file(project_dir / AGENT_PATH, "kiro", root=project_dir)

        assert not conversion.succeeded
        assert conversion.error.startswith("Conversion error:")
        assert conversion.output_path is None
        with pytest.raises(ValueError, match="Nothing to write"):
            engine.write(conversion)

    def test_options(self, engine, project_dir):
        conversion = engine.convert_file(
            project_dir / AGENT_PATH, "kiro", options=KiroConfig(inclusion="always"), root=project_dir
        )

        assert conversion.succeeded
        assert conversion.output_path == project_dir / ".kiro" / "steering" / "code-reviewer.md"

    def test_kiro_filename_option_names_the_output(self, engine, project_dir):
        options = KiroConfig(inclusion="always", filename="API Rules")
        conversion = engine.convert_file(project_dir / AGENT_PATH, "kiro", options=options, root=project_dir)

        assert conversion.output_path == project_dir / ".kiro" / "steering" / "api-rules.md"

    def test_kiro_domain_names_the_output(self, engine, project_dir):
        options = KiroConfig(inclusion="always", domain="Code Review")
        conversion = engine.convert_file(project_dir / AGENT_PATH, "kiro", options=options, root=project_dir)

        assert conversion.output_path.name == "code-review.md"

    def test_copilot_instruction_name_names_the_output(self, engine, project_dir):
        conversion = engine.convert_file(
            project_dir / AGENT_PATH, "copilot", options=CopilotConfig(instruction_name="Review Guide"), root=project_dir
        )

        assert conversion.output_path == project_dir / ".github" / "instructions" / "review-guide.instructions.md"

    def test_validate_file(self, engine, project_dir):
        assert engine.validate_file(project_dir / AGENT_PATH).valid
        assert engine.validate_file(project_dir / COMMAND_PATH).valid

    def test_file_conversion_to_dict(self, engine, project_dir):
        data = engine.convert_file(project_dir / AGENT_PATH, "cursor", root=project_dir).to_dict()

        assert data["target"] == "cursor"
        assert data["succeeded"] is True
        assert "quality_score" in data


# =============================================================================
# Batch Tests
# =============================================================================


class TestConvertBatch:
    """Tests for profile-driven batch conversion."""

    def test_batch_writes_outputs(self, engine, project_dir):
        profile = _profile(["cursor", "windsurf"], [AGENT_PATH, COMMAND_PATH])

        result = engine.convert_batch(profile, base_dir=project_dir)

        assert len(result.conversions) == 4
        assert result.failed == []
        assert (project_dir / "out" / ".cursor" / "rules" / "code-reviewer.mdc").exists()
        assert (project_dir / "out" / ".cursor" / "commands" / "summarize.md").exists()
        assert (project_dir / "out" / ".windsurf" / "rules" / "summarize.md").exists()

    def test_skip_records_failures(self, engine, project_dir):
        profile = _profile(["cursor", "kiro"], [AGENT_PATH, "missing.md"])

        result = engine.convert_batch(profile, base_dir=project_dir)

        assert len(result.conversions) == 4
        assert len(result.succeeded) == 1
        failed_sources = [c.source.name for c in result.failed]
        assert failed_sources.count("missing.md") == 2

    def test_options_per_target(self, engine, project_dir):
        options = ConversionOptions(kiro=KiroConfig(inclusion="always"))
        profile = _profile(["kiro"], [AGENT_PATH], options=options)

        result = engine.convert_batch(profile, base_dir=project_dir)

        assert len(result.succeeded) == 1
        written = project_dir / "out" / ".kiro" / "steering" / "code-reviewer.md"
        assert written.read_text(encoding="utf-8").startswith("---\ninclusion: always\n---")

    def test_project_files_get_a_directory_per_source(self, engine, project_dir):
        profile = _profile(["agents.md"], [AGENT_PATH, COMMAND_PATH])

        result = engine.convert_batch(profile, base_dir=project_dir)

        assert result.failed == []
        reviewer = project_dir / "out" / "code-reviewer" / "AGENTS.md"
        summarize = project_dir / "out" / "summarize" / "AGENTS.md"
        assert reviewer.read_text(encoding="utf-8").startswith("# Code Reviewer")
        assert "Summarize the staged changes" in summarize.read_text(encoding="utf-8")
        assert not (project_dir / "out" / "AGENTS.md").exists()

    def test_single_source_project_file_at_root(self, engine, project_dir):
        result = engine.convert_batch(_profile(["aider"], [AGENT_PATH]), base_dir=project_dir)

        assert result.failed == []
        assert (project_dir / "out" / "CONVENTIONS.md").exists()

    def test_duplicate_output_path_fails(self, engine, project_dir):
        copy = project_dir / "shared" / "code-reviewer.md"
        copy.parent.mkdir()
        copy.write_text((project_dir / AGENT_PATH).read_text(encoding="utf-8"), encoding="utf-8")
        profile = ConversionProfile(
            name="dupes",
            targets=["windsurf"],
            sources=[SourceSpec(path=AGENT_PATH), SourceSpec(path="shared/code-reviewer.md", format="claude")],
            output_dir="out",
        )

        result = engine.convert_batch(profile, base_dir=project_dir)

        assert len(result.succeeded) == 1
        assert len(result.failed) == 1
        assert result.failed[0].source == copy
        assert result.failed[0].error.startswith("Output path ")
        assert "already written" in result.failed[0].error

    def test_duplicate_output_path_aborts(self, engine, project_dir):
        copy = project_dir / "shared" / "code-reviewer.md"
        copy.parent.mkdir()
        copy.write_text((project_dir / AGENT_PATH).read_text(encoding="utf-8"), encoding="utf-8")
        profile = ConversionProfile(
            name="dupes",
            targets=["windsurf"],
            sources=[SourceSpec(path=AGENT_PATH), SourceSpec(path="shared/code-reviewer.md", format="claude")],
            output_dir="out",
            on_error=ErrorPolicy.ABORT,
        )

        with pytest.raises(ConversionError, match="already written"):
            engine.convert_batch(profile, base_dir=project_dir)

    def test_abort_on_parse_error(self, engine, project_dir):
        profile = _profile(["cursor"], ["missing.md"], on_error=ErrorPolicy.ABORT)

        with pytest.raises(FileNotFoundError):
            engine.convert_batch(profile, base_dir=project_dir)

    def test_abort_on_failed_conversion(self, engine, project_dir):
        profile = _profile(["kiro"], [AGENT_PATH], on_error=ErrorPolicy.ABORT)

        with pytest.raises(ConversionError) as excinfo:
            engine.convert_batch(profile, base_dir=project_dir)

        assert excinfo.value.target == "kiro"

    def test_unknown_target(self, engine, project_dir):
        profile = _profile(["notepad"], [AGENT_PATH])

        with pytest.raises(UnsupportedFormatError):
            engine.convert_batch(profile, base_dir=project_dir)

    def test_export_summary(self, engine, project_dir, tmp_path):
        profile = _profile(["cursor", "kiro"], [AGENT_PATH])
        result = engine.convert_batch(profile, base_dir=project_dir)

        summary_path = engine.export_summary(result, tmp_path / "summaries")
        summary = json.loads(summary_path.read_text(encoding="utf-8"))

        assert summary_path.name.startswith("summary_")
        assert summary["profile"] == "test_profile"
        assert summary["total"] == 2
        assert summary["succeeded"] == 1
        assert summary["failed"] == 1
        assert summary["average_score"] == result.average_score

    def test_average_score_of_nothing(self, engine, project_dir):
        result = engine.convert_batch(_profile(["cursor"], []), base_dir=project_dir)

        assert result.average_score == 0.0
        assert result.duration_seconds >= 0


class TestFileConversion:
    """Tests for FileConversion."""

    def test_error_means_failed(self, tmp_path):
        conversion = FileConversion(source=tmp_path / "a.md", target_format="cursor", error="boom")

        assert not conversion.succeeded
        assert conversion.to_dict()["error"] == "boom"
