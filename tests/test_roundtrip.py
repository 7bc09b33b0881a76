"""Round-trip tests: parse a document, write it back out, parse it again."""

from prompt_converters.canonical import SectionType
from prompt_converters.config.base import KiroConfig
from prompt_converters.parsers import (
    from_aider,
    from_claude,
    from_gemini,
    from_kiro,
    from_kiro_agent,
    from_ruler,
    from_windsurf,
)
from prompt_converters.serializers import to_aider, to_claude, to_gemini, to_kiro, to_kiro_agent, to_ruler, to_windsurf


def _instructions(pkg):
    return [s.content for s in pkg.get_sections(SectionType.INSTRUCTIONS)]


class TestRoundTrip:
    """Same-format round trips keep title, description and instructions."""

    def test_claude(self, claude_agent_content):
        first = from_claude(claude_agent_content, {"id": "code-reviewer"}, explicit_subtype="agent")
        second = from_claude(to_claude(first).content, {"id": "code-reviewer"}, explicit_subtype="agent")

        assert second.title == first.title
        assert second.description == first.description
        assert _instructions(second) == _instructions(first)
        assert second.get_section(SectionType.RULES) == first.get_section(SectionType.RULES)
        assert second.get_section(SectionType.TOOLS) == first.get_section(SectionType.TOOLS)

    def test_windsurf(self, windsurf_content):
        first = from_windsurf(windsurf_content, {"id": "project"})
        output = to_windsurf(first).content
        second = from_windsurf(output, {"id": "project"})

        assert output == windsurf_content
        assert second.title == first.title
        assert second.description == first.description
        assert _instructions(second) == _instructions(first)

    def test_kiro(self, kiro_steering_content):
        first = from_kiro(kiro_steering_content, {"id": "api-standards"})
        second = from_kiro(to_kiro(first).content, {"id": "api-standards"})

        assert second.title == first.title
        assert second.description == first.description
        assert second.metadata.kiro_config == first.metadata.kiro_config
        assert second.get_section(SectionType.RULES) == first.get_section(SectionType.RULES)

    def test_gemini(self, gemini_content):
        first = from_gemini(gemini_content, {"id": "summarize"})
        second = from_gemini(to_gemini(first).content, {"id": "summarize"})

        assert second.description == first.description
        assert _instructions(second) == [c.strip() for c in _instructions(first)]

    def test_kiro_agent(self, kiro_agent_content):
        first = from_kiro_agent(kiro_agent_content)
        second = from_kiro_agent(to_kiro_agent(first).content)

        assert second.name == first.name
        assert second.description == first.description
        assert _instructions(second) == _instructions(first)
        assert second.metadata.kiro_agent == first.metadata.kiro_agent


class TestCrossFormat:
    """Conversions between formats keep the core content."""

    def test_kiro_agent_to_kiro_steering(self, kiro_agent_content):
        pkg = from_kiro_agent(kiro_agent_content)
        result = to_kiro(pkg)

        assert result.succeeded
        assert result.content.startswith("---\ninclusion: always\n---")

    def test_claude_to_kiro_to_claude(self, claude_agent_content):
        pkg = from_claude(claude_agent_content, {"id": "code-reviewer"})
        steering = to_kiro(pkg, KiroConfig(inclusion="always")).content
        back = from_kiro(steering, {"id": "code-reviewer"})

        assert back.title == pkg.title
        assert "Read every diff carefully before commenting." in _instructions(back)

    def test_windsurf_to_gemini(self, windsurf_content):
        pkg = from_windsurf(windsurf_content, {"id": "project"})
        command = from_gemini(to_gemini(pkg).content, {"id": "project"})

        assert command.description == pkg.description
        assert _instructions(command) == _instructions(pkg)

    def test_claude_to_aider(self, claude_agent_content):
        pkg = from_claude(claude_agent_content, {"id": "code-reviewer"})
        back = from_aider(to_aider(pkg).content, {"id": "code-reviewer"})

        assert back.title == pkg.title
        assert back.description == pkg.description
        assert back.get_section(SectionType.RULES) == pkg.get_section(SectionType.RULES)

    def test_claude_to_ruler(self, claude_agent_content):
        pkg = from_claude(claude_agent_content, {"id": "code-reviewer"})
        back = from_ruler(to_ruler(pkg).content, {"id": "code-reviewer"})

        assert back.name == pkg.name
        assert back.title == pkg.title
        assert back.description == pkg.description
        assert back.get_section(SectionType.RULES) == pkg.get_section(SectionType.RULES)
