"""Format and subtype vocabularies shared by every converter."""

from enum import Enum


class Format(str, Enum):
    """Known source/target tool formats."""

    CURSOR = "cursor"
    CLAUDE = "claude"
    CONTINUE = "continue"
    WINDSURF = "windsurf"
    COPILOT = "copilot"
    KIRO = "kiro"
    AGENTS_MD = "agents.md"
    GEMINI = "gemini"
    OPENCODE = "opencode"
    RULER = "ruler"
    DROID = "droid"
    TRAE = "trae"
    AIDER = "aider"
    ZENCODER = "zencoder"
    REPLIT = "replit"
    GENERIC = "generic"
    MCP = "mcp"


class Subtype(str, Enum):
    """What a package is for, independent of the tool that runs it."""

    RULE = "rule"
    AGENT = "agent"
    SKILL = "skill"
    SLASH_COMMAND = "slash-command"
    PROMPT = "prompt"
    WORKFLOW = "workflow"
    TOOL = "tool"
    TEMPLATE = "template"
    COLLECTION = "collection"
    CHATMODE = "chatmode"
    HOOK = "hook"


class Priority(str, Enum):
    """Priority of an instructions section."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SectionType(str, Enum):
    """Discriminator values of canonical sections."""

    METADATA = "metadata"
    INSTRUCTIONS = "instructions"
    RULES = "rules"
    EXAMPLES = "examples"
    TOOLS = "tools"
    PERSONA = "persona"
    CONTEXT = "context"
    HOOK = "hook"
    CUSTOM = "custom"
