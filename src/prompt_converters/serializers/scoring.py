"""Declarative quality-score penalty tables.

Every target format has a table of ``Penalty`` entries. A conversion
starts at 100 and loses ``points`` for each entry whose condition holds;
conditions that return a count are charged once per occurrence.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from prompt_converters.canonical.formats import SectionType, Subtype
from prompt_converters.canonical.package import CanonicalPackage

LOSSY_MARKERS = ("not supported", "skipped", "may be lost")

# Section types a Factory Droid file can hold.
DROID_SECTION_TYPES = ("metadata", "instructions", "rules", "examples", "persona", "tools")


@dataclass
class ScoringContext:
    """Everything a penalty condition may look at."""

    package: CanonicalPackage
    warnings: list[str] = field(default_factory=list)
    validation_errors: list[str] = field(default_factory=list)

    @property
    def lossy(self) -> bool:
        return any(marker in w for w in self.warnings for marker in LOSSY_MARKERS)


@dataclass(frozen=True)
class Penalty:
    """A score deduction applied when ``condition`` holds."""

    name: str
    points: int
    condition: Callable[[ScoringContext], bool | int]
    warning: str | None = None


def is_lossy(ctx: ScoringContext) -> bool:
    return ctx.lossy


def validation_error_count(ctx: ScoringContext) -> int:
    return len(ctx.validation_errors)


def missing_description(ctx: ScoringContext) -> bool:
    return not ctx.package.display_description


def missing_section(section_type: SectionType) -> Callable[[ScoringContext], bool]:
    def condition(ctx: ScoringContext) -> bool:
        return not ctx.package.has_section(section_type)

    return condition


def subtype_is(*subtypes: Subtype) -> Callable[[ScoringContext], bool]:
    def condition(ctx: ScoringContext) -> bool:
        return ctx.package.subtype in subtypes

    return condition


def sections_outside(allowed: tuple[str, ...]) -> Callable[[ScoringContext], int]:
    def condition(ctx: ScoringContext) -> int:
        return sum(1 for section in ctx.package.sections if section.type not in allowed)

    return condition


LOSSY = Penalty("lossy-conversion", 10, is_lossy)
VALIDATION_ERRORS = Penalty("validation-error", 5, validation_error_count)

# Lossy penalties go last so they see warnings added by earlier entries.
PENALTY_TABLES: dict[str, tuple[Penalty, ...]] = {
    "claude": (LOSSY,),
    "cursor": (VALIDATION_ERRORS, LOSSY),
    "continue": (LOSSY,),
    "windsurf": (
        Penalty("missing-description", 10, missing_description, "No description provided"),
        Penalty("missing-instructions", 20, missing_section(SectionType.INSTRUCTIONS), "No instructions section found"),
        Penalty("missing-persona", 5, missing_section(SectionType.PERSONA)),
        Penalty("missing-examples", 10, missing_section(SectionType.EXAMPLES)),
    ),
    "copilot": (LOSSY,),
    "kiro": (LOSSY,),
    "agents.md": (LOSSY,),
    "gemini": (VALIDATION_ERRORS, LOSSY),
    "kiro-agent": (
        Penalty(
            "slash-command",
            20,
            subtype_is(Subtype.SLASH_COMMAND),
            "Slash commands are not directly supported by Kiro agents",
        ),
        Penalty(
            "skill",
            10,
            subtype_is(Subtype.SKILL),
            "Skills are converted to agent prompts - some features may be lost",
        ),
        LOSSY,
    ),
    "aider": (LOSSY,),
    "trae": (LOSSY,),
    "zencoder": (LOSSY,),
    "ruler": (
        Penalty(
            "agent-or-workflow",
            10,
            subtype_is(Subtype.AGENT, Subtype.WORKFLOW),
            "Agents and workflows may not be fully represented by Ruler's simple rule format",
        ),
        Penalty("slash-command", 20, subtype_is(Subtype.SLASH_COMMAND), "Slash commands are not supported by Ruler"),
        Penalty("hook", 20, subtype_is(Subtype.HOOK), "Hooks are not supported by Ruler"),
        VALIDATION_ERRORS,
        LOSSY,
    ),
    "droid": (
        Penalty("unsupported-section", 5, sections_outside(DROID_SECTION_TYPES)),
        LOSSY,
    ),
}


def apply_penalties(penalties: tuple[Penalty, ...], ctx: ScoringContext) -> int:
    """Score a conversion against a penalty table.

    Warnings attached to applied penalties are appended to ``ctx.warnings``.

    Args:
        penalties: Table to apply, in order
        ctx: Conversion facts; its warnings list is extended in place

    Returns:
        Score between 0 and 100
    """
    score = 100
    for penalty in penalties:
        hits = int(penalty.condition(ctx))
        if not hits:
            continue
        score -= penalty.points * hits
        if penalty.warning:
            ctx.warnings.append(penalty.warning)
    return max(0, score)


def score_for(format_name: str, ctx: ScoringContext) -> int:
    """Score a conversion with the table registered for a format name."""
    return apply_penalties(PENALTY_TABLES.get(format_name, (LOSSY,)), ctx)
