"""Markdown body parsing shared by the markdown-based formats.

A body is split into an optional H1 title, an optional description
paragraph, a preamble, and ``##`` blocks. Each block is then turned into a
typed section by one of two strategies:

- ``claude_section``: typing rules of Claude-style agents and commands
- ``keyword_section``: title keywords plus a short lookahead, used for
  Kiro steering, Copilot, AGENTS.md, Aider and Ruler files

Headings inside fenced code never split blocks.
"""

import logging
import re
from dataclasses import dataclass, field

from prompt_converters.canonical.sections import (
    ContextSection,
    Example,
    ExamplesSection,
    InstructionsSection,
    PersonaData,
    Rule,
    RulesSection,
    Section,
)

logger = logging.getLogger(__name__)

EMOJI_PATTERN = re.compile(
    r"^((?:[\U0001F000-\U0001FAFF\u2300-\u23FF\u2600-\u27BF\u2B00-\u2BFF]"
    r"[\uFE0F\u200D\U0001F3FB-\U0001F3FF]*)+)\s*(.*)$"
)
FENCE_PATTERN = re.compile(r"^\s*(```|~~~)\s*([\w+#.-]*)")
BULLET_PATTERN = re.compile(r"^[-*+]\s+(.*)$")
NUMBERED_PATTERN = re.compile(r"^\d+[.)]\s+(.*)$")
BOLD_ITEM_PATTERN = re.compile(r"^\*\*[^*]+\*\*\s*:?")
SUB_RATIONALE_PATTERN = re.compile(r"^[-*+]?\s*[*_]?(?:Rationale|Why):\s*(.*?)[*_]?$", re.IGNORECASE)
SUB_EXAMPLE_PATTERN = re.compile(r"^[-*+]?\s*Example:\s*(.*)$", re.IGNORECASE)
ITALIC_PATTERN = re.compile(r"^(?:\*(?!\*)(.+?)\*|_(.+?)_)$")
EXAMPLE_LABEL_PATTERN = re.compile(
    r"^(?:good|bad|incorrect|correct|preferred|avoid|do|don't)\b(?:\s+example)?\s*:\s*",
    re.IGNORECASE,
)
PERSONA_PATTERN = re.compile(r"You are ([^,.\n]+)(?:,\s*(?:an?\s+)?([^.\n]+))?", re.IGNORECASE)
ROLE_PATTERN = re.compile(r"Your role is (?:to\s+)?([^.\n]+)", re.IGNORECASE)
STYLE_PATTERN = re.compile(r"(?:communication\s+)?style(?:\s+is)?\s*:\s*([^.\n]+)|style is\s+([^.\n]+)", re.IGNORECASE)

GOOD_MARKERS = ("✓", "✅", "✔")
BAD_MARKERS = ("❌", "✗", "✘", "🚫")
GOOD_LABELS = ("good", "correct", "preferred", "do")
BAD_LABELS = ("bad", "incorrect", "avoid", "don't")

# Title keywords that type a ``##`` block in keyword_section
EXAMPLE_WORDS = ("example", "sample")
RULE_WORDS = ("rule", "guideline", "standard", "convention", "policy", "principle", "best practice")
CONTEXT_WORDS = ("context", "background", "overview")


@dataclass
class MarkdownBlock:
    """A ``##`` heading and the lines under it."""

    title: str
    lines: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.lines).strip()


@dataclass
class MarkdownDocument:
    """Structural split of a markdown body."""

    title: str | None = None
    icon: str | None = None
    description: str | None = None
    preamble: str = ""
    blocks: list[MarkdownBlock] = field(default_factory=list)


def split_icon(text: str) -> tuple[str | None, str]:
    """Split a leading emoji off a heading.

    Returns:
        Tuple of (icon or None, remaining text)
    """
    match = EMOJI_PATTERN.match(text.strip())
    if match and match.group(2):
        return match.group(1), match.group(2).strip()
    return None, text.strip()


def is_list_line(line: str) -> bool:
    stripped = line.strip()
    return bool(BULLET_PATTERN.match(stripped) or NUMBERED_PATTERN.match(stripped))


def split_markdown(body: str, extract_description: bool = True) -> MarkdownDocument:
    """Split a markdown body into title, description, preamble and blocks.

    Args:
        body: Markdown without frontmatter
        extract_description: Treat the first plain paragraph after the H1 as
            the document description instead of preamble text

    Returns:
        MarkdownDocument
    """
    doc = MarkdownDocument()
    preamble: list[str] = []
    current: MarkdownBlock | None = None
    in_fence = False
    lines = body.replace("\r\n", "\n").split("\n")

    i = 0
    while i < len(lines):
        line = lines[i]
        if FENCE_PATTERN.match(line):
            in_fence = not in_fence
        elif not in_fence and line.startswith("## "):
            current = MarkdownBlock(title=line[3:].strip())
            doc.blocks.append(current)
            i += 1
            continue
        elif not in_fence and current is None and doc.title is None and line.startswith("# ") and not "".join(preamble).strip():
            doc.icon, doc.title = split_icon(line[2:])
            if extract_description:
                i = read_description(lines, i + 1, doc)
                continue
            i += 1
            continue

        if current is None:
            preamble.append(line)
        else:
            current.lines.append(line)
        i += 1

    doc.preamble = "\n".join(preamble).strip()
    return doc


def read_description(lines: list[str], start: int, doc: MarkdownDocument) -> int:
    """Consume the paragraph following an H1; return the next line index."""
    i = start
    while i < len(lines) and not lines[i].strip():
        i += 1
    if i >= len(lines):
        return i

    first = lines[i].strip()
    if first.startswith(("#", "```", "~~~", ">", "|")) or is_list_line(first):
        return start

    paragraph: list[str] = []
    while i < len(lines) and lines[i].strip():
        if lines[i].startswith("#") or FENCE_PATTERN.match(lines[i]):
            break
        paragraph.append(lines[i].strip())
        i += 1
    doc.description = " ".join(paragraph)
    return i


def parse_rule_items(lines: list[str]) -> tuple[list[Rule], bool]:
    """Parse list, numbered and bold lines into rules.

    Indented ``- *Rationale: x*``, ``- Why: x`` or italic lines attach a
    rationale to the preceding rule, ``Example: x`` lines attach examples,
    and any other indented text continues the rule.

    Returns:
        Tuple of (rules, whether the list was numbered)
    """
    rules: list[Rule] = []
    ordered = False
    current: Rule | None = None
    in_fence = False

    for raw in lines:
        if FENCE_PATTERN.match(raw):
            in_fence = not in_fence
        if in_fence or FENCE_PATTERN.match(raw):
            if current is not None:
                current.content = f"{current.content}\n{raw}"
            continue

        stripped = raw.strip()
        if not stripped:
            continue
        indented = raw[:1].isspace()
        bullet = BULLET_PATTERN.match(stripped)
        numbered = NUMBERED_PATTERN.match(stripped)
        top_level_item = not indented and (bullet or numbered)

        if current is not None and not top_level_item and (indented or stripped.startswith(("*", "_"))):
            rationale = SUB_RATIONALE_PATTERN.match(stripped)
            if rationale and (indented or "Rationale" in stripped[:14]):
                current.rationale = rationale.group(1).strip().rstrip("*_").strip()
                continue
            italic = ITALIC_PATTERN.match(stripped)
            if italic and not BOLD_ITEM_PATTERN.match(stripped):
                current.rationale = (italic.group(1) or italic.group(2)).strip()
                continue

        if current is not None and indented:
            example = SUB_EXAMPLE_PATTERN.match(stripped)
            if example:
                current.examples = (current.examples or []) + [example.group(1).strip().strip("`")]
            else:
                current.content = f"{current.content} {stripped.lstrip('-*+ ').strip()}"
            continue

        if numbered and not rules:
            ordered = True
        item = bullet or numbered
        current = Rule(content=item.group(1).strip() if item else stripped)
        rules.append(current)

    return rules, ordered


def parse_examples(lines: list[str]) -> list[Example]:
    """Parse ``###`` headed chunks containing fenced code into examples.

    A chunk without a heading takes its description from the text line
    preceding the code, or ``Example``.
    """
    chunks: list[tuple[str | None, list[str]]] = [(None, [])]
    in_fence = False
    for line in lines:
        if FENCE_PATTERN.match(line):
            in_fence = not in_fence
        if not in_fence and line.startswith("### "):
            chunks.append((line[4:].strip(), []))
        else:
            chunks[-1][1].append(line)

    examples: list[Example] = []
    for header, chunk in chunks:
        description, good = _example_header(header)
        found = 0
        text_before: list[str] = []
        code: list[str] | None = None
        language = None
        for line in chunk:
            fence = FENCE_PATTERN.match(line)
            if fence and code is None:
                code = []
                language = fence.group(2) or None
            elif fence:
                examples.append(
                    Example(
                        description=description or _last_text(text_before) or "Example",
                        code="\n".join(code),
                        language=language,
                        good=good,
                    )
                )
                code = None
                text_before = []
                found += 1
            elif code is not None:
                code.append(line)
            elif line.strip():
                text_before.append(line.strip())
        if header and not found:
            logger.debug("Example heading without code skipped: %s", header)

    return examples


def _example_header(header: str | None) -> tuple[str | None, bool | None]:
    """Read the description and good/bad flag from an example heading."""
    if header is None:
        return None, None

    good: bool | None = None
    text = header.strip()
    if text.startswith(GOOD_MARKERS):
        good = True
        text = text[1:]
    elif text.startswith(BAD_MARKERS):
        good = False
        text = text[1:]
    text = text.lstrip("\ufe0f").strip()

    first_word = text.split(":", 1)[0].split(" ", 1)[0].lower()
    if good is None and first_word in GOOD_LABELS:
        good = True
    elif good is None and first_word in BAD_LABELS:
        good = False

    label = EXAMPLE_LABEL_PATTERN.match(text)
    if label:
        text = text[label.end():].strip()
    return text or None, good


def _last_text(lines: list[str]) -> str | None:
    for line in reversed(lines):
        if not line.startswith("#"):
            return line.rstrip(":").strip() or None
    return None


def parse_persona(text: str) -> PersonaData:
    """Extract a persona from "You are ..." style prose."""
    name: str | None = None
    role = ""
    match = PERSONA_PATTERN.search(text)
    if match:
        name = match.group(1).strip()
        role = (match.group(2) or "").strip()
        if not role and re.match(r"^(?:an?|the)\s+", name, re.IGNORECASE):
            role = re.sub(r"^(?:an?|the)\s+", "", name, flags=re.IGNORECASE)
            name = None
    role_match = ROLE_PATTERN.search(text)
    if role_match and not role:
        role = role_match.group(1).strip()

    style: list[str] | None = None
    style_match = STYLE_PATTERN.search(text)
    if style_match:
        raw = style_match.group(1) or style_match.group(2)
        style = [s.strip() for s in re.split(r",\s*|\s+and\s+", raw) if s.strip()]

    expertise: list[str] = []
    collecting = False
    for line in text.split("\n"):
        stripped = line.strip()
        lowered = stripped.lower()
        if "expertise" in lowered or "areas of" in lowered:
            collecting = True
            continue
        if collecting:
            bullet = BULLET_PATTERN.match(stripped)
            if bullet:
                expertise.append(bullet.group(1).strip())
            elif stripped:
                collecting = False

    return PersonaData(name=name, role=role, style=style, expertise=expertise or None)


def is_persona_text(text: str) -> bool:
    return text.lstrip().startswith("You are ") or "Your role is" in text


def _rules_or_instructions(block: MarkdownBlock) -> Section:
    rules, ordered = parse_rule_items(block.lines)
    if not rules:
        return InstructionsSection(title=block.title, content=block.content)
    return RulesSection(title=block.title, items=rules, ordered=ordered or None)


def _examples_or_instructions(block: MarkdownBlock) -> Section:
    examples = parse_examples(block.lines)
    if not examples:
        return InstructionsSection(title=block.title, content=block.content)
    return ExamplesSection(title=block.title, examples=examples)


def claude_section(block: MarkdownBlock) -> Section:
    """Type a ``##`` block the way Claude agents and commands are read."""
    title = block.title.lower()
    content = block.content
    if "example" in title or "```" in content:
        return _examples_or_instructions(block)

    has_list = any(is_list_line(line) and not line[:1].isspace() for line in block.lines)
    has_bold_items = any(BOLD_ITEM_PATTERN.match(line) for line in block.lines)
    if any(word in title for word in ("rule", "guideline", "principle", "command")) or has_list or has_bold_items:
        return _rules_or_instructions(block)

    if "context" in title or "background" in title:
        return ContextSection(title=block.title, content=content)
    return InstructionsSection(title=block.title, content=content)


def keyword_section(
    block: MarkdownBlock,
    example_words: tuple[str, ...] = EXAMPLE_WORDS,
    rule_words: tuple[str, ...] = RULE_WORDS,
    context_words: tuple[str, ...] = CONTEXT_WORDS,
) -> Section:
    """Type a ``##`` block by title keywords, then by its first lines."""
    title = block.title.lower()
    if any(word in title for word in example_words):
        return _examples_or_instructions(block)
    if any(word in title for word in rule_words):
        return _rules_or_instructions(block)
    if any(word in title for word in context_words):
        return ContextSection(title=block.title, content=block.content)

    lookahead = [line for line in block.lines if line.strip()][:5]
    if lookahead and is_list_line(lookahead[0]):
        return _rules_or_instructions(block)
    if any(line.startswith("### ") or FENCE_PATTERN.match(line) for line in lookahead):
        examples = parse_examples(block.lines)
        if examples:
            return ExamplesSection(title=block.title, examples=examples)
    return InstructionsSection(title=block.title, content=block.content)


def keyword_sections(doc: MarkdownDocument) -> list[Section]:
    """Turn a split document into sections using ``keyword_section``.

    Preamble text before the first ``##`` becomes an "Overview"
    instructions section.
    """
    sections: list[Section] = []
    if doc.preamble:
        sections.append(InstructionsSection(title="Overview", content=doc.preamble))
    sections.extend(keyword_section(block) for block in doc.blocks)
    return sections
