"""YAML frontmatter splitting and rendering."""

import datetime
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Union

import yaml

from prompt_converters.errors import ParseError

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool, None]
FrontmatterValue = Union[Scalar, list[Scalar], dict[str, Union[Scalar, list[Scalar]]]]
Frontmatter = dict[str, FrontmatterValue]

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)(.*)\Z",
    re.DOTALL | re.MULTILINE,
)
SIMPLE_LINE_PATTERN = re.compile(r"^([A-Za-z_][\w.-]*)\s*:\s*(.*)$")


@dataclass
class FrontmatterDocument:
    """A document split into frontmatter and body."""

    frontmatter: Frontmatter = field(default_factory=dict)
    body: str = ""
    has_frontmatter: bool = False


def has_frontmatter(content: str) -> bool:
    """Check whether content opens with a ``---`` delimited block."""
    return FRONTMATTER_PATTERN.match(_normalize_newlines(content)) is not None


def split_frontmatter(
    content: str,
    strict: bool = False,
    format: str | None = None,
) -> FrontmatterDocument:
    """Split leading YAML frontmatter from a markdown document.

    Args:
        content: Raw document text
        strict: Raise ParseError on invalid YAML instead of falling back to
            line-by-line ``key: value`` parsing
        format: Source format, used in error messages

    Returns:
        FrontmatterDocument with normalized frontmatter values
    """
    text = _normalize_newlines(content)
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return FrontmatterDocument(body=text)

    raw, body = match.group(1), match.group(2)
    try:
        data = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as e:
        if strict:
            raise ParseError(
                f"Failed to parse YAML frontmatter: {e}",
                format=format,
                field="frontmatter",
            ) from e
        logger.warning("Invalid YAML frontmatter, falling back to key/value parsing: %s", e)
        data = parse_simple_frontmatter(raw)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        if strict:
            raise ParseError(
                "Failed to parse YAML frontmatter: expected a mapping",
                format=format,
                field="frontmatter",
            )
        logger.warning("Ignoring frontmatter that is not a mapping")
        data = {}

    return FrontmatterDocument(
        frontmatter={str(k): normalize_value(v) for k, v in data.items()},
        body=body,
        has_frontmatter=True,
    )


def parse_simple_frontmatter(raw: str) -> Frontmatter:
    """Read ``key: value`` lines, ignoring anything else."""
    result: Frontmatter = {}
    for line in raw.split("\n"):
        match = SIMPLE_LINE_PATTERN.match(line)
        if match:
            result[match.group(1)] = _unquote(match.group(2).strip())
    return result


def normalize_value(value: Any, depth: int = 0) -> FrontmatterValue:
    """Coerce a YAML value into the supported frontmatter value types."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [v if isinstance(v, (str, bool, int, float)) or v is None else str(v) for v in value]
    if isinstance(value, dict) and depth == 0:
        return {str(k): normalize_value(v, depth + 1) for k, v in value.items()}
    return str(value)


def as_list(value: FrontmatterValue) -> list[str]:
    """Read a comma-separated string or a list as a list of strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def format_yaml_value(value: Scalar) -> str:
    """Render a scalar as YAML, quoting only when needed.

    pyyaml decides whether a plain scalar would read back unchanged;
    strings it would quote are emitted double-quoted.
    """
    text = _dump_scalar(value)
    if text.startswith("'"):
        return _dump_scalar(value, style='"')
    return text


def build_frontmatter(fields: list[tuple[str, Any]], quote: bool = False) -> str:
    """Render ordered key/value pairs as a ``---`` delimited block.

    None values are skipped. Lists render as indented ``- item`` lines.

    Args:
        fields: Ordered (key, value) pairs
        quote: Always double-quote string values

    Returns:
        Frontmatter block including both delimiters
    """
    lines = ["---"]
    for key, value in fields:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            lines.append(f"{key}:")
            for item in value:
                lines.append(f"  - {_render_scalar(item, quote)}")
        else:
            lines.append(f"{key}: {_render_scalar(value, quote)}")
    lines.append("---")
    return "\n".join(lines)


def _render_scalar(value: Scalar, quote: bool) -> str:
    if quote and isinstance(value, str):
        return _dump_scalar(value, style='"')
    return format_yaml_value(value)


def _dump_scalar(value: Scalar, style: str | None = None) -> str:
    dumped = yaml.safe_dump(
        {"value": value},
        default_style=style,
        allow_unicode=True,
        width=float("inf"),
        sort_keys=False,
    )
    return dumped.split(": ", 1)[1].rstrip("\n")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").lstrip("\ufeff")
