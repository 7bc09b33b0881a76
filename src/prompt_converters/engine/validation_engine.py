"""Validation Engine - Enforces structural and schema correctness.

The Validation Engine ensures:
- Canonical packages are well formed before they are serialized
- Converted output matches the bundled JSON schema of its format
- Format-specific files can be checked before they are written
"""

import json
import logging
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from importlib import resources
from typing import Any

import jsonschema
from jsonschema.protocols import Validator

from prompt_converters.canonical.formats import Format, SectionType, Subtype
from prompt_converters.canonical.package import CanonicalPackage
from prompt_converters.parsers.frontmatter import split_frontmatter

logger = logging.getLogger(__name__)

SCHEMA_PACKAGE = "prompt_converters"
SCHEMA_DIR = "format_schemas"

# Subtype-specific schemas take precedence over the format-level schema.
SUBTYPE_SCHEMAS: dict[tuple[str, str], str] = {
    ("claude", "agent"): "claude-agent.schema.json",
    ("claude", "skill"): "claude-skill.schema.json",
    ("claude", "slash-command"): "claude-slash-command.schema.json",
    ("cursor", "slash-command"): "cursor-command.schema.json",
    ("kiro", "agent"): "kiro-agent.schema.json",
}

FORMAT_SCHEMAS: dict[str, str] = {
    "cursor": "cursor.schema.json",
    "claude": "claude.schema.json",
    "continue": "continue.schema.json",
    "windsurf": "windsurf.schema.json",
    "copilot": "copilot.schema.json",
    "kiro": "kiro-steering.schema.json",
    "agents-md": "agents-md.schema.json",
    "gemini": "gemini.schema.json",
    "aider": "aider.schema.json",
    "droid": "droid.schema.json",
    "ruler": "ruler.schema.json",
    "trae": "trae.schema.json",
    "zencoder": "zencoder.schema.json",
    "canonical": "canonical.schema.json",
}

# Formats whose files carry no frontmatter; validated as {"content": ...}.
CONTENT_ONLY_FORMATS = ("windsurf", "agents-md", "aider", "ruler", "trae")

_validator_cache: dict[str, Validator] = {}


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            valid=self.valid and other.valid,
            issues=self.issues + other.issues,
            validated_count=self.validated_count + other.validated_count,
            metadata={**self.metadata, **other.metadata},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validated_count": self.validated_count,
            "issues": [i.to_dict() for i in self.issues],
            "metadata": self.metadata,
        }


def schema_name(format_name: Format | str) -> str:
    """Map a format name to the key used for schema lookup."""
    name = format_name.value if isinstance(format_name, Format) else str(format_name).lower()
    if name in ("agents.md", "agentsmd"):
        return "agents-md"
    if name == "kiro-agent":
        return "kiro"
    return name


def schema_filename(format_name: Format | str, subtype: Subtype | str | None = None) -> str:
    """Pick the schema file for a format, preferring a subtype-specific one."""
    name = schema_name(format_name)
    if str(format_name) == "kiro-agent" and subtype is None:
        subtype = Subtype.AGENT
    if subtype is not None:
        key = (name, subtype.value if isinstance(subtype, Subtype) else str(subtype))
        if key in SUBTYPE_SCHEMAS:
            return SUBTYPE_SCHEMAS[key]
    return FORMAT_SCHEMAS.get(name, f"{name}.schema.json")


def load_schema(filename: str) -> dict[str, Any]:
    """Read a bundled schema.

    Raises:
        FileNotFoundError: If no schema with that name is bundled
    """
    resource = resources.files(SCHEMA_PACKAGE).joinpath(SCHEMA_DIR, filename)
    if not resource.is_file():
        raise FileNotFoundError(f'Schema file "{filename}" not found')
    return json.loads(resource.read_text(encoding="utf-8"))


def get_validator(filename: str) -> Validator:
    """Compile a bundled schema once and reuse it."""
    if filename not in _validator_cache:
        schema = load_schema(filename)
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)
        _validator_cache[filename] = validator_cls(schema)
    return _validator_cache[filename]


def _json_path(parts) -> str:
    return "/" + "/".join(str(p) for p in parts)


class ValidationEngine:
    """Engine for validating canonical packages and converted output.

    Enforces:
    - Canonical structure (identity, sections, metadata placement)
    - Format schemas for every supported target
    """

    def validate_package(self, pkg: CanonicalPackage) -> ValidationResult:
        """Validate the structure of a canonical package.

        Checks:
        - Identity fields are present
        - There is at least one section
        - At most one metadata section, placed first
        - Rules and examples sections are not empty
        """
        result = ValidationResult(valid=True, validated_count=1)

        if not pkg.id:
            result.add_issue(ValidationSeverity.ERROR, "Package must have an id", path="id")
        if not pkg.name:
            result.add_issue(ValidationSeverity.ERROR, "Package must have a name", path="name")

        sections = pkg.sections
        if not sections:
            result.add_issue(
                ValidationSeverity.ERROR,
                "Package has no content sections",
                path="content.sections",
            )

        metadata_positions = [i for i, s in enumerate(sections) if s.type == SectionType.METADATA.value]
        if len(metadata_positions) > 1:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Package has {len(metadata_positions)} metadata sections; expected at most one",
                path="content.sections",
            )
        elif metadata_positions and metadata_positions[0] != 0:
            result.add_issue(
                ValidationSeverity.WARNING,
                "Metadata section should be the first section",
                path=f"content.sections[{metadata_positions[0]}]",
            )

        if not pkg.display_description:
            result.add_issue(
                ValidationSeverity.WARNING,
                "Package has no description",
                path="description",
            )

        for i, section in enumerate(sections):
            if section.type == SectionType.RULES.value and not section.items:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"Rules section '{section.title}' has no rules",
                    path=f"content.sections[{i}].items",
                )
            elif section.type == SectionType.EXAMPLES.value and not section.examples:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"Examples section '{section.title}' has no examples",
                    path=f"content.sections[{i}].examples",
                )

        return result

    def validate_format(
        self,
        format_name: Format | str,
        data: Any,
        subtype: Subtype | str | None = None,
    ) -> ValidationResult:
        """Validate data against a format's bundled JSON schema.

        Args:
            format_name: Format name; ``agents.md`` and ``kiro-agent`` are accepted
            data: Parsed document, usually ``{"frontmatter": ..., "content": ...}``
            subtype: Optional subtype selecting a more specific schema

        Returns:
            Validation result; deprecated fields are reported as warnings
        """
        result = ValidationResult(valid=True, validated_count=1)
        filename = schema_filename(format_name, subtype)
        result.metadata["schema"] = filename

        try:
            validator = get_validator(filename)
        except (FileNotFoundError, json.JSONDecodeError, jsonschema.SchemaError) as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Schema validation failed: {e}",
                path="/",
            )
            return result

        for error in sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path)):
            path = _json_path(error.absolute_path)
            result.add_issue(
                ValidationSeverity.ERROR,
                f"{path}: {error.message}",
                path=path,
                schema_path=list(error.schema_path),
            )

        for path in self._deprecated_fields(validator.schema, data, []):
            result.add_issue(
                ValidationSeverity.WARNING,
                f"{path}: field is deprecated",
                path=path,
            )

        logger.debug("Validated %s against %s: %d issue(s)", format_name, filename, len(result.issues))
        return result

    def validate_markdown(
        self,
        format_name: Format | str,
        content: str,
        subtype: Subtype | str | None = None,
    ) -> ValidationResult:
        """Validate a markdown document, splitting off its frontmatter first."""
        if schema_name(format_name) in CONTENT_ONLY_FORMATS:
            return self.validate_format(format_name, {"content": content}, subtype)

        document = split_frontmatter(content)
        data = {"frontmatter": document.frontmatter, "content": document.body}
        return self.validate_format(format_name, data, subtype)

    def validate_conversion(
        self,
        format_name: Format | str,
        content: str,
        subtype: Subtype | str | None = None,
    ) -> ValidationResult:
        """Validate converted file content of any supported format.

        TOML (gemini) and JSON (kiro-agent) are decoded first; everything
        else is treated as markdown.
        """
        name = str(format_name.value if isinstance(format_name, Format) else format_name)
        if name not in ("gemini", "kiro-agent"):
            return self.validate_markdown(format_name, content, subtype)

        try:
            data = tomllib.loads(content) if name == "gemini" else json.loads(content)
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            result = ValidationResult(valid=True, validated_count=1)
            result.add_issue(ValidationSeverity.ERROR, f"Could not decode {name} content: {e}", path="/")
            return result
        return self.validate_format(name, data, subtype)

    def _deprecated_fields(self, schema: dict[str, Any], data: Any, path: list[str]) -> list[str]:
        """Paths of present properties whose schema is marked deprecated."""
        if not isinstance(data, dict) or not isinstance(schema, dict):
            return []

        found = []
        for key, subschema in schema.get("properties", {}).items():
            if key not in data or not isinstance(subschema, dict):
                continue
            if subschema.get("deprecated"):
                found.append(_json_path([*path, key]))
            found.extend(self._deprecated_fields(subschema, data[key], [*path, key]))
        return found


def format_validation_errors(result: ValidationResult) -> str:
    """Format validation issues for display to users."""
    lines: list[str] = []

    if result.errors:
        lines.append("Validation Errors:")
        lines.extend(f"  - {issue.message}" for issue in result.errors)

    if result.warnings:
        if lines:
            lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  - {issue.message}" for issue in result.warnings)

    return "\n".join(lines)
