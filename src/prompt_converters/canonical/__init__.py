"""Canonical model shared by every format converter."""

from prompt_converters.canonical.formats import Format, Priority, SectionType, Subtype
from prompt_converters.canonical.sections import (
    ContextSection,
    CustomSection,
    Example,
    ExamplesSection,
    HookSection,
    InstructionsSection,
    MetadataData,
    MetadataSection,
    PersonaData,
    PersonaSection,
    Rule,
    RulesSection,
    Section,
    ToolsSection,
)
from prompt_converters.canonical.package import (
    CanonicalContent,
    CanonicalPackage,
    ConversionResult,
    PackageMetadata,
    SourceMetadata,
)
from prompt_converters.canonical.taxonomy import (
    detect_subtype_from_frontmatter,
    normalize_format,
    normalize_subtype,
    resolve_subtype,
    set_taxonomy,
    subtype_from_path,
)

__all__ = [
    "Format",
    "Priority",
    "SectionType",
    "Subtype",
    "ContextSection",
    "CustomSection",
    "Example",
    "ExamplesSection",
    "HookSection",
    "InstructionsSection",
    "MetadataData",
    "MetadataSection",
    "PersonaData",
    "PersonaSection",
    "Rule",
    "RulesSection",
    "Section",
    "ToolsSection",
    "CanonicalContent",
    "CanonicalPackage",
    "ConversionResult",
    "PackageMetadata",
    "SourceMetadata",
    "detect_subtype_from_frontmatter",
    "normalize_format",
    "normalize_subtype",
    "resolve_subtype",
    "set_taxonomy",
    "subtype_from_path",
]
