"""Conversion Engine - Orchestrates parse, serialize and write.

The Conversion Engine coordinates a conversion by:
- Detecting the source format and subtype of a file
- Parsing it into a canonical package through the format registry
- Serializing the package to one or more targets
- Writing results where each tool expects to find them
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from prompt_converters.canonical.formats import Format, Subtype
from prompt_converters.canonical.package import CanonicalPackage, ConversionResult, SourceMetadata
from prompt_converters.canonical.taxonomy import subtype_from_path
from prompt_converters.config.base import ConversionProfile, ErrorPolicy
from prompt_converters.detection import detect_format
from prompt_converters.engine.validation_engine import ValidationEngine, ValidationResult
from prompt_converters.errors import ConversionError, UnsupportedFormatError
from prompt_converters.registry import FormatRegistry, get_global_format_registry
from prompt_converters.utils.helpers import default_output_path, package_stem, sanitize_filename

logger = logging.getLogger(__name__)


@dataclass
class FileConversion:
    """Outcome of converting one source file to one target format."""

    source: Path
    target_format: str
    result: ConversionResult | None = None
    output_path: Path | None = None
    error: str | None = None
    written: bool = False

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.result is not None and self.result.succeeded

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "source": str(self.source),
            "target": self.target_format,
            "output": str(self.output_path) if self.output_path else None,
            "succeeded": self.succeeded,
        }
        if self.result is not None:
            data["quality_score"] = self.result.quality_score
            data["lossy"] = self.result.lossy_conversion
            data["warnings"] = self.result.warnings
        if self.error:
            data["error"] = self.error
        return data


class BatchResult:
    """Result of a batch conversion run."""

    def __init__(
        self,
        profile: ConversionProfile,
        conversions: list[FileConversion],
        start_time: datetime,
        end_time: datetime,
    ):
        self.profile = profile
        self.conversions = conversions
        self.start_time = start_time
        self.end_time = end_time

    @property
    def duration_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def succeeded(self) -> list[FileConversion]:
        return [c for c in self.conversions if c.succeeded]

    @property
    def failed(self) -> list[FileConversion]:
        return [c for c in self.conversions if not c.succeeded]

    @property
    def average_score(self) -> float:
        scores = [c.result.quality_score for c in self.succeeded if c.result is not None]
        return sum(scores) / len(scores) if scores else 0.0

    def summary(self) -> dict[str, Any]:
        return {
            "profile": self.profile.name,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration_seconds,
            "total": len(self.conversions),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "average_score": round(self.average_score, 1),
            "conversions": [c.to_dict() for c in self.conversions],
        }


class ConversionEngine:
    """Engine for orchestrating format conversions.

    The ConversionEngine:
    - Resolves formats through a FormatRegistry
    - Detects formats and subtypes from file paths and content
    - Converts single documents, files, and whole profiles
    """

    def __init__(
        self,
        format_registry: FormatRegistry | None = None,
        validation_engine: ValidationEngine | None = None,
    ):
        self.format_registry = format_registry or get_global_format_registry()
        self.validation_engine = validation_engine or ValidationEngine()

    def parse(
        self,
        content: str,
        source_format: Format | str,
        metadata: SourceMetadata | dict[str, Any],
        subtype: Subtype | str | None = None,
    ) -> CanonicalPackage:
        """Parse content into a canonical package.

        Args:
            content: Raw document
            source_format: Registered format name
            metadata: Caller-supplied identity
            subtype: Optional explicit subtype

        Returns:
            The canonical package

        Raises:
            UnsupportedFormatError: If the format has no parser
            ParseError: If the document is malformed
        """
        parser = self.format_registry.get_parser(source_format)
        return parser(content, metadata, explicit_subtype=subtype)

    def serialize(
        self,
        pkg: CanonicalPackage,
        target_format: Format | str,
        options: Any = None,
    ) -> ConversionResult:
        """Serialize a package to a target format; never raises for content problems."""
        serializer = self.format_registry.create_serializer(target_format, options)
        result = serializer.serialize(pkg)
        logger.debug(
            "Converted %s to %s (score %d, %d warning(s))",
            pkg.id,
            serializer.name,
            result.quality_score,
            len(result.warnings),
        )
        return result

    def convert(
        self,
        content: str,
        source_format: Format | str,
        target_format: Format | str,
        metadata: SourceMetadata | dict[str, Any],
        subtype: Subtype | str | None = None,
        options: Any = None,
    ) -> ConversionResult:
        """Parse content and serialize it to another format."""
        pkg = self.parse(content, source_format, metadata, subtype)
        return self.serialize(pkg, target_format, options)

    def load_file(
        self,
        path: Path | str,
        source_format: str | None = None,
        subtype: Subtype | str | None = None,
        package_id: str | None = None,
    ) -> CanonicalPackage:
        """Read and parse a file, detecting what the caller did not specify.

        Args:
            path: Source file
            source_format: Format name; detected from path and content when None
            subtype: Subtype; inferred from directory conventions when None
            package_id: Package id; defaults to the sanitized file name

        Returns:
            The canonical package
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {path}")

        content = path.read_text(encoding="utf-8")
        source_format = source_format or self.detect(content, path)
        subtype = subtype or subtype_from_path(path.as_posix())

        stem = package_stem(path)
        metadata = SourceMetadata(id=package_id or sanitize_filename(stem) or stem, name=stem)
        logger.info("Parsing %s as %s", path, source_format)
        return self.parse(content, source_format, metadata, subtype)

    def detect(self, content: str, path: Path | str | None = None) -> str:
        """Detect the format of a document.

        Raises:
            UnsupportedFormatError: If no format matches
        """
        detected = detect_format(content, path)
        if detected is None or detected not in self.format_registry:
            raise UnsupportedFormatError(str(path) if path else "content", "detection")
        return detected

    def convert_file(
        self,
        path: Path | str,
        target_format: str,
        source_format: str | None = None,
        subtype: Subtype | str | None = None,
        options: Any = None,
        output_path: Path | str | None = None,
        root: Path | str = ".",
    ) -> FileConversion:
        """Convert a file and work out where the result belongs.

        Nothing is written; pass the returned conversion to ``write``.
        """
        path = Path(path)
        pkg = self.load_file(path, source_format, subtype)
        return self._conversion(path, pkg, target_format, options, output_path, root)

    def convert_batch(self, profile: ConversionProfile, base_dir: Path | str | None = None) -> BatchResult:
        """Convert every source in a profile to every target.

        Relative source paths and the output directory are resolved against
        ``base_dir``. Each source is parsed once. Successful results are
        written under the profile's output directory. With several sources,
        single-file targets such as AGENTS.md get one directory per source,
        and a conversion whose output path was already written fails.

        Args:
            profile: The profile defining what to convert
            base_dir: Directory relative paths are resolved against

        Returns:
            BatchResult with one FileConversion per source and target

        Raises:
            ConversionError: With ``on_error: abort``, for the first failed conversion
        """
        base = Path(base_dir) if base_dir is not None else Path.cwd()
        output_dir = base / profile.output_dir
        start_time = datetime.now(timezone.utc)
        conversions: list[FileConversion] = []
        written_by: dict[Path, Path] = {}
        nest_project_files = len(profile.sources) > 1

        for target in profile.targets:
            if target not in self.format_registry:
                raise UnsupportedFormatError(target, "convert")

        for source in profile.sources:
            path = base / source.path
            try:
                pkg = self.load_file(path, source.format, source.subtype, source.id)
            except Exception as e:
                if profile.on_error == ErrorPolicy.ABORT:
                    raise
                logger.warning("Skipping %s: %s", path, e)
                conversions.extend(FileConversion(path, target, error=str(e)) for target in profile.targets)
                continue

            for target in profile.targets:
                options = profile.options.for_format(target)
                output_path = self._project_file_path(pkg, target, options, output_dir) if nest_project_files else None
                conversion = self._conversion(path, pkg, target, options, output_path, output_dir)
                if conversion.succeeded and conversion.output_path in written_by:
                    conversion.error = (
                        f"Output path {conversion.output_path} was already written for "
                        f"{written_by[conversion.output_path]}"
                    )
                if conversion.succeeded:
                    written_by[conversion.output_path] = path
                    self.write(conversion)
                elif profile.on_error == ErrorPolicy.ABORT:
                    raise ConversionError(
                        f"Conversion of {path} to {target} failed: {conversion.error}",
                        source=str(path),
                        target=target,
                    )
                conversions.append(conversion)

        return BatchResult(
            profile=profile,
            conversions=conversions,
            start_time=start_time,
            end_time=datetime.now(timezone.utc),
        )

    def validate_file(
        self,
        path: Path | str,
        format_name: str | None = None,
        subtype: Subtype | str | None = None,
    ) -> ValidationResult:
        """Validate a file against the schema of its format."""
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        format_name = format_name or self.detect(content, path)
        subtype = subtype or subtype_from_path(path.as_posix())
        return self.validation_engine.validate_conversion(format_name, content, subtype)

    def write(self, conversion: FileConversion) -> Path:
        """Write a successful conversion to its output path.

        Returns:
            The written path

        Raises:
            ValueError: If the conversion has no content or no output path
        """
        if not conversion.succeeded or conversion.output_path is None:
            raise ValueError(f"Nothing to write for {conversion.source} -> {conversion.target_format}")

        conversion.output_path.parent.mkdir(parents=True, exist_ok=True)
        content = conversion.result.content
        if not content.endswith("\n"):
            content += "\n"
        conversion.output_path.write_text(content, encoding="utf-8")
        conversion.written = True
        logger.info("Wrote %s", conversion.output_path)
        return conversion.output_path

    def export_summary(self, result: BatchResult, output_dir: Path | str) -> Path:
        """Write a JSON summary of a batch run.

        Args:
            result: The batch result to export
            output_dir: Directory to write the summary to

        Returns:
            Path of the summary file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = result.start_time.strftime("%Y%m%d_%H%M%S")
        summary_path = output_dir / f"summary_{timestamp}.json"
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(result.summary(), f, indent=2)
        return summary_path

    def list_formats(self) -> list[str]:
        """List all available format names."""
        return self.format_registry.list_formats()

    def _conversion(
        self,
        path: Path,
        pkg: CanonicalPackage,
        target_format: str,
        options: Any,
        output_path: Path | str | None,
        root: Path | str,
    ) -> FileConversion:
        result = self.serialize(pkg, target_format, options)
        conversion = FileConversion(source=path, target_format=target_format, result=result)
        if not result.succeeded:
            conversion.error = next(
                (w for w in result.warnings if w.startswith("Conversion error:")),
                "Conversion produced no output",
            )
            return conversion

        if output_path is None:
            stem = self._output_stem(path, pkg, target_format, options)
            output_path = default_output_path(target_format, stem, pkg.subtype, root)
        conversion.output_path = Path(output_path)
        return conversion

    def _output_stem(self, path: Path, pkg: CanonicalPackage, target_format: str, options: Any) -> str:
        """Output file stem: the source stem unless the target's options name the file."""
        stem = package_stem(path)
        handler = self.format_registry.require(target_format)
        if handler.output_name is None or options is None:
            return stem
        config = self.format_registry.create_serializer(target_format, options).options
        return handler.output_name(pkg, config, stem)

    def _project_file_path(
        self, pkg: CanonicalPackage, target_format: str, options: Any, output_dir: Path
    ) -> Path | None:
        """Per-source path for tools that read one fixed file per project."""
        handler = self.format_registry.require(target_format)
        if handler.project_file is None:
            return None
        config = self.format_registry.create_serializer(target_format, options).options
        return output_dir / handler.project_file(pkg, config)
