"""Main CLI entry point for prompt-converters.

Converts AI assistant configuration files between tool formats from the
command line.
"""

from pathlib import Path
from typing import Any
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from prompt_converters import __version__
from prompt_converters.canonical.formats import Subtype
from prompt_converters.canonical.taxonomy import subtype_from_path
from prompt_converters.config.base import CopilotConfig, KiroConfig
from prompt_converters.config.loader import load_profile
from prompt_converters.engine.conversion_engine import BatchResult, ConversionEngine, FileConversion
from prompt_converters.engine.validation_engine import ValidationEngine
from prompt_converters.registry import get_global_format_registry
from prompt_converters.utils.logging import setup_logging

console = Console()

FORMAT_NAMES = get_global_format_registry().list_formats()
SUBTYPE_NAMES = [s.value for s in Subtype]


@click.group()
@click.version_option(version=__version__, prog_name="prompt-convert")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """prompt-convert - Convert AI assistant configs between tools.

    Reads Claude, Cursor, Continue, Windsurf, Copilot, Kiro, AGENTS.md and
    Gemini files into one canonical model and writes any of them back out.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--to", "-t", "target", type=click.Choice(FORMAT_NAMES), required=True, help="Target format")
@click.option("--from", "-f", "source_format", type=click.Choice(FORMAT_NAMES), help="Source format (detected if omitted)")
@click.option("--subtype", "-s", type=click.Choice(SUBTYPE_NAMES), help="Package subtype (detected if omitted)")
@click.option("--output", "-o", type=click.Path(), help="Output file; '-' prints to stdout")
@click.option("--yes", "-y", is_flag=True, help="Overwrite existing files without asking")
@click.option("--inclusion", type=click.Choice(["always", "fileMatch", "manual"]), help="Kiro inclusion mode")
@click.option("--file-match-pattern", help="Kiro fileMatch glob")
@click.option("--apply-to", multiple=True, help="Copilot applyTo glob (repeatable)")
@click.pass_context
def convert(
    ctx: click.Context,
    source: str,
    target: str,
    source_format: str | None,
    subtype: str | None,
    output: str | None,
    yes: bool,
    inclusion: str | None,
    file_match_pattern: str | None,
    apply_to: tuple[str, ...],
) -> None:
    """Convert a file to another format.

    SOURCE is the file to convert.

    \b
    Examples:
      prompt-convert convert .claude/agents/reviewer.md --to cursor
      prompt-convert convert AGENTS.md --to kiro --inclusion always
      prompt-convert convert rules.md --to gemini -o -
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        engine = ConversionEngine()
        options = _target_options(target, inclusion, file_match_pattern, apply_to)
        conversion = engine.convert_file(
            source,
            target,
            source_format=source_format,
            subtype=subtype,
            options=options,
            output_path=None if output in (None, "-") else output,
        )

        if not conversion.succeeded:
            console.print(f"[red]Error: {escape(str(conversion.error))}[/red]")
            sys.exit(1)

        if output == "-":
            click.echo(conversion.result.content)
            return

        path = conversion.output_path
        if path.exists() and not yes and not click.confirm(f"{path} exists. Overwrite?", default=False):
            console.print("[yellow]Skipped[/yellow]")
            return

        engine.write(conversion)
        _print_conversion(conversion)

    except Exception as e:
        _fail(e, verbose)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def detect(ctx: click.Context, path: str) -> None:
    """Detect the format of a file.

    PATH is the file to inspect.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        engine = ConversionEngine()
        content = Path(path).read_text(encoding="utf-8")
        format_name = engine.detect(content, path)
        subtype = subtype_from_path(Path(path).as_posix())

        console.print(f"[cyan]Format:[/cyan] {format_name}")
        if subtype is not None:
            console.print(f"[cyan]Subtype:[/cyan] {subtype.value}")

    except Exception as e:
        _fail(e, verbose)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--from", "-f", "source_format", type=click.Choice(FORMAT_NAMES), help="Source format (detected if omitted)")
@click.option("--subtype", "-s", type=click.Choice(SUBTYPE_NAMES), help="Package subtype")
@click.option("--compact", is_flag=True, help="Print JSON on one line")
@click.pass_context
def inspect(
    ctx: click.Context,
    path: str,
    source_format: str | None,
    subtype: str | None,
    compact: bool,
) -> None:
    """Print the canonical JSON of a file.

    PATH is the file to parse.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        pkg = ConversionEngine().load_file(path, source_format, subtype)
        click.echo(pkg.to_json(indent=None if compact else 2))

    except Exception as e:
        _fail(e, verbose)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "-f", "format_name", type=click.Choice(FORMAT_NAMES), help="Format to validate against (detected if omitted)")
@click.option("--subtype", "-s", type=click.Choice(SUBTYPE_NAMES), help="Subtype selecting a stricter schema")
@click.option("--canonical", is_flag=True, help="Also check the parsed canonical structure")
@click.pass_context
def validate(
    ctx: click.Context,
    path: str,
    format_name: str | None,
    subtype: str | None,
    canonical: bool,
) -> None:
    """Validate a file against the schema of its format.

    PATH is the file to validate.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        engine = ConversionEngine()
        result = engine.validate_file(path, format_name, subtype)
        if canonical:
            pkg = engine.load_file(path, format_name, subtype)
            result = result.merge(ValidationEngine().validate_package(pkg))

    except Exception as e:
        _fail(e, verbose)
        return

    _print_validation_result(path, result)
    if not result.valid:
        sys.exit(1)


@cli.command()
@click.pass_context
def formats(ctx: click.Context) -> None:
    """List supported formats."""
    table = Table(title="Supported Formats")
    table.add_column("Name", style="cyan")
    table.add_column("Parse", justify="center")
    table.add_column("Write", justify="center")
    table.add_column("Extensions")
    table.add_column("Description")

    for handler in get_global_format_registry().handlers():
        table.add_row(
            handler.name,
            "[green]Yes[/green]" if handler.can_parse else "[red]No[/red]",
            "[green]Yes[/green]" if handler.can_serialize else "[red]No[/red]",
            ", ".join(handler.extensions),
            handler.description or "-",
        )

    console.print(table)


@cli.command()
@click.argument("profile_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--summary", type=click.Path(), help="Directory to write a JSON run summary to")
@click.pass_context
def batch(ctx: click.Context, profile_path: str, summary: str | None) -> None:
    """Convert many files as described by a profile.

    PROFILE_PATH is the path to the YAML profile file. Relative paths in
    the profile are resolved against the profile's directory.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        profile = load_profile(profile_path)
        engine = ConversionEngine()
        result = engine.convert_batch(profile, base_dir=Path(profile_path).parent)
        summary_path = engine.export_summary(result, summary) if summary else None

    except Exception as e:
        _fail(e, verbose)
        return

    _print_batch_result(result)
    if summary_path is not None:
        console.print(f"Summary: {summary_path}")
    if result.failed:
        sys.exit(1)


def _target_options(
    target: str,
    inclusion: str | None,
    file_match_pattern: str | None,
    apply_to: tuple[str, ...],
) -> Any:
    """Build serializer options from command line flags."""
    if target == "kiro" and (inclusion or file_match_pattern):
        return KiroConfig(inclusion=inclusion or "fileMatch", file_match_pattern=file_match_pattern)
    if target == "copilot" and apply_to:
        return CopilotConfig(apply_to=list(apply_to))
    return None


def _fail(error: Exception, verbose: bool) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    if verbose:
        import traceback
        console.print(traceback.format_exc())
    sys.exit(1)


def _print_conversion(conversion: FileConversion) -> None:
    """Print the outcome of a single conversion."""
    result = conversion.result
    color = "green" if result.quality_score >= 80 else "yellow" if result.quality_score >= 50 else "red"
    lines = [
        f"[cyan]Source:[/cyan] {conversion.source}",
        f"[cyan]Output:[/cyan] {conversion.output_path}",
        f"[cyan]Quality:[/cyan] [{color}]{result.quality_score}/100[/{color}]",
    ]
    if result.lossy_conversion:
        lines.append("[yellow]Some content could not be represented in the target format[/yellow]")

    console.print(Panel.fit("\n".join(lines), title=f"Converted to {conversion.target_format}"))

    for warning in result.warnings:
        console.print(f"  [yellow]WARNING[/yellow]: {escape(warning)}")


def _print_batch_result(result: BatchResult) -> None:
    """Print a table of batch conversions."""
    table = Table(title=f"Batch: {result.profile.name}")
    table.add_column("Source", style="cyan")
    table.add_column("Target")
    table.add_column("Score", justify="right")
    table.add_column("Output / Error")

    for c in result.conversions:
        if c.succeeded:
            table.add_row(str(c.source), c.target_format, str(c.result.quality_score), str(c.output_path))
        else:
            table.add_row(str(c.source), c.target_format, "-", f"[red]{escape(str(c.error))}[/red]")

    console.print(table)
    console.print(
        f"[green]{len(result.succeeded)} converted[/green], "
        f"[red]{len(result.failed)} failed[/red] "
        f"in {result.duration_seconds:.2f}s"
    )


def _print_validation_result(name: str, result: Any) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(f"\n{name}: {status}")

    if result.issues:
        for issue in result.issues:
            color = {
                "error": "red",
                "warning": "yellow",
                "info": "blue",
            }.get(issue.severity.value, "white")

            console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {escape(issue.message)}")
            if issue.path:
                console.print(f"    Path: {issue.path}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
