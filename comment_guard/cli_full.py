"""Click-based CLI interface for the comment guard."""

import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .cli.errors import GuardError, ValidationError, handle_exception
from .cli.output import OutputConfig, OutputManager
from .guard_logging import setup_logging
from .reporters import SARIFExporter, format_diagnostic, format_json, format_text
from .rules.base import Severity
from .rules.engine import RuleEngine, RuleEngineResult, create_rule_engine

SEVERITY_CHOICES = [s.value for s in Severity]


def common_options(f: Any) -> Any:
    """Common output and logging options."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option("--no-color", is_flag=True, help="Disable colored output")(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Also write logs to this file",
    )(f)
    f = click.option(
        "--log-format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Log file format",
    )(f)
    return f


def keyword_option(f: Any) -> Any:
    """Keyword override option."""
    return click.option(
        "--keyword",
        "-k",
        "keywords",
        multiple=True,
        help="Discouraged keyword (repeatable); replaces the default hack/todo/fixme",
    )(f)


def _prepare(
    verbose: bool,
    quiet: bool,
    no_color: bool,
    log_file: Path | None,
    log_format: str,
) -> OutputManager:
    if quiet and verbose:
        raise ValidationError("--quiet and --verbose are mutually exclusive")

    setup_logging(quiet=quiet, verbose=verbose, log_file=log_file, log_format=log_format)
    return OutputManager(
        OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color)
    )


def _fail(error: Exception, no_color: bool, verbose: bool) -> None:
    message, exit_code = handle_exception(
        error, use_color=not no_color and sys.stderr.isatty(), verbose=verbose
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


def _render(result: RuleEngineResult, engine: RuleEngine, output_format: str) -> str:
    if output_format == "json":
        return format_json(result)
    if output_format == "sarif":
        return SARIFExporter(rules=engine.get_all_rules()).export_json(result)
    return format_text(result)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Comment Guard - flag discouraged keywords in source comments."""


@cli.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@keyword_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "sarif"]),
    default="text",
    help="Report format",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report to a file instead of stdout",
)
@click.option(
    "--fail-on",
    type=click.Choice(SEVERITY_CHOICES),
    help="Exit with status 1 when a warning reaches this severity",
)
@click.option(
    "--sequential", is_flag=True, help="Scan files one at a time instead of in parallel"
)
@common_options
def check(
    paths,
    keywords,
    output_format,
    output,
    fail_on,
    sequential,
    verbose,
    quiet,
    no_color,
    log_file,
    log_format,
):
    """Check comments in the given files for discouraged keywords."""
    try:
        out = _prepare(verbose, quiet, no_color, log_file, log_format)
        engine = create_rule_engine(keywords=list(keywords) if keywords else None)
        result = engine.check_files(
            list(paths), parallel=False if sequential else None
        )
    except GuardError as e:
        _fail(e, no_color, verbose)
        return

    for error in result.errors:
        out.error(f"{error.file_path}: {error.error_message}")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(_render(result, engine, output_format) + "\n")
        out.info(f"Report written to {output}")
    elif output_format == "text":
        for diagnostic in result.diagnostics:
            out.plain(format_diagnostic(diagnostic), force=True)
    else:
        click.echo(_render(result, engine, output_format))

    if output_format == "text" or output:
        out.summary(
            files=result.files_scanned,
            diagnostics=result.diagnostic_count,
            errors=len(result.errors),
            skipped=result.files_skipped,
            duration_ms=result.execution_time_ms if verbose else None,
        )

    if result.errors:
        sys.exit(1)
    if fail_on and result.should_block(Severity(fail_on)):
        sys.exit(1)


@cli.command()
@keyword_option
@common_options
def rules(keywords, verbose, quiet, no_color, log_file, log_format):
    """List the registered rules."""
    try:
        out = _prepare(verbose, quiet, no_color, log_file, log_format)
        engine = create_rule_engine(keywords=list(keywords) if keywords else None)
    except GuardError as e:
        _fail(e, no_color, verbose)
        return

    for rule in engine.get_all_rules():
        out.plain(
            f"{rule.rule_id}  [{rule.category}, {rule.default_severity.value}]  {rule.name}",
            force=True,
        )
        rule_keywords = getattr(rule, "keywords", None)
        if rule_keywords is not None:
            out.plain(f"  keywords: {', '.join(rule_keywords) or '(none)'}", force=True)
        out.debug(rule.description)


if __name__ == "__main__":
    cli()
