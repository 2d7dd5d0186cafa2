"""CLI entry point for package-auditor."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from package_auditor import __version__
from package_auditor.auditor import run_audit
from package_auditor.config import load_config
from package_auditor.constants import (
    DEFAULT_MANIFEST_PATTERN,
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VIOLATIONS,
)
from package_auditor.exceptions import ConfigurationError, PackageAuditorError
from package_auditor.manifest import collect_references
from package_auditor.models.report import AuditReport, RuleName
from package_auditor.output.report_json import ReportJsonFormatter
from package_auditor.output.report_markdown import ReportMarkdownFormatter
from package_auditor.output.terminal import TerminalFormatter
from package_auditor.registry.nuget import NuGetRegistryClient

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)

RULE_CHOICES = [rule.value for rule in RuleName]


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """NuGet Package Auditor - Check solution dependencies against policy.

    Scans the project manifests of a .NET solution and checks the
    declared NuGet packages for disallowed licenses, known
    vulnerabilities, deprecation, inconsistent versions and project
    category restrictions.

    \b
    Examples:
        package-auditor audit
        package-auditor audit --root path/to/solution
        package-auditor audit --rule licenses --rule vulnerabilities
        package-auditor audit --format json
        package-auditor references
    """
    pass


@main.command()
@click.option(
    "--root",
    "solution_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Solution directory to audit (default: current directory).",
)
@click.option(
    "--rule",
    "rule_names",
    type=click.Choice(RULE_CHOICES, case_sensitive=False),
    multiple=True,
    help="Rule to run; repeat to run several (default: all rules).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "markdown", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for audit results (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Log each manifest and registry lookup to stderr.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Show only the status line and failing rules.",
)
def audit(
    solution_root: Path,
    rule_names: tuple[str, ...],
    output_format: str,
    output_path: str | None,
    config_path: Path | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Audit the packages declared by a solution's projects.

    Rules run one after another; a manifest, version or registry error
    aborts the audit.

    \b
    Examples:
        package-auditor audit
        package-auditor audit --rule consistency
        package-auditor audit --format markdown --output audit.md
        package-auditor audit --config audit-policy.yaml
    """
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")

    _configure_logging(verbose_flag)
    format_value = output_format.lower()

    try:
        config = load_config(solution_root, config_path)
        rules = [RuleName(name.lower()) for name in rule_names] or None
        client = NuGetRegistryClient(service_index_url=config.registry_url)

        if format_value == "terminal" and not quiet_flag and output_path is None:
            with _console.status("Auditing packages..."):
                report = asyncio.run(run_audit(solution_root, config, client, rules))
        else:
            report = asyncio.run(run_audit(solution_root, config, client, rules))

        _display_report(report, format_value, output_path, quiet_flag)

        if report.has_violations:
            sys.exit(EXIT_VIOLATIONS)
        sys.exit(EXIT_SUCCESS)

    except PackageAuditorError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@click.option(
    "--root",
    "solution_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Solution directory to scan (default: current directory).",
)
@click.option(
    "--pattern",
    default=DEFAULT_MANIFEST_PATTERN,
    show_default=True,
    help="Manifest filename pattern.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format (default: terminal).",
)
def references(solution_root: Path, pattern: str, output_format: str) -> None:
    """List the package references declared by a solution's projects.

    No registry lookups are made.

    \b
    Examples:
        package-auditor references
        package-auditor references --pattern "*Domain.csproj"
        package-auditor references --format json
    """
    format_value = output_format.lower()

    try:
        found = collect_references(solution_root, pattern)
    except PackageAuditorError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)

    if format_value == "json":
        click.echo(
            json.dumps([reference.model_dump() for reference in found], indent=2)
        )
        return

    if not found:
        _console.print("[yellow]No package references found[/yellow]")
        return

    table = Table(title="Package References")
    table.add_column("Project", style="cyan", no_wrap=True)
    table.add_column("Package", style="green")
    table.add_column("Version", style="magenta")
    for reference in found:
        table.add_row(
            escape(reference.project),
            escape(reference.package_id),
            escape(reference.version),
        )
    _console.print(table)


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_report(
    report: AuditReport,
    format_type: str,
    output_path: str | None = None,
    quiet: bool = False,
) -> None:
    """Display an audit report in the specified format.

    Args:
        report: The audit report to display.
        format_type: Output format (terminal, json, markdown).
        output_path: Optional file path to write output to.
        quiet: Reduce terminal output to the status line.
    """
    if format_type == "json":
        content = ReportJsonFormatter().format_report(report)
    elif format_type == "markdown":
        content = ReportMarkdownFormatter().format_report(report)
    else:  # terminal
        if output_path:
            # Terminal format to file uses markdown instead
            content = ReportMarkdownFormatter().format_report(report)
        else:
            TerminalFormatter(console=_console, quiet=quiet).format_report(report)
            return

    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: PackageAuditorError, format_type: str) -> None:
    """Display error message to user on stderr."""
    message = f"Error: {type(error).__name__}: {error}"

    if format_type == "terminal":
        _error_console.print(f"[red bold]{escape(message)}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
