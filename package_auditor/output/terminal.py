"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from package_auditor.models.report import AuditReport, RuleResult
from package_auditor.output.rows import RULE_COLUMNS, violation_row


class TerminalFormatter:
    """Format audit reports for terminal display using Rich.

    Prints a summary panel followed by one table per failing rule.
    """

    def __init__(self, console: Optional[Console] = None, quiet: bool = False) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            quiet: Print only the status line and failing rules.
        """
        self._console = console if console is not None else Console()
        self._quiet = quiet

    def format_report(self, report: AuditReport) -> None:
        """Format and display an audit report.

        Args:
            report: The audit report to display.
        """
        if self._quiet:
            self._print_quiet_output(report)
            return

        self._print_summary(report)

        for result in report.results:
            if not result.passed:
                self._print_violations(result)

    def _print_quiet_output(self, report: AuditReport) -> None:
        if not report.has_violations:
            self._console.print(
                f"[green]PASS[/green] - {len(report.results)} rule(s) passed"
            )
            return

        self._console.print(
            f"[red]VIOLATIONS FOUND[/red] - "
            f"{report.violation_count} violation(s) require attention"
        )
        for result in report.results:
            if not result.passed:
                self._console.print(
                    f"  - {result.rule.title}: {len(result.violations)} violation(s)"
                )

    def _print_summary(self, report: AuditReport) -> None:
        """Print the summary panel with one status line per rule."""
        if report.has_violations:
            status_color = "red"
            status = "VIOLATIONS FOUND"
        else:
            status_color = "green"
            status = "PASS"

        lines = [
            f"Solution: {escape(report.solution_root)}",
            f"Manifests: {report.manifests_scanned}",
            f"Package references: {report.references_found}",
            "",
        ]
        for result in report.results:
            mark = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
            suffix = "" if result.passed else f" ({len(result.violations)})"
            lines.append(f"{mark} {result.rule.title}{suffix}")

        lines.extend(["", f"Status: [{status_color}]{status}[/{status_color}]"])

        panel = Panel(
            "\n".join(lines),
            title="[bold]PACKAGE AUDIT[/bold]",
            border_style=status_color,
        )
        self._console.print(panel)

    def _print_violations(self, result: RuleResult) -> None:
        table = Table(title=f"{result.rule.title} ({len(result.violations)})")
        for column in RULE_COLUMNS[result.rule]:
            table.add_column(column, overflow="fold")
        for violation in result.violations:
            table.add_row(*(escape(cell) for cell in violation_row(violation)))
        self._console.print(table)
