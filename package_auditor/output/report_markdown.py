"""Markdown output formatter for audit reports."""

from datetime import datetime, timezone

from package_auditor.models.report import AuditReport, RuleResult
from package_auditor.output.rows import RULE_COLUMNS, violation_row


class ReportMarkdownFormatter:
    """Format audit reports as Markdown for review and documentation."""

    def format_report(self, report: AuditReport) -> str:
        """Format an audit report as a Markdown string.

        Args:
            report: The audit report to format.

        Returns:
            Markdown document.
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines = [
            "# Package Audit Report",
            "",
            f"*Generated: {timestamp}*",
            "",
        ]
        lines.extend(self._format_summary(report))

        for result in report.results:
            if not result.passed:
                lines.append("")
                lines.extend(self._format_violations(result))

        lines.append("")
        return "\n".join(lines)

    def _format_summary(self, report: AuditReport) -> list[str]:
        status = "❌ VIOLATIONS FOUND" if report.has_violations else "✅ PASS"
        lines = [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Solution | `{report.solution_root}` |",
            f"| Manifests | {report.manifests_scanned} |",
            f"| Package References | {report.references_found} |",
            f"| Violations | {report.violation_count} |",
            f"| **Status** | **{status}** |",
            "",
            "| Rule | Result |",
            "|------|--------|",
        ]
        for result in report.results:
            outcome = "pass" if result.passed else f"**fail** ({len(result.violations)})"
            lines.append(f"| {result.rule.title} | {outcome} |")
        return lines

    def _format_violations(self, result: RuleResult) -> list[str]:
        columns = RULE_COLUMNS[result.rule]
        lines = [
            f"## {result.rule.title}",
            "",
            "| " + " | ".join(columns) + " |",
            "|" + "|".join("---" for _ in columns) + "|",
        ]
        for violation in result.violations:
            cells = [_escape(cell) for cell in violation_row(violation)]
            lines.append("| " + " | ".join(cells) + " |")
        return lines


def _escape(text: str) -> str:
    return text.replace("|", "\\|")
