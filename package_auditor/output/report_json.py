"""JSON output formatter for audit reports."""
import json
from datetime import datetime, timezone
from typing import Any

from package_auditor import __version__
from package_auditor.models.report import AuditReport


class ReportJsonFormatter:
    """Format audit reports as JSON for CI/CD integration."""

    def format_report(self, report: AuditReport) -> str:
        """Format an audit report as a JSON string.

        Args:
            report: The audit report to format.

        Returns:
            Pretty-printed JSON.
        """
        output = {
            "audit_metadata": self._build_metadata(),
            "summary": self._build_summary(report),
            "rules": [
                {
                    "rule": result.rule.value,
                    "title": result.rule.title,
                    "passed": result.passed,
                    "violations": [
                        violation.model_dump(mode="json")
                        for violation in result.violations
                    ],
                }
                for result in report.results
            ],
        }
        return json.dumps(output, indent=2)

    def _build_metadata(self) -> dict[str, Any]:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
        }

    def _build_summary(self, report: AuditReport) -> dict[str, Any]:
        return {
            "solution_root": report.solution_root,
            "manifests_scanned": report.manifests_scanned,
            "references_found": report.references_found,
            "rules_run": len(report.results),
            "rules_failed": sum(1 for result in report.results if not result.passed),
            "violations_count": report.violation_count,
            "has_violations": report.has_violations,
            "overall_status": "VIOLATIONS_FOUND" if report.has_violations else "PASS",
        }
