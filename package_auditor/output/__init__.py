"""Output formatters for package-auditor."""

from package_auditor.output.report_json import ReportJsonFormatter
from package_auditor.output.report_markdown import ReportMarkdownFormatter
from package_auditor.output.terminal import TerminalFormatter

__all__ = [
    "ReportJsonFormatter",
    "ReportMarkdownFormatter",
    "TerminalFormatter",
]
