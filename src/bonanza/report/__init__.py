"""Report rendering: narrative text, summary table, Markdown document."""

from bonanza.report.document import ReportDocument, ReportSection
from bonanza.report.narrative import (
    describe_annual_counts,
    describe_regression,
    describe_weight_comparison,
)
from bonanza.report.table import format_summary_table, summary_frame

__all__ = [
    "ReportDocument",
    "ReportSection",
    "describe_annual_counts",
    "describe_weight_comparison",
    "describe_regression",
    "format_summary_table",
    "summary_frame",
]
