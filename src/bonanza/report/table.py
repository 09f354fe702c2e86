"""Summary table of juvenile weight by sex."""

import pandas as pd

from bonanza.report.narrative import format_number

__all__ = ['format_summary_table', 'summary_frame', 'SUMMARY_HEADERS']

SUMMARY_HEADERS = (
    "Sex",
    "Mean weight (g)",
    "Median weight (g)",
    "Standard deviation (g)",
    "Sample size",
)


def format_summary_table(rows, decimals: int = 2) -> str:
    """Render ``SexSummary`` rows as a Markdown table.

    Statistics are rounded to ``decimals`` places; sample size is an integer.
    """
    lines = [
        "| " + " | ".join(SUMMARY_HEADERS) + " |",
        "|" + "|".join(["---"] + ["---:"] * (len(SUMMARY_HEADERS) - 1)) + "|",
    ]
    for row in rows:
        cells = (
            row.sex.capitalize(),
            format_number(row.mean, decimals),
            format_number(row.median, decimals),
            format_number(row.standard_deviation, decimals),
            str(row.sample_size),
        )
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def summary_frame(rows) -> pd.DataFrame:
    """Full-precision summary as a DataFrame (for CSV export)."""
    return pd.DataFrame(
        [
            {
                "sex": row.sex,
                "mean_weight_g": row.mean,
                "median_weight_g": row.median,
                "sd_weight_g": row.standard_deviation,
                "sample_size": row.sample_size,
            }
            for row in rows
        ],
        columns=["sex", "mean_weight_g", "median_weight_g", "sd_weight_g", "sample_size"],
    )
