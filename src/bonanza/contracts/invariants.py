"""Formal pipeline invariants.

This file documents what each stage MUST produce. This is architecture, not code.
Use this file as a reviewer anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "load": [
        "Records are ordered by row_id (source row position)",
        "age in {juvenile, adult, unknown}; sex in {female, male, unknown}",
        "site is one of the configured grid codes",
        "weight and hindfoot_length are non-negative float or None, never NaN",
    ],

    "juvenile": [
        "Every record has age == juvenile",
        "observed_on is a calendar date and year == observed_on.year",
        "Source order is preserved",
    ],

    "annual_counts": [
        "Years strictly increasing, each present year exactly once",
        "Counts are non-negative integers",
    ],

    "sex_summary": [
        "Only female and male rows, female first",
        "sample_size > 0 for every emitted row",
        "Standard deviation uses divisor n - 1",
    ],

    "statistics": [
        "Inputs are one-dimensional finite arrays (missing values removed by caller)",
        "Raw values are kept at full precision; rounding happens in the renderer",
    ],
}

# Which sections abort the run vs. degrade to an "unavailable" note
STAGE_REQUIREMENTS = {
    "load": "REQUIRED",
    "juvenile": "REQUIRED",
    "annual_counts": "SECTION",
    "sex_summary": "SECTION",
    "comparison": "SECTION",
    "regression": "SECTION",
}
