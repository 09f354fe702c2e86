"""Aggregation and statistics stage contracts.

Enforces structural guarantees on aggregator output and the
pre-filtering precondition on samples handed to statistical tests.
"""

import numpy as np
from bonanza.contracts.base import require


def assert_year_counts(year_counts) -> None:
    """Enforce year-count contract: strictly increasing years, counts >= 0."""
    years = [row.year for row in year_counts]
    require(
        all(a < b for a, b in zip(years, years[1:])),
        f"Year count contract violated: years not strictly increasing {years}"
    )
    require(
        all(row.count >= 0 for row in year_counts),
        "Year count contract violated: negative count"
    )


def assert_sex_summaries(rows) -> None:
    """Enforce sex summary contract: known sex, positive sample size, unique rows."""
    sexes = [row.sex for row in rows]
    require(
        len(sexes) == len(set(sexes)),
        f"Sex summary contract violated: duplicate rows {sexes}"
    )
    for row in rows:
        require(
            row.sex in {"female", "male"},
            f"Sex summary contract violated: unexpected sex '{row.sex}'"
        )
        require(
            row.sample_size > 0,
            f"Sex summary contract violated: '{row.sex}' has sample_size {row.sample_size}"
        )


def assert_finite_sample(values: np.ndarray, name: str) -> None:
    """Enforce that a sample is one-dimensional and free of missing values.

    Statistical modules do not filter. Callers pass samples that already
    had missing values removed.
    """
    require(
        values.ndim == 1,
        f"Sample contract violated: '{name}' has {values.ndim} dims, expected 1"
    )
    require(
        bool(np.all(np.isfinite(values))),
        f"Sample contract violated: '{name}' contains missing or non-finite values"
    )
