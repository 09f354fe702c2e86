"""Group juvenile records and compute descriptive statistics.

Missing-value convention
------------------------
Functions in this module do their own filtering and say so in their
docstrings: records with unknown sex or a missing measurement are
dropped here. The statistics modules (``bonanza.stats``) never filter;
they require the finite arrays this module hands them.
"""

import logging
from dataclasses import dataclass

import numpy as np

from bonanza.contracts import InsufficientDataError, assert_sex_summaries, assert_year_counts
from bonanza.hares.records import ObservationTable

__all__ = [
    'YearCount',
    'YearCounts',
    'SexSummary',
    'count_by_year',
    'summarize_by_sex',
    'weights_by_sex',
    'paired_measurements',
]

logger = logging.getLogger(__name__)

KNOWN_SEXES = ("female", "male")


@dataclass(frozen=True)
class YearCount:
    year: int
    count: int


@dataclass(frozen=True)
class YearCounts:
    """Juvenile trap counts per year, sorted by year ascending.

    Summary properties raise ``InsufficientDataError`` when there are no
    years at all.
    """
    rows: tuple

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def counts(self) -> np.ndarray:
        return np.array([row.count for row in self.rows], dtype=float)

    def _require_rows(self) -> np.ndarray:
        if not self.rows:
            raise InsufficientDataError("No juvenile captures to count", required=1, available=0)
        return self.counts

    @property
    def total(self) -> int:
        return sum(row.count for row in self.rows)

    @property
    def mean(self) -> float:
        return float(np.mean(self._require_rows()))

    @property
    def median(self) -> float:
        return float(np.median(self._require_rows()))

    @property
    def max(self) -> int:
        return int(np.max(self._require_rows()))

    @property
    def min(self) -> int:
        return int(np.min(self._require_rows()))

    @property
    def first_year(self) -> int:
        self._require_rows()
        return self.rows[0].year

    @property
    def last_year(self) -> int:
        self._require_rows()
        return self.rows[-1].year


@dataclass(frozen=True)
class SexSummary:
    sex: str
    mean: float
    median: float
    standard_deviation: float
    sample_size: int


def count_by_year(observations: ObservationTable) -> YearCounts:
    """Count juvenile records per capture year.

    Only years with at least one capture appear; each appears once.
    """
    groups = observations.group_by(lambda obs: obs.year)
    rows = tuple(YearCount(year=year, count=len(groups[year])) for year in sorted(groups))
    assert_year_counts(rows)
    logger.debug("Counted captures for %d years", len(rows))
    return YearCounts(rows=rows)


def weights_by_sex(observations: ObservationTable) -> dict:
    """Return non-missing weights for each known sex.

    Drops records with unknown sex or missing weight. Both "female" and
    "male" keys are always present; an array may be empty.
    """
    return {
        sex: np.array(
            [obs.weight for obs in observations if obs.sex == sex and obs.weight is not None],
            dtype=float,
        )
        for sex in KNOWN_SEXES
    }


def _sample_std(values: np.ndarray) -> float:
    """Sample standard deviation (divisor n - 1); nan for a single value."""
    if len(values) < 2:
        return float("nan")
    return float(np.std(values, ddof=1))


def summarize_by_sex(observations: ObservationTable) -> tuple:
    """Weight summary per known sex.

    Drops records with unknown sex or missing weight, then reports mean,
    median, sample standard deviation and count for female and male, in
    that order. A sex with no qualifying records is omitted.

    Returns
    -------
    tuple of SexSummary
    """
    rows = []
    for sex, values in weights_by_sex(observations).items():
        if len(values) == 0:
            logger.debug("No weighed %s juveniles; row omitted", sex)
            continue
        rows.append(SexSummary(
            sex=sex,
            mean=float(np.mean(values)),
            median=float(np.median(values)),
            standard_deviation=_sample_std(values),
            sample_size=len(values),
        ))
    rows = tuple(rows)
    assert_sex_summaries(rows)
    return rows


def paired_measurements(observations: ObservationTable) -> tuple:
    """Return ``(weights, hindfoot_lengths)`` for records with both present.

    Records missing either measurement are dropped; sex is ignored.
    """
    pairs = [
        (obs.weight, obs.hindfoot_length)
        for obs in observations
        if obs.weight is not None and obs.hindfoot_length is not None
    ]
    if not pairs:
        return np.array([], dtype=float), np.array([], dtype=float)
    weights, hindfeet = zip(*pairs)
    return np.array(weights, dtype=float), np.array(hindfeet, dtype=float)
