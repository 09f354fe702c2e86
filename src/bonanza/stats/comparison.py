"""Two-sample comparison of means.

Computes the raw and relative difference in means, a Welch
(unequal-variance) t-test, the Welch confidence interval of the
difference, and Cohen's d with a pooled standard deviation.

Inputs must already be free of missing values; see
``bonanza.hares.aggregator.weights_by_sex``.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy import stats

from bonanza.contracts import InsufficientDataError, assert_finite_sample

__all__ = ['MeanComparison', 'compare_means', 'cohens_d', 'welch_degrees_of_freedom']

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 2


@dataclass(frozen=True)
class MeanComparison:
    """Result of ``compare_means``. All values are unrounded.

    ``difference`` is ``means[0] - means[1]`` and ``percent_difference``
    expresses it relative to ``means[1]`` (the reference group).
    """
    labels: tuple
    sample_sizes: tuple
    means: tuple
    standard_deviations: tuple
    difference: float
    percent_difference: float
    t_statistic: float
    degrees_of_freedom: float
    p_value: float
    cohens_d: float
    confidence_level: float
    confidence_interval: tuple


def welch_degrees_of_freedom(var_a: float, n_a: int, var_b: float, n_b: int) -> float:
    """Welch-Satterthwaite approximation of the degrees of freedom."""
    se_a = var_a / n_a
    se_b = var_b / n_b
    return (se_a + se_b) ** 2 / (se_a ** 2 / (n_a - 1) + se_b ** 2 / (n_b - 1))


def cohens_d(sample_a: np.ndarray, sample_b: np.ndarray) -> float:
    """Cohen's d using the pooled standard deviation.

    d = (mean_a - mean_b) / sqrt(((n_a - 1) s_a^2 + (n_b - 1) s_b^2) / (n_a + n_b - 2))

    Positive when ``sample_a`` has the larger mean.
    """
    n_a, n_b = len(sample_a), len(sample_b)
    pooled_var = (
        (n_a - 1) * np.var(sample_a, ddof=1) + (n_b - 1) * np.var(sample_b, ddof=1)
    ) / (n_a + n_b - 2)
    return float((np.mean(sample_a) - np.mean(sample_b)) / math.sqrt(pooled_var))


def _as_sample(values, name: str) -> np.ndarray:
    sample = np.asarray(values, dtype=float)
    assert_finite_sample(sample, name)
    if len(sample) < MIN_SAMPLE_SIZE:
        raise InsufficientDataError(
            f"Sample '{name}' has {len(sample)} value(s); at least "
            f"{MIN_SAMPLE_SIZE} are needed to estimate its variance",
            required=MIN_SAMPLE_SIZE, available=len(sample),
        )
    return sample


def compare_means(
    sample_a,
    sample_b,
    labels: tuple = ("a", "b"),
    confidence_level: float = 0.95,
) -> MeanComparison:
    """Compare the means of two independent samples.

    Parameters
    ----------
    sample_a, sample_b : array-like of float
        Independent samples with missing values already removed.
    labels : tuple of str
        Names of the two samples, used in messages and the report.
    confidence_level : float
        Level of the two-sided confidence interval of the difference.

    Returns
    -------
    MeanComparison

    Raises
    ------
    InsufficientDataError
        If either sample has fewer than 2 values, or both samples have
        zero variance (the t statistic is undefined).
    ContractViolation
        If a sample contains NaN or infinite values.

    Examples
    --------
    >>> result = compare_means(male_weights, female_weights, labels=("male", "female"))
    >>> result.percent_difference  # male mean relative to female mean
    """
    a = _as_sample(sample_a, labels[0])
    b = _as_sample(sample_b, labels[1])

    var_a = float(np.var(a, ddof=1))
    var_b = float(np.var(b, ddof=1))
    if var_a == 0 and var_b == 0:
        raise InsufficientDataError(
            f"Samples '{labels[0]}' and '{labels[1]}' both have zero variance; "
            "the t statistic is undefined"
        )

    mean_a = float(np.mean(a))
    mean_b = float(np.mean(b))
    difference = mean_a - mean_b
    percent_difference = difference / mean_b * 100 if mean_b != 0 else float("nan")

    t_statistic, p_value = stats.ttest_ind(a, b, equal_var=False)
    dof = welch_degrees_of_freedom(var_a, len(a), var_b, len(b))

    standard_error = math.sqrt(var_a / len(a) + var_b / len(b))
    margin = stats.t.ppf((1 + confidence_level) / 2, dof) * standard_error

    result = MeanComparison(
        labels=tuple(labels),
        sample_sizes=(len(a), len(b)),
        means=(mean_a, mean_b),
        standard_deviations=(math.sqrt(var_a), math.sqrt(var_b)),
        difference=difference,
        percent_difference=percent_difference,
        t_statistic=float(t_statistic),
        degrees_of_freedom=float(dof),
        p_value=float(p_value),
        cohens_d=cohens_d(a, b),
        confidence_level=confidence_level,
        confidence_interval=(difference - margin, difference + margin),
    )
    logger.debug(
        "Welch t-test %s vs %s: t=%.4f df=%.2f p=%.4g d=%.4f",
        labels[0], labels[1], result.t_statistic, result.degrees_of_freedom,
        result.p_value, result.cohens_d,
    )
    return result
