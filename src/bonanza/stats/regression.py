"""Simple linear regression of one measurement on another.

Fits ``y = intercept + slope * x`` by ordinary least squares and reports
the overall-model F test alongside Pearson's r. No assumption checks are
made; interpretation is left to the report text.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy import stats

from bonanza.contracts import InsufficientDataError, assert_finite_sample, require

__all__ = ['RegressionResult', 'fit_linear_model']

logger = logging.getLogger(__name__)

MIN_PAIRS = 3


@dataclass(frozen=True)
class RegressionResult:
    """OLS fit summary. ``model_df`` is 1, ``residual_df`` is n - 2."""
    n: int
    intercept: float
    slope: float
    r_squared: float
    f_statistic: float
    model_df: int
    residual_df: int
    p_value: float
    pearson_r: float
    pearson_p_value: float
    slope_stderr: float
    intercept_stderr: float
    residual_standard_error: float

    def predict(self, x) -> np.ndarray:
        return self.intercept + self.slope * np.asarray(x, dtype=float)


def fit_linear_model(x, y) -> RegressionResult:
    """Fit ``y`` on ``x`` by ordinary least squares.

    Parameters
    ----------
    x, y : array-like of float
        Paired observations with missing values already removed
        (see ``bonanza.hares.aggregator.paired_measurements``).

    Returns
    -------
    RegressionResult

    Raises
    ------
    InsufficientDataError
        Fewer than 3 pairs, or ``x`` or ``y`` is constant.
    ContractViolation
        ``x`` and ``y`` differ in length or contain non-finite values.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    assert_finite_sample(x, "x")
    assert_finite_sample(y, "y")
    require(
        len(x) == len(y),
        f"Regression contract violated: {len(x)} x values but {len(y)} y values"
    )

    n = len(x)
    if n < MIN_PAIRS:
        raise InsufficientDataError(
            f"Regression needs at least {MIN_PAIRS} paired points, got {n}",
            required=MIN_PAIRS, available=n,
        )
    if np.ptp(x) == 0:
        raise InsufficientDataError("All x values are identical; slope is undefined")
    if np.ptp(y) == 0:
        raise InsufficientDataError("All y values are identical; correlation is undefined")

    fit = stats.linregress(x, y)
    r_squared = float(fit.rvalue ** 2)
    residual_df = n - 2

    if r_squared >= 1.0:
        f_statistic, p_value = math.inf, 0.0
    else:
        f_statistic = r_squared / (1.0 - r_squared) * residual_df
        p_value = float(stats.f.sf(f_statistic, 1, residual_df))

    pearson_r, pearson_p = stats.pearsonr(x, y)

    residuals = y - (fit.intercept + fit.slope * x)
    residual_standard_error = math.sqrt(float(np.sum(residuals ** 2)) / residual_df)

    result = RegressionResult(
        n=n,
        intercept=float(fit.intercept),
        slope=float(fit.slope),
        r_squared=r_squared,
        f_statistic=float(f_statistic),
        model_df=1,
        residual_df=residual_df,
        p_value=p_value,
        pearson_r=float(pearson_r),
        pearson_p_value=float(pearson_p),
        slope_stderr=float(fit.stderr),
        intercept_stderr=float(fit.intercept_stderr),
        residual_standard_error=residual_standard_error,
    )
    logger.debug(
        "OLS fit n=%d: slope=%.4f intercept=%.4f R2=%.4f F(1, %d)=%.3f p=%.4g",
        n, result.slope, result.intercept, result.r_squared, residual_df,
        result.f_statistic, result.p_value,
    )
    return result
