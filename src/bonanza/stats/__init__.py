"""Statistical tests used by the report.

- comparison: Welch two-sample t-test and Cohen's d
- regression: Simple linear regression and Pearson correlation
"""

from bonanza.stats.comparison import MeanComparison, compare_means, cohens_d
from bonanza.stats.regression import RegressionResult, fit_linear_model

__all__ = [
    "MeanComparison",
    "compare_means",
    "cohens_d",
    "RegressionResult",
    "fit_linear_model",
]
