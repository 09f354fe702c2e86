"""Narrative sentences with computed values substituted.

Values are rounded here, for display only. Counts are shown as integers,
coefficients and percentages with ``decimals`` places, p-values below
0.001 as "< 0.001".
"""

import math

__all__ = [
    'format_number',
    'format_p_value',
    'effect_size_magnitude',
    'correlation_strength',
    'describe_annual_counts',
    'describe_weight_comparison',
    'describe_regression',
]


def format_number(value: float, decimals: int = 2) -> str:
    """Fixed-point formatting; NaN renders as "NA"."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "NA"
    return f"{value:.{decimals}f}"


def format_p_value(p: float, decimals: int = 2) -> str:
    """Format a p-value, e.g. "= 0.007" or "< 0.001"."""
    if p < 0.001:
        return "< 0.001"
    return f"= {p:.{max(decimals, 3)}f}"


def effect_size_magnitude(d: float) -> str:
    """Conventional label for |Cohen's d|."""
    size = abs(d)
    if size < 0.2:
        return "negligible"
    if size < 0.5:
        return "small"
    if size < 0.8:
        return "medium"
    return "large"


def correlation_strength(r: float) -> str:
    size = abs(r)
    if size < 0.3:
        return "weak"
    if size < 0.7:
        return "moderate"
    return "strong"


def describe_annual_counts(year_counts, decimals: int = 2) -> str:
    """Summary sentence for the annual juvenile trap counts."""
    return (
        f"Between {year_counts.first_year} and {year_counts.last_year}, "
        f"{year_counts.total} juvenile snowshoe hares were trapped. "
        f"Annual counts ranged from {year_counts.min} to {year_counts.max} "
        f"juveniles per year, with a mean of {format_number(year_counts.mean, decimals)} "
        f"and a median of {format_number(year_counts.median, decimals)}. "
        "Counts depend on trapping effort (days and traps per year), so "
        "standardizing effort in future studies would make years comparable."
    )


def describe_weight_comparison(comparison, alpha: float = 0.05, decimals: int = 2) -> str:
    """Summary paragraph for the two-sample weight comparison."""
    label_a, label_b = comparison.labels
    mean_a, mean_b = comparison.means
    sd_a, sd_b = comparison.standard_deviations
    n_a, n_b = comparison.sample_sizes
    low, high = comparison.confidence_interval
    direction = "more" if comparison.difference >= 0 else "less"
    significance = "significant" if comparison.p_value < alpha else "not significant"
    level = format_number(comparison.confidence_level * 100, 0)

    return (
        f"On average, juvenile {label_a} snowshoe hares weighed {direction} than "
        f"juvenile {label_b} hares ({format_number(mean_a, decimals)} ± "
        f"{format_number(sd_a, decimals)} g, n = {n_a} vs. "
        f"{format_number(mean_b, decimals)} ± {format_number(sd_b, decimals)} g, "
        f"n = {n_b}; mean ± 1 standard deviation). "
        f"The absolute difference in means is {format_number(abs(comparison.difference), decimals)} g "
        f"({format_number(abs(comparison.percent_difference), decimals)}% of the {label_b} mean; "
        f"{level}% CI of the difference {format_number(low, decimals)} to "
        f"{format_number(high, decimals)} g). The difference is {significance} at "
        f"alpha = {format_number(alpha, decimals)} (Welch's two-sample t-test: "
        f"t({format_number(comparison.degrees_of_freedom, decimals)}) = "
        f"{format_number(comparison.t_statistic, decimals)}, "
        f"p {format_p_value(comparison.p_value, decimals)}), and the effect size is "
        f"{effect_size_magnitude(comparison.cohens_d)} (Cohen's d = "
        f"{format_number(comparison.cohens_d, decimals)})."
    )


def describe_regression(result, decimals: int = 2) -> str:
    """Summary paragraph for the weight vs. hind foot length regression."""
    direction = "positive" if result.pearson_r >= 0 else "negative"
    return (
        "Simple linear regression was used to explore the relationship between "
        "juvenile snowshoe hare hind foot length (mm) and weight (g), across all "
        f"sexes and sites (n = {result.n}). The fitted model is hind foot length = "
        f"{format_number(result.intercept, decimals)} + "
        f"{format_number(result.slope, decimals)} × weight: on average, each 1 g "
        f"increase in weight is associated with a {format_number(result.slope, decimals)} mm "
        "change in hind foot length. Weight explains "
        f"{format_number(result.r_squared * 100, decimals)}% of the variance in hind "
        f"foot length (R² = {format_number(result.r_squared, decimals)}; "
        f"F({result.model_df}, {result.residual_df}) = "
        f"{format_number(result.f_statistic, decimals)}, "
        f"p {format_p_value(result.p_value, decimals)}). "
        f"Pearson's r = {format_number(result.pearson_r, decimals)} "
        f"(p {format_p_value(result.pearson_p_value, decimals)}) indicates a "
        f"{correlation_strength(result.pearson_r)} {direction} correlation. "
        "Residual normality and constant variance were not tested and should be "
        "checked before relying on the model for prediction."
    )
