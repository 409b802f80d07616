"""
Statistical analysis utilities for replicate GA runs.

Provides functions for:
- Confidence interval calculation
- Distribution comparison (Welch t-test, Mann-Whitney U)
"""

import math
from dataclasses import dataclass
from typing import List, Dict, Optional
import numpy as np


# Two-tailed 95% t critical values by sample size (df = n - 1)
T_TABLE_95 = {
    2: 12.706, 3: 4.303, 4: 3.182, 5: 2.776, 6: 2.571,
    7: 2.447, 8: 2.365, 9: 2.306, 10: 2.262, 11: 2.228,
    12: 2.201, 13: 2.179, 14: 2.160, 15: 2.145, 16: 2.131,
    17: 2.120, 18: 2.110, 19: 2.101, 20: 2.093, 21: 2.086,
    22: 2.080, 23: 2.074, 24: 2.069, 25: 2.064, 26: 2.060,
    27: 2.056, 28: 2.052, 29: 2.048,
}

Z_VALUES = {0.90: 1.645, 0.95: 1.96, 0.99: 2.576}


@dataclass
class ConfidenceInterval:
    """Result of a confidence interval calculation."""
    mean: float
    ci_lower: float
    ci_upper: float
    std: float
    n: int
    confidence: float


@dataclass
class ComparisonResult:
    """Result of comparing two distributions."""
    statistic: float
    p_value: float
    test_name: str
    significant: bool  # At alpha=0.05
    effect_size: Optional[float] = None
    effect_size_name: Optional[str] = None


def compute_confidence_interval(
    values: List[float],
    confidence: float = 0.95
) -> ConfidenceInterval:
    """
    Compute a confidence interval for the mean.

    Uses tabulated t critical values for small 95% samples and the normal
    approximation otherwise (n >= 30 or other confidence levels).

    Args:
        values: List of sample values
        confidence: Confidence level (default 0.95 for 95% CI)

    Returns:
        ConfidenceInterval with mean, bounds, std, and sample size
    """
    n = len(values)
    if n == 0:
        nan = float('nan')
        return ConfidenceInterval(nan, nan, nan, nan, 0, confidence)

    if n == 1:
        val = float(values[0])
        return ConfidenceInterval(val, val, val, 0.0, 1, confidence)

    arr = np.asarray(values, dtype=float)
    mean = float(np.mean(arr))
    std = float(np.std(arr, ddof=1))  # Sample std with Bessel's correction
    se = std / math.sqrt(n)

    if n < 30 and confidence == 0.95:
        t_crit = T_TABLE_95[n]
    else:
        t_crit = Z_VALUES.get(confidence, 1.96)

    margin = t_crit * se
    return ConfidenceInterval(
        mean=mean,
        ci_lower=mean - margin,
        ci_upper=mean + margin,
        std=std,
        n=n,
        confidence=confidence
    )


def compare_distributions(
    group_a: List[float],
    group_b: List[float],
    test: str = 'auto'
) -> ComparisonResult:
    """
    Compare two distributions for significant difference.

    Args:
        group_a: First group of values
        group_b: Second group of values
        test: Test to use ('t', 'mannwhitney', or 'auto')
              'auto' uses t-test if both groups have n >= 20, else Mann-Whitney

    Returns:
        ComparisonResult with test statistic, p-value, and significance
    """
    a = np.asarray(group_a, dtype=float)
    b = np.asarray(group_b, dtype=float)
    n_a, n_b = len(a), len(b)

    if n_a < 2 or n_b < 2:
        return ComparisonResult(
            statistic=float('nan'),
            p_value=1.0,
            test_name='insufficient_data',
            significant=False
        )

    if test == 'auto':
        test = 't' if (n_a >= 20 and n_b >= 20) else 'mannwhitney'

    if test == 't':
        result = _welch_t_test(a, b)
        # Cohen's d
        pooled_std = math.sqrt((np.var(a, ddof=1) + np.var(b, ddof=1)) / 2)
        effect_size = float((np.mean(a) - np.mean(b)) / pooled_std) if pooled_std > 0 else 0.0
        return ComparisonResult(
            statistic=result['t'],
            p_value=result['p'],
            test_name='welch_t',
            significant=result['p'] < 0.05,
            effect_size=effect_size,
            effect_size_name='cohens_d'
        )

    if test == 'mannwhitney':
        result = _mann_whitney_u(a, b)
        # Rank-biserial correlation
        effect_size = 1 - (2 * result['U']) / (n_a * n_b)
        return ComparisonResult(
            statistic=result['U'],
            p_value=result['p'],
            test_name='mann_whitney_u',
            significant=result['p'] < 0.05,
            effect_size=effect_size,
            effect_size_name='rank_biserial'
        )

    raise ValueError(f"Unknown test: {test}")


def _welch_t_test(a: np.ndarray, b: np.ndarray) -> Dict[str, float]:
    """
    Welch's t-test (unequal variance t-test).

    The p-value uses the normal approximation to the t distribution.
    """
    n_a, n_b = len(a), len(b)
    var_a, var_b = np.var(a, ddof=1), np.var(b, ddof=1)

    se = math.sqrt(var_a / n_a + var_b / n_b)
    if se == 0:
        return {'t': 0.0, 'p': 1.0, 'df': n_a + n_b - 2}

    t = (np.mean(a) - np.mean(b)) / se

    # Welch-Satterthwaite degrees of freedom
    num = (var_a / n_a + var_b / n_b) ** 2
    denom = (var_a / n_a) ** 2 / (n_a - 1) + (var_b / n_b) ** 2 / (n_b - 1)
    df = num / denom if denom > 0 else n_a + n_b - 2

    p = 2 * (1 - _normal_cdf(abs(t)))
    return {'t': float(t), 'p': float(p), 'df': float(df)}


def _mann_whitney_u(a: np.ndarray, b: np.ndarray) -> Dict[str, float]:
    """Mann-Whitney U test with the normal approximation for the p-value."""
    n_a, n_b = len(a), len(b)

    ranks = _rank_data(np.concatenate([a, b]))
    r_a = np.sum(ranks[:n_a])

    u_a = r_a - n_a * (n_a + 1) / 2
    u_b = n_a * n_b - u_a
    u = min(u_a, u_b)

    mean_u = n_a * n_b / 2
    std_u = math.sqrt(n_a * n_b * (n_a + n_b + 1) / 12)
    if std_u == 0:
        return {'U': float(u), 'p': 1.0}

    z = (u - mean_u) / std_u
    p = 2 * (1 - _normal_cdf(abs(z)))
    return {'U': float(u), 'p': float(p), 'z': float(z)}


def _rank_data(data: np.ndarray) -> np.ndarray:
    """Rank data, handling ties with average ranks."""
    n = len(data)
    sorted_indices = np.argsort(data, kind='stable')
    ranks = np.empty(n, dtype=float)

    i = 0
    while i < n:
        j = i
        while j < n - 1 and data[sorted_indices[j]] == data[sorted_indices[j + 1]]:
            j += 1
        avg_rank = (i + j) / 2 + 1  # ranks start at 1
        for k in range(i, j + 1):
            ranks[sorted_indices[k]] = avg_rank
        i = j + 1

    return ranks


def _normal_cdf(x: float) -> float:
    """
    Standard normal CDF.

    Abramowitz and Stegun 7.1.26 (error < 7.5e-8).
    """
    a1 = 0.254829592
    a2 = -0.284496736
    a3 = 1.421413741
    a4 = -1.453152027
    a5 = 1.061405429
    p = 0.3275911

    sign = 1 if x >= 0 else -1
    x = abs(x) / math.sqrt(2)

    t = 1.0 / (1.0 + p * x)
    y = 1.0 - (((((a5 * t + a4) * t) + a3) * t + a2) * t + a1) * t * math.exp(-x * x)

    return 0.5 * (1.0 + sign * y)
