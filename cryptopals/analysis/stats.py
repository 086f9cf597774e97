"""Statistical functions over float series (population statistics)."""

import math
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    """Mean of a series; nan for an empty series."""
    if not values:
        return math.nan
    return sum(values) / len(values)


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation of a series."""
    m = mean(values)
    return math.sqrt(sum((x - m) ** 2 for x in values) / len(values)) if values else math.nan


def covariance(values_x: Sequence[float], values_y: Sequence[float]) -> float:
    """
    Population covariance of two equal-length series.

    Raises:
        ValueError: If the series differ in length
    """
    if len(values_x) != len(values_y):
        raise ValueError("Both arrays must be the same size")
    if not values_x:
        return math.nan

    mean_x = mean(values_x)
    mean_y = mean(values_y)
    return sum((x - mean_x) * (y - mean_y) for x, y in zip(values_x, values_y)) / len(values_x)


def pearson(values_x: Sequence[float], values_y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient, in [-1, 1].

    Returns nan when either series is constant.
    """
    cov = covariance(values_x, values_y)
    sx = std_dev(values_x)
    sy = std_dev(values_y)
    if sx == 0 or sy == 0:
        return math.nan
    return cov / sx / sy
