"""Scorer - weighted average of transformed provider metrics.

Each requested criterion maps a provider's raw metric onto a common
"higher is better, 0-100" scale before averaging:

- price is a cost magnitude, so it is inverted
- reliability is an uptime percentage, rescaled onto 0-100
- every other metric is already 0-100 and used as is
"""

from collections.abc import Mapping
from typing import Callable, Optional

from .schema import Criterion, MetricValue, WeightSet

NEUTRAL_METRIC_VALUE = 50.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0


def normalize_metric(value: float, maximum: float = 100.0) -> float:
    """Rescale a value onto 0-100, capped at 100."""
    return min(MAX_SCORE, (value / maximum) * 100)


def _invert(value: float) -> float:
    return MAX_SCORE - value


def _identity(value: float) -> float:
    return value


TRANSFORMS: dict[str, Callable[[float], float]] = {
    Criterion.PRICE.value: _invert,
    Criterion.RELIABILITY.value: normalize_metric,
}


def clamp(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def transform(key: str, value: float) -> float:
    """Apply the criterion-specific transform and clamp into [0, 100]."""
    return clamp(TRANSFORMS.get(key, _identity)(float(value)))


def score(
    metrics: Mapping[str, MetricValue],
    weights: WeightSet,
    neutral_value: Optional[float] = None,
) -> float:
    """Score one provider's metrics against a WeightSet.

    Args:
        metrics: Raw metric values keyed by criterion
        weights: Already-filtered, strictly positive weights
        neutral_value: Stand-in for metrics the provider does not define

    Returns:
        Weighted average in [0, 100]; 0 when there is nothing to weigh
    """
    if neutral_value is None:
        neutral_value = NEUTRAL_METRIC_VALUE

    if not weights:
        return 0.0

    # Relative weights keep every term <= 100, so huge finite weights cannot overflow
    largest = max(weights.values())
    if largest <= 0:
        return 0.0

    weighted_sum = 0.0
    total_weight = 0.0

    for key, weight in weights.items():
        raw = metrics.get(key)
        if raw is None:
            raw = neutral_value
        relative = weight / largest
        weighted_sum += transform(key, raw) * relative
        total_weight += relative

    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight
