"""Explainer - human-readable reasoning for the selected provider.

Builds one fragment per weighted criterion, in the order the user supplied
them, then closes with the provider description. The named criteria always
get a fragment, citing the neutral value when the provider lacks the metric;
other criteria are only mentioned when the provider defines them.
"""

from typing import Callable, Optional

from .config import get_config
from .schema import Criterion, Provider, WeightSet
from .scorer import NEUTRAL_METRIC_VALUE

FragmentTemplate = Callable[[Provider, str, float], str]


def format_number(value: float) -> str:
    """Render a metric without a trailing '.0' for integral values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _price(provider: Provider, key: str, value: float) -> str:
    return (
        f"Price consideration: {provider.name} offers pricing at "
        f"{format_number(value)}/100"
    )


def _efficiency(provider: Provider, key: str, value: float) -> str:
    return (
        f"Efficiency: {provider.name} has an efficiency rating of "
        f"{format_number(value)}/100"
    )


def _speed(provider: Provider, key: str, value: float) -> str:
    return f"Performance: {provider.name} delivers speed {format_number(value)}/100"


def _reliability(provider: Provider, key: str, value: float) -> str:
    return f"Reliability: {provider.name} guarantees {format_number(value)}% uptime"


def _generic(provider: Provider, key: str, value: float) -> str:
    label = key.replace("_", " ")
    return f"{label}: {provider.name} scores {format_number(value)}/100"


FRAGMENT_TEMPLATES: dict[str, FragmentTemplate] = {
    Criterion.PRICE.value: _price,
    Criterion.EFFICIENCY.value: _efficiency,
    Criterion.SPEED.value: _speed,
    Criterion.RELIABILITY.value: _reliability,
}


def reasoning_fragments(
    provider: Provider,
    weights: WeightSet,
    neutral_value: Optional[float] = None,
) -> list[str]:
    """Fragments for each weighted criterion, plus the provider description."""
    if neutral_value is None:
        neutral_value = NEUTRAL_METRIC_VALUE

    fragments = []
    for key in weights:
        value = provider.metric(key)
        template = FRAGMENT_TEMPLATES.get(key)
        if template is not None:
            fragments.append(template(provider, key, neutral_value if value is None else value))
        elif value is not None:
            fragments.append(_generic(provider, key, value))

    fragments.append(provider.description)
    return fragments


def generate_reasoning(
    provider: Provider,
    weights: WeightSet,
    delimiter: Optional[str] = None,
    neutral_value: Optional[float] = None,
) -> str:
    """Generate reasoning text for the selected provider.

    Args:
        provider: The winning provider
        weights: The WeightSet that was used for scoring
        delimiter: Fragment separator (defaults to the configured one)
        neutral_value: Value cited for a named criterion the provider lacks
            (defaults to the configured one)

    Returns:
        Fragments joined by the delimiter
    """
    cfg = get_config()
    if delimiter is None:
        delimiter = cfg.reasoning.delimiter
    if neutral_value is None:
        neutral_value = cfg.scoring.neutral_metric_value
    return delimiter.join(reasoning_fragments(provider, weights, neutral_value))
