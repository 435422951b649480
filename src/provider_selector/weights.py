"""Weight parsing - turns raw user criteria into a clean WeightSet.

Every raw value is classified as either a usable positive weight or noise.
Noise (unknown keys, non-numeric values, zero, negatives) is dropped silently;
only an input that is not a mapping, or one that leaves nothing behind, is
rejected.
"""

import math
from collections.abc import Mapping
from typing import Any, Optional

from .app_logging import get_logger
from .exceptions import InvalidCriteriaError, NoCriteriaSelectedError
from .schema import Criterion, WeightSet

logger = get_logger("weights")

INVALID_CRITERIA_MESSAGE = "Invalid criteria provided"
NO_CRITERIA_MESSAGE = "Please select at least one criteria"

ALLOWED_CRITERIA = frozenset(Criterion.keys())


def coerce_weight(value: Any) -> Optional[float]:
    """Classify a raw weight value.

    Returns the weight as a float when it is a finite number greater than
    zero, otherwise None. Numeric strings are accepted; booleans are not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_weights(criteria: Any) -> WeightSet:
    """Build a WeightSet from raw user criteria.

    Args:
        criteria: Mapping of criterion key to raw weight value

    Returns:
        Ordered mapping of recognised criterion key to positive weight,
        in the caller's insertion order.

    Raises:
        InvalidCriteriaError: criteria is missing or not a mapping
        NoCriteriaSelectedError: no recognised criterion has a positive weight
    """
    if criteria is None or not isinstance(criteria, Mapping):
        raise InvalidCriteriaError(INVALID_CRITERIA_MESSAGE)

    weights: WeightSet = {}
    for key, raw in criteria.items():
        if key not in ALLOWED_CRITERIA:
            logger.debug("Ignoring unrecognised criterion %r", key)
            continue
        weight = coerce_weight(raw)
        if weight is None:
            logger.debug("Discarding criterion %s with unusable weight %r", key, raw)
            continue
        weights[Criterion(key).value] = weight

    if not weights:
        raise NoCriteriaSelectedError(NO_CRITERIA_MESSAGE)

    return weights
