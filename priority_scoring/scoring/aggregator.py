"""
Priority Scoring - Score Aggregation
Reduces the sub-item scores of a container into one container score.
"""

import numpy as np
from enum import Enum
from typing import Any, Iterable
import logging

from priority_scoring.scoring.normalizer import clamp, round_half_up, to_number

logger = logging.getLogger(__name__)


class AggregationStrategy(str, Enum):
    """How a container's sub-item scores combine."""

    MAX = 'max'          # driven by the strongest sub-item
    AVERAGE = 'average'  # balanced
    SUM = 'sum'          # cumulative, capped at 100

    @classmethod
    def parse(cls, value: Any) -> 'AggregationStrategy':
        """Resolve a stored strategy name. Unknown or missing values fall back to MAX."""
        if isinstance(value, cls):
            return value

        key = str(value).strip().lower() if value is not None else ''
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            if key:
                logger.debug(f"Unknown aggregation strategy {value!r}, using max")
            return cls.MAX


_ALIASES = {
    'capped-sum': 'sum',
    'capped_sum': 'sum',
}


def aggregate(scores: Iterable[Any], strategy: Any = AggregationStrategy.MAX) -> int:
    """
    Combine sub-item scores into a container score.

    Args:
        scores: Sub-item scores, normally integers in [0, 100]
        strategy: AggregationStrategy or its name ('max', 'average', 'sum')

    Returns:
        Integer in [0, 100]; 0 for an empty sequence.
    """
    values = np.array([to_number(s) for s in scores], dtype=float)
    if values.size == 0:
        return 0

    strategy = AggregationStrategy.parse(strategy)

    if strategy is AggregationStrategy.AVERAGE:
        result = values.mean()
    elif strategy is AggregationStrategy.SUM:
        # Information above 100 is discarded
        result = min(float(round_half_up(values.sum())), 100.0)
    else:
        result = values.max()

    return round_half_up(clamp(float(result), 0.0, 100.0))
