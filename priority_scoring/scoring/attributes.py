"""
Priority Scoring - Scoring Attributes
The fixed set of nine attributes every sub-item is scored on.
"""

from enum import Enum
from typing import Dict, Tuple, Union


class Attribute(str, Enum):
    """Scoring attributes in canonical order."""

    ROI = 'roi'
    EFFORT = 'effort'
    RISK = 'risk'
    STRATEGIC = 'strategic'
    OKR = 'okr'
    TIME_CRITICALITY = 'time_criticality'
    CUSTOMER_IMPACT = 'customer_impact'
    CONFIDENCE = 'confidence'
    DEPENDENCIES = 'dependencies'

    @classmethod
    def resolve(cls, key: Union['Attribute', str]) -> 'Attribute':
        """
        Look up an attribute by enum member, snake_case key or camelCase key.

        Raises:
            KeyError: If ``key`` names no attribute.
        """
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            if key in _BY_KEY:
                return _BY_KEY[key]
            if key in LEGACY_KEYS:
                return LEGACY_KEYS[key]
        raise KeyError(f"Unknown scoring attribute: {key!r}")


_BY_KEY: Dict[str, Attribute] = {a.value: a for a in Attribute}

# Keys used by the browser version of the calculator
LEGACY_KEYS: Dict[str, Attribute] = {
    'timeCriticality': Attribute.TIME_CRITICALITY,
    'customerImpact': Attribute.CUSTOMER_IMPACT,
}

ORDINAL_ATTRIBUTES: Tuple[Attribute, ...] = (
    Attribute.RISK,
    Attribute.STRATEGIC,
    Attribute.OKR,
    Attribute.TIME_CRITICALITY,
    Attribute.CUSTOMER_IMPACT,
)

# Input constraints for editing forms: (min, max, step).
# The engine does not enforce these.
FIELD_DOMAINS: Dict[str, Tuple[float, float, float]] = {
    'roi': (0, 10, 0.1),
    'benefit': (0, 1_000_000_000, 1000),
    'fixed_cost': (0, 1_000_000_000, 1000),
    'operating_cost': (0, 1_000_000_000, 1000),
    'effort': (0, 100, 1),
    'risk': (1, 5, 1),
    'strategic': (1, 5, 1),
    'okr': (1, 5, 1),
    'time_criticality': (1, 5, 1),
    'customer_impact': (1, 5, 1),
    'confidence': (0, 1, 0.05),
    'dependencies': (0, 5, 1),
}
