"""
Priority Scoring - Attribute Normalization
Maps raw sub-item attributes onto the [0, 1] interval using per-attribute rules.
"""

import math
import numpy as np
from typing import Any, Dict, Mapping
import logging

from priority_scoring.scoring.attributes import Attribute, ORDINAL_ATTRIBUTES

logger = logging.getLogger(__name__)


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce arbitrary user input to a finite float.

    Numbers and numeric strings convert; None, blanks, unparseable strings,
    other objects, integers too large for a float and non-finite values
    yield ``default``.
    """
    if value is None:
        return default

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default

    if not math.isfinite(number):
        return default
    return number


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp to [lower, upper]; non-finite input collapses to ``lower``."""
    if not math.isfinite(value):
        return lower
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (built-in round() rounds to even)."""
    return int(math.floor(value + 0.5))


class AttributeNormalizer:
    """Normalizes raw attribute values to a 0-1 scale."""

    def __init__(
        self,
        effort_ceiling: float = 40.0,
        dependency_ceiling: float = 5.0,
        roi_softness: float = 2.5,
    ):
        # Effort: story points, saturates at the ceiling
        self.effort_ceiling = effort_ceiling
        # Dependencies: 0-5 typical, more is worse
        self.dependency_ceiling = dependency_ceiling
        # ROI: tanh(ratio / softness), so 2.5x maps to tanh(1)
        self.roi_softness = roi_softness

    def normalize_ordinal(self, value: Any) -> float:
        """Normalize a 1-5 ordinal rating (1 -> 0.0, 5 -> 1.0)."""
        return clamp((to_number(value) - 1) / 4, 0.0, 1.0)

    def normalize_confidence(self, value: Any) -> float:
        """Confidence is already a fraction; bad input falls back to 0."""
        return clamp(to_number(value, default=0.0), 0.0, 1.0)

    def normalize_effort(self, value: Any) -> float:
        """Normalize effort, saturating at ``effort_ceiling``."""
        return clamp(min(to_number(value) / self.effort_ceiling, 1.0), 0.0, 1.0)

    def normalize_dependencies(self, value: Any) -> float:
        """Normalize the dependency count against ``dependency_ceiling``."""
        return clamp(to_number(value) / self.dependency_ceiling, 0.0, 1.0)

    def normalize_roi(self, ratio: Any) -> float:
        """
        Smoothly saturate an ROI multiple.

        Large ratios approach 1 without reaching it, so a single outlier
        cannot dominate the weighted sum. Negative ratios score 0.
        """
        ratio = max(to_number(ratio), 0.0)
        return float(np.tanh(ratio / self.roi_softness))

    def normalize(self, attribute: Attribute, value: Any) -> float:
        """Dispatch ``value`` to the rule for ``attribute``."""
        attribute = Attribute.resolve(attribute)

        if attribute in ORDINAL_ATTRIBUTES:
            return self.normalize_ordinal(value)
        if attribute is Attribute.ROI:
            return self.normalize_roi(value)
        if attribute is Attribute.EFFORT:
            return self.normalize_effort(value)
        if attribute is Attribute.CONFIDENCE:
            return self.normalize_confidence(value)
        return self.normalize_dependencies(value)

    def normalize_attributes(self, values: Mapping[Any, Any]) -> Dict[Attribute, float]:
        """
        Normalize all nine attributes.

        Args:
            values: Raw values keyed by attribute (enum or key string).
                    Missing attributes are treated as missing input.

        Returns:
            Dict of normalized values keyed by Attribute, in canonical order.
        """
        resolved = {}
        for key, value in values.items():
            try:
                resolved[Attribute.resolve(key)] = value
            except KeyError:
                logger.debug(f"Ignoring unknown attribute {key!r}")

        return {
            attribute: self.normalize(attribute, resolved.get(attribute))
            for attribute in Attribute
        }


_default_normalizer = AttributeNormalizer()


def normalize(attribute: Attribute, value: Any) -> float:
    """Normalize one raw value with the default rules."""
    return _default_normalizer.normalize(attribute, value)


def create_normalizer() -> AttributeNormalizer:
    """Factory function."""
    return AttributeNormalizer()
