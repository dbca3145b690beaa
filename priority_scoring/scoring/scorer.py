"""
Priority Scoring - Sub-item Scoring
Turns a sub-item's raw attributes and a weight vector into a 0-100 score,
and assigns score bands from the grading scale.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import logging

from priority_scoring.scoring.aggregator import AggregationStrategy, aggregate
from priority_scoring.scoring.attributes import Attribute
from priority_scoring.scoring.normalizer import (
    AttributeNormalizer,
    clamp,
    round_half_up,
    to_number,
)
from priority_scoring.scoring.weights import (
    CONFIG_DIR,
    MultiplierVector,
    WeightVector,
    effective_weights,
)

logger = logging.getLogger(__name__)

_default_normalizer = AttributeNormalizer()


def _read(sub_item: Any, name: str) -> Any:
    """Fetch a raw field from a SubItem or a mapping of canonical field names."""
    if isinstance(sub_item, Mapping):
        return sub_item.get(name)
    return getattr(sub_item, name, None)


def compute_roi(sub_item: Any) -> float:
    """
    Effective ROI multiple of a sub-item.

    With ``auto_roi`` set: max(benefit, 0) / max(fixed_cost + operating_cost, 1).
    Otherwise the manual ``roi`` value (non-numeric -> 0).
    """
    if _read(sub_item, 'auto_roi'):
        cost = to_number(_read(sub_item, 'fixed_cost')) + to_number(_read(sub_item, 'operating_cost'))
        benefit = max(to_number(_read(sub_item, 'benefit')), 0.0)
        return benefit / max(cost, 1.0)

    return to_number(_read(sub_item, 'roi'))


def raw_attributes(sub_item: Any) -> Dict[Attribute, Any]:
    """Raw values of the nine attributes, with ROI already resolved."""
    values = {attribute: _read(sub_item, attribute.value) for attribute in Attribute}
    values[Attribute.ROI] = compute_roi(sub_item)
    return values


def weighted_components(
    sub_item: Any,
    weights: WeightVector,
    multipliers: Optional[MultiplierVector] = None,
    normalizer: Optional[AttributeNormalizer] = None
) -> Dict[Attribute, float]:
    """
    Per-attribute contribution ``effective_weight * normalized_value``.

    The components sum to the raw score before rescaling.
    """
    normalizer = normalizer or _default_normalizer
    weights = effective_weights(weights, multipliers)
    normalized = normalizer.normalize_attributes(raw_attributes(sub_item))

    return {
        attribute: weights.get(attribute) * normalized[attribute]
        for attribute in Attribute
    }


def score(
    sub_item: Any,
    weights: WeightVector,
    multipliers: Optional[MultiplierVector] = None
) -> int:
    """
    Score one sub-item.

    The weighted sum of normalized attributes (roughly -1..1 with default
    weights) is mapped to 0-100 via (raw + 1) * 50, clamped and rounded.

    Args:
        sub_item: SubItem or mapping of canonical field names
        weights: Stored weight vector
        multipliers: Optional what-if multipliers; None means neutral

    Returns:
        Integer score in [0, 100]. Never raises on bad attribute values.
    """
    raw = sum(weighted_components(sub_item, weights, multipliers).values())
    scaled = clamp((raw + 1) * 50, 0.0, 100.0)
    return round_half_up(scaled)


def score_container(
    container: Any,
    weights: WeightVector,
    multipliers: Optional[MultiplierVector] = None
) -> int:
    """Aggregate score of a container using its own strategy."""
    scores = [score(item, weights, multipliers) for item in container.sub_items]
    return aggregate(scores, container.strategy)


class PriorityScorer:
    """Scores sub-items and containers and assigns score bands."""

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            config_path = CONFIG_DIR

        with open(Path(config_path) / "grading.yaml", 'r') as f:
            self.grading_config = yaml.safe_load(f)

        self.grading_scale = self.grading_config['grading']['scale']
        self.band_descriptions = self.grading_config['grading']['descriptions']

    def score_to_band(self, value: float) -> str:
        """Convert a numeric score (0-100) to a band label."""
        for band, (lower, upper) in self.grading_scale.items():
            if lower <= value < upper:
                return band

        return 'very_high' if value >= 100 else 'very_low'

    def score_sub_item(
        self,
        sub_item: Any,
        weights: WeightVector,
        multipliers: Optional[MultiplierVector] = None
    ) -> Dict:
        """
        Score a sub-item.

        Returns:
            Dict with the sub-item fields plus effective ROI, score and band
        """
        item_score = score(sub_item, weights, multipliers)
        record = sub_item.to_dict() if hasattr(sub_item, 'to_dict') else dict(sub_item)
        record.update({
            'roi_effective': compute_roi(sub_item),
            'score': item_score,
            'band': self.score_to_band(item_score),
        })

        logger.debug(f"Scored {record.get('name')!r}: {item_score}")
        return record

    def score_container(
        self,
        container: Any,
        weights: WeightVector,
        multipliers: Optional[MultiplierVector] = None
    ) -> Dict:
        """
        Score a container and each of its sub-items.

        Returns:
            Dict with container fields, the scored sub-items, score and band
        """
        items = [
            self.score_sub_item(item, weights, multipliers)
            for item in container.sub_items
        ]
        strategy = AggregationStrategy.parse(container.strategy)
        container_score = aggregate([item['score'] for item in items], strategy)
        band = self.score_to_band(container_score)

        return {
            'id': container.id,
            'name': container.name,
            'owner': container.owner or '',
            'strategy': strategy.value,
            'sub_items': items,
            'score': container_score,
            'band': band,
            'band_description': self.band_descriptions.get(band, ''),
        }

    def score_all(
        self,
        containers: List[Any],
        weights: WeightVector,
        multipliers: Optional[MultiplierVector] = None
    ) -> List[Dict]:
        """Score every container, preserving order."""
        return [self.score_container(c, weights, multipliers) for c in containers]


def create_scorer(config_path: Optional[Path] = None) -> PriorityScorer:
    """Factory function."""
    return PriorityScorer(config_path)
