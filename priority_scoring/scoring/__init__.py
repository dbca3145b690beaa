"""Scoring engine: normalization, weighted scoring and aggregation."""

from .attributes import Attribute
from .normalizer import AttributeNormalizer, normalize
from .weights import WeightVector, MultiplierVector, effective_weights
from .aggregator import AggregationStrategy, aggregate
from .scorer import PriorityScorer, compute_roi, score, score_container

__all__ = [
    "Attribute",
    "AttributeNormalizer",
    "normalize",
    "WeightVector",
    "MultiplierVector",
    "effective_weights",
    "AggregationStrategy",
    "aggregate",
    "PriorityScorer",
    "compute_roi",
    "score",
    "score_container",
]
