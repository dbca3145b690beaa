"""
Priority Scoring - Weight & Multiplier Vectors
Stored per-attribute weights and the transient what-if multipliers that scale them.
"""

import yaml
from dataclasses import dataclass, asdict, fields, replace as dc_replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
import logging

from priority_scoring.scoring.attributes import Attribute
from priority_scoring.scoring.normalizer import to_number

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent / "config"


def load_weights_config(config_path: Optional[Path] = None) -> Dict:
    """Read weights.yaml from ``config_path`` (defaults to the packaged config)."""
    if config_path is None:
        config_path = CONFIG_DIR

    with open(Path(config_path) / "weights.yaml", 'r') as f:
        return yaml.safe_load(f)


@dataclass(frozen=True)
class _AttributeVector:
    """One float per scoring attribute. Immutable; use ``replace`` to change."""

    roi: float
    effort: float
    risk: float
    strategic: float
    okr: float
    time_criticality: float
    customer_impact: float
    confidence: float
    dependencies: float

    _config_section = ''

    @classmethod
    def defaults(cls, config_path: Optional[Path] = None):
        """Built-in defaults from the packaged configuration."""
        section = load_weights_config(config_path)[cls._config_section]
        return cls(**{f.name: float(section[f.name]) for f in fields(cls)})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base=None):
        """
        Build a vector from external configuration.

        Args:
            data: Mapping of attribute key to value. camelCase keys from the
                  browser version are accepted.
            base: Vector supplying values for missing or non-numeric entries.
                  Defaults to ``cls.defaults()``.

        Returns:
            A new vector. Unknown keys are ignored.
        """
        if base is None:
            base = cls.defaults()

        values = base.to_dict()
        for key, raw in data.items():
            try:
                attribute = Attribute.resolve(key)
            except KeyError:
                logger.warning(f"Ignoring unknown {cls.__name__} key {key!r}")
                continue
            values[attribute.value] = to_number(raw, default=values[attribute.value])

        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def get(self, attribute: Union[Attribute, str]) -> float:
        return getattr(self, Attribute.resolve(attribute).value)

    def replace(self, attribute: Union[Attribute, str], value: Any):
        """Return a copy with one attribute set; non-numeric values leave it unchanged."""
        name = Attribute.resolve(attribute).value
        return dc_replace(self, **{name: to_number(value, default=getattr(self, name))})

    def items(self) -> Tuple[Tuple[Attribute, float], ...]:
        return tuple((attribute, self.get(attribute)) for attribute in Attribute)


@dataclass(frozen=True)
class WeightVector(_AttributeVector):
    """Signed scoring coefficients. Sign sets direction, no bound on magnitude."""

    _config_section = 'weights'


@dataclass(frozen=True)
class MultiplierVector(_AttributeVector):
    """What-if scale factors applied to weights at scoring time (1.0 = neutral)."""

    _config_section = 'multipliers'

    @classmethod
    def neutral(cls) -> 'MultiplierVector':
        return cls(**{f.name: 1.0 for f in fields(cls)})


def multiplier_range(config_path: Optional[Path] = None) -> Tuple[float, float]:
    """Slider bounds for multipliers. Presentation hint only."""
    lower, upper = load_weights_config(config_path).get('multiplier_range', [0.5, 1.5])
    return float(lower), float(upper)


def effective_weights(
    weights: WeightVector,
    multipliers: Optional[MultiplierVector] = None
) -> WeightVector:
    """
    Derive the weights used for one recompute.

    Returns a new WeightVector with ``weight * multiplier`` per attribute.
    ``weights`` is never modified. Missing or non-finite entries count as a
    weight of 0 and a multiplier of 1.
    """
    values = {}
    for attribute in Attribute:
        weight = to_number(weights.get(attribute), default=0.0)
        multiplier = 1.0
        if multipliers is not None:
            multiplier = to_number(multipliers.get(attribute), default=1.0)
        values[attribute.value] = weight * multiplier

    return WeightVector(**values)
