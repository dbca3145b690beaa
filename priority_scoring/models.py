"""
Priority Scoring - Domain Model
Containers (product deliverables) and the sub-items (epics) scored inside them.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from priority_scoring.errors import BackupFormatError


def new_id() -> str:
    return str(uuid.uuid4())


# Raw attribute fields; values are stored exactly as entered
SUB_ITEM_VALUE_FIELDS = (
    'benefit', 'fixed_cost', 'operating_cost', 'auto_roi', 'roi',
    'effort', 'risk', 'strategic', 'okr', 'time_criticality',
    'customer_impact', 'confidence', 'dependencies',
)

# Keys written by the browser version of the calculator
LEGACY_SUB_ITEM_KEYS = {
    'revenueEUR': 'benefit',
    'capexEUR': 'fixed_cost',
    'opexEUR': 'operating_cost',
    'autoROI': 'auto_roi',
    'timeCriticality': 'time_criticality',
    'customerImpact': 'customer_impact',
}

LEGACY_CONTAINER_KEYS = {
    'epics': 'sub_items',
    'agg': 'strategy',
}


@dataclass
class SubItem:
    """
    An individually scored unit of work (an epic).

    ROI is either entered directly (``roi``) or, when ``auto_roi`` is set,
    derived from ``benefit / (fixed_cost + operating_cost)``.
    """

    name: str = 'New Epic'
    id: str = field(default_factory=new_id)

    # Financials
    benefit: Any = 0
    fixed_cost: Any = 0
    operating_cost: Any = 0
    auto_roi: Any = True
    roi: Any = 1.0

    # Scoring attributes
    effort: Any = 8             # story points
    risk: Any = 3               # 1 (low) - 5 (high)
    strategic: Any = 3          # 1-5
    okr: Any = 3                # 1-5
    time_criticality: Any = 3   # 1-5
    customer_impact: Any = 3    # 1-5
    confidence: Any = 0.6       # 0-1
    dependencies: Any = 1       # 0-5, more is worse

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> 'SubItem':
        """
        Rebuild a sub-item from a backup record.

        Values missing from the record are left as None, which the scorer
        treats as missing input.

        Raises:
            BackupFormatError: If ``record`` is not a mapping.
        """
        if not isinstance(record, Mapping):
            raise BackupFormatError(
                f"Sub-item record must be an object, got {type(record).__name__}"
            )

        data = {LEGACY_SUB_ITEM_KEYS.get(k, k): v for k, v in record.items()}
        values = {name: data.get(name) for name in SUB_ITEM_VALUE_FIELDS}

        return cls(
            id=str(data.get('id') or new_id()),
            name='' if data.get('name') is None else str(data['name']),
            **values
        )

    def to_dict(self) -> Dict[str, Any]:
        record = {'id': self.id, 'name': self.name}
        for name in SUB_ITEM_VALUE_FIELDS:
            record[name] = getattr(self, name)
        return record

    def update(self, **patch) -> 'SubItem':
        """Set fields in place. Unknown fields raise AttributeError."""
        for key, value in patch.items():
            key = LEGACY_SUB_ITEM_KEYS.get(key, key)
            if key not in SUB_ITEM_VALUE_FIELDS and key != 'name':
                raise AttributeError(f"SubItem has no field {key!r}")
            setattr(self, key, value)
        return self


@dataclass
class Container:
    """A product deliverable: a named group of sub-items with an aggregation strategy."""

    name: str = 'New Product Deliverable'
    id: str = field(default_factory=new_id)
    owner: Optional[str] = ''
    strategy: str = 'max'
    sub_items: List[SubItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> 'Container':
        """
        Rebuild a container and its sub-items from a backup record.

        Raises:
            BackupFormatError: If the record or its sub-items are malformed.
        """
        if not isinstance(record, Mapping):
            raise BackupFormatError(
                f"Container record must be an object, got {type(record).__name__}"
            )

        data = {LEGACY_CONTAINER_KEYS.get(k, k): v for k, v in record.items()}

        sub_items = data.get('sub_items') or []
        if not isinstance(sub_items, list):
            raise BackupFormatError(
                f"Sub-items of {data.get('name')!r} must be a list, got {type(sub_items).__name__}"
            )

        return cls(
            id=str(data.get('id') or new_id()),
            name='' if data.get('name') is None else str(data['name']),
            owner='' if data.get('owner') is None else data['owner'],
            strategy=data.get('strategy') or 'max',
            sub_items=[SubItem.from_dict(item) for item in sub_items],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'owner': self.owner,
            'strategy': self.strategy,
            'sub_items': [item.to_dict() for item in self.sub_items],
        }

    def find(self, item_id: str) -> Optional[SubItem]:
        for item in self.sub_items:
            if item.id == item_id:
                return item
        return None
