"""
Priority Scoring - Main Interface
Holds the portfolio, weights and what-if multipliers, and ties scoring,
backup/export and local storage into one API.
"""

import pandas as pd
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from priority_scoring.models import Container, SubItem
from priority_scoring.data.backup import dump_json, export_csv, load_json
from priority_scoring.data.storage import LocalStorage
from priority_scoring.analysis.what_if import create_analyzer
from priority_scoring.scoring.attributes import Attribute
from priority_scoring.scoring.scorer import create_scorer
from priority_scoring.scoring.weights import (
    MultiplierVector,
    WeightVector,
    effective_weights,
)

logger = logging.getLogger(__name__)

SORT_KEYS = ('score', 'name', 'owner', 'sub_items')


class PriorityBoard:
    """
    Main interface for prioritising deliverables.

    Provides:
    - Editable portfolio of containers (deliverables) and sub-items (epics)
    - Scoring weights plus temporary what-if multipliers
    - Dashboard, CSV export and JSON backup/restore
    - Optional persistence of every change to local storage
    """

    def __init__(
        self,
        storage: Optional[LocalStorage] = None,
        containers: Optional[List[Container]] = None,
        config_path: Optional[Path] = None
    ):
        self.storage = storage
        self.config_path = config_path
        self.scorer = create_scorer(config_path)
        self.analyzer = create_analyzer()

        if storage is not None:
            self.weights = storage.load_weights()
            self.multipliers = storage.load_multipliers()
            self.containers = containers if containers is not None else storage.load_containers()
            logger.info(f"Loaded {len(self.containers)} containers from {storage.directory}")
        else:
            self.weights = WeightVector.defaults(config_path)
            self.multipliers = MultiplierVector.defaults(config_path)
            self.containers = containers if containers is not None else []

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self):
        """Write weights, multipliers and portfolio to storage, if attached."""
        if self.storage is None:
            return
        self.storage.save_weights(self.weights)
        self.storage.save_multipliers(self.multipliers)
        self.storage.save_containers(self.containers)

    def _persist_containers(self):
        if self.storage is not None:
            self.storage.save_containers(self.containers)

    # ------------------------------------------------------------------
    # Weights & what-if
    # ------------------------------------------------------------------

    @property
    def effective_weights(self) -> WeightVector:
        """Weights scaled by the current multipliers. Never stored."""
        return effective_weights(self.weights, self.multipliers)

    def set_weight(self, attribute: Union[Attribute, str], value: Any) -> WeightVector:
        self.weights = self.weights.replace(attribute, value)
        if self.storage is not None:
            self.storage.save_weights(self.weights)
        return self.weights

    def set_multiplier(self, attribute: Union[Attribute, str], value: Any) -> MultiplierVector:
        self.multipliers = self.multipliers.replace(attribute, value)
        if self.storage is not None:
            self.storage.save_multipliers(self.multipliers)
        return self.multipliers

    def reset_weights(self) -> WeightVector:
        self.weights = WeightVector.defaults(self.config_path)
        if self.storage is not None:
            self.storage.save_weights(self.weights)
        return self.weights

    def reset_multipliers(self) -> MultiplierVector:
        self.multipliers = MultiplierVector.defaults(self.config_path)
        if self.storage is not None:
            self.storage.save_multipliers(self.multipliers)
        return self.multipliers

    # ------------------------------------------------------------------
    # Portfolio editing
    # ------------------------------------------------------------------

    def get_container(self, container_id: str) -> Container:
        for container in self.containers:
            if container.id == container_id:
                return container
        raise KeyError(f"Unknown container: {container_id}")

    def get_sub_item(self, container_id: str, item_id: str) -> SubItem:
        item = self.get_container(container_id).find(item_id)
        if item is None:
            raise KeyError(f"Unknown sub-item {item_id} in container {container_id}")
        return item

    def add_container(
        self,
        name: str = 'New Product Deliverable',
        owner: str = '',
        strategy: str = 'max'
    ) -> Container:
        container = Container(name=name, owner=owner, strategy=strategy)
        self.containers.append(container)
        self._persist_containers()
        return container

    def update_container(self, container_id: str, **patch) -> Container:
        """Change name, owner or strategy of a container."""
        container = self.get_container(container_id)
        for key, value in patch.items():
            key = {'agg': 'strategy'}.get(key, key)
            if key not in ('name', 'owner', 'strategy'):
                raise AttributeError(f"Container has no editable field {key!r}")
            setattr(container, key, value)
        self._persist_containers()
        return container

    def remove_container(self, container_id: str):
        self.containers = [c for c in self.containers if c.id != container_id]
        self._persist_containers()

    def add_sub_item(self, container_id: str, **fields) -> SubItem:
        """Append a sub-item; unspecified fields take the new-epic defaults."""
        container = self.get_container(container_id)
        item = SubItem().update(**fields)
        container.sub_items.append(item)
        self._persist_containers()
        return item

    def update_sub_item(self, container_id: str, item_id: str, **patch) -> SubItem:
        item = self.get_sub_item(container_id, item_id).update(**patch)
        self._persist_containers()
        return item

    def remove_sub_item(self, container_id: str, item_id: str):
        container = self.get_container(container_id)
        container.sub_items = [i for i in container.sub_items if i.id != item_id]
        self._persist_containers()

    def clear_financials(self, container_id: str, item_id: str) -> SubItem:
        """Zero the benefit and cost fields of a sub-item."""
        return self.update_sub_item(
            container_id, item_id, benefit=0, fixed_cost=0, operating_cost=0
        )

    # ------------------------------------------------------------------
    # Scoring views
    # ------------------------------------------------------------------

    def compute(self) -> List[Dict]:
        """Scored view of every container under the current what-if scenario."""
        return self.scorer.score_all(self.containers, self.weights, self.multipliers)

    def get_dashboard(
        self,
        filter_text: Optional[str] = None,
        sort_key: str = 'score',
        ascending: bool = False
    ) -> pd.DataFrame:
        """
        One row per container.

        Args:
            filter_text: Case-insensitive match on container name, owner
                         or any sub-item name
            sort_key: 'score', 'name', 'owner' or 'sub_items' (count)
            ascending: Sort direction

        Returns:
            DataFrame with id, name, owner, strategy, sub_items, score, band
        """
        if sort_key not in SORT_KEYS:
            raise ValueError(f"sort_key must be one of {SORT_KEYS}, got {sort_key!r}")

        needle = (filter_text or '').strip().lower()
        rows = []

        for scored in self.compute():
            if needle and not (
                needle in str(scored['name']).lower()
                or needle in str(scored['owner']).lower()
                or any(needle in str(i.get('name', '')).lower() for i in scored['sub_items'])
            ):
                continue

            rows.append({
                'id': scored['id'],
                'name': scored['name'],
                'owner': scored['owner'],
                'strategy': scored['strategy'],
                'sub_items': len(scored['sub_items']),
                'score': scored['score'],
                'band': scored['band'],
            })

        columns = ['id', 'name', 'owner', 'strategy', 'sub_items', 'score', 'band']
        df = pd.DataFrame(rows, columns=columns)
        if df.empty:
            return df

        if sort_key in ('name', 'owner'):
            return df.sort_values(
                sort_key, ascending=ascending, kind='stable', key=lambda s: s.str.lower()
            ).reset_index(drop=True)
        return df.sort_values(sort_key, ascending=ascending, kind='stable').reset_index(drop=True)

    def compare_what_if(self) -> pd.DataFrame:
        """Sub-item scores under stored weights vs the current multipliers."""
        return self.analyzer.compare_sub_items(self.containers, self.weights, self.multipliers)

    def print_dashboard(self, filter_text: Optional[str] = None):
        """Print formatted dashboard to console."""
        df = self.get_dashboard(filter_text)

        if df.empty:
            print("No deliverables yet")
            return

        print("\n" + "=" * 80)
        print("PRIORITY SCORING - Deliverables")
        print(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print("=" * 80)

        display_df = df[['name', 'owner', 'strategy', 'sub_items', 'score', 'band']].copy()
        display_df.columns = ['Deliverable', 'Owner', 'Aggregation', 'Epics', 'Score', 'Band']
        print(display_df.to_string(index=False))

        changed = self.compare_what_if()
        changed = changed[changed['delta'] != 0] if not changed.empty else changed
        print("\n" + "-" * 80)
        if not changed.empty:
            print(f"What-if multipliers change {len(changed)} epic scores")
        else:
            print("What-if multipliers are neutral")
        print("=" * 80)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_csv(self, path: Optional[Union[str, Path]] = None) -> str:
        return export_csv(self.containers, self.weights, self.multipliers, path)

    def export_json(self, path: Optional[Union[str, Path]] = None) -> str:
        return dump_json(self.containers, path)

    def import_json(self, source: Union[str, bytes, Path]) -> List[Container]:
        """
        Replace the whole portfolio with a JSON backup.

        Args:
            source: JSON text, or a Path to a backup file

        Raises:
            BackupFormatError: If the data is not a list of container records.
                               The current portfolio is left untouched.
        """
        if isinstance(source, Path):
            source = source.read_text(encoding='utf-8')

        containers = load_json(source)
        self.containers = containers
        self._persist_containers()
        logger.info(f"Imported {len(containers)} containers")
        return containers


def create_board(
    storage: Optional[LocalStorage] = None,
    containers: Optional[List[Container]] = None
) -> PriorityBoard:
    """Factory function to create a board."""
    return PriorityBoard(storage=storage, containers=containers)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    board = create_board(storage=LocalStorage())
    board.print_dashboard()

    print("\nWhat-if comparison:")
    comparison = board.compare_what_if()
    print(comparison.to_string(index=False) if not comparison.empty else "  (no epics)")
    for insight in board.analyzer.generate_insights(comparison):
        print(f"  • {insight}")
