"""
Priority Scoring - Local Storage
Persists weights, what-if multipliers and the portfolio as JSON files under
fixed keys, falling back to built-in defaults when data is absent or corrupt.
"""

import os
import json
from pathlib import Path
from typing import Any, Callable, List, Optional, Union
import logging

from priority_scoring.errors import BackupFormatError
from priority_scoring.models import Container
from priority_scoring.data.backup import containers_to_records, parse_containers
from priority_scoring.data.samples import sample_containers
from priority_scoring.scoring.weights import MultiplierVector, WeightVector

logger = logging.getLogger(__name__)

WEIGHTS_KEY = 'psa_weights'
MULTIPLIERS_KEY = 'psa_whatif'
CONTAINERS_KEY = 'psa_pds'


class LocalStorage:
    """Key/value JSON store in a local directory, one file per key."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        """
        Args:
            directory: Storage directory. If None, reads PRIORITY_SCORING_HOME,
                       else uses ~/.priority_scoring.
        """
        if directory is None:
            directory = os.getenv("PRIORITY_SCORING_HOME") or Path.home() / ".priority_scoring"

        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str, default: Any = None) -> Any:
        """Decoded value for ``key``, or ``default`` if missing or unreadable."""
        path = self.path_for(key)
        if not path.exists():
            return default

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {key} from {path}: {e}")
            return default

    def write(self, key: str, value: Any) -> bool:
        """
        Store ``value`` under ``key``. Failures are logged, not raised.

        The previous value stays intact unless the new one was fully written.
        """
        path = self.path_for(key)
        tmp_path = path.with_suffix('.tmp')
        try:
            text = json.dumps(value, indent=2)
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not write {key} to {path}: {e}")
            return False
        return True

    def load_weights(self) -> WeightVector:
        data = self.read(WEIGHTS_KEY)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Stored weights are malformed, using defaults")
            return WeightVector.defaults()
        return WeightVector.from_dict(data)

    def load_multipliers(self) -> MultiplierVector:
        data = self.read(MULTIPLIERS_KEY)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Stored multipliers are malformed, using defaults")
            return MultiplierVector.defaults()
        return MultiplierVector.from_dict(data)

    def load_containers(
        self,
        default_factory: Callable[[], List[Container]] = sample_containers
    ) -> List[Container]:
        """Stored portfolio, or ``default_factory()`` if absent or corrupt."""
        data = self.read(CONTAINERS_KEY)
        if data is None:
            return default_factory()

        try:
            return parse_containers(data)
        except BackupFormatError as e:
            logger.warning(f"Stored portfolio is malformed, using defaults: {e}")
            return default_factory()

    def save_weights(self, weights: WeightVector) -> bool:
        return self.write(WEIGHTS_KEY, weights.to_dict())

    def save_multipliers(self, multipliers: MultiplierVector) -> bool:
        return self.write(MULTIPLIERS_KEY, multipliers.to_dict())

    def save_containers(self, containers: List[Container]) -> bool:
        return self.write(CONTAINERS_KEY, containers_to_records(containers))


def create_storage(directory: Optional[Union[str, Path]] = None) -> LocalStorage:
    """Factory function."""
    return LocalStorage(directory)
