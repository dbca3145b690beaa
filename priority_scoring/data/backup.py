"""
Priority Scoring - Backup & Export
JSON backup/restore of the full portfolio and CSV export of scored rows.
"""

import csv
import json
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from priority_scoring.errors import BackupFormatError
from priority_scoring.models import Container
from priority_scoring.scoring.scorer import PriorityScorer, create_scorer
from priority_scoring.scoring.weights import MultiplierVector, WeightVector

logger = logging.getLogger(__name__)

# Export column -> scored sub-item field
CSV_COLUMNS = {
    'Container': None,
    'Owner': None,
    'Aggregation': None,
    'Sub-item': 'name',
    'ROI (effective)': 'roi_effective',
    'Benefit': 'benefit',
    'Fixed cost': 'fixed_cost',
    'Operating cost': 'operating_cost',
    'Auto ROI': 'auto_roi',
    'Effort': 'effort',
    'Risk': 'risk',
    'Strategic': 'strategic',
    'OKR': 'okr',
    'Time criticality': 'time_criticality',
    'Customer impact': 'customer_impact',
    'Confidence': 'confidence',
    'Dependencies': 'dependencies',
    'Sub-item score': 'score',
    'Container score': None,
}


def containers_to_records(containers: List[Container]) -> List[Dict[str, Any]]:
    """Plain records for the whole portfolio, sub-items nested."""
    return [container.to_dict() for container in containers]


def dump_json(
    containers: List[Container],
    path: Optional[Union[str, Path]] = None,
    indent: int = 2
) -> str:
    """
    Serialize the portfolio as a JSON array.

    Args:
        containers: Portfolio to back up
        path: If given, the JSON is also written there

    Returns:
        The JSON text
    """
    text = json.dumps(containers_to_records(containers), indent=indent)

    if path is not None:
        Path(path).write_text(text, encoding='utf-8')
        logger.info(f"Wrote backup of {len(containers)} containers to {path}")

    return text


def parse_containers(payload: Any) -> List[Container]:
    """
    Rebuild a portfolio from decoded backup data.

    Raises:
        BackupFormatError: If ``payload`` is not a list of container records
    """
    if not isinstance(payload, list):
        raise BackupFormatError("Invalid JSON shape (expected an array)")

    return [Container.from_dict(record) for record in payload]


def load_json(text: Union[str, bytes]) -> List[Container]:
    """
    Parse a JSON backup.

    Raises:
        BackupFormatError: On invalid JSON or a malformed structure
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise BackupFormatError(f"Backup is not valid JSON: {e}") from e

    containers = parse_containers(payload)
    logger.info(f"Parsed backup with {len(containers)} containers")
    return containers


def scored_frame(
    containers: List[Container],
    weights: WeightVector,
    multipliers: Optional[MultiplierVector] = None,
    scorer: Optional[PriorityScorer] = None
) -> pd.DataFrame:
    """
    One row per sub-item, plus one row for each empty container.

    Columns are listed in CSV_COLUMNS.
    """
    scorer = scorer or create_scorer()
    rows = []

    for scored in scorer.score_all(containers, weights, multipliers):
        prefix = {
            'Container': scored['name'],
            'Owner': scored['owner'],
            'Aggregation': scored['strategy'],
        }

        if not scored['sub_items']:
            row = {column: '' for column in CSV_COLUMNS}
            row.update(prefix)
            row['Container score'] = scored['score']
            rows.append(row)
            continue

        for item in scored['sub_items']:
            row = dict(prefix)
            for column, field in CSV_COLUMNS.items():
                if field is not None:
                    row[column] = item.get(field)
            row['Container score'] = scored['score']
            rows.append(row)

    return pd.DataFrame(rows, columns=list(CSV_COLUMNS))


def export_csv(
    containers: List[Container],
    weights: WeightVector,
    multipliers: Optional[MultiplierVector] = None,
    path: Optional[Union[str, Path]] = None
) -> str:
    """
    Export scored rows as CSV with every field quoted.

    Returns:
        The CSV text (also written to ``path`` if given)
    """
    df = scored_frame(containers, weights, multipliers)
    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator='\n')

    if path is not None:
        Path(path).write_text(text, encoding='utf-8')
        logger.info(f"Exported {len(df)} rows to {path}")

    return text
