"""
tests/test_backup.py

Pytest unit tests for JSON backup/restore and CSV export.
"""

from __future__ import annotations

import io
import json

import pandas as pd
import pytest

from priority_scoring.data.backup import (
    CSV_COLUMNS,
    dump_json,
    export_csv,
    load_json,
    parse_containers,
    scored_frame,
)
from priority_scoring.errors import BackupFormatError
from priority_scoring.models import Container
from priority_scoring.scoring.scorer import score


def _all_scores(containers, weights):
    return [score(item, weights) for c in containers for item in c.sub_items]


# ---------------------------------------------------------------------------
# JSON backup
# ---------------------------------------------------------------------------


class TestJsonBackup:
    def test_dump_is_array_of_records(self, portfolio) -> None:
        payload = json.loads(dump_json(portfolio))
        assert isinstance(payload, list)
        assert [r["name"] for r in payload] == ["Checkout Revamp", "Mobile Growth"]
        assert len(payload[0]["sub_items"]) == 2

    def test_round_trip_reproduces_scores(self, portfolio, weights) -> None:
        restored = load_json(dump_json(portfolio))
        assert restored == portfolio
        assert _all_scores(restored, weights) == _all_scores(portfolio, weights)

    def test_dump_writes_file(self, portfolio, tmp_path) -> None:
        path = tmp_path / "backup.json"
        text = dump_json(portfolio, path)
        assert path.read_text(encoding="utf-8") == text

    def test_browser_backup_is_accepted(self, weights) -> None:
        text = json.dumps([{
            "id": "pd-1", "name": "Checkout Revamp", "owner": "Web Core", "agg": "max",
            "epics": [{
                "id": "ep-1", "name": "Add one-click checkout",
                "revenueEUR": 250000, "opexEUR": 20000, "capexEUR": 80000, "autoROI": True,
                "roi": 2.5, "effort": 13, "risk": 3, "strategic": 4, "okr": 4,
                "timeCriticality": 3, "customerImpact": 5, "confidence": 0.7, "dependencies": 2,
            }],
        }])
        containers = load_json(text)
        assert _all_scores(containers, weights) == [74]

    def test_empty_array_is_valid(self) -> None:
        assert load_json("[]") == []

    @pytest.mark.parametrize("text", [
        "not json",
        "{\"name\": \"single object\"}",
        "42",
        "[1, 2, 3]",
        "[{\"name\": \"x\", \"sub_items\": {\"a\": 1}}]",
    ])
    def test_invalid_backups_raise(self, text) -> None:
        with pytest.raises(BackupFormatError):
            load_json(text)

    def test_parse_containers_requires_list(self) -> None:
        with pytest.raises(BackupFormatError):
            parse_containers({"name": "x"})


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------


class TestCsvExport:
    def test_header_and_quoting(self, portfolio, weights) -> None:
        text = export_csv(portfolio, weights)
        header = text.splitlines()[0]
        assert header == ",".join(f'"{c}"' for c in CSV_COLUMNS)
        assert all(line.startswith('"') for line in text.splitlines())

    def test_one_row_per_sub_item_plus_empty_containers(self, portfolio, weights) -> None:
        portfolio.append(Container(name="Empty PD", owner="Nobody"))
        df = pd.read_csv(io.StringIO(export_csv(portfolio, weights)))
        assert len(df) == 4

        empty = df[df["Container"] == "Empty PD"].iloc[0]
        assert pd.isna(empty["Sub-item"])
        assert empty["Container score"] == 0

    def test_scores_and_effective_roi(self, portfolio, weights) -> None:
        df = scored_frame(portfolio, weights)
        first = df.iloc[0]
        assert first["Container"] == "Checkout Revamp"
        assert first["Aggregation"] == "max"
        assert first["ROI (effective)"] == 2.5
        assert first["Sub-item score"] == 74
        assert first["Container score"] == 74
        assert list(df.columns) == list(CSV_COLUMNS)

    def test_export_writes_file(self, portfolio, weights, tmp_path) -> None:
        path = tmp_path / "export.csv"
        text = export_csv(portfolio, weights, path=path)
        assert path.read_text(encoding="utf-8") == text

    def test_multipliers_affect_export(self, portfolio, weights, neutral) -> None:
        baseline = scored_frame(portfolio, weights, neutral)
        scenario = scored_frame(portfolio, weights, neutral.replace("roi", 0.5))
        assert (scenario["Sub-item score"] < baseline["Sub-item score"]).all()
