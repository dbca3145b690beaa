"""
Priority Scoring - What-if Analysis
Compares scores under the stored weights against a multiplier scenario.
"""

import pandas as pd
from typing import List
import logging

from priority_scoring.models import Container
from priority_scoring.scoring.aggregator import aggregate
from priority_scoring.scoring.scorer import score
from priority_scoring.scoring.weights import MultiplierVector, WeightVector

logger = logging.getLogger(__name__)

SUB_ITEM_COLUMNS = [
    'container', 'sub_item', 'baseline_score', 'scenario_score',
    'delta', 'baseline_rank', 'scenario_rank', 'rank_change',
]

CONTAINER_COLUMNS = [
    'container', 'owner', 'baseline_score', 'scenario_score',
    'delta', 'baseline_rank', 'scenario_rank', 'rank_change',
]


def _add_ranks(df: pd.DataFrame) -> pd.DataFrame:
    """Rank 1 = highest score; ties share the better rank."""
    df['delta'] = df['scenario_score'] - df['baseline_score']
    df['baseline_rank'] = df['baseline_score'].rank(ascending=False, method='min').astype(int)
    df['scenario_rank'] = df['scenario_score'].rank(ascending=False, method='min').astype(int)
    # Positive = moved up the list
    df['rank_change'] = df['baseline_rank'] - df['scenario_rank']
    return df


class ScenarioAnalyzer:
    """Analyzes how what-if multipliers reorder the portfolio."""

    def compare_sub_items(
        self,
        containers: List[Container],
        weights: WeightVector,
        multipliers: MultiplierVector
    ) -> pd.DataFrame:
        """
        Baseline vs scenario score for every sub-item.

        The baseline uses ``weights`` alone; the scenario applies
        ``multipliers`` on top. ``weights`` is not modified.

        Returns:
            DataFrame with SUB_ITEM_COLUMNS, sorted by scenario score
        """
        rows = []
        for container in containers:
            for item in container.sub_items:
                rows.append({
                    'container': container.name,
                    'sub_item': item.name,
                    'baseline_score': score(item, weights),
                    'scenario_score': score(item, weights, multipliers),
                })

        if not rows:
            return pd.DataFrame(columns=SUB_ITEM_COLUMNS)

        df = _add_ranks(pd.DataFrame(rows))
        return df[SUB_ITEM_COLUMNS].sort_values(
            ['scenario_score', 'baseline_score'], ascending=False, kind='stable'
        ).reset_index(drop=True)

    def compare_containers(
        self,
        containers: List[Container],
        weights: WeightVector,
        multipliers: MultiplierVector
    ) -> pd.DataFrame:
        """
        Baseline vs scenario aggregate score for every container.

        Returns:
            DataFrame with CONTAINER_COLUMNS, sorted by scenario score
        """
        rows = []
        for container in containers:
            baseline = [score(item, weights) for item in container.sub_items]
            scenario = [score(item, weights, multipliers) for item in container.sub_items]
            rows.append({
                'container': container.name,
                'owner': container.owner or '',
                'baseline_score': aggregate(baseline, container.strategy),
                'scenario_score': aggregate(scenario, container.strategy),
            })

        if not rows:
            return pd.DataFrame(columns=CONTAINER_COLUMNS)

        df = _add_ranks(pd.DataFrame(rows))
        return df[CONTAINER_COLUMNS].sort_values(
            ['scenario_score', 'baseline_score'], ascending=False, kind='stable'
        ).reset_index(drop=True)

    def generate_insights(self, comparison: pd.DataFrame, label: str = 'sub_item') -> List[str]:
        """Human-readable notes on score and rank movements."""
        insights = []

        if comparison.empty:
            return insights

        moved = comparison[comparison['rank_change'] != 0]
        if moved.empty:
            insights.append("Scenario leaves the ranking unchanged")

        for _, row in moved.iterrows():
            direction = 'up' if row['rank_change'] > 0 else 'down'
            insights.append(
                f"{row[label]} moves {direction} from #{row['baseline_rank']} "
                f"to #{row['scenario_rank']} ({int(row['delta']):+d} points)"
            )

        biggest = comparison.loc[comparison['delta'].abs().idxmax()]
        if biggest['delta'] != 0:
            insights.append(
                f"Largest score change: {biggest[label]} ({int(biggest['delta']):+d} points)"
            )

        return insights


def compare_scenarios(
    containers: List[Container],
    weights: WeightVector,
    multipliers: MultiplierVector
) -> pd.DataFrame:
    """Per sub-item baseline vs scenario comparison."""
    return ScenarioAnalyzer().compare_sub_items(containers, weights, multipliers)


def container_shift(
    containers: List[Container],
    weights: WeightVector,
    multipliers: MultiplierVector
) -> pd.DataFrame:
    """Per container baseline vs scenario comparison."""
    return ScenarioAnalyzer().compare_containers(containers, weights, multipliers)


def create_analyzer() -> ScenarioAnalyzer:
    """Factory function."""
    return ScenarioAnalyzer()
