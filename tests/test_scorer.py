"""
tests/test_scorer.py

Pytest unit tests for sub-item scoring, ROI derivation and score bands.

All tests are pure Python: no I/O beyond the packaged config files.
"""

from __future__ import annotations

import math

import pytest

from priority_scoring.models import Container, SubItem
from priority_scoring.scoring.attributes import Attribute
from priority_scoring.scoring.scorer import (
    PriorityScorer,
    compute_roi,
    create_scorer,
    score,
    score_container,
    weighted_components,
)
from priority_scoring.scoring.weights import MultiplierVector, WeightVector


@pytest.fixture()
def roi_item() -> SubItem:
    """Manual ROI 1.3 vs derived 250000 / (80000 + 20000) = 2.5."""
    return SubItem(
        name="ROI probe",
        benefit=250000,
        fixed_cost=80000,
        operating_cost=20000,
        auto_roi=False,
        roi=1.3,
    )


# ---------------------------------------------------------------------------
# ROI derivation
# ---------------------------------------------------------------------------


class TestComputeRoi:
    def test_derived_ratio(self, roi_item) -> None:
        roi_item.auto_roi = True
        assert compute_roi(roi_item) == 2.5

    def test_manual_value_when_toggle_off(self, roi_item) -> None:
        assert compute_roi(roi_item) == 1.3

    def test_denominator_floored_at_one(self) -> None:
        item = SubItem(benefit=500, fixed_cost=0, operating_cost=0, auto_roi=True)
        assert compute_roi(item) == 500.0

    def test_negative_benefit_is_zero(self) -> None:
        item = SubItem(benefit=-100, fixed_cost=10, operating_cost=0, auto_roi=True)
        assert compute_roi(item) == 0.0

    def test_non_numeric_currency(self) -> None:
        item = SubItem(benefit="lots", fixed_cost=None, operating_cost="x", auto_roi=True)
        assert compute_roi(item) == 0.0

    def test_non_numeric_manual_roi(self) -> None:
        assert compute_roi(SubItem(auto_roi=False, roi="high")) == 0.0

    def test_manual_value_ignored_when_toggle_on(self, roi_item) -> None:
        roi_item.auto_roi = True
        roi_item.roi = 99
        assert compute_roi(roi_item) == 2.5


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


class TestScore:
    def test_sample_epic_with_default_weights(self, checkout_epic, weights) -> None:
        assert score(checkout_epic, weights) == 74

    def test_manual_roi_feeds_normalizer(self, roi_item, roi_only_weights) -> None:
        # 0.4 * tanh(1.3 / 2.5) = 0.1911 -> 59.55 -> 60
        assert score(roi_item, roi_only_weights) == 60

    def test_derived_roi_feeds_normalizer(self, roi_item, roi_only_weights) -> None:
        # 0.4 * tanh(1.0) = 0.3046 -> 65.23 -> 65
        roi_item.auto_roi = True
        assert score(roi_item, roi_only_weights) == 65

    def test_zero_weights_give_midpoint(self, checkout_epic, zero_weights) -> None:
        assert score(checkout_epic, zero_weights) == 50

    def test_clamps_high_and_low(self, checkout_epic, zero_weights) -> None:
        assert score(checkout_epic, zero_weights.replace("customer_impact", 10)) == 100
        assert score(checkout_epic, zero_weights.replace("customer_impact", -10)) == 0

    def test_components_sum_to_raw(self, checkout_epic, weights) -> None:
        components = weighted_components(checkout_epic, weights)
        assert list(components) == list(Attribute)
        raw = sum(components.values())
        assert round((raw + 1) * 50) == score(checkout_epic, weights)

    def test_idempotent(self, checkout_epic, weights) -> None:
        assert score(checkout_epic, weights) == score(checkout_epic, weights)

    def test_mapping_input_with_canonical_keys(self, weights) -> None:
        record = {
            "name": "Add one-click checkout",
            "benefit": 250000, "operating_cost": 20000, "fixed_cost": 80000,
            "auto_roi": True, "roi": 2.5, "effort": 13, "risk": 3,
            "strategic": 4, "okr": 4, "time_criticality": 3, "customer_impact": 5,
            "confidence": 0.7, "dependencies": 2,
        }
        assert score(record, weights) == 74

    def test_browser_keys_are_mapped_by_the_model(self, weights) -> None:
        record = {
            "name": "Add one-click checkout",
            "revenueEUR": 250000, "opexEUR": 20000, "capexEUR": 80000,
            "autoROI": True, "roi": 2.5, "effort": 13, "risk": 3,
            "strategic": 4, "okr": 4, "timeCriticality": 3, "customerImpact": 5,
            "confidence": 0.7, "dependencies": 2,
        }
        assert score(SubItem.from_dict(record), weights) == 74
        # Raw mappings are read by canonical name only
        assert compute_roi(record) == 2.5


class TestMultipliers:
    def test_neutral_equals_omitted(self, portfolio, weights, neutral) -> None:
        for container in portfolio:
            for item in container.sub_items:
                assert score(item, weights, neutral) == score(item, weights)

    def test_apply_then_reset_is_bit_identical(self, portfolio, weights, neutral) -> None:
        before = [score(i, weights, neutral) for c in portfolio for i in c.sub_items]
        scenario = neutral.replace("roi", 0.5).replace("risk", 1.5)
        during = [score(i, weights, scenario) for c in portfolio for i in c.sub_items]
        after = [score(i, weights, MultiplierVector.defaults()) for c in portfolio for i in c.sub_items]
        assert during != before
        assert after == before
        assert weights == WeightVector.defaults()

    def test_multiplier_scales_contribution(self, checkout_epic, roi_only_weights, neutral) -> None:
        base = score(checkout_epic, roi_only_weights, neutral)
        boosted = score(checkout_epic, roi_only_weights, neutral.replace("roi", 1.5))
        assert boosted > base


class TestTotality:
    @pytest.mark.parametrize("value", [
        None, "", "abc", -1e12, 1e12, math.nan, math.inf, -math.inf, [], {"a": 1}, True,
        10 ** 400, -(10 ** 400),
    ])
    def test_any_field_value_yields_valid_score(self, weights, value) -> None:
        for field in ("benefit", "fixed_cost", "operating_cost", "auto_roi", "roi", "effort",
                      "risk", "strategic", "okr", "time_criticality", "customer_impact",
                      "confidence", "dependencies"):
            item = SubItem()
            setattr(item, field, value)
            result = score(item, weights)
            assert isinstance(result, int)
            assert 0 <= result <= 100

    def test_extreme_weights(self, checkout_epic) -> None:
        huge = WeightVector(**{a.value: 1e308 for a in Attribute})
        result = score(checkout_epic, huge, MultiplierVector.neutral().replace("roi", 1.5))
        assert isinstance(result, int)
        assert 0 <= result <= 100

    def test_object_without_fields(self, weights) -> None:
        assert 0 <= score(object(), weights) <= 100


# ---------------------------------------------------------------------------
# Container scoring & bands
# ---------------------------------------------------------------------------


class TestContainerScoring:
    def test_sample_containers(self, portfolio, weights) -> None:
        checkout, mobile = portfolio
        assert score_container(checkout, weights) == 74
        assert score_container(mobile, weights) == 71

    def test_empty_container_is_zero(self, weights) -> None:
        assert score_container(Container(name="Empty"), weights) == 0

    def test_unknown_strategy_falls_back_to_max(self, weights) -> None:
        container = Container(
            strategy="median",
            sub_items=[SubItem(customer_impact=5), SubItem(customer_impact=1)],
        )
        scores = [score(i, weights) for i in container.sub_items]
        assert score_container(container, weights) == max(scores)


class TestPriorityScorer:
    @pytest.fixture()
    def scorer(self) -> PriorityScorer:
        return create_scorer()

    @pytest.mark.parametrize("value, band", [
        (100, "very_high"),
        (80, "very_high"),
        (79, "high"),
        (60, "high"),
        (45, "medium"),
        (20, "low"),
        (19, "very_low"),
        (0, "very_low"),
    ])
    def test_score_to_band(self, scorer, value, band) -> None:
        assert scorer.score_to_band(value) == band

    def test_score_container_structure(self, scorer, portfolio, weights) -> None:
        result = scorer.score_container(portfolio[0], weights)
        assert result["name"] == "Checkout Revamp"
        assert result["strategy"] == "max"
        assert result["score"] == 74
        assert result["band"] == "high"
        assert result["band_description"]
        assert [i["score"] for i in result["sub_items"]] == [74, 74]
        assert result["sub_items"][0]["roi_effective"] == 2.5

    def test_score_all_preserves_order(self, scorer, portfolio, weights) -> None:
        names = [c["name"] for c in scorer.score_all(portfolio, weights)]
        assert names == ["Checkout Revamp", "Mobile Growth"]
