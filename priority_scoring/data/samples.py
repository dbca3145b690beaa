"""
Priority Scoring - Sample Portfolio
Demo deliverables loaded on first run, before anything has been saved.
"""

from typing import List

from priority_scoring.models import Container, SubItem


def sample_containers() -> List[Container]:
    """Return a fresh copy of the demo portfolio (new ids on every call)."""
    return [
        Container(
            name="Checkout Revamp",
            owner="Web Core",
            strategy="max",
            sub_items=[
                SubItem(
                    name="Add one-click checkout",
                    benefit=250000,        # annual uplift
                    fixed_cost=80000,
                    operating_cost=20000,
                    auto_roi=True,
                    roi=2.5,
                    effort=13,
                    risk=3,
                    strategic=4,
                    okr=4,
                    time_criticality=3,
                    customer_impact=5,
                    confidence=0.7,
                    dependencies=2,
                ),
                SubItem(
                    name="Fraud rules tuning",
                    benefit=80000,
                    fixed_cost=20000,
                    operating_cost=5000,
                    auto_roi=True,
                    roi=1.3,
                    effort=5,
                    risk=2,
                    strategic=3,
                    okr=3,
                    time_criticality=2,
                    customer_impact=3,
                    confidence=0.8,
                    dependencies=1,
                ),
            ],
        ),
        Container(
            name="Mobile Growth",
            owner="Apps",
            strategy="average",
            sub_items=[
                SubItem(
                    name="Push campaigns v2",
                    benefit=0,
                    fixed_cost=0,
                    operating_cost=0,
                    auto_roi=False,
                    roi=1.1,
                    effort=8,
                    risk=2,
                    strategic=4,
                    okr=3,
                    time_criticality=4,
                    customer_impact=4,
                    confidence=0.6,
                    dependencies=0,
                ),
            ],
        ),
    ]
