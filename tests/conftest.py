"""
tests/conftest.py

Shared fixtures for the priority scoring test suite.
"""

from __future__ import annotations

import pytest

from priority_scoring.data.samples import sample_containers
from priority_scoring.data.storage import LocalStorage
from priority_scoring.models import Container, SubItem
from priority_scoring.scoring.attributes import Attribute
from priority_scoring.scoring.weights import MultiplierVector, WeightVector


@pytest.fixture()
def weights() -> WeightVector:
    """Packaged default weights."""
    return WeightVector.defaults()


@pytest.fixture()
def neutral() -> MultiplierVector:
    """All multipliers at 1.0."""
    return MultiplierVector.neutral()


@pytest.fixture()
def zero_weights() -> WeightVector:
    return WeightVector(**{a.value: 0.0 for a in Attribute})


@pytest.fixture()
def roi_only_weights(zero_weights: WeightVector) -> WeightVector:
    """Only ROI carries weight (the default 0.4)."""
    return zero_weights.replace(Attribute.ROI, 0.4)


@pytest.fixture()
def portfolio() -> list[Container]:
    return sample_containers()


@pytest.fixture()
def checkout_epic() -> SubItem:
    """'Add one-click checkout' from the sample portfolio (scores 74 by default)."""
    return sample_containers()[0].sub_items[0]


@pytest.fixture()
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "store")
