import numpy as np
import pytest

from schemas import CropConditions

BASE_CONDITIONS = {
    "crop_type": "Rice",
    "location": "Punjab",
    "season": "Kharif",
    "rainfall": 1100,
    "temperature": 25,
    "humidity": 70,
    "soil_ph": 6.8,
    "area": 2,
}


class StubRng:
    """Stands in for a numpy Generator, always drawing the same point of the range."""

    def __init__(self, fraction=0.5):
        self.fraction = fraction

    def uniform(self, low, high):
        return low + (high - low) * self.fraction

    def random(self):
        return self.fraction


@pytest.fixture
def make_conditions():
    def _make(**overrides):
        return CropConditions(**{**BASE_CONDITIONS, **overrides})
    return _make


@pytest.fixture
def conditions(make_conditions):
    return make_conditions()


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def stub_rng():
    return StubRng


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from main import app

    return TestClient(app)
