import numpy as np
import pytest

from chickensoup.droplets import DropletStore
from chickensoup.engine import PhysicsParams


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def still_params():
    """No Brownian drift, so motion comes only from the forces under test."""
    return PhysicsParams(drift=0.0)


@pytest.fixture
def store(rng, still_params):
    s = DropletStore(rng, still_params)
    s.width, s.height = 400.0, 400.0
    return s
