"""
Pytest configuration and fixtures for SOM tracer tests
"""

import pytest
import numpy as np
from somtracer import TracerConfig, circle, random_weights


@pytest.fixture
def rng():
    """Seeded random state"""
    return np.random.RandomState(42)


@pytest.fixture
def circle_data(rng):
    """Points scattered around a circle"""
    return circle(200, rng)


@pytest.fixture
def small_data(rng):
    """Small 2D dataset for quick tests"""
    return rng.uniform(-1, 1, (30, 2))


@pytest.fixture
def node_map(rng):
    """Random chain of 10 nodes in [-1, 1]^2"""
    return random_weights(10, 2, (-1.0, 1.0), rng)


@pytest.fixture
def basic_config():
    """Configuration with a short schedule (10 epochs)"""
    return TracerConfig(n_nodes=8, n_features=2, alpha_min=0.9, seed=42)


@pytest.fixture
def minimal_config():
    """Configuration with a single epoch"""
    return TracerConfig(n_nodes=4, n_features=2, alpha_min=0.995, seed=42)
