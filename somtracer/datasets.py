"""
Synthetic point clouds and weight initialisation for the SOM tracer

Every generator takes an explicit ``numpy.random.RandomState`` so runs are
reproducible without touching global random state.
"""

from typing import Tuple, Union

import numpy as np

from .config import DatasetShape


def uniform(
    rng: np.random.RandomState,
    low: float,
    high: float,
    size: Union[int, Tuple[int, ...], None] = None,
) -> Union[float, np.ndarray]:
    """Uniform random value(s) between ``low`` and ``high``"""
    if low > high:
        raise ValueError(f"Invalid interval [{low}, {high}]")
    return rng.uniform(low, high, size)


def random_weights(
    n_nodes: int,
    n_features: int,
    bounds: Tuple[float, float] = (-1.0, 1.0),
    rng: np.random.RandomState = None,
    dtype=np.float64,
) -> np.ndarray:
    """Node map with independent uniform weights inside ``bounds``"""
    if rng is None:
        rng = np.random.RandomState()
    weights = uniform(rng, bounds[0], bounds[1], (n_nodes, n_features))
    return np.ascontiguousarray(weights, dtype=dtype)


def circle(
    n_samples: int,
    rng: np.random.RandomState,
    radius: float = 0.75,
    spread: float = 0.3,
) -> np.ndarray:
    """
    Points scattered around the circumference of a circle

    Args:
        n_samples: Number of points
        rng: Random state
        radius: Radius of the circle
        spread: Maximum radial offset from the circumference

    Returns:
        Array of shape (n_samples, 2)
    """
    r = uniform(rng, radius - spread, radius + spread, n_samples)
    theta = uniform(rng, 0.0, 2.0 * np.pi, n_samples)
    return np.column_stack((r * np.cos(theta), r * np.sin(theta)))


def lemniscate(
    n_samples: int, rng: np.random.RandomState, spread: float = 0.2
) -> np.ndarray:
    """
    Points scattered around the lemniscate of Gerono

    The curve is traced as ``(cos t, sin(2t) / 2)`` for ``t`` in ``[0, pi]``
    with both coordinates jittered by up to ``spread``.
    """
    dx = uniform(rng, -spread, spread, n_samples)
    dy = uniform(rng, -spread, spread, n_samples)
    theta = uniform(rng, 0.0, np.pi, n_samples)
    return np.column_stack((dx + np.cos(theta), dy + np.sin(2.0 * theta) / 2.0))


def make_dataset(
    shape: Union[DatasetShape, str], n_samples: int, rng: np.random.RandomState
) -> np.ndarray:
    """Generate one of the demo point clouds by name"""
    shape = DatasetShape(shape)
    generators = {
        DatasetShape.CIRCLE: circle,
        DatasetShape.LEMNISCATE: lemniscate,
    }
    return generators[shape](n_samples, rng)
