"""Distance and nearest-node utilities for the SOM tracer."""

from typing import Optional, Tuple

import numpy as np
from sklearn.neighbors import KDTree


def squared_euclidean(
    node_map: np.ndarray, sample: np.ndarray, out: Optional[np.ndarray] = None
) -> np.ndarray:
    """Squared Euclidean distance from every row of ``node_map`` to ``sample``.

    The square root is skipped since only the ordering of the distances is
    used for the best-matching-unit search.
    """
    return np.sum(np.square(node_map - sample), axis=-1, out=out)


def nearest_node(distances: np.ndarray) -> Tuple[float, int]:
    """Return the minimum distance and the first index where it occurs."""
    distances = np.asarray(distances)
    if distances.size == 0:
        raise ValueError("Cannot search for the nearest node in an empty sequence")

    # argmin resolves ties to the first occurrence
    idx = int(np.argmin(distances))
    return float(distances[idx]), idx


def mean_nearest_distance(node_map: np.ndarray, dataset: np.ndarray) -> float:
    """Mean Euclidean distance from each node to its closest data point."""
    tree = KDTree(np.asarray(dataset, dtype=np.float64))
    distances, _ = tree.query(np.asarray(node_map, dtype=np.float64), k=1)
    return float(np.mean(distances))
