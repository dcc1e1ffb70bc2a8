"""
Demo scenarios: fit a node chain to a synthetic point cloud
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional, Union

import numpy as np
import structlog

from .config import DatasetShape, TracerConfig
from .core import SOMTracer
from .datasets import make_dataset
from .distance import mean_nearest_distance
from .io import save_matrix

logger = structlog.get_logger(__name__)


@dataclass
class ScenarioResult:
    shape: DatasetShape
    data: np.ndarray
    initial_weights: np.ndarray
    weights: np.ndarray
    epochs: int
    initial_distance: float
    final_distance: float


# Defaults of the two classic demos and the CSV names they write
SCENARIOS: Dict[DatasetShape, Dict] = {
    DatasetShape.CIRCLE: {
        "n_samples": 500,
        "n_nodes": 50,
        "alpha_min": 0.1,
        "files": ("test1.csv", "w11.csv", "w12.csv"),
    },
    DatasetShape.LEMNISCATE: {
        "n_samples": 500,
        "n_nodes": 20,
        "alpha_min": 0.01,
        "files": ("test2.csv", "w21.csv", "w22.csv"),
    },
}


def run_scenario(
    shape: Union[DatasetShape, str],
    n_samples: Optional[int] = None,
    n_nodes: Optional[int] = None,
    alpha_min: Optional[float] = None,
    seed: Optional[int] = None,
    output_dir: Optional[str] = None,
    parallel: bool = False,
    verbose: bool = False,
) -> ScenarioResult:
    """
    Generate a point cloud, train a node chain on it and optionally save CSVs

    When ``output_dir`` is given, the data, the initial weights and the
    trained weights are written there under the scenario's file names.
    """
    shape = DatasetShape(shape)
    defaults = SCENARIOS[shape]
    if n_samples is None:
        n_samples = defaults["n_samples"]
    if n_nodes is None:
        n_nodes = defaults["n_nodes"]
    if alpha_min is None:
        alpha_min = defaults["alpha_min"]

    config = TracerConfig(
        n_nodes=n_nodes,
        n_features=2,
        alpha_min=alpha_min,
        parallel=parallel,
        seed=seed,
    )
    tracer = SOMTracer(config, verbose=verbose)
    data = make_dataset(shape, n_samples, tracer.rng)

    data_file, initial_file, trained_file = defaults["files"]
    if output_dir is not None:
        save_matrix(os.path.join(output_dir, data_file), data)
        save_matrix(os.path.join(output_dir, initial_file), tracer.initial_weights)

    tracer.fit(data)

    if output_dir is not None:
        save_matrix(os.path.join(output_dir, trained_file), tracer.weights)

    result = ScenarioResult(
        shape=shape,
        data=data,
        initial_weights=tracer.initial_weights.copy(),
        weights=tracer.get_weights(),
        epochs=tracer.metadata["total_epochs"],
        initial_distance=mean_nearest_distance(tracer.initial_weights, data),
        final_distance=mean_nearest_distance(tracer.weights, data),
    )
    logger.info(
        "Scenario finished",
        shape=shape.value,
        epochs=result.epochs,
        initial_distance=result.initial_distance,
        final_distance=result.final_distance,
    )
    return result
