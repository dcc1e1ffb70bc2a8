"""
One-dimensional Kohonen Self-Organizing Map

Trains a chain of weight vectors that traces the shape of a point cloud,
annealing the learning rate and the neighborhood radius over epochs.
"""

from .core import (
    SOMTracer,
    AnnealingSchedule,
    train,
    update_step,
    run_epoch,
    neighborhood_window,
)
from .config import TracerConfig, DatasetShape
from .distance import nearest_node, squared_euclidean, mean_nearest_distance
from .callbacks import Callback, SnapshotCallback
from .datasets import uniform, random_weights, circle, lemniscate, make_dataset
from .io import save_matrix, load_matrix
from .scenarios import ScenarioResult, run_scenario
from .observability import (
    setup_logging,
    trace_operation,
    get_metrics,
    log_training_metrics,
)

__version__ = "0.1.0"

__all__ = [
    "SOMTracer",
    "AnnealingSchedule",
    "train",
    "update_step",
    "run_epoch",
    "neighborhood_window",
    "TracerConfig",
    "DatasetShape",
    "nearest_node",
    "squared_euclidean",
    "mean_nearest_distance",
    "Callback",
    "SnapshotCallback",
    "uniform",
    "random_weights",
    "circle",
    "lemniscate",
    "make_dataset",
    "save_matrix",
    "load_matrix",
    "ScenarioResult",
    "run_scenario",
    "setup_logging",
    "trace_operation",
    "get_metrics",
    "log_training_metrics",
]
