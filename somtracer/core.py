"""
Core 1D SOM implementation
"""

import time
from contextlib import nullcontext
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import numpy as np
import structlog
from tqdm import tqdm

from .callbacks import Callback
from .config import TracerConfig
from .datasets import random_weights
from .distance import squared_euclidean, nearest_node, mean_nearest_distance
from .io import save_matrix
from .observability import log_training_metrics, trace_operation
from .parallel import NodeChunkExecutor
from .visualization import TraceVisualizer

logger = structlog.get_logger(__name__)

# Alpha values this close to the floor count as having reached it
ALPHA_TOLERANCE = 1e-9


def neighborhood_window(bmu_idx: int, radius: int, n_nodes: int) -> Tuple[int, int]:
    """Half-open range of nodes updated around the best-matching unit"""
    return max(0, bmu_idx - radius), min(n_nodes, bmu_idx + radius + 1)


def _pull_towards(rows: np.ndarray, sample: np.ndarray, alpha: float) -> None:
    rows += alpha * (sample - rows)


def update_step(
    sample: np.ndarray,
    node_map: np.ndarray,
    distance_buffer: np.ndarray,
    alpha: float,
    radius: int,
    executor: Optional[NodeChunkExecutor] = None,
) -> Tuple[int, float]:
    """
    Apply the Kohonen update rule for a single sample

    Every node within ``radius`` chain positions of the best-matching unit is
    pulled towards the sample by a fraction ``alpha`` of its offset. Nodes
    outside that window are left untouched. Shapes are not checked here.

    Args:
        sample: Feature vector of shape (n_features,)
        node_map: Weights of shape (n_nodes, n_features), updated in place
        distance_buffer: Scratch array of shape (n_nodes,), overwritten
        alpha: Learning rate in (0, 1]
        radius: Number of nodes on each side of the BMU to update
        executor: Optional fork-join executor splitting work by node index

    Returns:
        Index of the best-matching unit and its squared distance to the sample
    """
    n_nodes = node_map.shape[0]

    if executor is None:
        squared_euclidean(node_map, sample, out=distance_buffer)
    else:
        executor.run(
            lambda lo, hi: squared_euclidean(
                node_map[lo:hi], sample, out=distance_buffer[lo:hi]
            ),
            0,
            n_nodes,
        )

    min_dist, bmu_idx = nearest_node(distance_buffer)
    from_node, to_node = neighborhood_window(bmu_idx, radius, n_nodes)

    if executor is None:
        _pull_towards(node_map[from_node:to_node], sample, alpha)
    else:
        executor.run(
            lambda lo, hi: _pull_towards(node_map[lo:hi], sample, alpha),
            from_node,
            to_node,
        )

    return bmu_idx, min_dist


def run_epoch(
    dataset: np.ndarray,
    node_map: np.ndarray,
    distance_buffer: np.ndarray,
    alpha: float,
    radius: int,
    executor: Optional[NodeChunkExecutor] = None,
) -> float:
    """One in-order pass over the dataset; returns the mean squared BMU distance"""
    total_error = 0.0
    for sample in dataset:
        _, min_dist = update_step(
            sample, node_map, distance_buffer, alpha, radius, executor
        )
        total_error += min_dist
    return total_error / len(dataset)


class AnnealingSchedule:
    """Learning rate and neighborhood radius of the annealing loop.

    The learning rate falls linearly by ``alpha_step`` per epoch. The radius
    drops by one on every ``radius_shrink_interval``-th epoch (counting from
    epoch 0) until it reaches ``min_radius``.
    """

    def __init__(self, config: TracerConfig):
        self.config = config
        self.epoch = 0
        self.radius = config.initial_radius

    def _alpha_at(self, epoch: int) -> float:
        return self.config.initial_alpha - epoch * self.config.alpha_step

    def _above_floor(self, alpha: float) -> bool:
        if np.isclose(alpha, self.config.alpha_min, rtol=0.0, atol=ALPHA_TOLERANCE):
            return False
        return alpha > self.config.alpha_min

    @property
    def alpha(self) -> float:
        return self._alpha_at(self.epoch)

    @property
    def running(self) -> bool:
        return self._above_floor(self.alpha)

    def remaining_epochs(self) -> int:
        count = 0
        while self._above_floor(self._alpha_at(self.epoch + count)):
            count += 1
        return count

    def advance(self) -> None:
        """Close the current epoch"""
        if (
            self.epoch % self.config.radius_shrink_interval == 0
            and self.radius > self.config.min_radius
        ):
            self.radius -= 1
            logger.debug(
                "Neighborhood radius reduced", epoch=self.epoch, radius=self.radius
            )
        self.epoch += 1


def _executor_for(config: TracerConfig):
    if config.parallel:
        return NodeChunkExecutor(config.n_workers)
    return nullcontext()


def _validate_node_map(node_map: np.ndarray) -> None:
    if not isinstance(node_map, np.ndarray):
        raise TypeError(
            f"Node map must be a numpy array, got {type(node_map).__name__}"
        )
    if not np.issubdtype(node_map.dtype, np.floating):
        raise TypeError(f"Node map must have a floating dtype, got {node_map.dtype}")
    if not node_map.flags.writeable:
        raise TypeError("Node map must be writeable")
    if node_map.ndim != 2:
        raise ValueError(f"Node map must be 2D array, got {node_map.ndim}D")
    if node_map.shape[0] == 0:
        raise ValueError("Node map is empty")


def _validate_dataset(data, n_features: int, dtype) -> np.ndarray:
    data = np.asarray(data, dtype=dtype)

    if data.ndim != 2:
        raise ValueError(f"Input data must be 2D array, got {data.ndim}D")

    if data.shape[0] == 0:
        raise ValueError("Input data is empty")

    if data.shape[1] != n_features:
        raise ValueError(f"Expected {n_features} features, got {data.shape[1]}")

    if np.any(np.isnan(data)) or np.any(np.isinf(data)):
        raise ValueError("Input data contains NaN or infinite values")

    return data


def train(
    dataset: np.ndarray,
    node_map: np.ndarray,
    alpha_min: float,
    config: Optional[TracerConfig] = None,
) -> None:
    """
    Train a node map on a dataset until the learning rate reaches ``alpha_min``

    Args:
        dataset: Samples of shape (n_samples, n_features), visited in order
        node_map: Initial weights of shape (n_nodes, n_features), updated in place
        alpha_min: Learning-rate floor in (0, 1)
        config: Optional schedule overrides; its ``alpha_min`` is replaced
    """
    _validate_node_map(node_map)
    n_nodes, n_features = node_map.shape

    if config is None:
        config = TracerConfig(
            n_nodes=n_nodes, n_features=n_features, alpha_min=alpha_min
        )
    else:
        if (config.n_nodes, config.n_features) != (n_nodes, n_features):
            raise ValueError(
                f"Config describes {config.n_nodes}x{config.n_features} nodes, "
                f"node map is {n_nodes}x{n_features}"
            )
        config = replace(config, alpha_min=alpha_min)

    dataset = _validate_dataset(dataset, n_features, node_map.dtype)

    schedule = AnnealingSchedule(config)
    distance_buffer = np.empty(n_nodes, dtype=node_map.dtype)

    with _executor_for(config) as executor:
        while schedule.running:
            run_epoch(
                dataset,
                node_map,
                distance_buffer,
                schedule.alpha,
                schedule.radius,
                executor,
            )
            schedule.advance()

    logger.debug("Annealing finished", epochs=schedule.epoch, radius=schedule.radius)


class SOMTracer:
    """
    One-dimensional Self-Organizing Map

    The nodes form a chain whose neighbours are index-adjacent. After
    training, the chain traces the shape of the data it was fitted on.
    """

    def __init__(
        self,
        config: TracerConfig,
        verbose: bool = True,
        weights: Optional[np.ndarray] = None,
    ):
        """
        Initialize the node map

        Args:
            config: TracerConfig object with all parameters
            verbose: Whether to show a training progress bar
            weights: Optional initial weights, copied; random if omitted
        """
        self.config = config
        self.verbose = verbose

        if config.seed is not None:
            self.rng = np.random.RandomState(config.seed)
        else:
            self.rng = np.random.RandomState()

        if weights is None:
            self.weights = random_weights(
                config.n_nodes,
                config.n_features,
                config.weight_bounds,
                self.rng,
                dtype=config.dtype,
            )
        else:
            self.weights = np.array(weights, dtype=config.dtype, order="C")
            expected = (config.n_nodes, config.n_features)
            if self.weights.shape != expected:
                raise ValueError(
                    f"Expected weights of shape {expected}, got {self.weights.shape}"
                )

        self.initial_weights = self.weights.copy()

        self.metadata = {
            "creation_time": datetime.now().isoformat(),
            "training_history": [],
            "total_epochs": 0,
            "total_samples_seen": 0,
            "config": config.to_dict(),
        }

        self.callbacks: List[Callback] = []

    @property
    def n_nodes(self) -> int:
        return self.config.n_nodes

    def fit(
        self, data: np.ndarray, callbacks: Optional[List[Callback]] = None
    ) -> "SOMTracer":
        """
        Run one full annealing schedule over the data

        Args:
            data: Input data of shape (n_samples, n_features)
            callbacks: List of callback objects

        Returns:
            self for method chaining
        """
        data = _validate_dataset(data, self.config.n_features, self.config.dtype)

        self.callbacks = callbacks or []
        self.initial_weights = self.weights.copy()

        for callback in self.callbacks:
            callback.on_training_begin(self)

        start_time = time.time()
        with trace_operation(
            "som_training", n_nodes=self.n_nodes, n_samples=len(data)
        ):
            epochs_completed = self._train_loop(data)
        duration = time.time() - start_time

        for callback in self.callbacks:
            callback.on_training_end(self)

        log_training_metrics(
            self.n_nodes, duration, epochs_completed, len(data) * epochs_completed
        )

        self.metadata["total_epochs"] += epochs_completed
        self.metadata["total_samples_seen"] += len(data) * epochs_completed
        self.metadata["last_training"] = datetime.now().isoformat()

        return self

    def _train_loop(self, data: np.ndarray) -> int:
        schedule = AnnealingSchedule(self.config)
        distance_buffer = np.empty(self.n_nodes, dtype=self.weights.dtype)

        iterator = range(schedule.remaining_epochs())
        if self.verbose:
            iterator = tqdm(iterator, desc="Training SOM")

        epochs_completed = 0
        with _executor_for(self.config) as executor:
            for _ in iterator:
                t = schedule.epoch
                for callback in self.callbacks:
                    callback.on_epoch_begin(t, self)

                alpha, radius = schedule.alpha, schedule.radius
                qe = run_epoch(
                    data, self.weights, distance_buffer, alpha, radius, executor
                )
                schedule.advance()

                if self.verbose:
                    iterator.set_postfix(
                        {"QE": f"{qe:.4f}", "R": radius, "α": f"{alpha:.2f}"}
                    )

                epoch_metrics = {"qe": qe}
                self.metadata["training_history"].append(
                    {
                        "epoch": t,
                        "metrics": epoch_metrics,
                        "radius": radius,
                        "alpha": alpha,
                    }
                )

                for callback in self.callbacks:
                    callback.on_epoch_end(t, self, epoch_metrics)

                epochs_completed += 1

        return epochs_completed

    def _squared_distances(self, data: np.ndarray) -> np.ndarray:
        data = _validate_dataset(data, self.config.n_features, self.config.dtype)
        diff = data[:, np.newaxis, :] - self.weights[np.newaxis, :, :]
        return np.sum(np.square(diff), axis=-1)

    def predict(self, data: np.ndarray) -> np.ndarray:
        """Find BMU indices for input data"""
        return np.argmin(self._squared_distances(data), axis=1)

    def quantization_error(self, data: np.ndarray) -> float:
        """Mean squared distance from each sample to its BMU"""
        return float(np.mean(np.min(self._squared_distances(data), axis=1)))

    def mean_nearest_distance(self, data: np.ndarray) -> float:
        """Mean distance from each node to the closest sample"""
        data = _validate_dataset(data, self.config.n_features, self.config.dtype)
        return mean_nearest_distance(self.weights, data)

    def get_weights(self) -> np.ndarray:
        """Copy of the node map in chain order"""
        return self.weights.copy()

    def save_weights(self, filepath: str, initial: bool = False) -> None:
        """Write the current (or initial) node map as CSV"""
        save_matrix(filepath, self.initial_weights if initial else self.weights)
        if self.verbose:
            print(f"Weights saved to {filepath}")

    def get_info(self) -> Dict:
        """Get comprehensive information about the SOM"""
        return {
            "config": self.config.to_dict(),
            "metadata": self.metadata,
            "n_nodes": self.n_nodes,
            "n_features": self.config.n_features,
            "total_epochs": self.metadata["total_epochs"],
            "total_samples": self.metadata["total_samples_seen"],
        }

    def plot_trace(self, data: np.ndarray, show_plot=True, save_path="som_trace.png"):
        """Plot the data with the initial and trained node chains"""
        TraceVisualizer.plot_trace(
            data,
            self.initial_weights,
            self.weights,
            show_plot=show_plot,
            save_path=save_path,
            verbose=self.verbose,
        )
        return self

    def plot_training_progress(
        self, show_plot=True, save_path="training_progress.png"
    ):
        """Plot learning rate, radius and quantization error per epoch"""
        TraceVisualizer.plot_training_progress(self, show_plot, save_path)
        return self
