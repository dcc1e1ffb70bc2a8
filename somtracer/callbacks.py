"""
Callback system for monitoring the annealing loop
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .core import SOMTracer


class Callback(ABC):
    """Abstract base class for callbacks"""

    @abstractmethod
    def on_epoch_begin(self, epoch: int, tracer: "SOMTracer") -> None:
        pass

    @abstractmethod
    def on_epoch_end(self, epoch: int, tracer: "SOMTracer", metrics: Dict) -> None:
        pass

    @abstractmethod
    def on_training_begin(self, tracer: "SOMTracer") -> None:
        pass

    @abstractmethod
    def on_training_end(self, tracer: "SOMTracer") -> None:
        pass


class SnapshotCallback(Callback):
    """Keep in-memory copies of the node map every ``interval`` epochs"""

    def __init__(self, interval: int = 10):
        if interval < 1:
            raise ValueError(f"interval must be at least 1, got {interval}")
        self.interval = interval
        self.snapshots: List[Tuple[int, np.ndarray]] = []

    def on_epoch_begin(self, epoch: int, tracer: "SOMTracer") -> None:
        pass

    def on_epoch_end(self, epoch: int, tracer: "SOMTracer", metrics: Dict) -> None:
        if epoch % self.interval == 0:
            self.snapshots.append((epoch, tracer.weights.copy()))

    def on_training_begin(self, tracer: "SOMTracer") -> None:
        self.snapshots = []

    def on_training_end(self, tracer: "SOMTracer") -> None:
        pass
