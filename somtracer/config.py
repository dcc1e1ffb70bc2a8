"""
Configuration classes and enums for the 1D SOM tracer
"""

from enum import Enum
from dataclasses import dataclass, asdict
from typing import Optional, Tuple, Dict
import numpy as np


class DatasetShape(Enum):
    """Synthetic point clouds used by the demo scenarios"""

    CIRCLE = "circle"
    LEMNISCATE = "lemniscate"


@dataclass
class TracerConfig:
    """Centralized configuration for a 1D SOM training run"""

    # Basic parameters
    n_nodes: int
    n_features: int = 2

    # Annealing schedule
    alpha_min: float = 0.1
    initial_alpha: float = 1.0
    alpha_step: float = 0.01
    initial_radius: Optional[int] = None  # n_nodes >> 2 if None
    radius_shrink_interval: int = 10
    min_radius: int = 1

    # Initialization
    weight_bounds: Tuple[float, float] = (-1.0, 1.0)
    dtype: np.dtype = np.float64

    # Data-parallel update over node chunks
    parallel: bool = False
    n_workers: Optional[int] = None

    # Reproducibility
    seed: Optional[int] = None

    def __post_init__(self):
        """Resolve the initial radius and reject unusable parameters"""
        if self.n_nodes < 1:
            raise ValueError(f"n_nodes must be at least 1, got {self.n_nodes}")
        if self.n_features < 1:
            raise ValueError(f"n_features must be at least 1, got {self.n_features}")
        if not 0 < self.alpha_min < 1:
            raise ValueError(f"alpha_min must lie in (0, 1), got {self.alpha_min}")
        if not 0 < self.initial_alpha <= 1:
            raise ValueError(
                f"initial_alpha must lie in (0, 1], got {self.initial_alpha}"
            )
        if self.alpha_step <= 0:
            raise ValueError(f"alpha_step must be positive, got {self.alpha_step}")
        if self.radius_shrink_interval < 1:
            raise ValueError(
                "radius_shrink_interval must be at least 1, "
                f"got {self.radius_shrink_interval}"
            )
        if self.min_radius < 0:
            raise ValueError(f"min_radius must be non-negative, got {self.min_radius}")

        if self.initial_radius is None:
            self.initial_radius = self.n_nodes >> 2
            if self.initial_radius < 1:
                raise ValueError(
                    f"Derived neighborhood radius is 0 for {self.n_nodes} nodes; "
                    "use at least 4 nodes or set initial_radius explicitly"
                )
        elif self.initial_radius < 0:
            raise ValueError(
                f"initial_radius must be non-negative, got {self.initial_radius}"
            )

        low, high = self.weight_bounds
        if low > high:
            raise ValueError(f"Invalid weight_bounds {self.weight_bounds}")

        if self.n_workers is not None and self.n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {self.n_workers}")

    def to_dict(self) -> Dict:
        """Convert config to dictionary for serialization"""
        config_dict = asdict(self)
        config_dict["dtype"] = np.dtype(self.dtype).name
        config_dict["weight_bounds"] = list(self.weight_bounds)
        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "TracerConfig":
        """Create config from dictionary"""
        config_dict = dict(config_dict)
        if isinstance(config_dict.get("dtype"), str):
            config_dict["dtype"] = np.dtype(config_dict["dtype"]).type
        if "weight_bounds" in config_dict:
            config_dict["weight_bounds"] = tuple(config_dict["weight_bounds"])
        return cls(**config_dict)
