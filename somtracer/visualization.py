"""
Visualization utilities for the SOM tracer
"""

import numpy as np
import os
from pathlib import Path
from typing import Optional, TYPE_CHECKING

# Set matplotlib backend to Agg (non-interactive) before importing pyplot
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

if TYPE_CHECKING:
    from .core import SOMTracer


def ensure_plots_dir(save_path: str) -> str:
    """Ensure plots directory exists and return full path"""
    if not os.path.isabs(save_path):
        plots_dir = Path("plots")
        plots_dir.mkdir(exist_ok=True)
        return str(plots_dir / save_path)
    return save_path


def _finish(save_path: Optional[str], show_plot: bool, verbose: bool, label: str):
    if save_path:
        full_path = ensure_plots_dir(save_path)
        plt.savefig(full_path, dpi=150, bbox_inches="tight")
        if verbose:
            print(f"{label} saved to {full_path}")

    if show_plot:
        plt.show()
    else:
        plt.close()


class TraceVisualizer:
    """Plots of the data cloud and the node chain fitted to it"""

    @staticmethod
    def plot_trace(
        data: np.ndarray,
        initial_weights: Optional[np.ndarray],
        weights: np.ndarray,
        show_plot: bool = True,
        save_path: Optional[str] = "som_trace.png",
        verbose: bool = False,
        title: str = "1D SOM trace",
    ):
        """
        Scatter the data and draw the node chains in index order

        Only the first two features are drawn.

        Args:
            data: Samples of shape (n_samples, n_features)
            initial_weights: Node map before training (None to skip)
            weights: Node map after training
            show_plot: Whether to display the plot
            save_path: Path to save the plot image (None to skip saving)
            verbose: Whether to report the saved path
            title: Figure title
        """
        data = np.asarray(data)
        weights = np.asarray(weights)
        if data.shape[1] < 2 or weights.shape[1] < 2:
            raise ValueError("Trace plots need at least 2 features")

        plt.figure(figsize=(8, 8))
        plt.scatter(data[:, 0], data[:, 1], s=6, c="0.6", label="data")
        if initial_weights is not None:
            plt.plot(
                initial_weights[:, 0],
                initial_weights[:, 1],
                "r.--",
                linewidth=0.8,
                alpha=0.6,
                label="initial nodes",
            )
        plt.plot(weights[:, 0], weights[:, 1], "bo-", linewidth=2, label="trained nodes")
        plt.gca().set_aspect("equal", adjustable="datalim")
        plt.title(title)
        plt.grid(True, alpha=0.3)
        plt.legend()

        _finish(save_path, show_plot, verbose, "Trace plot")

    @staticmethod
    def plot_training_progress(
        tracer: "SOMTracer",
        show_plot: bool = True,
        save_path: Optional[str] = "training_progress.png",
    ):
        """Plot quantization error, learning rate and radius per epoch"""
        history = tracer.metadata.get("training_history", [])
        if not history:
            if tracer.verbose:
                print("No training history data available")
            return

        epochs = [h["epoch"] for h in history]
        qe_values = [h["metrics"]["qe"] for h in history]
        alpha_values = [h["alpha"] for h in history]
        radius_values = [h["radius"] for h in history]

        fig, (ax1, ax2, ax3) = plt.subplots(1, 3, figsize=(15, 4))

        ax1.plot(epochs, qe_values, "b-", linewidth=2)
        ax1.set_xlabel("Epoch")
        ax1.set_ylabel("Quantization Error")
        ax1.set_title("Quantization Error")
        ax1.grid(True, alpha=0.3)

        ax2.plot(epochs, alpha_values, "g-", linewidth=2)
        ax2.set_xlabel("Epoch")
        ax2.set_ylabel("Alpha")
        ax2.set_title("Learning Rate Decay")
        ax2.grid(True, alpha=0.3)

        ax3.step(epochs, radius_values, "r-", linewidth=2, where="post")
        ax3.set_xlabel("Epoch")
        ax3.set_ylabel("Radius")
        ax3.set_title("Neighborhood Radius")
        ax3.grid(True, alpha=0.3)

        plt.tight_layout()

        _finish(save_path, show_plot, tracer.verbose, "Training progress plot")
