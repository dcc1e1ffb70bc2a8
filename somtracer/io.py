"""
Reading and writing matrices as delimited text and numpy files
"""

import json
from pathlib import Path

import numpy as np
import pandas as pd


def save_matrix(file_path: str, matrix: np.ndarray, float_format: str = "%.4g") -> None:
    """
    Write a 2D matrix as comma-separated rows without header or index

    The output is meant for plotting tools such as gnuplot, e.g.
    ``set datafile separator ','; plot "w12.csv"``.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise ValueError(f"Matrix must be 2D array, got {matrix.ndim}D")

    path = Path(file_path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(matrix).to_csv(
            path, header=False, index=False, float_format=float_format
        )
    except (IOError, OSError) as e:
        raise IOError(f"Failed to save matrix to {file_path}: {e}")


def load_matrix(file_path: str, format: str = "auto", header: bool = False) -> np.ndarray:
    """Load a 2D float matrix from csv, json, npy or npz"""
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {file_path}")

    # Auto-detect format if not specified
    if format == "auto":
        format = path.suffix.lower()

    try:
        if format in [".csv", "csv"]:
            df = pd.read_csv(file_path, header=0 if header else None)
            numeric = df.select_dtypes(include=[np.number])
            if numeric.shape[1] != df.shape[1]:
                raise ValueError("CSV contains non-numeric columns")
            data = numeric.values
        elif format in [".json", "json"]:
            with open(file_path, "r") as f:
                data = json.load(f)
        elif format in [".npy", "npy"]:
            data = np.load(file_path)
        elif format in [".npz", "npz"]:
            loaded = np.load(file_path)
            # Use first array if multiple arrays in npz
            key = list(loaded.keys())[0]
            data = loaded[key]
        else:
            raise ValueError(f"Unsupported format: {format}")
        data = np.array(data, dtype=np.float64)
    except Exception as e:
        raise ValueError(f"Failed to load data from {file_path}: {e}")

    if data.ndim == 1:
        data = data.reshape(-1, 1)
    return data
