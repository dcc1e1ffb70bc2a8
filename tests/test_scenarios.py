"""
Tests for the circle and lemniscate demo scenarios
"""

import os

import pytest
import numpy as np
from somtracer import DatasetShape, run_scenario
from somtracer.io import load_matrix


@pytest.mark.slow
@pytest.mark.integration
class TestScenarios:
    """End-to-end runs of the demos"""

    @pytest.mark.slow
    @pytest.mark.integration
    def test_circle_scenario(self, tmp_path):
        result = run_scenario(DatasetShape.CIRCLE, seed=0, output_dir=str(tmp_path))

        assert result.epochs == 90
        assert result.data.shape == (500, 2)
        assert result.weights.shape == (50, 2)
        assert result.final_distance < result.initial_distance

        for name, rows in [("test1.csv", 500), ("w11.csv", 50), ("w12.csv", 50)]:
            path = os.path.join(str(tmp_path), name)
            assert load_matrix(path).shape == (rows, 2)

    @pytest.mark.slow
    @pytest.mark.integration
    def test_lemniscate_scenario(self, tmp_path):
        result = run_scenario("lemniscate", seed=0, output_dir=str(tmp_path))

        assert result.epochs == 99
        assert result.weights.shape == (20, 2)
        assert result.final_distance < result.initial_distance
        assert os.path.exists(os.path.join(str(tmp_path), "w22.csv"))

    @pytest.mark.integration
    def test_overrides_without_output(self):
        result = run_scenario(
            DatasetShape.CIRCLE, n_samples=60, n_nodes=8, alpha_min=0.8, seed=3
        )
        assert result.epochs == 20
        assert result.data.shape == (60, 2)
        assert result.initial_weights.shape == (8, 2)
        assert not np.array_equal(result.initial_weights, result.weights)

    @pytest.mark.integration
    def test_seeded_runs_repeat(self):
        a = run_scenario("circle", n_samples=40, n_nodes=8, alpha_min=0.9, seed=5)
        b = run_scenario("circle", n_samples=40, n_nodes=8, alpha_min=0.9, seed=5)
        np.testing.assert_array_equal(a.weights, b.weights)

    @pytest.mark.integration
    def test_parallel_scenario_matches(self):
        a = run_scenario("circle", n_samples=40, n_nodes=8, alpha_min=0.9, seed=5)
        b = run_scenario(
            "circle", n_samples=40, n_nodes=8, alpha_min=0.9, seed=5, parallel=True
        )
        np.testing.assert_array_equal(a.weights, b.weights)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "override, message",
        [
            ({"n_nodes": 0}, "n_nodes must be at least 1"),
            ({"alpha_min": 0.0}, "alpha_min must lie in"),
            ({"n_samples": 0}, "Input data is empty"),
        ],
    )
    def test_explicit_zero_overrides_are_rejected(self, override, message):
        with pytest.raises(ValueError, match=message):
            run_scenario("circle", seed=1, **override)
