"""
Tests for plotting helpers
"""

from unittest.mock import patch

import pytest
import numpy as np
from somtracer import SOMTracer
from somtracer.visualization import TraceVisualizer


@pytest.mark.visualization
class TestTraceVisualizer:
    """Test trace and progress plots"""

    @pytest.mark.integration
    def test_plot_trace_saves_file(self, circle_data, tmp_path):
        weights = np.zeros((5, 2))
        path = tmp_path / "trace.png"
        TraceVisualizer.plot_trace(
            circle_data, weights + 0.5, weights, show_plot=False, save_path=str(path)
        )
        assert path.exists()

    @pytest.mark.unit
    def test_plot_trace_needs_two_features(self, tmp_path):
        with pytest.raises(ValueError, match="at least 2 features"):
            TraceVisualizer.plot_trace(
                np.zeros((5, 1)),
                None,
                np.zeros((3, 1)),
                show_plot=False,
                save_path=str(tmp_path / "x.png"),
            )

    @pytest.mark.integration
    def test_training_progress_saves_file(self, basic_config, small_data, tmp_path):
        tracer = SOMTracer(basic_config, verbose=False).fit(small_data)
        path = tmp_path / "progress.png"
        tracer.plot_training_progress(show_plot=False, save_path=str(path))
        assert path.exists()

    @pytest.mark.unit
    def test_training_progress_without_history(self, basic_config, tmp_path):
        tracer = SOMTracer(basic_config, verbose=True)
        path = tmp_path / "progress.png"
        with patch("builtins.print") as mock_print:
            tracer.plot_training_progress(show_plot=False, save_path=str(path))
            mock_print.assert_called_with("No training history data available")
        assert not path.exists()

    @pytest.mark.integration
    def test_tracer_plot_trace_chains(self, basic_config, small_data, tmp_path):
        tracer = SOMTracer(basic_config, verbose=False).fit(small_data)
        path = tmp_path / "trace.png"
        result = tracer.plot_trace(small_data, show_plot=False, save_path=str(path))
        assert result is tracer
        assert path.exists()
