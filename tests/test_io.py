"""
Tests for matrix persistence
"""

import json

import pytest
import numpy as np
from somtracer.io import save_matrix, load_matrix


@pytest.mark.io
class TestSaveMatrix:
    """Test CSV output"""

    @pytest.mark.unit
    def test_format(self, tmp_path):
        path = tmp_path / "w.csv"
        save_matrix(str(path), np.array([[0.123456, 1.0], [-2.5, 1000000.0]]))
        assert path.read_text().splitlines() == ["0.1235,1", "-2.5,1e+06"]

    @pytest.mark.unit
    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "out" / "nested" / "w.csv"
        save_matrix(str(path), np.zeros((2, 2)))
        assert path.exists()

    @pytest.mark.unit
    def test_rejects_non_matrix(self, tmp_path):
        with pytest.raises(ValueError, match="2D"):
            save_matrix(str(tmp_path / "w.csv"), np.zeros(3))

    @pytest.mark.unit
    def test_readable_by_load_matrix(self, tmp_path):
        path = tmp_path / "w.csv"
        matrix = np.array([[0.5, -0.25], [0.125, 2.0], [3.0, 4.0]])
        save_matrix(str(path), matrix)
        np.testing.assert_array_equal(load_matrix(str(path)), matrix)


@pytest.mark.io
class TestLoadMatrix:
    """Test dataset loading"""

    @pytest.mark.unit
    def test_csv_with_header(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("x,y\n1.0,2.0\n3.0,4.0\n")
        data = load_matrix(str(path), header=True)
        assert data.shape == (2, 2)
        assert data.dtype == np.float64

    @pytest.mark.unit
    def test_csv_header_without_flag_fails(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("x,y\n1.0,2.0\n")
        with pytest.raises(ValueError, match="Failed to load"):
            load_matrix(str(path))

    @pytest.mark.unit
    def test_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]))
        assert load_matrix(str(path)).shape == (3, 2)

    @pytest.mark.unit
    def test_npy(self, tmp_path):
        path = tmp_path / "data.npy"
        np.save(path, np.ones((4, 3), dtype=np.float32))
        data = load_matrix(str(path))
        assert data.shape == (4, 3)
        assert data.dtype == np.float64

    @pytest.mark.unit
    def test_npz(self, tmp_path):
        path = tmp_path / "data.npz"
        np.savez(path, data=np.ones((2, 2)))
        assert load_matrix(str(path)).shape == (2, 2)

    @pytest.mark.unit
    def test_one_dimensional_becomes_column(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1.0, 2.0, 3.0]")
        assert load_matrix(str(path)).shape == (3, 1)

    @pytest.mark.unit
    def test_nonexistent_file(self):
        with pytest.raises(FileNotFoundError):
            load_matrix("nonexistent.csv")

    @pytest.mark.unit
    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("1,2\n")
        with pytest.raises(ValueError, match="Unsupported format"):
            load_matrix(str(path), "txt")

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{invalid json}")
        with pytest.raises(ValueError):
            load_matrix(str(path))
