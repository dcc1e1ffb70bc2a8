"""
Tests for distance and nearest-node utilities
"""

import pytest
import numpy as np
from somtracer.distance import squared_euclidean, nearest_node, mean_nearest_distance


@pytest.mark.unit
class TestSquaredEuclidean:
    """Test per-node squared distances"""

    @pytest.mark.unit
    def test_values(self):
        nodes = np.array([[0.0, 0.0], [3.0, 4.0], [1.0, 1.0]])
        distances = squared_euclidean(nodes, np.array([0.0, 0.0]))
        np.testing.assert_array_almost_equal(distances, [0.0, 25.0, 2.0])

    @pytest.mark.unit
    def test_writes_into_buffer(self):
        nodes = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        buffer = np.full(2, -1.0)

        result = squared_euclidean(nodes, np.array([1.0, 2.0, 4.0]), out=buffer)

        assert result is buffer
        np.testing.assert_array_almost_equal(buffer, [1.0, 22.0])

    @pytest.mark.unit
    def test_preserves_ordering_of_euclidean_distance(self):
        rng = np.random.RandomState(0)
        nodes = rng.uniform(-1, 1, (20, 4))
        sample = rng.uniform(-1, 1, 4)

        squared = squared_euclidean(nodes, sample)
        euclidean = np.linalg.norm(nodes - sample, axis=1)

        assert np.argmin(squared) == np.argmin(euclidean)
        np.testing.assert_array_almost_equal(np.sqrt(squared), euclidean)


@pytest.mark.unit
class TestNearestNode:
    """Test the minimum search"""

    @pytest.mark.unit
    def test_minimum_and_index(self):
        value, idx = nearest_node(np.array([3.0, 0.5, 2.0, 7.0]))
        assert value == 0.5
        assert idx == 1

    @pytest.mark.unit
    def test_ties_resolved_by_first_occurrence(self):
        value, idx = nearest_node([4.0, 1.0, 9.0, 1.0, 1.0])
        assert value == 1.0
        assert idx == 1

    @pytest.mark.unit
    def test_single_element(self):
        assert nearest_node([2.5]) == (2.5, 0)

    @pytest.mark.unit
    def test_returns_python_types(self):
        value, idx = nearest_node(np.array([2.0, 1.0], dtype=np.float32))
        assert isinstance(value, float)
        assert isinstance(idx, int)

    @pytest.mark.unit
    def test_empty_sequence(self):
        with pytest.raises(ValueError, match="empty"):
            nearest_node(np.array([]))


@pytest.mark.unit
class TestMeanNearestDistance:
    """Test the node-to-data fit metric"""

    @pytest.mark.unit
    def test_nodes_on_data_points(self):
        data = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
        assert mean_nearest_distance(data[:2], data) == pytest.approx(0.0)

    @pytest.mark.unit
    def test_known_distances(self):
        data = np.array([[0.0, 0.0], [10.0, 0.0]])
        nodes = np.array([[0.0, 1.0], [10.0, 3.0]])
        assert mean_nearest_distance(nodes, data) == pytest.approx(2.0)
