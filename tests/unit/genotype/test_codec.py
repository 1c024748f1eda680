"""
Unit tests for the weight codec.
"""

import numpy as np
import pytest

from evoprop.errors    import SizeMismatchError
from evoprop.genotype  import encode, decode
from evoprop.phenotype import Network


class TestEncode:

    def test_length_is_weight_matrix_size(self, xor_network):
        assert encode(xor_network).shape == (xor_network.weight_matrix_size,)

    def test_layer_order_then_row_major(self, rng):
        network = Network.from_sizes([1, 2, 1], rng=rng)
        first, second = network.layers[0].matrix, network.layers[1].matrix
        expected = np.concatenate([first.ravel(), second.ravel()])
        np.testing.assert_array_equal(encode(network), expected)

    def test_threshold_row_included(self, rng):
        network = Network.from_sizes([1, 1], rng=rng)
        network.input_layer.matrix[...] = [[0.5], [-0.25]]
        np.testing.assert_array_equal(encode(network), [0.5, -0.25])

    def test_returns_a_copy(self, xor_network):
        vector = encode(xor_network)
        vector[:] = 0.0
        assert not np.all(xor_network.input_layer.matrix == 0.0)

    def test_network_without_matrices(self):
        assert encode(Network.from_sizes([3])).size == 0


class TestDecode:

    def test_round_trip_restores_outputs(self, xor_network, rng):
        vector = encode(xor_network)
        before = xor_network.compute_outputs([1.0, 0.0]).copy()

        xor_network.reset()
        decode(vector, xor_network)

        np.testing.assert_array_equal(encode(xor_network), vector)
        np.testing.assert_array_equal(xor_network.compute_outputs([1.0, 0.0]), before)

    def test_writes_in_place(self, xor_network):
        matrix = xor_network.input_layer.matrix
        decode(np.arange(13, dtype=float), xor_network)
        assert xor_network.input_layer.matrix is matrix
        np.testing.assert_array_equal(matrix.ravel(), np.arange(9))
        np.testing.assert_array_equal(xor_network.layers[1].matrix.ravel(), np.arange(9, 13))

    @pytest.mark.parametrize("length", [12, 14, 0])
    def test_wrong_length_raises(self, xor_network, length):
        with pytest.raises(SizeMismatchError):
            decode(np.zeros(length), xor_network)

    def test_wrong_length_leaves_network_untouched(self, xor_network):
        before = encode(xor_network)
        with pytest.raises(SizeMismatchError):
            decode(np.zeros(5), xor_network)
        np.testing.assert_array_equal(encode(xor_network), before)
