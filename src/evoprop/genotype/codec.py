"""
Weight Codec Module

Conversion between the structured weights of a Network and a flat vector of
numbers. Training algorithms that see the network as a point in a search
space (the genetic algorithm) work exclusively through this module.

Layers are visited in order; each layer owning a matrix contributes all of its
cells in row-major order, threshold row included.

Functions:
    encode(network):        Flatten all weights and thresholds into a vector
    decode(vector, network): Write a vector back into the network's matrices
"""

import numpy as np
from typing import TYPE_CHECKING

from evoprop.errors import SizeMismatchError

if TYPE_CHECKING:
    from evoprop.phenotype import Network

def encode(network: 'Network') -> np.ndarray:
    """
    Flatten the weights and thresholds of a network.

    Parameters:
        network: The network to encode

    Returns:
        New vector of length 'network.weight_matrix_size'
    """
    matrices = [layer.matrix.ravel() for layer in network.layers if layer.has_matrix]
    if not matrices:
        return np.empty(0, dtype=np.float64)
    return np.concatenate(matrices).astype(np.float64, copy=False)

def decode(vector, network: 'Network'):
    """
    Copy a flat vector into the weights and thresholds of a network.

    The network's matrices are overwritten in place.

    Parameters:
        vector:  Values to copy, in the order produced by encode()
        network: The network receiving the values
    """
    vector = np.asarray(vector, dtype=np.float64)
    expected = network.weight_matrix_size
    if vector.ndim != 1 or vector.size != expected:
        raise SizeMismatchError(
            f"Size mismatch: Can't decode vector of size={vector.size} "
            f"into network of weight matrix size={expected}")

    index = 0
    for layer in network.layers:
        if layer.has_matrix:
            size = layer.matrix_size
            layer.matrix[...] = vector[index:index + size].reshape(layer.matrix.shape)
            index += size
