"""
Feedforward Layer Module

This module implements one stage of a feedforward neural network. Layers are
linked into a chain by the Network that owns them; every layer except the
last one owns the weight and threshold matrix connecting it to the next layer.

Classes:
    FeedforwardLayer: A layer of neurons, its firing values and outgoing weights
"""

import numpy as np
from typing import Optional

from evoprop.activations import ActivationFunction, get_activation

class FeedforwardLayer:
    """
    A layer of neurons in a feedforward neural network.

    The role of a layer is derived from its position in the chain:
        input  layer: no previous layer
        output layer: no next layer
        hidden layer: both a previous and a next layer

    A layer linked to a next layer owns a matrix of shape
    (neuron_count + 1, next.neuron_count): cell [i, j] is the weight of the
    connection from neuron i of this layer to neuron j of the next layer, and
    the extra last row holds the thresholds (biases) of the next layer's neurons.

    Public Attributes:
        neuron_count: Number of neurons in the layer
        activation:   Activation applied when computing this layer's firing values
        fire:         Firing values, recomputed on every forward pass
        matrix:       Outgoing weights and thresholds (None for the output layer)
        previous:     Previous layer in the chain (None for the input layer)
        next:         Next layer in the chain (None for the output layer)

    Public Methods:
        compute_outputs(pattern): Compute the firing values of this layer
        reset(rng):               Randomize the outgoing weights and thresholds
    """

    def __init__(self, neuron_count: int, activation: 'str | ActivationFunction' = 'sigmoid'):
        """
        Parameters:
            neuron_count: Number of neurons, a positive integer
            activation:   Activation name ('linear', 'sigmoid', 'tanh') or instance
        """
        if neuron_count < 1:
            raise ValueError(f"A layer needs at least one neuron, got {neuron_count}")

        self.neuron_count: int                          = int(neuron_count)
        self.activation  : ActivationFunction           = get_activation(activation)
        self.fire        : np.ndarray                   = np.zeros(self.neuron_count, dtype=np.float64)
        self.matrix      : Optional[np.ndarray]         = None
        self.previous    : Optional['FeedforwardLayer'] = None
        self.next        : Optional['FeedforwardLayer'] = None

    @property
    def is_input(self) -> bool:
        return self.previous is None

    @property
    def is_output(self) -> bool:
        return self.next is None

    @property
    def is_hidden(self) -> bool:
        return not self.is_input and not self.is_output

    @property
    def has_matrix(self) -> bool:
        return self.matrix is not None

    @property
    def matrix_size(self) -> int:
        """Number of weights and thresholds owned by this layer."""
        return 0 if self.matrix is None else self.matrix.size

    @property
    def threshold_row(self) -> int:
        """Index of the matrix row holding the thresholds."""
        return self.neuron_count

    def link_next(self, layer: 'FeedforwardLayer', rng: np.random.Generator):
        """
        Append 'layer' after this one and create the matrix feeding it.

        Parameters:
            layer: The layer that follows this one
            rng:   Random generator used to initialize the new matrix
        """
        self.next      = layer
        layer.previous = self
        self.matrix    = np.zeros((self.neuron_count + 1, layer.neuron_count), dtype=np.float64)
        self.reset(rng)

    def reset(self, rng: Optional[np.random.Generator] = None):
        """
        Fill the matrix with random values drawn uniformly from [-1, 1).
        Does nothing for the output layer.
        """
        if self.matrix is None:
            return
        if rng is None:
            rng = np.random.default_rng()
        self.matrix[...] = rng.uniform(-1.0, 1.0, size=self.matrix.shape)

    def compute_outputs(self, pattern=None) -> np.ndarray:
        """
        Compute the firing values of this layer.

        The input layer copies 'pattern' as-is: no activation is applied to it.
        Any other layer ignores 'pattern' and combines the previous layer's
        firing values with the previous layer's matrix:

            net_j  = threshold_j + sum_i(previous.fire_i * weight_ij)
            fire_j = activation(net_j)

        Returns:
            The firing values (a buffer owned by the layer, overwritten on every call)
        """
        if self.is_input:
            self.fire[:] = pattern
        else:
            previous = self.previous
            weights  = previous.matrix
            net = previous.fire @ weights[:-1] + weights[-1]
            self.fire[:] = self.activation.apply(net)

        return self.fire

    def __str__(self):
        role = "input" if self.is_input else "output" if self.is_output else "hidden"
        return f"{role} layer: {self.neuron_count} neurons ({self.activation.name})"

    def __repr__(self):
        next_count = None if self.next is None else self.next.neuron_count
        return (f"FeedforwardLayer(neurons={self.neuron_count}, "
                f"activation={self.activation.name}, next={next_count})")
