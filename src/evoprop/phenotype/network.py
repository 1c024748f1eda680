"""
Feedforward Network Module

This module implements a layered feedforward neural network. Layers are added
in order: the first one added is the input layer, the last one added is the
output layer, and any layer in between is a hidden layer.

Classes:
    Network: Ordered chain of FeedforwardLayer(s) with forward propagation
"""

import numpy as np
from typing import Optional

from evoprop.errors          import NeuralNetworkError, SizeMismatchError
from evoprop.genotype        import codec
from evoprop.phenotype.layer import FeedforwardLayer
from evoprop.util            import ErrorCalculation, TrainingSet


class Network:
    """
    A feedforward neural network built from a linear chain of layers.

    Public Attributes:
        layers: The layers, in topological order (input first, output last)

    Public Properties:
        input_layer:        The first layer added
        output_layer:       The last layer added
        hidden_layers:      Layers that are neither input nor output
        hidden_layer_count: Number of hidden layers
        weight_matrix_size: Total number of weights and thresholds

    Public Methods:
        add_layer(layer):              Append a layer to the chain
        compute_outputs(pattern):      Forward propagate one input pattern
        calculate_error(inputs, ideals): RMS error over a set of patterns
        calculate_neuron_count():      Total number of neurons
        clone():                       Copy of the structure and the weights
        clone_structure(rng):          Copy of the structure with fresh weights
        reset():                       Randomize all weights and thresholds
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Create an empty network.

        Parameters:
            rng: Random generator used whenever weights are (re)initialized.
                 A fresh, unseeded generator is used if None.
        """
        self.layers       : list[FeedforwardLayer]     = []
        self._input_layer : Optional[FeedforwardLayer] = None
        self._output_layer: Optional[FeedforwardLayer] = None
        self._rng         : np.random.Generator        = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_sizes(cls,
                   layer_sizes      : list[int],
                   activation       : str = 'sigmoid',
                   output_activation: Optional[str] = None,
                   rng              : Optional[np.random.Generator] = None) -> 'Network':
        """
        Build a network from a list of layer sizes.

        Parameters:
            layer_sizes:       Neuron count of each layer, input layer first
            activation:        Activation of the input and hidden layers
            output_activation: Activation of the output layer (defaults to 'activation')
            rng:               Random generator for weight initialization
        """
        if not layer_sizes:
            raise ValueError("A network needs at least one layer")

        output_activation = output_activation or activation
        network = cls(rng)
        for index, size in enumerate(layer_sizes):
            is_last = index == len(layer_sizes) - 1
            network.add_layer(FeedforwardLayer(size, output_activation if is_last else activation))
        return network

    @property
    def input_layer(self) -> Optional[FeedforwardLayer]:
        return self._input_layer

    @property
    def output_layer(self) -> Optional[FeedforwardLayer]:
        return self._output_layer

    @property
    def hidden_layers(self) -> list[FeedforwardLayer]:
        return [layer for layer in self.layers if layer.is_hidden]

    @property
    def hidden_layer_count(self) -> int:
        return max(len(self.layers) - 2, 0)

    @property
    def weight_matrix_size(self) -> int:
        """Total number of weights and thresholds across all layers."""
        return sum(layer.matrix_size for layer in self.layers)

    @property
    def layer_sizes(self) -> list[int]:
        return [layer.neuron_count for layer in self.layers]

    def add_layer(self, layer: FeedforwardLayer):
        """
        Append a layer after the current output layer.

        The new layer becomes the output layer, and the previous output
        layer gains a freshly initialized matrix feeding the new one.
        """
        if layer.previous is not None or layer.next is not None:
            raise ValueError("Layer is already part of a network")

        if self._output_layer is not None:
            self._output_layer.link_next(layer, self._rng)
        else:
            self._input_layer = layer

        self._output_layer = layer
        self.layers.append(layer)

    def compute_outputs(self, pattern) -> np.ndarray:
        """
        Forward propagate one input pattern through every layer, in order.

        Parameters:
            pattern: Input values, one per input neuron

        Returns:
            The output layer's firing values. This buffer is owned by the
            network and is overwritten by the next call.
        """
        if self._input_layer is None:
            raise NeuralNetworkError("Can't compute outputs for a network with no layers")

        pattern = np.asarray(pattern, dtype=np.float64)
        if pattern.ndim != 1 or pattern.size != self._input_layer.neuron_count:
            raise SizeMismatchError(
                f"Size mismatch: Can't compute outputs for input size={pattern.size} "
                f"for input layer size={self._input_layer.neuron_count}")

        for layer in self.layers:
            layer.compute_outputs(pattern if layer.is_input else None)

        return self._output_layer.fire

    def calculate_error(self, inputs, ideals) -> float:
        """
        Calculate the root-mean-square error of the network over a set of patterns.

        A size mismatch on any pattern aborts the whole calculation.

        Parameters:
            inputs: Input patterns  (num_samples, num_inputs)
            ideals: Ideal patterns  (num_samples, num_outputs)

        Returns:
            RMS error across all output values of all patterns
        """
        training_set = TrainingSet.from_arrays(inputs, ideals)

        error_calculation = ErrorCalculation()
        for pattern, ideal in zip(training_set.inputs, training_set.ideals):
            actual = self.compute_outputs(pattern)
            error_calculation.update_error(actual, ideal)

        return error_calculation.calculate_rms()

    def calculate_neuron_count(self) -> int:
        return sum(layer.neuron_count for layer in self.layers)

    def clone(self) -> 'Network':
        """
        Return a copy of this network, including structure, weights and thresholds.
        The copy shares no arrays with the original.
        """
        result = self.clone_structure(self._rng)
        codec.decode(codec.encode(self), result)
        return result

    def clone_structure(self, rng: Optional[np.random.Generator] = None) -> 'Network':
        """
        Return a network with the same layers and activations as this one,
        whose weights and thresholds are freshly randomized.

        Parameters:
            rng: Random generator for the new network (defaults to this network's)
        """
        result = Network(rng if rng is not None else self._rng)
        for layer in self.layers:
            result.add_layer(FeedforwardLayer(layer.neuron_count, layer.activation))
        return result

    def reset(self):
        """Randomize the weights and thresholds of every layer."""
        for layer in self.layers:
            layer.reset(self._rng)

    def __eq__(self, other):
        """
        Two networks are equal if they have the same structure and identical
        matrix values.
        """
        if not isinstance(other, Network):
            return NotImplemented

        if len(self.layers) != len(other.layers):
            return False

        for layer, other_layer in zip(self.layers, other.layers):

            if layer.neuron_count != other_layer.neuron_count:
                return False

            # either both or neither must have a matrix
            if layer.has_matrix != other_layer.has_matrix:
                return False

            if layer.has_matrix and not np.array_equal(layer.matrix, other_layer.matrix):
                return False

        return True

    __hash__ = None

    def equals(self, other: 'Network') -> bool:
        return self == other

    def __str__(self):
        return "\n".join(str(layer) for layer in self.layers)

    def __repr__(self):
        return (f"Network(layers={self.layer_sizes}, "
                f"weights={self.weight_matrix_size})")
