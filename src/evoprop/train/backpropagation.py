"""
Backpropagation Module

This module implements batch backpropagation with momentum for feedforward
networks. Each iteration presents every training pattern, accumulates the
weight gradients across the whole batch, then updates all weights and
thresholds at once:

    delta   = learn_rate * accumulated_gradient + momentum * previous_delta
    weight += delta

A momentum of 0 disables momentum.

Classes:
    BackpropagationLayer: Error and gradient bookkeeping for one network layer
    Backpropagation:      The training algorithm
"""

import logging
import numpy as np
from types  import MappingProxyType
from typing import Optional, TYPE_CHECKING

from evoprop.errors      import SizeMismatchError, UnknownLayerError
from evoprop.train.train import Train
from evoprop.util        import TrainingSet, bound

if TYPE_CHECKING:
    from evoprop.phenotype import FeedforwardLayer, Network

logger = logging.getLogger(__name__)

class BackpropagationLayer:
    """
    Shadow of a FeedforwardLayer holding the state backpropagation needs.

    Public Attributes:
        error:            Per-neuron error for the current pattern
        error_delta:      Per-neuron error scaled by the activation derivative
        acc_matrix_delta: Gradients of the outgoing matrix, summed over the batch
        matrix_delta:     The update applied to the outgoing matrix last time (momentum)
    """

    def __init__(self, backpropagation: 'Backpropagation', layer: 'FeedforwardLayer'):
        self._backpropagation = backpropagation
        self._layer           = layer

        self.error      : np.ndarray = np.zeros(layer.neuron_count, dtype=np.float64)
        self.error_delta: np.ndarray = np.zeros(layer.neuron_count, dtype=np.float64)

        self.acc_matrix_delta: Optional[np.ndarray] = None
        self.matrix_delta    : Optional[np.ndarray] = None
        if layer.has_matrix:
            self.acc_matrix_delta = np.zeros_like(layer.matrix)
            self.matrix_delta     = np.zeros_like(layer.matrix)

    @property
    def layer(self) -> 'FeedforwardLayer':
        return self._layer

    def clear_error(self):
        self.error.fill(0.0)

    def calc_output_error(self, ideal: np.ndarray):
        """
        Error of the output layer against the ideal values of the current pattern.
        """
        layer = self._layer
        self.error[:]       = ideal - layer.fire
        self.error_delta[:] = bound(self.error * layer.activation.derivative(layer.fire))

    def calc_error(self):
        """
        Propagate the next layer's deltas back through this layer's matrix.

        Accumulates the gradients of the outgoing matrix (threshold row
        included, with an implicit input of 1) and, for a hidden layer,
        computes this layer's own deltas.
        """
        layer      = self._layer
        next_delta = self._backpropagation.get_backpropagation_layer(layer.next).error_delta

        self.acc_matrix_delta[:-1] += np.outer(layer.fire, next_delta)
        self.acc_matrix_delta[-1]  += next_delta
        self.error                 += layer.matrix[:-1] @ next_delta

        # the input layer has no activation to differentiate
        if layer.is_hidden:
            self.error_delta[:] = bound(self.error * layer.activation.derivative(layer.fire))

    def learn(self, learn_rate: float, momentum: float):
        """
        Apply the accumulated gradients to the outgoing matrix, then clear them.
        """
        if not self._layer.has_matrix:
            return

        self.matrix_delta = self.acc_matrix_delta * learn_rate + self.matrix_delta * momentum
        self._layer.matrix += self.matrix_delta
        self.acc_matrix_delta.fill(0.0)


class Backpropagation(Train):
    """
    Batch backpropagation trainer with learning rate and momentum.

    The trainer builds one BackpropagationLayer per network layer when it is
    constructed. That association is fixed: adding a layer to the network
    afterwards makes the next iteration fail with an UnknownLayerError.

    Training is single-threaded.

    Public Properties:
        error:   RMS error over the training set after the last iteration
        network: The network being trained

    Public Methods:
        iteration():                 One full batch: forward, backward, update
        calc_error(ideal):           Backward pass for the pattern just computed
        learn():                     Update all matrices from the accumulated gradients
        get_backpropagation_layer(): Shadow layer of a network layer
    """

    def __init__(self,
                 network   : 'Network',
                 inputs,
                 ideals,
                 learn_rate: float,
                 momentum  : float):
        """
        Parameters:
            network:    The network to train (modified in place)
            inputs:     Input patterns  (num_samples, num_inputs)
            ideals:     Ideal patterns  (num_samples, num_outputs)
            learn_rate: Degree to which the gradients modify the weights
            momentum:   Degree to which the previous update carries into the current one
        """
        self._network     : 'Network'   = network
        self._training_set: TrainingSet = TrainingSet.from_arrays(inputs, ideals)
        self._learn_rate  : float       = learn_rate
        self._momentum    : float       = momentum
        self._error       : float       = float('nan')

        layer_map = {layer: BackpropagationLayer(self, layer) for layer in network.layers}
        self._layer_map = MappingProxyType(layer_map)

        logger.info("Backpropagation trainer created: layers=%s, samples=%d, learn_rate=%g, momentum=%g",
                    network.layer_sizes, self._training_set.num_samples, learn_rate, momentum)

    @property
    def error(self) -> float:
        return self._error

    @property
    def network(self) -> 'Network':
        return self._network

    @property
    def learn_rate(self) -> float:
        return self._learn_rate

    @property
    def momentum(self) -> float:
        return self._momentum

    def get_backpropagation_layer(self, layer: 'FeedforwardLayer') -> BackpropagationLayer:
        try:
            return self._layer_map[layer]
        except KeyError:
            raise UnknownLayerError(
                "Layer unknown to backpropagation trainer, was a layer added after training began?") from None

    def calc_error(self, ideal):
        """
        Run the backward pass for the pattern most recently computed by the network.

        Parameters:
            ideal: What the output neurons should have produced
        """
        ideal = np.asarray(ideal, dtype=np.float64)
        output_layer = self._network.output_layer
        if ideal.ndim != 1 or ideal.size != output_layer.neuron_count:
            raise SizeMismatchError(
                f"Size mismatch: Can't calc_error for ideal input size={ideal.size} "
                f"for output layer size={output_layer.neuron_count}")

        layers = self._network.layers

        # clear out all previous error data
        for layer in layers:
            self.get_backpropagation_layer(layer).clear_error()

        for layer in reversed(layers):
            bp_layer = self.get_backpropagation_layer(layer)
            if layer.is_output:
                bp_layer.calc_output_error(ideal)
            else:
                bp_layer.calc_error()

    def learn(self):
        """Modify the weights and thresholds based on the accumulated gradients."""
        for layer in self._network.layers:
            self.get_backpropagation_layer(layer).learn(self._learn_rate, self._momentum)

    def iteration(self):
        """
        Perform one iteration of training over the whole training set.
        """
        inputs, ideals = self._training_set

        for pattern, ideal in zip(inputs, ideals):
            self._network.compute_outputs(pattern)
            self.calc_error(ideal)
        self.learn()

        self._error = self._network.calculate_error(inputs, ideals)
        logger.debug("Backpropagation iteration: error=%.6f", self._error)
