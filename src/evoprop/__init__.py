"""
evoprop - Feedforward neural networks trained by backpropagation or by a genetic algorithm.

This package provides layered feedforward networks with per-layer weight and
threshold matrices, and two interchangeable ways of training them: batch
backpropagation with momentum, and a genetic algorithm that evolves the
network's flattened weights.

Main components:
- phenotype: Layers and networks, forward propagation
- genotype: Weight codec (network <-> flat vector) and the neural chromosome
- train: Training interface and backpropagation
- pool: Genetic algorithm and its mating workers
- run: Trial execution, configuration, and experiment framework
- activations: Activation functions and their derivatives
- util: RMS error, number bounding, input normalization

Example:
    >>> import numpy as np
    >>> from evoprop import Network, Backpropagation
    >>> inputs = np.array([[0, 0], [1, 0], [0, 1], [1, 1]], dtype=float)
    >>> ideals = np.array([[0], [1], [1], [0]], dtype=float)
    >>> network = Network.from_sizes([2, 3, 1], rng=np.random.default_rng(42))
    >>> trainer = Backpropagation(network, inputs, ideals, learn_rate=0.7, momentum=0.9)
    >>> for _ in range(5000):
    ...     trainer.iteration()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evoprop.errors         import NeuralNetworkError, SizeMismatchError, UnknownLayerError, UnsupportedOperationError
from evoprop.phenotype      import FeedforwardLayer, Network
from evoprop.genotype       import NeuralChromosome, encode, decode
from evoprop.train          import Train, Backpropagation
from evoprop.pool           import NeuralGeneticAlgorithm
from evoprop.run.config     import Config
from evoprop.run.trial      import Trial
from evoprop.run.experiment import Experiment

__all__ = [
    "NeuralNetworkError",
    "SizeMismatchError",
    "UnknownLayerError",
    "UnsupportedOperationError",
    "FeedforwardLayer",
    "Network",
    "NeuralChromosome",
    "encode",
    "decode",
    "Train",
    "Backpropagation",
    "NeuralGeneticAlgorithm",
    "Config",
    "Trial",
    "Experiment",
]
