"""
Phenotype Package

This package provides the structured form of a feedforward neural network:
layers of neurons chained together, with the weight and threshold matrices
between consecutive layers.

Exported:
    FeedforwardLayer: One layer of neurons and its outgoing matrix
    Network:          Ordered chain of layers with forward propagation
"""

from evoprop.phenotype.layer   import FeedforwardLayer
from evoprop.phenotype.network import Network

__all__ = [
    'FeedforwardLayer',
    'Network'
]
