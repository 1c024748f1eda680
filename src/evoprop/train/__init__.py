"""
Training Package

This package provides gradient-based training of feedforward networks.

Exported:
    Train:                Interface shared by all training algorithms
    Backpropagation:      Batch backpropagation with momentum
    BackpropagationLayer: Per-layer backpropagation state
"""

from evoprop.train.train           import Train
from evoprop.train.backpropagation import Backpropagation, BackpropagationLayer

__all__ = [
    'Train',
    'Backpropagation',
    'BackpropagationLayer'
]
