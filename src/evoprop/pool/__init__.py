"""
Pool Package

This package provides population based training of feedforward networks.

Exported:
    NeuralGeneticAlgorithm: Genetic algorithm over flattened network weights
    MateWorker:             One mating task, runnable on a worker pool
"""

from evoprop.pool.mate_worker       import MateWorker
from evoprop.pool.genetic_algorithm import NeuralGeneticAlgorithm

__all__ = [
    'NeuralGeneticAlgorithm',
    'MateWorker'
]
