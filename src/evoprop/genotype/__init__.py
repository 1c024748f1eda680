"""
Genotype Package

This package provides the flat encoding of a feedforward network used by
search-based training: the weight codec, and the chromosome built on it.

Exported:
    encode, decode:   Network <=> flat weight vector
    NeuralChromosome: Genetic algorithm candidate solution
"""

from evoprop.genotype.codec      import encode, decode
from evoprop.genotype.chromosome import NeuralChromosome

__all__ = [
    'encode',
    'decode',
    'NeuralChromosome'
]
