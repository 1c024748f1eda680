"""
Utilities Package

Numeric helpers used by the networks and the trainers.

Exported:
    bound, bound_exp:                  Clamping of extreme values
    ErrorCalculation:                  Root-mean-square error accumulator
    NormalizeInput, NormalizationType: Self-organizing map input normalization
    normalize_input:                   Functional wrapper around NormalizeInput
    TrainingSet:                       Paired input and ideal patterns
"""

from evoprop.util.bound_numbers     import bound, bound_exp, TOO_SMALL, TOO_BIG
from evoprop.util.error_calculation import ErrorCalculation
from evoprop.util.normalize_input   import NormalizeInput, NormalizationType, normalize_input
from evoprop.util.training_set      import TrainingSet

__all__ = [
    'bound',
    'bound_exp',
    'TOO_SMALL',
    'TOO_BIG',
    'ErrorCalculation',
    'NormalizeInput',
    'NormalizationType',
    'normalize_input',
    'TrainingSet'
]
