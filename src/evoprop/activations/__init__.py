"""
Activations Package

This package provides the activation functions used by feedforward layers.

Exported:
    ActivationFunction: Abstract activation capability {apply, derivative}
    ActivationLinear, ActivationSigmoid, ActivationTANH: Concrete activations
    activations:        Dictionary mapping activation names to shared instances
    activation_codes:   Dictionary mapping activation names to 3-letter identifiers
    get_activation:     Resolve an activation from its name or an instance
    Individual activation functions: linear_activation, sigmoid_activation, tanh_activation
"""

from evoprop.activations.basic_activations import (
    ActivationFunction,
    ActivationLinear,
    ActivationSigmoid,
    ActivationTANH,
    activations,
    activation_codes,
    get_activation,
    linear_activation,
    sigmoid_activation,
    tanh_activation
)

__all__ = [
    'ActivationFunction',
    'ActivationLinear',
    'ActivationSigmoid',
    'ActivationTANH',
    'activations',
    'activation_codes',
    'get_activation',
    'linear_activation',
    'sigmoid_activation',
    'tanh_activation'
]
