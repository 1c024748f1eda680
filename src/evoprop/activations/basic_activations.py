import autograd.numpy as np  # type: ignore
from abc import ABC, abstractmethod

from evoprop.errors             import UnsupportedOperationError
from evoprop.util.bound_numbers import bound_exp

def linear_activation(z):
    return z

def sigmoid_activation(z):
    return 1.0 / (1.0 + bound_exp(-z))

def tanh_activation(z):
    # bounded exponential keeps the ratio finite for large |z|
    e = bound_exp(2.0 * z)
    return (e - 1.0) / (e + 1.0)


class ActivationFunction(ABC):
    """
    An activation capability: the function itself plus its derivative.

    The derivative is expressed in terms of the activation's *output*
    (the neuron's firing value), which is what backpropagation has at hand.
    Both methods accept scalars or NumPy arrays.
    """

    name: str = ""

    @abstractmethod
    def apply(self, z):
        """Activation value for net input 'z'."""
        pass

    @abstractmethod
    def derivative(self, y):
        """Derivative of the activation, given its output 'y'."""
        pass

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"


class ActivationLinear(ActivationFunction):
    """Pass-through activation, not usable where a derivative is required."""

    name = "linear"

    def apply(self, z):
        return linear_activation(z)

    def derivative(self, y):
        raise UnsupportedOperationError(
            "Can't use the linear activation function where a derivative is required.")


class ActivationSigmoid(ActivationFunction):

    name = "sigmoid"

    def apply(self, z):
        return sigmoid_activation(z)

    def derivative(self, y):
        return y * (1.0 - y)


class ActivationTANH(ActivationFunction):

    name = "tanh"

    def apply(self, z):
        return tanh_activation(z)

    def derivative(self, y):
        return 1.0 - y ** 2


activations = {
    "linear" : ActivationLinear(),
    "sigmoid": ActivationSigmoid(),
    "tanh"   : ActivationTANH()
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "linear" : "LIN",
    "sigmoid": "SIG",
    "tanh"   : "TNH"
    }

def get_activation(activation: 'str | ActivationFunction') -> ActivationFunction:
    """
    Resolve an activation given either its name or an instance.

    Parameters:
        activation: One of the names in 'activations', or an ActivationFunction

    Returns:
        The corresponding ActivationFunction
    """
    if isinstance(activation, ActivationFunction):
        return activation
    try:
        return activations[activation]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown activation function '{activation}'") from None
