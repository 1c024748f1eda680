"""
Errors Module

Every failure raised by the library derives from NeuralNetworkError. The
subclasses also derive from the closest built-in exception, so callers may
catch either the library type or the standard one.

Classes:
    NeuralNetworkError:        Root of the library's error hierarchy
    SizeMismatchError:         A vector length does not match the structure it feeds
    UnknownLayerError:         A trainer met a layer it was not built for
    UnsupportedOperationError: An activation was asked for a derivative it lacks
"""

class NeuralNetworkError(Exception):
    """Base class for all neural network errors."""


class SizeMismatchError(NeuralNetworkError, ValueError):
    """
    Raised when an input, ideal or gene vector does not have the length
    required by the network it is applied to.
    """


class UnknownLayerError(NeuralNetworkError, LookupError):
    """
    Raised when a trainer is asked about a layer that was not part of the
    network at the time the trainer was constructed.
    """


class UnsupportedOperationError(NeuralNetworkError, NotImplementedError):
    """Raised when an activation function has no derivative."""
