"""
Input Normalization Module

Normalizes an input pattern for presentation to a self-organizing map. The
pattern gains one synthetic dimension, and a scale factor is produced that
the map applies to its outputs.

Classes:
    NormalizationType: Normalization strategy
    NormalizeInput:    Normalization factors and augmented input for one pattern
"""

from enum import Enum

import numpy as np

# Input vectors are never considered shorter than this
VERY_SMALL = 1.0e-30

class NormalizationType(Enum):
    Z_AXIS         = "z_axis"
    MULTIPLICATIVE = "multiplicative"


class NormalizeInput:
    """
    Normalization of a single input pattern.

    Public Attributes:
        normfac:      Scale factor to apply to the map outputs
        synth:        Value of the synthetic extra dimension
        input_matrix: 1 x (n+1) matrix, the raw pattern followed by 'synth'
    """

    def __init__(self, pattern, normalization: NormalizationType):
        """
        Parameters:
            pattern:       The raw input vector
            normalization: Z_AXIS or MULTIPLICATIVE
        """
        pattern = np.asarray(pattern, dtype=np.float64).ravel()

        self.normalization: NormalizationType = normalization
        self.normfac      : float             = 0.0
        self.synth        : float             = 0.0

        self._calculate_factors(pattern)
        self.input_matrix = self._create_input_matrix(pattern, self.synth)

    def _calculate_factors(self, pattern: np.ndarray):
        length = max(float(np.linalg.norm(pattern)), VERY_SMALL)
        num_inputs = pattern.size

        if self.normalization is NormalizationType.MULTIPLICATIVE:
            self.normfac = 1.0 / length
            self.synth   = 0.0
        elif self.normalization is NormalizationType.Z_AXIS:
            self.normfac = 1.0 / np.sqrt(num_inputs)
            d = num_inputs - length ** 2
            self.synth = float(np.sqrt(d) * self.normfac) if d > 0.0 else 0.0
        else:
            raise ValueError(f"Unknown normalization type: {self.normalization}")

    @staticmethod
    def _create_input_matrix(pattern: np.ndarray, extra: float) -> np.ndarray:
        result = np.empty((1, pattern.size + 1), dtype=np.float64)
        result[0, :-1] = pattern
        result[0, -1]  = extra
        return result


def normalize_input(pattern, normalization: NormalizationType) -> tuple[np.ndarray, float]:
    """
    Convenience wrapper around NormalizeInput.

    Returns:
        Tuple (augmented vector of length n+1, scale factor)
    """
    normalized = NormalizeInput(pattern, normalization)
    return normalized.input_matrix[0], normalized.normfac
