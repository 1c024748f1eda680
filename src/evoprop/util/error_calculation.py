"""
Error Calculation Module

Root-mean-square error accumulated across a whole batch of samples.

Classes:
    ErrorCalculation: Stateful RMS accumulator
"""

import numpy as np

from evoprop.errors import SizeMismatchError

class ErrorCalculation:
    """
    Accumulates squared differences between actual and ideal vectors and
    reports their root mean square.

    An instance is meant to be used by a single thread for a single batch;
    call reset() before reusing it for another batch.

    Public Methods:
        update_error(actual, ideal): Fold one sample into the accumulators
        calculate_rms():             Root mean square of everything folded so far
        reset():                     Zero the accumulators
    """

    def __init__(self):
        self._global_error: float = 0.0
        self._set_size    : int   = 0

    def update_error(self, actual, ideal):
        """
        Accumulate the squared differences of one sample.

        Parameters:
            actual: Values produced by the network
            ideal:  Values the network should have produced
        """
        actual = np.asarray(actual, dtype=np.float64)
        ideal  = np.asarray(ideal,  dtype=np.float64)
        if actual.shape != ideal.shape:
            raise SizeMismatchError(
                f"Size mismatch: actual size={actual.size} does not match ideal size={ideal.size}")

        delta = ideal - actual
        self._global_error += float(np.dot(delta, delta))
        self._set_size     += ideal.size

    def calculate_rms(self) -> float:
        """
        Returns:
            The root mean square error, 0.0 if nothing has been accumulated
        """
        if self._set_size == 0:
            return 0.0
        return float(np.sqrt(self._global_error / self._set_size))

    def reset(self):
        self._global_error = 0.0
        self._set_size     = 0
