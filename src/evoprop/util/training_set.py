from typing import NamedTuple

import numpy as np

from evoprop.errors import SizeMismatchError

class TrainingSet(NamedTuple):
    """
    Paired input and ideal patterns, shared read-only by trainers and chromosomes.

    inputs: (num_samples, num_inputs)
    ideals: (num_samples, num_outputs)
    """
    inputs: np.ndarray
    ideals: np.ndarray

    @classmethod
    def from_arrays(cls, inputs, ideals) -> 'TrainingSet':
        """
        Build a training set from nested sequences or arrays.
        Fails if the number of input patterns differs from the number of ideal patterns.
        """
        inputs = np.atleast_2d(np.asarray(inputs, dtype=np.float64))
        ideals = np.atleast_2d(np.asarray(ideals, dtype=np.float64))
        if len(inputs) != len(ideals):
            raise SizeMismatchError(
                f"Size mismatch: {len(inputs)} input patterns for {len(ideals)} ideal patterns")
        return cls(inputs, ideals)

    @property
    def num_samples(self) -> int:
        return len(self.inputs)
