import numpy as np
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evoprop.genotype import NeuralChromosome

class MateWorker:
    """
    One mating task, suitable for execution on a worker pool.

    The task exclusively owns its two offspring chromosomes for its duration
    and only reads its two parents; the caller guarantees that no offspring
    of this task is touched by any other task. Randomness comes from a
    generator seeded per task, so the outcome does not depend on which
    thread runs the task or in which order tasks complete.
    """

    def __init__(self,
                 mother          : 'NeuralChromosome',
                 father          : 'NeuralChromosome',
                 child1          : 'NeuralChromosome',
                 child2          : 'NeuralChromosome',
                 cut_length      : int,
                 mutation_percent: float,
                 seed            : np.random.SeedSequence):
        self.mother           = mother
        self.father           = father
        self.child1           = child1
        self.child2           = child2
        self.cut_length       = cut_length
        self.mutation_percent = mutation_percent
        self.seed             = seed

    def __call__(self) -> None:
        rng = np.random.default_rng(self.seed)
        self.mother.mate(self.father, self.child1, self.child2,
                         self.cut_length, self.mutation_percent, rng)
        return None
