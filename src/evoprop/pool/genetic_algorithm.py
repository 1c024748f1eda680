"""
Neural Genetic Algorithm Module

This module implements a genetic algorithm that trains a feedforward network.
Each chromosome of the population carries its own clone of the network, and
its genes are that network's flattened weights and thresholds. The population
is kept sorted by cost (RMS error over the training set), best first.

Each iteration is one generation:
  - the best 'percent_to_mate' of the population act as mothers
  - each mother mates with a father drawn from the best 'mating_population'
  - the two offspring of each mating replace the worst chromosomes
  - the population is sorted again

Mating tasks are independent and may run on a pool of worker threads; the
generation waits for all of them before sorting.

Classes:
    NeuralGeneticAlgorithm: Population based training of a feedforward network
"""

import logging
import math
import numpy as np
from joblib   import Parallel, delayed
from typing   import Optional, TYPE_CHECKING

from evoprop.genotype         import NeuralChromosome
from evoprop.pool.mate_worker import MateWorker
from evoprop.train.train      import Train
from evoprop.util             import TrainingSet

if TYPE_CHECKING:
    from evoprop.phenotype import Network

logger = logging.getLogger(__name__)

class NeuralGeneticAlgorithm(Train):
    """
    Genetic algorithm training of a feedforward neural network.

    The population is partitioned on every generation so that mating tasks
    never share an offspring, and no offspring is also a parent:

        [0, count_to_mate)                   mothers
        [0, mating_pool)                     fathers (read only)
        [N - 2 * count_to_mate, N)           offspring, two per mother

    The best chromosome is never replaced, so the best cost never increases.

    Public Attributes:
        chromosomes: The population, sorted by ascending cost

    Public Properties:
        error:      Cost of the best chromosome
        network:    The best chromosome's network, in sync with its genes
        generation: Number of iterations performed

    Public Methods:
        iteration():        Produce the next generation
        sort_chromosomes(): Sort the population by ascending cost
    """

    def __init__(self,
                 network          : 'Network',
                 inputs,
                 ideals,
                 population_size  : int,
                 mutation_percent : float,
                 percent_to_mate  : float,
                 reset            : bool = True,
                 mating_population: Optional[float] = None,
                 cut_length       : Optional[int] = None,
                 num_jobs         : int = 1,
                 seed             : Optional[int] = None):
        """
        Create the initial population and sort it.

        Parameters:
            network:           Prototype network; it is cloned, never modified
            inputs:            Input patterns  (num_samples, num_inputs)
            ideals:            Ideal patterns  (num_samples, num_outputs)
            population_size:   Number of chromosomes
            mutation_percent:  Probability that an offspring is mutated
            percent_to_mate:   Fraction of the population acting as mothers
            reset:             If True, each chromosome starts from fresh random weights,
                               otherwise from a copy of the prototype's weights
            mating_population: Fraction of the population fathers are drawn from
                               (defaults to twice 'percent_to_mate')
            cut_length:        Number of genes swapped by crossover
                               (defaults to a third of the gene count)
            num_jobs:          Worker threads for mating; 1 runs the tasks inline,
                               -1 uses all available CPU cores
            seed:              Seed making the whole run reproducible
        """
        if mating_population is None:
            mating_population = 2.0 * percent_to_mate

        if population_size < 1:
            raise ValueError(f"population_size must be positive, got {population_size}")
        if not 0.0 <= mutation_percent <= 1.0:
            raise ValueError(f"mutation_percent must be in [0, 1], got {mutation_percent}")
        if not 0.0 < percent_to_mate < 1.0:
            raise ValueError(f"percent_to_mate must be in (0, 1), got {percent_to_mate}")
        if not 0.0 < mating_population <= 1.0:
            raise ValueError(f"mating_population must be in (0, 1], got {mating_population}")

        count_to_mate = int(population_size * percent_to_mate)
        if count_to_mate < 1:
            raise ValueError(
                f"Population of {population_size} is too small to mate {percent_to_mate:.0%} of it")
        if 3 * count_to_mate > population_size:
            raise ValueError(
                f"percent_to_mate={percent_to_mate} is too large: mothers would overlap offspring")

        self._training_set     : TrainingSet = TrainingSet.from_arrays(inputs, ideals)
        self._mutation_percent : float       = mutation_percent
        self._percent_to_mate  : float       = percent_to_mate
        self._mating_population: float       = mating_population
        self._count_to_mate    : int         = count_to_mate
        self._num_jobs         : int         = num_jobs
        self._generation       : int         = 0

        # every mating task gets its own seed, spawned from this sequence
        self._seed_sequence = np.random.SeedSequence(seed)
        self._rng           = np.random.default_rng(self._seed_sequence.spawn(1)[0])

        gene_count = network.weight_matrix_size
        self._cut_length: int = cut_length if cut_length is not None else max(gene_count // 3, 1)

        self.chromosomes: list[NeuralChromosome] = []
        for _ in range(population_size):
            chromosome_network = network.clone_structure(self._rng) if reset else network.clone()
            self.chromosomes.append(NeuralChromosome(chromosome_network, self._training_set))
        self.sort_chromosomes()

        logger.info("Genetic algorithm created: layers=%s, population=%d, genes=%d, best cost=%.6f",
                    network.layer_sizes, population_size, gene_count, self.error)

    @property
    def error(self) -> float:
        return self.chromosomes[0].cost

    @property
    def network(self) -> 'Network':
        return self.get_network()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population_size(self) -> int:
        return len(self.chromosomes)

    @property
    def training_set(self) -> TrainingSet:
        return self._training_set

    @property
    def cut_length(self) -> int:
        return self._cut_length

    def get_network(self) -> 'Network':
        """
        Return the best network found so far.

        The best chromosome's genes are decoded into its network first.
        """
        best = self.chromosomes[0]
        best.update_network()
        return best.network

    def sort_chromosomes(self):
        # a cost that is not a number ranks last
        self.chromosomes.sort(key=lambda chromosome: (math.isnan(chromosome.cost), chromosome.cost))

    def _create_workers(self) -> list[MateWorker]:
        """
        Pair mothers with fathers and assign two offspring slots to each pair.
        """
        population_size = len(self.chromosomes)
        offspring_index = population_size - 2 * self._count_to_mate

        # fathers never come from the offspring slots
        mating_pool = int(population_size * self._mating_population)
        mating_pool = max(1, min(mating_pool, offspring_index))

        seeds   = self._seed_sequence.spawn(self._count_to_mate)
        workers = []
        for i in range(self._count_to_mate):
            mother = self.chromosomes[i]
            father = self.chromosomes[int(self._rng.integers(mating_pool))]
            child1 = self.chromosomes[offspring_index]
            child2 = self.chromosomes[offspring_index + 1]
            workers.append(MateWorker(mother, father, child1, child2,
                                      self._cut_length, self._mutation_percent, seeds[i]))
            offspring_index += 2

        return workers

    def iteration(self):
        """
        Produce the next generation.

        All mating tasks complete before the population is sorted.
        """
        workers = self._create_workers()

        serialize = self._num_jobs == 1
        if serialize:
            for worker in workers:
                worker()
        else:
            Parallel(n_jobs=self._num_jobs, backend="threading")(delayed(worker)() for worker in workers)

        self.sort_chromosomes()
        self._generation += 1

        logger.debug("Genetic algorithm generation %d: best cost=%.6f", self._generation, self.error)

    def __str__(self):
        return '\n'.join(str(chromosome) for chromosome in self.chromosomes)
