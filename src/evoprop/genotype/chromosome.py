"""
Neural Chromosome Module

This module implements the chromosome used to train a feedforward network with
a genetic algorithm. The genes of the chromosome are the network's weights and
thresholds, flattened by the weight codec.

Classes:
    NeuralChromosome: A candidate solution (genes, cost, and its own network)
"""

import numpy as np
from itertools import count
from typing    import Optional, TYPE_CHECKING

from evoprop.errors   import SizeMismatchError
from evoprop.genotype import codec
from evoprop.util     import bound

if TYPE_CHECKING:
    from evoprop.phenotype import Network
    from evoprop.util      import TrainingSet

# Genes are multiplied by a random integer drawn from [-MUTATION_RANGE, MUTATION_RANGE)
MUTATION_RANGE = 20

class NeuralChromosome:
    """
    A candidate solution in the genetic algorithm's population.

    The chromosome owns a network of its own, never shared with any other
    chromosome. The genes are authoritative: the network is brought in sync
    with them (decode) whenever the cost is calculated, and the genes are
    read from the network (encode) once, at construction.

    The cost is the RMS error of the network over the training set; lower is
    better. Mutation does not recalculate the cost; set_genes() and
    calculate_cost() do.

    Public Attributes:
        ID:           Unique identifier of this chromosome
        genes:        Flattened weights and thresholds
        cost:         RMS error achieved by the genes (None until calculated)
        network:      The network these genes are decoded into
        training_set: Patterns the cost is measured against

    Public Methods:
        set_genes(genes):      Replace the genes and recalculate the cost
        calculate_cost():      Decode the genes and measure the error
        update_genes():        Read the genes from the network
        update_network():      Write the genes into the network
        mutate(rng):           Scale every gene by a random integer
        mate(father, ...):     Two-point crossover producing two offspring
    """

    _id_generator = count(0)

    def __init__(self, network: 'Network', training_set: 'TrainingSet'):
        """
        Parameters:
            network:      Network owned by this chromosome (not shared)
            training_set: Patterns used to calculate the cost
        """
        self.ID          : int             = next(NeuralChromosome._id_generator)
        self.network     : 'Network'       = network
        self.training_set: 'TrainingSet'   = training_set
        self.cost        : Optional[float] = None
        self.genes       : np.ndarray      = np.zeros(network.weight_matrix_size, dtype=np.float64)

        self.update_genes()

    @property
    def gene_count(self) -> int:
        return self.genes.size

    def set_genes(self, genes):
        """
        Replace all genes and recalculate the cost.

        Parameters:
            genes: New gene values, same length as the current genes
        """
        genes = np.array(genes, dtype=np.float64)
        if genes.shape != self.genes.shape:
            raise SizeMismatchError(
                f"Size mismatch: Can't set {genes.size} genes on a chromosome of {self.genes.size} genes")
        self.genes = genes
        self.calculate_cost()

    def calculate_cost(self):
        """
        Bring the network in sync with the genes and store its error as the cost.
        """
        self.update_network()
        self.cost = self.network.calculate_error(self.training_set.inputs, self.training_set.ideals)

    def update_genes(self):
        self.set_genes(codec.encode(self.network))

    def update_network(self):
        codec.decode(self.genes, self.network)

    def mutate(self, rng: Optional[np.random.Generator] = None):
        """
        Multiply every gene by a random integer drawn from [-20, 20).

        This is a deliberately coarse mutation: a factor of 0 erases a weight,
        a negative factor flips its sign. Repeated mutations are clamped to
        [-1e20, 1e20] so genes stay finite. The gene count never changes.
        The cost is not recalculated.
        """
        if rng is None:
            rng = np.random.default_rng()
        ratios = rng.integers(-MUTATION_RANGE, MUTATION_RANGE, size=self.genes.size)
        self.genes = bound(self.genes * ratios)

    def mate(self,
             father          : 'NeuralChromosome',
             offspring1      : 'NeuralChromosome',
             offspring2      : 'NeuralChromosome',
             cut_length      : int,
             mutation_percent: float,
             rng             : np.random.Generator):
        """
        Two-point crossover between this chromosome (the mother) and 'father'.

        A segment of 'cut_length' genes starting at a random position is
        swapped: offspring1 receives the father's genes inside the segment
        and the mother's outside of it, offspring2 the reverse. Each offspring
        is then mutated with probability 'mutation_percent' and its cost is
        recalculated. The parents are only read.

        Parameters:
            father:           The other parent
            offspring1:       Chromosome overwritten with the first child
            offspring2:       Chromosome overwritten with the second child
            cut_length:       Length of the swapped segment
            mutation_percent: Probability that each offspring is mutated
            rng:              Random generator for cut point and mutations
        """
        gene_count = self.genes.size
        if father.genes.size != gene_count:
            raise SizeMismatchError(
                f"Size mismatch: Can't mate chromosomes of {gene_count} and {father.genes.size} genes")

        # the chromosome is cut at two positions
        cut_length = min(max(cut_length, 0), gene_count)
        cutpoint1  = int(rng.random() * (gene_count - cut_length))
        cutpoint2  = cutpoint1 + cut_length

        positions = np.arange(gene_count)
        inside    = (positions >= cutpoint1) & (positions < cutpoint2)

        children = (
            (offspring1, np.where(inside, father.genes, self.genes)),
            (offspring2, np.where(inside, self.genes, father.genes))
        )
        for offspring, genes in children:
            offspring.genes = genes
            if rng.random() < mutation_percent:
                offspring.mutate(rng)
            offspring.calculate_cost()

    def __str__(self):
        cost = "n/a" if self.cost is None else f"{self.cost:.6f}"
        return f"ID={self.ID}, cost={cost}, genes={self.genes.size}"

    def __repr__(self):
        return f"NeuralChromosome(network={repr(self.network)}, cost={self.cost})"
