"""
Unit tests for NeuralChromosome.
"""

import numpy as np
import pytest
from itertools import count

from evoprop.errors              import SizeMismatchError
from evoprop.genotype            import NeuralChromosome, encode
from evoprop.genotype.chromosome import MUTATION_RANGE
from evoprop.phenotype           import Network
from evoprop.util                import TrainingSet


@pytest.fixture(autouse=True)
def reset_chromosome_id_generator():
    """Reset NeuralChromosome ID generator before each test."""
    NeuralChromosome._id_generator = count(0)
    yield
    NeuralChromosome._id_generator = count(0)


@pytest.fixture
def training_set(xor_inputs, xor_ideals):
    return TrainingSet.from_arrays(xor_inputs, xor_ideals)


@pytest.fixture
def make_chromosome(training_set):
    def _make(seed):
        network = Network.from_sizes([2, 3, 1], rng=np.random.default_rng(seed))
        return NeuralChromosome(network, training_set)
    return _make


class TestChromosomeInit:

    def test_genes_read_from_network(self, xor_network, training_set):
        chromosome = NeuralChromosome(xor_network, training_set)
        np.testing.assert_array_equal(chromosome.genes, encode(xor_network))
        assert chromosome.gene_count == 13

    def test_cost_is_network_error(self, xor_network, training_set):
        chromosome = NeuralChromosome(xor_network, training_set)
        assert chromosome.cost == pytest.approx(xor_network.calculate_error(*training_set))

    def test_ids_are_unique(self, make_chromosome):
        assert make_chromosome(1).ID != make_chromosome(2).ID


class TestSetGenes:

    def test_updates_network_and_cost(self, make_chromosome):
        chromosome = make_chromosome(1)
        chromosome.set_genes(np.zeros(13))
        assert np.all(chromosome.network.input_layer.matrix == 0.0)
        # all weights zero: every output is sigmoid(0) = 0.5
        assert chromosome.cost == pytest.approx(0.5)

    def test_wrong_length_raises(self, make_chromosome):
        with pytest.raises(SizeMismatchError):
            make_chromosome(1).set_genes(np.zeros(12))

    def test_genes_are_copied(self, make_chromosome):
        chromosome = make_chromosome(1)
        genes = np.ones(13)
        chromosome.set_genes(genes)
        genes[0] = 5.0
        assert chromosome.genes[0] == 1.0


class TestMutate:

    def test_length_unchanged(self, make_chromosome, rng):
        chromosome = make_chromosome(1)
        chromosome.mutate(rng)
        assert chromosome.gene_count == 13

    def test_genes_scaled_by_integers_in_range(self, make_chromosome):
        chromosome = make_chromosome(1)
        chromosome.set_genes(np.ones(13))
        chromosome.mutate(np.random.default_rng(5))

        genes = chromosome.genes
        np.testing.assert_array_equal(genes, np.round(genes))
        assert np.all(genes >= -MUTATION_RANGE)
        assert np.all(genes < MUTATION_RANGE)

    def test_cost_not_recalculated(self, make_chromosome, rng):
        chromosome = make_chromosome(1)
        cost = chromosome.cost
        chromosome.mutate(rng)
        assert chromosome.cost == cost

    def test_repeated_mutation_stays_finite(self, make_chromosome, rng):
        chromosome = make_chromosome(1)
        for _ in range(50):
            chromosome.mutate(rng)
        assert np.all(np.isfinite(chromosome.genes))


class TestMate:

    def test_offspring_mix_parent_genes(self, make_chromosome, rng):
        mother, father = make_chromosome(1), make_chromosome(2)
        mother.set_genes(np.zeros(13))
        father.set_genes(np.ones(13))
        child1, child2 = make_chromosome(3), make_chromosome(4)

        mother.mate(father, child1, child2, cut_length=4, mutation_percent=0.0, rng=rng)

        assert child1.genes.sum() == 4
        assert child2.genes.sum() == 9
        np.testing.assert_array_equal(child1.genes + child2.genes, np.ones(13))

    def test_swapped_segment_is_contiguous(self, make_chromosome, rng):
        mother, father = make_chromosome(1), make_chromosome(2)
        mother.set_genes(np.zeros(13))
        father.set_genes(np.ones(13))
        child1, child2 = make_chromosome(3), make_chromosome(4)

        mother.mate(father, child1, child2, cut_length=5, mutation_percent=0.0, rng=rng)

        inside = np.flatnonzero(child1.genes)
        np.testing.assert_array_equal(inside, np.arange(inside[0], inside[0] + 5))

    def test_parents_unchanged(self, make_chromosome, rng):
        mother, father = make_chromosome(1), make_chromosome(2)
        mother_genes, father_genes = mother.genes.copy(), father.genes.copy()
        mother.mate(father, make_chromosome(3), make_chromosome(4), 4, 1.0, rng)
        np.testing.assert_array_equal(mother.genes, mother_genes)
        np.testing.assert_array_equal(father.genes, father_genes)

    def test_offspring_cost_recalculated(self, make_chromosome, rng):
        mother, father = make_chromosome(1), make_chromosome(2)
        child1, child2 = make_chromosome(3), make_chromosome(4)
        mother.mate(father, child1, child2, 4, 0.5, rng)
        for child in (child1, child2):
            assert child.cost == pytest.approx(child.network.calculate_error(*child.training_set))

    def test_same_seed_same_offspring(self, make_chromosome):
        results = []
        for _ in range(2):
            mother, father = make_chromosome(1), make_chromosome(2)
            child1, child2 = make_chromosome(3), make_chromosome(4)
            mother.mate(father, child1, child2, 4, 0.5, np.random.default_rng(11))
            results.append((child1.genes, child2.genes))
        np.testing.assert_array_equal(results[0][0], results[1][0])
        np.testing.assert_array_equal(results[0][1], results[1][1])

    def test_mismatched_parents_raise(self, make_chromosome, training_set, rng):
        other = NeuralChromosome(Network.from_sizes([2, 2, 1], rng=rng), training_set)
        with pytest.raises(SizeMismatchError):
            make_chromosome(1).mate(other, make_chromosome(2), make_chromosome(3), 3, 0.0, rng)


class TestChromosomeStr:

    def test_str(self, make_chromosome):
        chromosome = make_chromosome(1)
        assert str(chromosome).startswith(f"ID={chromosome.ID}, cost=")
        assert str(chromosome).endswith("genes=13")
