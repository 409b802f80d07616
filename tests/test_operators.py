"""
Tests for selection, crossover, mutation and survivor operators.

Run with: python -m pytest tests/test_operators.py -v
"""

import pytest
import numpy as np

from galab.evolution.individual import Individual
from galab.evolution.operators import (
    bit_flip_mutation,
    flip_random_bits,
    half_uniform_crossover,
    incest_preventing_crossover,
    one_point_crossover,
    proportional_selection,
    select_random_pairs,
    select_survivors,
)
from galab.functions import Sphere


@pytest.fixture
def sphere_pair(rng):
    f = Sphere()
    return Individual.random(16, 3, f, rng), Individual.random(16, 3, f, rng)


class TestProportionalSelection:
    """Tests for roulette-wheel selection."""

    def test_indices_distinct_unless_last(self, rng):
        fitness = [1.0, 2.0, 3.0, 4.0, 5.0]
        for _ in range(500):
            i, j = proportional_selection(fitness, rng)
            assert 0 <= i < 5 and 0 <= j < 5
            assert i != j or i == len(fitness) - 1

    def test_zero_fitness_slots_are_skipped(self, rng):
        # Only slot 2 has mass; the second parent moves on to the next index.
        for _ in range(100):
            assert proportional_selection([0.0, 0.0, 10.0, 0.0], rng) == (2, 3)

    def test_falls_back_to_last_index(self, rng):
        for _ in range(50):
            assert proportional_selection([0.0, 0.0, 0.0, 10.0], rng) == (3, 3)

    def test_frequency_follows_fitness(self):
        rng = np.random.default_rng(99)
        draws = [proportional_selection([1.0, 3.0], rng)[0] for _ in range(4000)]
        assert np.mean(draws) == pytest.approx(0.75, abs=0.03)


class TestRandomPairs:
    """Tests for CHC parent shuffling."""

    def test_is_a_permutation(self, rng, make_valued):
        population = [make_valued(v) for v in range(8)]
        shuffled = select_random_pairs(population, rng)
        assert len(shuffled) == 8
        assert sorted(id(ind) for ind in shuffled) == sorted(id(ind) for ind in population)


class TestOnePointCrossover:
    """Tests for single-point crossover."""

    def test_children_swap_tails(self, make_individual, rng):
        zeros = make_individual('00000000', evaluate=False)
        ones = make_individual('11111111', evaluate=False)
        for _ in range(20):
            c1, c2 = one_point_crossover(zeros, ones, rng)
            s1, s2 = str(c1.chromosome), str(c2.chromosome)
            cut = s1.find('1')
            assert cut != -1
            assert s1 == '0' * cut + '1' * (8 - cut)
            assert s2 == '1' * cut + '0' * (8 - cut)

    def test_parents_unchanged(self, sphere_pair, rng):
        p1, p2 = sphere_pair
        before = (str(p1.chromosome), str(p2.chromosome))
        one_point_crossover(p1, p2, rng)
        assert (str(p1.chromosome), str(p2.chromosome)) == before

    def test_bits_are_conserved(self, sphere_pair, rng):
        p1, p2 = sphere_pair
        c1, c2 = one_point_crossover(p1, p2, rng)
        for i in range(len(p1)):
            assert {c1.get_value(i), c2.get_value(i)} == {p1.get_value(i), p2.get_value(i)}


class TestHalfUniformCrossover:
    """Tests for HUX."""

    def test_children_move_half_the_distance(self, sphere_pair, rng):
        p1, p2 = sphere_pair
        distance = p1.chromosome.hamming_distance(p2.chromosome)
        c1, c2 = half_uniform_crossover(p1, p2, rng)
        assert c1.chromosome.hamming_distance(p1.chromosome) == distance // 2
        assert c2.chromosome.hamming_distance(p2.chromosome) == distance // 2

    def test_only_differing_bits_change(self, sphere_pair, rng):
        p1, p2 = sphere_pair
        c1, c2 = half_uniform_crossover(p1, p2, rng)
        for i in range(len(p1)):
            if p1.get_value(i) == p2.get_value(i):
                assert c1.get_value(i) == c2.get_value(i) == p1.get_value(i)
            else:
                assert c1.get_value(i) != c2.get_value(i)

    def test_odd_distance_rounds_down(self, make_individual, rng):
        c1, c2 = half_uniform_crossover(
            make_individual('0000', evaluate=False),
            make_individual('0111', evaluate=False),
            rng,
        )
        assert str(c1.chromosome).count('1') == 1
        assert str(c2.chromosome).count('1') == 2


class TestIncestPrevention:
    """Tests for threshold-gated HUX."""

    def test_similar_pairs_pass_through(self, make_valued, rng):
        pool = [make_valued(v) for v in (1, 3, 8, 12)]
        children = incest_preventing_crossover(pool, threshold=10.0, rng=rng)
        assert [str(c.chromosome) for c in children] == [str(p.chromosome) for p in pool]
        assert all(c is not p for c, p in zip(children, pool))
        assert all(c.is_evaluated() for c in children)

    def test_distant_pairs_recombine(self, make_individual, rng):
        pool = [make_individual('0000'), make_individual('1111')]
        children = incest_preventing_crossover(pool, threshold=1.0, rng=rng)
        # distance 4, half is 2 > 1
        assert children[0].chromosome.hamming_distance(pool[0].chromosome) == 2
        assert not children[0].is_evaluated()

    def test_threshold_is_strict(self, make_individual, rng):
        pool = [make_individual('0000'), make_individual('0011')]
        # distance 2, half is 1, not > 1
        children = incest_preventing_crossover(pool, threshold=1.0, rng=rng)
        assert str(children[0].chromosome) == '0000'
        assert str(children[1].chromosome) == '0011'

    def test_odd_pool_passes_last_through(self, make_valued, rng):
        pool = [make_valued(v) for v in (0, 15, 6)]
        children = incest_preventing_crossover(pool, threshold=-1.0, rng=rng)
        assert len(children) == 3
        assert str(children[2].chromosome) == str(pool[2].chromosome)


class TestSurvivorSelection:
    """Tests for the elitist parent + child merge."""

    def test_takes_top_of_union(self, make_valued):
        parents = [make_valued(v) for v in (14, 10, 12)]   # fitness 1, 5, 3
        children = [make_valued(v) for v in (11, 13, 9)]   # fitness 4, 2, 6
        survivors = select_survivors(parents, children, 3)
        assert [s.fitness for s in survivors] == pytest.approx([6.0, 5.0, 4.0])

    def test_ties_go_to_child(self, make_valued):
        parent = make_valued(5)
        child = make_valued(5)
        survivors = select_survivors([parent], [child], 1)
        assert survivors[0] is child

    def test_handles_exhausted_front(self, make_valued):
        parents = [make_valued(v) for v in (0, 1)]
        children = [make_valued(v) for v in (14, 15)]
        survivors = select_survivors(parents, children, 3)
        assert [s.value for s in survivors] == pytest.approx([0.0, 1.0, 14.0])

    def test_elitism_invariant(self, rng):
        f = Sphere()
        for _ in range(20):
            parents = [Individual.random(8, 3, f, rng) for _ in range(10)]
            children = [Individual.random(8, 3, f, rng) for _ in range(10)]
            for ind in parents + children:
                ind.evaluate()
            survivors = select_survivors(parents, children, 10)
            chosen = {id(s) for s in survivors}
            eliminated = [i for i in parents + children if id(i) not in chosen]
            assert len(survivors) == 10
            assert min(s.fitness for s in survivors) >= max(e.fitness for e in eliminated)


class TestMutation:
    """Tests for bit-flip operators."""

    def test_zero_rate_changes_nothing(self, sphere_pair, rng):
        ind = sphere_pair[0]
        ind.evaluate()
        before = str(ind.chromosome)
        assert bit_flip_mutation(ind, 0.0, rng) == 0
        assert str(ind.chromosome) == before
        assert ind.is_evaluated()

    def test_full_rate_flips_everything(self, make_individual, rng):
        ind = make_individual('0101')
        assert bit_flip_mutation(ind, 1.0, rng) == 4
        assert str(ind.chromosome) == '1010'
        assert not ind.is_evaluated()

    def test_rate_is_respected(self):
        rng = np.random.default_rng(4)
        ind = Individual.random(32, 3, Sphere(), rng)
        flips = [bit_flip_mutation(ind, 0.1, rng) for _ in range(500)]
        assert np.mean(flips) == pytest.approx(9.6, abs=0.5)

    @pytest.mark.parametrize('n_flips', [0, 1, 5, 48])
    def test_flip_random_bits_distinct(self, sphere_pair, rng, n_flips):
        ind = sphere_pair[0]
        original = ind.chromosome.copy()
        positions = flip_random_bits(ind, n_flips, rng)
        assert len(set(positions)) == n_flips
        assert ind.chromosome.hamming_distance(original) == n_flips
