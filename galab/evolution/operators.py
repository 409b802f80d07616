"""
Evolutionary operators: selection, crossover, mutation and survivor selection.

These operators drive the search by:
- Selecting parents in proportion to fitness (SimpleGA)
- Recombining bitstrings by one-point crossover (SimpleGA) or
  half-uniform crossover with incest prevention (CHC)
- Flipping bits independently (SimpleGA) or en masse on restart (CHC)
- Merging parents and children elitistically (CHC)

All randomness comes from the numpy Generator passed in by the caller.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .individual import Individual


# =============================================================================
# Selection Operators
# =============================================================================

def proportional_selection(
    fitness: Sequence[float],
    rng: np.random.Generator,
) -> Tuple[int, int]:
    """
    Roulette-wheel selection of two parent indices.

    Each parent is found by drawing r uniformly in [0, sum(fitness)) and
    taking the first index whose cumulative fitness reaches r. The second
    parent skips the first parent's index; if no other index qualifies it
    falls back to the last index.

    Args:
        fitness: Non-negative fitness per population slot
        rng: Random number generator

    Returns:
        (parent1_index, parent2_index)
    """
    cumulative = np.cumsum(np.asarray(fitness, dtype=float))
    n = len(cumulative)
    total = cumulative[-1]

    first = _spin(cumulative, rng.random() * total)

    second = _spin(cumulative, rng.random() * total)
    if second == first:
        # Cumulative sums are non-decreasing, so the next index also qualifies.
        second = second + 1 if second + 1 < n else n - 1

    return first, second


def _spin(cumulative: np.ndarray, target: float) -> int:
    index = int(np.searchsorted(cumulative, target, side='left'))
    return min(index, len(cumulative) - 1)


def select_random_pairs(
    population: Sequence[Individual],
    rng: np.random.Generator,
) -> List[Individual]:
    """
    Shuffled copy of the population (sampling without replacement).

    Adjacent elements form the mating pairs.
    """
    order = rng.permutation(len(population))
    return [population[i] for i in order]


def select_survivors(
    parents: Sequence[Individual],
    children: Sequence[Individual],
    n_survivors: int,
) -> List[Individual]:
    """
    Elitist merge of parents and children.

    Both pools are sorted by descending fitness and merged front to front
    until n_survivors are taken, i.e. the top n_survivors of the union.
    On equal fitness the child is taken.

    Args:
        parents: Evaluated parent pool
        children: Evaluated offspring pool
        n_survivors: Size of the next population

    Returns:
        Survivors ordered by descending fitness
    """
    sorted_parents = sorted(parents, key=lambda ind: ind.fitness, reverse=True)
    sorted_children = sorted(children, key=lambda ind: ind.fitness, reverse=True)

    survivors = []
    p = c = 0
    while len(survivors) < n_survivors:
        take_parent = c >= len(sorted_children) or (
            p < len(sorted_parents)
            and sorted_children[c].fitness < sorted_parents[p].fitness
        )
        if take_parent:
            survivors.append(sorted_parents[p])
            p += 1
        else:
            survivors.append(sorted_children[c])
            c += 1
    return survivors


# =============================================================================
# Crossover Operators
# =============================================================================

def one_point_crossover(
    parent1: Individual,
    parent2: Individual,
    rng: np.random.Generator,
) -> Tuple[Individual, Individual]:
    """
    Single-point crossover.

    Picks a cut point uniformly in [0, length) and swaps every bit from
    the cut onward.

    Example:
        Parent 1: 0000 0000
        Parent 2: 1111 1111
        Cut at 5:
        Child 1:  0000 0111
        Child 2:  1111 1000
    """
    length = len(parent1)
    point = int(rng.integers(0, length))

    child1 = parent1.copy()
    child2 = parent2.copy()
    for i in range(point, length):
        child1.set_value(i, parent2.get_value(i))
        child2.set_value(i, parent1.get_value(i))
    return child1, child2


def half_uniform_crossover(
    parent1: Individual,
    parent2: Individual,
    rng: np.random.Generator,
) -> Tuple[Individual, Individual]:
    """
    HUX crossover: exchange exactly half (rounded down) of the differing bits.

    The differing positions are shuffled and the first half are swapped,
    so each child lies floor(d / 2) bits away from the parent it started as.
    """
    differing = parent1.chromosome.differing_indices(parent2.chromosome)
    order = rng.permutation(len(differing))

    child1 = parent1.copy()
    child2 = parent2.copy()
    for k in order[:len(differing) // 2]:
        index = differing[k]
        child1.set_value(index, parent2.get_value(index))
        child2.set_value(index, parent1.get_value(index))
    return child1, child2


def incest_preventing_crossover(
    mating_pool: Sequence[Individual],
    threshold: float,
    rng: np.random.Generator,
) -> List[Individual]:
    """
    Apply HUX to adjacent pairs whose half Hamming distance exceeds threshold.

    Pairs that are too similar pass through as unchanged copies. An unpaired
    last individual (odd pool) also passes through.

    Args:
        mating_pool: Shuffled parents, paired as (0, 1), (2, 3), ...
        threshold: Current incest threshold d
        rng: Random number generator

    Returns:
        Children in pool order, same length as the pool
    """
    children = []
    for i in range(0, len(mating_pool) - 1, 2):
        first, second = mating_pool[i], mating_pool[i + 1]
        distance = first.chromosome.hamming_distance(second.chromosome)
        if distance / 2 > threshold:
            children.extend(half_uniform_crossover(first, second, rng))
        else:
            children.extend([first.copy(), second.copy()])

    if len(mating_pool) % 2 == 1:
        children.append(mating_pool[-1].copy())
    return children


# =============================================================================
# Mutation Operators
# =============================================================================

def bit_flip_mutation(
    individual: Individual,
    mutation_prob: float,
    rng: np.random.Generator,
) -> int:
    """
    Flip every bit independently with probability mutation_prob.

    Mutates in place and returns the number of flipped bits.
    """
    mask = rng.random(len(individual)) < mutation_prob
    flipped = np.flatnonzero(mask)
    for index in flipped:
        individual.flip(int(index))
    return len(flipped)


def flip_random_bits(
    individual: Individual,
    n_flips: int,
    rng: np.random.Generator,
) -> List[int]:
    """
    Flip n_flips distinct bits chosen uniformly at random.

    Mutates in place and returns the flipped positions.
    """
    positions = [int(i) for i in rng.permutation(len(individual))[:n_flips]]
    for index in positions:
        individual.flip(index)
    return positions
