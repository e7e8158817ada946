# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Subset enumeration and minimal-witness search.

Everything here is exhaustive: a set of n elements has 2^n subsets, so callers guard their inputs with
search.cancellation.guard_search_size and pass a CancellationToken that is checked once per subset.
"""

from itertools import combinations, chain, product
from typing import Callable, Iterable, Iterator, List, Optional, Set

from structure.argument_set import ArgumentSet
from search.cancellation import CancellationToken, ensure_token


def powerset(elements: Iterable, token: Optional[CancellationToken] = None) -> Iterator[ArgumentSet]:
    """Yields every subset of elements, smallest first"""
    token = ensure_token(token)
    items = sorted(set(elements))
    for subset in chain.from_iterable(combinations(items, r) for r in range(len(items) + 1)):
        token.check()
        yield ArgumentSet(subset)


def nonempty_subsets(elements: Iterable, token: Optional[CancellationToken] = None) -> Iterator[ArgumentSet]:
    for subset in powerset(elements, token):
        if not subset.is_empty():
            yield subset


def proper_subsets(elements: Iterable, token: Optional[CancellationToken] = None) -> Iterator[ArgumentSet]:
    """Yields every subset of elements except elements itself"""
    whole = ArgumentSet(elements)
    for subset in powerset(whole, token):
        if len(subset) < len(whole):
            yield subset


def is_minimal(witness: Iterable, predicate: Callable[[ArgumentSet], bool],
               token: Optional[CancellationToken] = None) -> bool:
    """
    True iff predicate holds for witness and for none of its proper subsets. The predicate is not assumed
    to be monotone, so every proper subset is tested.
    """
    witness = ArgumentSet(witness)
    if not predicate(witness):
        return False
    for subset in proper_subsets(witness, token):
        if predicate(subset):
            return False
    return True


def minimal_witnesses(universe: Iterable, predicate: Callable[[ArgumentSet], bool],
                      candidate: Optional[Callable[[ArgumentSet], bool]] = None,
                      token: Optional[CancellationToken] = None) -> Set[ArgumentSet]:
    """
    Returns every subset of universe that passes candidate (when given) and is a minimal witness for
    predicate in the sense of is_minimal
    """
    token = ensure_token(token)
    result = set()
    for subset in powerset(universe, token):
        if candidate is not None and not candidate(subset):
            continue
        if is_minimal(subset, predicate, token):
            result.add(subset)
    return result


def inclusion_minimal(sets: Iterable[ArgumentSet]) -> List[ArgumentSet]:
    """Keeps the sets that have no proper subset among the given sets"""
    sets = list(set(sets))
    return [s for s in sets if not any(other < s for other in sets)]


def hitting_choices(sets: Iterable[Iterable]) -> Set[ArgumentSet]:
    """
    Returns every set obtained by picking one member from each of the given sets. An empty family gives
    the empty set as its only choice
    """
    families = [sorted(set(s)) for s in sets]
    return {ArgumentSet(choice) for choice in product(*families)}
