# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from typing import Dict, Set, Iterator, Tuple

from structure.argument import Argument
from structure.relations import Endpoint


class RelationIndex:
    """
    Bidirectional adjacency index for one relation (support or attack).

    parents maps a target argument to the set of sources pointing at it, children maps a source
    (an argument or an argument set) to the set of targets it points at. Both maps are always updated
    together so that s is a parent of t exactly when t is a child of s.
    """
    def __init__(self):
        self.parents: Dict[Argument, Set[Endpoint]] = dict()
        self.children: Dict[Endpoint, Set[Argument]] = dict()

    def __len__(self):
        return sum(len(targets) for targets in self.children.values())

    def __iter__(self) -> Iterator[Tuple[Endpoint, Argument]]:
        """Iterates over the (source, target) pairs of the relation"""
        for source, targets in self.children.items():
            for target in targets:
                yield source, target

    def __contains__(self, pair):
        source, target = pair
        return source in self.parents.get(target, ())

    def add(self, source: Endpoint, target: Argument) -> bool:
        """Registers source -> target in both directions, returns whether either map changed"""
        result = False
        parents = self.parents.setdefault(target, set())
        if source not in parents:
            parents.add(source)
            result = True
        children = self.children.setdefault(source, set())
        if target not in children:
            children.add(target)
            result = True
        return result

    def discard(self, source: Endpoint, target: Argument) -> bool:
        """Removes source -> target from both directions, returns whether either map changed"""
        result = False
        parents = self.parents.get(target)
        if parents is not None and source in parents:
            parents.remove(source)
            result = True
            if not parents:
                del self.parents[target]
        children = self.children.get(source)
        if children is not None and target in children:
            children.remove(target)
            result = True
            if not children:
                del self.children[source]
        return result

    def get_parents(self, target: Argument) -> Set[Endpoint]:
        """Returns a copy of the sources pointing at target"""
        return set(self.parents.get(target, ()))

    def get_children(self, source: Endpoint) -> Set[Argument]:
        """Returns a copy of the targets source points at"""
        return set(self.children.get(source, ()))

    def has_parents(self, target: Argument) -> bool:
        return bool(self.parents.get(target))

    def sources(self):
        """Returns a snapshot of every source that has at least one target"""
        return list(self.children.keys())

    def remove_argument(self, argument: Argument) -> bool:
        """
        Removes every edge argument takes part in: as target, as a binary source, or as a member of a
        set-valued source
        """
        result = False
        for source in list(self.parents.get(argument, ())):
            result |= self.discard(source, argument)
        for source in self.sources():
            if source == argument or (not isinstance(source, Argument) and argument in source):
                for target in list(self.children.get(source, ())):
                    result |= self.discard(source, target)
        return result

    def copy(self) -> "RelationIndex":
        """Returns an independent copy of the index"""
        other = RelationIndex()
        for source, target in self:
            other.add(source, target)
        return other
