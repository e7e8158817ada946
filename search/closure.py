# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Transitive closure over a RelationIndex.

An argument x directly reaches y when some source containing x (x itself for binary relations, any set
with x as a member for set-valued relations) points at y. Traversals keep one visited set for the whole
walk and mark an argument visited right before it is expanded, so support cycles terminate.
"""

from typing import Iterable, Optional, Set

from structure.argument import Argument
from structure.relation_index import RelationIndex
from search.cancellation import CancellationToken, ensure_token


def direct_targets(index: RelationIndex, argument: Argument) -> Set[Argument]:
    """Targets of every source argument takes part in"""
    targets = index.get_children(argument)
    for source in index.sources():
        if not isinstance(source, Argument) and argument in source:
            targets |= index.children[source]
    return targets


def direct_source_members(index: RelationIndex, argument: Argument) -> Set[Argument]:
    """Every argument that is, or belongs to, a source pointing at argument"""
    members = set()
    for source in index.get_parents(argument):
        if isinstance(source, Argument):
            members.add(source)
        else:
            members.update(source)
    return members


def _reach(step, argument: Argument, token: Optional[CancellationToken]) -> Set[Argument]:
    token = ensure_token(token)
    reached = set()
    visited = set()
    stack = [argument]
    while stack:
        token.check()
        node = stack.pop()
        for nxt in step(node):
            reached.add(nxt)
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return reached


def forward_closure(index: RelationIndex, argument: Argument,
                    token: Optional[CancellationToken] = None) -> Set[Argument]:
    """
    Every argument reachable from argument through one or more edges. argument itself is part of the
    result only when it lies on a cycle
    """
    return _reach(lambda node: direct_targets(index, node), argument, token)


def backward_closure(index: RelationIndex, argument: Argument,
                     token: Optional[CancellationToken] = None) -> Set[Argument]:
    """Every argument from which argument is reachable through one or more edges"""
    return _reach(lambda node: direct_source_members(index, node), argument, token)


def forward_closure_of_all(index: RelationIndex, arguments: Iterable[Argument],
                           token: Optional[CancellationToken] = None) -> Set[Argument]:
    """Union of the forward closures of the given arguments"""
    reached = set()
    for argument in arguments:
        reached |= forward_closure(index, argument, token)
    return reached


def set_closure(index: RelationIndex, arguments: Iterable[Argument],
                token: Optional[CancellationToken] = None) -> Set[Argument]:
    """
    Least fixpoint of set-valued reachability: an argument is reached when one of its sources lies
    wholly inside the given arguments plus everything reached so far. Returns the reached arguments.
    """
    token = ensure_token(token)
    accumulated = set(arguments)
    reached = set()
    changed = True
    while changed:
        changed = False
        for source in index.sources():
            token.check()
            members = {source} if isinstance(source, Argument) else set(source)
            if not members <= accumulated:
                continue
            for target in index.get_children(source):
                if target not in reached:
                    reached.add(target)
                    accumulated.add(target)
                    changed = True
    return reached
