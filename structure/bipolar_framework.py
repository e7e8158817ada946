# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from typing import Iterable, Optional, Set

import networkx as nx

import project_config as config
from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.exceptions import (
    BipolarError,
    ForbiddenSentinelError,
    InvalidRelationTypeError,
    PreconditionViolationError,
    UnsupportedOperationError,
)
from structure.graph import Graph, flatten, random_digraph
from structure.relation_index import RelationIndex
from structure.relations import Attack, EndpointType, Endpoint, Relation, RelationKind, Support
from structure.variant import Variant
from search import closure
from search.cancellation import CancellationToken

logger = logging.getLogger(config.LOGGER_NAME + ".framework")


class BipolarFramework:
    """
    A bipolar argumentation framework: a set of arguments with an attack and a support relation.

    The framework is generic. The semantics class given at construction decides the variant: whether
    supports and attacks have single arguments or argument sets as sources, whether there is a sentinel
    argument for prima facie evidence, and how acceptability and closure are evaluated. The semantics
    object is built from the framework and reachable as framework.semantics, so variant specific
    operations (complex attacks, evidential support, coherence) are called there.

    Every successful mutation increases framework.revision. Semantics objects key their caches on it.

    Not safe for concurrent mutation. Concurrent reads are fine while nobody writes.
    """
    graph: Optional[Graph] = None
    supports: Optional[RelationIndex] = None
    attacks: Optional[RelationIndex] = None

    def __init__(self, semantics):
        self.variant: Variant = semantics.variant
        self.graph = Graph()
        self.supports = RelationIndex()
        self.attacks = RelationIndex()
        self.revision = 0
        self.sentinel: Optional[Argument] = None
        if self.variant.sentinel is not None:
            self.sentinel = Argument(self.variant.sentinel)
            self.graph.add_node(self.sentinel)
        self.semantics = semantics(self)

    def __str__(self):
        """Returns an APX-like listing of arguments, attacks and supports"""
        strg = ""
        for arg in sorted(self.graph):
            strg += "arg(" + str(arg) + ").\n"
        for source, target in sorted(self.attacks, key=_edge_key):
            strg += "att(" + str(source) + "," + str(target) + ").\n"
        for source, target in sorted(self.supports, key=_edge_key):
            strg += "sup(" + str(source) + "," + str(target) + ").\n"
        return strg

    def __repr__(self):
        return (f"BipolarFramework({self.variant.name}, {len(self)} arguments, "
                f"{len(self.attacks)} attacks, {len(self.supports)} supports)")

    def __iter__(self):
        return iter(self.graph.nodes())

    def __len__(self):
        return len(self.graph)

    def __contains__(self, item):
        if isinstance(item, Argument):
            return item in self.graph
        if isinstance(item, Support):
            return self.contains_support(item)
        if isinstance(item, Attack):
            return self.contains_attack(item)
        return False

    def _touch(self):
        self.revision += 1

    def add(self, argument: Argument) -> bool:
        """Adds an argument, returns whether it was new"""
        if not isinstance(argument, Argument):
            raise TypeError(f"Argument expected, got {argument!r}")
        changed = self.graph.add_node(argument)
        if changed:
            self._touch()
        return changed

    def add_all(self, arguments: Iterable[Argument]) -> bool:
        result = False
        for a in arguments:
            result |= self.add(a)
        return result

    def add_relation(self, relation: Relation) -> bool:
        """Adds a Support or an Attack value"""
        if isinstance(relation, Support):
            return self.add_support(relation.source, relation.target)
        if isinstance(relation, Attack):
            return self.add_attack(relation.source, relation.target)
        raise InvalidRelationTypeError(f"Support or Attack expected, got {relation!r}")

    def add_support(self, supporter, supported: Argument) -> bool:
        """
        Adds a support from supporter to supported. Arguments not yet in the framework are added.
        Returns whether the framework changed
        """
        source = self._endpoint(supporter, RelationKind.SUPPORT)
        self._check_target(supported)
        if self.variant.sentinel_forbidden and supported == self.sentinel:
            raise ForbiddenSentinelError(f"{self.sentinel} can not be supported by another argument")
        return self._insert(self.supports, source, supported)

    def add_attack(self, attacker, attacked: Argument) -> bool:
        """
        Adds an attack from attacker to attacked. Arguments not yet in the framework are added.
        Returns whether the framework changed
        """
        source = self._endpoint(attacker, RelationKind.ATTACK)
        self._check_target(attacked)
        if self.variant.sentinel_forbidden and (attacked == self.sentinel or self.sentinel in ArgumentSet(source)):
            raise ForbiddenSentinelError(f"{self.sentinel} is not allowed to be part of any attack relation")
        return self._insert(self.attacks, source, attacked)

    def add_all_supports(self, supports: Iterable[Support]) -> bool:
        result = False
        for s in supports:
            result |= self.add_relation(s)
        return result

    def add_all_attacks(self, attacks: Iterable[Attack]) -> bool:
        result = False
        for a in attacks:
            result |= self.add_relation(a)
        return result

    def add_framework(self, other: "BipolarFramework") -> bool:
        """Adds all arguments, attacks and supports of other"""
        b1 = self.add_all(a for a in other if a != self.sentinel)
        b2 = self.add_all_attacks(other.get_attacks())
        b3 = self.add_all_supports(other.get_supports())
        return b1 or b2 or b3

    def _insert(self, index: RelationIndex, source: Endpoint, target: Argument) -> bool:
        changed = False
        for member in ArgumentSet(source):
            changed |= self.graph.add_node(member)
        changed |= self.graph.add_node(target)
        changed |= index.add(source, target)
        if changed:
            self._touch()
            logger.debug("%s: added %s -> %s", self.variant.name, source, target)
        return changed

    def _endpoint(self, source, kind: RelationKind) -> Endpoint:
        """Normalises a relation source to the endpoint type this variant uses for kind"""
        expected = self.variant.endpoint(kind)
        if isinstance(source, Argument):
            return source if expected == EndpointType.ARGUMENT else ArgumentSet(source)
        if expected == EndpointType.ARGUMENT:
            raise InvalidRelationTypeError(
                f"{self.variant.name} frameworks only accept single arguments as {kind.value} sources, got {source!r}")
        if isinstance(source, (str, bytes)):
            raise InvalidRelationTypeError(f"{kind.value} source must be an argument or a set of arguments")
        try:
            source = ArgumentSet(source)
        except TypeError as e:
            raise InvalidRelationTypeError(str(e)) from e
        if source.is_empty():
            raise PreconditionViolationError(f"{kind.value} sources can not be empty")
        return source

    @staticmethod
    def _check_target(target):
        if not isinstance(target, Argument):
            raise InvalidRelationTypeError(f"Relation targets must be single arguments, got {target!r}")

    def remove(self, argument: Argument) -> bool:
        """Removes the argument together with every support and attack it takes part in"""
        if self.sentinel is not None and argument == self.sentinel:
            raise PreconditionViolationError(f"the sentinel {self.sentinel} can not be removed")
        result = self.supports.remove_argument(argument)
        result |= self.attacks.remove_argument(argument)
        result |= self.graph.remove_node(argument)
        if result:
            self._touch()
            logger.debug("%s: removed %s", self.variant.name, argument)
        return result

    def remove_relation(self, relation: Relation) -> bool:
        if isinstance(relation, Support):
            return self.remove_support(relation.source, relation.target)
        if isinstance(relation, Attack):
            return self.remove_attack(relation.source, relation.target)
        raise InvalidRelationTypeError(f"Support or Attack expected, got {relation!r}")

    def remove_support(self, supporter, supported: Argument) -> bool:
        changed = self.supports.discard(self._endpoint(supporter, RelationKind.SUPPORT), supported)
        if changed:
            self._touch()
        return changed

    def remove_attack(self, attacker, attacked: Argument) -> bool:
        changed = self.attacks.discard(self._endpoint(attacker, RelationKind.ATTACK), attacked)
        if changed:
            self._touch()
        return changed

    def get_direct_supporters(self, argument: Argument) -> Set[Endpoint]:
        """Returns the sources directly supporting argument (a copy)"""
        return self.supports.get_parents(argument)

    def get_direct_supported(self, source) -> Set[Argument]:
        """Returns the arguments directly supported by source (a copy)"""
        return self.supports.get_children(self._lookup_key(source, RelationKind.SUPPORT))

    def get_attackers(self, argument: Argument) -> Set[Endpoint]:
        """Returns the sources directly attacking argument (a copy)"""
        return self.attacks.get_parents(argument)

    def get_attacked(self, source) -> Set[Argument]:
        """Returns the arguments directly attacked by source (a copy)"""
        return self.attacks.get_children(self._lookup_key(source, RelationKind.ATTACK))

    def _lookup_key(self, source, kind: RelationKind):
        if self.variant.endpoint(kind) == EndpointType.ARGUMENT_SET and not isinstance(source, ArgumentSet):
            return ArgumentSet(source)
        return source

    def is_direct_supported_by(self, argument: Argument, source) -> bool:
        """Checks whether source is one of the direct supporters of argument"""
        return self._lookup_key(source, RelationKind.SUPPORT) in self.supports.parents.get(argument, ())

    def is_attacked_by(self, argument: Argument, source) -> bool:
        """Checks whether source is one of the direct attackers of argument"""
        return self._lookup_key(source, RelationKind.ATTACK) in self.attacks.parents.get(argument, ())

    def is_supported(self, argument: Argument, ext) -> bool:
        """Returns true if some support source lying inside ext directly supports argument"""
        ext = ArgumentSet(ext)
        return any(ArgumentSet(source).issubset(ext) for source in self.supports.parents.get(argument, ()))

    def is_attacked(self, argument: Argument, ext) -> bool:
        """Returns true if some attack source lying inside ext directly attacks argument"""
        ext = ArgumentSet(ext)
        return any(ArgumentSet(source).issubset(ext) for source in self.attacks.parents.get(argument, ()))

    def contains_support(self, support: Support) -> bool:
        try:
            source = self._endpoint(support.source, RelationKind.SUPPORT)
        except BipolarError:
            return False
        return (source, support.target) in self.supports

    def contains_attack(self, attack: Attack) -> bool:
        try:
            source = self._endpoint(attack.source, RelationKind.ATTACK)
        except BipolarError:
            return False
        return (source, attack.target) in self.attacks

    def get_supports(self) -> Set[Support]:
        """Returns all supports of this framework"""
        return {Support(source, target) for source, target in self.supports}

    def get_attacks(self) -> Set[Attack]:
        """Returns all attacks of this framework"""
        return {Attack(source, target) for source, target in self.attacks}

    def get_supported(self, argument: Argument, token: Optional[CancellationToken] = None) -> Set[Argument]:
        """
        Computes {b | there is a sequence of direct supports from argument to b}. argument itself is
        in the result only when it lies on a support cycle
        """
        return closure.forward_closure(self.supports, argument, token)

    def get_supporters(self, argument: Argument, token: Optional[CancellationToken] = None) -> Set[Argument]:
        """Computes {b | there is a sequence of direct supports from b to argument}"""
        return closure.backward_closure(self.supports, argument, token)

    def get_supported_by_all(self, arguments: Iterable[Argument],
                             token: Optional[CancellationToken] = None) -> Set[Argument]:
        """Union of get_supported over the given arguments"""
        return closure.forward_closure_of_all(self.supports, arguments, token)

    def get_supported_by_set(self, arguments: Iterable[Argument],
                             token: Optional[CancellationToken] = None) -> Set[Argument]:
        """
        Arguments reached from the given set when a support only fires once its whole source set has
        been reached
        """
        return closure.set_closure(self.supports, arguments, token)

    def is_supported_by(self, argument: Argument, other: Argument) -> bool:
        """Checks whether there is a sequence of direct supports from other to argument"""
        return other in self.get_supporters(argument)

    def are_adjacent(self, a: Argument, b: Argument) -> bool:
        """True if one of a, b directly attacks or supports the other, alone or as a member of a source set"""
        for x, y in ((a, b), (b, a)):
            if (y in closure.direct_source_members(self.attacks, x)
                    or y in closure.direct_source_members(self.supports, x)):
                return True
        return False

    def to_networkx(self) -> nx.MultiDiGraph:
        """Flattened multigraph view, one edge per source member, with a 'kind' attribute"""
        return flatten(self.graph.nodes(), self.supports, self.attacks)

    def exists_directed_path(self, a: Argument, b: Argument) -> bool:
        """Checks whether b can be reached from a following attacks and supports"""
        if a not in self or b not in self:
            return False
        return nx.has_path(self.to_networkx(), a, b)

    def is_closed(self, ext) -> bool:
        """Checks whether ext is closed under the support relation, in the sense of this variant"""
        return self.semantics.is_closed(ext)

    def is_acceptable(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """Checks whether argument is acceptable with respect to ext"""
        return self.semantics.is_acceptable(argument, ext, token)

    def fes(self, extension, token: Optional[CancellationToken] = None) -> ArgumentSet:
        """The characteristic function: the arguments acceptable with respect to extension"""
        return self.semantics.fes(extension, token)

    def _require_sentinel(self) -> Argument:
        if self.sentinel is None:
            raise UnsupportedOperationError(f"{self.variant.name} frameworks have no prima facie arguments")
        return self.sentinel

    def add_prima_facie(self, argument: Argument) -> bool:
        """Adds argument (if needed) and gives it support from the sentinel"""
        sentinel = self._require_sentinel()
        result = self.add(argument)
        result |= self.add_support(sentinel, argument)
        return result

    def remove_prima_facie(self, argument: Argument) -> bool:
        """Removes the sentinel support of argument, the argument itself stays"""
        return self.remove_support(self._require_sentinel(), argument)

    def is_prima_facie(self, argument: Argument) -> bool:
        return self.is_direct_supported_by(argument, self._require_sentinel())

    def get_evidence_supported_arguments(self, token: Optional[CancellationToken] = None) -> Set[Argument]:
        """Returns all arguments that have evidential support in this framework"""
        return self.get_supported_by_set([self._require_sentinel()], token)

    def empty_like(self) -> "BipolarFramework":
        """A new empty framework of the same variant"""
        return BipolarFramework(type(self.semantics))

    def copy(self) -> "BipolarFramework":
        other = self.empty_like()
        other.graph = self.graph.copy()
        other.supports = self.supports.copy()
        other.attacks = self.attacks.copy()
        return other

    def get_minimal_form(self) -> "BipolarFramework":
        """
        Returns a copy keeping only supports and attacks whose source is set-inclusion minimal, i.e. no
        proper subset of the source has the same relation to the same target
        """
        other = self.empty_like()
        other.graph = self.graph.copy()
        for index, other_index in ((self.supports, other.supports), (self.attacks, other.attacks)):
            for source, target in index:
                if isinstance(source, Argument):
                    other_index.add(source, target)
                    continue
                if not any(s != source and ArgumentSet(s) < source for s in index.parents.get(target, ())):
                    other_index.add(source, target)
        return other

    def populate_random(self, num_args: int, proba_attack: float, proba_support: float, seed=None):
        """
        Fills the framework with arguments a1..an and Gilbert random attacks and supports. In variants with
        a sentinel, arguments left without supporters become prima facie
        """
        names = [Argument("a" + str(i + 1)) for i in range(num_args)]
        self.add_all(names)
        support_seed = None if seed is None else seed + 1
        for i, j in random_digraph(num_args, proba_attack, seed).edges:
            self.add_attack(names[i], names[j])
        for i, j in random_digraph(num_args, proba_support, support_seed).edges:
            self.add_support(names[i], names[j])
        if self.sentinel is not None:
            for a in names:
                if not self.supports.has_parents(a):
                    self.add_prima_facie(a)
        return self


def _edge_key(edge):
    source, target = edge
    return str(source), str(target)
