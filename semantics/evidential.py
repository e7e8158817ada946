# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Evidential semantics (Oren & Norman).

An argument is only worth considering when it has evidential support: a chain of supports rooted in
the sentinel argument, which stands for the environment and makes its targets prima facie. The
sentinel is available as evidence in every extension, so it never needs to be listed in one.

Two variants share the rules below. The evidential argumentation system uses single arguments on both
ends of its relations and the sentinel epsilon. The evidential argumentation framework uses sets of
arguments as sources and the sentinel eta, which may never be attacked, attack or be supported.

The minimal-witness searches enumerate subsets of the whole framework and are exponential in the
number of arguments. They pass through search.cancellation.guard_search_size and only suit small
frameworks.
"""

import logging
from typing import Optional, Set

import project_config as config
from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.bipolar_framework import BipolarFramework
from structure.relations import EndpointType
from structure.variant import Variant
from search.cancellation import CancellationToken, ensure_token, guard_search_size
from search.subsets import is_minimal, minimal_witnesses
from semantics.base import BipolarSemantics

logger = logging.getLogger(config.LOGGER_NAME + ".evidential")


class EvidentialBaseSemantics(BipolarSemantics):
    """Evidential support, evidence-supported attacks and acceptability shared by both evidential variants"""

    @property
    def sentinel(self) -> Argument:
        return self.framework.sentinel

    def has_evidential_support(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """
        Checks whether argument has evidential support from ext: argument is the sentinel, or a non-empty
        supporting source inside ext (plus the sentinel) supports it and every member of that source has
        evidential support from ext without argument.
        """
        if argument == self.sentinel:
            return True
        return self._supported_from(argument, self.get_grounded_arguments(ext, token))

    def get_grounded_arguments(self, ext, token: Optional[CancellationToken] = None) -> ArgumentSet:
        """
        The sentinel plus every member of ext with evidential support from ext.

        Least fixpoint: a member joins once one of its supporting sources lies wholly inside the grounded
        set. A support chain found this way never passes through the same argument twice, so this agrees
        with the recursive definition while staying polynomial in the size of ext.
        """
        token = ensure_token(token)
        ext = ArgumentSet(ext)
        grounded = {self.sentinel}
        changed = True
        while changed:
            changed = False
            for x in ext:
                token.check()
                if x not in grounded and self._supported_from(x, grounded):
                    grounded.add(x)
                    changed = True
        return ArgumentSet(grounded)

    def _supported_from(self, argument: Argument, grounded) -> bool:
        for source in self.framework.supports.parents.get(argument, ()):
            members = ArgumentSet(source)
            if not members.is_empty() and members.issubset(grounded):
                return True
        return False

    def has_minimal_evidential_support(self, argument: Argument, ext,
                                       token: Optional[CancellationToken] = None) -> bool:
        """
        Checks whether ext gives argument evidential support and no proper subset of ext does.
        Exponential in the size of ext.
        """
        ext = ArgumentSet(ext)
        guard_search_size(len(ext), "has_minimal_evidential_support")
        return is_minimal(ext, lambda s: self.has_evidential_support(argument, s, token), token)

    def get_minimal_evidential_supporters(self, argument: Argument,
                                          token: Optional[CancellationToken] = None) -> Set[ArgumentSet]:
        """
        Returns every set of arguments giving argument minimal evidential support. The sentinel is left
        out of the returned sets; a prima facie argument has the empty set as its only minimal supporter.
        Exhaustive over the subsets of the framework.
        """
        sources = [ArgumentSet(s).without_argument(self.sentinel)
                   for s in self.framework.supports.parents.get(argument, ())]
        return self._cached(("supporters", argument),
                            lambda: self._minimal_witnesses(
                                sources, lambda s: self.has_evidential_support(argument, s, token),
                                "get_minimal_evidential_supporters", token), token)

    def is_evidence_supported_attack(self, ext, argument: Argument, token: Optional[CancellationToken] = None) -> bool:
        """
        Checks whether ext carries out an evidence-supported attack on argument: an attacking source
        inside ext whose members all have evidential support from ext
        """
        grounded = self.get_grounded_arguments(ext, token)
        for source in self.framework.attacks.parents.get(argument, ()):
            if ArgumentSet(source).issubset(grounded):
                return True
        return False

    def is_minimal_evidence_supported_attack(self, ext, argument: Argument,
                                             token: Optional[CancellationToken] = None) -> bool:
        """Checks whether ext carries out an evidence-supported attack on argument and no proper subset does"""
        ext = ArgumentSet(ext)
        guard_search_size(len(ext), "is_minimal_evidence_supported_attack")
        return is_minimal(ext, lambda s: self.is_evidence_supported_attack(s, argument, token), token)

    def get_minimal_evidence_supported_attackers(self, argument: Argument,
                                                 token: Optional[CancellationToken] = None) -> Set[ArgumentSet]:
        """
        Returns every set of arguments carrying out a minimal evidence-supported attack on argument.
        Exhaustive over the subsets of the framework.
        """
        sources = [ArgumentSet(s).without_argument(self.sentinel)
                   for s in self.framework.attacks.parents.get(argument, ())]
        return self._cached(("attackers", argument),
                            lambda: self._minimal_witnesses(
                                sources, lambda s: self.is_evidence_supported_attack(s, argument, token),
                                "get_minimal_evidence_supported_attackers", token), token)

    def _minimal_witnesses(self, sources, predicate, operation, token) -> Set[ArgumentSet]:
        if not sources:
            return set()
        universe = [a for a in self.framework if a != self.sentinel]
        guard_search_size(len(universe), operation)
        witnesses = minimal_witnesses(universe, predicate,
                                      candidate=lambda s: any(src.issubset(s) for src in sources),
                                      token=token)
        logger.debug("%s: %s found %d witnesses", self.variant.name, operation, len(witnesses))
        return witnesses

    def get_attacking_sets(self, argument: Argument) -> Set[ArgumentSet]:
        """The direct attacking sources of argument, each as a set"""
        return {ArgumentSet(s) for s in self.framework.get_attackers(argument)}

    def is_acceptable(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """
        argument is acceptable with respect to ext when it has evidential support from ext and, for every
        minimal evidence-supported attack on it, ext carries out an evidence-supported attack on some
        member of the attacking set
        """
        ext = ArgumentSet(ext)
        if not self.has_evidential_support(argument, ext, token):
            return False
        for attacking_set in self.get_minimal_evidence_supported_attackers(argument, token):
            if not any(self.is_evidence_supported_attack(ext, x, token) for x in attacking_set):
                return False
        return True


class EvidentialSemantics(EvidentialBaseSemantics):
    """Set-based evidential argumentation framework, sentinel eta"""
    variant = Variant(name="evidential",
                      support_endpoint=EndpointType.ARGUMENT_SET,
                      attack_endpoint=EndpointType.ARGUMENT_SET,
                      sentinel=config.ETA_NAME,
                      sentinel_forbidden=True)


class EvidentialSystemSemantics(EvidentialBaseSemantics):
    """Evidential argumentation system with single-argument supports and attacks, sentinel epsilon"""
    variant = Variant(name="evidential_system",
                      support_endpoint=EndpointType.ARGUMENT,
                      attack_endpoint=EndpointType.ARGUMENT,
                      sentinel=config.EPSILON_NAME)


def evidential_framework() -> BipolarFramework:
    """Returns an empty evidential argumentation framework"""
    return BipolarFramework(EvidentialSemantics)


def evidential_system() -> BipolarFramework:
    """Returns an empty evidential argumentation system"""
    return BipolarFramework(EvidentialSystemSemantics)
