# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Necessity semantics (Nouioua & Risch, Polberg & Oren).

A set of arguments E supports b when accepting b requires accepting at least one member of E. Attacks
are binary. Acceptability relative to an extension is not defined at this layer: extension reasoners
for necessity frameworks work with coherent sets instead.
"""

import logging
from typing import Optional, Set

import project_config as config
from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.bipolar_framework import BipolarFramework
from structure.exceptions import PreconditionViolationError, UnsupportedOperationError
from structure.relations import EndpointType
from structure.variant import Variant
from search.cancellation import CancellationToken, ensure_token, guard_search_size
from search.subsets import powerset
from semantics.base import BipolarSemantics

logger = logging.getLogger(config.LOGGER_NAME + ".necessity")


class NecessitySemantics(BipolarSemantics):
    variant = Variant(name="necessity",
                      support_endpoint=EndpointType.ARGUMENT_SET,
                      attack_endpoint=EndpointType.ARGUMENT)

    def is_acceptable(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        raise UnsupportedOperationError("acceptability is not defined for necessity frameworks, use coherence")

    def fes(self, extension, token: Optional[CancellationToken] = None) -> ArgumentSet:
        raise UnsupportedOperationError("the characteristic function is not defined for necessity frameworks")

    def is_closed(self, ext) -> bool:
        """Checks that every supporting set of every member of ext shares a member with ext"""
        ext = ArgumentSet(ext)
        for argument in ext:
            for supporters in self.framework.supports.parents.get(argument, ()):
                if supporters.isdisjoint(ext):
                    return False
        return True

    def get_n_cycle_free_members(self, ext, token: Optional[CancellationToken] = None) -> ArgumentSet:
        """
        Least fixpoint of: a member a of ext is N-cycle-free when every supporting set E of a with
        E ∩ ext non-empty holds an N-cycle-free member of ext. Members whose support only runs through
        cycles inside ext never enter the fixpoint.
        """
        token = ensure_token(token)
        ext = ArgumentSet(ext)
        free = set()
        changed = True
        while changed:
            changed = False
            for argument in ext:
                token.check()
                if argument in free:
                    continue
                if self._grounded_by(argument, ext, free):
                    free.add(argument)
                    changed = True
        return ArgumentSet(free)

    def _grounded_by(self, argument: Argument, ext: ArgumentSet, free: Set[Argument]) -> bool:
        for supporters in self.framework.supports.parents.get(argument, ()):
            inside = supporters & ext
            if not inside.is_empty() and inside.isdisjoint(free):
                return False
        return True

    def is_n_cycle_free_in(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """Checks whether argument is N-cycle-free in ext, argument must be a member of ext"""
        ext = ArgumentSet(ext)
        if argument not in ext:
            raise PreconditionViolationError(f"{argument} needs to be in {ext}")
        return argument in self.get_n_cycle_free_members(ext, token)

    def is_n_cycle_free(self, ext, token: Optional[CancellationToken] = None) -> bool:
        """Checks that every member of ext is N-cycle-free in ext"""
        ext = ArgumentSet(ext)
        return len(self.get_n_cycle_free_members(ext, token)) == len(ext)

    def is_coherent(self, ext, token: Optional[CancellationToken] = None) -> bool:
        """A set is coherent when it is closed and N-cycle-free"""
        return self.is_closed(ext) and self.is_n_cycle_free(ext, token)

    def is_conflict_free(self, ext) -> bool:
        ext = ArgumentSet(ext)
        return all(self.framework.attacks.get_parents(a).isdisjoint(ext) for a in ext)

    def is_strongly_coherent(self, ext, token: Optional[CancellationToken] = None) -> bool:
        """A set is strongly coherent when it is coherent and conflict-free"""
        return self.is_coherent(ext, token) and self.is_conflict_free(ext)

    def attacks_set(self, attackers, attacked) -> bool:
        """Checks whether some member of attackers attacks some member of attacked"""
        attackers = ArgumentSet(attackers)
        return any(not self.framework.attacks.get_parents(b).isdisjoint(attackers) for b in ArgumentSet(attacked))

    def get_deactivated_arguments(self, ext, token: Optional[CancellationToken] = None) -> ArgumentSet:
        """
        Arguments that can no longer be accepted alongside ext: those attacked by ext, and those having a
        supporting set whose members are all deactivated
        """
        token = ensure_token(token)
        ext = ArgumentSet(ext)
        deactivated = {b for b in self.framework if self.attacks_set(ext, [b])}
        changed = True
        while changed:
            changed = False
            for argument in self.framework:
                token.check()
                if argument in deactivated:
                    continue
                for supporters in self.framework.supports.parents.get(argument, ()):
                    if supporters.issubset(deactivated):
                        deactivated.add(argument)
                        changed = True
                        break
        return ArgumentSet(deactivated)

    def defends(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """
        Checks that ext together with argument is coherent and that ext attacks every coherent set
        containing an attacker of argument. Exhaustive over the subsets of the framework.
        """
        token = ensure_token(token)
        ext = ArgumentSet(ext)
        if not self.is_coherent(ext.with_argument(argument), token):
            return False
        attackers = self.framework.get_attackers(argument)
        if not attackers:
            return True
        nodes = list(self.framework)
        guard_search_size(len(nodes), "defends")
        for subset in powerset(nodes, token):
            if subset.isdisjoint(attackers) or not self.is_coherent(subset, token):
                continue
            if not self.attacks_set(ext, subset):
                logger.debug("%s does not defend %s against %s", ext, argument, subset)
                return False
        return True


def necessity_framework() -> BipolarFramework:
    """Returns an empty necessity argumentation framework"""
    return BipolarFramework(NecessitySemantics)
