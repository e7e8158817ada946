# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Deductive support (Boella et al., Cayrol & Lagasquie-Schiex).

If a supports b then accepting a forces accepting b. Attacks therefore propagate along supports:
    supported attack:      a supports* x and x attacks y        => a attacks y
    mediated attack:       a attacks x and y supports* x        => a attacks y
    super-mediated attack: some supporter of a attacks y, or a attacks some supporter of y,
                           through a direct, supported or mediated attack
The union of direct, supported, mediated and super-mediated attacks are the d-attacks.

Deriving the complex attacks needs one closure per argument and costs at least O(|arguments| * |edges|).
Results are cached until the framework changes, which is still too slow for very large graphs.
"""

import logging
from typing import Dict, Iterable, Optional, Set

import project_config as config
from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.bipolar_framework import BipolarFramework
from structure.relations import Attack, EndpointType
from structure.variant import Variant
from search.cancellation import CancellationToken, ensure_token
from semantics.base import BipolarSemantics

logger = logging.getLogger(config.LOGGER_NAME + ".deductive")


class DeductiveSemantics(BipolarSemantics):
    variant = Variant(name="deductive",
                      support_endpoint=EndpointType.ARGUMENT,
                      attack_endpoint=EndpointType.ARGUMENT)

    def get_complex_attacks(self, token: Optional[CancellationToken] = None) -> Set[Attack]:
        """Returns all direct, supported and mediated attacks"""
        return set(self._cached("complex", lambda: self._complex_attacks(token), token))

    def _complex_attacks(self, token) -> Set[Attack]:
        token = ensure_token(token)
        framework = self.framework
        attacks = set(framework.get_attacks())
        for argument in framework:
            token.check()
            supported = framework.get_supported(argument, token)
            for x in supported:
                for target in framework.attacks.get_children(x):
                    attacks.add(Attack(argument, target))
                for origin in framework.attacks.get_parents(x):
                    attacks.add(Attack(origin, argument))
        logger.debug("%d complex attacks", len(attacks))
        return attacks

    def get_deductive_complex_attacks(self, token: Optional[CancellationToken] = None) -> Set[Attack]:
        """Returns the d-attacks: the complex attacks plus the super-mediated attacks derived from them"""
        return set(self._cached("deductive", lambda: self._deductive_attacks(token), token))

    def _deductive_attacks(self, token) -> Set[Attack]:
        token = ensure_token(token)
        d_attacks = self.get_complex_attacks(token)
        super_mediated = set()
        for attack in d_attacks:
            token.check()
            for origin in self.framework.get_supporters(attack.attacker, token):
                super_mediated.add(Attack(origin, attack.attacked))
            for target in self.framework.get_supporters(attack.attacked, token):
                super_mediated.add(Attack(attack.attacker, target))
        d_attacks |= super_mediated
        logger.debug("%d d-attacks", len(d_attacks))
        return d_attacks

    def _d_attackers(self, token=None) -> Dict[Argument, Set[Argument]]:
        def compute():
            attackers = dict()
            for attack in self.get_deductive_complex_attacks(token):
                attackers.setdefault(attack.attacked, set()).add(attack.attacker)
            return attackers
        return self._cached("d_attackers", compute, token)

    def get_d_attackers(self, argument: Argument, token: Optional[CancellationToken] = None) -> Set[Argument]:
        """Arguments carrying out a d-attack on argument"""
        return set(self._d_attackers(token).get(argument, ()))

    def get_supported_attacks(self, argument: Argument) -> Set[Attack]:
        """Attacks from argument on everything attacked by an argument it supports, directly or not"""
        targets = set()
        for x in self.framework.get_supported(argument):
            targets |= self.framework.get_attacked(x)
        return {Attack(argument, t) for t in targets}

    def get_mediated_attacks(self, argument: Argument) -> Set[Attack]:
        """Attacks from argument on every supporter of something argument attacks"""
        targets = set()
        for x in self.framework.get_attacked(argument):
            targets |= self.framework.get_supporters(x)
        return {Attack(argument, t) for t in targets}

    def is_attacking(self, argument: Argument, arguments: Iterable[Argument]) -> bool:
        """True if argument directly attacks some member of arguments"""
        return not self.framework.get_attacked(argument).isdisjoint(arguments)

    def is_attacking_set(self, attackers: Iterable[Argument], attacked: Iterable[Argument]) -> bool:
        """True if some member of attackers directly attacks some member of attacked"""
        attacked = set(attacked)
        return any(self.is_attacking(a, attacked) for a in attackers)

    def is_supported_attack(self, a: Argument, b: Argument) -> bool:
        """Checks for a sequence of supports from a to some x and a direct attack from x on b"""
        return not self.framework.get_attackers(b).isdisjoint(self.framework.get_supported(a))

    def is_mediated_attack(self, a: Argument, b: Argument) -> bool:
        """Checks for a sequence of supports from b to some x and a direct attack from a on x"""
        return self.is_attacking(a, self.framework.get_supported(b))

    def is_super_mediated_attack(self, a: Argument, b: Argument) -> bool:
        """
        Checks for a sequence of supports from b to some x that is attacked by a, directly or through
        an argument a supports
        """
        return (self.is_mediated_attack(a, b)
                or self.is_attacking_set(self.framework.get_supported(a), self.framework.get_supported(b)))

    def is_conflict_free(self, ext, token: Optional[CancellationToken] = None) -> bool:
        """Checks that no member of ext d-attacks another member"""
        ext = ArgumentSet(ext)
        attackers = self._d_attackers(token)
        return all(attackers.get(a, set()).isdisjoint(ext) for a in ext)

    def is_safe(self, ext, token: Optional[CancellationToken] = None) -> bool:
        """
        Checks that there is no argument which ext d-attacks and which is in ext or supported by some
        member of ext
        """
        ext = ArgumentSet(ext)
        reached = set(ext) | self.framework.get_supported_by_all(ext, token)
        attackers = self._d_attackers(token)
        return all(attackers.get(b, set()).isdisjoint(ext) for b in reached)

    def is_acceptable(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """argument is acceptable with respect to ext if ext d-attacks each of its d-attackers"""
        ext = ArgumentSet(ext)
        attackers = self._d_attackers(token)
        for attacker in attackers.get(argument, ()):
            if attackers.get(attacker, set()).isdisjoint(ext):
                return False
        return True


def deductive_framework() -> BipolarFramework:
    """Returns an empty deductive argumentation framework"""
    return BipolarFramework(DeductiveSemantics)
