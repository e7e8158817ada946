# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Translations between bipolar framework variants (Polberg & Oren 2014, Cayrol & Lagasquie-Schiex 2013).

A necessity support E -> a reads "a needs at least one member of E". An evidential support E -> a reads
"a has evidence once every member of E has". Going from one to the other turns the supporting sets of
an argument from a conjunction of disjunctions into a disjunction of conjunctions, so the result can be
exponentially larger than the input.
"""

import logging
from functools import reduce

import project_config as config
from structure.argument_set import ArgumentSet
from structure.bipolar_framework import BipolarFramework
from structure.exceptions import InvalidRelationTypeError
from search.cancellation import guard_search_size
from search.subsets import hitting_choices, inclusion_minimal, nonempty_subsets
from semantics.deductive import deductive_framework
from semantics.evidential import EvidentialBaseSemantics, evidential_framework
from semantics.necessity import NecessitySemantics, necessity_framework

logger = logging.getLogger(config.LOGGER_NAME + ".translation")


def _require(framework: BipolarFramework, semantics_cls):
    if not isinstance(framework.semantics, semantics_cls):
        raise InvalidRelationTypeError(f"{semantics_cls.__name__} framework expected, got {framework!r}")


def to_evidential(naf: BipolarFramework) -> BipolarFramework:
    """
    Translates a necessity framework into an evidential framework. Arguments without supporters become
    prima facie, every other argument is supported by each set picking one member from each of its
    necessity supporting sets
    """
    _require(naf, NecessitySemantics)
    eaf = evidential_framework()
    eaf.add_all(naf)
    for argument in naf:
        supporting_sets = naf.get_direct_supporters(argument)
        if not supporting_sets:
            eaf.add_prima_facie(argument)
            continue
        guard_search_size(len(reduce(lambda x, y: x | y, supporting_sets)), "to_evidential")
        for choice in inclusion_minimal(hitting_choices(supporting_sets)):
            eaf.add_support(choice, argument)
    for attacker, attacked in naf.attacks:
        eaf.add_attack(attacker, attacked)
    logger.debug("translated %r into %r", naf, eaf)
    return eaf


def to_necessity(eaf: BipolarFramework) -> BipolarFramework:
    """
    Translates an evidential framework whose attacks all come from single arguments into a necessity
    framework. Prima facie arguments need nothing, arguments without any supporter support themselves
    so they can never be part of a coherent set, and every other argument needs one member of each
    minimal set meeting all of its evidential supporting sets
    """
    _require(eaf, EvidentialBaseSemantics)
    naf = necessity_framework()
    sentinel = eaf.sentinel
    naf.add_all(a for a in eaf if a != sentinel)
    for attacker, attacked in eaf.attacks:
        attacker = ArgumentSet(attacker)
        if len(attacker) != 1:
            raise InvalidRelationTypeError(f"only single-argument attacks can be translated, got {attacker}")
        naf.add_attack(next(iter(attacker)), attacked)
    for argument in eaf:
        if argument == sentinel:
            continue
        supporting_sets = [ArgumentSet(s).without_argument(sentinel) for s in eaf.get_direct_supporters(argument)]
        if any(s.is_empty() for s in supporting_sets):
            continue
        if not supporting_sets:
            naf.add_support(argument, argument)
            continue
        union = reduce(lambda x, y: x | y, supporting_sets)
        guard_search_size(len(union), "to_necessity")
        hitting = [t for t in nonempty_subsets(union) if all(not t.isdisjoint(s) for s in supporting_sets)]
        for t in inclusion_minimal(hitting):
            naf.add_support(t, argument)
    logger.debug("translated %r into %r", eaf, naf)
    return naf


def to_deductive(naf: BipolarFramework) -> BipolarFramework:
    """
    Translates a necessity framework with single-argument supports into a deductive framework: b being
    necessary for a is a deduces b, so every support is reversed
    """
    _require(naf, NecessitySemantics)
    daf = deductive_framework()
    daf.add_all(naf)
    for supporters, supported in naf.supports:
        if len(supporters) != 1:
            raise InvalidRelationTypeError(f"only single-argument supports can be translated, got {supporters}")
        daf.add_support(supported, next(iter(supporters)))
    for attacker, attacked in naf.attacks:
        daf.add_attack(attacker, attacked)
    return daf
