# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from dataclasses import dataclass
from enum import Enum
from typing import Union

from structure.argument import Argument
from structure.argument_set import ArgumentSet

Endpoint = Union[Argument, ArgumentSet]


class RelationKind(str, Enum):
    """The two relations of a bipolar framework"""
    SUPPORT = "support"
    ATTACK = "attack"


class EndpointType(str, Enum):
    """Type of the source endpoint a framework variant accepts for a relation"""
    ARGUMENT = "argument"
    ARGUMENT_SET = "argument_set"

    @staticmethod
    def of(endpoint: Endpoint) -> "EndpointType":
        if isinstance(endpoint, Argument):
            return EndpointType.ARGUMENT
        if isinstance(endpoint, ArgumentSet):
            return EndpointType.ARGUMENT_SET
        raise TypeError(f"Not a relation endpoint: {endpoint!r}")


@dataclass(frozen=True)
class Relation:
    """A directed edge from a source (an argument or a set of arguments) to a single argument"""
    source: Endpoint
    target: Argument

    kind = None

    def __post_init__(self):
        EndpointType.of(self.source)
        if not isinstance(self.target, Argument):
            raise TypeError(f"Relation targets must be arguments, got {self.target!r}")

    @property
    def is_binary(self):
        """True when the source is a single argument"""
        return isinstance(self.source, Argument)

    @property
    def source_members(self) -> ArgumentSet:
        """The source as a set, a single argument becomes a singleton"""
        return ArgumentSet(self.source)

    def to_tuple(self):
        """Returns the relation as a tuple (source, target)"""
        return tuple((self.source, self.target))


@dataclass(frozen=True)
class Support(Relation):
    """Represents a support from source to target"""
    kind = RelationKind.SUPPORT

    @property
    def supporter(self):
        return self.source

    @property
    def supported(self):
        return self.target

    def __str__(self):
        return "(" + str(self.source) + "," + str(self.target) + ")"


@dataclass(frozen=True)
class Attack(Relation):
    """Represents an attack from source to target"""
    kind = RelationKind.ATTACK

    @property
    def attacker(self):
        return self.source

    @property
    def attacked(self):
        return self.target

    def __str__(self):
        return "(" + str(self.source) + "," + str(self.target) + ")"
