# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from typing import Iterable, Union

from structure.argument import Argument


class ArgumentSet:
    """
    An immutable set of arguments.

    Used both as the composite source of set-based supports and attacks and as the value type for
    extensions handed to the semantics. Equality and hashing follow the contents, so two sets built
    from the same arguments are interchangeable as dictionary keys.
    """
    def __init__(self, arguments: Union[Argument, Iterable[Argument], None] = None):
        if arguments is None:
            arguments = ()
        elif isinstance(arguments, Argument):
            arguments = (arguments,)
        elif isinstance(arguments, ArgumentSet):
            arguments = arguments.arguments
        members = frozenset(arguments)
        for a in members:
            if not isinstance(a, Argument):
                raise TypeError(f"ArgumentSet members must be Argument instances, got {a!r}")
        self.arguments = members

    def __str__(self):
        """Returns the string representation of the set, members sorted by name"""
        return "{" + ",".join(str(x) for x in sorted(self.arguments)) + "}"

    def __repr__(self):
        return f"ArgumentSet({self.__str__()})"

    def __len__(self):
        return len(self.arguments)

    def __iter__(self):
        return iter(self.arguments)

    def __contains__(self, item):
        return item in self.arguments

    def __eq__(self, other):
        if isinstance(other, ArgumentSet):
            return self.arguments == other.arguments
        return NotImplemented

    def __hash__(self):
        return hash(self.arguments)

    def __or__(self, other):
        return self.union(other)

    def __sub__(self, other):
        return self.difference(other)

    def __and__(self, other):
        return self.intersection(other)

    def __le__(self, other):
        return self.issubset(other)

    def __lt__(self, other):
        return self.issubset(other) and len(self) < len(_members(other))

    def is_empty(self):
        """Checks if the set contains no arguments"""
        return len(self.arguments) == 0

    def union(self, other):
        """Returns a new set containing the members of both sets"""
        return ArgumentSet(self.arguments.union(_members(other)))

    def difference(self, other):
        """Returns a new set without the members of other"""
        return ArgumentSet(self.arguments.difference(_members(other)))

    def intersection(self, other):
        """Returns a new set containing the members common to both sets"""
        return ArgumentSet(self.arguments.intersection(_members(other)))

    def issubset(self, other):
        """Checks if every member of this set is in other"""
        return self.arguments.issubset(_members(other))

    def isdisjoint(self, other):
        """Checks if this set shares no member with other"""
        return self.arguments.isdisjoint(_members(other))

    def with_argument(self, argument: Argument):
        """Returns a new set with argument added"""
        return ArgumentSet(self.arguments | {argument})

    def without_argument(self, argument: Argument):
        """Returns a new set with argument removed"""
        return ArgumentSet(self.arguments - {argument})


def _members(other):
    """Accepts an ArgumentSet, a single Argument or any iterable of arguments"""
    if isinstance(other, ArgumentSet):
        return other.arguments
    if isinstance(other, Argument):
        return frozenset((other,))
    return frozenset(other)
