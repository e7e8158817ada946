# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from dataclasses import dataclass


@dataclass(frozen=True)
class Argument:
    """Represents a single atomic argument, identified by its name"""
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or self.name == "":
            raise ValueError("Argument names must be non-empty strings")

    def __str__(self):
        """Returns the string representation of the argument"""
        return self.name

    def __repr__(self):
        return f"Argument({self.name!r})"

    def __lt__(self, other):
        """Orders arguments by name so printed sets are stable"""
        if not isinstance(other, Argument):
            return NotImplemented
        return self.name < other.name
