# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Hashable, Optional

import project_config as config
from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.variant import Variant
from search.cancellation import CancellationToken, ensure_token

logger = logging.getLogger(config.LOGGER_NAME + ".semantics")


class BipolarSemantics(ABC):
    """
    Abstract base class for the semantics of a bipolar framework.
    A semantics declares the variant it works on and decides acceptability and closure. To add a new
    bipolar semantics, inherit from this class, set variant and implement is_acceptable.

    Derived data is cached on the semantics object and dropped as soon as framework.revision changes.
    """
    variant: Variant = None

    def __init__(self, framework):
        self.framework = framework
        self._cache: Dict[Hashable, object] = dict()
        self._cache_revision = framework.revision

    def __repr__(self):
        return f"{type(self).__name__}({self.variant.name})"

    def _cached(self, key: Hashable, compute: Callable[[], object], token: Optional[CancellationToken] = None):
        """
        Returns the value stored for key, computing it when missing or when the framework changed.
        token is checked before the lookup, so a cancelled token raises on a cache hit as well. The value
        is shared by every later caller whatever token they pass.
        """
        ensure_token(token).check()
        if self._cache_revision != self.framework.revision:
            self._cache.clear()
            self._cache_revision = self.framework.revision
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]

    def clear_cache(self):
        self._cache.clear()

    @abstractmethod
    def is_acceptable(self, argument: Argument, ext, token: Optional[CancellationToken] = None) -> bool:
        """Checks whether argument is acceptable with respect to ext"""
        ...

    def fes(self, extension, token: Optional[CancellationToken] = None) -> ArgumentSet:
        """
        The characteristic function: returns the arguments of the framework that are acceptable with
        respect to extension
        """
        token = ensure_token(token)
        extension = ArgumentSet(extension)
        result = set()
        for argument in self.framework:
            token.check()
            if self.is_acceptable(argument, extension, token):
                result.add(argument)
        logger.debug("%s: fes(%s) = %s", self.variant.name, extension, ArgumentSet(result))
        return ArgumentSet(result)

    def is_closed(self, ext) -> bool:
        """
        Checks whether ext is closed under support: every support whose source lies inside ext has its
        target in ext too. For binary supports this is the one-level check on each member's direct
        supported arguments.
        """
        ext = ArgumentSet(ext)
        for source, target in self.framework.supports:
            if ArgumentSet(source).issubset(ext) and target not in ext:
                return False
        return True
