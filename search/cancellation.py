# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import time
import warnings
from typing import Optional

import project_config as config
from structure.exceptions import SearchCancelledError, SearchSizeExceededError, SearchSizeWarning

logger = logging.getLogger(config.LOGGER_NAME + ".search")


class CancellationToken:
    """
    Cooperative cancellation handle for exhaustive searches.

    Every recursive search accepts a token and calls check() inside its loops. The search stops with
    SearchCancelledError once cancel() was called or the optional deadline (seconds from creation) passed.
    """
    def __init__(self, deadline: Optional[float] = None):
        self._cancelled = False
        self._expires_at = None if deadline is None else time.monotonic() + deadline

    @classmethod
    def default(cls) -> "CancellationToken":
        """A token using the deadline configured in project_config"""
        return cls(config.DEFAULT_SEARCH_DEADLINE)

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def check(self):
        """Raises SearchCancelledError when the search should stop"""
        if self._cancelled:
            raise SearchCancelledError("search cancelled")
        if self._expires_at is not None and time.monotonic() >= self._expires_at:
            raise SearchCancelledError("search deadline exceeded")


def ensure_token(token: Optional[CancellationToken]) -> CancellationToken:
    return token if token is not None else CancellationToken.default()


def guard_search_size(size: int, operation: str, limit: Optional[int] = None, policy: Optional[str] = None):
    """
    Checks an exhaustive search input against the configured bound. Above the bound the search is either
    rejected or allowed with a SearchSizeWarning, following SEARCH_SIZE_POLICY.
    """
    limit = config.MAX_SEARCH_SIZE if limit is None else limit
    policy = config.SEARCH_SIZE_POLICY if policy is None else policy
    if size <= limit:
        return
    message = f"{operation}: exhaustive search over {size} elements (bound is {limit}, 2^{size} subsets)"
    if policy == "reject":
        raise SearchSizeExceededError(message)
    if policy != "warn":
        raise ValueError(f"Unknown search size policy: {policy}")
    logger.warning(message)
    warnings.warn(message, SearchSizeWarning, stacklevel=3)
