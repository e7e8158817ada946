# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


class BipolarError(Exception):
    """Base class of every error raised by the bipolar framework and its semantics"""


class InvalidRelationTypeError(BipolarError, TypeError):
    """A relation has an endpoint type the framework variant does not accept"""


class ForbiddenSentinelError(BipolarError, ValueError):
    """The sentinel argument was used where the variant forbids it"""


class PreconditionViolationError(BipolarError, ValueError):
    """An argument or set handed to an operation does not meet its precondition"""


class UnsupportedOperationError(BipolarError, NotImplementedError):
    """The operation is not defined for this framework variant"""


class SearchCancelledError(BipolarError, RuntimeError):
    """An exhaustive search was cancelled or ran past its deadline"""


class SearchSizeExceededError(BipolarError, RuntimeError):
    """An exhaustive search was rejected because its input is too large"""


class SearchSizeWarning(UserWarning):
    """An exhaustive search runs over an input larger than the configured bound"""
