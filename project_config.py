# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from pathlib import Path

ProjectPath = Path(__file__).parent.absolute()

LOGGER_NAME = "bipolar"

# names of the sentinel arguments standing for prima facie / environmental evidence
EPSILON_NAME = "epsilon"
ETA_NAME = "eta"

# exhaustive subset searches enumerate 2^n sets, n is bounded here
MAX_SEARCH_SIZE = 20
# "warn" keeps searching after emitting a SearchSizeWarning, "reject" raises SearchSizeExceededError
SEARCH_SIZE_POLICY = "warn"
# seconds, None means searches only stop when cancelled explicitly
DEFAULT_SEARCH_DEADLINE = None
