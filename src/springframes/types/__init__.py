# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Types Module

Central import point for the type definitions of springframes.

Module Organization
------------------
- core: scalars, time, extremum samples, keyframes, callbacks
- results: TypedDict containers returned by extraction helpers
"""

from .core import (
    ExtremumSample,
    Keyframe,
    MaximaSequence,
    ResultCallback,
    ScalarLike,
    TimeGrid,
    TimeLike,
)
from .results import (
    ExtractionResult,
    KeyframeSet,
    TrajectorySamples,
)

__all__ = [
    # Core
    "ScalarLike",
    "TimeLike",
    "TimeGrid",
    "ExtremumSample",
    "MaximaSequence",
    "Keyframe",
    "ResultCallback",
    # Results
    "KeyframeSet",
    "TrajectorySamples",
    "ExtractionResult",
]
