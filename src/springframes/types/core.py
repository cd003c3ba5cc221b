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
Core Types - Fundamental Building Blocks

Defines the basic types shared by the oscillator model and the extraction
routines:
- Scalar and time types (float or NumPy array)
- Extremum samples and maxima sequences
- Keyframe stops
- Callback signature for parameter-change notifications

Usage
-----
>>> from springframes.types.core import ExtremumSample, MaximaSequence
>>>
>>> maxima: MaximaSequence = [ExtremumSample(0.0, 99.99)]
>>> maxima[0].time
0.0
"""

from typing import TYPE_CHECKING, Any, Callable, List, NamedTuple, Union

import numpy as np

if TYPE_CHECKING:
    from .results import ExtractionResult


# ============================================================================
# Scalar and Time Types
# ============================================================================

ScalarLike = Union[float, int, np.number]
"""
Real scalar value.

Python float/int or NumPy scalar. Evaluation functions return plain
Python floats for scalar input.
"""

TimeLike = Union[float, int, np.number, np.ndarray]
"""
Time argument accepted by the evaluation functions.

Either a scalar time or a NumPy array of times. Array input is evaluated
element-wise and returns an array of the same shape.

Examples
--------
>>> model.position(0.5)                      # float
>>> model.position(np.linspace(0, 1, 101))   # (101,) array
"""

TimeGrid = np.ndarray
"""Regularly spaced, increasing time points, shape (T,)."""


# ============================================================================
# Extremum Samples
# ============================================================================


class ExtremumSample(NamedTuple):
    """
    A local extremum of displacement.

    Attributes
    ----------
    time : float
        Time of the extremum (>= 0)
    displacement : float
        Position y(time) at the extremum

    Examples
    --------
    >>> sample = ExtremumSample(time=0.26, displacement=-39.6)
    >>> t, y = sample
    """

    time: float
    displacement: float


MaximaSequence = List[ExtremumSample]
"""
Ordered extremum samples of one oscillator.

Invariants:
- First element is always (0, y(0))
- Strictly increasing in time
- Last element has |displacement| <= min_amplitude (unless it is the
  initial sample itself)
"""


class Keyframe(NamedTuple):
    """
    Keyframe stop for a cyclic animation.

    Attributes
    ----------
    offset : float
        Position within the cycle in percent, 0 to 100
    displacement : float
        Displacement at that stop
    """

    offset: float
    displacement: float


# ============================================================================
# Callback Types
# ============================================================================

ResultCallback = Callable[["ExtractionResult"], Any]
"""
Listener invoked with a fresh ExtractionResult after a parameter change.

Examples
--------
>>> def on_change(result: ExtractionResult) -> None:
...     print(len(result['maxima']))
>>> session.subscribe(on_change)
"""


__all__ = [
    "ScalarLike",
    "TimeLike",
    "TimeGrid",
    "ExtremumSample",
    "MaximaSequence",
    "Keyframe",
    "ResultCallback",
]
