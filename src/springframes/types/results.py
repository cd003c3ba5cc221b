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

# Result Types

from typing import TYPE_CHECKING, List

from typing_extensions import TypedDict

from .core import Keyframe, MaximaSequence, TimeGrid

if TYPE_CHECKING:
    import numpy as np

    from springframes.oscillator.model import OscillatorModel
    from springframes.oscillator.parameters import OscillatorParameters


class KeyframeSet(TypedDict):
    """
    Normalized keyframe stops for one animation cycle.

    Attributes
    ----------
    keyframes : List[Keyframe]
        Stops ordered by offset, first at 0%, last at 100%
    duration : float
        Cycle duration (time of the last extremum sample)
    n_keyframes : int
        Number of stops

    Examples
    --------
    >>> kf = build_keyframes(extractor.extract())
    >>> for stop in kf['keyframes']:
    ...     print(f"{stop.offset:.2f}% -> {stop.displacement:.2f}")
    >>> print(f"duration: {kf['duration']:.2f}s")
    """

    keyframes: List[Keyframe]
    duration: float
    n_keyframes: int


class TrajectorySamples(TypedDict):
    """
    Trajectory evaluated on a regular grid over one cycle.

    Shape Convention
    ----------------
    - t, position, velocity: (T,)
    - extrema_t, extrema_position: (M,) with M = len(maxima)
    """

    t: TimeGrid
    position: "np.ndarray"
    velocity: "np.ndarray"
    extrema_t: "np.ndarray"
    extrema_position: "np.ndarray"
    duration: float
    dt: float


class ExtractionResult(TypedDict):
    """
    Everything derived from one parameter set.

    Delivered to session subscribers after each successful rebuild.
    """

    parameters: "OscillatorParameters"
    model: "OscillatorModel"
    maxima: MaximaSequence
    keyframes: KeyframeSet


__all__ = [
    "KeyframeSet",
    "TrajectorySamples",
    "ExtractionResult",
]
