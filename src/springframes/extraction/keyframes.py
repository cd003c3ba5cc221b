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
Keyframe policy for cyclic animations.

Maps an extremum sequence onto percentage stops of one animation cycle.
The cycle lasts as long as the motion takes to settle (time of the last
sample); each extremum becomes a stop at 100·t/duration percent. Easing
between stops and any textual output belong to the caller.
"""

from typing import Sequence

from springframes.types.core import ExtremumSample, Keyframe
from springframes.types.results import KeyframeSet


def build_keyframes(maxima: Sequence[ExtremumSample]) -> KeyframeSet:
    """
    Convert extremum samples to keyframe stops.

    Args:
        maxima: Time-ordered extremum samples, as produced by
                MaximaExtractor.extract()

    Returns:
        KeyframeSet with stops from 0% to 100% and the cycle duration

    Raises:
        ValueError: If ``maxima`` is empty

    Examples
    --------
    >>> kf = build_keyframes(find_maxima(model))
    >>> kf['keyframes'][0]
    Keyframe(offset=0.0, displacement=99.995...)
    >>> kf['keyframes'][-1].offset
    100.0
    >>> kf['duration']
    2.38...

    Notes
    -----
    A sequence holding only the initial sample (already settled at t=0)
    has zero duration and yields a single stop at 0%.
    """
    if len(maxima) == 0:
        raise ValueError("Cannot build keyframes from an empty extremum sequence")

    duration = float(maxima[-1].time)

    if duration <= 0.0:
        keyframes = [Keyframe(0.0, float(maxima[0].displacement))]
    else:
        keyframes = [
            Keyframe(100.0 * float(sample.time) / duration, float(sample.displacement))
            for sample in maxima
        ]

    return {
        "keyframes": keyframes,
        "duration": duration,
        "n_keyframes": len(keyframes),
    }


def scale_displacements(keyframe_set: KeyframeSet, factor: float) -> KeyframeSet:
    """
    Return a copy of ``keyframe_set`` with every displacement multiplied by ``factor``.

    Offsets and duration are unchanged.
    """
    keyframes = [Keyframe(kf.offset, kf.displacement * factor) for kf in keyframe_set["keyframes"]]
    return {
        "keyframes": keyframes,
        "duration": keyframe_set["duration"],
        "n_keyframes": len(keyframes),
    }


__all__ = [
    "build_keyframes",
    "scale_displacements",
]
