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
springframes
============

Closed-form underdamped oscillator and extremum keyframes for cyclic
animations.

>>> from springframes import OscillatorModel, MaximaExtractor, build_keyframes
>>>
>>> model = OscillatorModel(amplitude=100, stiffness=150, damping=3.5,
...                         phase_offset=0.01, min_amplitude=0.05)
>>> maxima = MaximaExtractor(model).extract()
>>> keyframes = build_keyframes(maxima)

Authors
-------
Gil Benezer

License
-------
GNU Affero General Public License v3.0
"""

from .exceptions import DivergentSeries, InvalidConfiguration, SpringframesError
from .extraction import (
    MaximaExtractor,
    build_keyframes,
    find_maxima,
    normalize_to_initial,
    sample_trajectory,
    scale_displacements,
    time_grid,
)
from .oscillator import OscillatorModel, OscillatorParameters
from .session import OscillatorSession, compute_result
from .types import (
    ExtractionResult,
    ExtremumSample,
    Keyframe,
    KeyframeSet,
    MaximaSequence,
    TrajectorySamples,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "SpringframesError",
    "InvalidConfiguration",
    "DivergentSeries",
    # Model
    "OscillatorParameters",
    "OscillatorModel",
    # Extraction
    "MaximaExtractor",
    "find_maxima",
    "build_keyframes",
    "scale_displacements",
    "sample_trajectory",
    "time_grid",
    "normalize_to_initial",
    # Session
    "OscillatorSession",
    "compute_result",
    # Types
    "ExtremumSample",
    "MaximaSequence",
    "Keyframe",
    "KeyframeSet",
    "TrajectorySamples",
    "ExtractionResult",
]
