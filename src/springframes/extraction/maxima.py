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
Maxima Extraction

Turns an OscillatorModel into the finite, time-ordered list of its
displacement extrema, stopping once the motion has settled.

Algorithm
---------
1. Start with the mandatory sample (0, y(0))
2. For p = p0, p0 + 1, ... compute t_p = model.time_of_extremum(p), where
   p0 = max(0, ceil((φ - atan(-d/ω)) / π)) is the first index whose root
   is not negative
   - t_p <= 0: skip (roots before the motion starts, artifacts of the
     periodic formula, not a sign of decay)
   - otherwise append (t_p, y(t_p))
3. Stop as soon as the most recent sample has |y| <= min_amplitude
4. Return the accumulated samples

The stopping test looks only at the latest sample, never at a running
maximum, so a sample just above threshold may precede the terminating one.

Termination
-----------
For damping > 0 the envelope decays strictly, so a positive threshold is
always reached. Two cases never settle and raise DivergentSeries:

- damping = 0 (undamped; detected before iterating)
- ``max_iterations`` indices tried past p0 (a non-positive threshold that
  no floating-point underflow satisfies)

A large phase offset only moves p0; the roots before it are never visited
and do not count against the cap.

Usage
-----
>>> model = OscillatorModel(amplitude=100, stiffness=150, damping=3.5,
...                         phase_offset=0.01, min_amplitude=0.05)
>>> maxima = MaximaExtractor(model).extract()
>>> maxima[0]
ExtremumSample(time=0.0, displacement=99.995...)
>>> abs(maxima[-1].displacement) <= 0.05
True
>>>
>>> # Lazy form
>>> for sample in MaximaExtractor(model).iter_extrema():
...     print(sample.time, sample.displacement)
"""

import math
import warnings
from typing import Iterator

from springframes.exceptions import DivergentSeries
from springframes.oscillator.model import OscillatorModel
from springframes.types.core import ExtremumSample, MaximaSequence

DEFAULT_MAX_ITERATIONS = 100_000


class MaximaExtractor:
    """
    Produces the MaximaSequence of one OscillatorModel.

    Stateless apart from its configuration: every call derives the
    sequence afresh from the model, so repeated calls return identical
    results.

    Parameters
    ----------
    model : OscillatorModel
        Model to sample
    max_iterations : int, default=100_000
        Number of extremum indices tried, counted from the first
        non-negative root, before giving up. This bounds the index p, not
        the physical settling time: a lightly damped, stiff spring (say
        d=1e-3, k=1e6) passes millions of extrema before it settles and
        needs a larger cap.

    Raises
    ------
    ValueError
        If max_iterations < 1
    """

    def __init__(self, model: OscillatorModel, max_iterations: int = DEFAULT_MAX_ITERATIONS):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        self.model = model
        self.max_iterations = int(max_iterations)

    def __repr__(self):
        return f"MaximaExtractor(model={self.model!r}, max_iterations={self.max_iterations})"

    def extract(self) -> MaximaSequence:
        """
        Compute the full extremum sequence.

        Returns
        -------
        MaximaSequence
            At least one sample; first is (0, y(0))

        Raises
        ------
        DivergentSeries
            If the motion never settles. No partial sequence is returned.
        """
        return list(self.iter_extrema())

    def iter_extrema(self) -> Iterator[ExtremumSample]:
        """
        Lazily yield extremum samples.

        Configuration problems (undamped motion) raise here, before the
        first sample is produced. Hitting the iteration cap raises from
        inside the iteration.
        """
        model = self.model
        threshold = model.min_amplitude
        first = ExtremumSample(0.0, model.position(0.0))

        self._check_diagnostics()

        if abs(first.displacement) > threshold:
            if model.damping == 0.0:
                raise DivergentSeries(
                    "envelope does not decay (damping = 0)",
                    iterations=0,
                    min_amplitude=threshold,
                )
            if model.angular_frequency() == 0.0:
                raise DivergentSeries(
                    "motion does not oscillate (stiffness = damping^2), no extrema exist",
                    iterations=0,
                    min_amplitude=threshold,
                )

        return self._generate(first)

    def _generate(self, first: ExtremumSample) -> Iterator[ExtremumSample]:
        model = self.model
        threshold = model.min_amplitude

        last = first
        yield first

        if abs(last.displacement) <= threshold:
            return

        start = self._first_index()
        p = start
        while abs(last.displacement) > threshold:
            tried = p - start
            if tried >= self.max_iterations:
                raise DivergentSeries(
                    f"no sample within threshold after {tried} extremum indices",
                    iterations=tried,
                    min_amplitude=threshold,
                )
            t_p = model.time_of_extremum(p)
            p += 1
            if t_p <= 0.0:
                continue
            last = ExtremumSample(t_p, model.position(t_p))
            yield last

    def _first_index(self) -> int:
        """Smallest p >= 0 with t_p >= 0 (up to rounding)."""
        model = self.model
        omega = model.angular_frequency()
        lead = model.phase_offset - math.atan(-model.damping / omega)
        return max(0, math.ceil(lead / math.pi))

    def _check_diagnostics(self):
        model = self.model
        if model.min_amplitude <= 0.0:
            warnings.warn(
                f"min_amplitude={model.min_amplitude} <= 0: extraction only terminates "
                f"once displacement underflows to zero (or raises DivergentSeries after "
                f"{self.max_iterations} iterations).",
                UserWarning,
            )
        if abs(model.phase_offset) > math.pi:
            warnings.warn(
                f"phase_offset={model.phase_offset} lies outside [-pi, pi]; "
                f"several leading extremum roots will be negative and skipped.",
                UserWarning,
            )


def find_maxima(model: OscillatorModel, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> MaximaSequence:
    """
    Extremum sequence of ``model``.

    Shorthand for ``MaximaExtractor(model, max_iterations).extract()``.
    """
    return MaximaExtractor(model, max_iterations=max_iterations).extract()


__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "MaximaExtractor",
    "find_maxima",
]
