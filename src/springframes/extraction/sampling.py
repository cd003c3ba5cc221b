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
Trajectory sampling for plotting collaborators.

Evaluates position and velocity on a regular grid over one animation cycle
and packages the extremum markers alongside. Produces arrays only; drawing
them is the caller's business.

Usage
-----
>>> samples = sample_trajectory(model, dt=0.01)
>>> samples['t'].shape == samples['position'].shape
True
>>> # Plot-space mapping: 0 at the initial displacement, 1 at its mirror
>>> y_plot = normalize_to_initial(samples['position'], model.position(0.0))
"""

from typing import Optional, Sequence

import numpy as np

from springframes.extraction.maxima import find_maxima
from springframes.oscillator.model import OscillatorModel
from springframes.types.core import ExtremumSample, TimeGrid
from springframes.types.results import TrajectorySamples

DEFAULT_DT = 0.01


def time_grid(duration: float, dt: float = DEFAULT_DT) -> TimeGrid:
    """
    Regular grid 0, dt, 2·dt, ... strictly below ``duration``.

    Always contains t=0, also for a zero duration.

    Raises
    ------
    ValueError
        If dt <= 0 or duration < 0
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if duration < 0:
        raise ValueError(f"duration must be non-negative, got {duration}")

    n_steps = max(int(np.ceil(duration / dt)), 1)
    t = np.arange(n_steps, dtype=float) * dt
    if duration > 0:
        t = t[t < duration]
    return t


def sample_trajectory(
    model: OscillatorModel,
    maxima: Optional[Sequence[ExtremumSample]] = None,
    dt: float = DEFAULT_DT,
) -> TrajectorySamples:
    """
    Evaluate the model over one cycle.

    Args:
        model: Oscillator to evaluate
        maxima: Extremum sequence; extracted from ``model`` when omitted
        dt: Grid spacing

    Returns:
        TrajectorySamples with grid values and extremum markers

    Raises:
        ValueError: If dt <= 0 or ``maxima`` is empty
        DivergentSeries: If ``maxima`` is omitted and extraction diverges
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if maxima is None:
        maxima = find_maxima(model)
    if len(maxima) == 0:
        raise ValueError("Cannot sample a trajectory from an empty extremum sequence")

    duration = float(maxima[-1].time)
    t = time_grid(duration, dt)

    return {
        "t": t,
        "position": np.asarray(model.position(t)),
        "velocity": np.asarray(model.velocity(t)),
        "extrema_t": np.array([s.time for s in maxima], dtype=float),
        "extrema_position": np.array([s.displacement for s in maxima], dtype=float),
        "duration": duration,
        "dt": float(dt),
    }


def normalize_to_initial(values, initial: float) -> np.ndarray:
    """
    Map values to (initial - v) / (2·initial).

    The initial displacement maps to 0 and its mirror image -initial to 1,
    so a decaying oscillation stays within [0, 1].

    Raises
    ------
    ValueError
        If initial == 0
    """
    if initial == 0:
        raise ValueError("Cannot normalize against a zero initial displacement")
    return (initial - np.asarray(values, dtype=float)) / (2.0 * initial)


__all__ = [
    "DEFAULT_DT",
    "time_grid",
    "sample_trajectory",
    "normalize_to_initial",
]
