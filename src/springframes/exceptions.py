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
Exceptions for springframes

Two failure modes exist in the core:

- InvalidConfiguration: raised when an oscillator is constructed with
  stiffness - damping² < 0 (critical/overdamped motion is not supported)
- DivergentSeries: raised when maxima extraction cannot reach the
  settling threshold (undamped motion, or a threshold no value can reach)

Both are raised eagerly and never swallowed by the library.
"""

from typing import Optional


class SpringframesError(Exception):
    """Base class for all springframes errors"""
    pass


class InvalidConfiguration(SpringframesError, ValueError):
    """
    Raised when oscillator parameters do not describe underdamped motion.

    Attributes
    ----------
    stiffness : float
        Requested stiffness k
    damping : float
        Requested damping coefficient (absolute value)
    discriminant : float
        k - damping², negative for rejected configurations

    Examples
    --------
    >>> try:
    ...     OscillatorModel(stiffness=10.0, damping=5.0)
    ... except InvalidConfiguration as e:
    ...     print(e.discriminant)
    -15.0
    """

    def __init__(self, stiffness: float, damping: float, discriminant: float):
        self.stiffness = stiffness
        self.damping = damping
        self.discriminant = discriminant
        super().__init__(
            f"Only underdamped oscillations are supported (stiffness - damping^2 >= 0). "
            f"Got: {stiffness} - {damping}^2 = {discriminant}"
        )


class DivergentSeries(SpringframesError, RuntimeError):
    """
    Raised when the extremum series never settles below the threshold.

    Attributes
    ----------
    iterations : int
        Number of extremum indices examined before giving up
    reason : str
        Short description of why the series diverges
    """

    def __init__(self, reason: str, iterations: int = 0, min_amplitude: Optional[float] = None):
        self.reason = reason
        self.iterations = iterations
        self.min_amplitude = min_amplitude
        message = f"Extremum series does not settle: {reason}"
        if min_amplitude is not None:
            message += f" (min_amplitude={min_amplitude}, iterations={iterations})"
        super().__init__(message)


__all__ = [
    "SpringframesError",
    "InvalidConfiguration",
    "DivergentSeries",
]
