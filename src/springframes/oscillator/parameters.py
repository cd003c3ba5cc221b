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
Oscillator parameter set.

Immutable container for the five numbers that define a damped cosine
motion. Editing a parameter means building a new instance with
``replace()``; nothing is patched in place.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping

# Defaults of the reference animation
DEFAULT_AMPLITUDE = 100.0
DEFAULT_STIFFNESS = 150.0
DEFAULT_DAMPING = 3.5
DEFAULT_PHASE_OFFSET = 0.01
DEFAULT_MIN_AMPLITUDE = 0.05

# Short names accepted by from_dict()
PARAMETER_ALIASES: Dict[str, str] = {
    "A": "amplitude",
    "k": "stiffness",
    "offset": "phase_offset",
    "MIN_Y": "min_amplitude",
}


@dataclass(frozen=True)
class OscillatorParameters:
    """
    Parameters of y(t) = A·e^(-d·t)·cos(ω·t + φ).

    Attributes
    ----------
    amplitude : float
        A, displacement scale at t=0 before decay/phase adjustment
    stiffness : float
        k, must satisfy k - damping² >= 0 once a model is built
    damping : float
        d, damping coefficient; stored as its absolute value
    phase_offset : float
        φ, phase shift of the cosine argument [rad]
    min_amplitude : float
        Displacement magnitude at or below which the motion is settled

    Examples
    --------
    >>> params = OscillatorParameters()
    >>> params.stiffness
    150.0
    >>> stiffer = params.replace(stiffness=300.0)
    >>> params.stiffness      # unchanged
    150.0
    >>> OscillatorParameters(damping=-2.0).damping
    2.0
    """

    amplitude: float = DEFAULT_AMPLITUDE
    stiffness: float = DEFAULT_STIFFNESS
    damping: float = DEFAULT_DAMPING
    phase_offset: float = DEFAULT_PHASE_OFFSET
    min_amplitude: float = DEFAULT_MIN_AMPLITUDE

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "amplitude", float(self.amplitude))
        object.__setattr__(self, "stiffness", float(self.stiffness))
        object.__setattr__(self, "damping", abs(float(self.damping)))
        object.__setattr__(self, "phase_offset", float(self.phase_offset))
        object.__setattr__(self, "min_amplitude", float(self.min_amplitude))

    @property
    def discriminant(self) -> float:
        """stiffness - damping²"""
        return self.stiffness - self.damping * self.damping

    def replace(self, **changes: Any) -> "OscillatorParameters":
        """
        Return a copy with some fields changed.

        Raises
        ------
        ValueError
            If a field name is unknown
        """
        unknown = set(changes) - _field_names()
        if unknown:
            raise ValueError(
                f"Unknown oscillator parameter(s): {sorted(unknown)}. "
                f"Valid names: {sorted(_field_names())}"
            )
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, float]:
        """Plain mapping of field name to value."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "OscillatorParameters":
        """
        Build parameters from a mapping.

        Accepts the field names and the short aliases ``A``, ``k``,
        ``offset`` and ``MIN_Y``. Missing fields take their defaults.

        Raises
        ------
        ValueError
            If a key is unknown or a field is given twice (name and alias)

        Examples
        --------
        >>> OscillatorParameters.from_dict({"A": 50, "k": 200, "damping": 2})
        OscillatorParameters(amplitude=50.0, stiffness=200.0, damping=2.0, ...)
        """
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            name = PARAMETER_ALIASES.get(key, key)
            if name not in _field_names():
                raise ValueError(f"Unknown oscillator parameter '{key}'")
            if name in kwargs:
                raise ValueError(f"Parameter '{name}' given more than once")
            kwargs[name] = value
        return cls(**kwargs)


def _field_names():
    return {f.name for f in dataclasses.fields(OscillatorParameters)}


__all__ = [
    "OscillatorParameters",
    "PARAMETER_ALIASES",
    "DEFAULT_AMPLITUDE",
    "DEFAULT_STIFFNESS",
    "DEFAULT_DAMPING",
    "DEFAULT_PHASE_OFFSET",
    "DEFAULT_MIN_AMPLITUDE",
]
