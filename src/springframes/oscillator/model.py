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
Closed-form underdamped harmonic oscillator.

Physical System:
---------------
A mass on a spring with viscous damping, released with some initial
displacement, follows the damped cosine

    y(t) = A·e^(-d·t)·cos(ω·t + φ)

where:
    A : amplitude scale at t=0
    d : damping coefficient (decay rate of the envelope) [1/s]
    ω = √(k - d²) : damped angular frequency [rad/s]
    φ : phase offset [rad]

Only the underdamped regime (k - d² >= 0) is modelled. Critical and
overdamped motion do not oscillate and have no extrema to animate.

Derived quantities:

    envelope        E(t)  = A·e^(-d·t)
    envelope rate   E'(t) = -d·E(t)
    velocity        y'(t) = E'(t)·cos(ω·t + φ) - ω·E(t)·sin(ω·t + φ)

Setting y'(t) = 0 gives tan(ω·t + φ) = -d/ω, so the extrema sit at

    t_p = (atan(-d/ω) + p·π - φ) / ω,   p = 0, 1, 2, ...

Small p can give t_p < 0 when φ is large; those roots precede the motion.
"""

import math
from typing import Any, Union

import numpy as np

from springframes.exceptions import InvalidConfiguration
from springframes.oscillator.parameters import (
    DEFAULT_AMPLITUDE,
    DEFAULT_DAMPING,
    DEFAULT_MIN_AMPLITUDE,
    DEFAULT_PHASE_OFFSET,
    DEFAULT_STIFFNESS,
    OscillatorParameters,
)
from springframes.types.core import TimeLike


class OscillatorModel:
    """
    Pure evaluation of a damped cosine trajectory.

    The model is immutable: changing a parameter means building a new
    instance (see ``with_changes``). Every evaluation method accepts a
    scalar time, returning a Python float, or a NumPy array of times,
    returning an array of the same shape.

    Parameters
    ----------
    amplitude : float, default=100.0
        A, initial displacement scale
    stiffness : float, default=150.0
        k, spring stiffness. Must satisfy k - damping² >= 0
    damping : float, default=3.5
        d, damping coefficient. Sign is dropped (abs)
    phase_offset : float, default=0.01
        φ, phase shift [rad]
    min_amplitude : float, default=0.05
        Settling threshold used by maxima extraction

    Raises
    ------
    InvalidConfiguration
        If stiffness - damping² < 0

    Examples
    --------
    >>> model = OscillatorModel(amplitude=100, stiffness=150, damping=3.5,
    ...                         phase_offset=0.01)
    >>> model.angular_frequency()
    11.7367...
    >>> model.position(0.0)
    99.995...
    >>>
    >>> t = np.linspace(0, 2, 201)
    >>> y = model.position(t)      # (201,) array
    >>>
    >>> # Parameter edits rebuild the model
    >>> softer = model.with_changes(stiffness=80.0)
    """

    __slots__ = ("_parameters", "_omega")

    def __init__(
        self,
        amplitude: float = DEFAULT_AMPLITUDE,
        stiffness: float = DEFAULT_STIFFNESS,
        damping: float = DEFAULT_DAMPING,
        phase_offset: float = DEFAULT_PHASE_OFFSET,
        min_amplitude: float = DEFAULT_MIN_AMPLITUDE,
    ):
        parameters = OscillatorParameters(
            amplitude=amplitude,
            stiffness=stiffness,
            damping=damping,
            phase_offset=phase_offset,
            min_amplitude=min_amplitude,
        )

        discriminant = parameters.discriminant
        if discriminant < 0:
            raise InvalidConfiguration(
                stiffness=parameters.stiffness,
                damping=parameters.damping,
                discriminant=discriminant,
            )

        object.__setattr__(self, "_parameters", parameters)
        object.__setattr__(self, "_omega", math.sqrt(discriminant))

    @classmethod
    def from_parameters(cls, parameters: OscillatorParameters) -> "OscillatorModel":
        """Build a model from an OscillatorParameters instance."""
        return cls(**parameters.as_dict())

    def with_changes(self, **changes: Any) -> "OscillatorModel":
        """
        Return a new model with some parameters changed.

        Raises
        ------
        ValueError
            If a parameter name is unknown
        InvalidConfiguration
            If the new parameters are not underdamped
        """
        return OscillatorModel.from_parameters(self._parameters.replace(**changes))

    # ========================================================================
    # Immutability
    # ========================================================================

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable; use with_changes()")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, OscillatorModel):
            return NotImplemented
        return self._parameters == other._parameters

    def __hash__(self):
        return hash(self._parameters)

    def __repr__(self):
        p = self._parameters
        return (
            f"OscillatorModel(amplitude={p.amplitude}, stiffness={p.stiffness}, "
            f"damping={p.damping}, phase_offset={p.phase_offset}, "
            f"min_amplitude={p.min_amplitude})"
        )

    # ========================================================================
    # Parameter Access
    # ========================================================================

    @property
    def parameters(self) -> OscillatorParameters:
        return self._parameters

    @property
    def amplitude(self) -> float:
        return self._parameters.amplitude

    @property
    def stiffness(self) -> float:
        return self._parameters.stiffness

    @property
    def damping(self) -> float:
        return self._parameters.damping

    @property
    def phase_offset(self) -> float:
        return self._parameters.phase_offset

    @property
    def min_amplitude(self) -> float:
        return self._parameters.min_amplitude

    # ========================================================================
    # Evaluation
    # ========================================================================

    def angular_frequency(self) -> float:
        """
        Damped angular frequency ω = √(k - d²) [rad/s].

        Always defined: the construction check guarantees k - d² >= 0.
        """
        return self._omega

    def period(self) -> float:
        """Oscillation period 2π/ω (inf when ω = 0)."""
        if self._omega == 0.0:
            return math.inf
        return 2.0 * math.pi / self._omega

    def damping_ratio(self) -> float:
        """
        Damping ratio ζ = d/√k.

        ζ < 1 for every accepted configuration, ζ = 1 at the critical
        boundary. Diagnostic only; the evaluation formulas use d directly.
        """
        if self.stiffness == 0.0:
            # k = d² = 0: no spring and no damping
            return 0.0
        return self.damping / math.sqrt(self.stiffness)

    def envelope(self, t: TimeLike) -> Union[float, np.ndarray]:
        """Decaying amplitude bound E(t) = A·e^(-d·t)."""
        return _as_output(self.amplitude * np.exp(-self.damping * np.asarray(t, dtype=float)), t)

    def envelope_rate(self, t: TimeLike) -> Union[float, np.ndarray]:
        """Envelope derivative E'(t) = -d·E(t)."""
        return _as_output(-self.damping * np.asarray(self.envelope(t)), t)

    def position(self, t: TimeLike) -> Union[float, np.ndarray]:
        """
        Displacement y(t) = E(t)·cos(ω·t + φ).

        Examples
        --------
        >>> model.position(0.0)
        99.995...
        >>> model.position(np.array([0.0, 0.1, 0.2]))
        array([...])
        """
        t_arr = np.asarray(t, dtype=float)
        phase = self._omega * t_arr + self.phase_offset
        return _as_output(np.asarray(self.envelope(t_arr)) * np.cos(phase), t)

    def velocity(self, t: TimeLike) -> Union[float, np.ndarray]:
        """
        Velocity y'(t), exact derivative of ``position``.

        Product rule on the envelope and oscillatory factors:

            y'(t) = E'(t)·cos(ω·t + φ) - ω·E(t)·sin(ω·t + φ)
        """
        t_arr = np.asarray(t, dtype=float)
        omega = self._omega
        phase = omega * t_arr + self.phase_offset
        env = np.asarray(self.envelope(t_arr))
        env_rate = -self.damping * env
        return _as_output(env_rate * np.cos(phase) - omega * env * np.sin(phase), t)

    def time_of_extremum(self, p: Union[int, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Time of the p-th root of y'(t) = 0.

            t_p = (atan(-d/ω) + p·π - φ) / ω

        atan(-d/ω) lies in (-π/2, 0], so successive p step through every
        zero crossing of the velocity, alternating peaks and troughs.

        Parameters
        ----------
        p : int or array of int
            Branch index, p >= 0

        Returns
        -------
        float or ndarray
            Extremum time. May be negative for small p when φ is large;
            callers discard those. Non-finite when ω = 0.

        Examples
        --------
        >>> model.time_of_extremum(0)
        -0.0...
        >>> model.time_of_extremum(1)
        0.24...
        """
        omega = self._omega
        p_arr = np.asarray(p, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            base = np.arctan(np.divide(-self.damping, omega))
            t_p = np.divide(base + p_arr * np.pi - self.phase_offset, omega)
        return _as_output(t_p, p)


def _as_output(value, like):
    """Return a Python float for scalar input, an ndarray otherwise."""
    if np.ndim(like) == 0:
        return float(value)
    return np.asarray(value)


__all__ = ["OscillatorModel"]
