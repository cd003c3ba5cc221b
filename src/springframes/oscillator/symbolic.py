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
Symbolic form of the damped cosine trajectory.

Builds the trajectory with SymPy and differentiates it symbolically, so the
hand-written closed forms in OscillatorModel can be checked against an
independent derivation. Also provides a numerical root refinement of the
velocity (scipy.optimize.brentq) to confirm the analytic extremum times.

Usage
-----
>>> from springframes.oscillator.symbolic import build_symbolic_trajectory
>>> traj = build_symbolic_trajectory()
>>> traj.velocity
-A*d*exp(-d*t)*cos(phi + t*sqrt(-d**2 + k)) - A*sqrt(-d**2 + k)*exp(-d*t)*sin(...)
>>>
>>> f_y, f_v = lambdify_trajectory(model)
>>> f_v(np.linspace(0, 1, 11))
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np
import sympy as sp
from scipy import optimize

from springframes.oscillator.model import OscillatorModel


@dataclass(frozen=True)
class SymbolicTrajectory:
    """
    SymPy expressions for one damped cosine.

    Attributes
    ----------
    t : sp.Symbol
        Time
    symbols : Dict[str, sp.Symbol]
        Parameter symbols keyed by OscillatorParameters field name
    omega : sp.Expr
        √(k - d²)
    envelope : sp.Expr
        A·e^(-d·t)
    position : sp.Expr
        envelope·cos(ω·t + φ)
    velocity : sp.Expr
        d(position)/dt, obtained with sp.diff
    extremum_time : sp.Expr
        (atan(-d/ω) + p·π - φ)/ω with integer symbol p
    p : sp.Symbol
        Extremum branch index
    """

    t: sp.Symbol
    symbols: Dict[str, sp.Symbol]
    omega: sp.Expr
    envelope: sp.Expr
    position: sp.Expr
    velocity: sp.Expr
    extremum_time: sp.Expr
    p: sp.Symbol


def build_symbolic_trajectory() -> SymbolicTrajectory:
    """Construct the symbolic trajectory and its time derivative."""
    t = sp.symbols("t", real=True, nonnegative=True)
    A, k = sp.symbols("A k", real=True, positive=True)
    d = sp.symbols("d", real=True, nonnegative=True)
    phi = sp.symbols("phi", real=True)
    p = sp.symbols("p", integer=True, nonnegative=True)

    omega = sp.sqrt(k - d**2)
    envelope = A * sp.exp(-d * t)
    position = envelope * sp.cos(omega * t + phi)
    velocity = sp.diff(position, t)
    extremum_time = (sp.atan(-d / omega) + p * sp.pi - phi) / omega

    return SymbolicTrajectory(
        t=t,
        symbols={
            "amplitude": A,
            "stiffness": k,
            "damping": d,
            "phase_offset": phi,
        },
        omega=omega,
        envelope=envelope,
        position=position,
        velocity=velocity,
        extremum_time=extremum_time,
        p=p,
    )


def substitute_parameters(expr: sp.Expr, traj: SymbolicTrajectory, model: OscillatorModel) -> sp.Expr:
    """Replace parameter symbols with the model's numeric values."""
    subs = {symbol: getattr(model, name) for name, symbol in traj.symbols.items()}
    return expr.subs(subs)


def lambdify_trajectory(
    model: OscillatorModel,
    traj: Optional[SymbolicTrajectory] = None,
) -> Tuple[Callable, Callable]:
    """
    Numerical position and velocity functions from the symbolic form.

    Returns
    -------
    (position_fn, velocity_fn)
        NumPy-vectorized callables of t
    """
    if traj is None:
        traj = build_symbolic_trajectory()

    position = substitute_parameters(traj.position, traj, model)
    velocity = substitute_parameters(traj.velocity, traj, model)

    return (
        sp.lambdify(traj.t, position, modules="numpy"),
        sp.lambdify(traj.t, velocity, modules="numpy"),
    )


def refine_extremum(model: OscillatorModel, t_guess: float, xtol: float = 1e-12) -> float:
    """
    Locate the velocity root nearest ``t_guess`` numerically.

    The bracket is half a period wide and centred on the guess; it holds
    exactly one sign change of the velocity when the guess is an extremum.

    Raises
    ------
    ValueError
        If ω = 0 (no oscillation) or the bracket holds no sign change
    """
    omega = model.angular_frequency()
    if omega == 0.0:
        raise ValueError("Cannot refine extrema of a non-oscillating model (omega = 0)")

    half_width = 0.5 * math.pi / omega
    lo = t_guess - half_width
    hi = t_guess + half_width
    v_lo = model.velocity(lo)
    v_hi = model.velocity(hi)
    if np.sign(v_lo) == np.sign(v_hi):
        raise ValueError(
            f"No velocity sign change in [{lo:.6g}, {hi:.6g}] around t={t_guess:.6g}"
        )

    return float(optimize.brentq(model.velocity, lo, hi, xtol=xtol))


__all__ = [
    "SymbolicTrajectory",
    "build_symbolic_trajectory",
    "substitute_parameters",
    "lambdify_trajectory",
    "refine_extremum",
]
