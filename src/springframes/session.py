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
Oscillator Session

Parameter-change contract for editing surfaces. The session owns the
current parameter set; every change rebuilds the model and re-runs
extraction from scratch, then hands the fresh result to subscribers.
There is no incremental update path.

Design Philosophy
-----------------
- Rebuild on edit: parameters and models are immutable
- All-or-nothing: a change that fails (invalid configuration, divergent
  series) leaves the previous state in place and re-raises
- One-way data flow: subscribers receive results, never the session

Usage
-----
>>> session = OscillatorSession()
>>> seen = []
>>> session.subscribe(seen.append)
>>> result = session.update(damping=2.0)
>>> seen[-1] is result
True
>>> session.parameters.damping
2.0
>>>
>>> # Failed edits roll back
>>> try:
...     session.update(stiffness=1.0)
... except InvalidConfiguration:
...     pass
>>> session.parameters.stiffness
150.0

Not thread-safe: guard concurrent updates externally.
"""

from typing import Any, List, Optional

from springframes.extraction.keyframes import build_keyframes
from springframes.extraction.maxima import DEFAULT_MAX_ITERATIONS, MaximaExtractor
from springframes.oscillator.model import OscillatorModel
from springframes.oscillator.parameters import OscillatorParameters
from springframes.types.core import ResultCallback
from springframes.types.results import ExtractionResult


def compute_result(
    parameters: OscillatorParameters,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> ExtractionResult:
    """
    Build model, maxima and keyframes for one parameter set.

    Raises
    ------
    InvalidConfiguration
        If the parameters are not underdamped
    DivergentSeries
        If extraction does not settle
    """
    model = OscillatorModel.from_parameters(parameters)
    maxima = MaximaExtractor(model, max_iterations=max_iterations).extract()
    return {
        "parameters": parameters,
        "model": model,
        "maxima": maxima,
        "keyframes": build_keyframes(maxima),
    }


class OscillatorSession:
    """
    Holds the current oscillator and notifies listeners on change.

    Parameters
    ----------
    parameters : OscillatorParameters, optional
        Initial parameters (defaults of OscillatorParameters when omitted)
    max_iterations : int
        Iteration cap passed to MaximaExtractor

    Raises
    ------
    InvalidConfiguration, DivergentSeries
        If the initial parameters cannot be extracted
    """

    def __init__(
        self,
        parameters: Optional[OscillatorParameters] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        if parameters is None:
            parameters = OscillatorParameters()
        self.max_iterations = max_iterations
        self._listeners: List[ResultCallback] = []
        self._result = compute_result(parameters, max_iterations)

    @property
    def result(self) -> ExtractionResult:
        return self._result

    @property
    def parameters(self) -> OscillatorParameters:
        return self._result["parameters"]

    @property
    def model(self) -> OscillatorModel:
        return self._result["model"]

    def subscribe(self, callback: ResultCallback) -> None:
        """Register ``callback``; it is called with each new result."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: ResultCallback) -> None:
        """
        Remove ``callback``.

        Raises
        ------
        ValueError
            If the callback was not subscribed
        """
        try:
            self._listeners.remove(callback)
        except ValueError:
            raise ValueError(f"Callback {callback!r} is not subscribed") from None

    def update(self, **changes: Any) -> ExtractionResult:
        """
        Apply parameter changes, rebuild, re-extract and notify.

        Returns
        -------
        ExtractionResult
            The new current result

        Raises
        ------
        ValueError
            Unknown parameter name
        InvalidConfiguration
            New parameters are not underdamped (state unchanged)
        DivergentSeries
            New parameters never settle (state unchanged)
        """
        parameters = self.parameters.replace(**changes)
        result = compute_result(parameters, self.max_iterations)
        self._result = result
        for callback in list(self._listeners):
            callback(result)
        return result

    def reset(self, parameters: Optional[OscillatorParameters] = None) -> ExtractionResult:
        """Replace all parameters at once (defaults when omitted) and notify."""
        if parameters is None:
            parameters = OscillatorParameters()
        return self.update(**parameters.as_dict())


__all__ = [
    "compute_result",
    "OscillatorSession",
]
