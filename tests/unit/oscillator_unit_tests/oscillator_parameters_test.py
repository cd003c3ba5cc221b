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
Unit Tests for OscillatorParameters
"""

import dataclasses

import pytest

from springframes.oscillator.parameters import (
    DEFAULT_AMPLITUDE,
    DEFAULT_DAMPING,
    DEFAULT_MIN_AMPLITUDE,
    DEFAULT_PHASE_OFFSET,
    DEFAULT_STIFFNESS,
    OscillatorParameters,
)


class TestDefaults:
    def test_default_values(self):
        params = OscillatorParameters()
        assert params.amplitude == DEFAULT_AMPLITUDE == 100.0
        assert params.stiffness == DEFAULT_STIFFNESS == 150.0
        assert params.damping == DEFAULT_DAMPING == 3.5
        assert params.phase_offset == DEFAULT_PHASE_OFFSET == 0.01
        assert params.min_amplitude == DEFAULT_MIN_AMPLITUDE == 0.05

    def test_values_coerced_to_float(self):
        params = OscillatorParameters(amplitude=10, stiffness=20, damping=1, phase_offset=0, min_amplitude=1)
        for value in params.as_dict().values():
            assert isinstance(value, float)

    def test_damping_absolute_value(self):
        assert OscillatorParameters(damping=-2.5).damping == 2.5

    def test_discriminant(self):
        assert OscillatorParameters(stiffness=10.0, damping=5.0).discriminant == pytest.approx(-15.0)

    def test_no_underdamping_check_on_parameters(self):
        """Only model construction enforces k - d² >= 0."""
        params = OscillatorParameters(stiffness=10.0, damping=5.0)
        assert params.stiffness == 10.0


class TestImmutability:
    def test_frozen(self):
        params = OscillatorParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.stiffness = 1.0

    def test_replace_builds_new_instance(self):
        params = OscillatorParameters()
        edited = params.replace(stiffness=200.0, damping=-1.0)
        assert edited.stiffness == 200.0
        assert edited.damping == 1.0
        assert params.stiffness == 150.0

    def test_replace_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown oscillator parameter"):
            OscillatorParameters().replace(template="x")

    def test_hashable(self):
        assert hash(OscillatorParameters()) == hash(OscillatorParameters())


class TestDictConversion:
    def test_round_trip(self):
        params = OscillatorParameters(amplitude=5.0, phase_offset=-1.0)
        assert OscillatorParameters.from_dict(params.as_dict()) == params

    def test_aliases(self):
        params = OscillatorParameters.from_dict({"A": 50, "k": 200, "damping": 2, "offset": 0.5, "MIN_Y": 0.1})
        assert params == OscillatorParameters(
            amplitude=50.0,
            stiffness=200.0,
            damping=2.0,
            phase_offset=0.5,
            min_amplitude=0.1,
        )

    def test_missing_keys_use_defaults(self):
        params = OscillatorParameters.from_dict({"k": 300})
        assert params.stiffness == 300.0
        assert params.amplitude == DEFAULT_AMPLITUDE

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="template"):
            OscillatorParameters.from_dict({"template": "(val) => val"})

    def test_duplicate_via_alias(self):
        with pytest.raises(ValueError, match="more than once"):
            OscillatorParameters.from_dict({"A": 1.0, "amplitude": 2.0})
