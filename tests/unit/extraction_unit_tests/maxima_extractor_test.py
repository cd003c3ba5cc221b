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
Unit Tests for MaximaExtractor
==============================

Covers:
- Reference scenario (A=100, k=150, d=3.5, φ=0.01, MIN_Y=0.05)
- Ordering and stopping rule
- Skipping of negative extremum roots
- Divergence detection (undamped, critical boundary, iteration cap)
- Non-positive thresholds
- Laziness and idempotence
"""

import math
import warnings

import numpy as np
import pytest

from springframes.exceptions import DivergentSeries
from springframes.extraction.maxima import (
    DEFAULT_MAX_ITERATIONS,
    MaximaExtractor,
    find_maxima,
)
from springframes.oscillator.model import OscillatorModel
from springframes.types.core import ExtremumSample


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def reference_model():
    return OscillatorModel(
        amplitude=100.0,
        stiffness=150.0,
        damping=3.5,
        phase_offset=0.01,
        min_amplitude=0.05,
    )


@pytest.fixture
def reference_maxima(reference_model):
    return MaximaExtractor(reference_model).extract()


# ============================================================================
# Reference Scenario
# ============================================================================


class TestReferenceScenario:
    def test_first_sample(self, reference_maxima):
        first = reference_maxima[0]
        assert isinstance(first, ExtremumSample)
        assert first.time == 0.0
        assert first.displacement == pytest.approx(99.995, abs=1e-3)

    def test_length(self, reference_maxima):
        # Index 0 gives a negative root; indices 1..9 are kept
        assert len(reference_maxima) == 10

    def test_last_sample_settled(self, reference_maxima):
        assert abs(reference_maxima[-1].displacement) <= 0.05

    def test_previous_sample_above_threshold(self, reference_maxima):
        assert abs(reference_maxima[-2].displacement) > 0.05

    def test_duration(self, reference_model, reference_maxima):
        assert reference_maxima[-1].time == pytest.approx(reference_model.time_of_extremum(9))
        assert reference_maxima[-1].time == pytest.approx(2.3835, abs=1e-3)

    def test_samples_match_model(self, reference_model, reference_maxima):
        for p, sample in zip(range(1, 10), reference_maxima[1:]):
            assert sample.time == reference_model.time_of_extremum(p)
            assert sample.displacement == reference_model.position(sample.time)

    def test_samples_are_velocity_roots(self, reference_model, reference_maxima):
        for sample in reference_maxima[1:]:
            assert reference_model.velocity(sample.time) == pytest.approx(0.0, abs=1e-9)

    def test_extrema_alternate_in_sign(self, reference_maxima):
        signs = np.sign([s.displacement for s in reference_maxima[1:]])
        assert np.all(signs[1:] == -signs[:-1])

    def test_find_maxima_shorthand(self, reference_model, reference_maxima):
        assert find_maxima(reference_model) == reference_maxima


# ============================================================================
# Ordering and Stopping
# ============================================================================


class TestOrderingAndStopping:
    @pytest.mark.parametrize("phase_offset", [-math.pi, -1.0, 0.0, 0.01, 1.5, 3.0, math.pi])
    def test_strictly_increasing(self, phase_offset):
        model = OscillatorModel(phase_offset=phase_offset)
        times = [s.time for s in MaximaExtractor(model).extract()]
        assert times[0] == 0.0
        assert all(b > a for a, b in zip(times, times[1:]))

    @pytest.mark.parametrize("phase_offset", [1.5, 3.0, math.pi])
    def test_negative_roots_skipped(self, phase_offset):
        model = OscillatorModel(phase_offset=phase_offset)
        maxima = MaximaExtractor(model).extract()
        assert model.time_of_extremum(0) < 0
        assert all(s.time > 0 for s in maxima[1:])

    def test_settled_initial_sample_returned_alone(self):
        model = OscillatorModel(amplitude=0.01, min_amplitude=0.05)
        assert MaximaExtractor(model).extract() == [ExtremumSample(0.0, model.position(0.0))]

    def test_zero_amplitude(self):
        model = OscillatorModel(amplitude=0.0)
        assert MaximaExtractor(model).extract() == [ExtremumSample(0.0, 0.0)]

    def test_larger_threshold_gives_shorter_sequence(self, reference_model, reference_maxima):
        coarse = MaximaExtractor(reference_model.with_changes(min_amplitude=5.0)).extract()
        assert len(coarse) < len(reference_maxima)
        assert abs(coarse[-1].displacement) <= 5.0

    def test_idempotent(self, reference_model):
        extractor = MaximaExtractor(reference_model)
        assert extractor.extract() == extractor.extract()

    def test_negative_amplitude(self):
        model = OscillatorModel(amplitude=-100.0)
        maxima = MaximaExtractor(model).extract()
        assert maxima[0].displacement < 0
        assert abs(maxima[-1].displacement) <= model.min_amplitude


# ============================================================================
# Divergence
# ============================================================================


class TestDivergence:
    def test_undamped_diverges(self):
        model = OscillatorModel(damping=0.0, min_amplitude=0.05)
        with pytest.raises(DivergentSeries) as exc_info:
            MaximaExtractor(model).extract()
        assert "damping = 0" in exc_info.value.reason
        assert exc_info.value.min_amplitude == 0.05

    def test_undamped_raises_before_iterating(self):
        model = OscillatorModel(damping=0.0)
        with pytest.raises(DivergentSeries):
            MaximaExtractor(model).iter_extrema()

    def test_undamped_but_already_settled(self):
        model = OscillatorModel(amplitude=0.01, damping=0.0)
        assert len(MaximaExtractor(model).extract()) == 1

    def test_critical_boundary_diverges(self):
        model = OscillatorModel(stiffness=4.0, damping=2.0)
        with pytest.raises(DivergentSeries, match="does not oscillate"):
            MaximaExtractor(model).extract()

    def test_iteration_cap(self, reference_model):
        with pytest.raises(DivergentSeries) as exc_info:
            MaximaExtractor(reference_model, max_iterations=3).extract()
        assert exc_info.value.iterations == 3

    def test_cap_exactly_sufficient(self, reference_model, reference_maxima):
        # Indices 1..9 are tried; index 0 precedes the first non-negative root
        assert MaximaExtractor(reference_model, max_iterations=9).extract() == reference_maxima
        with pytest.raises(DivergentSeries):
            MaximaExtractor(reference_model, max_iterations=8).extract()

    def test_divergent_series_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            find_maxima(OscillatorModel(damping=0.0))

    @pytest.mark.parametrize("max_iterations", [0, -5])
    def test_invalid_cap(self, reference_model, max_iterations):
        with pytest.raises(ValueError):
            MaximaExtractor(reference_model, max_iterations=max_iterations)

    def test_default_cap(self, reference_model):
        assert MaximaExtractor(reference_model).max_iterations == DEFAULT_MAX_ITERATIONS


# ============================================================================
# Non-positive Thresholds and Diagnostics
# ============================================================================


class TestThresholdDiagnostics:
    def test_zero_threshold_terminates_by_underflow(self, reference_model):
        model = reference_model.with_changes(min_amplitude=0.0)
        with pytest.warns(UserWarning, match="min_amplitude"):
            maxima = MaximaExtractor(model).extract()
        assert maxima[-1].displacement == 0.0
        assert len(maxima) > 10

    def test_negative_threshold_hits_cap(self, reference_model):
        model = reference_model.with_changes(min_amplitude=-1.0)
        with pytest.warns(UserWarning):
            with pytest.raises(DivergentSeries) as exc_info:
                MaximaExtractor(model, max_iterations=2000).extract()
        assert exc_info.value.iterations == 2000

    def test_phase_outside_range_warns(self):
        model = OscillatorModel(phase_offset=7.0)
        with pytest.warns(UserWarning, match="phase_offset"):
            maxima = MaximaExtractor(model).extract()
        assert all(s.time > 0 for s in maxima[1:])

    def test_large_phase_offset_settles(self):
        model = OscillatorModel(phase_offset=1e6)
        with pytest.warns(UserWarning, match="phase_offset"):
            maxima = MaximaExtractor(model).extract()
        times = [s.time for s in maxima]
        assert all(b > a for a, b in zip(times, times[1:]))
        assert abs(maxima[-1].displacement) <= model.min_amplitude

    def test_leading_negative_roots_not_counted(self):
        model = OscillatorModel(phase_offset=1e6)
        with pytest.warns(UserWarning):
            maxima = MaximaExtractor(model, max_iterations=20).extract()
        assert model.time_of_extremum(100_000) < 0
        assert abs(maxima[-1].displacement) <= model.min_amplitude

    def test_no_warning_for_reference(self, reference_model):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            MaximaExtractor(reference_model).extract()


# ============================================================================
# Laziness
# ============================================================================


class TestLazyIteration:
    def test_first_sample_available_immediately(self, reference_model):
        iterator = MaximaExtractor(reference_model).iter_extrema()
        assert next(iterator) == ExtremumSample(0.0, reference_model.position(0.0))

    def test_iteration_matches_extract(self, reference_model, reference_maxima):
        assert list(MaximaExtractor(reference_model).iter_extrema()) == reference_maxima

    def test_cap_raises_during_iteration(self, reference_model):
        iterator = MaximaExtractor(reference_model, max_iterations=3).iter_extrema()
        collected = [next(iterator) for _ in range(4)]
        assert len(collected) == 4
        with pytest.raises(DivergentSeries):
            next(iterator)

    def test_repr(self, reference_model):
        assert "max_iterations" in repr(MaximaExtractor(reference_model))
