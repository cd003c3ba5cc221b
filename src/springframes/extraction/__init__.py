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
Extraction: extremum sequences and what is derived from them.

- maxima: MaximaExtractor, find_maxima
- keyframes: percentage stops of one animation cycle
- sampling: regular-grid trajectory arrays for plotting
"""

from .keyframes import build_keyframes, scale_displacements
from .maxima import DEFAULT_MAX_ITERATIONS, MaximaExtractor, find_maxima
from .sampling import normalize_to_initial, sample_trajectory, time_grid

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "MaximaExtractor",
    "find_maxima",
    "build_keyframes",
    "scale_displacements",
    "sample_trajectory",
    "time_grid",
    "normalize_to_initial",
]
