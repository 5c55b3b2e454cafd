"""Bye selection for odd fields."""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import List, Optional, Sequence, Tuple

from spreadpairing.models.standing import Standing


def select_bye(ranked: Sequence[Standing]) -> Standing:
    """Pick the lowest-ranked competitor among those with the fewest byes.

    In practice that is the lowest-ranked competitor who has not sat out yet;
    once everyone has had a bye the rotation starts again from the bottom.
    """
    fewest = min(standing.byes for standing in ranked)
    for standing in reversed(ranked):
        if standing.byes == fewest:
            return standing
    raise ValueError("Cannot select a bye from an empty field")


def split_bye(ranked: Sequence[Standing]) -> Tuple[List[Standing], Optional[Standing]]:
    """Remove the bye from an odd field.

    Returns:
        Tuple of (even-sized pool in standings order, bye or None)
    """
    pool = list(ranked)
    if len(pool) % 2 == 0:
        return pool, None
    bye = select_bye(pool)
    pool = [s for s in pool if s.competitor_id != bye.competitor_id]
    return pool, bye
