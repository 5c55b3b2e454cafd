"""Gibsonization: positions that are mathematically decided early.

A competitor is *clinched* at position K when nobody ranked below them can
reach their points total even by winning every remaining game while they lose
every remaining game. A competitor is *eliminated* from position K when their
best possible total still falls short of what the competitor at K already has.

Both checks run over standings sorted by the standings order, so the
highest points total below any position is simply the next entry.
"""

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

import math
from typing import Iterable, List, Optional, Set

from spreadpairing.constants import DEFAULT_GIBSON_BAND, WIN_POINTS
from spreadpairing.models.standing import Standing
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


def _ordered(standings: Iterable[Standing]) -> List[Standing]:
    return sorted(standings, key=Standing.sort_key)


def _check_remaining(remaining_rounds: int) -> None:
    if remaining_rounds < 0:
        raise ValueError(f"remaining_rounds must be >= 0, got {remaining_rounds}")


def contended_band(field_size: int, gibson_band: float = DEFAULT_GIBSON_BAND) -> int:
    """Number of top positions in which clinches are tracked."""
    if field_size <= 0:
        return 0
    return max(1, math.ceil(field_size * gibson_band))


def max_reachable_points(standing: Standing, remaining_rounds: int) -> float:
    """Points a competitor would have after winning every remaining game."""
    return standing.points + remaining_rounds * WIN_POINTS


def is_clinched_at(ranked: List[Standing], index: int, remaining_rounds: int) -> bool:
    """Check whether ``ranked[index]`` can no longer be caught from below.

    Args:
        ranked: Standings in standings order
        index: 0-based position to check
        remaining_rounds: Games left for every competitor

    Returns:
        True if the competitor holds their position or better whatever happens.
        The last-placed competitor is never reported as clinched.
    """
    if index + 1 >= len(ranked):
        return False
    return ranked[index].points > max_reachable_points(ranked[index + 1], remaining_rounds)


def detect_gibsonized(
    standings: Iterable[Standing],
    remaining_rounds: int,
    gibson_band: float = DEFAULT_GIBSON_BAND,
) -> Set[str]:
    """Return the ids of competitors who have clinched their position.

    Only positions inside the contended band (the top ``gibson_band`` of the
    field) are checked. The result is advisory: pairing uses it to keep
    clinched competitors away from contested games, never to drop them.

    Args:
        standings: Current standings
        remaining_rounds: Rounds still to play, including the one being paired
        gibson_band: Fraction of the field, from the top, to check

    Returns:
        Set of clinched competitor ids
    """
    _check_remaining(remaining_rounds)
    ranked = _ordered(standings)
    band = min(contended_band(len(ranked), gibson_band), len(ranked) - 1)
    clinched = {
        ranked[index].competitor_id
        for index in range(max(band, 0))
        if is_clinched_at(ranked, index, remaining_rounds)
    }
    if clinched:
        logger.info(
            "Gibsonized with %s round(s) remaining: %s",
            remaining_rounds,
            ", ".join(sorted(clinched)),
        )
    return clinched


def detect_eliminated(
    standings: Iterable[Standing],
    remaining_rounds: int,
    target_position: int = 1,
) -> Set[str]:
    """Return the ids of competitors who can no longer reach ``target_position``."""
    _check_remaining(remaining_rounds)
    ranked = _ordered(standings)
    if not 1 <= target_position <= len(ranked):
        return set()
    target_points = ranked[target_position - 1].points
    return {
        standing.competitor_id
        for standing in ranked[target_position:]
        if max_reachable_points(standing, remaining_rounds) < target_points
    }


def clinched_position(
    standings: Iterable[Standing], competitor_id: str, remaining_rounds: int
) -> Optional[int]:
    """Position a competitor has clinched, or None if it is still open."""
    _check_remaining(remaining_rounds)
    ranked = _ordered(standings)
    for index, standing in enumerate(ranked):
        if standing.competitor_id == competitor_id:
            if is_clinched_at(ranked, index, remaining_rounds):
                return index + 1
            return None
    return None


class GibsonizationDetector:
    """Detector bound to one contended-band setting."""

    def __init__(self, gibson_band: float = DEFAULT_GIBSON_BAND):
        self.gibson_band = gibson_band

    def detect(self, standings: Iterable[Standing], remaining_rounds: int) -> Set[str]:
        return detect_gibsonized(standings, remaining_rounds, self.gibson_band)

    def eliminated(
        self,
        standings: Iterable[Standing],
        remaining_rounds: int,
        target_position: int = 1,
    ) -> Set[str]:
        return detect_eliminated(standings, remaining_rounds, target_position)
