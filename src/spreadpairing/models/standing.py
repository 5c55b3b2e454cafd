"""Standing data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from spreadpairing.constants import DRAW_POINTS, WIN_POINTS


@dataclass(frozen=True)
class Standing:
    """Derived tournament record of one competitor.

    Standings are never stored; they are recomputed from the score history
    whenever they are requested.

    Attributes
    ----------
    competitor_id : str
        Competitor the record belongs to.
    name : str
        Display name copied from the roster.
    rating : int
        Seed rating copied from the roster.
    wins, losses, draws : int
        Game outcomes counted from recorded scores.
    points_for, points_against : int
        Totals of own and opponent scores across recorded games.
    games_played : int
        Number of recorded games. Byes are not games.
    first_move_count : int
        How many committed matches this competitor started.
    byes : int
        Rounds sat out.
    rank : int
        1-based position, 0 until ranked.
    """

    competitor_id: str
    name: str = ""
    rating: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points_for: int = 0
    points_against: int = 0
    games_played: int = 0
    first_move_count: int = 0
    byes: int = 0
    rank: int = 0

    @property
    def points(self) -> float:
        """Win = 1, draw = 0.5, loss = 0."""
        return self.wins * WIN_POINTS + self.draws * DRAW_POINTS

    @property
    def spread(self) -> int:
        """Own score minus opponent score across all recorded games."""
        return self.points_for - self.points_against

    def sort_key(self) -> Tuple[float, int, int, str]:
        """Key ordering standings by points, spread and rating, all descending.

        Competitor id breaks complete ties so the order is reproducible.
        """
        return (-self.points, -self.spread, -self.rating, self.competitor_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary, including derived values."""
        return {
            "competitor_id": self.competitor_id,
            "name": self.name,
            "rating": self.rating,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "points": self.points,
            "spread": self.spread,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "games_played": self.games_played,
            "first_move_count": self.first_move_count,
            "byes": self.byes,
            "rank": self.rank,
        }
