"""Competitor data class."""

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
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Competitor:
    """A registered competitor.

    Competitors are read-only inputs to the engine. Ratings may be edited
    administratively, which produces a new ``Competitor`` value.

    Attributes
    ----------
    id : str
        Stable identity used by matches, scores and standings.
    name : str
        Display name.
    rating : int
        Seed rating, used as the last standings tie-break and for round-robin
        seeding.
    tournament_id : str, optional
        Tournament the competitor is registered in.
    team_name : str, optional
        Team affiliation, used only for team standings.
    """

    id: str
    name: str
    rating: int = 0
    tournament_id: Optional[str] = None
    team_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize competitor to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "tournament_id": self.tournament_id,
            "team_name": self.team_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Competitor":
        """Deserialize competitor from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            rating=int(data.get("rating") or 0),
            tournament_id=data.get("tournament_id"),
            team_name=data.get("team_name"),
        )
