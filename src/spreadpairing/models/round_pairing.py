"""RoundPairing data class."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from spreadpairing.models.match_record import ByeRecord, MatchRecord


@dataclass(frozen=True)
class RoundPairing:
    """Proposed pairings for a single round."""

    round_number: int
    matches: Tuple[MatchRecord, ...]
    bye: Optional[ByeRecord] = None
    clinched_ids: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def bye_competitor_id(self) -> Optional[str]:
        return self.bye.competitor_id if self.bye else None

    @property
    def rematches(self) -> List[MatchRecord]:
        return [match for match in self.matches if match.is_rematch]

    @property
    def warnings(self) -> List[str]:
        """Messages for every degraded pairing, ready to show a director."""
        return [
            f"Round {match.round_number}, table {match.table_number}: "
            f"{match.player1_id} and {match.player2_id} have already played"
            for match in self.rematches
        ]

    def paired_ids(self) -> List[str]:
        ids: List[str] = []
        for match in self.matches:
            ids.extend((match.player1_id, match.player2_id))
        return ids

    def match_for(self, competitor_id: str) -> Optional[MatchRecord]:
        for match in self.matches:
            if match.involves(competitor_id):
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round pairing to dictionary."""
        return {
            "round_number": self.round_number,
            "matches": [match.to_dict() for match in self.matches],
            "bye": self.bye.to_dict() if self.bye else None,
            "clinched_ids": sorted(self.clinched_ids),
        }


#  LocalWords:  RoundPairing
