"""Rematch ledger built from the committed pairing history."""

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

from collections import Counter
from typing import Any, Dict, Iterable, Optional, Tuple

from spreadpairing.models.match_record import MatchRecord
from spreadpairing.type_hints import PairKey


class RematchLedger:
    """Answers "have these two met?" in constant time.

    The ledger is built once per pairing run and is read-only afterwards.

    Attributes
    ----------
    previous_matches : collections.Counter
        Number of meetings keyed by ``frozenset({id_a, id_b})``.
    """

    __slots__ = ("_meetings",)

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()) -> None:
        meetings: Counter = Counter()
        for player1_id, player2_id in pairs:
            meetings[frozenset({player1_id, player2_id})] += 1
        self._meetings = meetings

    @classmethod
    def from_matches(
        cls, matches: Iterable[MatchRecord], before_round: Optional[int] = None
    ) -> "RematchLedger":
        """Build a ledger from committed match records."""
        return cls(
            (match.player1_id, match.player2_id)
            for match in matches
            if before_round is None or match.round_number < before_round
        )

    @property
    def previous_matches(self) -> Counter:
        return Counter(self._meetings)

    def has_played(self, player1_id: str, player2_id: str) -> bool:
        """Check if two competitors have previously played each other."""
        return frozenset({player1_id, player2_id}) in self._meetings

    def times_played(self, player1_id: str, player2_id: str) -> int:
        return self._meetings.get(frozenset({player1_id, player2_id}), 0)

    def __contains__(self, pair: PairKey) -> bool:
        return frozenset(pair) in self._meetings

    def __len__(self) -> int:
        return len(self._meetings)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize ledger to dictionary."""
        return {
            "previous_matches": [
                {"pair": sorted(pair), "count": count}
                for pair, count in sorted(
                    self._meetings.items(), key=lambda item: sorted(item[0])
                )
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RematchLedger":
        """Deserialize ledger from dictionary."""
        pairs = []
        for entry in data.get("previous_matches", []):
            player1_id, player2_id = map(str, entry["pair"])
            pairs.extend([(player1_id, player2_id)] * int(entry.get("count", 1)))
        return cls(pairs)
