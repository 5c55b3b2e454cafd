"""First-move balancing.

Whoever has started fewer games starts the new one. On equal counts the
competitor ranked higher in the standings starts, which keeps the rule
simple to audit and fully deterministic.
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

from dataclasses import replace
from typing import Iterable, List, Mapping, Optional

from spreadpairing.models.match_record import MatchRecord
from spreadpairing.models.standing import Standing


def _rank_of(match: MatchRecord, competitor_id: str, ranks: Mapping[str, int]) -> int:
    rank = ranks.get(competitor_id)
    if rank:
        return rank
    stored = match.player1_rank if competitor_id == match.player1_id else match.player2_rank
    # Unranked competitors sort after every ranked one
    return stored or 1_000_000


def assign_first_move(
    match: MatchRecord,
    start_counts: Mapping[str, int],
    ranks: Optional[Mapping[str, int]] = None,
) -> str:
    """Choose who starts ``match``.

    Args:
        match: The newly formed match
        start_counts: Prior first-move starts per competitor (missing = 0)
        ranks: Standings positions; falls back to the ranks stored on the match

    Returns:
        Id of the competitor who moves first
    """
    ranks = ranks or {}
    starts1 = start_counts.get(match.player1_id, 0)
    starts2 = start_counts.get(match.player2_id, 0)
    if starts1 != starts2:
        return match.player1_id if starts1 < starts2 else match.player2_id

    rank1 = _rank_of(match, match.player1_id, ranks)
    rank2 = _rank_of(match, match.player2_id, ranks)
    if rank1 != rank2:
        return match.player1_id if rank1 < rank2 else match.player2_id
    return min(match.player1_id, match.player2_id)


class FirstMoveBalancer:
    """Assigns first moves for a finalized round."""

    def __init__(self, start_counts: Mapping[str, int], ranks: Mapping[str, int]):
        self.start_counts = dict(start_counts)
        self.ranks = dict(ranks)

    @classmethod
    def from_standings(cls, standings: Iterable[Standing]) -> "FirstMoveBalancer":
        standings = list(standings)
        return cls(
            {s.competitor_id: s.first_move_count for s in standings},
            {s.competitor_id: s.rank for s in standings},
        )

    def assign(self, match: MatchRecord) -> MatchRecord:
        """Return a copy of ``match`` with ``first_move_id`` filled in."""
        first = assign_first_move(match, self.start_counts, self.ranks)
        return replace(match, first_move_id=first)

    def assign_all(self, matches: Iterable[MatchRecord]) -> List[MatchRecord]:
        return [self.assign(match) for match in matches]
