"""Caller-owned draft of hypothetical scores for what-if simulation."""

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

from typing import Dict, Iterable, List, Optional, Tuple

from spreadpairing.constants import DEFAULT_DRAFT_SCORES
from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.models.match_record import MatchRecord, ScoreRecord
from spreadpairing.type_hints import PairKey
from spreadpairing.utils.validation import validate_score_strict


class ScoreDraft:
    """Hypothetical scores for the pending matches of one round.

    Every pending match starts with the default score (player 1 wins 400-350).
    Clearing a match leaves it unplayed in the simulation. The draft only
    ever produces :class:`ScoreRecord` values for the simulator; it never
    touches real history.
    """

    def __init__(
        self,
        matches: Iterable[MatchRecord],
        default_scores: Optional[Tuple[int, int]] = DEFAULT_DRAFT_SCORES,
    ) -> None:
        self.matches: List[MatchRecord] = list(matches)
        self._by_key: Dict[PairKey, MatchRecord] = {}
        for match in self.matches:
            if match.pair_key in self._by_key:
                raise DataIntegrityError(
                    f"{match.player1_id} vs {match.player2_id} is pending twice"
                )
            self._by_key[match.pair_key] = match
        self._scores: Dict[PairKey, Tuple[int, int]] = {}
        if default_scores is not None:
            for match in self.matches:
                self.set_score(match, *default_scores)

    def _key_for(self, match: MatchRecord) -> PairKey:
        if match.pair_key not in self._by_key:
            raise DataIntegrityError(
                f"{match.player1_id} vs {match.player2_id} is not a pending match"
            )
        return match.pair_key

    def set_score(self, match: MatchRecord, player1_score: int, player2_score: int) -> None:
        """Set the hypothetical score of ``match`` (scores in its player order)."""
        self._scores[self._key_for(match)] = (
            validate_score_strict(player1_score),
            validate_score_strict(player2_score),
        )

    def clear(self, match: MatchRecord) -> None:
        """Leave ``match`` unplayed in the simulation."""
        self._scores.pop(self._key_for(match), None)

    def score_of(self, match: MatchRecord) -> Optional[Tuple[int, int]]:
        return self._scores.get(self._key_for(match))

    def copy(self) -> "ScoreDraft":
        """Independent copy, for saving a scenario."""
        draft = ScoreDraft(self.matches, default_scores=None)
        draft._scores = dict(self._scores)
        return draft

    def scores(self) -> List[ScoreRecord]:
        """Score records for every scored match, in table order."""
        records = []
        for match in self.matches:
            score = self._scores.get(match.pair_key)
            if score is not None:
                records.append(ScoreRecord(match, score[0], score[1]))
        return records

    def __len__(self) -> int:
        return len(self._scores)
