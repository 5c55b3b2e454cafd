"""What-if standings simulation.

Applies hypothetical scores for a round's pending matches to a copy of the
standings, re-ranks, and annotates each competitor with how the result would
move them. Tags fire only when a boundary is crossed (podium, lead, clinch,
elimination) or the rank change is large.
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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set

from spreadpairing.constants import (
    DEFAULT_BIG_MOVE_THRESHOLD,
    DEFAULT_PODIUM_SIZE,
    TAG_BIG_DROP,
    TAG_BIG_JUMP,
    TAG_CLINCHES,
    TAG_ELIMINATED,
    TAG_FALLS_FROM_PODIUM,
    TAG_LOSES_LEAD,
    TAG_MOVES_TO_PODIUM,
    TAG_TAKES_LEAD,
)
from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.models.match_record import MatchRecord, ScoreRecord
from spreadpairing.models.standing import Standing
from spreadpairing.standings.calculator import StandingTally, rank_standings
from spreadpairing.standings.gibsonization import clinched_position, detect_eliminated
from spreadpairing.type_hints import ImpactTags, PairKey
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class AnnotatedStanding:
    """A simulated standing with its movement relative to the real one.

    Attributes
    ----------
    standing : Standing
        Projected standing after the hypothetical scores.
    previous_rank : int
        Rank before the round.
    rank_change : int
        ``previous_rank - standing.rank``; positive means moved up.
    tags : list of str
        Human readable impact tags.
    """

    standing: Standing
    previous_rank: int
    rank_change: int
    tags: ImpactTags = field(default_factory=list)

    @property
    def competitor_id(self) -> str:
        return self.standing.competitor_id

    @property
    def rank(self) -> int:
        return self.standing.rank

    def to_dict(self) -> Dict[str, Any]:
        data = self.standing.to_dict()
        data.update(
            previous_rank=self.previous_rank,
            rank_change=self.rank_change,
            tags=list(self.tags),
        )
        return data


def _index_pending(pending_matches: Iterable[MatchRecord]) -> Dict[PairKey, MatchRecord]:
    pending: Dict[PairKey, MatchRecord] = {}
    for match in pending_matches:
        if match.pair_key in pending:
            raise DataIntegrityError(
                f"{match.player1_id} vs {match.player2_id} is pending more than once"
            )
        pending[match.pair_key] = match
    return pending


class ImpactSimulator:
    """Projects standings for hypothetical round results.

    Args:
        podium_size: Positions that count as the podium
        big_move_threshold: Absolute rank change tagged as a big jump or drop
    """

    def __init__(
        self,
        podium_size: int = DEFAULT_PODIUM_SIZE,
        big_move_threshold: int = DEFAULT_BIG_MOVE_THRESHOLD,
    ):
        self.podium_size = podium_size
        self.big_move_threshold = big_move_threshold

    def simulate(
        self,
        standings_before: Sequence[Standing],
        pending_matches: Iterable[MatchRecord],
        hypothetical_scores: Iterable[ScoreRecord],
        remaining_rounds: int = 0,
    ) -> List[AnnotatedStanding]:
        """Project standings as if ``hypothetical_scores`` had been recorded.

        Args:
            standings_before: Real standings entering the round; never modified
            pending_matches: Matches of the round being simulated
            hypothetical_scores: Scores for some or all pending matches
            remaining_rounds: Rounds still to play after this one

        Returns:
            Annotated standings in projected rank order

        Raises:
            DataIntegrityError: If a score is for a match that is not pending,
                a match is scored twice, or a competitor is not in the standings
        """
        before = rank_standings(standings_before)
        tallies: Dict[str, StandingTally] = {}
        for standing in before:
            if standing.competitor_id in tallies:
                raise DataIntegrityError(
                    f"Competitor {standing.competitor_id!r} appears twice in the standings"
                )
            tallies[standing.competitor_id] = StandingTally.from_standing(standing)

        pending = _index_pending(pending_matches)
        scored: Set[PairKey] = set()
        for score in hypothetical_scores:
            key = score.match.pair_key
            if key not in pending:
                raise DataIntegrityError(
                    f"Hypothetical score for {score.match.player1_id} vs "
                    f"{score.match.player2_id} does not belong to a pending match"
                )
            if key in scored:
                raise DataIntegrityError(
                    f"{score.match.player1_id} vs {score.match.player2_id} is scored twice"
                )
            scored.add(key)
            for competitor_id in key:
                if competitor_id not in tallies:
                    raise DataIntegrityError(
                        f"Competitor {competitor_id!r} is not in the standings"
                    )
            match = score.match
            tallies[match.player1_id].record_game(score.player1_score, score.player2_score)
            tallies[match.player2_id].record_game(score.player2_score, score.player1_score)

        after = rank_standings(tally.to_standing() for tally in tallies.values())
        logger.debug(
            "Simulated %s of %s pending matches with %s round(s) remaining",
            len(scored),
            len(pending),
            remaining_rounds,
        )
        return self._annotate(before, after, remaining_rounds)

    def _annotate(
        self,
        before: List[Standing],
        after: List[Standing],
        remaining_rounds: int,
    ) -> List[AnnotatedStanding]:
        previous_ranks = {s.competitor_id: s.rank for s in before}
        eliminated_before = detect_eliminated(before, remaining_rounds + 1)
        eliminated_after = detect_eliminated(after, remaining_rounds)

        annotated = []
        for standing in after:
            competitor_id = standing.competitor_id
            old_rank = previous_ranks[competitor_id]
            new_rank = standing.rank
            change = old_rank - new_rank
            tags: List[str] = []

            if abs(change) >= self.big_move_threshold:
                tags.append(TAG_BIG_JUMP if change > 0 else TAG_BIG_DROP)
            if new_rank <= self.podium_size < old_rank:
                tags.append(TAG_MOVES_TO_PODIUM)
            elif old_rank <= self.podium_size < new_rank:
                tags.append(TAG_FALLS_FROM_PODIUM)
            if new_rank == 1 and old_rank != 1:
                tags.append(TAG_TAKES_LEAD)
            elif old_rank == 1 and new_rank != 1:
                tags.append(TAG_LOSES_LEAD)
            if competitor_id in eliminated_after and competitor_id not in eliminated_before:
                tags.append(TAG_ELIMINATED)
            if (
                clinched_position(after, competitor_id, remaining_rounds) == 1
                and clinched_position(before, competitor_id, remaining_rounds + 1) != 1
            ):
                tags.append(TAG_CLINCHES)

            annotated.append(AnnotatedStanding(standing, old_rank, change, tags))
        return annotated


def simulate(
    standings_before: Sequence[Standing],
    pending_matches: Iterable[MatchRecord],
    hypothetical_scores: Iterable[ScoreRecord],
    remaining_rounds: int = 0,
    podium_size: int = DEFAULT_PODIUM_SIZE,
    big_move_threshold: int = DEFAULT_BIG_MOVE_THRESHOLD,
) -> List[AnnotatedStanding]:
    """Functional form of :meth:`ImpactSimulator.simulate`."""
    simulator = ImpactSimulator(podium_size, big_move_threshold)
    return simulator.simulate(
        standings_before, pending_matches, hypothetical_scores, remaining_rounds
    )
