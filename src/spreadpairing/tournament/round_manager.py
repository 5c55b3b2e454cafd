"""Round management for tournaments.

This module runs the full per-round pipeline over a caller-owned tournament
history: standings entering the round, rematch ledger, Gibsonization,
pairing, first moves and what-if simulation. Nothing here persists state; a
new :class:`TournamentHistory` is returned whenever the caller commits a
round or records scores.
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

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.models.competitor import Competitor
from spreadpairing.models.match_record import ByeRecord, MatchRecord, ScoreRecord
from spreadpairing.models.policy import TournamentConfig
from spreadpairing.models.round_pairing import RoundPairing
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.engine import PairingEngine
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.simulation.impact import AnnotatedStanding, ImpactSimulator
from spreadpairing.standings.calculator import compute_standings
from spreadpairing.type_hints import ManualPair
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TournamentHistory:
    """Everything committed so far in one tournament.

    Attributes:
        competitors: Full roster
        matches: Committed matches of every round
        scores: Recorded scores
        byes: Committed byes
    """

    competitors: Tuple[Competitor, ...]
    matches: Tuple[MatchRecord, ...] = ()
    scores: Tuple[ScoreRecord, ...] = ()
    byes: Tuple[ByeRecord, ...] = ()

    @property
    def rounds_paired(self) -> int:
        """Highest round number with committed matches or byes, 0 if none."""
        rounds = [m.round_number for m in self.matches]
        rounds.extend(b.round_number for b in self.byes)
        return max(rounds, default=0)

    def matches_for_round(self, round_number: int) -> List[MatchRecord]:
        return [m for m in self.matches if m.round_number == round_number]

    def scores_for_round(self, round_number: int) -> List[ScoreRecord]:
        return [s for s in self.scores if s.round_number == round_number]

    def is_round_complete(self, round_number: int) -> bool:
        """True once every match of ``round_number`` has a score."""
        scored = {s.match.pair_key for s in self.scores_for_round(round_number)}
        return all(m.pair_key in scored for m in self.matches_for_round(round_number))

    def with_round(self, pairing: RoundPairing) -> "TournamentHistory":
        """Return a new history with ``pairing`` committed.

        Raises:
            DataIntegrityError: If the round was already committed
        """
        round_number = pairing.round_number
        if self.matches_for_round(round_number) or any(
            b.round_number == round_number for b in self.byes
        ):
            raise DataIntegrityError(f"Round {round_number} is already committed")
        byes = self.byes + ((pairing.bye,) if pairing.bye else ())
        return TournamentHistory(
            self.competitors, self.matches + tuple(pairing.matches), self.scores, byes
        )

    def with_scores(self, scores: Iterable[ScoreRecord]) -> "TournamentHistory":
        """Return a new history with ``scores`` recorded.

        Raises:
            DataIntegrityError: If a score is for a match that was never
                committed
        """
        scores = tuple(scores)
        committed = {(m.round_number, m.pair_key) for m in self.matches}
        for score in scores:
            if (score.round_number, score.match.pair_key) not in committed:
                raise DataIntegrityError(
                    f"Score for {score.match.player1_id} vs {score.match.player2_id} "
                    f"in round {score.round_number} has no committed match"
                )
        return TournamentHistory(
            self.competitors, self.matches, self.scores + scores, self.byes
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history to dictionary."""
        return {
            "competitors": [c.to_dict() for c in self.competitors],
            "matches": [m.to_dict() for m in self.matches],
            "scores": [s.to_dict() for s in self.scores],
            "byes": [b.to_dict() for b in self.byes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentHistory":
        """Deserialize history from dictionary."""
        return cls(
            competitors=tuple(Competitor.from_dict(c) for c in data.get("competitors", [])),
            matches=tuple(MatchRecord.from_dict(m) for m in data.get("matches", [])),
            scores=tuple(ScoreRecord.from_dict(s) for s in data.get("scores", [])),
            byes=tuple(ByeRecord.from_dict(b) for b in data.get("byes", [])),
        )


class RoundManager:
    """Coordinates pairing and simulation for one tournament configuration.

    The manager holds only configuration. Every call takes the history it
    should work from, so the same manager can serve concurrent what-if
    requests.
    """

    def __init__(self, config: TournamentConfig):
        self.config = config
        self.engine = PairingEngine(config.policy, config.num_rounds, config.gibson_band)
        self.simulator = ImpactSimulator(config.podium_size, config.big_move_threshold)

    def standings(
        self, history: TournamentHistory, before_round: Optional[int] = None
    ) -> List[Standing]:
        """Standings after all recorded scores, or entering ``before_round``."""
        return compute_standings(
            history.competitors,
            history.scores,
            before_round=before_round,
            matches=history.matches,
            byes=history.byes,
        )

    def next_round_number(self, history: TournamentHistory) -> int:
        return history.rounds_paired + 1

    def pair_round(
        self,
        history: TournamentHistory,
        round_number: Optional[int] = None,
        manual_pairs: Optional[Sequence[ManualPair]] = None,
    ) -> RoundPairing:
        """Propose pairings for ``round_number`` (default: the next round).

        The proposal is not committed; pass it to
        :meth:`TournamentHistory.with_round` to do so.
        """
        if round_number is None:
            round_number = self.next_round_number(history)
        logger.info(
            "Pairing round %s of %s for %s competitors",
            round_number,
            self.config.num_rounds,
            len(history.competitors),
        )
        standings = self.standings(history, before_round=round_number)
        ledger = RematchLedger.from_matches(history.matches, before_round=round_number)
        return self.engine.pair(standings, ledger, round_number, manual_pairs=manual_pairs)

    def simulate_round(
        self,
        history: TournamentHistory,
        round_number: int,
        hypothetical_scores: Iterable[ScoreRecord],
    ) -> List[AnnotatedStanding]:
        """Project standings for hypothetical results of a committed round."""
        pending = history.matches_for_round(round_number)
        if not pending:
            raise DataIntegrityError(f"Round {round_number} has no committed matches")
        standings = self.standings(history, before_round=round_number)
        remaining = self.config.remaining_rounds(round_number + 1)
        return self.simulator.simulate(standings, pending, hypothetical_scores, remaining)
