"""Standings calculation for tournaments.

This module derives wins, losses, draws, points, spread and rank from a
score history. Every function is pure: inputs are never modified and a new
list of :class:`Standing` objects is returned on each call.
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

from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.models.competitor import Competitor
from spreadpairing.models.match_record import ByeRecord, MatchRecord, ScoreRecord
from spreadpairing.models.standing import Standing
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


class StandingTally:
    """Running totals for one competitor while standings are being built.

    The impact simulator replays hypothetical games through the same
    :meth:`record_game` so real and simulated standings are always counted
    identically.
    """

    def __init__(self, competitor_id: str, name: str = "", rating: int = 0) -> None:
        self.competitor_id = competitor_id
        self.name = name
        self.rating = rating
        self.wins = 0
        self.losses = 0
        self.draws = 0
        self.points_for = 0
        self.points_against = 0
        self.games_played = 0
        self.first_move_count = 0
        self.byes = 0

    @classmethod
    def from_competitor(cls, competitor: Competitor) -> "StandingTally":
        return cls(competitor.id, competitor.name, competitor.rating)

    @classmethod
    def from_standing(cls, standing: Standing) -> "StandingTally":
        """Start a tally from an existing standing without touching it."""
        tally = cls(standing.competitor_id, standing.name, standing.rating)
        tally.wins = standing.wins
        tally.losses = standing.losses
        tally.draws = standing.draws
        tally.points_for = standing.points_for
        tally.points_against = standing.points_against
        tally.games_played = standing.games_played
        tally.first_move_count = standing.first_move_count
        tally.byes = standing.byes
        return tally

    def record_game(self, own_score: int, opponent_score: int) -> None:
        """Count one finished game from this competitor's point of view."""
        self.points_for += own_score
        self.points_against += opponent_score
        self.games_played += 1
        if own_score > opponent_score:
            self.wins += 1
        elif own_score < opponent_score:
            self.losses += 1
        else:
            self.draws += 1

    def to_standing(self) -> Standing:
        return Standing(
            competitor_id=self.competitor_id,
            name=self.name,
            rating=self.rating,
            wins=self.wins,
            losses=self.losses,
            draws=self.draws,
            points_for=self.points_for,
            points_against=self.points_against,
            games_played=self.games_played,
            first_move_count=self.first_move_count,
            byes=self.byes,
        )


def rank_standings(standings: Iterable[Standing]) -> List[Standing]:
    """Sort standings into the strict total order and assign 1-based ranks.

    Order: points desc, spread desc, rating desc, competitor id asc.

    Args:
        standings: Standings in any order

    Returns:
        New, ranked standings
    """
    ordered = sorted(standings, key=Standing.sort_key)
    return [replace(standing, rank=index + 1) for index, standing in enumerate(ordered)]


def count_first_moves(
    matches: Iterable[MatchRecord], before_round: Optional[int] = None
) -> Dict[str, int]:
    """Count committed starts per competitor."""
    counts: Counter = Counter()
    for match in matches:
        if before_round is not None and match.round_number >= before_round:
            continue
        if match.first_move_id is not None:
            counts[match.first_move_id] += 1
    return dict(counts)


def count_byes(
    byes: Iterable[ByeRecord], before_round: Optional[int] = None
) -> Dict[str, int]:
    """Count rounds sat out per competitor."""
    counts: Counter = Counter()
    for bye in byes:
        if before_round is not None and bye.round_number >= before_round:
            continue
        counts[bye.competitor_id] += 1
    return dict(counts)


def _index_roster(competitors: Iterable[Competitor]) -> Dict[str, StandingTally]:
    tallies: Dict[str, StandingTally] = {}
    for competitor in competitors:
        if competitor.id in tallies:
            raise DataIntegrityError(
                f"Competitor id {competitor.id!r} appears twice in the roster"
            )
        tallies[competitor.id] = StandingTally.from_competitor(competitor)
    return tallies


def _check_known(tallies: Dict[str, StandingTally], competitor_id: str, what: str) -> None:
    if competitor_id not in tallies:
        raise DataIntegrityError(
            f"{what} references competitor {competitor_id!r} who is not on the roster"
        )


def compute_standings(
    competitors: Sequence[Competitor],
    scores: Iterable[ScoreRecord],
    before_round: Optional[int] = None,
    matches: Iterable[MatchRecord] = (),
    byes: Iterable[ByeRecord] = (),
) -> List[Standing]:
    """Compute ranked standings from a score history.

    Args:
        competitors: Full tournament roster
        scores: Recorded scores, in any order
        before_round: If given, only rounds strictly before this one count
            ("standings entering round N")
        matches: Committed match history, used to count first-move starts
        byes: Committed bye history

    Returns:
        Standings sorted by rank, one per competitor on the roster

    Raises:
        DataIntegrityError: If a score, match or bye names a competitor who is
            not on the roster, or if one match has two scores
    """
    tallies = _index_roster(competitors)
    scored: Set[Tuple[int, frozenset]] = set()

    for score in scores:
        match = score.match
        if before_round is not None and match.round_number >= before_round:
            continue
        for competitor_id in (match.player1_id, match.player2_id):
            _check_known(tallies, competitor_id, f"Score for round {match.round_number}")
        key = (match.round_number, match.pair_key)
        if key in scored:
            raise DataIntegrityError(
                f"Round {match.round_number} match {match.player1_id} vs "
                f"{match.player2_id} has more than one score"
            )
        scored.add(key)
        tallies[match.player1_id].record_game(score.player1_score, score.player2_score)
        tallies[match.player2_id].record_game(score.player2_score, score.player1_score)

    match_list = list(matches)
    for match in match_list:
        for competitor_id in (match.player1_id, match.player2_id):
            _check_known(tallies, competitor_id, f"Match in round {match.round_number}")
    for competitor_id, starts in count_first_moves(match_list, before_round).items():
        tallies[competitor_id].first_move_count = starts

    for competitor_id, count in count_byes(byes, before_round).items():
        _check_known(tallies, competitor_id, "Bye")
        tallies[competitor_id].byes = count

    standings = rank_standings(tally.to_standing() for tally in tallies.values())
    logger.debug(
        "Computed standings for %s competitors from %s scored games",
        len(standings),
        len(scored),
    )
    return standings


class StandingsCalculator:
    """Object seam over :func:`compute_standings`.

    Holds the tournament history it was built with and answers standings
    queries for any round without mutating that history.
    """

    def __init__(
        self,
        competitors: Sequence[Competitor],
        scores: Iterable[ScoreRecord] = (),
        matches: Iterable[MatchRecord] = (),
        byes: Iterable[ByeRecord] = (),
    ) -> None:
        self.competitors = tuple(competitors)
        self.scores = tuple(scores)
        self.matches = tuple(matches)
        self.byes = tuple(byes)

    def compute(self, before_round: Optional[int] = None) -> List[Standing]:
        """Standings after every recorded round, or entering ``before_round``."""
        return compute_standings(
            self.competitors,
            self.scores,
            before_round=before_round,
            matches=self.matches,
            byes=self.byes,
        )

    def entering_round(self, round_number: int) -> List[Standing]:
        return self.compute(before_round=round_number)
