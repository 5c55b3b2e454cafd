"""Pairing engine: dispatches a round to the selected strategy.

The engine is a pure transform from standings, policy and pairing history to
a proposed :class:`RoundPairing`. It never commits anything; persisting the
result and feeding scores back is the caller's job.

Order of work for one round:

1. rank the field and reject fields smaller than two
2. round-robin and manual handle the whole field themselves
3. for the ranked strategies an odd field first gives the bye to the lowest
   ranked competitor with the fewest byes
4. with Gibsonization on, clinched competitors are paired among themselves
   (an odd one out meets the lowest-ranked non-clinched competitor)
5. the strategy pairs the rest
6. tables are numbered by the better rank in each match and first moves are
   balanced
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

from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple

from spreadpairing.constants import DEFAULT_GIBSON_BAND
from spreadpairing.exceptions import (
    DataIntegrityError,
    InsufficientCompetitorsError,
    InvalidConfigurationException,
    InvalidPairingException,
)
from spreadpairing.models.match_record import ByeRecord, MatchRecord
from spreadpairing.models.policy import PairingKind, PairingPolicy
from spreadpairing.models.round_pairing import RoundPairing
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.byes import split_bye
from spreadpairing.pairing.first_move import FirstMoveBalancer
from spreadpairing.pairing.fonte_swiss import create_fonte_swiss_pairings
from spreadpairing.pairing.king_of_hill import create_king_of_hill_pairings
from spreadpairing.pairing.manual import create_manual_pairings
from spreadpairing.pairing.quartile import create_quartile_pairings
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.pairing.round_robin import create_round_robin_pairings
from spreadpairing.pairing.search import PlannedPair, adjacent_order, pair_in_order
from spreadpairing.pairing.swiss import create_swiss_pairings
from spreadpairing.standings.calculator import rank_standings
from spreadpairing.standings.gibsonization import detect_gibsonized
from spreadpairing.type_hints import ManualPair
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)

RankedStrategy = Callable[
    [Sequence[Standing], RematchLedger, PairingPolicy], List[PlannedPair]
]

# Strategies that pair an even, already ranked pool
RANKED_STRATEGIES: Dict[PairingKind, RankedStrategy] = {
    PairingKind.SWISS: create_swiss_pairings,
    PairingKind.FONTE_SWISS: create_fonte_swiss_pairings,
    PairingKind.KING_OF_HILL: create_king_of_hill_pairings,
    PairingKind.QUARTILE: create_quartile_pairings,
}


def _check_field(standings: Sequence[Standing]) -> None:
    ids = [standing.competitor_id for standing in standings]
    if len(set(ids)) != len(ids):
        raise DataIntegrityError("Standings contain the same competitor more than once")
    if len(ids) < 2:
        raise InsufficientCompetitorsError(
            f"At least 2 competitors are needed to pair a round, got {len(ids)}"
        )


def pair_clinched(
    pool: Sequence[Standing],
    clinched: Set[str],
    ledger: RematchLedger,
    policy: PairingPolicy,
) -> Tuple[List[PlannedPair], List[Standing]]:
    """Pair clinched competitors before the strategy sees the field.

    Clinched competitors meet each other in rank order. If their number is
    odd, the lowest-ranked clinched competitor meets the lowest-ranked
    non-clinched competitor they have not played (when avoiding rematches),
    who cannot affect the contested positions.

    Returns:
        Tuple of (planned pairs, remaining pool in standings order)
    """
    gibsonized = [s for s in pool if s.competitor_id in clinched]
    rest = [s for s in pool if s.competitor_id not in clinched]
    if not gibsonized:
        return [], rest

    planned: List[PlannedPair] = []
    if len(gibsonized) % 2:
        extra = gibsonized.pop()
        candidates = list(reversed(rest))
        opponent = candidates[0]
        if policy.avoid_rematches:
            opponent = next(
                (
                    c
                    for c in candidates
                    if not ledger.has_played(extra.competitor_id, c.competitor_id)
                ),
                candidates[0],
            )
        rest = [s for s in rest if s.competitor_id != opponent.competitor_id]
        planned.append(
            PlannedPair(
                extra,
                opponent,
                ledger.has_played(extra.competitor_id, opponent.competitor_id),
            )
        )

    planned = (
        pair_in_order(
            gibsonized,
            adjacent_order,
            ledger,
            policy.avoid_rematches,
            policy.rematch_search_limit,
        )
        + planned
    )
    return planned, rest


def _build_matches(
    planned: Sequence[PlannedPair],
    round_number: int,
    clinched: FrozenSet[str],
    keep_order: bool,
) -> List[MatchRecord]:
    """Number tables and orient each match with the better rank as player 1."""
    pairs = []
    for pair in planned:
        first, second = pair.player1, pair.player2
        if not keep_order and second.rank < first.rank:
            first, second = second, first
        pairs.append((first, second, pair.is_rematch))
    if not keep_order:
        pairs.sort(key=lambda item: min(item[0].rank, item[1].rank))

    return [
        MatchRecord(
            round_number=round_number,
            player1_id=first.competitor_id,
            player2_id=second.competitor_id,
            table_number=table,
            player1_rank=first.rank,
            player2_rank=second.rank,
            player1_clinched=first.competitor_id in clinched,
            player2_clinched=second.competitor_id in clinched,
            is_rematch=is_rematch,
        )
        for table, (first, second, is_rematch) in enumerate(pairs, start=1)
    ]


def generate_pairings(
    standings: Sequence[Standing],
    policy: PairingPolicy,
    rematch_ledger: Optional[RematchLedger] = None,
    current_round: int = 1,
    total_rounds: int = 1,
    manual_pairs: Optional[Sequence[ManualPair]] = None,
    start_counts: Optional[Mapping[str, int]] = None,
    gibson_band: float = DEFAULT_GIBSON_BAND,
) -> RoundPairing:
    """Generate the next round's matches.

    Args:
        standings: Standings entering ``current_round``
        policy: Strategy and switches to apply
        rematch_ledger: Previous meetings; empty when omitted
        current_round: Round being paired (1-indexed)
        total_rounds: Rounds in the whole tournament
        manual_pairs: Caller-supplied pairs, required for the manual policy
        start_counts: Prior first-move starts; taken from the standings when omitted
        gibson_band: Fraction of the field checked for clinched positions

    Returns:
        Proposed round with tables, first moves, bye and clinched ids

    Raises:
        InsufficientCompetitorsError: If fewer than two competitors are given
        ScheduleInfeasibleError: If a round-robin cannot fit in ``total_rounds``
        InvalidPairingException: If the round number is out of range or manual
            pairs are invalid
        DataIntegrityError: If a competitor appears twice in the standings
    """
    _check_field(standings)
    if current_round < 1 or current_round > total_rounds:
        raise InvalidPairingException(
            f"Round {current_round} is outside a {total_rounds} round tournament"
        )

    ledger = rematch_ledger if rematch_ledger is not None else RematchLedger()
    ranked = rank_standings(standings)
    remaining_rounds = total_rounds - current_round + 1
    clinched: FrozenSet[str] = frozenset()
    if policy.gibsonization:
        clinched = frozenset(detect_gibsonized(ranked, remaining_rounds, gibson_band))

    kind = policy.kind
    keep_order = False
    if kind is PairingKind.ROUND_ROBIN:
        planned, bye = create_round_robin_pairings(
            ranked, current_round, total_rounds, ledger
        )
    elif kind is PairingKind.MANUAL:
        planned, bye = create_manual_pairings(ranked, manual_pairs, ledger)
        keep_order = True
    elif kind in RANKED_STRATEGIES:
        pool, bye = split_bye(ranked)
        planned = []
        if clinched:
            planned, pool = pair_clinched(pool, set(clinched), ledger, policy)
        planned = planned + RANKED_STRATEGIES[kind](pool, ledger, policy)
    else:
        raise InvalidConfigurationException(f"No pairing strategy registered for {kind}")

    matches = _build_matches(planned, current_round, clinched, keep_order)
    if start_counts is None:
        balancer = FirstMoveBalancer.from_standings(ranked)
    else:
        balancer = FirstMoveBalancer(start_counts, {s.competitor_id: s.rank for s in ranked})
    matches = balancer.assign_all(matches)

    bye_record = ByeRecord(current_round, bye.competitor_id) if bye else None
    result = RoundPairing(
        round_number=current_round,
        matches=tuple(matches),
        bye=bye_record,
        clinched_ids=clinched,
    )
    logger.info(
        "Paired round %s (%s): %s matches, bye %s, %s rematch(es)",
        current_round,
        kind.value,
        len(matches),
        bye_record.competitor_id if bye_record else "none",
        len(result.rematches),
    )
    return result


class PairingEngine:
    """Engine bound to one policy and tournament length."""

    def __init__(
        self,
        policy: PairingPolicy,
        total_rounds: int,
        gibson_band: float = DEFAULT_GIBSON_BAND,
    ):
        self.policy = policy
        self.total_rounds = total_rounds
        self.gibson_band = gibson_band

    def pair(
        self,
        standings: Sequence[Standing],
        rematch_ledger: Optional[RematchLedger],
        current_round: int,
        manual_pairs: Optional[Sequence[ManualPair]] = None,
        start_counts: Optional[Mapping[str, int]] = None,
    ) -> RoundPairing:
        return generate_pairings(
            standings,
            self.policy,
            rematch_ledger,
            current_round,
            self.total_rounds,
            manual_pairs=manual_pairs,
            start_counts=start_counts,
            gibson_band=self.gibson_band,
        )
