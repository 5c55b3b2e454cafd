"""Rematch-avoiding assignment search shared by the ranked pairing strategies.

Each strategy describes its ideal round as a *candidate order*: for the
highest-ranked unpaired competitor (the anchor) it lists acceptable
opponents from most to least preferred. Without rematch avoidance the anchor
simply takes the first candidate. With avoidance a depth-first search looks
for a complete round in which nobody meets a previous opponent, trying
candidates in preference order so the result stays as close to the ideal
round as possible. If no such round exists, or the search budget runs out,
the greedy order is used and the rematches are flagged.
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
from typing import Callable, Dict, List, Optional, Sequence

from spreadpairing.constants import DEFAULT_REMATCH_SEARCH_LIMIT
from spreadpairing.exceptions import PairingException
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)

CandidateOrder = Callable[[Standing, List[Standing]], List[Standing]]


@dataclass(frozen=True)
class PlannedPair:
    """Two competitors chosen to meet, before tables and first moves exist."""

    player1: Standing
    player2: Standing
    is_rematch: bool = False


class _SearchExhausted(Exception):
    pass


def adjacent_order(anchor: Standing, unpaired: List[Standing]) -> List[Standing]:
    """Next-nearest rank first (Swiss)."""
    return list(unpaired)


def farthest_order(anchor: Standing, unpaired: List[Standing]) -> List[Standing]:
    """Lowest rank first, moving inward (King of the Hill)."""
    return list(reversed(unpaired))


def half_against_half_order(
    top: Sequence[Standing], bottom: Sequence[Standing]
) -> CandidateOrder:
    """Build an order pairing ``top[i]`` with ``bottom[i]``.

    Substitutes are the other members of ``bottom`` by distance from ``i``,
    nearer first, higher ranked first on equal distance.
    """
    top_index: Dict[str, int] = {s.competitor_id: i for i, s in enumerate(top)}
    bottom_index: Dict[str, int] = {s.competitor_id: i for i, s in enumerate(bottom)}

    def order(anchor: Standing, unpaired: List[Standing]) -> List[Standing]:
        position = top_index.get(anchor.competitor_id)
        if position is None:
            return []
        candidates = [s for s in unpaired if s.competitor_id in bottom_index]
        return sorted(
            candidates,
            key=lambda s: (
                abs(bottom_index[s.competitor_id] - position),
                bottom_index[s.competitor_id],
            ),
        )

    return order


def _greedy(
    pool: Sequence[Standing],
    candidate_order: CandidateOrder,
    ledger: RematchLedger,
    prefer_fresh: bool,
) -> List[PlannedPair]:
    unpaired = list(pool)
    planned: List[PlannedPair] = []
    while unpaired:
        anchor = unpaired.pop(0)
        candidates = candidate_order(anchor, unpaired)
        if not candidates:
            raise PairingException(
                f"No opponent available for competitor {anchor.competitor_id!r}"
            )
        choice = candidates[0]
        if prefer_fresh:
            choice = next(
                (
                    c
                    for c in candidates
                    if not ledger.has_played(anchor.competitor_id, c.competitor_id)
                ),
                candidates[0],
            )
        unpaired.remove(choice)
        planned.append(
            PlannedPair(
                anchor,
                choice,
                ledger.has_played(anchor.competitor_id, choice.competitor_id),
            )
        )
    return planned


def _search(
    unpaired: List[Standing],
    candidate_order: CandidateOrder,
    ledger: RematchLedger,
    budget: List[int],
) -> Optional[List[PlannedPair]]:
    if not unpaired:
        return []
    anchor, rest = unpaired[0], unpaired[1:]
    for opponent in candidate_order(anchor, rest):
        if ledger.has_played(anchor.competitor_id, opponent.competitor_id):
            continue
        budget[0] -= 1
        if budget[0] < 0:
            raise _SearchExhausted()
        remaining = [s for s in rest if s.competitor_id != opponent.competitor_id]
        tail = _search(remaining, candidate_order, ledger, budget)
        if tail is not None:
            return [PlannedPair(anchor, opponent)] + tail
    return None


def pair_in_order(
    pool: Sequence[Standing],
    candidate_order: CandidateOrder,
    ledger: RematchLedger,
    avoid_rematches: bool,
    search_limit: int = DEFAULT_REMATCH_SEARCH_LIMIT,
) -> List[PlannedPair]:
    """Pair an even-sized pool following ``candidate_order``.

    Args:
        pool: Competitors in standings order; the first unpaired one always
            picks next
        candidate_order: Preference order of opponents for an anchor
        ledger: Previous meetings
        avoid_rematches: Search for a rematch-free round first
        search_limit: Maximum opponents tried before giving up the search

    Returns:
        Planned pairs; ``is_rematch`` marks every repeated meeting

    Raises:
        PairingException: If the pool has odd size or the order leaves a
            competitor without candidates
    """
    if len(pool) % 2:
        raise PairingException(f"Cannot pair an odd pool of {len(pool)} competitors")
    if not avoid_rematches or not len(ledger):
        return _greedy(pool, candidate_order, ledger, prefer_fresh=False)

    budget = [search_limit]
    try:
        planned = _search(list(pool), candidate_order, ledger, budget)
    except _SearchExhausted:
        logger.warning(
            "Rematch search stopped after %s candidates; falling back to greedy order",
            search_limit,
        )
        planned = None
    if planned is not None:
        return planned

    planned = _greedy(pool, candidate_order, ledger, prefer_fresh=True)
    for pair in planned:
        if pair.is_rematch:
            logger.warning(
                "Accepted rematch %s vs %s: no rematch-free assignment found",
                pair.player1.competitor_id,
                pair.player2.competitor_id,
            )
    return planned
