"""Manual pairing: validate caller-supplied pairs and pass them through."""

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

from typing import Dict, List, Optional, Sequence, Set, Tuple

from spreadpairing.exceptions import InvalidPairingException
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.pairing.search import PlannedPair
from spreadpairing.type_hints import ManualPair


def validate_manual_pairs(
    standings: Sequence[Standing], pairs: Sequence[ManualPair]
) -> Optional[str]:
    """Check that manual pairs cover the field exactly once.

    Every pair must name two different competitors from the standings, no
    competitor may appear twice, and everyone must be paired except one
    competitor (the bye) when the field is odd.

    Args:
        standings: The field being paired
        pairs: Caller-supplied (player1_id, player2_id) tuples

    Returns:
        The id left unpaired as the bye, or None for an even field

    Raises:
        InvalidPairingException: On any unknown, repeated or missing competitor
    """
    known = {standing.competitor_id for standing in standings}
    seen: Set[str] = set()
    for player1_id, player2_id in pairs:
        if player1_id == player2_id:
            raise InvalidPairingException(
                f"Competitor {player1_id!r} cannot be paired with themselves"
            )
        for competitor_id in (player1_id, player2_id):
            if competitor_id not in known:
                raise InvalidPairingException(
                    f"Competitor {competitor_id!r} is not in the field"
                )
            if competitor_id in seen:
                raise InvalidPairingException(
                    f"Competitor {competitor_id!r} appears in more than one pair"
                )
            seen.add(competitor_id)

    unpaired = sorted(known - seen)
    if len(unpaired) != len(known) % 2:
        raise InvalidPairingException(
            f"Manual pairings leave {len(unpaired)} competitor(s) unpaired: "
            f"{', '.join(unpaired)}"
        )
    return unpaired[0] if unpaired else None


def create_manual_pairings(
    standings: Sequence[Standing],
    pairs: Optional[Sequence[ManualPair]],
    ledger: RematchLedger,
) -> Tuple[List[PlannedPair], Optional[Standing]]:
    """Turn validated manual pairs into planned pairs, order unchanged.

    Returns:
        Tuple of (planned pairs, bye or None)
    """
    if pairs is None:
        raise InvalidPairingException("Manual pairing requires caller-supplied pairs")
    bye_id = validate_manual_pairs(standings, pairs)
    by_id: Dict[str, Standing] = {s.competitor_id: s for s in standings}
    planned = [
        PlannedPair(
            by_id[player1_id],
            by_id[player2_id],
            ledger.has_played(player1_id, player2_id),
        )
        for player1_id, player2_id in pairs
    ]
    return planned, by_id[bye_id] if bye_id else None
