"""Round-robin scheduling by the circle method.

Competitors are seated by id, which never changes between rounds. The first seat
stays fixed while the others rotate one seat per round; seat ``i`` plays seat
``m - 1 - i``. Over one cycle every unordered pair meets exactly once. With
an odd field an empty seat is added and whoever faces it has the bye.
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

from typing import List, Optional, Sequence, Tuple

from spreadpairing.exceptions import ScheduleInfeasibleError
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.pairing.search import PlannedPair
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


def cycle_length(field_size: int) -> int:
    """Rounds needed for everyone to meet everyone once."""
    if field_size < 2:
        return 0
    return field_size - 1 if field_size % 2 == 0 else field_size


def seat_order(standings: Sequence[Standing]) -> List[Standing]:
    """Fixed seating for the whole schedule; ratings may be edited between rounds."""
    return sorted(standings, key=lambda s: s.competitor_id)


def rotation_for_round(
    seats: Sequence[Optional[Standing]], round_index: int
) -> List[Tuple[Optional[Standing], Optional[Standing]]]:
    """Seat pairs for a 0-based round of the circle method."""
    seat_count = len(seats)
    rest = list(seats[1:])
    shift = round_index % (seat_count - 1) if seat_count > 1 else 0
    if shift:
        rest = rest[-shift:] + rest[:-shift]
    lineup = [seats[0]] + rest
    return [(lineup[i], lineup[seat_count - 1 - i]) for i in range(seat_count // 2)]


def create_round_robin_pairings(
    standings: Sequence[Standing],
    current_round: int,
    total_rounds: int,
    ledger: RematchLedger,
) -> Tuple[List[PlannedPair], Optional[Standing]]:
    """Pairings for ``current_round`` of a round-robin over the whole field.

    Rounds past the first cycle wrap around, giving a double round-robin.

    Returns:
        Tuple of (planned pairs, bye or None)

    Raises:
        ScheduleInfeasibleError: If ``total_rounds`` is shorter than one cycle
    """
    needed = cycle_length(len(standings))
    if total_rounds < needed:
        raise ScheduleInfeasibleError(
            f"A round-robin of {len(standings)} competitors needs {needed} rounds, "
            f"but only {total_rounds} were requested"
        )

    seats: List[Optional[Standing]] = list(seat_order(standings))
    if len(seats) % 2:
        seats.append(None)

    planned: List[PlannedPair] = []
    bye: Optional[Standing] = None
    for first, second in rotation_for_round(seats, current_round - 1):
        if first is None or second is None:
            bye = first or second
            continue
        rematch = ledger.has_played(first.competitor_id, second.competitor_id)
        if rematch and current_round <= needed:
            logger.warning(
                "Round-robin round %s repeats %s vs %s from earlier history",
                current_round,
                first.competitor_id,
                second.competitor_id,
            )
        planned.append(PlannedPair(first, second, rematch))
    return planned, bye
