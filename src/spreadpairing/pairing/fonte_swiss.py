"""Fonte-Swiss pairing.

Competitors are grouped by identical point totals. Inside each group the top
half plays the bottom half by rank, so the group leader meets the group's
median competitor. A group of odd size sends its lowest-ranked member down to
the head of the next group.
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

from itertools import groupby
from typing import List, Sequence

from spreadpairing.models.policy import PairingPolicy
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.pairing.search import (
    PlannedPair,
    half_against_half_order,
    pair_in_order,
)
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


def score_groups(ranked: Sequence[Standing]) -> List[List[Standing]]:
    """Split a ranked field into runs of identical points, best group first."""
    return [list(group) for _, group in groupby(ranked, key=lambda s: s.points)]


def create_fonte_swiss_pairings(
    pool: Sequence[Standing], ledger: RematchLedger, policy: PairingPolicy
) -> List[PlannedPair]:
    """Pair each score group top half against bottom half."""
    planned: List[PlannedPair] = []
    floater: List[Standing] = []
    for group in score_groups(pool):
        members = floater + group
        floater = []
        if len(members) % 2:
            floater = [members.pop()]
            logger.debug(
                "Fonte-Swiss: %s floats down from the %s point group",
                floater[0].competitor_id,
                group[0].points,
            )
        if not members:
            continue
        half = len(members) // 2
        top, bottom = members[:half], members[half:]
        planned.extend(
            pair_in_order(
                members,
                half_against_half_order(top, bottom),
                ledger,
                policy.avoid_rematches,
                policy.rematch_search_limit,
            )
        )
    return planned
