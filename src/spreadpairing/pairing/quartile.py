"""Quartile pairing.

The ranked field is cut into four quartiles of equal size (give or take one).
The first quartile plays the second and the third plays the fourth, matching
rank positions inside each quartile pair: Q1[0] v Q2[0], Q1[1] v Q2[1], ...
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

from typing import List, Sequence

from spreadpairing.models.policy import PairingPolicy
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.pairing.search import (
    PlannedPair,
    half_against_half_order,
    pair_in_order,
)


def quartile_sizes(field_size: int) -> List[int]:
    """Sizes of Q1..Q4; the first ``field_size % 4`` quartiles get one extra."""
    base, extra = divmod(field_size, 4)
    return [base + (1 if index < extra else 0) for index in range(4)]


def split_quartiles(ranked: Sequence[Standing]) -> List[List[Standing]]:
    quartiles: List[List[Standing]] = []
    start = 0
    for size in quartile_sizes(len(ranked)):
        quartiles.append(list(ranked[start : start + size]))
        start += size
    return quartiles


def create_quartile_pairings(
    pool: Sequence[Standing], ledger: RematchLedger, policy: PairingPolicy
) -> List[PlannedPair]:
    """Pair Q1 against Q2 and Q3 against Q4 by position within the quartile.

    For an even pool the quartile pairs always have matching sizes. Rematch
    substitutes are searched only inside the same quartile pair.
    """
    q1, q2, q3, q4 = split_quartiles(pool)
    planned: List[PlannedPair] = []
    for top, bottom in ((q1, q2), (q3, q4)):
        if not top:
            continue
        planned.extend(
            pair_in_order(
                top + bottom,
                half_against_half_order(top, bottom),
                ledger,
                policy.avoid_rematches,
                policy.rematch_search_limit,
            )
        )
    return planned
