"""King of the Hill pairing: highest remaining meets lowest remaining."""

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
from spreadpairing.pairing.search import PlannedPair, farthest_order, pair_in_order


def create_king_of_hill_pairings(
    pool: Sequence[Standing], ledger: RematchLedger, policy: PairingPolicy
) -> List[PlannedPair]:
    """Pair rank 1 with rank N, rank 2 with rank N-1 and so on inward."""
    return pair_in_order(
        pool,
        farthest_order,
        ledger,
        policy.avoid_rematches,
        policy.rematch_search_limit,
    )
