"""Swiss pairing: adjacent ranks meet (1v2, 3v4, ...)."""

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
from spreadpairing.pairing.search import PlannedPair, adjacent_order, pair_in_order


def create_swiss_pairings(
    pool: Sequence[Standing], ledger: RematchLedger, policy: PairingPolicy
) -> List[PlannedPair]:
    """Pair an even pool by adjacent rank.

    With rematch avoidance the anchor slides to the next available rank and
    the rest of the round is rebuilt around that swap.
    """
    return pair_in_order(
        pool,
        adjacent_order,
        ledger,
        policy.avoid_rematches,
        policy.rematch_search_limit,
    )
