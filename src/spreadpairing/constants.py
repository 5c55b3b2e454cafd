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

# Game outcome points
WIN_POINTS = 1.0
DRAW_POINTS = 0.5

# Pairing policy identifiers
POLICY_SWISS = "swiss"
POLICY_FONTE_SWISS = "fonte-swiss"
POLICY_KING_OF_HILL = "king-of-hill"
POLICY_ROUND_ROBIN = "round-robin"
POLICY_QUARTILE = "quartile"
POLICY_MANUAL = "manual"
DEFAULT_POLICY = POLICY_SWISS

POLICY_NAMES = {
    POLICY_SWISS: "Swiss",
    POLICY_FONTE_SWISS: "Fonte-Swiss",
    POLICY_KING_OF_HILL: "King of the Hill",
    POLICY_ROUND_ROBIN: "Round Robin",
    POLICY_QUARTILE: "Quartile",
    POLICY_MANUAL: "Manual",
}

# Upper bound on nodes visited while searching for a rematch-free round
DEFAULT_REMATCH_SEARCH_LIMIT = 10_000

# Fraction of the field, from the top, in which clinched positions are tracked
DEFAULT_GIBSON_BAND = 0.5

# Impact simulation thresholds
DEFAULT_PODIUM_SIZE = 3
DEFAULT_BIG_MOVE_THRESHOLD = 3

# Default hypothetical score for a pending game (player 1 wins)
DEFAULT_DRAFT_SCORES = (400, 350)

# Impact tags
TAG_BIG_JUMP = "Big Jump"
TAG_BIG_DROP = "Big Drop"
TAG_MOVES_TO_PODIUM = "Moves to Podium"
TAG_FALLS_FROM_PODIUM = "Falls from Podium"
TAG_TAKES_LEAD = "Takes Lead"
TAG_LOSES_LEAD = "Loses Lead"
TAG_ELIMINATED = "Eliminated from Contention"
TAG_CLINCHES = "Clinches Tournament"

# Roster import
MIN_RATING = 0
MAX_RATING = 3000
