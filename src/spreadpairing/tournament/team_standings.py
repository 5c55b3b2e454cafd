"""Team standings aggregated from individual results.

Competitors with a ``team_name`` are grouped into teams. All games a team's
members played against members of another team form one team "match" against
that team, won by whichever side won more of those games.
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

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, DefaultDict, Dict, Iterable, List, Sequence, Tuple

from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.models.competitor import Competitor
from spreadpairing.models.match_record import ScoreRecord


@dataclass
class TeamStanding:
    """Aggregate record of one team."""

    team_name: str
    members: List[Competitor] = field(default_factory=list)
    matches_won: int = 0
    matches_lost: int = 0
    matches_drawn: int = 0
    games_won: int = 0
    games_lost: int = 0
    spread: int = 0
    rank: int = 0

    def sort_key(self) -> Tuple[int, int, int, str]:
        return (-self.matches_won, -self.spread, -self.games_won, self.team_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_name": self.team_name,
            "members": [member.id for member in self.members],
            "matches_won": self.matches_won,
            "matches_lost": self.matches_lost,
            "matches_drawn": self.matches_drawn,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "spread": self.spread,
            "rank": self.rank,
        }


def compute_team_standings(
    competitors: Sequence[Competitor], scores: Iterable[ScoreRecord]
) -> List[TeamStanding]:
    """Rank teams by matches won, then spread, then games won.

    Games between members of the same team count toward the members' game
    totals and spread but not toward any team match.

    Raises:
        DataIntegrityError: If a score names a competitor not on the roster
    """
    roster = {competitor.id: competitor for competitor in competitors}
    teams: Dict[str, TeamStanding] = {}
    for competitor in competitors:
        if competitor.team_name:
            team = teams.setdefault(
                competitor.team_name, TeamStanding(competitor.team_name)
            )
            team.members.append(competitor)

    # (team, opposing team) -> [games won, games lost]
    head_to_head: DefaultDict[Tuple[str, str], List[int]] = defaultdict(lambda: [0, 0])

    for score in scores:
        match = score.match
        for competitor_id in (match.player1_id, match.player2_id):
            if competitor_id not in roster:
                raise DataIntegrityError(
                    f"Score references competitor {competitor_id!r} who is not on the roster"
                )
        for competitor_id in (match.player1_id, match.player2_id):
            own_team = roster[competitor_id].team_name
            if not own_team:
                continue
            own = score.score_for(competitor_id)
            opponent = score.opponent_score_for(competitor_id)
            team = teams[own_team]
            team.spread += own - opponent
            if own > opponent:
                team.games_won += 1
            elif own < opponent:
                team.games_lost += 1

            other_team = roster[match.opponent_of(competitor_id)].team_name
            if other_team and other_team != own_team:
                tally = head_to_head[(own_team, other_team)]
                if own > opponent:
                    tally[0] += 1
                elif own < opponent:
                    tally[1] += 1

    for (team_name, _), (won, lost) in head_to_head.items():
        team = teams[team_name]
        if won > lost:
            team.matches_won += 1
        elif won < lost:
            team.matches_lost += 1
        else:
            team.matches_drawn += 1

    ranked = sorted(teams.values(), key=TeamStanding.sort_key)
    for index, team in enumerate(ranked, start=1):
        team.rank = index
    return ranked
