"""Match, score and bye records."""

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
from typing import Any, Dict, Optional

from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.type_hints import PairKey


@dataclass(frozen=True)
class MatchRecord:
    """A single table in a round.

    The engine proposes match records; committing them is the caller's job.

    Attributes
    ----------
    round_number : int
        Round the match belongs to (1-indexed).
    player1_id : str
        First competitor, normally the higher ranked one.
    player2_id : str
        Second competitor.
    table_number : int
        Table the match is played on.
    first_move_id : str, optional
        Competitor who starts the game, once assigned.
    player1_rank, player2_rank : int
        Standings positions when the match was paired (0 if unknown).
    player1_clinched, player2_clinched : bool
        Gibsonization flags at pairing time.
    is_rematch : bool
        True when the two competitors had already met. With rematch
        avoidance on this marks a degraded pairing the caller should surface.
    """

    round_number: int
    player1_id: str
    player2_id: str
    table_number: int = 0
    first_move_id: Optional[str] = None
    player1_rank: int = 0
    player2_rank: int = 0
    player1_clinched: bool = False
    player2_clinched: bool = False
    is_rematch: bool = False

    def __post_init__(self) -> None:
        if self.player1_id == self.player2_id:
            raise DataIntegrityError(
                f"Round {self.round_number} table {self.table_number} pairs "
                f"competitor {self.player1_id!r} with themselves"
            )
        if self.first_move_id is not None and not self.involves(self.first_move_id):
            raise DataIntegrityError(
                f"First mover {self.first_move_id!r} is not part of the match "
                f"{self.player1_id!r} vs {self.player2_id!r}"
            )

    @property
    def pair_key(self) -> PairKey:
        """Order-independent identity of the two competitors."""
        return frozenset({self.player1_id, self.player2_id})

    def involves(self, competitor_id: str) -> bool:
        """Check whether a competitor plays in this match."""
        return competitor_id in (self.player1_id, self.player2_id)

    def opponent_of(self, competitor_id: str) -> str:
        """Return the opponent of ``competitor_id``."""
        if competitor_id == self.player1_id:
            return self.player2_id
        if competitor_id == self.player2_id:
            return self.player1_id
        raise KeyError(competitor_id)

    def is_clinched(self, competitor_id: str) -> bool:
        if competitor_id == self.player1_id:
            return self.player1_clinched
        if competitor_id == self.player2_id:
            return self.player2_clinched
        raise KeyError(competitor_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match record to dictionary."""
        return {
            "round_number": self.round_number,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "table_number": self.table_number,
            "first_move_id": self.first_move_id,
            "player1_rank": self.player1_rank,
            "player2_rank": self.player2_rank,
            "player1_clinched": self.player1_clinched,
            "player2_clinched": self.player2_clinched,
            "is_rematch": self.is_rematch,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchRecord":
        """Deserialize match record from dictionary."""
        return cls(
            round_number=data["round_number"],
            player1_id=str(data["player1_id"]),
            player2_id=str(data["player2_id"]),
            table_number=data.get("table_number", 0),
            first_move_id=data.get("first_move_id"),
            player1_rank=data.get("player1_rank", 0),
            player2_rank=data.get("player2_rank", 0),
            player1_clinched=data.get("player1_clinched", False),
            player2_clinched=data.get("player2_clinched", False),
            is_rematch=data.get("is_rematch", False),
        )


@dataclass(frozen=True)
class ScoreRecord:
    """Final score of a match.

    Attributes
    ----------
    match : MatchRecord
        The match the score belongs to.
    player1_score : int
        Score of ``match.player1_id``.
    player2_score : int
        Score of ``match.player2_id``.
    """

    match: MatchRecord
    player1_score: int
    player2_score: int

    @property
    def round_number(self) -> int:
        return self.match.round_number

    @property
    def winner_id(self) -> Optional[str]:
        """The higher scorer, or None on a tie."""
        if self.player1_score > self.player2_score:
            return self.match.player1_id
        if self.player2_score > self.player1_score:
            return self.match.player2_id
        return None

    def score_for(self, competitor_id: str) -> int:
        """Return the score of ``competitor_id`` in this match."""
        if competitor_id == self.match.player1_id:
            return self.player1_score
        if competitor_id == self.match.player2_id:
            return self.player2_score
        raise KeyError(competitor_id)

    def opponent_score_for(self, competitor_id: str) -> int:
        """Return the score conceded by ``competitor_id`` in this match."""
        return self.score_for(self.match.opponent_of(competitor_id))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize score record to dictionary."""
        return {
            "match": self.match.to_dict(),
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreRecord":
        """Deserialize score record from dictionary."""
        return cls(
            match=MatchRecord.from_dict(data["match"]),
            player1_score=int(data["player1_score"]),
            player2_score=int(data["player2_score"]),
        )


@dataclass(frozen=True)
class ByeRecord:
    """A round a competitor sat out."""

    round_number: int
    competitor_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"round_number": self.round_number, "competitor_id": self.competitor_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ByeRecord":
        return cls(
            round_number=data["round_number"],
            competitor_id=str(data["competitor_id"]),
        )
