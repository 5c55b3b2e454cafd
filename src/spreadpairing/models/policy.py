"""Pairing policy and tournament configuration."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from spreadpairing.constants import (
    DEFAULT_BIG_MOVE_THRESHOLD,
    DEFAULT_GIBSON_BAND,
    DEFAULT_PODIUM_SIZE,
    DEFAULT_POLICY,
    DEFAULT_REMATCH_SEARCH_LIMIT,
    POLICY_FONTE_SWISS,
    POLICY_KING_OF_HILL,
    POLICY_MANUAL,
    POLICY_NAMES,
    POLICY_QUARTILE,
    POLICY_ROUND_ROBIN,
    POLICY_SWISS,
)
from spreadpairing.exceptions import InvalidConfigurationException


class PairingKind(Enum):
    """The closed set of pairing strategies."""

    SWISS = POLICY_SWISS
    FONTE_SWISS = POLICY_FONTE_SWISS
    KING_OF_HILL = POLICY_KING_OF_HILL
    ROUND_ROBIN = POLICY_ROUND_ROBIN
    QUARTILE = POLICY_QUARTILE
    MANUAL = POLICY_MANUAL

    @property
    def display_name(self) -> str:
        return POLICY_NAMES[self.value]

    @classmethod
    def parse(cls, value: Any) -> "PairingKind":
        """Resolve a stable identifier such as ``"fonte-swiss"``.

        Raises:
            InvalidConfigurationException: If the identifier is unknown
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise InvalidConfigurationException(
            f"Unknown pairing policy {value!r}; expected one of "
            f"{', '.join(kind.value for kind in cls)}"
        )


@dataclass(frozen=True)
class PairingPolicy:
    """Pairing strategy plus its two orthogonal switches.

    Attributes:
        kind: Which strategy generates the round
        avoid_rematches: Search for rematch-free pairings where the strategy allows
        gibsonization: Pair clinched competitors away from contested positions
        rematch_search_limit: Cap on search nodes spent avoiding rematches
    """

    kind: PairingKind = PairingKind.SWISS
    avoid_rematches: bool = True
    gibsonization: bool = False
    rematch_search_limit: int = DEFAULT_REMATCH_SEARCH_LIMIT

    def __post_init__(self) -> None:
        if self.rematch_search_limit < 0:
            raise InvalidConfigurationException(
                f"rematch_search_limit must be >= 0, got {self.rematch_search_limit}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize policy to dictionary."""
        return {
            "kind": self.kind.value,
            "avoid_rematches": self.avoid_rematches,
            "gibsonization": self.gibsonization,
            "rematch_search_limit": self.rematch_search_limit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingPolicy":
        """Deserialize policy from dictionary."""
        return cls(
            kind=PairingKind.parse(data.get("kind", DEFAULT_POLICY)),
            avoid_rematches=data.get("avoid_rematches", True),
            gibsonization=data.get("gibsonization", False),
            rematch_search_limit=data.get(
                "rematch_search_limit", DEFAULT_REMATCH_SEARCH_LIMIT
            ),
        )


@dataclass
class TournamentConfig:
    """Configuration settings for a tournament.

    Attributes:
        name: Tournament name
        num_rounds: Number of rounds in the tournament
        policy: Pairing policy used for every round
        gibson_band: Fraction of the field, from the top, in which clinched
            positions are detected
        podium_size: Positions counted as the podium for impact tags
        big_move_threshold: Rank change that counts as a big jump or drop
    """

    name: str
    num_rounds: int
    policy: PairingPolicy = field(default_factory=PairingPolicy)
    gibson_band: float = DEFAULT_GIBSON_BAND
    podium_size: int = DEFAULT_PODIUM_SIZE
    big_move_threshold: int = DEFAULT_BIG_MOVE_THRESHOLD

    def __post_init__(self) -> None:
        if self.num_rounds < 1:
            raise InvalidConfigurationException(
                f"A tournament needs at least one round, got {self.num_rounds}"
            )
        if not 0.0 < self.gibson_band <= 1.0:
            raise InvalidConfigurationException(
                f"gibson_band must be in (0, 1], got {self.gibson_band}"
            )

    def remaining_rounds(self, current_round: int) -> int:
        """Rounds still to be played when pairing ``current_round``, itself included."""
        return max(0, self.num_rounds - current_round + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "num_rounds": self.num_rounds,
            "policy": self.policy.to_dict(),
            "gibson_band": self.gibson_band,
            "podium_size": self.podium_size,
            "big_move_threshold": self.big_move_threshold,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            num_rounds=data["num_rounds"],
            policy=PairingPolicy.from_dict(data.get("policy", {})),
            gibson_band=data.get("gibson_band", DEFAULT_GIBSON_BAND),
            podium_size=data.get("podium_size", DEFAULT_PODIUM_SIZE),
            big_move_threshold=data.get(
                "big_move_threshold", DEFAULT_BIG_MOVE_THRESHOLD
            ),
        )
