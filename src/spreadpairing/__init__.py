"""Spread Pairing: pairing and standings for spread-scored tournaments."""

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

from spreadpairing.models import (
    Competitor,
    MatchRecord,
    PairingKind,
    PairingPolicy,
    RoundPairing,
    ScoreRecord,
    Standing,
    TournamentConfig,
)
from spreadpairing.pairing import PairingEngine, RematchLedger, generate_pairings
from spreadpairing.simulation import ImpactSimulator, ScoreDraft
from spreadpairing.standings import GibsonizationDetector, StandingsCalculator
from spreadpairing.tournament import RoundManager, TournamentHistory

__version__ = "0.1.0"

__all__ = [
    "Competitor",
    "MatchRecord",
    "ScoreRecord",
    "Standing",
    "PairingKind",
    "PairingPolicy",
    "TournamentConfig",
    "RoundPairing",
    "StandingsCalculator",
    "GibsonizationDetector",
    "PairingEngine",
    "generate_pairings",
    "RematchLedger",
    "ImpactSimulator",
    "ScoreDraft",
    "RoundManager",
    "TournamentHistory",
]
