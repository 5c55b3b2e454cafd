from spreadpairing.models.competitor import Competitor
from spreadpairing.models.match_record import ByeRecord, MatchRecord, ScoreRecord
from spreadpairing.models.policy import PairingKind, PairingPolicy, TournamentConfig
from spreadpairing.models.round_pairing import RoundPairing
from spreadpairing.models.standing import Standing

__all__ = [
    "Competitor",
    "MatchRecord",
    "ScoreRecord",
    "ByeRecord",
    "Standing",
    "PairingKind",
    "PairingPolicy",
    "TournamentConfig",
    "RoundPairing",
]
