import pytest

from spreadpairing.exceptions import DataIntegrityError, InvalidConfigurationException
from spreadpairing.models.match_record import ByeRecord, MatchRecord, ScoreRecord
from spreadpairing.models.policy import PairingKind, PairingPolicy, TournamentConfig
from spreadpairing.models.round_pairing import RoundPairing


def test_match_cannot_pair_a_competitor_with_themselves():
    with pytest.raises(DataIntegrityError):
        MatchRecord(1, "a", "a")


def test_first_mover_must_play_in_the_match():
    with pytest.raises(DataIntegrityError):
        MatchRecord(1, "a", "b", first_move_id="c")


def test_match_helpers():
    match = MatchRecord(2, "a", "b", player2_clinched=True)

    assert match.opponent_of("a") == "b"
    assert match.is_clinched("b")
    assert not match.is_clinched("a")
    assert match.pair_key == MatchRecord(1, "b", "a").pair_key
    with pytest.raises(KeyError):
        match.opponent_of("c")


def test_score_helpers():
    match = MatchRecord(2, "a", "b")

    assert ScoreRecord(match, 420, 380).winner_id == "a"
    assert ScoreRecord(match, 380, 420).winner_id == "b"
    assert ScoreRecord(match, 400, 400).winner_id is None
    assert ScoreRecord(match, 420, 380).opponent_score_for("a") == 380


def test_round_pairing_lookup():
    matches = (
        MatchRecord(1, "a", "b", table_number=1),
        MatchRecord(1, "c", "d", table_number=2),
    )
    pairing = RoundPairing(1, matches, bye=ByeRecord(1, "e"))

    assert pairing.match_for("d") is matches[1]
    assert pairing.match_for("e") is None
    assert pairing.bye_competitor_id == "e"
    assert pairing.to_dict()["bye"] == {"round_number": 1, "competitor_id": "e"}


@pytest.mark.parametrize(
    "text, kind",
    [
        ("swiss", PairingKind.SWISS),
        ("Fonte_Swiss", PairingKind.FONTE_SWISS),
        (" king-of-hill ", PairingKind.KING_OF_HILL),
        (PairingKind.MANUAL, PairingKind.MANUAL),
    ],
)
def test_policy_identifiers(text, kind):
    assert PairingKind.parse(text) is kind


def test_unknown_policy_is_rejected():
    with pytest.raises(InvalidConfigurationException):
        PairingKind.parse("accelerated")
    with pytest.raises(InvalidConfigurationException):
        PairingPolicy.from_dict({"kind": "dutch"})


def test_config_round_trip_and_remaining_rounds():
    config = TournamentConfig(
        "Open", 7, PairingPolicy(kind=PairingKind.QUARTILE, gibsonization=True)
    )

    assert TournamentConfig.from_dict(config.to_dict()) == config
    assert config.remaining_rounds(5) == 3
    assert PairingPolicy.from_dict({}).kind is PairingKind.SWISS
