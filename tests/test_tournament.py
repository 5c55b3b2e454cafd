import logging

import pytest

from spreadpairing.exceptions import DataIntegrityError
from spreadpairing.models.competitor import Competitor
from spreadpairing.models.match_record import MatchRecord, ScoreRecord
from spreadpairing.models.policy import PairingPolicy, TournamentConfig
from spreadpairing.simulation.draft import ScoreDraft
from spreadpairing.tournament.round_manager import RoundManager, TournamentHistory
from spreadpairing.tournament.team_standings import compute_team_standings


def _history():
    return TournamentHistory(
        tuple(
            Competitor(f"c{i}", f"Player {i}", rating)
            for i, rating in enumerate([1800, 1700, 1600, 1500], start=1)
        )
    )


def _manager(num_rounds=3):
    return RoundManager(TournamentConfig("Club night", num_rounds, PairingPolicy()))


def _play_round(manager, history):
    pairing = manager.pair_round(history)
    history = history.with_round(pairing)
    scores = [ScoreRecord(match, 400, 350) for match in pairing.matches]
    return pairing, history.with_scores(scores)


def test_rounds_avoid_earlier_opponents():
    manager = _manager()
    history = _history()

    first, history = _play_round(manager, history)
    second, history = _play_round(manager, history)

    assert first.round_number == 1
    assert second.round_number == 2
    first_pairs = {m.pair_key for m in first.matches}
    assert not first_pairs & {m.pair_key for m in second.matches}
    assert not second.rematches
    assert manager.next_round_number(history) == 3


def test_round_cannot_be_committed_twice():
    manager = _manager()
    history = _history()
    pairing = manager.pair_round(history)
    history = history.with_round(pairing)

    with pytest.raises(DataIntegrityError):
        history.with_round(pairing)


def test_score_needs_a_committed_match():
    with pytest.raises(DataIntegrityError):
        _history().with_scores([ScoreRecord(MatchRecord(1, "c1", "c2"), 400, 300)])


def test_round_completion():
    manager = _manager()
    history = _history()
    pairing = manager.pair_round(history)
    history = history.with_round(pairing)

    assert not history.is_round_complete(1)
    history = history.with_scores([ScoreRecord(m, 400, 300) for m in pairing.matches])
    assert history.is_round_complete(1)


def test_simulate_round_uses_standings_entering_the_round():
    manager = _manager()
    _, history = _play_round(manager, _history())
    pairing = manager.pair_round(history)
    history = history.with_round(pairing)

    projected = manager.simulate_round(history, 2, ScoreDraft(pairing.matches).scores())

    assert len(projected) == 4
    assert all(entry.standing.games_played == 2 for entry in projected)
    assert all(s.games_played == 1 for s in manager.standings(history))


def test_simulate_round_without_matches_is_rejected():
    with pytest.raises(DataIntegrityError):
        _manager().simulate_round(_history(), 1, [])


def test_history_serialization():
    _, history = _play_round(_manager(), _history())

    assert TournamentHistory.from_dict(history.to_dict()) == history


def test_team_standings():
    roster = [
        Competitor("a1", "A One", 1500, team_name="Alpha"),
        Competitor("a2", "A Two", 1500, team_name="Alpha"),
        Competitor("b1", "B One", 1500, team_name="Beta"),
        Competitor("b2", "B Two", 1500, team_name="Beta"),
        Competitor("x", "Solo", 1500),
    ]
    scores = [
        ScoreRecord(MatchRecord(1, "a1", "b1"), 400, 300),
        ScoreRecord(MatchRecord(1, "a2", "b2"), 350, 360),
        ScoreRecord(MatchRecord(2, "a1", "b2"), 400, 350),
        ScoreRecord(MatchRecord(2, "a2", "a1"), 410, 400),
        ScoreRecord(MatchRecord(3, "b1", "x"), 420, 380),
    ]

    alpha, beta = compute_team_standings(roster, scores)

    assert (alpha.team_name, alpha.rank) == ("Alpha", 1)
    assert (alpha.matches_won, alpha.matches_lost) == (1, 0)
    assert (beta.matches_won, beta.matches_lost) == (0, 1)
    assert alpha.games_won == 3
    assert alpha.games_lost == 2
    assert alpha.spread == 140
    assert beta.spread == -100
    assert [m.id for m in alpha.members] == ["a1", "a2"]


def test_team_standings_reject_unknown_competitors():
    scores = [ScoreRecord(MatchRecord(1, "a1", "ghost"), 400, 300)]
    with pytest.raises(DataIntegrityError):
        compute_team_standings([Competitor("a1", "A One", team_name="Alpha")], scores)


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_pairing_is_logged_with_lazy_arguments():
    handler = _RecordingHandler()
    logger = logging.getLogger("spreadpairing.tournament.round_manager")
    level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        _manager().pair_round(_history())
    finally:
        logger.setLevel(level)
        logger.removeHandler(handler)

    record = next(r for r in handler.records if r.msg.startswith("Pairing round"))
    assert record.args == (1, 3, 4)
    assert record.getMessage() == "Pairing round 1 of 3 for 4 competitors"
