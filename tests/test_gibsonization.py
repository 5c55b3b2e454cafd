import pytest

from spreadpairing.models.policy import PairingPolicy
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.engine import generate_pairings
from spreadpairing.pairing.rematch_ledger import RematchLedger
from spreadpairing.standings.gibsonization import (
    GibsonizationDetector,
    clinched_position,
    detect_eliminated,
    detect_gibsonized,
)


def _field():
    return [
        Standing("a", wins=5, games_played=6, rating=1500),
        Standing("b", wins=2, games_played=6, rating=1600),
        Standing("c", wins=2, games_played=6, rating=1400),
        Standing("d", wins=1, games_played=6, rating=1300),
    ]


def test_leader_clinches_when_out_of_reach():
    assert detect_gibsonized(_field(), remaining_rounds=2) == {"a"}
    assert detect_gibsonized(_field(), remaining_rounds=3) == set()


def test_clinched_set_shrinks_as_more_rounds_remain():
    previous = detect_gibsonized(_field(), remaining_rounds=0)
    for remaining in range(1, 6):
        current = detect_gibsonized(_field(), remaining_rounds=remaining)
        assert current <= previous
        previous = current


def test_band_limits_checked_positions():
    assert GibsonizationDetector().detect(_field(), 0) == {"a"}
    assert GibsonizationDetector(gibson_band=1.0).detect(_field(), 0) == {"a", "c"}


def test_last_place_is_never_clinched():
    field = [Standing("a", wins=3), Standing("b")]
    assert GibsonizationDetector(gibson_band=1.0).detect(field, 0) == {"a"}


def test_negative_remaining_rounds_is_an_error():
    with pytest.raises(ValueError):
        detect_gibsonized(_field(), remaining_rounds=-1)


def test_eliminated_from_first_place():
    assert detect_eliminated(_field(), remaining_rounds=2) == {"b", "c", "d"}
    assert detect_eliminated(_field(), remaining_rounds=3) == {"d"}
    assert GibsonizationDetector().eliminated(_field(), 3, target_position=2) == set()


def test_clinched_position():
    assert clinched_position(_field(), "a", 2) == 1
    assert clinched_position(_field(), "b", 2) is None
    assert clinched_position(_field(), "nobody", 2) is None


def _gibson_field():
    leader = Standing("a", wins=4, games_played=4, rating=1000)
    chasers = [
        Standing(cid, wins=1, games_played=4, rating=rating)
        for cid, rating in zip("bcdef", [1500, 1400, 1300, 1200, 1100])
    ]
    return [leader] + chasers


def test_clinched_leader_meets_lowest_ranked_competitor():
    policy = PairingPolicy(gibsonization=True)

    pairing = generate_pairings(_gibson_field(), policy, current_round=4, total_rounds=5)

    assert pairing.clinched_ids == frozenset({"a"})
    pairs = [(m.player1_id, m.player2_id) for m in pairing.matches]
    assert pairs == [("a", "f"), ("b", "c"), ("d", "e")]
    assert pairing.matches[0].player1_clinched
    assert not pairing.matches[0].player2_clinched


def test_clinched_leader_avoids_a_rematch_with_the_bottom():
    policy = PairingPolicy(gibsonization=True)
    ledger = RematchLedger([("a", "f")])

    pairing = generate_pairings(
        _gibson_field(), policy, ledger, current_round=4, total_rounds=5
    )

    pairs = {m.pair_key for m in pairing.matches}
    assert frozenset({"a", "e"}) in pairs
    assert not pairing.rematches


def test_gibsonization_off_pairs_leader_normally():
    pairing = generate_pairings(
        _gibson_field(), PairingPolicy(), current_round=4, total_rounds=5
    )

    assert pairing.clinched_ids == frozenset()
    assert (pairing.matches[0].player1_id, pairing.matches[0].player2_id) == ("a", "b")


def _two_clinched_field():
    return [
        Standing(cid, wins=wins, games_played=6, rating=rating)
        for cid, wins, rating in zip(
            "abcdef", [6, 4, 1, 1, 1, 1], [1000, 1100, 1600, 1500, 1400, 1300]
        )
    ]


def test_clinched_competitors_meet_each_other():
    policy = PairingPolicy(gibsonization=True)

    pairing = generate_pairings(
        _two_clinched_field(), policy, current_round=7, total_rounds=7, gibson_band=1.0
    )

    assert pairing.clinched_ids == frozenset({"a", "b"})
    top = pairing.matches[0]
    assert (top.player1_id, top.player2_id) == ("a", "b")
    assert top.player1_clinched and top.player2_clinched
    for match in pairing.matches[1:]:
        assert not match.player1_clinched
        assert not match.player2_clinched


def test_clinched_pair_is_kept_and_flagged_when_it_is_a_rematch():
    policy = PairingPolicy(gibsonization=True, avoid_rematches=True)
    ledger = RematchLedger([("a", "b")])

    pairing = generate_pairings(
        _two_clinched_field(),
        policy,
        ledger,
        current_round=7,
        total_rounds=7,
        gibson_band=1.0,
    )

    top = pairing.matches[0]
    assert top.pair_key == frozenset({"a", "b"})
    assert top.is_rematch
    assert pairing.rematches == [top]
