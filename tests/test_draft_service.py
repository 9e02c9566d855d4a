import logging

import pytest

from fantabid.draft import initialize, mark_unavailable, opponent_warning, pick
from fantabid.errors import NotFoundError
from fantabid.models import Player


def test_pick_is_case_insensitive_and_uses_roster_entry():
    state = initialize([Player(name="a", role="defender", base_value=8)], {"budget": 200})

    updated = pick(state, "A", 15)

    entry = updated.picked[-1]
    assert entry.name == "a"
    assert entry.role == "defender"
    assert entry.price == 15
    assert updated.budget_remaining == 185


def test_pick_appends_exactly_one_entry(state):
    before = state
    after = pick(before, "Centro Due", 12)

    assert len(after.picked) == len(before.picked) + 1
    assert after.budget_remaining == max(0, before.budget_remaining - 12)
    assert before.picked == ()


def test_pick_floors_budget_at_zero(state):
    updated = pick(state, "Punta Uno", 250)
    assert updated.budget_remaining == 0
    assert updated.picked[-1].price == 250


def test_pick_unknown_player_raises(state):
    with pytest.raises(NotFoundError):
        pick(state, "Nessuno", 10)
    assert state.picked == ()
    assert state.budget_remaining == 200


def test_pick_taken_player_raises(state):
    state = mark_unavailable(state, "Punta Uno", 30, "Luca")
    with pytest.raises(NotFoundError):
        pick(state, "punta uno", 31)

    state = pick(state, "Punta Due", 20)
    with pytest.raises(NotFoundError):
        pick(state, "Punta Due", 20)


def test_cap_overspend_is_advisory(state, caplog):
    with caplog.at_level(logging.WARNING, logger="fantabid.draft.service"):
        updated = pick(state, "Portiere Uno", 35)

    assert updated.picked[-1].name == "Portiere Uno"
    assert "goalkeeper cap" in caplog.text


def test_mark_unavailable_tolerates_unknown_names(state):
    updated = mark_unavailable(state, "Someone Else", 3)

    assert updated.unavailable[-1].name == "Someone Else"
    assert updated.unavailable[-1].owner is None
    assert updated.opponents == {}
    assert updated.budget_remaining == state.budget_remaining


def test_mark_unavailable_tracks_opponent_budget(state):
    state = mark_unavailable(state, "Punta Uno", 120, "Luca")
    state = mark_unavailable(state, "Centro Uno", 100, "Luca")

    ledger = state.opponents["Luca"]
    assert ledger.budget_remaining == -20
    assert [p.name for p in ledger.players] == ["Punta Uno", "Centro Uno"]
    assert opponent_warning(state, "Luca") is not None
    assert opponent_warning(state, "Nobody") is None


def test_mark_unavailable_skips_own_picks(state):
    state = pick(state, "Punta Uno", 40)
    updated = mark_unavailable(state, "PUNTA UNO", 40, "Luca")

    assert updated is state
    assert updated.unavailable == ()


def test_initialize_scores_roster(roster):
    state = initialize(roster, {"budget": 300, "top_k": 4})

    assert state.budget_remaining == 300
    assert state.picked == ()
    assert all(player.score is not None for player in state.roster)


def test_lookup_and_exclusion_share_name_matching(state):
    state = pick(state, "  centro UNO ", 20)

    assert not state.is_available("CENTRO uno")
    assert mark_unavailable(state, " Centro Uno\t", 10, "Luca") is state
    with pytest.raises(NotFoundError):
        pick(state, "centro uno ", 5)
