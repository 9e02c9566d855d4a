import json

import pytest

from fantabid.draft import from_snapshot, mark_unavailable, pick, to_snapshot
from fantabid.errors import MalformedSnapshot


def _played(state):
    state = pick(state, "Punta Uno", 45)
    state = pick(state, "Portiere Tre", 3)
    state = mark_unavailable(state, "Centro Uno", 60, "Luca")
    return mark_unavailable(state, "Fuori Lista", None, None)


def test_snapshot_round_trip(state):
    state = _played(state)

    restored = from_snapshot(json.loads(json.dumps(to_snapshot(state))))

    assert to_snapshot(restored) == to_snapshot(state)
    assert restored.picked == state.picked
    assert restored.unavailable == state.unavailable
    assert restored.opponents == state.opponents
    assert restored.budget_remaining == state.budget_remaining
    assert restored.roster == state.roster


def test_snapshot_missing_fields_rejected(state):
    data = to_snapshot(state)
    del data["picked"]
    with pytest.raises(MalformedSnapshot, match="picked"):
        from_snapshot(data)


def test_snapshot_invalid_values_rejected(state):
    data = to_snapshot(state)
    data["budget_remaining"] = "plenty"
    with pytest.raises(MalformedSnapshot):
        from_snapshot(data)


def test_snapshot_must_be_object():
    with pytest.raises(MalformedSnapshot):
        from_snapshot(["not", "a", "dict"])  # type: ignore[arg-type]


def test_bare_name_unavailable_entries_are_normalized(state):
    data = to_snapshot(state)
    data["unavailable"] = ["Punta Uno", {"name": "Centro Uno", "price": 10, "owner": "Marco"}]

    restored = from_snapshot(data)
    assert restored.unavailable[0].name == "Punta Uno"
    assert restored.unavailable[0].price is None
    assert restored.unavailable[1].owner == "Marco"
    assert not restored.is_available("punta uno")
