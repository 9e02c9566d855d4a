import pytest

from fantabid.draft import budget_breakdown, pick, remaining_needed, role_counts, role_spend


def test_fresh_state_has_full_caps(state):
    budgets = budget_breakdown(state)

    assert budgets["goalkeeper"].cap == pytest.approx(20)
    assert budgets["attacker"].cap == pytest.approx(60)
    for item in budgets.values():
        assert item.spent == 0
        assert item.remaining == pytest.approx(item.cap)
        assert item.adjusted is False


def test_overspend_redistributes_to_only_untouched_role(state):
    state = pick(state, "Punta Uno", 40)
    state = pick(state, "Punta Due", 30)
    state = pick(state, "Difensore Tre", 10)
    state = pick(state, "Centro Tre", 10)

    budgets = budget_breakdown(state)
    attacker = budgets["attacker"]
    assert attacker.spent == pytest.approx(70)
    assert attacker.excess == pytest.approx(10)
    assert attacker.remaining == 0

    keeper = budgets["goalkeeper"]
    assert keeper.remaining == pytest.approx(10)
    assert keeper.adjusted is True
    assert budgets["defender"].adjusted is False
    assert budgets["defender"].remaining == pytest.approx(40)


def test_excess_split_evenly_across_eligible_roles(state):
    state = pick(state, "Punta Uno", 80)
    budgets = budget_breakdown(state)

    assert budgets["goalkeeper"].remaining == pytest.approx(20 - 20 / 3)
    assert budgets["defender"].remaining == pytest.approx(50 - 20 / 3)
    assert budgets["midfielder"].remaining == pytest.approx(70 - 20 / 3)
    assert all(budgets[role].adjusted for role in ("goalkeeper", "defender", "midfielder"))
    assert budgets["attacker"].adjusted is False


def test_deductions_never_exceed_remaining_or_total_excess(state):
    state = pick(state, "Punta Uno", 150)
    budgets = budget_breakdown(state)

    assert budgets["goalkeeper"].remaining == 0
    assert budgets["defender"].remaining == pytest.approx(20)
    assert budgets["midfielder"].remaining == pytest.approx(40)
    deducted = sum(
        budgets[role].cap - budgets[role].remaining
        for role in ("goalkeeper", "defender", "midfielder")
    )
    assert deducted <= budgets["attacker"].excess
    assert all(item.remaining >= 0 for item in budgets.values())


def test_roles_with_picks_are_not_penalized(state):
    state = pick(state, "Portiere Tre", 5)
    state = pick(state, "Punta Uno", 80)
    budgets = budget_breakdown(state)

    assert budgets["goalkeeper"].remaining == pytest.approx(15)
    assert budgets["goalkeeper"].adjusted is False
    assert budgets["defender"].remaining == pytest.approx(40)
    assert budgets["midfielder"].remaining == pytest.approx(60)


def test_no_eligible_roles_leaves_budgets_untouched(state):
    for name, price in [
        ("Portiere Tre", 5),
        ("Difensore Tre", 5),
        ("Centro Tre", 5),
        ("Punta Uno", 90),
    ]:
        state = pick(state, name, price)
    budgets = budget_breakdown(state)

    assert not any(item.adjusted for item in budgets.values())
    assert budgets["goalkeeper"].remaining == pytest.approx(15)


def test_spend_counts_and_needs(state):
    state = pick(state, "Punta Uno", 40)
    state = pick(state, "Punta Due", 25)

    assert role_spend(state, "attacker") == pytest.approx(65)
    assert role_counts(state)["attacker"] == 2
    assert remaining_needed(state) == {
        "goalkeeper": 3,
        "defender": 8,
        "midfielder": 8,
        "attacker": 4,
    }
