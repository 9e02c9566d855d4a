from fantabid.draft import balance_band, balance_score, mark_unavailable, opponent_summary, pick


def test_fresh_draft_penalizes_underspend(state):
    assert balance_score(state) == 80


def test_over_cap_role_costs_ten(state):
    state = pick(state, "Punta Uno", 70)
    assert balance_score(state) == 75


def test_balanced_spend_scores_full_marks(state):
    for name, price in [
        ("Portiere Uno", 10),
        ("Difensore Uno", 20),
        ("Centro Uno", 30),
        ("Punta Uno", 30),
    ]:
        state = pick(state, name, price)
    assert balance_score(state) == 100
    assert balance_band(100) == "good"


def test_balance_bands():
    assert balance_band(80) == "good"
    assert balance_band(65) == "fair"
    assert balance_band(10) == "poor"


def test_opponent_summary_groups_by_role(state):
    state = mark_unavailable(state, "Punta Uno", 45, "Luca")
    state = mark_unavailable(state, "Sconosciuto", 3, "Luca")
    state = mark_unavailable(state, "Centro Due", 210, "Marco")

    luca, marco = opponent_summary(state)

    assert luca.owner == "Luca"
    assert luca.spent == 48
    assert luca.budget_remaining == 152
    assert [p.name for p in luca.players_by_role["attacker"]] == ["Punta Uno"]
    assert [p.name for p in luca.players_by_role["unknown"]] == ["Sconosciuto"]
    assert luca.counts["attacker"] == 1
    assert luca.missing["attacker"] == 5
    assert luca.missing["goalkeeper"] == 3
    assert luca.warnings == []

    assert marco.budget_remaining == -10
    assert marco.warnings
