import math
from statistics import fmean, pstdev

import pytest

from fantabid.models import Player
from fantabid.models import AGE_BANDS
from fantabid.scoring import AGE_BAND_BONUS, age_band_bonus, compute_scores, z_scores


def _attackers(*values: float) -> list[Player]:
    return [
        Player(name=chr(ord("A") + index), role="attacker", base_value=value)
        for index, value in enumerate(values)
    ]


def test_z_scores_match_worked_example():
    scored = compute_scores(_attackers(10, 20, 30))

    std = math.sqrt(200 / 3)
    assert [p.name for p in scored] == ["A", "B", "C"]
    assert scored[0].score == pytest.approx(-10 / std)
    assert scored[1].score == pytest.approx(0.0)
    assert scored[2].score == pytest.approx(1.2247, abs=1e-4)


def test_role_scores_are_standardized(roster):
    scored = compute_scores(roster)
    for role in ("goalkeeper", "defender", "midfielder", "attacker"):
        scores = [p.score for p in scored if p.role == role]
        assert fmean(scores) == pytest.approx(0.0, abs=1e-9)
        assert pstdev(scores) == pytest.approx(1.0)


def test_single_player_and_uniform_roles_score_zero():
    scored = compute_scores(
        [
            Player(name="Solo", role="goalkeeper", base_value=17),
            Player(name="Same1", role="defender", base_value=5),
            Player(name="Same2", role="defender", base_value=5),
        ]
    )
    assert [p.score for p in scored] == [0.0, 0.0, 0.0]


def test_roles_are_scored_independently():
    attackers = _attackers(10, 20, 30)
    mixed = attackers + [Player(name="Keeper", role="goalkeeper", base_value=500)]

    alone = [p.score for p in compute_scores(attackers)]
    together = [p.score for p in compute_scores(mixed) if p.role == "attacker"]
    assert together == pytest.approx(alone)


def test_adjustments_are_applied():
    players = [
        Player(name="Young", role="midfielder", base_value=10, ageband="U21"),
        Player(name="Old", role="midfielder", base_value=10, ageband="O30"),
        Player(name="Urgent", role="midfielder", base_value=10, priority=5),
        Player(name="Favorite", role="midfielder", base_value=10, user_score=2),
        Player(name="Plain", role="midfielder", base_value=10, ageband="N/A"),
    ]
    scores = {p.name: p.score for p in compute_scores(players, user_score_weight=0.5)}

    assert scores["Young"] == pytest.approx(0.10)
    assert scores["Old"] == pytest.approx(-0.02)
    assert scores["Urgent"] == pytest.approx(-0.1)
    assert scores["Favorite"] == pytest.approx(1.0)
    assert scores["Plain"] == pytest.approx(0.0)


def test_compute_scores_does_not_touch_input():
    players = _attackers(1, 2)
    compute_scores(players)
    assert all(p.score is None for p in players)


def test_empty_roster():
    assert compute_scores([]) == []
    assert z_scores([]) == []


def test_age_band_bonus_is_case_insensitive():
    assert age_band_bonus("u23") == pytest.approx(0.07)
    assert age_band_bonus("") == 0.0


def test_age_band_bonus_table_covers_every_band():
    assert tuple(AGE_BAND_BONUS) == AGE_BANDS
    assert AGE_BAND_BONUS["U21"] == pytest.approx(0.10)
    assert AGE_BAND_BONUS["O30"] == pytest.approx(-0.02)
