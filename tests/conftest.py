from __future__ import annotations

import pytest

from fantabid.config import DraftConfig
from fantabid.draft import DraftState, initialize
from fantabid.models import Player


SAMPLE_CSV = """Nome,Sq.,Under,R.,FVMP,P,S
Portiere Uno,Inter,O30,P,20,,
Portiere Due,Roma,U25,P,12,,
Portiere Tre,Lecce,,P,5,,
Difensore Uno,Milan,U28,D,18,,
Difensore Due,Napoli,,D,10,,
Difensore Tre,Genoa,,D,4,,
Centro Uno,Juventus,,C,30,,
Centro Due,Lazio,U23,C,15,,
Centro Tre,Torino,,C,6,,
Punta Uno,Inter,,A,40,,
Punta Due,Atalanta,,A,30,,
Punta Tre,Bologna,U21,A,12,,
"""


def sample_players() -> list[Player]:
    rows = [
        ("Portiere Uno", "goalkeeper", 20),
        ("Portiere Due", "goalkeeper", 12),
        ("Portiere Tre", "goalkeeper", 5),
        ("Difensore Uno", "defender", 18),
        ("Difensore Due", "defender", 10),
        ("Difensore Tre", "defender", 4),
        ("Centro Uno", "midfielder", 30),
        ("Centro Due", "midfielder", 15),
        ("Centro Tre", "midfielder", 6),
        ("Punta Uno", "attacker", 40),
        ("Punta Due", "attacker", 30),
        ("Punta Tre", "attacker", 12),
    ]
    return [Player(name=name, role=role, team="TEAM", base_value=value) for name, role, value in rows]


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def roster() -> list[Player]:
    return sample_players()


@pytest.fixture
def config() -> DraftConfig:
    return DraftConfig(budget=200, top_k=2)


@pytest.fixture
def state(roster: list[Player], config: DraftConfig) -> DraftState:
    return initialize(roster, config)
