"""Shared builders for players and candidates."""
from typing import Optional

import pytest

from roster_balancer.models.candidate import Candidate
from roster_balancer.models.player import Player

# (rank, priority) per class; None means the class is inactive
ClassStats = Optional[tuple[int, int]]


def build_player(
    uuid: str,
    name: Optional[str] = None,
    dps: ClassStats = None,
    tank: ClassStats = None,
    support: ClassStats = None,
    captain: bool = False,
    squire: bool = False,
) -> Player:
    def entry(stats: ClassStats) -> dict:
        if stats is None:
            return {"rank": 0, "priority": 0, "primary": False, "secondary": False, "isActive": False}
        rank, priority = stats
        return {"rank": rank, "priority": priority, "primary": False, "secondary": False, "isActive": True}

    return Player.model_validate(
        {
            "identity": {
                "uuid": uuid,
                "name": name or uuid.capitalize(),
                "isSquire": squire,
                "isCaptain": captain,
            },
            "stats": {"classes": {"dps": entry(dps), "tank": entry(tank), "support": entry(support)}},
            "createdAt": "2024-01-01T00:00:00.000Z",
        }
    )


def build_candidate(uuid: str, **classes) -> Candidate:
    return Candidate.from_player(build_player(uuid, **classes))


@pytest.fixture
def make_player():
    return build_player


@pytest.fixture
def make_candidate():
    return build_candidate
