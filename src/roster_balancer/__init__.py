"""Role- and rank-balanced team builder for player pools."""

from roster_balancer.errors import InvariantViolation, PlayerNotFoundError
from roster_balancer.models import Candidate, Player, RoleKind, RolesFilter, Team, Teams
from roster_balancer.repositories import PlayerRepository
from roster_balancer.services import Direction, Placement, PlayerPool

__all__ = [
    "InvariantViolation",
    "PlayerNotFoundError",
    "Candidate",
    "Player",
    "RoleKind",
    "RolesFilter",
    "Team",
    "Teams",
    "PlayerRepository",
    "Direction",
    "Placement",
    "PlayerPool",
]
