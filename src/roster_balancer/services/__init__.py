"""Distribution services."""

from roster_balancer.services.player_pool import Direction, Placement, PlayerPool

__all__ = [
    "Direction",
    "Placement",
    "PlayerPool",
]
