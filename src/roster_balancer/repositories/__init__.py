"""Data access layer."""

from roster_balancer.repositories.player_repository import PlayerRepository

__all__ = ["PlayerRepository"]
