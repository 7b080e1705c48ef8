"""Data models for the roster balancer."""

from roster_balancer.models.player import ClassType, Classes, Identity, Player, Stats
from roster_balancer.models.roles import RankRange, Role, RoleKind, Roles, RolesFilter
from roster_balancer.models.candidate import Candidate, same_candidate
from roster_balancer.models.team import Member, Team, Teams

__all__ = [
    "ClassType",
    "Classes",
    "Identity",
    "Player",
    "Stats",
    "RankRange",
    "Role",
    "RoleKind",
    "Roles",
    "RolesFilter",
    "Candidate",
    "same_candidate",
    "Member",
    "Team",
    "Teams",
]
