"""Utility modules for roster_balancer."""

from roster_balancer.utils.role_normalizer import (
    CANONICAL_ROLES,
    ROLE_ALIASES,
    ROLE_ORDER,
    normalize_role,
    normalize_role_strict,
    is_valid_role,
)

__all__ = [
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "normalize_role",
    "normalize_role_strict",
    "is_valid_role",
]
