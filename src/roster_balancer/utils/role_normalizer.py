"""Centralized role normalization utility.

All role-name parsing in the codebase should use this module to ensure
consistency. The canonical format is lowercase: tank, dps, support.
"""

from typing import Optional

# Canonical roles - the standard format used throughout the application
CANONICAL_ROLES = frozenset({"tank", "dps", "support"})

# Comprehensive mapping from any known role format to canonical lowercase
ROLE_ALIASES: dict[str, str] = {
    # Tank variations
    "tank": "tank",
    "TANK": "tank",
    "tanks": "tank",
    "main tank": "tank",
    "off tank": "tank",
    "offtank": "tank",
    "mt": "tank",
    "ot": "tank",

    # Damage variations - all normalize to "dps"
    "dps": "dps",
    "DPS": "dps",
    "damage": "dps",
    "DAMAGE": "dps",
    "dmg": "dps",
    "offense": "dps",
    "hitscan": "dps",
    "projectile": "dps",

    # Support variations
    "support": "support",
    "SUPPORT": "support",
    "sup": "support",
    "supp": "support",
    "heal": "support",
    "healer": "support",
    "main support": "support",
    "flex support": "support",
    "ms": "support",
    "fs": "support",
}


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to canonical lowercase format.

    Args:
        role: Role string in any known format (e.g., "DAMAGE", "healer", "MT")

    Returns:
        Normalized role string (tank/dps/support) or None if invalid/None

    Examples:
        >>> normalize_role("DAMAGE")
        'dps'
        >>> normalize_role("Healer")
        'support'
        >>> normalize_role(None)
        None
    """
    if role is None:
        return None

    role_lower = role.strip().lower()

    # Try direct lookup first
    if role in ROLE_ALIASES:
        return ROLE_ALIASES[role]

    # Try lowercase lookup
    if role_lower in ROLE_ALIASES:
        return ROLE_ALIASES[role_lower]

    # Unknown role - return None to indicate invalid
    return None


def normalize_role_strict(role: str) -> str:
    """Normalize a role string, raising ValueError if unknown.

    Raises:
        ValueError: If role is not recognized
    """
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def is_valid_role(role: Optional[str]) -> bool:
    """Check if a role string can be normalized to a canonical role."""
    return normalize_role(role) is not None


# Role ordering for consistent display/sorting
ROLE_ORDER = ["tank", "dps", "support"]
