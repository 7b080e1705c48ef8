"""Tests for role name normalization."""
import pytest

from roster_balancer.utils.role_normalizer import (
    CANONICAL_ROLES,
    is_valid_role,
    normalize_role,
    normalize_role_strict,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("DPS", "dps"),
        ("damage", "dps"),
        ("Dmg", "dps"),
        ("TANK", "tank"),
        ("Off Tank", "tank"),
        ("  healer ", "support"),
        ("SUP", "support"),
    ],
)
def test_normalize_aliases(raw, expected):
    assert normalize_role(raw) == expected


def test_unknown_and_none():
    assert normalize_role("jungle") is None
    assert normalize_role(None) is None
    assert not is_valid_role("jungle")
    assert is_valid_role("support")


def test_strict_raises():
    with pytest.raises(ValueError):
        normalize_role_strict("carry")


def test_canonical_roles_map_to_themselves():
    for role in CANONICAL_ROLES:
        assert normalize_role(role) == role
