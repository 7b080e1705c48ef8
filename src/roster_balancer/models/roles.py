"""Role kinds and per-candidate role lists."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional

from roster_balancer.errors import InvariantViolation
from roster_balancer.utils.role_normalizer import normalize_role_strict

if TYPE_CHECKING:
    from roster_balancer.models.player import Classes
    from roster_balancer.models.team import Team

RankRange = tuple[int, int]


class RoleKind(str, Enum):
    """In-game class a team slot is reserved for."""

    DPS = "dps"
    TANK = "tank"
    SUPPORT = "support"

    @classmethod
    def parse(cls, name: "str | RoleKind") -> "RoleKind":
        """Resolve a role name or alias (e.g. "healer", "MT") to a kind."""
        if isinstance(name, RoleKind):
            return name
        return cls(normalize_role_strict(name))


@dataclass(frozen=True)
class Role:
    """An active class entry of a candidate."""

    kind: RoleKind
    rank: int
    priority: int
    primary: bool = False
    secondary: bool = False

    def decompose(self) -> tuple[RoleKind, int]:
        return self.kind, self.rank

    def is_in_range(self, rank_range: RankRange) -> bool:
        """Whether the rank lies within the inclusive (low, high) range."""
        low, high = rank_range
        return low <= self.rank <= high

    def fits_team(self, team: "Team") -> bool:
        """Whether the team still has an open slot for this kind."""
        return team.has_slot(self.kind)


class Roles:
    """Active roles of a candidate, highest priority first.

    The sort is stable, so entries with equal priority keep wire order
    (dps, tank, support). Index 0 is always the primary role.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: tuple[Role, ...] = ()):
        self._entries = tuple(sorted(entries, key=lambda r: r.priority, reverse=True))

    @classmethod
    def from_classes(cls, classes: "Classes") -> "Roles":
        return cls(
            tuple(
                Role(
                    kind=RoleKind(name),
                    rank=entry.rank,
                    priority=entry.priority,
                    primary=entry.primary,
                    secondary=entry.secondary,
                )
                for name, entry in classes.items()
                if entry.is_active
            )
        )

    def get_primary(self) -> Role:
        if not self._entries:
            raise InvariantViolation("Candidate has no active role")
        return self._entries[0]

    def get_primary_rank(self) -> int:
        return self.get_primary().rank

    def count(self) -> int:
        return len(self._entries)

    def get(self, index: int) -> Role:
        return self._entries[index]

    def find(self, kind: RoleKind) -> Optional[Role]:
        """The entry of the given kind, if the candidate plays it."""
        for role in self._entries:
            if role.kind == kind:
                return role
        return None

    def __iter__(self) -> Iterator[Role]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Roles):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Roles({list(self._entries)!r})"


class RolesFilter:
    """Matches roles whose kind is one of a fixed set."""

    def __init__(self, kinds):
        self.kinds = frozenset(RoleKind.parse(kind) for kind in kinds)

    @classmethod
    def from_names(cls, *names: str) -> "RolesFilter":
        return cls(names)

    def has_same(self, role: Role) -> bool:
        return role.kind in self.kinds
