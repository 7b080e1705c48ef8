"""Team and team-collection models."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from roster_balancer.config import get_settings
from roster_balancer.errors import InvariantViolation
from roster_balancer.models.candidate import Candidate, same_candidate
from roster_balancer.models.roles import RankRange, Role, RoleKind

if TYPE_CHECKING:
    from roster_balancer.services.player_pool import PlayerPool

logger = logging.getLogger(__name__)

ENSIGN_TIER = 3

# (team_index, member_index)
SlotRef = tuple[int, int]


@dataclass
class Member:
    """A candidate holding a team slot of a specific role."""

    candidate: Candidate
    role: Role

    @property
    def rank(self) -> int:
        return self.role.rank


def _default_slots() -> dict[RoleKind, int]:
    return {RoleKind(name): count for name, count in get_settings().team_slots.items()}


@dataclass
class Team:
    """A team with a fixed number of slots per role kind."""

    name: str
    slots: dict[RoleKind, int] = field(default_factory=_default_slots)
    members: list[Member] = field(default_factory=list)

    @property
    def size(self) -> int:
        return sum(self.slots.values())

    def count(self) -> int:
        return len(self.members)

    def is_full(self) -> bool:
        return self.count() >= self.size

    def open_slots(self, kind: RoleKind) -> int:
        taken = sum(1 for m in self.members if m.role.kind == kind)
        return self.slots.get(kind, 0) - taken

    def has_slot(self, kind: RoleKind) -> bool:
        return self.open_slots(kind) > 0

    def kinds(self) -> set[RoleKind]:
        """Role kinds already held by at least one member."""
        return {m.role.kind for m in self.members}

    def has_member(self, uuid: str) -> bool:
        return any(m.candidate.uuid == uuid for m in self.members)

    def total_rank(self) -> int:
        return sum(m.rank for m in self.members)

    def average_rank(self) -> int:
        if not self.members:
            return 0
        return self.total_rank() // self.count()

    def get_range(self, tolerance: int, average: int) -> RankRange:
        """Rank window for the next member.

        Centered on the rank that would bring this team's average exactly to
        ``average`` once the member joins.
        """
        needed = average * (self.count() + 1) - self.total_rank()
        return needed - tolerance, needed + tolerance

    def get_range_without(self, index: int, tolerance: int, average: int) -> RankRange:
        """Like get_range, as if the member at ``index`` had left."""
        remaining = self.total_rank() - self.members[index].rank
        needed = average * self.count() - remaining
        return needed - tolerance, needed + tolerance

    def add_primary_player(self, candidate: Candidate) -> Member:
        return self.add_player(candidate, candidate.get_primary_role())

    def add_player(self, candidate: Candidate, role: Role) -> Member:
        if any(same_candidate(m.candidate, candidate) for m in self.members):
            raise InvariantViolation(f"{candidate.uuid} is already on {self.name}")
        if not self.has_slot(role.kind):
            raise ValueError(f"{self.name} has no open {role.kind.value} slot")
        member = Member(candidate=candidate, role=role)
        self.members.append(member)
        logger.debug(f"{self.name}: added {candidate.name} as {role.kind.value} ({role.rank})")
        return member

    def remove_member(self, index: int) -> Member:
        return self.members.pop(index)

    def replace_member(self, index: int, candidate: Candidate, role: Role) -> Member:
        """Put ``candidate`` in the slot at ``index`` and return the displaced member."""
        displaced = self.members[index]
        if role.kind != displaced.role.kind:
            raise ValueError(
                f"Cannot replace a {displaced.role.kind.value} with a {role.kind.value}"
            )
        if any(
            same_candidate(m.candidate, candidate)
            for i, m in enumerate(self.members)
            if i != index
        ):
            raise InvariantViolation(f"{candidate.uuid} is already on {self.name}")
        self.members[index] = Member(candidate=candidate, role=role)
        logger.debug(
            f"{self.name}: {candidate.name} replaced {displaced.candidate.name} "
            f"as {role.kind.value}"
        )
        return displaced


class Teams:
    """Ordered collection of teams plus the cross-team slot searches."""

    def __init__(self, teams: Optional[Iterable[Team]] = None):
        self.teams: list[Team] = list(teams or [])

    @classmethod
    def create(cls, count: int, slots: Optional[dict[RoleKind, int]] = None) -> "Teams":
        slots = slots or _default_slots()
        return cls(Team(name=f"Team {i + 1}", slots=dict(slots)) for i in range(count))

    def __len__(self) -> int:
        return len(self.teams)

    def __iter__(self) -> Iterator[Team]:
        return iter(self.teams)

    def __getitem__(self, index: int) -> Team:
        return self.teams[index]

    def total_rank(self) -> int:
        return sum(team.total_rank() for team in self.teams)

    def total_count(self) -> int:
        return sum(team.count() for team in self.teams)

    def _weakest(self, teams: Iterable[Team]) -> Optional[Team]:
        # min() keeps the first of equal totals
        return min(teams, key=lambda t: t.total_rank(), default=None)

    def find_mate(self, candidate: Candidate, tier_size: int) -> Optional[Team]:
        """Team where the candidate would pair with a member of the same kind."""
        kind = candidate.get_primary_role().kind
        return self._weakest(
            team
            for team in self.teams
            if team.count() < tier_size and kind in team.kinds() and team.has_slot(kind)
        )

    def find_team(self, tier_size: int, role: Role) -> Optional[Team]:
        """Team below the tier size with an open slot of the role's kind."""
        return self._weakest(
            team
            for team in self.teams
            if team.count() < tier_size and team.has_slot(role.kind)
        )

    def find_perfect_ensign(self, candidate: Candidate) -> Optional[Team]:
        """Two-member team that the candidate completes with a third distinct kind."""
        kind = candidate.get_primary_role().kind
        return self._weakest(
            team
            for team in self.teams
            if team.count() == ENSIGN_TIER - 1
            and kind not in team.kinds()
            and team.has_slot(kind)
        )

    def replace_leftover(
        self,
        leftover: Candidate,
        role: RoleKind,
        rank_range: RankRange,
        db: "PlayerPool",
        tolerance: int,
        total_sr: int,
        total_count: int,
    ) -> Optional[tuple[int, SlotRef]]:
        """Find a member the leftover can stand in for.

        ``role`` and ``rank_range`` describe a slot nobody could fill. A match
        is a member who occupies a slot of the leftover's primary kind and who
        also plays ``role`` within ``rank_range``, while the leftover's primary
        rank suits the member's team in their place. Members are looked up in
        ``db`` by uuid to see all their roles.

        Returns the member's index in ``db`` and their slot, or None.
        """
        if total_count <= 0:
            return None
        average = total_sr // total_count
        leftover_role = leftover.get_primary_role()

        for team_index, team in enumerate(self.teams):
            for member_index, member in enumerate(team.members):
                if member.role.kind != leftover_role.kind:
                    continue
                if same_candidate(member.candidate, leftover):
                    continue
                db_index = db.position_of(member.candidate.uuid)
                if db_index is None:
                    continue
                alternative = db[db_index].roles.find(role)
                if alternative is None or not alternative.is_in_range(rank_range):
                    continue
                window = team.get_range_without(member_index, tolerance, average)
                if leftover_role.is_in_range(window):
                    logger.debug(
                        f"{leftover.name} can replace {member.candidate.name} on {team.name}"
                    )
                    return db_index, (team_index, member_index)
        return None
