"""Candidate pool and the team distribution stages.

A distribution run seeds teams tier by tier, then tops them up with fillers
inside a rank tolerance, and finally looks for replacements that let leftover
candidates in:

1. ``distribute_lieutenant`` / ``distribute_ensign`` place one seed per call
   into teams that have fewer than 2 / 3 members.
2. ``distribute_filler`` adds one candidate whose rank suits a given team.
3. ``distribute_replacement`` finds a team member a leftover can stand in for.

Each placement removes the candidate from the pool before it returns, so a
candidate never holds two slots. The pool is not thread-safe.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from roster_balancer.errors import InvariantViolation
from roster_balancer.models.candidate import Candidate, same_candidate
from roster_balancer.models.player import Player
from roster_balancer.models.roles import RankRange, RoleKind, RolesFilter
from roster_balancer.models.team import ENSIGN_TIER, Member, SlotRef, Team, Teams

logger = logging.getLogger(__name__)

LIEUTENANT_TIER = 2


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Placement:
    """Outcome of a tier distribution call.

    ``team`` is set when a candidate was placed; ``offset`` is then the pool
    position it was taken from. Otherwise the pool was exhausted and
    ``offset`` equals the pool size.
    """

    offset: int
    team: Optional[Team] = None

    @property
    def placed(self) -> bool:
        return self.team is not None


class PlayerPool:
    """Ordered collection of candidates. Order drives every distribution stage."""

    def __init__(self, candidates: Optional[Iterable[Candidate]] = None):
        self.candidates: list[Candidate] = list(candidates or [])

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.candidates)

    def __getitem__(self, index: int) -> Candidate:
        return self.candidates[index]

    def __repr__(self) -> str:
        return f"PlayerPool({[c.name for c in self.candidates]!r})"

    # Maintenance

    def sort_by_rank(self, direction: Direction) -> None:
        """Order by primary-role rank. Equal ranks keep their relative order."""
        self.candidates.sort(
            key=lambda c: c.roles.get_primary_rank(),
            reverse=direction == Direction.DESC,
        )

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle in place, from the OS entropy source unless ``rng`` is given."""
        (rng or random.SystemRandom()).shuffle(self.candidates)

    def size(self) -> int:
        return len(self.candidates)

    def add_player(self, player: Player) -> None:
        self.candidates.append(Candidate.from_player(player))

    def add_candidate(self, candidate: Candidate) -> None:
        self.candidates.append(candidate)

    def collect_ids(self) -> list[str]:
        return [c.uuid for c in self.candidates]

    def filter_by_roles(self, roles_filter: RolesFilter) -> list[int]:
        """Positions of candidates whose primary role matches the filter."""
        return [
            index
            for index, candidate in enumerate(self.candidates)
            if roles_filter.has_same(candidate.get_primary_role())
        ]

    def dispose_of(self, indices: Iterable[int]) -> None:
        """Drop the candidates at the given positions."""
        doomed = set(indices)
        self.candidates = [c for i, c in enumerate(self.candidates) if i not in doomed]

    def get_by_id(self, uuid: str) -> Optional[Candidate]:
        return next((c for c in self.candidates if c.uuid == uuid), None)

    def position_of(self, uuid: str) -> Optional[int]:
        for index, candidate in enumerate(self.candidates):
            if candidate.uuid == uuid:
                return index
        return None

    def _remove_candidate(self, candidate: Candidate) -> None:
        for index, stored in enumerate(self.candidates):
            if same_candidate(stored, candidate):
                del self.candidates[index]
                return

    # Distribution

    def distribute_lieutenant(self, teams: Teams, offset: int = 0) -> Placement:
        """Place the first candidate from ``offset`` that fits a 2-member tier.

        A team whose member shares the candidate's primary kind is preferred
        over any team with a free slot of that kind. Candidates that fit
        nowhere stay in the pool. Call repeatedly until nothing is placed.
        """
        return self._distribute_tier(teams, offset, LIEUTENANT_TIER)

    def distribute_ensign(self, teams: Teams, offset: int = 0) -> Placement:
        """Like distribute_lieutenant for the 3-member tier.

        A team the candidate completes with a third distinct kind is tried
        before mates and free slots.
        """
        return self._distribute_tier(teams, offset, ENSIGN_TIER)

    def _distribute_tier(self, teams: Teams, offset: int, tier_size: int) -> Placement:
        if offset < 0:
            raise InvariantViolation(f"Negative pool offset: {offset}")

        while offset < len(self.candidates):
            candidate = self.candidates[offset]
            team = None
            if tier_size == ENSIGN_TIER:
                team = teams.find_perfect_ensign(candidate)
            if team is None:
                team = teams.find_mate(candidate, tier_size)
            if team is None:
                team = teams.find_team(tier_size, candidate.get_primary_role())
            if team is not None:
                return self._add_player_to_team(team, candidate, offset)
            offset += 1

        logger.debug(f"Tier {tier_size} exhausted at offset {offset}")
        return Placement(offset=offset)

    def _add_player_to_team(self, team: Team, candidate: Candidate, offset: int) -> Placement:
        team.add_primary_player(candidate)
        del self.candidates[offset]
        return Placement(offset=offset, team=team)

    def distribute_filler(
        self, team: Team, tolerance: int, players_average: int
    ) -> Optional[Member]:
        """Add one candidate whose rank suits ``team``.

        Primary roles are tried across the whole pool before any secondary
        role. Returns the new member, or None with pool and team unchanged.
        """
        rank_range = team.get_range(tolerance, players_average)
        snapshot = list(self.candidates)

        for candidate in snapshot:
            role = candidate.get_primary_role()
            if role.is_in_range(rank_range) and role.fits_team(team):
                member = team.add_primary_player(candidate)
                self._remove_candidate(candidate)
                return member

        for candidate in snapshot:
            # index 0 is the primary role, already tried above
            for i in range(1, candidate.roles_count()):
                role = candidate.roles.get(i)
                if role.is_in_range(rank_range) and role.fits_team(team):
                    member = team.add_player(candidate, role)
                    self._remove_candidate(candidate)
                    return member

        logger.debug(f"No filler for {team.name} in range {rank_range}")
        return None

    def distribute_replacement(
        self,
        role: RoleKind,
        rank_range: RankRange,
        teams: Teams,
        db: "PlayerPool",
        tolerance: int,
        total_sr: int,
        total_count: int,
    ) -> Optional[tuple[int, SlotRef, Candidate]]:
        """First leftover in this pool that can take a team member's slot.

        Returns ``(db_index, (team_index, member_index), leftover)``: the
        member at that slot (``db[db_index]``) can move to the unfilled
        ``role`` slot and the leftover can take their place. Nothing is
        mutated; the caller performs the swap.
        """
        for leftover in self.candidates:
            found = teams.replace_leftover(
                leftover, role, rank_range, db, tolerance, total_sr, total_count
            )
            if found is not None:
                db_index, slot = found
                return db_index, slot, leftover
        return None

    # Statistics

    def get_primary_average(self, teams_sr: int, teams_count: int) -> int:
        """Floored mean primary rank of this pool and the already-assigned players.

        Raises ZeroDivisionError when the pool is empty and ``teams_count`` is 0.
        """
        total = sum(c.roles.get_primary_rank() for c in self.candidates) + teams_sr
        count = len(self.candidates) + teams_count
        if count == 0:
            raise ZeroDivisionError("No players to average: pool and teams are empty")
        return total // count
