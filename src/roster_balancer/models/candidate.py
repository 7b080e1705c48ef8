"""Per-run projection of a stored player."""

from dataclasses import dataclass, field

from roster_balancer.errors import InvariantViolation
from roster_balancer.models.player import Player
from roster_balancer.models.roles import Role, Roles


@dataclass(frozen=True, eq=False)
class Candidate:
    """A player as seen by the distribution engine.

    Only the uuid identifies a candidate: two candidates with the same uuid
    are the same player even if their other fields differ.
    """

    uuid: str
    name: str
    roles: Roles = field(default_factory=Roles)

    @classmethod
    def from_player(cls, player: Player) -> "Candidate":
        roles = Roles.from_classes(player.stats.classes)
        if not roles.count():
            raise InvariantViolation(f"Player {player.uuid} has no active class")
        return cls(uuid=player.uuid, name=player.name, roles=roles)

    def get_primary_role(self) -> Role:
        return self.roles.get_primary()

    def roles_count(self) -> int:
        return self.roles.count()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return same_candidate(self, other)

    def __hash__(self) -> int:
        return hash(self.uuid)


def same_candidate(a: Candidate, b: Candidate) -> bool:
    """Identity comparison used for every pool and team membership check."""
    return a.uuid == b.uuid
