"""Persisted player models.

These mirror the stored/transmitted player shape, which uses camelCase field
names (``isSquire``, ``isActive``, ``createdAt``). Python code uses the
snake_case attribute names; ``to_wire()`` dumps back to the camelCase form.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models exchanged in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClassType(WireModel):
    """One class entry (dps, tank or support) of a player."""

    rank: int
    priority: int = Field(ge=-32768, le=32767)
    primary: bool = False
    secondary: bool = False
    is_active: bool = False


class Classes(WireModel):
    dps: ClassType
    tank: ClassType
    support: ClassType

    def items(self) -> list[tuple[str, ClassType]]:
        """Class entries in wire order, keyed by canonical role name."""
        return [("dps", self.dps), ("tank", self.tank), ("support", self.support)]

    def has_active(self) -> bool:
        return any(entry.is_active for _, entry in self.items())


class Stats(WireModel):
    classes: Classes


class Identity(WireModel):
    uuid: str
    name: str
    is_squire: bool = False
    is_captain: bool = False


class Player(WireModel):
    """A stored player: identity, class stats and creation timestamp."""

    identity: Identity
    stats: Stats
    created_at: str

    @property
    def uuid(self) -> str:
        return self.identity.uuid

    @property
    def name(self) -> str:
        return self.identity.name

    def to_wire(self) -> dict:
        """Serialize to the camelCase wire shape."""
        return self.model_dump(by_alias=True)
