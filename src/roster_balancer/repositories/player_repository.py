"""Keyed player store with JSON snapshot persistence."""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from roster_balancer.errors import PlayerNotFoundError
from roster_balancer.models.candidate import Candidate
from roster_balancer.models.player import Classes, Player
from roster_balancer.services.player_pool import PlayerPool

if TYPE_CHECKING:
    from roster_balancer.config import Settings

logger = logging.getLogger(__name__)


class PlayerRepository:
    """Stored players keyed by uuid, in insertion order.

    Players are never mutated by the distribution engine; it only receives
    candidate pools extracted from here. When ``storage_path`` is set, every
    mutation rewrites the JSON snapshot.
    """

    def __init__(
        self,
        players: Optional[Iterable[Player]] = None,
        storage_path: Optional[Path] = None,
    ):
        self._players: dict[str, Player] = {}
        self._reserved: list[str] = []
        self.storage_path = Path(storage_path) if storage_path else None
        for player in players or []:
            self._validate(player)
            self._players[player.uuid] = player

    @classmethod
    def load(cls, path: str | Path, persist: bool = True) -> "PlayerRepository":
        """Open a snapshot file.

        Accepts ``{"players": ..., "reserved": [...]}`` as written by save(),
        or just the players as a uuid-keyed mapping or a list.

        Raises:
            FileNotFoundError: If the file doesn't exist
            pydantic.ValidationError: If a player doesn't match the wire shape
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        reserved: list[str] = []
        if isinstance(data, dict) and "players" in data:
            reserved = list(data.get("reserved", []))
            data = data["players"]
        raw_players = data.values() if isinstance(data, dict) else data

        repo = cls(
            (Player.model_validate(raw) for raw in raw_players),
            storage_path=path if persist else None,
        )
        for uuid in reserved:
            if uuid in repo._players and uuid not in repo._reserved:
                repo._reserved.append(uuid)
            else:
                logger.warning(f"Ignoring reserved id {uuid}: unknown or duplicate")
        logger.info(f"PlayerRepository: Loaded {len(repo)} players from {path}")
        return repo

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PlayerRepository":
        """Open the configured snapshot, or start an empty store that saves there."""
        path = Path(settings.players_path)
        if path.exists():
            return cls.load(path)
        logger.info(f"PlayerRepository: {path} not found, starting empty")
        return cls(storage_path=path)

    def to_snapshot(self) -> dict:
        return {
            "players": {uuid: player.to_wire() for uuid, player in self._players.items()},
            "reserved": list(self._reserved),
        }

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path else self.storage_path
        if target is None:
            raise ValueError("No storage path configured")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(self.to_snapshot(), indent=2), encoding="utf-8")
        logger.info(f"PlayerRepository: Saved {len(self)} players to {target}")
        return target

    def _commit(self) -> None:
        if self.storage_path is not None:
            self.save()

    @staticmethod
    def _validate(player: Player) -> None:
        if not player.stats.classes.has_active():
            raise ValueError(f"Player {player.uuid} has no active class")

    # Lookup

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._players

    def ids(self) -> list[str]:
        return list(self._players)

    def get(self, uuid: str) -> Optional[Player]:
        return self._players.get(uuid)

    def require(self, uuid: str) -> Player:
        player = self._players.get(uuid)
        if player is None:
            raise PlayerNotFoundError(uuid)
        return player

    # Pool extraction

    def get_captains(self) -> PlayerPool:
        return PlayerPool(
            Candidate.from_player(p)
            for p in self._players.values()
            if p.identity.is_captain and p.uuid not in self._reserved
        )

    def get_squires(self) -> PlayerPool:
        return PlayerPool(
            Candidate.from_player(p)
            for p in self._players.values()
            if p.identity.is_squire and p.uuid not in self._reserved
        )

    def feed(self, pool: PlayerPool, exclude: Iterable[str]) -> None:
        """Append every stored player whose uuid is not in ``exclude``."""
        excluded = set(exclude)
        for uuid, player in self._players.items():
            if uuid not in excluded:
                pool.add_player(player)

    def feed_unreserved(self, pool: PlayerPool, exclude: Iterable[str]) -> None:
        self.feed(pool, set(exclude) | set(self._reserved))

    # Store mutations

    def add_player(self, player: Player) -> None:
        if player.uuid in self._players:
            raise ValueError(f"Player {player.uuid} already exists")
        self._validate(player)
        self._players[player.uuid] = player
        self._commit()

    def import_players(self, players: Iterable[Player], replace: bool = False) -> int:
        """Add many players at once. Returns how many were stored.

        Existing uuids are skipped unless ``replace`` is set.
        """
        players = list(players)
        for player in players:
            self._validate(player)

        imported = 0
        for player in players:
            if player.uuid in self._players and not replace:
                logger.warning(f"Skipping import of existing player {player.uuid}")
                continue
            self._players[player.uuid] = player
            imported += 1
        self._commit()
        return imported

    def edit_player(self, uuid: str, player: Player) -> None:
        self.require(uuid)
        if player.uuid != uuid:
            raise ValueError(f"Cannot change player uuid {uuid} to {player.uuid}")
        self._validate(player)
        self._players[uuid] = player
        self._commit()

    def update_stats(self, uuid: str, classes: Classes) -> None:
        player = self.require(uuid)
        updated = player.model_copy(
            update={"stats": player.stats.model_copy(update={"classes": classes})}
        )
        self._validate(updated)
        self._players[uuid] = updated
        self._commit()

    def delete_player(self, uuid: str) -> None:
        self.require(uuid)
        del self._players[uuid]
        if uuid in self._reserved:
            self._reserved.remove(uuid)
        self._commit()

    def delete_players(self, uuids: Iterable[str]) -> None:
        uuids = list(uuids)
        for uuid in uuids:
            self.require(uuid)
        for uuid in uuids:
            self._players.pop(uuid, None)
        self._reserved = [uuid for uuid in self._reserved if uuid in self._players]
        self._commit()

    def _set_flags(self, uuids: Iterable[str], **flags: bool) -> None:
        players = [self.require(uuid) for uuid in uuids]
        for player in players:
            uuid = player.uuid
            identity = player.identity.model_copy(update=flags)
            self._players[uuid] = player.model_copy(update={"identity": identity})

    def assign_captains(self, uuids: Iterable[str]) -> None:
        self._set_flags(uuids, is_captain=True)
        self._commit()

    def clear_captains(self) -> None:
        self._set_flags(self.ids(), is_captain=False)
        self._commit()

    def assign_squires(self, uuids: Iterable[str]) -> None:
        self._set_flags(uuids, is_squire=True)
        self._commit()

    def clear_squires(self) -> None:
        self._set_flags(self.ids(), is_squire=False)
        self._commit()

    def clear_all_extra(self) -> None:
        """Drop every captain and squire mark."""
        self._set_flags(self.ids(), is_captain=False, is_squire=False)
        self._commit()

    # Reserve

    def reserved_ids(self) -> list[str]:
        return list(self._reserved)

    def add_reserve(self, uuid: str) -> None:
        self.require(uuid)
        if uuid not in self._reserved:
            self._reserved.append(uuid)
        self._commit()

    def reserve_players(self, uuids: Iterable[str]) -> None:
        """Replace the reserve list."""
        uuids = list(dict.fromkeys(uuids))
        for uuid in uuids:
            self.require(uuid)
        self._reserved = uuids
        self._commit()

    def remove_reserved_player(self, uuid: str) -> None:
        if uuid not in self._reserved:
            raise PlayerNotFoundError(uuid)
        self._reserved.remove(uuid)
        self._commit()
