"""
Club Services - read and write side of the club aggregate.

Usage:
    from catalog_api.services.domain import ClubReadService, ClubWriteService

    page = ClubReadService(db).find({"city": "munich"}, create_pageable())
    club_id = ClubWriteService(db).create(data, background_tasks=background_tasks)
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.orm import Session

from catalog_api.models import Club, ClubLogo, Player, Stadium
from catalog_api.repositories import ClubRepository
from catalog_api.services.base_service import ReadService, WriteService
from catalog_api.services.search import ClubWhereBuilder
from shared.config.logging import get_logger
from shared.utils.exceptions import NameExistsError

logger = get_logger(__name__)

_STADIUM_FIELDS = ("city", "capacity", "street", "house_number")
_PLAYER_FIELDS = ("first_name", "last_name", "age", "strong_foot")


class ClubReadService(ReadService[Club, ClubLogo]):
    """Read access to clubs."""

    entity_name = "Club"

    def __init__(self, db: Session):
        super().__init__(db, ClubRepository(db), ClubWhereBuilder())


class ClubWriteService(WriteService[Club, ClubLogo]):
    """
    Write access to clubs.

    Business rules:
    - Club name is unique
    - A club is created together with its stadium and players
    - An update may replace the stadium data, never the players
    """

    CHILD_KEYS = frozenset({"stadium", "players"})

    def __init__(self, db: Session):
        super().__init__(db, ClubReadService(db))

    def _find_duplicate(self, values: Mapping[str, Any], exclude_id: int | None) -> NameExistsError | None:
        name = values.get("name")
        if name is not None and self._repo.exists_by_name(name, exclude_id):
            return NameExistsError(name)
        return None

    def _build(self, data: Mapping[str, Any]) -> Club:
        values = {k: v for k, v in data.items() if k not in self.CHILD_KEYS}
        club = Club(**values)

        stadium = data.get("stadium")
        if stadium is not None:
            club.stadium = Stadium(**{f: stadium.get(f) for f in _STADIUM_FIELDS})
        club.players = [
            Player(**{f: player.get(f) for f in _PLAYER_FIELDS})
            for player in data.get("players") or []
        ]
        return club

    def _apply_children(self, entity: Club, children: Mapping[str, Any]) -> None:
        stadium = children.get("stadium")
        if stadium is None:
            return
        if entity.stadium is None:
            entity.stadium = Stadium(**{f: stadium.get(f) for f in _STADIUM_FIELDS})
            return
        for field_name in _STADIUM_FIELDS:
            setattr(entity.stadium, field_name, stadium.get(field_name))

    def _label(self, entity: Club) -> str:
        return entity.name

    def _new_file(self, entity_id: int, data: bytes, filename: str, mimetype: str | None) -> ClubLogo:
        return ClubLogo(club_id=entity_id, data=data, filename=filename, mimetype=mimetype)
