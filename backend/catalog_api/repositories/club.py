"""
Club Repository.
"""

from typing import Any

from sqlalchemy.orm import selectinload

from catalog_api.models import Club, ClubLogo
from .base import BaseRepository


class ClubRepository(BaseRepository[Club, ClubLogo]):
    """Data access for clubs. Stadium is always joined, players on request."""

    @property
    def model(self) -> type[Club]:
        return Club

    @property
    def file_model(self) -> type[ClubLogo]:
        return ClubLogo

    @property
    def file_parent_column(self) -> Any:
        return ClubLogo.club_id

    def _load_options(self, *, with_players: bool = False, **_: bool) -> list[Any]:
        options: list[Any] = []
        if with_players:
            options.append(selectinload(Club.players))
        return options

    def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        return self.exists_by(Club.name, name, exclude_id)
