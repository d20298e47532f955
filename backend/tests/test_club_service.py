"""
Tests for the club read and write services.
"""

from datetime import date

import pytest
from sqlalchemy import func, select

from catalog_api.models import Club, ClubLogo, Player, Stadium
from catalog_api.services import create_pageable
from catalog_api.services.domain import ClubReadService, ClubWriteService
from shared.utils.exceptions import NameExistsError, NoResultsError, NotFoundError, VersionOutdatedError
from tests.factories import add_club

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def new_club_data(**overrides) -> dict:
    data = {
        "name": "VfB Stuttgart",
        "member_count": 100000,
        "website": "https://www.vfb.de/",
        "email": "info@vfb.de",
        "phone": "+49 711 55007",
        "founded": date(1893, 9, 9),
        "stadium": {"city": "Stuttgart", "capacity": 60449, "street": "Mercedesstrasse", "house_number": "87"},
        "players": [
            {"first_name": "Max", "last_name": "Mustermann", "age": 24, "strong_foot": "LEFT"},
            {"first_name": "Erika", "last_name": "Musterfrau", "age": 27, "strong_foot": "BOTH"},
        ],
    }
    data.update(overrides)
    return data


def count_rows(db_session, model) -> int:
    return db_session.scalar(select(func.count()).select_from(model))


class TestClubReadService:

    def test_find_by_id_loads_stadium(self, db_session, seed_club):
        club = ClubReadService(db_session).find_by_id(seed_club.id)

        assert club.name == "FC Munich"
        assert club.stadium.city == "Munich"

    def test_find_by_id_with_players(self, db_session, seed_club):
        club = ClubReadService(db_session).find_by_id(seed_club.id, with_players=True)

        assert [p.last_name for p in club.players] == ["Last0", "Last1"]

    def test_find_by_id_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            ClubReadService(db_session).find_by_id(42)

    def test_find_all(self, db_session, seed_clubs):
        result = ClubReadService(db_session).find(None, create_pageable())

        assert [c.name for c in result.content] == ["FC Munich", "Borussia Dortmund", "SC Freiburg"]
        assert result.total_elements == 3

    def test_find_by_city(self, db_session, seed_clubs):
        result = ClubReadService(db_session).find({"city": "freiburg"}, create_pageable())

        assert [c.name for c in result.content] == ["SC Freiburg"]
        assert result.total_elements == 1

    def test_find_without_matches(self, db_session, seed_clubs):
        with pytest.raises(NoResultsError):
            ClubReadService(db_session).find({"name": "Hamburg"}, create_pageable())

    def test_find_empty_database(self, db_session):
        with pytest.raises(NoResultsError):
            ClubReadService(db_session).find(None, create_pageable())

    def test_count(self, db_session, seed_clubs):
        assert ClubReadService(db_session).count({"capacity": "50000"}) == 2


class TestClubWriteService:

    def test_create_with_stadium_and_players(self, db_session):
        club_id = ClubWriteService(db_session).create(new_club_data())

        club = ClubReadService(db_session).find_by_id(club_id, with_players=True)
        assert club.version == 0
        assert club.stadium.capacity == 60449
        assert [p.first_name for p in club.players] == ["Max", "Erika"]

    def test_create_without_stadium(self, db_session):
        club_id = ClubWriteService(db_session).create(new_club_data(stadium=None, players=[]))

        assert ClubReadService(db_session).find_by_id(club_id).stadium is None

    def test_duplicate_name(self, db_session, seed_club):
        with pytest.raises(NameExistsError) as exc_info:
            ClubWriteService(db_session).create(new_club_data(name="FC Munich"))

        assert exc_info.value.status_code == 409

    def test_name_taken_by_concurrent_create(self, db_session):
        """Another writer inserts the same name between the check and the insert."""
        service = ClubWriteService(db_session)

        def concurrent_create(values):
            add_club(db_session, values["name"])

        service._validate_create = concurrent_create

        with pytest.raises(NameExistsError):
            service.create(new_club_data())

        assert count_rows(db_session, Club) == 1
        assert count_rows(db_session, Player) == 0

    def test_name_taken_by_concurrent_rename(self, db_session, seed_club):
        service = ClubWriteService(db_session)

        def concurrent_create(entity, values):
            add_club(db_session, values["name"])

        service._validate_update = concurrent_create

        with pytest.raises(NameExistsError):
            service.update(seed_club.id, {"name": "FC Bayern", "member_count": 1}, '"0"')

        assert ClubReadService(db_session).find_by_id(seed_club.id).name == "FC Munich"

    def test_update_scalar_fields_and_stadium(self, db_session, seed_club, strict_versions):
        data = {
            "name": "FC Munich",
            "member_count": 5,
            "stadium": {"city": "Garching", "capacity": 1000, "street": None, "house_number": None},
        }

        new_version = ClubWriteService(db_session).update(seed_club.id, data, '"0"')

        club = ClubReadService(db_session).find_by_id(seed_club.id, with_players=True)
        assert new_version == 1
        assert club.version == 1
        assert club.member_count == 5
        assert club.stadium.city == "Garching"
        assert count_rows(db_session, Stadium) == 1
        assert len(club.players) == 2

    def test_update_rename_to_taken_name(self, db_session, seed_clubs):
        with pytest.raises(NameExistsError):
            ClubWriteService(db_session).update(seed_clubs[0].id, {"name": "SC Freiburg"}, '"0"')

    def test_update_outdated(self, db_session, seed_club, strict_versions):
        service = ClubWriteService(db_session)
        service.update(seed_club.id, {"name": "FC Munich", "member_count": 1}, '"0"')

        with pytest.raises(VersionOutdatedError):
            service.update(seed_club.id, {"name": "FC Munich", "member_count": 2}, '"0"')

    def test_logo_upload(self, db_session, seed_club):
        ClubWriteService(db_session).add_file(seed_club.id, PNG_BYTES, "logo.png", len(PNG_BYTES))

        logo = ClubReadService(db_session).find_file(seed_club.id)
        assert logo.mimetype == "image/png"
        assert logo.filename == "logo.png"

    def test_delete_cascades(self, db_session, seed_club):
        service = ClubWriteService(db_session)
        service.add_file(seed_club.id, PNG_BYTES, "logo.png", len(PNG_BYTES))

        assert service.delete(seed_club.id) is True

        assert count_rows(db_session, Club) == 0
        assert count_rows(db_session, Stadium) == 0
        assert count_rows(db_session, Player) == 0
        assert count_rows(db_session, ClubLogo) == 0

    def test_delete_missing(self, db_session):
        assert ClubWriteService(db_session).delete(7) is False
