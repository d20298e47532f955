"""
Tests for the search predicate builders, executed against the database.
"""

from datetime import date

import pytest
from sqlalchemy import select

from catalog_api.models import Book, Club
from catalog_api.services.search import BookWhereBuilder, ClubWhereBuilder
from shared.config.constants import BookType
from shared.utils.exceptions import InvalidSearchParametersError, NotFoundError
from tests.factories import add_book


def book_titles(db_session, params) -> list[str]:
    clauses = BookWhereBuilder().build(params)
    books = db_session.scalars(select(Book).where(*clauses).order_by(Book.id)).unique().all()
    return [b.title.title for b in books]


def club_names(db_session, params) -> list[str]:
    clauses = ClubWhereBuilder().build(params)
    clubs = db_session.scalars(select(Club).where(*clauses).order_by(Club.id)).unique().all()
    return [c.name for c in clubs]


class TestBookWhereBuilder:

    def test_no_params_no_clauses(self):
        assert BookWhereBuilder().build(None) == ()
        assert BookWhereBuilder().build({}) == ()

    def test_title_is_case_insensitive_substring(self, db_session, seed_books):
        assert book_titles(db_session, {"title": "ALP"}) == ["Alpha"]
        assert book_titles(db_session, {"title": "ta"}) == ["Beta", "Delta", "Zeta", "Eta"]

    def test_title_wildcards_are_literal(self, db_session, seed_books):
        assert book_titles(db_session, {"title": "%"}) == []

    def test_rating_is_minimum(self, db_session, seed_books):
        assert book_titles(db_session, {"rating": "4"}) == ["Alpha", "Beta", "Eta"]

    def test_price_is_maximum(self, db_session, seed_books):
        assert book_titles(db_session, {"price": "15"}) == ["Alpha", "Delta", "Zeta"]

    def test_available_exact(self, db_session, seed_books):
        assert book_titles(db_session, {"available": "false"}) == ["Delta"]

    def test_isbn_exact(self, db_session, seed_books):
        assert book_titles(db_session, {"isbn": seed_books[2].isbn}) == ["Gamma"]

    def test_book_type_exact(self, db_session):
        add_book(db_session, "Paper", book_type=BookType.PAPERBACK)
        add_book(db_session, "Digital", book_type=BookType.EPUB)

        assert book_titles(db_session, {"book_type": "EPUB"}) == ["Digital"]

    def test_release_date_is_on_or_after(self, db_session):
        add_book(db_session, "Old", release_date=date(2001, 1, 1))
        add_book(db_session, "New", release_date=date(2022, 2, 1))

        assert book_titles(db_session, {"release_date": "2022-01-31"}) == ["New"]

    def test_release_date_accepts_timestamp(self, db_session):
        add_book(db_session, "Old", release_date=date(2001, 1, 1))
        add_book(db_session, "New", release_date=date(2022, 2, 1))

        assert book_titles(db_session, {"release_date": "2022-01-31T10:00:00"}) == ["New"]

    def test_single_keyword_flag(self, db_session, seed_books):
        assert book_titles(db_session, {"javascript": "true"}) == ["Alpha", "Beta", "Eta"]

    def test_keyword_flags_require_all(self, db_session, seed_books):
        assert book_titles(db_session, {"javascript": "true", "typescript": "true"}) == ["Alpha"]

    def test_java_does_not_match_javascript(self, db_session, seed_books):
        assert book_titles(db_session, {"java": "true"}) == ["Epsilon"]

    def test_false_flag_does_not_filter(self, db_session, seed_books):
        assert len(book_titles(db_session, {"python": "false"})) == 7

    def test_criteria_are_and_combined(self, db_session, seed_books):
        assert book_titles(db_session, {"rating": "4", "python": "true"}) == ["Eta"]

    @pytest.mark.parametrize("params", [
        {"unknown": "x"},
        {"keywords": "JAVA"},
        {"book_type": "COMIC"},
        {"rating": "high"},
        {"price": "cheap"},
        {"discount": "NaN"},
        {"available": "maybe"},
        {"release_date": "yesterday"},
        {"release_date": "2020-01-01garbage"},
        {"release_date": "2020-01-01T99:00"},
    ])
    def test_invalid_params_reject_whole_search(self, params):
        with pytest.raises(InvalidSearchParametersError) as exc_info:
            BookWhereBuilder().build(params)

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 404


class TestClubWhereBuilder:

    def test_name_substring(self, db_session, seed_clubs):
        assert club_names(db_session, {"name": "fc"}) == ["FC Munich"]

    def test_city_via_stadium(self, db_session, seed_clubs):
        assert club_names(db_session, {"city": "dort"}) == ["Borussia Dortmund"]

    def test_capacity_minimum_via_stadium(self, db_session, seed_clubs):
        assert club_names(db_session, {"capacity": "75000"}) == ["FC Munich", "Borussia Dortmund"]

    def test_member_count_minimum(self, db_session, seed_clubs):
        assert club_names(db_session, {"member_count": "100000"}) == ["FC Munich", "Borussia Dortmund"]

    def test_founded_on_or_after(self, db_session, seed_clubs):
        assert club_names(db_session, {"founded": "1904-01-01"}) == ["Borussia Dortmund", "SC Freiburg"]

    def test_phone_substring(self, db_session, seed_clubs):
        assert club_names(db_session, {"phone": "699"}) == ["FC Munich"]

    @pytest.mark.parametrize("params", [
        {"stadt": "Munich"},
        {"capacity": "big"},
        {"founded": "02/27/1900"},
        {"founded": "1900-02-27xyz"},
    ])
    def test_invalid_params_reject_whole_search(self, params):
        with pytest.raises(InvalidSearchParametersError):
            ClubWhereBuilder().build(params)
