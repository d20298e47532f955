"""
Pytest configuration and fixtures for backend tests.
"""

import os

# In-memory SQLite for the whole test session, set before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MAIL_ENABLED", "false")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from catalog_api.main import app
from catalog_api.models import Base, Illustration
from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal, engine, get_db
from tests.factories import add_book, add_club, make_token


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token(['admin'], sub='admin')}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {make_token(['user'], sub='user')}"}


@pytest.fixture
def guest_headers():
    """Valid token without any catalog role."""
    return {"Authorization": f"Bearer {make_token([], sub='guest')}"}


@pytest.fixture
def strict_versions():
    """Pin the version check mode for a test."""
    previous = settings.version_check_strict
    settings.version_check_strict = True
    yield
    settings.version_check_strict = previous


@pytest.fixture
def lenient_versions():
    previous = settings.version_check_strict
    settings.version_check_strict = False
    yield
    settings.version_check_strict = previous


# =============================================================================
# Seed data
# =============================================================================


@pytest.fixture
def seed_books(db_session):
    """Seven books: Alpha, Beta, Gamma, Delta, Epsilon, Zeta, Eta."""
    books = [
        add_book(db_session, "Alpha", rating=5, price="10.00", keywords=["JAVASCRIPT", "TYPESCRIPT"]),
        add_book(db_session, "Beta", rating=4, price="25.00", keywords=["JAVASCRIPT"]),
        add_book(db_session, "Gamma", rating=2, price="50.00", keywords=["PYTHON"]),
        add_book(db_session, "Delta", rating=1, price="15.00", keywords=None, available=False),
        add_book(db_session, "Epsilon", rating=3, price="30.00", keywords=["JAVA"]),
        add_book(db_session, "Zeta", rating=0, price="5.00", keywords=["TYPESCRIPT"]),
        add_book(db_session, "Eta", rating=4, price="40.00", keywords=["JAVASCRIPT", "PYTHON"]),
    ]
    return books


@pytest.fixture
def seed_book(db_session):
    book = add_book(db_session, "Alpha", keywords=["JAVASCRIPT"])
    book.illustrations = [Illustration(caption="Cover", content_type="img/png")]
    db_session.commit()
    return book


@pytest.fixture
def seed_clubs(db_session):
    return [
        add_club(db_session, "FC Munich", city="Munich", capacity=75000, member_count=300000,
                 founded=date(1900, 2, 27), phone="+49 89 699310", players=2),
        add_club(db_session, "Borussia Dortmund", city="Dortmund", capacity=81000, member_count=200000,
                 founded=date(1909, 12, 19)),
        add_club(db_session, "SC Freiburg", city="Freiburg", capacity=34700, member_count=50000,
                 founded=date(1904, 5, 30)),
    ]


@pytest.fixture
def seed_club(db_session):
    return add_club(db_session, "FC Munich", players=2)
