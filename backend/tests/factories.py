"""
Builders for test data and access tokens.
"""

import itertools
import time
from datetime import date
from decimal import Decimal

import jwt

from catalog_api.models import Book, Club, Player, Stadium, Title
from shared.config.settings import settings


_isbn_counter = itertools.count(1)


def make_isbn13(n: int | None = None) -> str:
    """A valid, unique ISBN-13 (978 prefix, computed check digit)."""
    if n is None:
        n = next(_isbn_counter)
    body = f"978{n:09d}"
    total = sum(int(d) * (3 if i % 2 else 1) for i, d in enumerate(body))
    check = (10 - total % 10) % 10
    return f"{body}{check}"


def make_token(roles: list[str], *, sub: str = "test-user", expires_in: int = 300, **claims) -> str:
    """Sign an access token the way the identity provider would."""
    now = int(time.time())
    payload = {
        "sub": sub,
        "preferred_username": sub,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + expires_in,
        "realm_access": {"roles": roles},
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

def add_book(
    db_session,
    title: str,
    *,
    isbn: str | None = None,
    rating: int = 3,
    price: str = "20.00",
    discount: str = "0.1",
    available: bool = True,
    book_type=None,
    release_date: date | None = None,
    keywords: list[str] | None = None,
    version: int = 0,
) -> Book:
    book = Book(
        isbn=isbn or make_isbn13(),
        rating=rating,
        price=Decimal(price),
        discount=Decimal(discount),
        available=available,
        book_type=book_type,
        release_date=release_date,
        keywords=keywords,
        version=version,
    )
    book.title = Title(title=title, subtitle=None)
    db_session.add(book)
    db_session.commit()
    return book


def add_club(
    db_session,
    name: str,
    *,
    city: str = "Munich",
    capacity: int = 75000,
    member_count: int = 1000,
    founded: date | None = None,
    phone: str | None = None,
    players: int = 0,
) -> Club:
    club = Club(name=name, member_count=member_count, founded=founded, phone=phone)
    club.stadium = Stadium(city=city, capacity=capacity, street="Main Street", house_number="1")
    club.players = [
        Player(first_name=f"First{i}", last_name=f"Last{i}", age=20 + i, strong_foot="RIGHT")
        for i in range(players)
    ]
    db_session.add(club)
    db_session.commit()
    return club


