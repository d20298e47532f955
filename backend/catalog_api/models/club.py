"""
Club Models: Club, Stadium, Player, ClubLogo.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Limits

from .base import Base, FileMixin, VersionedMixin


class Club(VersionedMixin, Base):
    """
    A football club. Written with optimistic locking.
    Inherits: version, created_at, updated_at from VersionedMixin.
    """

    __tablename__ = "club"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(Limits.MAX_CLUB_NAME_LENGTH), nullable=False, unique=True)
    member_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_URL_LENGTH), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_EMAIL_LENGTH), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_PHONE_LENGTH), nullable=True)
    founded: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Relationships
    stadium: Mapped[Optional["Stadium"]] = relationship(
        back_populates="club",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="joined",
    )
    players: Mapped[list["Player"]] = relationship(
        back_populates="club",
        cascade="all, delete-orphan",
        order_by="Player.id",
    )
    logo: Mapped[Optional["ClubLogo"]] = relationship(
        back_populates="club",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Stadium(Base):
    """Home stadium of a club (1:1)."""

    __tablename__ = "stadium"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    city: Mapped[str] = mapped_column(String(Limits.MAX_CITY_LENGTH), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    street: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_STREET_LENGTH), nullable=True)
    house_number: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_HOUSE_NUMBER_LENGTH), nullable=True)
    club_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("club.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    club: Mapped["Club"] = relationship(back_populates="stadium")


class Player(Base):
    """Player of a club (1:N)."""

    __tablename__ = "player"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(Limits.MAX_PLAYER_NAME_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(Limits.MAX_PLAYER_NAME_LENGTH), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    strong_foot: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    club_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("club.id", ondelete="CASCADE"), nullable=False, index=True
    )

    club: Mapped["Club"] = relationship(back_populates="players")


class ClubLogo(FileMixin, Base):
    """Logo of a club (0..1)."""

    __tablename__ = "club_logo"

    club_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("club.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    club: Mapped["Club"] = relationship(back_populates="logo")
