"""
Pydantic schemas for the club endpoints.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl

from shared.config.constants import Limits, StrongFoot

STRONG_FOOT_PATTERN = rf"^({'|'.join(StrongFoot.ALL)})$"
PHONE_PATTERN = r"^\+?[0-9][0-9 ()/-]{3,28}$"


# =============================================================================
# Input Schemas
# =============================================================================


class StadiumInput(BaseModel):
    city: str = Field(min_length=1, max_length=Limits.MAX_CITY_LENGTH)
    capacity: int = Field(ge=Limits.MIN_CAPACITY, le=Limits.MAX_CAPACITY)
    street: str | None = Field(default=None, max_length=Limits.MAX_STREET_LENGTH)
    house_number: str | None = Field(default=None, max_length=Limits.MAX_HOUSE_NUMBER_LENGTH)


class PlayerInput(BaseModel):
    first_name: str = Field(min_length=1, max_length=Limits.MAX_PLAYER_NAME_LENGTH)
    last_name: str = Field(min_length=1, max_length=Limits.MAX_PLAYER_NAME_LENGTH)
    age: int | None = Field(default=None, ge=Limits.MIN_PLAYER_AGE, le=Limits.MAX_PLAYER_AGE)
    strong_foot: str | None = Field(default=None, pattern=STRONG_FOOT_PATTERN)


class ClubBase(BaseModel):
    """Fields of a club without its relations."""

    name: str = Field(min_length=1, max_length=Limits.MAX_CLUB_NAME_LENGTH)
    member_count: int | None = Field(default=None, ge=0)
    website: HttpUrl | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    founded: date | None = None

    def to_values(self) -> dict:
        """Column values for the service layer."""
        values = self.model_dump(exclude={"stadium", "players"})
        if self.website is not None:
            values["website"] = str(self.website)
        return values


class ClubUpdate(ClubBase):
    """New field values of a club. The stadium may be replaced, players may not."""

    stadium: StadiumInput | None = None

    def to_values(self) -> dict:
        values = super().to_values()
        if self.stadium is not None:
            values["stadium"] = self.stadium.model_dump()
        return values


class ClubCreate(ClubBase):
    """A new club with its stadium and players."""

    stadium: StadiumInput | None = None
    players: list[PlayerInput] = Field(default_factory=list)

    def to_values(self) -> dict:
        values = super().to_values()
        if self.stadium is not None:
            values["stadium"] = self.stadium.model_dump()
        values["players"] = [p.model_dump() for p in self.players]
        return values


# =============================================================================
# Output Schemas
# =============================================================================


class StadiumOutput(BaseModel):
    city: str
    capacity: int
    street: str | None = None
    house_number: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PlayerOutput(BaseModel):
    id: int
    first_name: str
    last_name: str
    age: int | None = None
    strong_foot: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ClubListOutput(BaseModel):
    id: int
    version: int
    name: str
    member_count: int | None = None
    website: str | None = None
    email: str | None = None
    phone: str | None = None
    founded: date | None = None
    stadium: StadiumOutput | None = None

    model_config = ConfigDict(from_attributes=True)


class ClubOutput(ClubListOutput):
    players: list[PlayerOutput] = Field(default_factory=list)
