"""
Pydantic schemas for the book endpoints.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from shared.config.constants import BookType, Keyword, Limits


def isbn13_is_valid(isbn: str) -> bool:
    """ISBN-13 with optional hyphens or spaces and a valid check digit."""
    digits = isbn.replace("-", "").replace(" ", "")
    if len(digits) != 13 or not digits.isdigit():
        return False
    total = sum(int(d) * (3 if i % 2 else 1) for i, d in enumerate(digits))
    return total % 10 == 0


# =============================================================================
# Input Schemas
# =============================================================================


class TitleInput(BaseModel):
    title: str = Field(min_length=1, max_length=Limits.MAX_TITLE_LENGTH, pattern=r"^\w.*")
    subtitle: str | None = Field(default=None, max_length=Limits.MAX_SUBTITLE_LENGTH)


class IllustrationInput(BaseModel):
    caption: str = Field(min_length=1, max_length=Limits.MAX_CAPTION_LENGTH)
    content_type: str = Field(min_length=1, max_length=Limits.MAX_CONTENT_TYPE_LENGTH)


class BookBase(BaseModel):
    """Fields of a book without its relations."""

    isbn: str
    rating: int = Field(ge=0, le=Limits.MAX_RATING)
    book_type: BookType | None = None
    price: Decimal = Field(gt=0, max_digits=8, decimal_places=2)
    discount: Decimal = Field(default=Decimal(0), ge=0, lt=1, max_digits=4, decimal_places=3)
    available: bool = False
    release_date: date | None = None
    homepage: HttpUrl | None = None
    keywords: list[Keyword] | None = None

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        if not isbn13_is_valid(v):
            raise ValueError("isbn must be a valid ISBN-13")
        return v

    @field_validator("keywords")
    @classmethod
    def validate_keywords_unique(cls, v: list[Keyword] | None) -> list[Keyword] | None:
        if v is not None and len(set(v)) != len(v):
            raise ValueError("keywords must be unique")
        return v

    def to_values(self) -> dict:
        """Column values for the service layer."""
        values = self.model_dump(exclude={"title", "illustrations"})
        if self.homepage is not None:
            values["homepage"] = str(self.homepage)
        if self.keywords is not None:
            values["keywords"] = [k.value for k in self.keywords]
        return values


class BookUpdate(BookBase):
    """New field values of a book. The title may be replaced, illustrations may not."""

    title: TitleInput | None = None

    def to_values(self) -> dict:
        values = super().to_values()
        if self.title is not None:
            values["title"] = self.title.model_dump()
        return values


class BookCreate(BookBase):
    """A new book with its title and illustrations."""

    title: TitleInput
    illustrations: list[IllustrationInput] = Field(default_factory=list)

    def to_values(self) -> dict:
        values = super().to_values()
        values["title"] = self.title.model_dump()
        values["illustrations"] = [i.model_dump() for i in self.illustrations]
        return values


# =============================================================================
# Output Schemas
# =============================================================================


class TitleOutput(BaseModel):
    title: str
    subtitle: str | None = None

    model_config = ConfigDict(from_attributes=True)


class IllustrationOutput(BaseModel):
    id: int
    caption: str
    content_type: str

    model_config = ConfigDict(from_attributes=True)


class BookListOutput(BaseModel):
    id: int
    version: int
    isbn: str
    rating: int
    book_type: BookType | None = None
    price: float
    discount: float
    available: bool
    release_date: date | None = None
    homepage: str | None = None
    keywords: list[str] = Field(default_factory=list)
    title: TitleOutput | None = None

    model_config = ConfigDict(from_attributes=True)


class BookOutput(BookListOutput):
    illustrations: list[IllustrationOutput] = Field(default_factory=list)
