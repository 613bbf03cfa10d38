from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import ClassVar
from datetime import date, datetime

from bookstore.models.book import MAX_PRICE, MAX_STOCK
from bookstore.schemas.author import AuthorRead

_REQUIRED_TEXT = ("title", "isbn", "genre")


def _trim_required(v: object) -> object:
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
    return v


# Book base schema
class BookBase(BaseModel):
    title: str
    author_ids: list[str]
    isbn: str
    price: float = Field(le=MAX_PRICE)
    stock: int = Field(le=MAX_STOCK)
    genre: str
    description: str | None = None
    published_date: date | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

# Book create schema
class BookCreate(BookBase):

    @field_validator(*_REQUIRED_TEXT, mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        return _trim_required(v)

    @field_validator("price")
    @classmethod
    def non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("price must be >= 0")
        return v

    @field_validator("stock")
    @classmethod
    def non_negative_stock(cls, v: int) -> int:
        if v < 0:
            raise ValueError("stock must be >= 0")
        return v

# Book update schema (merge-patch: only fields sent are applied)
class BookUpdate(BaseModel):
    title: str | None = None
    author_ids: list[str] | None = None
    isbn: str | None = None
    price: float | None = Field(default=None, le=MAX_PRICE)
    stock: int | None = Field(default=None, le=MAX_STOCK)
    genre: str | None = None
    description: str | None = None
    published_date: date | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("title", "author_ids", "isbn", "price", "stock", "genre", mode="before")
    @classmethod
    def not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("must not be null")
        return _trim_required(v)

    @field_validator("price")
    @classmethod
    def non_negative(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError("price must be >= 0")
        return v

    @field_validator("stock")
    @classmethod
    def non_negative_stock(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("stock must be >= 0")
        return v

# Stock adjustment (signed delta)
class StockAdjustment(BaseModel):
    quantity: int = Field(ge=-MAX_STOCK, le=MAX_STOCK)

# Book read schema
class BookRead(BookBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

# Book read schema with resolved authors
class BookWithAuthorsRead(BookRead):
    authors: list[AuthorRead] = []
