from pydantic import BaseModel, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import ClassVar
from datetime import date, datetime


# Social links, limited to the supported platforms
class SocialLinks(BaseModel):
    twitter: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


# Author base schema
class AuthorBase(BaseModel):
    first_name: str
    last_name: str
    full_name: str
    biography: str | None = None
    birth_date: date | None = None
    nationality: str | None = None
    website: str | None = None
    social_links: SocialLinks | None = None
    profile_image_url: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

# Author create schema
class AuthorCreate(AuthorBase):

    @field_validator("first_name", "last_name", "full_name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
        return v

# Author update schema (merge-patch: only fields sent are applied)
class AuthorUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    biography: str | None = None
    birth_date: date | None = None
    nationality: str | None = None
    website: str | None = None
    social_links: SocialLinks | None = None
    profile_image_url: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("first_name", "last_name", "full_name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        if v is None:
            raise ValueError("must not be null")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
        return v

# Author read schema
class AuthorRead(AuthorBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
