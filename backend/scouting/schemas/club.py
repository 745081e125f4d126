"""Club Schemas — create and partial update bodies."""

from pydantic import Field, field_validator

from scouting.schemas.common import CamelModel


class ClubCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    country: str = Field(min_length=1, max_length=100)
    logo_url: str | None = Field(None, max_length=1024)
    description: str | None = Field(None, max_length=5000)


class ClubUpdate(CamelModel):
    """Partial update — only fields present in the body are applied."""
    name: str | None = Field(None, min_length=1, max_length=255)
    country: str | None = Field(None, min_length=1, max_length=100)
    logo_url: str | None = Field(None, max_length=1024)
    description: str | None = Field(None, max_length=5000)

    @field_validator("name", "country")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v
