"""Player Profile Schemas — partial profile updates.

Invariants:
    - date_of_birth accepted as DD-MM-YYYY or ISO date; anything else is a 400
    - primary_position restricted to PlayerPosition values
    - first_name and last_name may be omitted but never set to null
"""

from datetime import date

from pydantic import Field, field_validator

from scouting.core.dates import parse_date
from scouting.core.domain_types import PlayerPosition
from scouting.schemas.common import CamelModel


class PlayerProfileUpdate(CamelModel):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    date_of_birth: date | None = None
    country: str | None = Field(None, max_length=100)
    avatar: str | None = Field(None, max_length=1024)
    primary_position: PlayerPosition | None = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, v):
        if v is None or isinstance(v, date):
            return v
        parsed = parse_date(str(v))
        if parsed is None:
            raise ValueError("dateOfBirth must be DD-MM-YYYY or YYYY-MM-DD")
        return parsed

    @field_validator("first_name", "last_name")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v
