"""User Schemas — registration body."""

from pydantic import EmailStr, Field

from scouting.schemas.common import CamelModel


class UserRegister(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(None, max_length=40)
    photo_url: str | None = Field(None, max_length=1024)
