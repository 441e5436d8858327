# storefront/schemas/profile.py
from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel, Field


class ProfileUpdate(SQLModel):
    """
    Payload for PUT /profile.

    Replaces the whole profile: omitted fields are cleared.

    Validation rules:
      - surrounding whitespace is stripped
      - blank strings are stored as null
      - email, when given, must be a valid EmailStr
    """

    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None

    address: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=50)
    state: str | None = Field(default=None, max_length=50)
    zip: str | None = Field(default=None, max_length=20)

    @field_validator(
        "first_name",
        "last_name",
        "phone",
        "email",
        "address",
        "city",
        "state",
        "zip",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class ProfileRead(SQLModel):
    """Response schema returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
