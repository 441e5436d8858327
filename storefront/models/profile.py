# storefront/models/profile.py
from sqlmodel import SQLModel, Field


class Profile(SQLModel, table=True):
    """
    Contact and shipping details for a user.

    Identity:
      - user_id: the integer id from the access token "sub"; one row per user.

    Credentials live with the identity provider; nothing here is used
    for authentication.
    """

    __tablename__ = "profiles"

    user_id: int = Field(
        primary_key=True,
        description="Owner, as resolved from the access token",
    )

    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=200)

    address: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=50)
    state: str | None = Field(default=None, max_length=50)
    zip: str | None = Field(default=None, max_length=20)
