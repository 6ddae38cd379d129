"""
Pydantic models for user data.

Defines schemas for registering, updating and reading users.  The
password hash is never part of a read model.  Field names on the wire
use the ``isAdmin`` spelling; Python code uses ``is_admin``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 6

# Messages returned for each invalid registration field.
VALIDATION_MESSAGES = {
    "name": "Name is required",
    "email": "Please include a valid email",
    "password": f"Please enter a password with {PASSWORD_MIN_LENGTH} or more characters",
}


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., examples=["Jane Doe"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["secret123"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(VALIDATION_MESSAGES["name"])
        return value

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(VALIDATION_MESSAGES["password"])
        return value


class UserUpdate(BaseModel):
    """Partial update payload.

    Only truthy values are applied: an empty name or ``isAdmin: false``
    leaves the stored field unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    is_admin: Optional[bool] = Field(None, alias="isAdmin")

    def changes(self) -> dict:
        """Return the fields to write, keyed by store column."""
        return {
            column: value
            for column, value in (
                ("name", self.name),
                ("email", self.email),
                ("is_admin", self.is_admin),
            )
            if value
        }


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    name: str
    email: str
    is_admin: bool = Field(False, alias="isAdmin")
    date: Optional[datetime] = None


class TokenResponse(BaseModel):
    token: str
