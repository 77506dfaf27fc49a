"""Pydantic schemas for registration, login and the current user.

Learn: Registration checks the email's format but keeps the address
exactly as typed. pydantic's EmailStr would hand back a normalized copy
(domain lowercased), and login compares the stored address verbatim, so
the two would drift apart.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field
from pydantic.networks import validate_email


def _well_formed_email(value: str) -> str:
    _, normalized = validate_email(value)  # raises on a malformed address
    # rejects the "Name <addr>" form, which validate_email also accepts
    if normalized.lower() != value.lower():
        raise ValueError("value is not a valid email address")
    return value


RegisteredEmail = Annotated[str, AfterValidator(_well_formed_email)]


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: RegisteredEmail
    password: str = Field(..., min_length=8)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: int
    email: str
    name: str

    model_config = {"from_attributes": True}
