"""
Inventory API: Auth Request/Response Schemas
==============================================

What:  API contract for register, login and the current-user projection.

The public user projection (`UserPublic`) is the only shape in which a user
row leaves the service; it has no password field, so the hash cannot be
serialized by accident.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    nama_user: str = Field(min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(description="Login email, unique per account")
    # bcrypt only looks at the first 72 bytes
    password: str = Field(min_length=1, max_length=72, description="Plaintext password")


class RegisterResponse(BaseModel):
    message: str = Field(default="User berhasil didaftarkan")
    id_user: int


class LoginRequest(BaseModel):
    """
    Login credentials.

    `email` is a plain string rather than EmailStr: a malformed address is
    just another failed login (401), not a validation error that would tell
    the caller something about the account space.
    """
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=72)


class UserPublic(BaseModel):
    id_user: int
    nama_user: str
    email: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    message: str = Field(default="Login berhasil")
    token: str = Field(description="Bearer token, valid for 24 hours")
    user: UserPublic
