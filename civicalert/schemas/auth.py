"""Pydantic schemas for staff login."""

from typing import Literal

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str


class User(BaseModel):
    """Authenticated staff member (never carries the password)."""

    id: str
    username: str
    role: Literal["admin", "responder", "citizen"]
    name: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
