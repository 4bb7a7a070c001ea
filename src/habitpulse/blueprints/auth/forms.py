"""Auth request bodies."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(default="")
    email: str = Field(default="")
    password: str = Field(default="")


class LoginForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


__all__ = ["LoginForm", "RegisterForm"]
