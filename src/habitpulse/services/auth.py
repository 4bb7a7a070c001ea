"""Authentication and user management services."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, ContextManager, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import Session, or_, select

from ..errors import InvalidInput
from ..logging_config import get_logger
from ..models.user import User

SessionFactory = Callable[[], ContextManager[Session]]

logger = get_logger(__name__)

_hasher = PasswordHasher()
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8


def validate_registration(username: str, email: str, password: str) -> tuple[str, str]:
    """Return normalized (username, email) or raise InvalidInput."""

    username = (username or "").strip().lower()
    email = (email or "").strip().lower()
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise InvalidInput(
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
        )
    if not _EMAIL_PATTERN.match(email):
        raise InvalidInput("Valid email required")
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidInput(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    return username, email


def create_user(
    *,
    username: str,
    email: str,
    password: str,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    username, email = validate_registration(username, email, password)
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(
            select(User).where(or_(User.username == username, User.email == email))
        ).first()
        if existing:
            if existing.username == username:
                raise InvalidInput("Username already taken")
            raise InvalidInput("Email already registered")
        user = User(username=username, email=email, password_hash=password_hash)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = (username or "").strip().lower()
    if not username or not password:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            return None

        user.last_login = datetime.now()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def get_user(user_id: int, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by primary key."""
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def delete_user(user_id: int, session_factory: SessionFactory) -> bool:
    """Delete a user together with their habits and completions.

    Returns False when the user does not exist.
    """
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            return False
        session.delete(user)
        session.commit()
    logger.info("User deleted", extra={"user_id": user_id})
    return True


__all__ = ["authenticate", "create_user", "delete_user", "get_user", "validate_registration"]
