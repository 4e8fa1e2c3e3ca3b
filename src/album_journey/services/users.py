"""Username normalization and get-or-create helpers."""
from __future__ import annotations

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from album_journey.core.errors import NotFoundError, ValidationError
from album_journey.models import User

__all__ = [
    "normalize_username",
    "find_user",
    "get_user_or_404",
    "get_or_create_user",
]

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[a-z0-9_-]+$")


def normalize_username(username: str | None) -> str:
    """Return the canonical (trimmed, lowercase) form of a username.

    Raises:
        ValidationError: If the username is empty or uses characters outside
            ``[a-z0-9_-]``.
    """
    normalized = (username or "").strip().lower()
    if not normalized:
        raise ValidationError("Username required")
    if not USERNAME_PATTERN.match(normalized):
        raise ValidationError("Invalid username format")
    return normalized


def find_user(db: Session, username: str) -> User | None:
    """Return the user for a username without creating one."""
    normalized = normalize_username(username)
    return db.query(User).filter(User.username == normalized).first()


def get_user_or_404(db: Session, username: str) -> User:
    """Return an existing user or raise NotFoundError."""
    user = find_user(db, username)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_or_create_user(db: Session, username: str, *, starting_position: int) -> tuple[User, bool]:
    """Return the user for ``username``, inserting it when missing.

    The insert runs inside a savepoint and relies on the unique username
    constraint; a concurrent request that created the same user first makes
    this call fall back to the existing row. Nothing is committed here.

    Args:
        db: Database session
        username: Raw username as supplied by the client
        starting_position: Position assigned to a newly created user

    Returns:
        The user and whether it was created by this call
    """
    normalized = normalize_username(username)
    user = db.query(User).filter(User.username == normalized).first()
    if user is not None:
        return user, False

    try:
        with db.begin_nested():
            user = User(username=normalized, current_position=starting_position)
            db.add(user)
    except IntegrityError:
        user = db.query(User).filter(User.username == normalized).one()
        return user, False

    logger.info("Created user %s at position %d", normalized, starting_position)
    return user, True
