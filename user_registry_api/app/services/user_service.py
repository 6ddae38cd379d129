"""
Business logic for users.

``UserService`` wraps every read and write of the ``users`` collection.
Lookups by a malformed id never reach the store and behave like a
missing record.  Errors are reported with the exceptions below; the
API layer translates them to HTTP responses.
"""

import asyncio
import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from user_registry_api.app.core.db import get_cursor, is_object_id, new_object_id
from user_registry_api.app.core.security import create_user_token, hash_password
from user_registry_api.app.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

_READ_COLUMNS = "id, name, email, is_admin, date"


class UserNotFoundError(ValueError):
    """No user record has the requested id."""


class UserAlreadyExistsError(ValueError):
    """Another user record already uses the email address."""


def _to_read(row: sqlite3.Row) -> UserRead:
    return UserRead(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        is_admin=bool(row["is_admin"]),
        date=row["date"],
    )


class UserService:
    """Service for working with user records."""

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """Return all users, oldest first, without password hashes."""
        with get_cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {_READ_COLUMNS} FROM users ORDER BY date ASC, id ASC"
            ).fetchall()
        return [_to_read(row) for row in rows]

    @classmethod
    async def get_user_by_id(cls, user_id: str) -> Optional[UserRead]:
        """Retrieve a user by id, or ``None`` if there is no such user."""
        if not is_object_id(user_id):
            return None
        with get_cursor() as cursor:
            row = cursor.execute(
                f"SELECT {_READ_COLUMNS} FROM users WHERE id = ?",
                (user_id.lower(),),
            ).fetchone()
        return _to_read(row) if row else None

    @classmethod
    async def register_user(cls, data: UserCreate) -> str:
        """Create a user and return the signed token asserting its id.

        The password is hashed off the event loop before the store is
        touched.  Raises ``UserAlreadyExistsError`` if the email is taken.
        """
        logger.info("Registering user %s", data.email)
        user_id = new_object_id()
        created = datetime.now(timezone.utc).isoformat()
        hashed = await asyncio.to_thread(hash_password, data.password)
        try:
            with get_cursor() as cursor:
                existing = cursor.execute(
                    "SELECT id FROM users WHERE email = ?", (data.email,)
                ).fetchone()
                if existing:
                    raise UserAlreadyExistsError(data.email)
                cursor.execute(
                    "INSERT INTO users (id, name, email, password, is_admin, date) "
                    "VALUES (?, ?, ?, ?, 0, ?)",
                    (user_id, data.name, data.email, hashed, created),
                )
        except sqlite3.IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            raise UserAlreadyExistsError(data.email) from exc
        return create_user_token(user_id)

    @classmethod
    async def update_user(cls, user_id: str, data: UserUpdate) -> UserRead:
        """Apply a partial update and return the updated user.

        Raises ``UserNotFoundError`` if the id is malformed or unknown and
        ``UserAlreadyExistsError`` if the new email belongs to another
        user.
        """
        if not is_object_id(user_id):
            raise UserNotFoundError(user_id)
        user_id = user_id.lower()
        changes = data.changes()
        try:
            with get_cursor() as cursor:
                row = cursor.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone()
                if not row:
                    raise UserNotFoundError(user_id)
                if changes:
                    logger.info("Updating user %s: %s", user_id, sorted(changes))
                    assignments = ", ".join(f"{column} = ?" for column in changes)
                    values = [int(v) if isinstance(v, bool) else v for v in changes.values()]
                    cursor.execute(
                        f"UPDATE users SET {assignments} WHERE id = ?",
                        (*values, user_id),
                    )
                updated = cursor.execute(
                    f"SELECT {_READ_COLUMNS} FROM users WHERE id = ?", (user_id,)
                ).fetchone()
        except sqlite3.IntegrityError as exc:
            raise UserAlreadyExistsError(changes.get("email")) from exc
        return _to_read(updated)
