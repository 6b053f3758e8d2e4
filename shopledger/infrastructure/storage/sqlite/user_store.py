"""SQLite user account store."""

import asyncio
from datetime import datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.account import User, UserRole
from shopledger.core.exceptions import SetupAlreadyCompletedError
from shopledger.core.interfaces.storage import IUserStore
from shopledger.core.services.passwords import hash_password, verify_password
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)


# CPU bound; runs in the default executor, outside the database lock
async def _hash(password: str) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, hash_password, password)


async def _matches(password: str, encoded: str) -> bool:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, verify_password, password, encoded)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user accounts."""

    def __init__(self, db: Database):
        self._db = db

    async def count(self) -> int:
        """Number of user accounts."""
        async with self._db.connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM users")
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def create(self, user: User, password: str) -> User:
        """Create a user with a hashed password."""
        password_hash = await _hash(password)
        async with self._db.transaction("create_user") as conn:
            user.id = await self._insert(conn, user.username, password_hash, user.role)

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    async def create_first_admin(self, username: str, password: str) -> User:
        """Create the first super admin, only while no users exist."""
        password_hash = await _hash(password)
        async with self._db.transaction("setup_admin") as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM users")
            row = await cursor.fetchone()
            if row and row[0] > 0:
                raise SetupAlreadyCompletedError()
            user_id = await self._insert(conn, username, password_hash, UserRole.SUPER_ADMIN)

        logger.info("first_admin_created", user_id=user_id)
        return User(id=user_id, username=username, role=UserRole.SUPER_ADMIN)

    async def authenticate(self, username: str, password: str) -> User | None:
        """Return the user when the credentials match."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            )
            row = await cursor.fetchone()

        if row is None or not await _matches(password, row["password_hash"]):
            return None
        return self._row_to_user(row)

    async def get(self, user_id: int) -> User | None:
        """Get user by ID."""
        async with self._db.connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def list_users(self) -> list[User]:
        """List all users."""
        async with self._db.connection() as conn:
            cursor = await conn.execute("SELECT * FROM users ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def delete(self, user_id: int) -> bool:
        """Delete a user."""
        async with self._db.transaction("delete_user") as conn:
            cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("user_deleted", user_id=user_id)
        return deleted

    async def update_role(self, user_id: int, role: UserRole) -> bool:
        """Change a user's role."""
        async with self._db.transaction("update_user_role") as conn:
            cursor = await conn.execute(
                "UPDATE users SET role = ? WHERE id = ?", (role.value, user_id)
            )
            updated = cursor.rowcount > 0

        if updated:
            logger.info("user_role_updated", user_id=user_id, role=role.value)
        return updated

    async def verify_password(self, user_id: int, password: str) -> bool:
        """Check a user's current password."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT password_hash FROM users WHERE id = ?", (user_id,)
            )
            row = await cursor.fetchone()

        return row is not None and await _matches(password, row["password_hash"])

    async def set_password(self, user_id: int, password: str) -> bool:
        """Replace a user's password."""
        password_hash = await _hash(password)
        async with self._db.transaction("set_password") as conn:
            cursor = await conn.execute(
                "UPDATE users SET password_hash = ? WHERE id = ?",
                (password_hash, user_id),
            )
            updated = cursor.rowcount > 0

        if updated:
            logger.info("password_changed", user_id=user_id)
        return updated

    @staticmethod
    async def _insert(
        conn: aiosqlite.Connection, username: str, password_hash: str, role: UserRole
    ) -> int:
        cursor = await conn.execute(
            "INSERT INTO users (username, password_hash, role) VALUES (?, ?, ?)",
            (username, password_hash, role.value),
        )
        assert cursor.lastrowid is not None
        return cursor.lastrowid

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """Convert database row to User entity."""
        return User(
            id=row["id"],
            username=row["username"],
            role=UserRole(row["role"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
