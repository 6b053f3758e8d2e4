"""User account and activity log entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    """Access level of a user."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STAFF = "staff"


class User(BaseModel):
    """A user account. Password hashes never leave the store."""

    id: int | None = None
    username: str
    role: UserRole = UserRole.STAFF
    created_at: datetime | None = None


class ActivityLog(BaseModel):
    """An audit entry describing who did what to which record."""

    id: int | None = None
    user_id: int | None = None
    username: str
    action: str
    entity_type: str
    entity_id: int | None = None
    description: str = ""
    created_at: datetime | None = None
