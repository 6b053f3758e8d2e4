"""Abstract interfaces for auxiliary storage."""

from abc import ABC, abstractmethod
from datetime import date

from shopledger.core.entities.account import ActivityLog, User, UserRole
from shopledger.core.entities.backup import BackupConfig
from shopledger.core.entities.expense import Expense


class ISettingsStore(ABC):
    """Interface for key/value settings and the typed backup config."""

    @abstractmethod
    async def get_all(self) -> dict[str, str]:
        """Get every stored setting."""
        pass

    @abstractmethod
    async def update(self, values: dict[str, str]) -> None:
        """Upsert settings."""
        pass

    @abstractmethod
    async def get_backup_config(self) -> BackupConfig:
        """Resolve the backup settings into a BackupConfig."""
        pass

    @abstractmethod
    async def save_backup_config(self, config: BackupConfig) -> BackupConfig:
        """Persist a BackupConfig."""
        pass

    @abstractmethod
    async def mark_auto_backup(self, day: date) -> None:
        """Record the day of the latest automatic backup."""
        pass


class IUserStore(ABC):
    """Interface for user account persistence."""

    @abstractmethod
    async def count(self) -> int:
        """Number of user accounts."""
        pass

    @abstractmethod
    async def create(self, user: User, password: str) -> User:
        """Create a user with a hashed password."""
        pass

    @abstractmethod
    async def create_first_admin(self, username: str, password: str) -> User:
        """Create the first super admin, only while no users exist."""
        pass

    @abstractmethod
    async def authenticate(self, username: str, password: str) -> User | None:
        """Return the user when the credentials match."""
        pass

    @abstractmethod
    async def get(self, user_id: int) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete a user."""
        pass

    @abstractmethod
    async def update_role(self, user_id: int, role: UserRole) -> bool:
        """Change a user's role."""
        pass

    @abstractmethod
    async def verify_password(self, user_id: int, password: str) -> bool:
        """Check a user's current password."""
        pass

    @abstractmethod
    async def set_password(self, user_id: int, password: str) -> bool:
        """Replace a user's password."""
        pass


class IActivityLogStore(ABC):
    """Interface for the activity audit trail."""

    @abstractmethod
    async def log(self, entry: ActivityLog) -> ActivityLog:
        """Append an activity entry."""
        pass

    @abstractmethod
    async def list_logs(self, limit: int = 100, offset: int = 0) -> list[ActivityLog]:
        """List entries, newest first."""
        pass


class IExpenseStore(ABC):
    """Interface for expense persistence."""

    @abstractmethod
    async def create(self, expense: Expense) -> Expense:
        """Create an expense."""
        pass

    @abstractmethod
    async def get(self, expense_id: int) -> Expense | None:
        """Get expense by ID."""
        pass

    @abstractmethod
    async def update(self, expense: Expense) -> Expense:
        """Update an expense."""
        pass

    @abstractmethod
    async def delete(self, expense_id: int) -> bool:
        """Delete an expense."""
        pass

    @abstractmethod
    async def list_expenses(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> list[Expense]:
        """List expenses, optionally within an inclusive date range."""
        pass


class IMaintenanceStore(ABC):
    """Interface for bulk data cleanup."""

    @abstractmethod
    async def cleanup(
        self,
        sales: bool = False,
        purchases: bool = False,
        products: bool = False,
        logs: bool = False,
        expenses: bool = False,
    ) -> dict[str, int]:
        """Delete the selected data in one transaction; returns rows removed per table."""
        pass
