"""SQLite expense store."""

from datetime import date, datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.expense import Expense
from shopledger.core.exceptions import ExpenseNotFoundError, ValidationError
from shopledger.core.interfaces.storage import IExpenseStore
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)


class SQLiteExpenseStore(IExpenseStore):
    """SQLite implementation of expenses."""

    def __init__(self, db: Database):
        self._db = db

    async def create(self, expense: Expense) -> Expense:
        """Create an expense."""
        async with self._db.transaction("create_expense") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO expenses (expense_date, category, amount, notes)
                VALUES (?, ?, ?, ?)
                """,
                (
                    expense.expense_date.isoformat(),
                    expense.category,
                    expense.amount,
                    expense.notes,
                ),
            )
            expense.id = cursor.lastrowid

        logger.info("expense_created", expense_id=expense.id, amount=expense.amount)
        return expense

    async def get(self, expense_id: int) -> Expense | None:
        """Get expense by ID."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expenses WHERE id = ?", (expense_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_expense(row) if row else None

    async def update(self, expense: Expense) -> Expense:
        """Update an expense."""
        if expense.id is None:
            raise ValidationError("Expense id is required for update", field="id")

        async with self._db.transaction("update_expense") as conn:
            cursor = await conn.execute(
                """
                UPDATE expenses
                SET expense_date = ?, category = ?, amount = ?, notes = ?
                WHERE id = ?
                """,
                (
                    expense.expense_date.isoformat(),
                    expense.category,
                    expense.amount,
                    expense.notes,
                    expense.id,
                ),
            )
            if cursor.rowcount == 0:
                raise ExpenseNotFoundError(expense.id)

        logger.info("expense_updated", expense_id=expense.id)
        return expense

    async def delete(self, expense_id: int) -> bool:
        """Delete an expense."""
        async with self._db.transaction("delete_expense") as conn:
            cursor = await conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("expense_deleted", expense_id=expense_id)
        return deleted

    async def list_expenses(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> list[Expense]:
        """List expenses, optionally within an inclusive date range."""
        sql = "SELECT * FROM expenses"
        params: list[str] = []
        conditions = []
        if start_date is not None:
            conditions.append("date(expense_date) >= ?")
            params.append(start_date.isoformat())
        if end_date is not None:
            conditions.append("date(expense_date) <= ?")
            params.append(end_date.isoformat())
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY expense_date DESC, id DESC"

        async with self._db.connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_expense(row) for row in rows]

    @staticmethod
    def _row_to_expense(row: aiosqlite.Row) -> Expense:
        """Convert database row to Expense entity."""
        return Expense(
            id=row["id"],
            expense_date=date.fromisoformat(row["expense_date"][:10]),
            category=row["category"],
            amount=row["amount"],
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
