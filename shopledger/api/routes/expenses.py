"""Expense endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, status

from shopledger.api.dependencies import get_expenses
from shopledger.application.dto.requests import ExpenseRequest
from shopledger.application.dto.responses import ErrorResponse, ExpenseResponse
from shopledger.core.entities.expense import Expense
from shopledger.core.exceptions import ExpenseNotFoundError
from shopledger.infrastructure.storage.sqlite import SQLiteExpenseStore

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def _to_response(expense: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,  # type: ignore[arg-type]
        expense_date=expense.expense_date,
        category=expense.category,
        amount=expense.amount,
        notes=expense.notes,
        created_at=expense.created_at,
    )


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(
    start_date: date | None = None,
    end_date: date | None = None,
    store: SQLiteExpenseStore = Depends(get_expenses),
) -> list[ExpenseResponse]:
    """List expenses, optionally within an inclusive date range."""
    expenses = await store.list_expenses(start_date=start_date, end_date=end_date)
    return [_to_response(e) for e in expenses]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    request: ExpenseRequest,
    store: SQLiteExpenseStore = Depends(get_expenses),
) -> ExpenseResponse:
    """Create an expense."""
    return _to_response(await store.create(Expense(**request.model_dump())))


@router.put(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_expense(
    expense_id: int,
    request: ExpenseRequest,
    store: SQLiteExpenseStore = Depends(get_expenses),
) -> ExpenseResponse:
    """Update an expense."""
    expense = await store.update(Expense(id=expense_id, **request.model_dump()))
    return _to_response(expense)


@router.delete(
    "/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_expense(
    expense_id: int,
    store: SQLiteExpenseStore = Depends(get_expenses),
) -> None:
    """Delete an expense."""
    if not await store.delete(expense_id):
        raise ExpenseNotFoundError(expense_id)
