"""Reporting endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from shopledger.api.dependencies import get_reports
from shopledger.application.dto.responses import ErrorResponse
from shopledger.core.entities.report import (
    DashboardStats,
    InventoryReportRow,
    SalesReportRow,
)
from shopledger.core.exceptions import ValidationError
from shopledger.infrastructure.storage.sqlite import SQLiteReportStore

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    today: date | None = Query(default=None, description="Override the local date"),
    reports: SQLiteReportStore = Depends(get_reports),
) -> DashboardStats:
    """Sales, purchases and profit for today, this month, this year and all time."""
    return await reports.dashboard_stats(today=today)


@router.get(
    "/sales",
    response_model=list[SalesReportRow],
    responses={400: {"model": ErrorResponse}},
)
async def sales_report(
    start_date: date,
    end_date: date,
    reports: SQLiteReportStore = Depends(get_reports),
) -> list[SalesReportRow]:
    """Orders within an inclusive date range with per-order profit."""
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date", field="end_date")
    return await reports.sales_report(start_date, end_date)


@router.get("/inventory", response_model=list[InventoryReportRow])
async def inventory_report(
    reports: SQLiteReportStore = Depends(get_reports),
) -> list[InventoryReportRow]:
    """Non-deleted products with stock value, lowest stock first."""
    return await reports.inventory_report()
