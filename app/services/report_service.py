"""
Daily Sales Report Service
Loads one report day from the configured sales backend and derives its totals
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from flask import current_app

from app.services.financials import safe_decimal, safe_int
from app.services.report_dates import as_utc, day_bounds, report_zone
from app.services.sales_source import SaleRow, SalesSource, get_sales_source

logger = logging.getLogger(__name__)

LOAD_FAILED_REASON = "Sales backend unavailable"


@dataclass(frozen=True)
class Totals:
    total_qty: int = 0
    subtotal: Decimal = Decimal("0.00")
    layout: Decimal = Decimal("0.00")
    grand: Decimal = Decimal("0.00")

    def as_dict(self) -> dict:
        return {
            "totalQty": self.total_qty,
            "subtotal": str(self.subtotal),
            "layout": str(self.layout),
            "grand": str(self.grand),
        }


def compute_totals(rows: Iterable[SaleRow]) -> Totals:
    """Sum quantity, subtotal, layout fee and total amount over ``rows``.

    Missing or non-numeric values count as zero.
    """
    total_qty = 0
    subtotal = Decimal("0.00")
    layout = Decimal("0.00")
    grand = Decimal("0.00")
    for r in rows:
        total_qty += safe_int(r.quantity)
        subtotal += safe_decimal(r.subtotal)
        layout += safe_decimal(r.layout_fee)
        grand += safe_decimal(r.total_amount)
    return Totals(total_qty=total_qty, subtotal=subtotal, layout=layout, grand=grand)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one report day; always tagged with that day."""

    report_date: date
    rows: Tuple[SaleRow, ...] = ()
    error: Optional[str] = None

    @classmethod
    def ok(cls, report_date: date, rows: Iterable[SaleRow]) -> "LoadResult":
        return cls(report_date=report_date, rows=tuple(rows))

    @classmethod
    def failed(cls, report_date: date, reason: str) -> "LoadResult":
        return cls(report_date=report_date, error=reason)

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SalesReport:
    report_date: date
    rows: Tuple[SaleRow, ...]
    totals: Totals
    error: Optional[str] = None
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def transaction_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return self.error is None and not self.rows


class ReportService:
    """Builds the daily sales report for one calendar day"""

    def __init__(self, source: SalesSource, tz=timezone.utc, swallow_errors: bool = False):
        self.source = source
        self.tz = tz
        self.swallow_errors = swallow_errors

    @classmethod
    def from_app(cls, app=None) -> "ReportService":
        app = app or current_app._get_current_object()
        return cls(
            source=get_sales_source(app),
            tz=report_zone(app.config.get("REPORT_TIMEZONE")),
            swallow_errors=app.config.get("SALES_REPORT_SWALLOW_ERRORS", False),
        )

    def load_rows(self, report_date: date) -> LoadResult:
        """
        Fetch the rows for ``report_date``, oldest first.

        Rows the backend returns outside the day's window are dropped so an
        adjacent day can never leak into the report.
        """
        start, end = day_bounds(report_date, self.tz)
        logger.debug(f"Loading sales for {report_date.isoformat()} [{start.isoformat()}, {end.isoformat()})")
        try:
            rows = self.source.fetch_between(start, end)
        except Exception:
            # details stay in the log; callers only see LOAD_FAILED_REASON
            logger.exception(f"Failed to load sales for {report_date.isoformat()}")
            if self.swallow_errors:
                return LoadResult.ok(report_date, [])
            return LoadResult.failed(report_date, LOAD_FAILED_REASON)

        lo, hi = as_utc(start), as_utc(end)
        in_window = [r for r in rows if lo <= r.sale_date < hi]
        if len(in_window) != len(rows):
            logger.warning(
                f"Dropped {len(rows) - len(in_window)} sale(s) outside {report_date.isoformat()} returned by backend"
            )
        in_window.sort(key=lambda r: r.sale_date)
        return LoadResult.ok(report_date, in_window)

    def build_report(self, report_date: date) -> SalesReport:
        result = self.load_rows(report_date)
        return SalesReport(
            report_date=result.report_date,
            rows=result.rows,
            totals=compute_totals(result.rows),
            error=result.error,
        )
