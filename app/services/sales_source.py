"""
Sales backends for the daily report.

Every backend answers the same question: which sale rows have a
``sale_date`` inside ``[start, end)``, oldest first. Nothing else is
filtered and no limit is applied; a day's worth of rows is small.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol

from flask import current_app
from tenacity import retry, stop_after_attempt, wait_exponential

from app.extensions import db, get_supabase_client
from app.models.sales import SaleRecord
from app.services.report_dates import as_utc

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"


class SalesSourceError(Exception):
    """Raised when the backend could not answer a query."""


@dataclass(frozen=True)
class SaleRow:
    """Read-only view of one sale, independent of where it was stored."""

    id: str
    sale_date: datetime  # aware, UTC
    order_id: Optional[str] = None
    customer_name: Optional[str] = None
    product_name: Optional[str] = None
    variant: Optional[str] = None
    quantity: Any = 0
    unit_price: Any = 0
    subtotal: Any = 0
    layout_fee: Any = 0
    total_amount: Any = 0
    order_source: Optional[str] = "web"
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SaleRow":
        sale_date = data.get("sale_date")
        if isinstance(sale_date, str):
            # Supabase returns ISO 8601, sometimes with a trailing Z
            try:
                sale_date = datetime.fromisoformat(sale_date.replace("Z", "+00:00"))
            except ValueError as e:
                raise SalesSourceError(f"sale {data.get('id')!r} has unparseable sale_date {sale_date!r}") from e
        if not isinstance(sale_date, datetime):
            raise SalesSourceError(f"sale {data.get('id')!r} has no usable sale_date")

        return cls(
            id=str(data.get("id", "")),
            sale_date=as_utc(sale_date),
            order_id=data.get("order_id"),
            customer_name=data.get("customer_name"),
            product_name=data.get("product_name"),
            variant=data.get("variant"),
            quantity=data.get("quantity"),
            unit_price=data.get("unit_price"),
            subtotal=data.get("subtotal"),
            layout_fee=data.get("layout_fee"),
            total_amount=data.get("total_amount"),
            order_source=data.get("order_source"),
            employee_name=data.get("employee_name"),
            employee_email=data.get("employee_email"),
        )

    @property
    def short_order_id(self) -> str:
        return str(self.order_id)[:8] if self.order_id else PLACEHOLDER

    @property
    def variant_display(self) -> str:
        return self.variant or PLACEHOLDER

    @property
    def source_display(self) -> str:
        return self.order_source or "web"

    @property
    def employee_display(self) -> str:
        if self.employee_name:
            return self.employee_name
        if self.employee_email:
            return self.employee_email.split("@")[0]
        return PLACEHOLDER

    def local_time(self, tz) -> str:
        return self.sale_date.astimezone(tz).strftime("%H:%M")


class SalesSource(Protocol):
    def fetch_between(self, start: datetime, end: datetime) -> List[SaleRow]:
        ...


class SqlSalesSource:
    """Reads the ``sales`` table through Flask-SQLAlchemy."""

    def fetch_between(self, start: datetime, end: datetime) -> List[SaleRow]:
        # sale_date is stored as naive UTC
        lo = as_utc(start).replace(tzinfo=None)
        hi = as_utc(end).replace(tzinfo=None)
        try:
            records = (
                SaleRecord.query
                .filter(SaleRecord.sale_date >= lo, SaleRecord.sale_date < hi)
                .order_by(SaleRecord.sale_date.asc(), SaleRecord.id.asc())
                .all()
            )
        except Exception as e:
            db.session.rollback()
            raise SalesSourceError(f"sales query failed: {e}") from e
        return [SaleRow.from_mapping(r.as_dict()) for r in records]


class SupabaseSalesSource:
    """Reads the hosted ``sales`` table through the shared Supabase client."""

    def __init__(self, client, table: str = "sales"):
        self.client = client
        self.table = table

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=0.5, min=0.5, max=4), reraise=True)
    def _select_sync(self, start_iso: str, end_iso: str) -> List[Dict[str, Any]]:
        response = (
            self.client.table(self.table)
            .select("*")
            .gte("sale_date", start_iso)
            .lt("sale_date", end_iso)
            .order("sale_date", desc=False)
            .execute()
        )
        return response.data or []

    def fetch_between(self, start: datetime, end: datetime) -> List[SaleRow]:
        start_iso = as_utc(start).isoformat()
        end_iso = as_utc(end).isoformat()
        try:
            data = self._select_sync(start_iso, end_iso)
        except Exception as e:
            logger.error(f"Supabase select on {self.table} failed: {e}")
            raise SalesSourceError(f"sales query failed: {e}") from e
        return [SaleRow.from_mapping(item) for item in data]


def get_sales_source(app=None) -> SalesSource:
    """
    Source configured for the app.

    An instance registered under ``app.extensions['sales_source']`` wins,
    which lets tests and embedding code inject their own backend.
    """
    app = app or current_app._get_current_object()
    source = app.extensions.get("sales_source")
    if source is not None:
        return source

    backend = app.config.get("SALES_BACKEND", "sql")
    if backend == "supabase":
        source = SupabaseSalesSource(get_supabase_client(app), app.config.get("SALES_TABLE", "sales"))
    elif backend == "sql":
        source = SqlSalesSource()
    else:
        raise ValueError(f"Unknown SALES_BACKEND {backend!r}")

    app.extensions["sales_source"] = source
    return source
