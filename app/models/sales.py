from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from app.extensions import db
from app.models.base import BaseModel


def _new_sale_id() -> str:
    return uuid.uuid4().hex


class SaleRecord(BaseModel, db.Model):
    """One sold line item as written by the order pipeline.

    ``sale_date`` is stored as naive UTC.
    """
    __tablename__ = "sales"

    id = db.Column(db.String(36), primary_key=True, default=_new_sale_id)
    sale_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    order_id = db.Column(db.String(64))

    customer_name = db.Column(db.String(120))
    product_name = db.Column(db.String(120))
    variant = db.Column(db.String(120))

    quantity = db.Column(db.Integer, default=0)
    unit_price = db.Column(db.Numeric(10, 2), default=Decimal("0.00"))
    subtotal = db.Column(db.Numeric(10, 2), default=Decimal("0.00"))
    layout_fee = db.Column(db.Numeric(10, 2), default=Decimal("0.00"))
    total_amount = db.Column(db.Numeric(10, 2), default=Decimal("0.00"))

    order_source = db.Column(db.String(30), default="web")  # web / walk-in / ...
    employee_name = db.Column(db.String(100))
    employee_email = db.Column(db.String(120))

    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_sales_quantity_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<SaleRecord {self.id[:8] if self.id else '?'} {self.product_name} total={self.total_amount}>"
