import os
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

# Config requires SECRET_KEY at import time
os.environ.setdefault('SECRET_KEY', 'test-secret')

from app import create_app
from app.extensions import db
from app.models.sales import SaleRecord
from app.services.sales_source import SaleRow

MANILA = ZoneInfo('Asia/Manila')


class FakeSource:
    """In-memory sales backend that records every window it was asked for."""

    def __init__(self, rows=None, error=None):
        self.rows = list(rows or [])
        self.error = error
        self.calls = []

    def fetch_between(self, start, end):
        self.calls.append((start, end))
        if self.error is not None:
            raise self.error
        return list(self.rows)


def make_row(local_dt, tz=MANILA, **fields):
    """SaleRow whose sale_date is ``local_dt`` interpreted in ``tz``."""
    data = {
        'id': fields.pop('id', f"row-{local_dt.isoformat()}"),
        'sale_date': local_dt.replace(tzinfo=tz),
        'customer_name': 'Juan Dela Cruz',
        'product_name': 'Tarpaulin 3x5',
        'quantity': 1,
        'unit_price': Decimal('100.00'),
        'subtotal': Decimal('100.00'),
        'layout_fee': Decimal('0.00'),
        'total_amount': Decimal('100.00'),
        'order_source': 'web',
    }
    data.update(fields)
    return SaleRow.from_mapping(data)


@pytest.fixture()
def app(tmp_path):
    config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{(tmp_path / 'test_nva_reports.db').as_posix()}",
        'WTF_CSRF_ENABLED': False,
        'SECRET_KEY': 'test-secret',
        'SALES_BACKEND': 'sql',
        'REPORT_TIMEZONE': 'Asia/Manila',
        'SALES_REPORT_SWALLOW_ERRORS': False,
    }
    app = create_app(config=config)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def logged_in_client(client):
    # Log in as the default admin created by initialize_database()
    rv = client.post('/auth/login', data={'username': 'admin', 'password': 'admin123'}, follow_redirects=True)
    assert b'Welcome back' in rv.data
    return client


@pytest.fixture()
def add_sale(app):
    """Insert a SaleRecord at a Manila wall-clock time."""
    def _add(local_dt, **fields):
        utc_naive = local_dt.replace(tzinfo=MANILA).astimezone(timezone.utc).replace(tzinfo=None)
        defaults = dict(
            customer_name='Juan Dela Cruz',
            product_name='Tarpaulin 3x5',
            quantity=1,
            unit_price=Decimal('100.00'),
            subtotal=Decimal('100.00'),
            layout_fee=Decimal('0.00'),
            total_amount=Decimal('100.00'),
        )
        defaults.update(fields)
        with app.app_context():
            rec = SaleRecord(sale_date=utc_naive, **defaults)
            db.session.add(rec)
            db.session.commit()
            return rec.id
    return _add


@pytest.fixture()
def fake_source(app):
    source = FakeSource()
    app.extensions['sales_source'] = source
    return source
