from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.services.sales_source import SaleRow, SalesSourceError

from conftest import make_row


def test_employee_falls_back_to_email_local_part():
    row = make_row(datetime(2024, 5, 17, 9, 0), employee_name=None, employee_email='jane@x.com')
    assert row.employee_display == 'jane'


def test_employee_name_wins_and_placeholder_when_unknown():
    named = make_row(datetime(2024, 5, 17, 9, 0), employee_name='Maria', employee_email='jane@x.com')
    assert named.employee_display == 'Maria'
    anonymous = make_row(datetime(2024, 5, 17, 9, 0))
    assert anonymous.employee_display == '—'


def test_order_id_is_truncated_to_eight_characters():
    row = make_row(datetime(2024, 5, 17, 9, 0), order_id='a1b2c3d4-e5f6-7890')
    assert row.short_order_id == 'a1b2c3d4'
    assert make_row(datetime(2024, 5, 17, 9, 0)).short_order_id == '—'


def test_variant_and_source_placeholders():
    row = make_row(datetime(2024, 5, 17, 9, 0), variant=None, order_source=None)
    assert row.variant_display == '—'
    assert row.source_display == 'web'
    walk_in = make_row(datetime(2024, 5, 17, 9, 0), variant='Matte', order_source='walk-in')
    assert walk_in.variant_display == 'Matte'
    assert walk_in.source_display == 'walk-in'


def test_from_mapping_parses_iso_strings_to_utc():
    row = SaleRow.from_mapping({'id': 7, 'sale_date': '2024-05-17T01:30:00Z'})
    assert row.id == '7'
    assert row.sale_date == datetime(2024, 5, 17, 1, 30, tzinfo=timezone.utc)
    assert row.local_time(ZoneInfo('Asia/Manila')) == '09:30'


def test_from_mapping_requires_a_timestamp():
    with pytest.raises(SalesSourceError):
        SaleRow.from_mapping({'id': 'x', 'sale_date': None})


def test_from_mapping_rejects_garbage_timestamps():
    with pytest.raises(SalesSourceError):
        SaleRow.from_mapping({'id': 'x', 'sale_date': 'not a date'})
