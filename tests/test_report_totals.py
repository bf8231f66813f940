from datetime import datetime
from decimal import Decimal

from app.services.financials import format_peso, safe_decimal, safe_int
from app.services.report_service import Totals, compute_totals

from conftest import make_row


def test_totals_scenario_from_two_rows():
    rows = [
        make_row(datetime(2024, 5, 17, 9, 0), quantity=2, subtotal=100, layout_fee=10, total_amount=110),
        make_row(datetime(2024, 5, 17, 10, 0), quantity=3, subtotal=150, layout_fee=0, total_amount=150),
    ]
    totals = compute_totals(rows)
    assert totals.total_qty == 5
    assert totals.subtotal == Decimal('250')
    assert totals.layout == Decimal('10')
    assert totals.grand == Decimal('260')


def test_totals_of_no_rows_are_zero():
    assert compute_totals([]) == Totals()
    assert compute_totals([]).as_dict() == {'totalQty': 0, 'subtotal': '0.00', 'layout': '0.00', 'grand': '0.00'}


def test_missing_and_non_numeric_fields_count_as_zero():
    rows = [
        make_row(datetime(2024, 5, 17, 9, 0), quantity=None, subtotal='abc', layout_fee=None, total_amount=''),
        make_row(datetime(2024, 5, 17, 9, 5), quantity='4', subtotal='12.50', layout_fee='2.5', total_amount='15.00'),
        make_row(datetime(2024, 5, 17, 9, 9), quantity='x', subtotal=float('nan'), layout_fee='1', total_amount=5),
    ]
    totals = compute_totals(rows)
    assert totals.total_qty == 4
    assert totals.subtotal == Decimal('12.50')
    assert totals.layout == Decimal('3.5')
    assert totals.grand == Decimal('20.00')


def test_totals_do_not_touch_rows():
    rows = [make_row(datetime(2024, 5, 17, 9, 0), quantity='2', subtotal='5')]
    before = list(rows)
    compute_totals(rows)
    assert rows == before
    assert rows[0].quantity == '2'
    assert rows[0].subtotal == '5'


def test_safe_number_helpers():
    assert safe_decimal(None) == Decimal('0.00')
    assert safe_decimal(' 7.25 ') == Decimal('7.25')
    assert safe_decimal('Infinity') == Decimal('0.00')
    assert safe_decimal(True) == Decimal('0.00')
    assert safe_int('3') == 3
    assert safe_int(2.9) == 2
    assert safe_int('n/a') == 0
    assert safe_int(float('inf')) == 0


def test_format_peso():
    assert format_peso(Decimal('1234.5')) == '₱1,234.50'
    assert format_peso(0) == '₱0.00'
    assert format_peso(None) == '₱0.00'
    assert format_peso('garbage') == '₱0.00'
    assert format_peso('-12') == '-₱12.00'
    assert format_peso(Decimal('0.005')) == '₱0.01'
