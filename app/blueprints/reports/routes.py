from __future__ import annotations

from datetime import datetime
import logging

from flask import render_template, request, flash, jsonify, Response, abort, current_app as app
from flask_login import login_required

from app.services.authz import roles_required
from app.services.financials import format_peso
from app.services.print_service import PRINT_CSS, REPORT_ANCHOR_ID, build_print_document
from app.services.report_dates import parse_report_date, report_zone, today_in
from app.services.report_service import ReportService, SalesReport

from . import reports_bp

logger = logging.getLogger(__name__)


def _selected_date(tz, warn=True):
    """Report day from ``?date=``; malformed values fall back to today."""
    raw = request.args.get('date', '')
    selected, valid = parse_report_date(raw, today_in(tz))
    if not valid:
        logger.info(f"Ignoring malformed report date {raw!r}")
        if warn:
            flash('Invalid date format. Use YYYY-MM-DD.', 'warning')
    return selected


def _card_context(report: SalesReport, tz):
    return dict(
        report=report,
        tz=tz,
        anchor_id=REPORT_ANCHOR_ID,
        company_name=app.config.get('COMPANY_NAME'),
        company_address=app.config.get('COMPANY_ADDRESS'),
        generated_at=datetime.now(tz),
    )


def _row_json(row, tz):
    return {
        'id': row.id,
        'sale_date': row.sale_date.isoformat(),
        'time': row.local_time(tz),
        'order_id': row.short_order_id,
        'customer_name': row.customer_name,
        'product_name': row.product_name,
        'variant': row.variant_display,
        'quantity': row.quantity,
        'unit_price': format_peso(row.unit_price),
        'subtotal': format_peso(row.subtotal),
        'layout_fee': format_peso(row.layout_fee),
        'total_amount': format_peso(row.total_amount),
        'order_source': row.source_display,
        'employee': row.employee_display,
    }


@reports_bp.route("/sales")
@login_required
@roles_required("ADMIN", "SALES")
def sales_report():
    """Daily Sales Report for the selected day (defaults to today)."""
    tz = report_zone(app.config.get('REPORT_TIMEZONE'))
    selected = _selected_date(tz)

    report = ReportService.from_app().build_report(selected)
    if report.error:
        flash('Could not load sales for this date. Please try again.', 'danger')

    return render_template(
        'reports/sales_report.html',
        print_css=PRINT_CSS,
        cleanup_delay_ms=app.config.get('PRINT_CLEANUP_DELAY_MS', 300),
        **_card_context(report, tz),
    )


@reports_bp.route("/sales/data")
@login_required
@roles_required("ADMIN", "SALES")
def sales_report_data():
    """JSON refresh for the page script.

    The requested date and the caller's token are echoed back so a response
    that arrives after the selection has moved on can be discarded.
    """
    tz = report_zone(app.config.get('REPORT_TIMEZONE'))
    selected = _selected_date(tz, warn=False)
    token = request.args.get('token', '')

    report = ReportService.from_app().build_report(selected)
    card_html = render_template('reports/_sales_card.html', **_card_context(report, tz))

    return jsonify({
        'date': selected.isoformat(),
        'token': token,
        'ok': report.error is None,
        'error': report.error,
        'rows': [_row_json(r, tz) for r in report.rows],
        'totals': report.totals.as_dict(),
        'html': card_html,
    })


@reports_bp.route("/sales/print")
@login_required
@roles_required("ADMIN", "SALES")
def sales_report_print():
    """Standalone, print-only document holding just the report card."""
    tz = report_zone(app.config.get('REPORT_TIMEZONE'))
    selected = _selected_date(tz, warn=False)

    report = ReportService.from_app().build_report(selected)
    page_html = render_template('reports/_sales_card.html', **_card_context(report, tz))

    document = build_print_document(page_html, REPORT_ANCHOR_ID)
    if document is None:
        abort(404)
    return Response(document, mimetype='text/html')
