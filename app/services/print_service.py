"""Standalone print document for the sales report card."""
from __future__ import annotations

import logging
from typing import Optional

from markupsafe import escape
from selectolax.lexbor import LexborHTMLParser

logger = logging.getLogger(__name__)

REPORT_ANCHOR_ID = "SalesReport-print"
PRINT_TITLE = "Sales Report"

# Print-only; independent of the screen stylesheet.
PRINT_CSS = """
@page { size: A4; margin: 14mm; }
body { font-family: Inter, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; color: #101828; }
.SalesReport-card { background: #fff; }
.SalesReport-header { display: flex; justify-content: space-between; padding: 0 0 10px 0; border-bottom: 1px solid #eef0f4; }
.SalesReport-company .name { font-weight: 800; color: #252b55; }
.SalesReport-company .addr { font-size: 12px; color: #667085; }
.SalesReport-meta .report { font-weight: 800; color: #252b55; text-align: right; }
.SalesReport-meta .date { font-size: 12px; color: #667085; text-align: right; }
.SalesReport-summary { display: flex; gap: 18px; padding: 8px 0; font-size: 14px; color: #344054; border-bottom: 1px solid #f1f1f1; }
.SalesReport-table { width: 100%; border-collapse: collapse; margin-top: 10px; }
.SalesReport-table thead th { text-align: left; color: #344054; font-weight: 700; padding: 8px; border-bottom: 1px solid #eef0f4; background: #fafbff; font-size: 12px; }
.SalesReport-table tbody td, .SalesReport-table tfoot td { padding: 8px; border-bottom: 1px solid #f1f1f1; font-size: 12px; }
.SalesReport-table .num { text-align: right; white-space: nowrap; }
.SalesReport-table .total { font-weight: 700; color: #252b55; }
.SalesReport-footer { margin-top: 8px; font-size: 12px; color: #98a2b3; }
* { -webkit-print-color-adjust: exact; print-color-adjust: exact; }
""".strip()


def extract_anchor_html(page_html: str, anchor_id: str = REPORT_ANCHOR_ID) -> Optional[str]:
    """Outer HTML of the element with ``anchor_id``, or None if it is absent."""
    if not page_html:
        return None
    node = LexborHTMLParser(page_html).css_first(f"#{anchor_id}")
    if node is None:
        return None
    return node.html


def wrap_print_document(fragment: str, css: str = PRINT_CSS, title: str = PRINT_TITLE) -> str:
    return (
        "<!doctype html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title><style>{css}</style></head>"
        f"<body>{fragment}</body></html>"
    )


def build_print_document(page_html: str, anchor_id: str = REPORT_ANCHOR_ID) -> Optional[str]:
    """
    Clone the report card out of a rendered page into a standalone document
    carrying only the fixed print stylesheet.

    Returns None, and builds nothing, when the anchor is missing.
    """
    fragment = extract_anchor_html(page_html, anchor_id)
    if fragment is None:
        logger.warning(f"Print requested but #{anchor_id} not found in rendered report")
        return None
    return wrap_print_document(fragment)
