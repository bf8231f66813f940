from app.services.print_service import (
    PRINT_CSS,
    REPORT_ANCHOR_ID,
    build_print_document,
    extract_anchor_html,
)

PAGE = (
    '<html><body><nav>menu</nav>'
    '<div id="SalesReport-print" class="SalesReport-card"><table><tr><td>Mug</td></tr></table></div>'
    '<footer>chrome</footer></body></html>'
)


def test_missing_anchor_builds_nothing():
    assert build_print_document('<html><body><p>nothing here</p></body></html>') is None
    assert build_print_document('') is None


def test_anchor_subtree_is_cloned():
    fragment = extract_anchor_html(PAGE, REPORT_ANCHOR_ID)
    assert fragment.startswith('<div id="SalesReport-print"')
    assert 'Mug' in fragment
    assert 'menu' not in fragment


def test_print_document_has_fixed_stylesheet():
    doc = build_print_document(PAGE)
    assert doc.startswith('<!doctype html>')
    assert '<meta charset="utf-8">' in doc
    assert '<title>Sales Report</title>' in doc
    assert f'<style>{PRINT_CSS}</style>' in doc
    assert 'chrome' not in doc


def test_screen_styles_are_not_carried_over():
    page = '<html><head><style>.screen{color:red}</style></head><body>' + PAGE + '</body></html>'
    doc = build_print_document(page)
    assert '.screen' not in doc
