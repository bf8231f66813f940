"""
Core routes (health check, landing redirect)
"""
from flask import redirect, url_for, jsonify
from flask_login import login_required
from sqlalchemy import text

from app.blueprints.core import core_bp
from app.extensions import db


@core_bp.route('/health')
def health():
    """Health check endpoint for monitoring and load balancers"""
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({'status': 'healthy', 'message': 'Application is running'}), 200
    except Exception as e:
        return jsonify({'status': 'unhealthy', 'message': str(e)}), 503


@core_bp.route('/')
@login_required
def index():
    """The daily sales report is the landing page"""
    return redirect(url_for('reports.sales_report'))
