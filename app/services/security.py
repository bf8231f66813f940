"""
Security audit helpers for the NVA Daily Sales Report
"""
from datetime import datetime

from flask import request, current_app


def log_security_event(event_type, user_id=None, username=None, ip_address=None, details=None):
    """
    Log security events for audit trail

    Args:
        event_type: Type of event (login_success, login_failed, logout, ...)
        user_id: User ID if applicable
        username: Username if applicable
        ip_address: Client IP address
        details: Additional details
    """
    if not ip_address:
        ip_address = request.remote_addr if request else 'unknown'

    audit_message = {
        'timestamp': datetime.utcnow().isoformat(),
        'event_type': event_type,
        'user_id': user_id,
        'username': username,
        'ip_address': ip_address,
        'details': details
    }

    if hasattr(current_app, 'security_logger'):
        current_app.security_logger.info(str(audit_message))
    else:
        current_app.logger.info(f"Security event: {audit_message}")
