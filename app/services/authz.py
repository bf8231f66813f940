"""
Authorization decorators for report routes
"""
from functools import wraps
from flask import abort, flash, redirect, request, url_for
from flask_login import current_user

from app.services.security import log_security_event


def roles_required(*roles):
    """
    Restrict a route to users holding one of ``roles``

    Usage:
        @roles_required('ADMIN', 'SALES')
        def sales_report():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                flash('Please log in to access this page.', 'warning')
                return redirect(url_for('auth.login', next=request.full_path))

            if not current_user.has_role(*roles):
                log_security_event('permission_denied', user_id=current_user.id,
                                   username=current_user.username, details=request.path)
                abort(403)

            return f(*args, **kwargs)
        return decorated_function
    return decorator
