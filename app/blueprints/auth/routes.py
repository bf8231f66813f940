"""
Authentication routes (login/logout)
"""
from urllib.parse import urlparse

from flask import render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, current_user
from app.blueprints.auth import auth_bp
from app.models.user import User
from app.services.security import log_security_event


def _safe_next(target):
    # only same-site relative paths
    if not target:
        return None
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith('/'):
        return None
    return target


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login page"""
    if current_user.is_authenticated:
        return redirect(url_for('reports.sales_report'))

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')
        remember = bool(request.form.get('remember'))

        if not username or not password:
            flash('Please enter both username and password.', 'danger')
            log_security_event('login_attempt_empty', username=username, ip_address=request.remote_addr)
            return render_template('auth/login.html')

        user = User.query.filter_by(username=username).first()

        if user is None or not user.check_password(password):
            flash('Invalid username or password.', 'danger')
            log_security_event('login_failed', username=username, ip_address=request.remote_addr, details='Invalid credentials')
            return render_template('auth/login.html')

        if not user.is_active:
            flash('Your account has been deactivated. Please contact an administrator.', 'danger')
            log_security_event('login_attempt_inactive', user_id=user.id, username=username, ip_address=request.remote_addr)
            return render_template('auth/login.html')

        login_user(user, remember=remember)
        flash(f'Welcome back, {user.full_name}!', 'success')
        log_security_event('login_success', user_id=user.id, username=username, ip_address=request.remote_addr)

        next_page = _safe_next(request.args.get('next'))
        if next_page:
            return redirect(next_page)
        return redirect(url_for('reports.sales_report'))

    return render_template('auth/login.html')


@auth_bp.route('/logout')
def logout():
    """User logout"""
    if current_user.is_authenticated:
        log_security_event('logout', user_id=current_user.id, username=current_user.username, ip_address=request.remote_addr)
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
