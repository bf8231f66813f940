"""
Application factory for the NVA Daily Sales Report
"""
import os
import logging
from flask import Flask, render_template
from app.extensions import db, login_manager
from app.models.user import User


def setup_logging(app):
    """Configure logging for the application"""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # Application logger
        file_handler = logging.FileHandler('logs/app.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger('app').addHandler(file_handler)
        logging.getLogger('app').setLevel(logging.INFO)

        # Security logger
        security_handler = logging.FileHandler('logs/security.log')
        security_handler.setFormatter(logging.Formatter(
            '%(asctime)s [SECURITY] %(levelname)s: %(message)s'
        ))
        security_handler.setLevel(logging.INFO)
        security_logger = logging.getLogger('security')
        security_logger.addHandler(security_handler)
        security_logger.setLevel(logging.INFO)
        app.security_logger = security_logger

        app.logger.setLevel(logging.INFO)
        app.logger.info('NVA Daily Sales Report startup')
    else:
        # Development/Testing logging
        app.logger.setLevel(logging.DEBUG)
        logging.getLogger('app').setLevel(logging.DEBUG)


def _resolve_config(config):
    """Return (config_class, overrides) for whatever create_app was handed"""
    overrides = {}
    if isinstance(config, dict):
        # Tests pass plain mappings on top of the testing defaults
        overrides = config
        from config import TestingConfig
        return TestingConfig, overrides

    if config is None or isinstance(config, str):
        from config import get_config
        return get_config(), overrides

    return config, overrides


def create_app(config=None):
    """
    Create and configure the Flask application
    """
    # Get the project root directory (parent of app folder)
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder=os.path.join(project_root, 'templates'),
        static_folder=os.path.join(project_root, 'static')
    )

    config, overrides = _resolve_config(config)
    app.config.from_object(config)

    # Set database URI
    if hasattr(config, 'init_db_uri'):
        app.config['SQLALCHEMY_DATABASE_URI'] = config.init_db_uri()
    elif not app.config.get('SQLALCHEMY_DATABASE_URI'):
        # Fallback to development SQLite
        instance_path = os.path.join(project_root, 'instance')
        os.makedirs(instance_path, exist_ok=True)
        db_path = os.path.join(instance_path, 'nva_reports.db')
        app.config['SQLALCHEMY_DATABASE_URI'] = f'sqlite:///{db_path}'

    app.config.update(overrides)
    config.init_app(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'warning'

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register blueprints
    from app.blueprints.auth.routes import auth_bp
    from app.blueprints.core.routes import core_bp
    from app.blueprints.reports.routes import reports_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(core_bp, url_prefix='')
    app.register_blueprint(reports_bp, url_prefix='/reports')

    # Setup logging
    setup_logging(app)

    # Add security headers middleware
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        # HSTS (only in production)
        if not app.debug:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        # The print iframe is same-origin, so frames stay restricted to 'self'
        csp = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self'; "
            "frame-src 'self' about:; "
            "frame-ancestors 'self'"
        )
        response.headers['Content-Security-Policy'] = csp

        return response

    # Trust proxy headers in production
    if not app.debug:
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Template filters
    from app.services.financials import format_peso

    @app.template_filter('peso')
    def peso_filter(value):
        """Format an amount as Philippine pesos"""
        return format_peso(value)

    @app.template_filter('datetimeformat')
    def datetimeformat_filter(value, fmt='%Y-%m-%d'):
        """Format date or datetime"""
        from datetime import datetime, date
        if value is None:
            return ''
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, datetime.min.time())
        return value.strftime(fmt)

    # Register error handlers
    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return render_template('errors/500.html'), 500

    # Create database tables and initialize the admin account
    with app.app_context():
        db.create_all()
        initialize_database()

    return app


def initialize_database():
    """
    Initialize database with a default admin user if needed
    """
    from werkzeug.security import generate_password_hash

    # Create default admin user if no users exist
    if User.query.count() == 0:
        admin_password = os.environ.get('ADMIN_PASSWORD', 'admin123')
        admin_user = User(
            username='admin',
            password_hash=generate_password_hash(admin_password),
            full_name='System Administrator',
            role='ADMIN'
        )
        db.session.add(admin_user)
        logging.getLogger(__name__).info('Created default admin user - username: admin')

    db.session.commit()
