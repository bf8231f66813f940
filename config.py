"""
Configuration for the NVA Daily Sales Report
Supports development, testing, and production environments
"""
import os
from datetime import timedelta


def _env_bool(name, default='false'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


class Config:
    """Base configuration"""
    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError('SECRET_KEY environment variable is required for security')

    # Database
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Security headers
    PREFERRED_URL_SCHEME = 'https'

    # Sales backend: 'sql' reads the local sales table, 'supabase' the hosted one
    SALES_BACKEND = os.environ.get('SALES_BACKEND', 'sql').lower()
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_KEY = os.environ.get('SUPABASE_KEY')
    SALES_TABLE = os.environ.get('SALES_TABLE', 'sales')

    # Report
    REPORT_TIMEZONE = os.environ.get('REPORT_TIMEZONE', 'Asia/Manila')
    COMPANY_NAME = os.environ.get('COMPANY_NAME', 'NVA PRINTING SERVICES')
    COMPANY_ADDRESS = os.environ.get(
        'COMPANY_ADDRESS',
        'Pabayo - Chavez St. Plaza Divisoria CDO • 0917 717 4889'
    )
    # Legacy behaviour: hide backend failures behind an empty table
    SALES_REPORT_SWALLOW_ERRORS = _env_bool('SALES_REPORT_SWALLOW_ERRORS')
    PRINT_CLEANUP_DELAY_MS = int(os.environ.get('PRINT_CLEANUP_DELAY_MS', 300))

    @staticmethod
    def init_app(app):
        """Validate backend settings once the config is applied"""
        if app.config.get('SALES_BACKEND') == 'supabase':
            missing = [k for k in ('SUPABASE_URL', 'SUPABASE_KEY') if not app.config.get(k)]
            if missing:
                raise ValueError(f"Supabase backend selected but {', '.join(missing)} not set")


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    SQLALCHEMY_ECHO = False
    SESSION_COOKIE_SECURE = False
    PREFERRED_URL_SCHEME = 'http'

    @staticmethod
    def init_db_uri():
        """Get database URI for development"""
        project_root = os.path.abspath(os.path.dirname(__file__))
        instance_path = os.path.join(project_root, 'instance')
        os.makedirs(instance_path, exist_ok=True)
        db_path = os.path.join(instance_path, 'nva_reports.db')
        return f'sqlite:///{db_path}'


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SESSION_COOKIE_SECURE = False
    PREFERRED_URL_SCHEME = 'http'
    SALES_BACKEND = 'sql'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    @staticmethod
    def init_db_uri():
        """Get database URI for production"""
        db_url = os.environ.get('DATABASE_URL')
        if not db_url:
            raise ValueError('DATABASE_URL environment variable is required in production')

        # Handle heroku postgres:// -> postgresql://
        if db_url.startswith('postgres://'):
            db_url = db_url.replace('postgres://', 'postgresql://', 1)

        return db_url


def get_config():
    """Get configuration based on environment"""
    env = os.environ.get('FLASK_ENV', 'development').lower()

    if env == 'testing':
        return TestingConfig
    elif env == 'production':
        return ProductionConfig
    else:
        return DevelopmentConfig
