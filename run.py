"""
NVA Daily Sales Report
Entry point for the Flask application - Development Only

For production, use wsgi.py with a production server like Gunicorn
"""
import os
from pathlib import Path

# Load environment variables from .env file
if Path('.env').exists():
    from dotenv import load_dotenv
    load_dotenv()

from app import create_app
from config import get_config

if __name__ == '__main__':
    os.makedirs('instance', exist_ok=True)

    config_class = get_config()
    app = create_app(config_class)

    # Get debug mode from environment, default to True for development
    debug = os.environ.get('FLASK_DEBUG', 'true').lower() in ('true', '1', 'yes')

    host = os.environ.get('FLASK_HOST', '0.0.0.0')
    port = int(os.environ.get('FLASK_PORT', 5000))

    app.logger.info(f"Starting NVA Daily Sales Report - {config_class.__name__}")
    app.logger.info(f"Sales backend: {app.config['SALES_BACKEND']}, report timezone: {app.config['REPORT_TIMEZONE']}")
    app.logger.info(f"Server: {host}:{port} (debug={debug})")

    app.run(debug=debug, host=host, port=port)
