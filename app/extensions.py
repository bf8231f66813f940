from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

db = SQLAlchemy()
login_manager = LoginManager()

# Where to send users when they hit a protected page
login_manager.login_view = "auth.login"
login_manager.login_message_category = "warning"


def get_supabase_client(app=None):
    """Return the app-wide Supabase client, creating it on first use.

    The client lives in ``app.extensions`` for the lifetime of the process
    and is never torn down.
    """
    app = app or current_app._get_current_object()
    client = app.extensions.get("supabase")
    if client is None:
        from supabase import create_client

        url = app.config.get("SUPABASE_URL")
        key = app.config.get("SUPABASE_KEY")
        if not url or not key:
            raise ValueError("Supabase configuration missing")
        client = create_client(url, key)
        app.extensions["supabase"] = client
    return client
