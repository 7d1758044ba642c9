"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from flask import Flask, current_app, g, request, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import SESSION_USER_EMAIL, SESSION_USER_ID
from .extensions import csrf, mail

UNSAFE_METHODS = ("POST", "PUT", "PATCH", "DELETE")


def _load_firebase_credentials(app):
    """Find Firebase credentials from the environment, a local file or ADC."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    return cred, project_id


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        # Bearer-token clients are exempt; session clients are checked below.
        WTF_CSRF_CHECK_DEFAULT=False,
        MAIL_SERVER=os.environ.get("MAIL_SERVER") or "smtp.gmail.com",
        MAIL_PORT=int(os.environ.get("MAIL_PORT") or 587),
        MAIL_USE_TLS=(os.environ.get("MAIL_USE_TLS") or "true").lower()
        in ["true", "1", "t"],
        MAIL_USE_SSL=(os.environ.get("MAIL_USE_SSL") or "false").lower()
        in ["true", "1", "t"],
        MAIL_USERNAME=os.environ.get("MAIL_USERNAME"),
        MAIL_PASSWORD=os.environ.get("MAIL_PASSWORD"),
        MAIL_DEFAULT_SENDER=os.environ.get("MAIL_DEFAULT_SENDER")
        or "noreply@courtside.app",
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        cred, project_id = _load_firebase_credentials(app)
        if cred and not firebase_admin._apps:
            try:
                options = {"projectId": project_id} if project_id else None
                firebase_admin.initialize_app(cred, options)
            except ValueError:
                # This can happen if the app is already initialized, which is fine.
                app.logger.info("Firebase app already initialized.")

    # Initialize extensions
    mail.init_app(app)
    csrf.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import profile as profile_bp

    app.register_blueprint(profile_bp.bp)

    from . import admin as admin_bp

    app.register_blueprint(admin_bp.bp)

    from . import event as event_bp

    app.register_blueprint(event_bp.bp)

    from . import player as player_bp

    app.register_blueprint(player_bp.bp)

    from . import invitation as invitation_bp

    app.register_blueprint(invitation_bp.bp)

    from . import match as match_bp

    app.register_blueprint(match_bp.bp)

    from . import report as report_bp

    app.register_blueprint(report_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.before_request
    def load_identity():
        """Resolve the caller's identity from a bearer token or the session."""
        g.user_id = None
        g.user_email = None
        g.profile = None

        header = request.headers.get("Authorization", "")
        if header.startswith("Bearer "):
            try:
                decoded_token = firebase_auth.verify_id_token(header[len("Bearer ") :])
            except Exception as e:
                current_app.logger.warning(f"Rejected bearer token: {e}")
                return
            g.user_id = decoded_token["uid"]
            g.user_email = decoded_token.get("email")
            return

        g.user_id = session.get(SESSION_USER_ID)
        g.user_email = session.get(SESSION_USER_EMAIL)
        if (
            g.user_id is not None
            and request.method in UNSAFE_METHODS
            and current_app.config.get("WTF_CSRF_ENABLED", True)
        ):
            csrf.protect()

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return "OK", 200

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
