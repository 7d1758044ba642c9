"""Session bootstrap for browser clients."""

from firebase_admin import auth
from flask import current_app, jsonify, request, session

from courtside.core.constants import SESSION_USER_EMAIL, SESSION_USER_ID
from courtside.errors import UnauthenticatedError, ValidationError

from . import bp


@bp.route("/session_login", methods=["POST"])
def session_login():
    """
    Called from the client after a successful Firebase sign-in.
    It receives the ID token, verifies it, and creates a server-side session.
    """
    id_token = (request.get_json(silent=True) or {}).get("idToken")
    if not id_token:
        raise ValidationError("idToken is required.")
    try:
        decoded_token = auth.verify_id_token(id_token)
    except Exception as e:
        current_app.logger.error(f"Error during session login: {e}")
        raise UnauthenticatedError("Invalid token.") from e

    session.clear()
    session[SESSION_USER_ID] = decoded_token["uid"]
    session[SESSION_USER_EMAIL] = decoded_token.get("email")
    return jsonify({"status": "success"})


@bp.route("/logout", methods=["POST"])
def logout():
    """Clear the server-side session."""
    session.clear()
    return jsonify({"status": "success"})
