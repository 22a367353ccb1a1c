"""Flask lifecycle hooks: authentication gate and error handler."""
from flask import has_request_context, request
from werkzeug.exceptions import HTTPException

from valman.core.errors import AuthError
from valman.core.response_helpers import internal_error_response
from valman.core.security import check_credentials, unauthorized_response


def install_flask_hooks(app, *, get_credentials, log_action, log_exception):
    """Install request/error hooks using explicit runtime callbacks."""

    @app.before_request
    def _require_basic_auth():
        username, password = get_credentials()
        header = request.headers.get("Authorization")
        try:
            check_credentials(header, username, password)
        except AuthError as exc:
            if header:
                log_action("reject", command=request.path, rejection_message=str(exc))
            return unauthorized_response()
        return None

    @app.errorhandler(Exception)
    def _unhandled_exception_handler(exc):
        if isinstance(exc, HTTPException):
            return exc
        path = request.path if has_request_context() else "unknown-path"
        log_exception(f"unhandled_exception path={path}", exc)
        return internal_error_response()
