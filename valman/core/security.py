"""HTTP Basic authentication helpers."""

from flask import Response
from werkzeug.datastructures import Authorization

from valman.core.errors import AuthError

CHALLENGE_HEADERS = {"WWW-Authenticate": "Basic"}


def parse_basic_credentials(authorization_header):
    """Return ``(username, password)`` from a Basic header, or ``None`` when malformed."""
    auth = Authorization.from_header(authorization_header)
    if auth is None or auth.type != "basic":
        return None
    username = auth.username
    password = auth.password
    if username is None or password is None:
        return None
    return username, password


def credentials_match(username, password, expected_user, expected_pass):
    """Compare both credentials case-insensitively."""
    return (
        str(username).lower() == str(expected_user).lower()
        and str(password).lower() == str(expected_pass).lower()
    )


def check_credentials(authorization_header, expected_user, expected_pass):
    """Raise ``AuthError`` unless the header carries the configured credentials."""
    if not authorization_header:
        raise AuthError("Missing Authorization header.")
    credentials = parse_basic_credentials(authorization_header)
    if credentials is None:
        raise AuthError("Malformed Authorization header.")
    username, password = credentials
    if not credentials_match(username, password, expected_user, expected_pass):
        raise AuthError(f"Invalid credentials for user {username!r}.")


def authorize(authorization_header, expected_user, expected_pass):
    """Return True when the Authorization header carries the configured credentials."""
    try:
        check_credentials(authorization_header, expected_user, expected_pass)
    except AuthError:
        return False
    return True


def unauthorized_response():
    """Return the 401 challenge response."""
    return Response("Unauthorized", status=401, headers=CHALLENGE_HEADERS, mimetype="text/plain")
