"""Append-only action log for dashboard requests and valman's own events."""

from datetime import datetime
import os
import traceback
from flask import request, has_request_context

ROTATE_AT_BYTES = 5 * 1024 * 1024
ROTATED_FILES_KEPT = 5
TRACEBACK_CHARS = 700


def one_line(text):
    """Collapse whitespace so ``text`` cannot break the one-event-per-line format."""
    return " ".join(str(text or "").split())


def client_label():
    """Return the first forwarded client address, or ``valman`` outside a request."""
    if not has_request_context():
        return "valman"
    route = request.access_route
    return one_line(route[0] if route else "") or "valman"


def rotate_action_log(path):
    """Shift ``path`` to ``path.1`` (and older files up) once it reaches the size cap."""
    try:
        if path.stat().st_size < ROTATE_AT_BYTES:
            return
    except FileNotFoundError:
        return
    for idx in range(ROTATED_FILES_KEPT - 1, 0, -1):
        older = path.with_name(f"{path.name}.{idx}")
        if older.exists():
            os.replace(older, path.with_name(f"{path.name}.{idx + 1}"))
    os.replace(path, path.with_name(f"{path.name}.1"))


def format_action_line(action, command=None, rejection_message=None, now=None):
    """Return ``"<stamp> <client> [valman/<action>] <command> rejected: <message>"``."""
    stamp = (now or datetime.now()).strftime("%b %d %H:%M:%S")
    parts = [f"{stamp} <{client_label()}> [valman/{one_line(action) or 'unknown'}]"]
    if one_line(command):
        parts.append(one_line(command))
    if one_line(rejection_message):
        parts.append(f"rejected: {one_line(rejection_message)}")
    return " ".join(parts)


def make_log_action(action_log_file):
    """Build the ``log_action(action, command=None, rejection_message=None)`` writer."""

    def log_action(action, command=None, rejection_message=None):
        line = format_action_line(action, command, rejection_message)
        try:
            action_log_file.parent.mkdir(parents=True, exist_ok=True)
            rotate_action_log(action_log_file)
            with action_log_file.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            # A full or read-only log volume must not fail the request.
            pass

    return log_action


def summarize_exception(context, exc):
    """Return ``"<context>: <Type>: <message> | traceback: ..."`` on one line."""
    message = f"{context}: {type(exc).__name__}"
    if one_line(exc):
        message += f": {one_line(exc)}"
    tb = one_line(" | ".join(traceback.format_exception(exc)))
    if tb:
        message += f" | traceback: {tb[:TRACEBACK_CHARS]}"
    return message


def make_log_exception(log_action):
    """Build ``log_exception(context, exc)``, which records an ``error`` action."""

    def log_exception(context, exc):
        log_action("error", rejection_message=summarize_exception(context, exc))

    return log_exception
