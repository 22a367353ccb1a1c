"""Shared Flask response helpers for action endpoints."""

from flask import Response, redirect


def ok_response():
    """Return the default success redirect back to the dashboard."""
    return redirect("/")


def action_failed_response(message, status_code=500):
    """Return a plain-text failure page for a failed action."""
    return Response(message, status=status_code, mimetype="text/plain")


def restart_failed_response(exc):
    """Return the response for a failed container restart."""
    return action_failed_response(f"Failed restarting container: {exc}")


def restore_failed_response(exc):
    """Return the response for a failed restore, naming the failed stage."""
    if exc.stage == "restart":
        return action_failed_response(
            f"Backup {exc.backup_name} was restored but restarting the container failed: {exc}"
        )
    return action_failed_response(f"Failed restoring backup: {exc}")


def backups_unavailable_response(exc):
    """Return the response for an unreadable backup directory."""
    return action_failed_response(f"Failed listing backups: {exc}")


def internal_error_response():
    """Return generic internal-error response."""
    return action_failed_response("Internal server error.")
