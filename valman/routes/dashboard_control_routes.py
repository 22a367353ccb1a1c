"""Control action route registration for the valman dashboard."""

from valman.core.errors import RestoreError, RuntimeApiError, RuntimeDataError
from valman.core.response_helpers import ok_response, restart_failed_response, restore_failed_response
from valman.services import control_plane, restore_workflow


def register_control_routes(app, ctx):
    """Register restart and restore control routes."""

    # Route: /restart
    @app.route("/restart")
    def restart():
        """Restart the game server container."""
        try:
            control_plane.restart_container(ctx)
        except (RuntimeApiError, RuntimeDataError) as exc:
            ctx.log_action("restart", rejection_message=str(exc))
            return restart_failed_response(exc)
        return ok_response()

    # Route: /backups/restore/<name>
    @app.route("/backups/restore/<name>")
    def restore_backup(name):
        """Restore one backup archive, then restart the container."""
        try:
            restore_workflow.restore_backup(ctx, name)
        except RestoreError as exc:
            ctx.log_action(f"restore-{exc.stage}", command=name, rejection_message=str(exc))
            return restore_failed_response(exc)
        return ok_response()
