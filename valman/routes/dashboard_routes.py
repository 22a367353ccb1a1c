"""Flask route registration for the valman dashboard."""

from flask import Response

from valman.core.response_helpers import backups_unavailable_response
from valman.routes.dashboard_control_routes import register_control_routes
from valman.routes.dashboard_file_routes import register_file_routes
from valman.services import dashboard_snapshot, page_render


def register_routes(app, ctx):
    """Register the dashboard page plus control and file routes."""

    # Route: /
    @app.route("/")
    def index():
        """Render the aggregated dashboard."""
        model = dashboard_snapshot.build_snapshot(ctx)
        if not model.backups.ok:
            return backups_unavailable_response(model.backups.error)
        template = ctx.shared_state.snapshot().template
        return Response(page_render.render_dashboard(template, model), mimetype="text/html")

    register_control_routes(app, ctx)
    register_file_routes(app, ctx)
