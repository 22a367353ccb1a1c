"""Web dashboard for a dockerized Valheim server.

This app provides:
- Container status, uptime, and recent server logs
- Game server name, version, and player count over A2S
- Backup listing, download, and restore
- Container restart with an advisory cooldown
"""

from pathlib import Path

from flask import Flask

from valman import __version__
from valman.core.config import STATIC_DIR, apply_default_flask_config, load_settings_from_file
from valman.core.logging_setup import build_loggers
from valman.routes.dashboard_routes import register_routes
from valman.services import bootstrap, container_runtime, game_query
from valman.services.app_lifecycle import install_flask_hooks
from valman.state import RuntimeContext, SharedState


def load_template(template_path):
    """Read the dashboard page template."""
    return Path(template_path).read_text(encoding="utf-8")


def build_app(settings, *, docker_client=None, game_query_client=None, template=None, loggers=None):
    """Wire shared state, hooks, and routes into a new Flask app."""
    log_valman_action, log_valman_exception = loggers or build_loggers(settings.log_dir)
    if docker_client is None:
        docker_client = container_runtime.create_docker_client(
            settings.docker_socket_path,
            settings.docker_api_version,
            settings.docker_timeout_seconds,
        )
    if game_query_client is None:
        game_query_client = game_query.GameQueryClient(timeout=settings.game_query_timeout_seconds)
    if template is None:
        template = load_template(settings.template_path)

    shared_state = SharedState(
        docker_client=docker_client,
        game_query_client=game_query_client,
        template=template,
        settings=settings,
    )
    ctx = RuntimeContext(
        shared_state=shared_state,
        log_action=log_valman_action,
        log_exception=log_valman_exception,
    )

    app = Flask(__name__, static_folder=str(STATIC_DIR), static_url_path="/static")
    apply_default_flask_config(app)
    app.extensions["valman"] = ctx

    def _credentials():
        current = shared_state.snapshot().settings
        return current.username, current.password

    install_flask_hooks(
        app,
        get_credentials=_credentials,
        log_action=log_valman_action,
        log_exception=log_valman_exception,
    )
    register_routes(app, ctx)
    return app


def run_server(config_path=None):
    """Load config, build the app, and serve it."""
    settings = load_settings_from_file(config_path)
    log_valman_action, log_valman_exception = build_loggers(settings.log_dir)
    app = build_app(settings, loggers=(log_valman_action, log_valman_exception))

    def _check_game_server_address():
        game_query.parse_address(settings.game_server_address)

    def _check_backups_path():
        if not settings.backups_path.is_dir():
            log_valman_action(
                "boot-check",
                command=str(settings.backups_path),
                rejection_message="Backup directory is missing; the dashboard will fail until it exists.",
            )

    log_valman_action(
        "boot-config",
        command=f"version={__version__} container={settings.container_name} game={settings.game_server_address}",
    )
    bootstrap.run_server(
        app,
        settings,
        log_valman_action,
        log_valman_exception,
        boot_steps=(
            ("game_server_address", _check_game_server_address),
            ("backups_path", _check_backups_path),
        ),
    )


if __name__ == "__main__":
    run_server()
