"""App factory and runtime wiring entrypoint."""

from valman.core.config import load_settings_from_file


def create_app(config_path=None):
    """Return the Flask app instance used by WSGI entrypoints."""
    from valman.main import build_app

    return build_app(load_settings_from_file(config_path))
