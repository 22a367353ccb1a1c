"""Runtime configuration helpers for valman."""

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from valman import __version__
from valman.core.web_config import WebConfig

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = Path("valman.env")
DEFAULT_TEMPLATE_PATH = PACKAGE_DIR / "templates" / "main.html"
STATIC_DIR = PACKAGE_DIR / "static"


@dataclass(frozen=True)
class Settings:
    """Resolved settings; immutable for the process lifetime."""
    web_host: str
    web_port: int
    docker_socket_path: str
    docker_api_version: str
    docker_timeout_seconds: int
    container_name: str
    template_path: Path
    game_server_address: str
    game_query_timeout_seconds: float
    backups_path: Path
    backups_destination_path: Path
    restart_delay_seconds: int
    log_lines_count: int
    log_dir: Path
    username: str
    password: str


def resolve_config_path(*env_names):
    """Resolve the config file path from env with a cwd-relative fallback."""
    for name in env_names:
        value = (os.environ.get(name) or "").strip()
        if value:
            return Path(value)
    return DEFAULT_CONFIG_PATH


def load_settings(cfg):
    """Build ``Settings`` from a ``WebConfig``, applying defaults."""
    return Settings(
        web_host=cfg.get_str("WEB_HOST", "0.0.0.0"),
        web_port=cfg.get_int("WEB_PORT", 9999, minimum=1),
        docker_socket_path=cfg.get_str("DOCKER_SOCKET_PATH", "/var/run/docker.sock"),
        docker_api_version=cfg.get_str("DOCKER_API_VERSION", "1.41"),
        docker_timeout_seconds=cfg.get_int("DOCKER_TIMEOUT_SECONDS", 30, minimum=1),
        container_name=cfg.get_str("CONTAINER_NAME", "valheim"),
        template_path=cfg.get_path("TEMPLATE_PATH", DEFAULT_TEMPLATE_PATH),
        game_server_address=cfg.get_str("GAME_SERVER_ADDRESS", "127.0.0.1:2457"),
        game_query_timeout_seconds=cfg.get_float("GAME_QUERY_TIMEOUT_SECONDS", 5.0, minimum=0.1),
        backups_path=cfg.get_path("BACKUPS_PATH", Path("/backups")),
        backups_destination_path=cfg.get_path("BACKUPS_DESTINATION_PATH", Path("/config/worlds_local")),
        restart_delay_seconds=cfg.get_int("RESTART_DELAY_SECONDS", 60, minimum=0),
        log_lines_count=cfg.get_int("LOG_LINES_COUNT", 100, minimum=1),
        log_dir=cfg.get_path("VALMAN_LOG_DIR", Path("logs")),
        username=cfg.require_str("USERNAME"),
        password=cfg.require_str("PASSWORD"),
    )


def load_settings_from_file(config_path=None):
    """Read the required config file and return resolved ``Settings``."""
    path = Path(config_path) if config_path is not None else resolve_config_path("VALMAN_CONFIG")
    return load_settings(WebConfig(path))


def apply_default_flask_config(app):
    """Apply baseline Flask runtime config values."""
    app.config["SEND_FILE_MAX_AGE_DEFAULT"] = 86400


def version_label(environ=None):
    """Return ``"<version>-<sha> (built <local time>)"`` from image build metadata.

    ``VALMAN_GIT_SHA`` and ``VALMAN_BUILD_TIMESTAMP`` (RFC 3339) are set when the
    container image is built; either part is omitted when its variable is unset.
    """
    environ = os.environ if environ is None else environ
    label = __version__
    sha = (environ.get("VALMAN_GIT_SHA") or "").strip()
    if sha:
        label = f"{label}-{sha}"
    built = (environ.get("VALMAN_BUILD_TIMESTAMP") or "").strip()
    if built:
        try:
            stamp = datetime.fromisoformat(built)
        except ValueError:
            stamp = None
        if stamp is not None:
            built = stamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        label = f"{label} (built {built})"
    return label
