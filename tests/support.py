"""Shared fixtures for valman tests."""
from pathlib import Path
from unittest.mock import Mock

from valman.core.config import Settings
from valman.state import RuntimeContext, SharedState


def make_settings(**overrides):
    values = {
        "web_host": "127.0.0.1",
        "web_port": 9999,
        "docker_socket_path": "/var/run/docker.sock",
        "docker_api_version": "1.41",
        "docker_timeout_seconds": 30,
        "container_name": "valheim",
        "template_path": Path("unused.html"),
        "game_server_address": "127.0.0.1:2457",
        "game_query_timeout_seconds": 1.0,
        "backups_path": Path("/nonexistent/backups"),
        "backups_destination_path": Path("/nonexistent/worlds"),
        "restart_delay_seconds": 60,
        "log_lines_count": 100,
        "log_dir": Path("/nonexistent/logs"),
        "username": "admin",
        "password": "Secret",
    }
    values.update(overrides)
    return Settings(**values)


def make_docker_api(containers=None, logs=None):
    api = Mock()
    api.containers.return_value = containers if containers is not None else [
        {"Id": "abc123def456789", "Names": ["/valheim"], "State": "running", "Status": "Up 2 hours"},
    ]
    api.logs.return_value = iter(logs if logs is not None else [b"line one\n", b"line two\n"])
    return api


def make_ctx(settings=None, docker_client=None, game_query_client=None, template="%version%"):
    shared = SharedState(
        docker_client=docker_client if docker_client is not None else make_docker_api(),
        game_query_client=game_query_client if game_query_client is not None else Mock(),
        template=template,
        settings=settings or make_settings(),
    )
    return RuntimeContext(shared_state=shared, log_action=Mock(), log_exception=Mock())
