"""Docker container lookup, status, logs, and restart."""

from dataclasses import dataclass

import docker
from docker.errors import DockerException

from valman.core.errors import ContainerNotFoundError, RuntimeApiError, RuntimeDataError

RESTART_GRACE_SECONDS = 10


@dataclass(frozen=True)
class ContainerSnapshot:
    """Point-in-time view of the managed container."""
    id: str
    state: str
    uptime: str
    logs: str


def create_docker_client(socket_path, api_version, timeout):
    """Build a low-level Docker API client over the unix socket.

    An explicit API version keeps construction from contacting the daemon, so
    the dashboard still starts while Docker is down.
    """
    return docker.APIClient(
        base_url=f"unix://{socket_path}",
        version=api_version,
        timeout=timeout,
    )


def status_image(state):
    """Return the status icon name for a container state."""
    return "ok" if (state or "").lower() == "running" else "cross"


def _primary_name(record):
    names = record.get("Names") or []
    return names[0] if names else ""


def find_container(api, name):
    """Return ``(id, state, status)`` for the container named ``name``."""
    try:
        containers = api.containers(all=True)
    except (DockerException, OSError) as exc:
        raise RuntimeApiError(f"Listing containers failed: {exc}") from exc

    wanted = f"/{name}".lower()
    record = next((c for c in containers if _primary_name(c).lower() == wanted), None)
    if record is None:
        raise ContainerNotFoundError(f"Missing Docker container {name}")

    for key, label in (("Id", "ID"), ("State", "state"), ("Status", "status")):
        if not record.get(key):
            raise RuntimeDataError(f"Missing Docker container {label}")
    return record["Id"], record["State"], record["Status"]


def fetch_logs(api, container_id, line_count, log_action=None):
    """Return the stdout log tail without following; undecodable chunks are dropped."""
    lines = []
    try:
        for chunk in api.logs(
            container_id, stdout=True, stderr=False, stream=True, follow=False, tail=line_count
        ):
            try:
                lines.append(chunk.decode("utf-8"))
            except UnicodeDecodeError as exc:
                if log_action is not None:
                    log_action("container-logs", command=container_id[:12], rejection_message=f"dropped chunk: {exc}")
    except (DockerException, OSError) as exc:
        if log_action is not None:
            log_action("container-logs", command=container_id[:12], rejection_message=str(exc))
    return "".join(lines)


def get_status(api, container_name, log_line_count, log_action=None):
    """Return a ``ContainerSnapshot`` for ``container_name``."""
    container_id, state, uptime = find_container(api, container_name)
    logs = fetch_logs(api, container_id, log_line_count, log_action=log_action)
    return ContainerSnapshot(id=container_id, state=state, uptime=uptime, logs=logs)


def restart(api, container_name):
    """Restart ``container_name``, killing it after the grace period."""
    container_id, _, _ = find_container(api, container_name)
    try:
        api.restart(container_id, timeout=RESTART_GRACE_SECONDS)
    except (DockerException, OSError) as exc:
        raise RuntimeApiError(f"Restarting container {container_name} failed: {exc}") from exc
    return container_id
