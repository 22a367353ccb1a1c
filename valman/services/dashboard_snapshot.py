"""Dashboard aggregation across container, game query, and backup providers.

``build_snapshot`` is the failure-isolation boundary for the dashboard: every
provider error is logged and kept as a failed ``ProviderResult``, never raised.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
import time
from typing import Any, Optional

from valman import __version__
from valman.core.config import version_label
from valman.services import backup_catalog, container_runtime, game_query, restart_throttle


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider call: a value or the error that replaced it."""
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self):
        return self.error is None


@dataclass(frozen=True)
class RenderModel:
    """Everything the page renderer needs for one dashboard load."""
    container: ProviderResult
    game: ProviderResult
    backups: ProviderResult
    recent_backups: list
    last_restart_time: Optional[datetime]
    restart_allowed: bool
    restart_delay_seconds: int
    render_time_ms: int
    version: str = __version__

    @property
    def container_status_image(self):
        state = self.container.value.state if self.container.ok else None
        return container_runtime.status_image(state)


def _capture(ctx, context, func, *args, **kwargs):
    try:
        return ProviderResult(value=func(*args, **kwargs))
    except Exception as exc:
        ctx.log_exception(context, exc)
        return ProviderResult(error=exc)


def build_snapshot(ctx, now=None):
    """Aggregate all providers into a ``RenderModel``."""
    started = time.monotonic()
    state = ctx.shared_state.snapshot()
    settings = state.settings

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="valman-provider") as pool:
        container_future = pool.submit(
            _capture,
            ctx,
            "container_status",
            container_runtime.get_status,
            state.docker_client,
            settings.container_name,
            settings.log_lines_count,
            log_action=ctx.log_action,
        )
        game_future = pool.submit(
            _capture,
            ctx,
            "game_query",
            _query_game,
            state.game_query_client,
            settings.game_server_address,
        )
        backups = _capture(ctx, "backup_catalog", backup_catalog.list_backups, settings.backups_path)
        container = container_future.result()
        game = game_future.result()

    recent = backup_catalog.recent_backups(backups.value) if backups.ok else []
    now = now or datetime.now()
    return RenderModel(
        container=container,
        game=game,
        backups=backups,
        recent_backups=recent,
        last_restart_time=state.last_restart_time,
        restart_allowed=restart_throttle.is_restart_allowed(
            state.last_restart_time, settings.restart_delay_seconds, now
        ),
        restart_delay_seconds=settings.restart_delay_seconds,
        render_time_ms=int((time.monotonic() - started) * 1000),
        version=version_label(),
    )


def _query_game(client, address_text):
    return game_query.get_info(client, game_query.parse_address(address_text))
