"""Placeholder substitution for the dashboard page template."""

import re
from urllib.parse import quote

from markupsafe import escape

NOT_AVAILABLE = "n/a"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

TEMPLATE_TOKENS = (
    "%version%",
    "%container_status%",
    "%container_status_img%",
    "%container_uptime%",
    "%server_name%",
    "%server_version%",
    "%player_count%",
    "%max_player_count%",
    "%last_restart_time%",
    "%server_logs%",
    "%backups%",
    "%restart_btn%",
    "%render_time%",
)
TOKEN_PATTERN = re.compile(r"%[a-z_]+%")

RESTART_BUTTON_HTML = '<a id="restart-btn" href="/restart" role="button" style="height: 64px;">Restart</a>'
RESTART_WAIT_HTML = (
    '<small style="line-height: 64px;">'
    "Last restart was less than {seconds} seconds ago, please wait...</small>"
)
BACKUP_ROW_HTML = (
    '<tr><td><a href="/backups/{href}">{name}</a></td><td>{created}</td><td>{size}</td>'
    '<td style="text-align: end;"><a href="/backups/restore/{href}" class="restore-btn" '
    'role="button" style="padding: 10px; width: 100%;">Restore</a></td></tr>'
)


def render_template(template_text, replacements):
    """Replace every known token in ``template_text`` in a single pass.

    Substituted values are never rescanned, so log text containing a token
    stays literal. Unknown tokens are left untouched.
    """
    return TOKEN_PATTERN.sub(lambda match: replacements.get(match.group(0), match.group(0)), template_text)


def _field(result, attr):
    if not result.ok:
        return NOT_AVAILABLE
    return str(escape(getattr(result.value, attr)))


def render_backup_rows(entries):
    """Return table rows for the recent backups."""
    return "".join(
        BACKUP_ROW_HTML.format(
            href=quote(entry.name),
            name=escape(entry.name),
            created=entry.created.strftime(TIMESTAMP_FORMAT),
            size=escape(entry.size_text),
        )
        for entry in entries
    )


def render_restart_control(model):
    """Return the restart button, or the wait message while cooling down."""
    if model.restart_allowed:
        return RESTART_BUTTON_HTML
    return RESTART_WAIT_HTML.format(seconds=model.restart_delay_seconds)


def build_replacements(model):
    """Map a ``RenderModel`` to template token values."""
    last_restart = (
        model.last_restart_time.strftime(TIMESTAMP_FORMAT)
        if model.last_restart_time is not None
        else NOT_AVAILABLE
    )
    return {
        "%version%": str(escape(model.version)),
        "%container_status%": _field(model.container, "state"),
        "%container_status_img%": model.container_status_image,
        "%container_uptime%": _field(model.container, "uptime"),
        "%server_name%": _field(model.game, "server_name"),
        "%server_version%": _field(model.game, "version"),
        "%player_count%": _field(model.game, "player_count"),
        "%max_player_count%": _field(model.game, "max_player_count"),
        "%last_restart_time%": last_restart,
        "%server_logs%": _field(model.container, "logs"),
        "%backups%": render_backup_rows(model.recent_backups),
        "%restart_btn%": render_restart_control(model),
        "%render_time%": str(model.render_time_ms),
    }


def render_dashboard(template_text, model):
    """Render the dashboard page for ``model``."""
    return render_template(template_text, build_replacements(model))
