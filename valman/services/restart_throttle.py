"""Advisory restart cooldown.

The cooldown only decides whether the dashboard offers the restart button;
``/restart`` and restores are not blocked by it.
"""


def is_restart_allowed(last_restart, cooldown_seconds, now):
    """Return True when no restart happened yet or the cooldown has passed."""
    if last_restart is None:
        return True
    return abs((now - last_restart).total_seconds()) > cooldown_seconds
