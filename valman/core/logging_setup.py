"""Logging setup helpers."""

from valman.core.action_logging import make_log_action, make_log_exception

ACTION_LOG_NAME = "valman-actions.log"


def build_loggers(log_dir):
    """Create the valman action log writer and its exception logger."""
    log_valman_action = make_log_action(log_dir / ACTION_LOG_NAME)
    log_valman_exception = make_log_exception(log_valman_action)
    return log_valman_action, log_valman_exception
