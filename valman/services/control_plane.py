"""Container control operations that mutate shared restart bookkeeping."""

from valman.services import container_runtime


def restart_container(ctx):
    """Restart the managed container, then stamp the restart time.

    The whole sequence runs under ``restart_sequence_lock``; the stamp is
    written only after the runtime accepted the restart.
    """
    shared = ctx.shared_state
    with shared.restart_sequence_lock:
        state = shared.snapshot()
        container_name = state.settings.container_name
        container_id = container_runtime.restart(state.docker_client, container_name)
        stamp = shared.stamp_restart()
    ctx.log_action("restart", command=f"{container_name} id={container_id[:12]}")
    return stamp
