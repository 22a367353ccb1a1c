"""Application bootstrap/run helpers."""


def run_server(app, settings, log_valman_action, log_valman_exception, boot_steps):
    """Run startup steps, then start Flask server."""
    host = settings.web_host
    port = settings.web_port
    log_valman_action("boot-start", command=f"host={host} port={port}")

    for step_name, step_func in boot_steps:
        try:
            step_func()
        except Exception as exc:
            log_valman_exception(f"boot_step/{step_name}", exc)
            log_valman_action("boot-failed", command=step_name, rejection_message=str(exc)[:500] or "startup step failed")
            raise

    log_valman_action("boot-ready", command=f"host={host} port={port}")
    try:
        app.run(host=host, port=port, threaded=True)
    except Exception as exc:
        log_valman_exception("boot_step/app.run", exc)
        log_valman_action("boot-failed", command="app.run", rejection_message=str(exc)[:500] or "web server startup failed")
        raise
