"""Backup download route registration for the valman dashboard."""

from flask import abort, send_from_directory

from valman.core.filesystem_utils import safe_filename_in_dir


def register_file_routes(app, ctx):
    """Register backup download routes."""

    # Route: /backups/<name>
    @app.route("/backups/<name>")
    def download_backup(name):
        """Stream one backup archive."""
        backups_path = ctx.shared_state.snapshot().settings.backups_path
        safe_name = safe_filename_in_dir(backups_path, name)
        if safe_name is None:
            ctx.log_action("download-backup", command=name, rejection_message="File not found or invalid path.")
            return abort(404)
        ctx.log_action("download-backup", command=safe_name)
        return send_from_directory(str(backups_path), safe_name, as_attachment=True)
