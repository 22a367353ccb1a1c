"""Restore a backup archive into the world directory, then restart."""

import tarfile
import zlib

from valman.core.errors import (
    BackupError,
    RestartError,
    RuntimeApiError,
    RuntimeDataError,
)
from valman.core.filesystem_utils import safe_filename_in_dir
from valman.services import control_plane


def resolve_backup_path(backups_path, backup_name):
    """Return the archive path for a direct child of the backup directory."""
    safe_name = safe_filename_in_dir(backups_path, backup_name)
    if safe_name is None:
        raise BackupError("Backup file not found.", backup_name=backup_name)
    return backups_path / safe_name


def extract_backup_archive(archive_path, destination_path):
    """Extract a gzip tar archive over ``destination_path``.

    Existing entries are overwritten; nothing is cleaned up when extraction
    fails midway.
    """
    with tarfile.open(archive_path, "r:gz") as archive:
        archive.extractall(destination_path, filter="data")


def restore_backup(ctx, backup_name):
    """Extract ``backup_name`` and restart the container.

    Raises ``BackupError`` when extraction fails (no restart is attempted) and
    ``RestartError`` when the restart fails after the files were restored.
    """
    settings = ctx.shared_state.snapshot().settings
    archive_path = resolve_backup_path(settings.backups_path, backup_name)
    destination = settings.backups_destination_path

    ctx.log_action("restore-extract", command=f"{archive_path} -> {destination}")
    try:
        extract_backup_archive(archive_path, destination)
    except (OSError, EOFError, zlib.error, tarfile.TarError) as exc:
        raise BackupError(str(exc), backup_name=backup_name) from exc

    try:
        control_plane.restart_container(ctx)
    except (RuntimeApiError, RuntimeDataError) as exc:
        raise RestartError(str(exc), backup_name=backup_name) from exc
    ctx.log_action("restore", command=backup_name)
