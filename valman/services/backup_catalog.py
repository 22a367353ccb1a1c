"""Backup archive listing."""

from dataclasses import dataclass
from datetime import datetime
import os

from valman.core.errors import FilesystemError
from valman.core.filesystem_utils import format_file_size

RECENT_BACKUPS_LIMIT = 5


@dataclass(frozen=True)
class BackupEntry:
    """One backup archive in the backup directory."""
    name: str
    created: datetime
    size_bytes: int

    @property
    def size_text(self):
        return format_file_size(self.size_bytes)


def file_creation_time(stat_result):
    """Return creation time as epoch seconds, using ctime where birth time is unknown."""
    birthtime = getattr(stat_result, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    return stat_result.st_ctime


def list_backups(directory):
    """Return backup entries sorted oldest to newest.

    Raises ``FilesystemError`` when the directory or any entry's metadata
    cannot be read; a partial listing is never returned.
    """
    entries = []
    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                try:
                    if not dir_entry.is_file():
                        continue
                    stat = dir_entry.stat()
                except OSError as exc:
                    raise FilesystemError(f"Cannot read metadata of {dir_entry.path}: {exc}") from exc
                entries.append(BackupEntry(
                    name=dir_entry.name,
                    created=datetime.fromtimestamp(file_creation_time(stat)),
                    size_bytes=stat.st_size,
                ))
    except OSError as exc:
        raise FilesystemError(f"Cannot read backup directory {directory}: {exc}") from exc

    entries.sort(key=lambda entry: (entry.created, entry.name))
    return entries


def recent_backups(entries, limit=RECENT_BACKUPS_LIMIT):
    """Return the newest ``limit`` entries, still oldest first."""
    if limit <= 0:
        return []
    return list(entries[-limit:])
