import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from valman.core.errors import FilesystemError
from valman.services import backup_catalog


def _mtime_as_creation(stat_result):
    return stat_result.st_mtime


class ListBackupsTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.base = Path(tmp.name)
        patcher = patch.object(backup_catalog, "file_creation_time", side_effect=_mtime_as_creation)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write(self, name, created, size=1):
        path = self.base / name
        path.write_bytes(b"x" * size)
        os.utime(path, (created, created))

    def test_sorted_oldest_first(self):
        self._write("c.tar.gz", 3_000)
        self._write("a.tar.gz", 1_000)
        self._write("b.tar.gz", 2_000, size=2048)
        (self.base / "not-a-backup").mkdir()

        entries = backup_catalog.list_backups(self.base)

        self.assertEqual([e.name for e in entries], ["a.tar.gz", "b.tar.gz", "c.tar.gz"])
        self.assertEqual(entries[1].size_bytes, 2048)
        self.assertEqual(entries[1].size_text, "2.0 KB")

    def test_recent_view_is_last_five_in_order(self):
        for count in (0, 3, 5, 8):
            for path in self.base.iterdir():
                path.unlink()
            for idx in range(count):
                self._write(f"world_{idx:02d}.tar.gz", 1_000 + idx)
            with self.subTest(count=count):
                entries = backup_catalog.list_backups(self.base)
                recent = backup_catalog.recent_backups(entries)
                expected = [f"world_{idx:02d}.tar.gz" for idx in range(max(0, count - 5), count)]
                self.assertEqual(len(recent), min(count, 5))
                self.assertEqual([e.name for e in recent], expected)
                again = backup_catalog.recent_backups(backup_catalog.list_backups(self.base))
                self.assertEqual(recent, again)

    def test_equal_creation_times_order_by_name(self):
        self._write("b.tar.gz", 1_000)
        self._write("a.tar.gz", 1_000)

        names = [e.name for e in backup_catalog.list_backups(self.base)]

        self.assertEqual(names, ["a.tar.gz", "b.tar.gz"])

    def test_unreadable_directory_raises(self):
        with self.assertRaises(FilesystemError):
            backup_catalog.list_backups(self.base / "missing")

    def test_metadata_failure_is_fatal(self):
        self._write("a.tar.gz", 1_000)
        with patch.object(backup_catalog.os, "scandir") as scandir:
            entry = scandir.return_value.__enter__.return_value
            bad = Mock(path=str(self.base / "a.tar.gz"))
            bad.is_file.return_value = True
            bad.stat.side_effect = PermissionError("denied")
            entry.__iter__.return_value = iter([bad])
            with self.assertRaises(FilesystemError):
                backup_catalog.list_backups(self.base)


class CreationTimeTests(unittest.TestCase):
    def test_prefers_birth_time(self):
        stat = Mock(st_birthtime=5.0, st_ctime=9.0)
        self.assertEqual(backup_catalog.file_creation_time(stat), 5.0)

    def test_falls_back_to_ctime(self):
        stat = Mock(spec=["st_ctime"], st_ctime=9.0)
        self.assertEqual(backup_catalog.file_creation_time(stat), 9.0)


if __name__ == "__main__":
    unittest.main()
