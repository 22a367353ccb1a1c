import tempfile
import unittest
from pathlib import Path

from valman.core.filesystem_utils import format_file_size, safe_filename_in_dir


class FileUtilsTests(unittest.TestCase):
    def test_format_file_size(self):
        self.assertEqual(format_file_size(10), "10 B")
        self.assertEqual(format_file_size(1024), "1.0 KB")
        self.assertEqual(format_file_size(5 * 1024 * 1024), "5.0 MB")

    def test_safe_filename_in_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "world.tar.gz").write_bytes(b"x")
            (base / "sub").mkdir()
            self.assertEqual(safe_filename_in_dir(base, "world.tar.gz"), "world.tar.gz")
            self.assertIsNone(safe_filename_in_dir(base, "missing.tar.gz"))
            self.assertIsNone(safe_filename_in_dir(base, "../world.tar.gz"))
            self.assertIsNone(safe_filename_in_dir(base, "sub"))
            self.assertIsNone(safe_filename_in_dir(base, ""))


if __name__ == "__main__":
    unittest.main()
