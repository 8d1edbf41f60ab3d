import tempfile
import unittest
from pathlib import Path

from plugin.validation import check_input_directory, check_output_directory, check_relative_directory


class TestFieldValidation(unittest.TestCase):
    def test_input_directory_required(self) -> None:
        res = check_input_directory("")
        self.assertFalse(res.ok)
        self.assertEqual("Please set a project location to be analyzed.", res.message)
        self.assertTrue(check_input_directory("target/lib").ok)

    def test_output_directory_required(self) -> None:
        res = check_output_directory(None)
        self.assertFalse(res.ok)
        self.assertEqual("Please set tattletale report directory", res.message)
        self.assertTrue(check_output_directory("report").ok)

    def test_relative_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            ws = Path(td) / "ws"
            (ws / "report").mkdir(parents=True)
            (ws / "file.txt").write_text("x", encoding="utf-8")

            self.assertTrue(check_relative_directory(None, "/anything").ok)
            self.assertTrue(check_relative_directory(ws, "report").ok)
            self.assertFalse(check_relative_directory(ws, "missing").ok)
            self.assertFalse(check_relative_directory(ws, "file.txt").ok)
            self.assertFalse(check_relative_directory(ws, "../outside").ok)
            self.assertFalse(check_relative_directory(ws, str(ws / "report")).ok)


if __name__ == "__main__":
    unittest.main()
