import os
import stat
import sys
import tempfile
import unittest
from pathlib import Path
from typing import List

from invoker.core_cmd import LaunchError, merged_env, stream_cmd, which_or_raise


class TestWhichOrRaise(unittest.TestCase):
    def test_falls_back_to_executable_candidate(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            exe = Path(td) / "fake-java"
            exe.write_text("#!/bin/sh\n", encoding="utf-8")
            exe.chmod(exe.stat().st_mode | stat.S_IXUSR)

            self.assertEqual(str(exe), which_or_raise("definitely-not-on-path-xyz", fallbacks=[str(exe)]))

    def test_raises_when_nothing_found(self) -> None:
        with self.assertRaises(FileNotFoundError):
            which_or_raise("definitely-not-on-path-xyz", fallbacks=["/nope/java"])


class TestStreamCmd(unittest.TestCase):
    def test_returns_exit_code_and_command_str(self) -> None:
        lines: List[str] = []
        res = stream_cmd([sys.executable, "-c", "print('hi'); raise SystemExit(4)"], on_line=lines.append)
        self.assertEqual(4, res.exit_code)
        self.assertEqual(["hi"], lines)
        self.assertTrue(res.command_str.startswith(sys.executable))

    def test_launch_error_keeps_command(self) -> None:
        with self.assertRaises(LaunchError) as ctx:
            stream_cmd(["/nope/not-a-binary", "x"], on_line=lambda _l: None)
        self.assertEqual("/nope/not-a-binary x", ctx.exception.command_str)

    def test_merged_env(self) -> None:
        self.assertIsNone(merged_env(None))
        env = merged_env({"TT_X": "1"})
        assert env is not None
        self.assertEqual("1", env["TT_X"])
        self.assertEqual(os.environ.get("PATH"), env.get("PATH"))


if __name__ == "__main__":
    unittest.main()
