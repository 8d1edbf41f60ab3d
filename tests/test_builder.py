import io
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path

from invoker.tattletale import Invoker
from plugin.builder import TattletaleBuilder
from plugin.config import TattletaleConfig
from plugin.models import BuildContext, BuildLog
from tattletale_report.domain import ErrorKind

STUB = """
import sys
from pathlib import Path

src, dst = sys.argv[1], sys.argv[2]
print("Scanning " + src)
out = Path(dst)
out.mkdir(parents=True, exist_ok=True)
(out / "index.html").write_text("report", encoding="utf-8")
sys.exit(int(Path(src, "exit_code").read_text()) if Path(src, "exit_code").exists() else 0)
"""


class TestTattletaleBuilder(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        root = Path(self._td.name)
        self.ws = root / "ws"
        (self.ws / "lib").mkdir(parents=True)
        self.jar = root / "tattletale.jar"
        self.jar.write_text(textwrap.dedent(STUB), encoding="utf-8")
        self.config = TattletaleConfig(
            jar_location=str(self.jar),
            javassist_jar_location="/opt/javassist.jar",
            override_config=True,
        )
        self.build = BuildContext(job_dir=root / "jobs" / "app", build_number=1, workspace=self.ws)
        self.out = io.StringIO()
        self.log = BuildLog(self.out)
        self.invoker = Invoker(runtime=(sys.executable,))

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_successful_run_logs_narrative_and_writes_report(self) -> None:
        builder = TattletaleBuilder(input_directory="lib", output_directory="report")
        res = builder.perform(self.build, self.config, self.log, invoker=self.invoker)

        text = self.out.getvalue()
        self.assertTrue(res.succeeded)
        self.assertTrue((self.ws / "report" / "index.html").is_file())
        self.assertIn("Input directory: lib", text)
        self.assertIn("Output directory: report", text)
        self.assertIn("Default global config overriden.", text)
        self.assertIn("Javassist jar location: \n/opt/javassist.jar", text)
        self.assertIn("[Tattletale] Starting analysis.", text)
        self.assertIn(f"[Tattletale] Workspace path: {self.ws.resolve()}", text)
        self.assertIn("[Tattletale] Running $ ", text)
        self.assertIn("Scanning ", text)
        self.assertIn("[Tattletale] Finished analysis.", text)

    def test_nonzero_exit_fails_step(self) -> None:
        (self.ws / "lib" / "exit_code").write_text("3", encoding="utf-8")
        builder = TattletaleBuilder(input_directory="lib", output_directory="report")
        res = builder.perform(self.build, self.config, self.log, invoker=self.invoker)

        self.assertFalse(res.succeeded)
        self.assertEqual(3, res.exit_code)
        self.assertIn("Tattletale exited with code 3", self.out.getvalue())
        self.assertNotIn("Finished analysis.", self.out.getvalue())

    def test_missing_workspace_fails_without_running(self) -> None:
        build = BuildContext(job_dir=self.build.job_dir, build_number=1, workspace=None)
        res = TattletaleBuilder("lib", "report").perform(build, self.config, self.log, invoker=self.invoker)

        self.assertFalse(res.succeeded)
        self.assertEqual(ErrorKind.LAUNCH_FAILURE, res.error_kind)
        self.assertIn("Workspace missing.", self.out.getvalue())
        self.assertNotIn("Running $", self.out.getvalue())

    def test_unconfigured_jar_fails(self) -> None:
        res = TattletaleBuilder("lib", "report").perform(
            self.build, TattletaleConfig(), self.log, invoker=self.invoker
        )
        self.assertEqual(ErrorKind.LAUNCH_FAILURE, res.error_kind)

    def test_validate(self) -> None:
        with self.assertRaises(ValueError):
            TattletaleBuilder("", "report").validate()
        with self.assertRaises(ValueError):
            TattletaleBuilder("lib", "").validate()
        TattletaleBuilder("lib", "report").validate()


class TestBuildLog(unittest.TestCase):
    def test_tees_into_log_file_and_is_callable(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = io.StringIO()
            path = Path(td) / "builds" / "1" / "log"
            with BuildLog(out, log_path=path) as log:
                log("one")
                log.error("two")

            self.assertEqual("one\nERROR: two\n", out.getvalue())
            self.assertEqual("one\nERROR: two\n", path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
