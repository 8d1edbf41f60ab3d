import io
import tempfile
import unittest
from pathlib import Path

from plugin.actions import has_build_action
from plugin.archiver import ReportArchiver, expand_env
from plugin.models import BuildContext, BuildLog
from tattletale_report.io import layout


class TestReportArchiver(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        root = Path(self._td.name)
        self.ws = root / "ws"
        self.job_dir = root / "jobs" / "app"
        report = self.ws / "tattletale-report"
        (report / "jar").mkdir(parents=True)
        (report / "index.html").write_text("<html/>", encoding="utf-8")
        (report / "jar" / "a.html").write_text("a", encoding="utf-8")
        self.out = io.StringIO()
        self.log = BuildLog(self.out)

    def tearDown(self) -> None:
        self._td.cleanup()

    def build(self, **kw) -> BuildContext:
        defaults = dict(job_dir=self.job_dir, build_number=3, workspace=self.ws, env={})
        defaults.update(kw)
        return BuildContext(**defaults)

    def test_archives_to_job_dir_by_default(self) -> None:
        res = ReportArchiver().perform(self.build(), self.log)

        self.assertTrue(res.succeeded)
        self.assertEqual(2, res.files_copied)
        self.assertEqual(layout.job_report_dir(self.job_dir), res.target_dir)
        self.assertEqual("a", (res.target_dir / "jar" / "a.html").read_text(encoding="utf-8"))
        self.assertIn("[Tattletale] Publishing", self.out.getvalue())
        self.assertFalse(has_build_action(self.build().build_dir))

    def test_keep_all_archives_per_build_and_records_action(self) -> None:
        build = self.build()
        res = ReportArchiver(keep_all=True).perform(build, self.log)

        self.assertTrue(res.succeeded)
        self.assertEqual(layout.build_report_dir(build.build_dir), res.target_dir)
        self.assertTrue((build.build_dir / "tattletale-report" / "index.html").is_file())
        self.assertTrue(has_build_action(build.build_dir))

    def test_empty_report_dir_is_a_failure(self) -> None:
        (self.ws / "empty").mkdir()
        res = ReportArchiver(report_dir="empty").perform(self.build(), self.log)

        self.assertFalse(res.succeeded)
        self.assertEqual(0, res.files_copied)
        self.assertIn("ERROR: [Tattletale] No data copied, configuration error?", self.out.getvalue())

    def test_missing_report_dir_is_a_failure(self) -> None:
        res = ReportArchiver(report_dir="nope").perform(self.build(), self.log)
        self.assertFalse(res.succeeded)
        self.assertEqual("No data copied, configuration error?", res.message)

    def test_missing_workspace_is_a_failure(self) -> None:
        res = ReportArchiver().perform(self.build(workspace=None), self.log)
        self.assertFalse(res.succeeded)
        self.assertIn("Workspace missing.", self.out.getvalue())

    def test_report_dir_is_expanded_against_build_env(self) -> None:
        nested = self.ws / "reports" / "7"
        nested.mkdir(parents=True)
        (nested / "index.html").write_text("seven", encoding="utf-8")

        res = ReportArchiver(report_dir="reports/${BUILD_NUMBER}").perform(
            self.build(env={"BUILD_NUMBER": "7"}), self.log
        )
        self.assertTrue(res.succeeded)
        self.assertEqual("seven", (res.target_dir / "index.html").read_text(encoding="utf-8"))

    def test_second_archive_overwrites_files(self) -> None:
        ReportArchiver().perform(self.build(), self.log)
        (self.ws / "tattletale-report" / "index.html").write_text("<new/>", encoding="utf-8")
        res = ReportArchiver().perform(self.build(build_number=4), self.log)

        self.assertEqual("<new/>", (res.target_dir / "index.html").read_text(encoding="utf-8"))


class TestExpandEnv(unittest.TestCase):
    def test_known_and_unknown_variables(self) -> None:
        self.assertEqual("r/5/$OTHER", expand_env("r/$N/$OTHER", {"N": "5"}))
        self.assertEqual("r/5", expand_env("r/${N}", {"N": "5"}))


if __name__ == "__main__":
    unittest.main()
