"""plugin.actions

Report links shown on a job page and on a build page.

Only the directory resolution is implemented here; serving the files is the
host's business. A project link points at the last successful build's report
when that build archived one (``keep_all``), otherwise at the job-level copy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from tattletale_report.io import layout


URL_NAME = "tattletale"
ICON_FILE_NAME = "help.gif"


class BaseReportAction:
    url_name = URL_NAME
    display_name = "Tattletale plugin"

    @property
    def title(self) -> str:
        raise NotImplementedError

    def dir(self) -> Path:
        raise NotImplementedError

    @property
    def icon_file_name(self) -> Optional[str]:
        """None hides the link: there is nothing to show yet."""
        d = self.dir()
        return ICON_FILE_NAME if d.exists() else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url_name": self.url_name,
            "display_name": self.display_name,
            "title": self.title,
            "dir": str(self.dir()),
        }


class ProjectReportAction(BaseReportAction):
    def __init__(self, job_dir: Path, *, project_display_name: Optional[str] = None) -> None:
        self.job_dir = Path(job_dir)
        self.project_display_name = project_display_name or self.job_dir.name

    @property
    def title(self) -> str:
        return f"{self.project_display_name} Tattletale report"

    def dir(self) -> Path:
        last = layout.find_last_successful_build_dir(self.job_dir)
        if last is not None:
            report = layout.build_report_dir(last)
            if report.exists():
                return report
        return layout.job_report_dir(self.job_dir)


class BuildReportAction(BaseReportAction):
    def __init__(self, build_dir: Path, *, build_display_name: Optional[str] = None) -> None:
        self.build_dir = Path(build_dir)
        self.build_display_name = build_display_name or f"#{self.build_dir.name}"

    @property
    def title(self) -> str:
        return f"{self.build_display_name} tattletale report"

    def dir(self) -> Path:
        return layout.build_report_dir(self.build_dir)


def has_build_action(build_dir: Path) -> bool:
    return layout.build_action_path(build_dir).is_file()
