"""plugin.archiver

"Publish Tattletale report" post-build step.

Copies the report Tattletale wrote into the workspace to storage that
outlives the workspace:

- ``keep_all=False``: ``<job_dir>/tattletale-report`` (one report per job,
  overwritten by every build)
- ``keep_all=True``:  ``<build_dir>/tattletale-report`` (one report per build)
  plus a build action marker so the build links to its own report
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import Mapping, Optional

from tattletale_report.io import layout
from tattletale_report.io.fs import copy_tree, write_json_atomic

from plugin.actions import BuildReportAction
from plugin.models import BuildContext, BuildLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveResult:
    succeeded: bool
    files_copied: int = 0
    target_dir: Optional[Path] = None
    message: Optional[str] = None


def expand_env(value: str, env: Mapping[str, str]) -> str:
    """Expand ``$VAR`` / ``${VAR}`` against the build environment; unknown vars stay as-is."""
    return Template(value).safe_substitute(env)


@dataclass(frozen=True)
class ReportArchiver:
    report_dir: str = layout.DEFAULT_REPORT_DIRNAME
    keep_all: bool = False

    def target_dir(self, build: BuildContext) -> Path:
        if self.keep_all:
            return layout.build_report_dir(build.build_dir)
        return layout.job_report_dir(build.job_dir)

    def perform(self, build: BuildContext, log: BuildLog) -> ArchiveResult:
        log.println("[Tattletale] Publishing")

        if build.workspace is None:
            message = "Workspace missing."
            log.error(f"[Tattletale] {message}")
            return ArchiveResult(succeeded=False, message=message)

        source = Path(build.workspace) / expand_env(self.report_dir, build.env)
        target = self.target_dir(build)
        logger.debug("archiving %s -> %s", source, target)

        try:
            copied = copy_tree(source, target)
        except OSError as e:
            log.error("[Tattletale] Failed to record data")
            log.println("".join(traceback.format_exception_only(type(e), e)).rstrip())
            return ArchiveResult(succeeded=False, target_dir=target, message=str(e))

        if copied == 0:
            message = "No data copied, configuration error?"
            log.error(f"[Tattletale] {message}")
            return ArchiveResult(succeeded=False, target_dir=target, message=message)

        log.println(f"[Tattletale] Archived {copied} file(s) to {target}")

        if self.keep_all:
            action = BuildReportAction(build.build_dir, build_display_name=build.display_name)
            write_json_atomic(layout.build_action_path(build.build_dir), action.to_dict())

        return ArchiveResult(succeeded=True, files_copied=copied, target_dir=target)
