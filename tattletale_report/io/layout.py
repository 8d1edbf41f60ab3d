"""tattletale_report.io.layout

Canonical job/build storage layout.

A job directory mirrors the way a CI server keeps per-job state::

  <job_dir>/
    tattletale-report/            job-level report (archived without keep_all)
    builds/
      <n>/
        build.json                build record (number, result, timestamp)
        log                       build log
        tattletale-report/        build-level report (archived with keep_all)
        tattletale-action.json    marker: this build has its own report

The goal is that the builder, the archiver and the report actions do **not**
re-implement their own "where does the report live" heuristics.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .fs import read_json, write_json_atomic


DEFAULT_REPORT_DIRNAME = "tattletale-report"
BUILDS_DIRNAME = "builds"
BUILD_RECORD_NAME = "build.json"
BUILD_LOG_NAME = "log"
BUILD_ACTION_NAME = "tattletale-action.json"

RESULT_SUCCESS = "SUCCESS"
RESULT_FAILURE = "FAILURE"


def job_report_dir(job_dir: Union[str, Path]) -> Path:
    """Directory where the report is stored for the job (latest archive wins)."""
    return Path(job_dir) / DEFAULT_REPORT_DIRNAME


def build_report_dir(build_root: Union[str, Path]) -> Path:
    """Directory where the report is stored for one build."""
    return Path(build_root) / DEFAULT_REPORT_DIRNAME


def build_dir(job_dir: Union[str, Path], number: int) -> Path:
    return Path(job_dir) / BUILDS_DIRNAME / str(int(number))


def build_log_path(build_root: Union[str, Path]) -> Path:
    return Path(build_root) / BUILD_LOG_NAME


def build_action_path(build_root: Union[str, Path]) -> Path:
    return Path(build_root) / BUILD_ACTION_NAME


def list_build_dirs(job_dir: Union[str, Path]) -> List[Path]:
    """Return build directories under *job_dir*, sorted by build number."""
    builds = Path(job_dir) / BUILDS_DIRNAME
    if not builds.is_dir():
        return []
    dirs = [d for d in builds.iterdir() if d.is_dir() and d.name.isdigit()]
    return sorted(dirs, key=lambda d: int(d.name))


def next_build_number(job_dir: Union[str, Path]) -> int:
    """Allocate the next build number (1 for a fresh job)."""
    dirs = list_build_dirs(job_dir)
    return int(dirs[-1].name) + 1 if dirs else 1


# -------------------------
# Build records
# -------------------------

@dataclass(frozen=True)
class BuildRecord:
    number: int
    result: str
    timestamp: str

    @property
    def successful(self) -> bool:
        return self.result == RESULT_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {"number": self.number, "result": self.result, "timestamp": self.timestamp}

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "BuildRecord":
        return BuildRecord(
            number=int(d["number"]),
            result=str(d.get("result") or RESULT_FAILURE),
            timestamp=str(d.get("timestamp") or ""),
        )


def write_build_record(build_root: Union[str, Path], *, number: int, result: str) -> BuildRecord:
    rec = BuildRecord(
        number=int(number),
        result=result,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    write_json_atomic(Path(build_root) / BUILD_RECORD_NAME, rec.to_dict())
    return rec


def read_build_record(build_root: Union[str, Path]) -> Optional[BuildRecord]:
    """Read a build record; None when the build has no (readable) record."""
    p = Path(build_root) / BUILD_RECORD_NAME
    if not p.is_file():
        return None
    try:
        raw = read_json(p)
        return BuildRecord.from_dict(raw) if isinstance(raw, dict) else None
    except (ValueError, KeyError, TypeError):
        return None


def find_last_successful_build_dir(job_dir: Union[str, Path]) -> Optional[Path]:
    """Highest-numbered build whose record says SUCCESS."""
    for d in reversed(list_build_dirs(job_dir)):
        rec = read_build_record(d)
        if rec is not None and rec.successful:
            return d
    return None
