"""tattletale_report.io

Filesystem contracts and IO helpers.

Design principle
----------------
Where reports and build records live is a contract shared by the builder
step, the archiver and the report actions. This package centralizes those
rules so they evolve in one place.
"""

from __future__ import annotations

from .fs import copy_tree, read_json, write_json_atomic
from .layout import (
    BUILD_RECORD_NAME,
    BUILDS_DIRNAME,
    DEFAULT_REPORT_DIRNAME,
    RESULT_FAILURE,
    RESULT_SUCCESS,
    BuildRecord,
    build_action_path,
    build_dir,
    build_log_path,
    build_report_dir,
    find_last_successful_build_dir,
    job_report_dir,
    list_build_dirs,
    next_build_number,
    read_build_record,
    write_build_record,
)

__all__ = [
    "BUILD_RECORD_NAME",
    "BUILDS_DIRNAME",
    "DEFAULT_REPORT_DIRNAME",
    "RESULT_FAILURE",
    "RESULT_SUCCESS",
    "BuildRecord",
    "build_action_path",
    "build_dir",
    "build_log_path",
    "build_report_dir",
    "copy_tree",
    "find_last_successful_build_dir",
    "job_report_dir",
    "list_build_dirs",
    "next_build_number",
    "read_build_record",
    "read_json",
    "write_build_record",
    "write_json_atomic",
]
