from __future__ import annotations

import argparse


def add_publish_args(parser: argparse.ArgumentParser) -> None:
    """Register report-archiver flags."""

    parser.add_argument(
        "--report-dir",
        help="(publish|build) Workspace-relative report directory to archive; $VAR/${VAR} are expanded "
        "against the build environment (default: store_dir from config).",
    )
    parser.add_argument(
        "--keep-all",
        action="store_true",
        help="(publish|build) Keep a report per build instead of one per job.",
    )
    parser.add_argument(
        "--skip-publish",
        action="store_true",
        help="(build) Run Tattletale but do not archive the report.",
    )
