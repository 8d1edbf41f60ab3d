from __future__ import annotations

import argparse

from plugin.archiver import ReportArchiver
from plugin.models import BuildLog
from plugin.plugin import TattletalePlugin

from cli.common import make_build_context


def archiver_from_args(args: argparse.Namespace, plugin: TattletalePlugin) -> ReportArchiver:
    return ReportArchiver(
        report_dir=args.report_dir or plugin.config.store_dir,
        keep_all=bool(args.keep_all),
    )


def run_publish(args: argparse.Namespace, plugin: TattletalePlugin) -> int:
    """Archive an existing report from the workspace into job/build storage."""
    if args.keep_all and args.build_number is None:
        raise SystemExit("❌ --keep-all needs --build-number in publish mode (the report is stored per build).")

    build = make_build_context(args)
    res = plugin.publish(archiver_from_args(args, plugin), build, BuildLog())
    if res.succeeded:
        print(f"📄 Report archived to: {res.target_dir}")
        return 0
    return 1
