#!/usr/bin/env python3
"""
CLI host for the Tattletale build steps.

Modes:
  1) run      - invoke Tattletale on a workspace (build log to stdout)
  2) publish  - archive the report from the workspace into job/build storage
  3) build    - run + publish as one numbered build (log + build record)
  4) show     - print where the project/build report link resolves to
  5) config   - print the effective configuration

Usage:
  python tattletale_cli.py
  python tattletale_cli.py --mode build --workspace ~/src/app --input-dir target/lib --output-dir tattletale-report
  python tattletale_cli.py --mode build --workspace ~/src/app --input-dir lib --output-dir report --keep-all
  python tattletale_cli.py --mode show --workspace ~/src/app
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from cli.args.base import add_base_args
from cli.args.publish import add_publish_args
from cli.args.step import add_step_args
from cli.dispatch import dispatch
from plugin.wiring import build_plugin, configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Tattletale as a build step and archive its report.")
    add_base_args(parser)
    add_step_args(parser)
    add_publish_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        plugin = build_plugin(
            dotenv=not args.no_dotenv,
            config_path=Path(args.config_path) if args.config_path else None,
            jar_location=args.jar_location,
            java_bin=args.java_bin,
            timeout_seconds=args.timeout_seconds,
        )
    except ValueError as e:
        raise SystemExit(f"❌ Invalid configuration: {e}")

    return dispatch(args, plugin)


if __name__ == "__main__":
    raise SystemExit(main())
