from __future__ import annotations

import argparse

MODES = ["run", "publish", "build", "show", "config"]


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register flags shared by every mode.

    This includes:
    - mode selection
    - configuration sources and overrides (config file, jar, java, timeout)
    - diagnostics
    """

    parser.add_argument(
        "--mode",
        choices=MODES,
        help=(
            "run = invoke Tattletale on a workspace, publish = archive a report, "
            "build = run + publish as one recorded build, show = resolve the report link, "
            "config = print the effective configuration"
        ),
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="YAML config file (default: tattletale.yaml at the repo root, or $TATTLETALE_CONFIG).",
    )
    parser.add_argument("--jar", dest="jar_location", help="Tattletale jar location (overrides config/env).")
    parser.add_argument("--java", dest="java_bin", help="Java executable used to run the jar (default: java).")
    parser.add_argument(
        "--timeout-seconds",
        type=int,
        default=None,
        help="Kill Tattletale after this many seconds. 0 = no timeout.",
    )
    parser.add_argument("--no-dotenv", action="store_true", help="Do not load the repo-root .env file.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
