"""plugin.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables
- configure logging
- build the high-level plugin facade object

Keeping this wiring in one place prevents configuration and dependency setup
from being duplicated across entrypoints (CLI, scripts, CI glue).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from plugin.config import ROOT_DIR, load_config
from plugin.plugin import TattletalePlugin


ENV_PATH: Path = ROOT_DIR / ".env"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def build_plugin(
    *,
    dotenv: bool = True,
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> TattletalePlugin:
    """Build the plugin facade.

    ``.env`` never overrides variables already present in the environment.
    Keyword *overrides* (CLI flags) win over both the environment and the
    YAML file; ``None`` values are ignored.
    """
    if dotenv:
        load_dotenv(ENV_PATH, override=False)

    config = load_config(config_path).with_overrides(**overrides)
    return TattletalePlugin(config)
