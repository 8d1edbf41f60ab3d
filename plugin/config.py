"""plugin.config

Global Tattletale configuration.

A CI server would keep this in a singleton descriptor and let every build step
read it. Here it is an explicit value object: the composition root loads it
once and hands it to the builder/archiver at call time.

Sources, lowest to highest precedence:

1. defaults
2. YAML file (``tattletale.yaml`` at the repo root, or ``TATTLETALE_CONFIG``)
3. environment (``TATTLETALE_*``; a repo-root ``.env`` is loaded by wiring)
4. explicit overrides (CLI flags)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from tattletale_report.io.layout import DEFAULT_REPORT_DIRNAME


ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = ROOT_DIR / "tattletale.yaml"
CONFIG_PATH_ENV = "TATTLETALE_CONFIG"

# field name -> environment variable
ENV_VARS: Dict[str, str] = {
    "jar_location": "TATTLETALE_JAR",
    "javassist_jar_location": "TATTLETALE_JAVASSIST_JAR",
    "properties_location": "TATTLETALE_PROPERTIES",
    "override_config": "TATTLETALE_OVERRIDE_CONFIG",
    "java_bin": "TATTLETALE_JAVA",
    "store_dir": "TATTLETALE_STORE_DIR",
    "timeout_seconds": "TATTLETALE_TIMEOUT_SECONDS",
}

_TRUE = {"1", "true", "yes", "on", "y"}
_FALSE = {"0", "false", "no", "off", "n", ""}


@dataclass(frozen=True)
class TattletaleConfig:
    jar_location: Optional[str] = None
    javassist_jar_location: Optional[str] = None
    properties_location: Optional[str] = None
    override_config: bool = False
    java_bin: str = "java"
    store_dir: str = DEFAULT_REPORT_DIRNAME
    timeout_seconds: int = 0

    @property
    def runtime(self) -> Tuple[str, ...]:
        """Argument prefix placed before the jar path."""
        return (self.java_bin, "-jar")

    def require_jar(self) -> str:
        if not self.jar_location:
            raise ValueError(
                "Tattletale jar location is not configured. "
                f"Set {ENV_VARS['jar_location']} or 'jar_location' in {DEFAULT_CONFIG_PATH.name}."
            )
        return self.jar_location

    def with_overrides(self, **overrides: Any) -> "TattletaleConfig":
        """Return a copy with every non-None override applied."""
        clean = {k: v for k, v in overrides.items() if v is not None}
        return _coerce(replace(self, **clean)) if clean else self

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def dump_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)


# ----------------------------
# Parsing helpers
# ----------------------------

def _parse_bool(value: Any, *, name: str) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    s = str(value).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _parse_int(value: Any, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for {name}: {value!r}")
    try:
        n = int(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {value!r}") from None
    if n < 0:
        raise ValueError(f"{name} must be >= 0 (got {n})")
    return n


def _none_if_blank(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _coerce(cfg: TattletaleConfig) -> TattletaleConfig:
    """Normalize types and apply the blank-store-dir fallback."""
    return TattletaleConfig(
        jar_location=_none_if_blank(cfg.jar_location),
        javassist_jar_location=_none_if_blank(cfg.javassist_jar_location),
        properties_location=_none_if_blank(cfg.properties_location),
        override_config=_parse_bool(cfg.override_config, name="override_config"),
        java_bin=_none_if_blank(cfg.java_bin) or "java",
        store_dir=_none_if_blank(cfg.store_dir) or DEFAULT_REPORT_DIRNAME,
        timeout_seconds=_parse_int(cfg.timeout_seconds, name="timeout_seconds"),
    )


# ----------------------------
# Loading
# ----------------------------

def load_config_yaml(path: Path) -> Dict[str, Any]:
    """Load the YAML config file as a dict (missing file -> empty dict)."""
    p = Path(path).expanduser()
    if not p.exists():
        return {}
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Config YAML must be a mapping/object at top level: {p}")

    known = {f.name for f in fields(TattletaleConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown keys in {p}: {', '.join(unknown)}")
    return raw


def load_config(
    config_path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TattletaleConfig:
    env = os.environ if environ is None else environ

    if config_path is None:
        config_path = Path(env[CONFIG_PATH_ENV]) if env.get(CONFIG_PATH_ENV) else DEFAULT_CONFIG_PATH

    values: Dict[str, Any] = dict(load_config_yaml(config_path))

    for field_name, var in ENV_VARS.items():
        if var in env:
            values[field_name] = env[var]

    return _coerce(TattletaleConfig(**values))
