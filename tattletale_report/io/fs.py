"""tattletale_report.io.fs

Atomic JSON writer and the recursive copy used to persist reports.

Why this module exists
----------------------
Build records are read back later (to find the last successful build), so a
half-written record after an interrupted build must never be visible. All
JSON writes go through a temp file + ``os.replace``.

The report copy mirrors a workspace directory into job/build storage and
reports how many files it copied; "zero files" is how the archiver detects a
misconfigured report directory.
"""

from __future__ import annotations

import fnmatch
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple


def _atomic_write_text(
    path: Path,
    write_fn,
    *,
    encoding: str = "utf-8",
    newline: Optional[str] = None,
) -> None:
    """Write a file atomically by writing to a temp file and os.replace()."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline=newline) as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # If os.replace fails, best-effort cleanup of the temp file.
        if tmp_path.exists():
            tmp_path.unlink()


def write_json_atomic(
    path: Path,
    data: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
    encoding: str = "utf-8",
) -> None:
    """Write JSON atomically with stable formatting."""

    def _write(f) -> None:
        json.dump(data, f, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
        f.write("\n")

    _atomic_write_text(Path(path), _write, encoding=encoding)


def read_json(path: Path, *, encoding: str = "utf-8") -> Any:
    with Path(path).open("r", encoding=encoding) as f:
        return json.load(f)


# Path components skipped at any depth (Ant default excludes).
DEFAULT_EXCLUDES: Tuple[str, ...] = (
    "*~",
    "#*#",
    ".#*",
    "%*%",
    "._*",
    "CVS",
    ".cvsignore",
    "SCCS",
    "vssver.scc",
    ".svn",
    ".DS_Store",
    ".git",
    ".gitattributes",
    ".gitignore",
    ".gitmodules",
    ".hg",
    ".hgignore",
    ".hgsub",
    ".hgsubstate",
    ".hgtags",
    ".bzr",
    ".bzrignore",
)


def _excluded(rel: Path, excludes: Sequence[str]) -> bool:
    return any(fnmatch.fnmatchcase(part, pat) for part in rel.parts for pat in excludes)


def copy_tree(
    src: Path,
    dst: Path,
    *,
    pattern: str = "**/*",
    excludes: Sequence[str] = DEFAULT_EXCLUDES,
) -> int:
    """Copy every file under *src* matching *pattern* into *dst*.

    Relative structure is preserved and existing files in *dst* are
    overwritten. A file is skipped when any component of its relative path
    matches one of *excludes* (so a whole ``.git`` tree is left out). Returns
    the number of files copied; a missing *src* copies nothing and returns 0.

    Raises OSError if a file cannot be read or written.
    """
    src = Path(src)
    dst = Path(dst)
    if not src.is_dir():
        return 0

    copied = 0
    for p in sorted(src.glob(pattern)):
        if not p.is_file():
            continue
        rel = p.relative_to(src)
        if _excluded(rel, excludes):
            continue
        target = dst / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(p, target)
        copied += 1
    return copied
