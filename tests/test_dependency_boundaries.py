import ast
import unittest
from pathlib import Path
from typing import Dict, Iterator, List, Tuple


REPO_ROOT = Path(__file__).resolve().parents[1]

# Layering, bottom to top: tattletale_report -> invoker -> plugin -> cli.
# A package may import only from packages below it.
LAYERS: Tuple[str, ...] = ("tattletale_report", "invoker", "plugin", "cli")


def forbidden_roots() -> Dict[str, Tuple[str, ...]]:
    return {pkg: LAYERS[i + 1 :] for i, pkg in enumerate(LAYERS)}


def package_sources(pkg: str) -> Iterator[Path]:
    for p in sorted((REPO_ROOT / pkg).rglob("*.py")):
        if "__pycache__" not in p.parts:
            yield p


def imported_roots(py_file: Path) -> Iterator[Tuple[int, str]]:
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name.split(".", 1)[0]
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.lineno, node.module.split(".", 1)[0]


class TestDependencyBoundaries(unittest.TestCase):
    def test_packages_only_import_downwards(self) -> None:
        problems: List[str] = []
        for pkg, forbidden in forbidden_roots().items():
            for py_file in package_sources(pkg):
                for lineno, root in imported_roots(py_file):
                    if root in forbidden:
                        rel = py_file.relative_to(REPO_ROOT)
                        problems.append(f"{rel}:{lineno} imports {root}")

        if problems:
            self.fail("Imports against the layering:\n" + "\n".join(problems))

    def test_every_layer_is_a_regular_package(self) -> None:
        for pkg in LAYERS:
            for d in [REPO_ROOT / pkg, *(p for p in (REPO_ROOT / pkg).rglob("*") if p.is_dir())]:
                if d.name == "__pycache__" or not any(d.glob("*.py")):
                    continue
                self.assertTrue((d / "__init__.py").is_file(), f"{d.relative_to(REPO_ROOT)} has no __init__.py")


if __name__ == "__main__":
    unittest.main()
