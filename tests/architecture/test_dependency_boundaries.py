"""依存境界（core は cli に依存しない / 外部依存は限定）の破りを検出するテスト。"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

_ALLOWED_THIRD_PARTY = {"numpy", "yaml"}


def _repo_root() -> Path:
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / "src").is_dir() and (parent / "tests").is_dir():
            return parent
    raise RuntimeError("repo root が見つからない")


def _iter_py_files(root: Path) -> list[Path]:
    return sorted([p for p in root.rglob("*.py") if p.is_file()])


def _absolute_imports(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    out: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            out.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            out.add(node.module)
    return out


def test_core_does_not_import_cli() -> None:
    core_root = _repo_root() / "src" / "parambox" / "core"
    violations: list[str] = []
    for path in _iter_py_files(core_root):
        for module in _absolute_imports(path):
            if module == "parambox.cli" or module.startswith("parambox.cli."):
                violations.append(f"{path.name}: {module}")
    assert violations == []


def test_third_party_imports_are_declared() -> None:
    src_root = _repo_root() / "src" / "parambox"
    unexpected: set[str] = set()
    for path in _iter_py_files(src_root):
        for module in _absolute_imports(path):
            top = module.split(".", 1)[0]
            if top in {"parambox", "__future__"} or top in sys.stdlib_module_names:
                continue
            if top not in _ALLOWED_THIRD_PARTY:
                unexpected.add(top)
    assert unexpected == set()
