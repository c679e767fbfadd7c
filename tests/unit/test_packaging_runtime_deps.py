"""Tests that package metadata declares every runtime import."""

from __future__ import annotations

import ast
import re
import sys
import tomllib
from pathlib import Path

# Import names that differ from their distribution names.
_DISTRIBUTION_NAMES = {
    "tomli_w": "tomli-w",
}


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _requirement_name(requirement: str) -> str:
    match = re.match(r"[A-Za-z0-9_.-]+", requirement)
    assert match is not None
    return match.group(0).lower().replace("_", "-")


def _top_level_imports(source_dir: Path) -> set[str]:
    names: set[str] = set()
    for path in source_dir.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names.add(node.module.split(".")[0])
    return names


def test_pyproject_declares_third_party_imports() -> None:
    """Every non-stdlib import in olog/ should be a declared dependency."""
    repo_root = _repo_root()

    pyproject_data = tomllib.loads((repo_root / "pyproject.toml").read_text(encoding="utf-8"))
    dependency_names = {
        _requirement_name(requirement)
        for requirement in pyproject_data["project"]["dependencies"]
    }

    imports = _top_level_imports(repo_root / "olog")
    third_party = sorted(
        name for name in imports if name != "olog" and name not in sys.stdlib_module_names
    )

    for name in third_party:
        distribution = _DISTRIBUTION_NAMES.get(name, name).lower()
        assert distribution in dependency_names, (
            f"'{name}' is imported by olog but '{distribution}' is missing "
            "from pyproject.toml dependencies."
        )


def test_example_config_is_package_data() -> None:
    repo_root = _repo_root()
    pyproject_data = tomllib.loads((repo_root / "pyproject.toml").read_text(encoding="utf-8"))
    package_data = pyproject_data["tool"]["setuptools"]["package-data"]["olog"]
    assert "config.example.toml" in package_data
    assert (repo_root / "olog" / "config.example.toml").exists()
