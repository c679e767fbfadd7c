"""File helpers for private olog files."""

from __future__ import annotations

from pathlib import Path


def secure_mkdir(path: Path) -> None:
    """Create directory with 0o700 permissions (owner-only access).

    An existing directory has its permissions tightened to 0o700.
    Parent directories are created as needed.
    """
    path.mkdir(parents=True, exist_ok=True)
    path.chmod(0o700)
