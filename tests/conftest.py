"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from olog.store.models import from_epoch
from olog.store.session import get_store_engine, get_store_session
from olog.store.writes import create_log, create_logbook, create_tag

if TYPE_CHECKING:
    from collections.abc import Generator

    import sqlalchemy.engine
    from sqlalchemy.orm import Session


# Creation times of the seeded logs, by id.
BASE_TIME = 1_700_000_000
SEED_TIMES = {log_id: BASE_TIME + 100 * log_id for log_id in range(1, 7)}


def seed_store(session: Session) -> None:
    """Populate a store with a small, known set of logs.

    ====  ======================  =====  =====================  ================  ====================
    id    subject                 owner  logbooks               tags              properties
    ====  ======================  =====  =====================  ================  ====================
    1     Beam dump               alice  Operations             beam, urgent      shift=night
    2     Shift summary           bob    Operations                               shift=day, crew=B
    3     Magnet quench           alice  Physics                urgent
    4     Beamline alignment      carol  Physics, ops_2024      beamline          crew=A
    5     Vacuum 100% ok          bob    opsX2024
    6     Coffee machine broken   dave
    ====  ======================  =====  =====================  ================  ====================

    Log ``n`` is created at ``BASE_TIME + 100 * n``. The tag ``archived``
    exists but is attached to nothing.
    """
    for name in ("Operations", "Physics", "ops_2024", "opsX2024"):
        create_logbook(session, name, owner="admin")
    for name in ("urgent", "beam", "beamline", "archived"):
        create_tag(session, name, owner="admin")

    entries = [
        ("Beam dump", "alice", ["Operations"], ["urgent", "beam"], {"shift": "night"}),
        ("Shift summary", "bob", ["Operations"], [], {"shift": "day", "crew": "B"}),
        ("Magnet quench", "alice", ["Physics"], ["urgent"], {}),
        ("Beamline alignment", "carol", ["Physics", "ops_2024"], ["beamline"], {"crew": "A"}),
        ("Vacuum 100% ok", "bob", ["opsX2024"], [], {}),
        ("Coffee machine broken", "dave", [], [], {}),
    ]
    for log_id, (subject, owner, logbooks, tags, properties) in enumerate(entries, start=1):
        create_log(
            session,
            subject,
            owner,
            logbooks=logbooks,
            tags=tags,
            properties=properties,
            created_at=from_epoch(SEED_TIMES[log_id]),
        )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file pointing at a store in temp_dir."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[store]
path = "{(temp_dir / 'olog.db').as_posix()}"

[search]
timeout = 30

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def seeded_db(sample_config: Path, temp_dir: Path) -> Path:
    """Create and seed the store file the sample config points at."""
    db_path = temp_dir / "olog.db"
    engine = get_store_engine(db_path)
    try:
        with get_store_session(engine=engine) as session:
            seed_store(session)
    finally:
        engine.dispose()
    return db_path


@pytest.fixture
def store_engine() -> Generator[sqlalchemy.engine.Engine, None, None]:
    """Engine for an in-memory store."""
    engine = get_store_engine(":memory:")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def empty_session(store_engine: sqlalchemy.engine.Engine) -> Generator[Session, None, None]:
    """Session on an empty in-memory store."""
    with get_store_session(engine=store_engine) as session:
        yield session


@pytest.fixture
def session(store_engine: sqlalchemy.engine.Engine) -> Generator[Session, None, None]:
    """Session on an in-memory store holding the logs from :func:`seed_store`."""
    with get_store_session(engine=store_engine) as session:
        seed_store(session)
        session.commit()
        yield session
