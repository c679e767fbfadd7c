"""Log store: ORM models, sessions and write operations."""

from olog.store.models import Log, Logbook, LogLogbook, LogProperty, LogTag, StoreBase, Tag
from olog.store.records import log_summary, log_to_dict
from olog.store.session import get_default_db_path, get_store_engine, get_store_session

__all__ = [
    # Models
    "StoreBase",
    "Log",
    "Logbook",
    "Tag",
    "LogLogbook",
    "LogTag",
    "LogProperty",
    # Session
    "get_default_db_path",
    "get_store_engine",
    "get_store_session",
    # Records
    "log_summary",
    "log_to_dict",
]
