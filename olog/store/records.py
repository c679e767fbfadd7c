"""Plain representations of stored logs."""

from __future__ import annotations

from typing import Any

from olog.store.models import Log, to_epoch


def log_to_dict(log: Log) -> dict[str, Any]:
    """Convert a log to a JSON-serializable dict."""
    return {
        "id": log.id,
        "subject": log.subject,
        "owner": log.owner,
        "description": log.description,
        "created": to_epoch(log.created_at),
        "logbooks": sorted(lb.name for lb in log.logbooks),
        "tags": sorted(t.name for t in log.tags),
        "properties": {p.name: p.value for p in log.properties},
    }


def log_summary(log: Log) -> str:
    """Compact one-line form, e.g. ``Beam dump(ops):[Operations urgent]``."""
    names = [lb.name for lb in log.logbooks] + [t.name for t in log.tags]
    return f"{log.subject}({log.owner}):[{' '.join(names) or 'None'}]"
