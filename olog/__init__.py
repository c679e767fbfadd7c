"""olog: logbook entries organized by logbooks, tags and properties."""

__version__ = "0.3.0"
