"""SQLAlchemy ORM models for the log store."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the store's timestamp convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def from_epoch(seconds: int) -> datetime:
    """Convert epoch seconds to the store's naive UTC datetime."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(tzinfo=None)


def to_epoch(value: datetime) -> int:
    """Convert a stored naive UTC datetime back to epoch seconds."""
    return int(value.replace(tzinfo=timezone.utc).timestamp())


class StoreBase(DeclarativeBase):
    """Base class for store ORM models."""

    pass


class LogLogbook(StoreBase):
    """Logbook membership of a log."""

    __tablename__ = "log_logbooks"

    log_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("logs.id", ondelete="CASCADE"), primary_key=True
    )
    logbook_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("logbooks.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("ix_log_logbooks_logbook", "logbook_id"),)

    def __repr__(self) -> str:
        return f"<LogLogbook(log={self.log_id}, logbook={self.logbook_id})>"


class LogTag(StoreBase):
    """Tag attached to a log."""

    __tablename__ = "log_tags"

    log_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("logs.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("ix_log_tags_tag", "tag_id"),)

    def __repr__(self) -> str:
        return f"<LogTag(log={self.log_id}, tag={self.tag_id})>"


class Logbook(StoreBase):
    """A named category logs are filed under."""

    __tablename__ = "logbooks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    owner: Mapped[str | None] = mapped_column(String(256))

    logs: Mapped[list[Log]] = relationship(
        "Log", secondary="log_logbooks", back_populates="logbooks"
    )

    def __repr__(self) -> str:
        return f"<Logbook(id={self.id}, name='{self.name}')>"


class Tag(StoreBase):
    """A free-form label attachable to logs."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    owner: Mapped[str | None] = mapped_column(String(256))

    logs: Mapped[list[Log]] = relationship("Log", secondary="log_tags", back_populates="tags")

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class LogProperty(StoreBase):
    """A named key/value attribute of a log."""

    __tablename__ = "log_properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    log_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("logs.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    value: Mapped[str | None] = mapped_column(Text)

    log: Mapped[Log] = relationship("Log", back_populates="properties")

    __table_args__ = (Index("ix_log_properties_name", "name"),)

    def __repr__(self) -> str:
        return f"<LogProperty(log={self.log_id}, {self.name}='{self.value}')>"


class Log(StoreBase):
    """A single logbook entry."""

    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    owner: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    logbooks: Mapped[list[Logbook]] = relationship(
        "Logbook", secondary="log_logbooks", back_populates="logs"
    )
    tags: Mapped[list[Tag]] = relationship("Tag", secondary="log_tags", back_populates="logs")
    properties: Mapped[list[LogProperty]] = relationship(
        "LogProperty", back_populates="log", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_logs_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<Log(id={self.id}, subject='{self.subject[:30]}')>"
