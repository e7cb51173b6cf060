"""
Key-value backends for collection data and session tokens.

Supports an in-memory implementation for tests/local runs, a Redis-backed
implementation for production and a SQLAlchemy-backed one for a local
durable file (SQLite) or Postgres.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol

import redis
from sqlalchemy import Column, Float, String, Text, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class KeyValueStore(Protocol):
    """Minimal string key-value interface with optional expiry."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


@dataclass
class InMemoryKeyValueStore:
    """Dict-backed store for testing/dev."""

    clock: Callable[[], float] = time.time
    entries: Dict[str, tuple[str, Optional[float]]] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.clock() >= expires_at:
            del self.entries[key]
            return None
        return value

    def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        expires_at = self.clock() + ttl_seconds if ttl_seconds else None
        self.entries[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self.entries.pop(key, None)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.entries.clear()


@dataclass
class RedisKeyValueStore:
    """Redis-backed store; TTLs map onto native key expiry."""

    url: str
    key_prefix: str = "wotc:"

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(self._key(key))
        if value is None:
            return None
        return value.decode("utf-8")

    def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self.client.set(self._key(key), value, ex=ttl_seconds or None)

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))


Base = declarative_base()


class KeyValueRow(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    expires_at = Column(Float, nullable=True)
    updated_at = Column(Float, nullable=False)


class SqlKeyValueStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite).
    """

    def __init__(self, database_url: str, clock: Callable[[], float] = time.time):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlKeyValueStore")
        self.clock = clock
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def get(self, key: str) -> Optional[str]:
        with self.Session() as session:
            row = session.get(KeyValueRow, key)
            if not row:
                return None
            if row.expires_at is not None and self.clock() >= row.expires_at:
                session.delete(row)
                session.commit()
                return None
            return row.value

    def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        now = self.clock()
        expires_at = now + ttl_seconds if ttl_seconds else None
        with self.Session() as session:
            row = session.get(KeyValueRow, key)
            if row:
                row.value = value
                row.expires_at = expires_at
                row.updated_at = now
            else:
                session.add(
                    KeyValueRow(
                        key=key, value=value, expires_at=expires_at, updated_at=now
                    )
                )
            session.commit()

    def delete(self, key: str) -> None:
        with self.Session() as session:
            row = session.get(KeyValueRow, key)
            if row:
                session.delete(row)
                session.commit()
