from __future__ import annotations

import json
import re
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import redis
import structlog
from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..application.ports import IKeyValueStore
from ..config import settings
from ..domain.errors import StorageError
from . import db
from .metrics import kv_errors_total, kv_operations_total
from .models import Base, KVEntry

logger = structlog.get_logger()

_GLOB_CHARS = re.compile(r"([*?\[\]\\])")


@contextmanager
def _guarded(driver: str, operation: str, errors: tuple[type[Exception], ...]) -> Iterator[None]:
    kv_operations_total.labels(driver=driver, operation=operation).inc()
    try:
        yield
    except errors as e:
        kv_errors_total.labels(driver=driver).inc()
        logger.error("kv_operation_failed", driver=driver, operation=operation, error=str(e))
        raise StorageError("Storage is unavailable") from e


class RedisKeyValueStore(IKeyValueStore):
    """JSON values in plain Redis strings, prefix lookups through SCAN."""

    driver = "redis"

    def __init__(self, client: Optional[redis.Redis] = None, url: str | None = None):
        self._client = client
        self._url = url or settings.REDIS_URL

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self._url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        return self._client

    def get(self, key: str) -> Any | None:
        with _guarded(self.driver, "get", (redis.RedisError,)):
            raw = self.client.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        with _guarded(self.driver, "set", (redis.RedisError,)):
            self.client.set(key, json.dumps(value, ensure_ascii=False))

    def delete(self, key: str) -> None:
        with _guarded(self.driver, "delete", (redis.RedisError,)):
            self.client.delete(key)

    def get_by_prefix(self, prefix: str) -> list[Any]:
        pattern = _GLOB_CHARS.sub(r"\\\1", prefix) + "*"
        with _guarded(self.driver, "get_by_prefix", (redis.RedisError,)):
            keys = sorted(self.client.scan_iter(match=pattern))
            if not keys:
                return []
            values = self.client.mget(keys)
        return [json.loads(v) for v in values if v is not None]


class SqlKeyValueStore(IKeyValueStore):
    """Key/value table in any SQLAlchemy database (SQLite by default)."""

    driver = "sql"

    def __init__(self, engine: Engine | None = None):
        if engine is None:
            self.engine, self.Session = db.engine, db.SessionLocal
        else:
            self.engine = engine
            self.Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def create_schema(self) -> None:
        with _guarded(self.driver, "create_schema", (SQLAlchemyError,)):
            Base.metadata.create_all(bind=self.engine)

    def get(self, key: str) -> Any | None:
        with _guarded(self.driver, "get", (SQLAlchemyError,)), self.Session() as session:
            row = session.get(KVEntry, key)
            return row.value if row else None

    def set(self, key: str, value: Any) -> None:
        with _guarded(self.driver, "set", (SQLAlchemyError,)), self.Session() as session:
            session.merge(KVEntry(key=key, value=value))
            session.commit()

    def delete(self, key: str) -> None:
        with _guarded(self.driver, "delete", (SQLAlchemyError,)), self.Session() as session:
            session.execute(delete(KVEntry).where(KVEntry.key == key))
            session.commit()

    def get_by_prefix(self, prefix: str) -> list[Any]:
        stmt = (select(KVEntry.value)
                .where(KVEntry.key.startswith(prefix, autoescape=True))
                .order_by(KVEntry.key))
        with _guarded(self.driver, "get_by_prefix", (SQLAlchemyError,)), self.Session() as session:
            return list(session.scalars(stmt).all())


_store: Optional[IKeyValueStore] = None


def build_kv_store(kind: str | None = None) -> IKeyValueStore:
    kind = (kind or settings.KV_STORE).lower()
    if kind == "redis":
        return RedisKeyValueStore(url=settings.REDIS_URL)
    if kind == "sql":
        return SqlKeyValueStore()
    raise ValueError(f"Unknown KV_STORE {kind!r}, expected 'redis' or 'sql'")


def get_kv_store() -> IKeyValueStore:
    global _store
    if _store is None:
        _store = build_kv_store()
    return _store
