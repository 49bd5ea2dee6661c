"""The two storage variants behind IRecordBackend.

JsonDocumentBackend keeps whole collections as JSON arrays under namespaced
keys of one document. KeyValueBackend keeps one key per record in a
key-value store, with student-owned records grouped under the student id.
"""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import structlog

from ..application.ports import IKeyValueStore, IRecordBackend
from ..domain.errors import StorageError

logger = structlog.get_logger()

NAMESPACE = "adaptacao_"
STUDENT_SCOPED = {"adaptations", "reports"}


def _matches(doc: dict, record_id: str, student_id: str | None) -> bool:
    return doc.get("id") == record_id and (student_id is None or doc.get("studentId") == student_id)


class JsonDocumentBackend(IRecordBackend):
    """Local variant; in memory when no path is given."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self._memory: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        if self.path is None:
            return copy.deepcopy(self._memory)
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("local_document_unreadable", path=str(self.path), error=str(e))
            raise StorageError("Local data could not be read") from e

    def dump(self, doc: dict[str, Any]) -> None:
        if self.path is None:
            self._memory = copy.deepcopy(doc)
            return
        try:
            self.path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("local_document_unwritable", path=str(self.path), error=str(e))
            raise StorageError("Local data could not be saved") from e

    @staticmethod
    def _key(collection: str) -> str:
        return f"{NAMESPACE}{collection}"

    def list(self, collection: str, student_id: str | None = None) -> list[dict]:
        rows = self.load().get(self._key(collection), [])
        if student_id is not None:
            rows = [r for r in rows if r.get("studentId") == student_id]
        return rows

    def get(self, collection: str, record_id: str, student_id: str | None = None) -> dict | None:
        for doc in self.list(collection):
            if _matches(doc, record_id, student_id):
                return doc
        return None

    def save(self, collection: str, record: dict) -> None:
        doc = self.load()
        rows = doc.setdefault(self._key(collection), [])
        for i, existing in enumerate(rows):
            if existing.get("id") == record["id"]:
                rows[i] = record
                break
        else:
            rows.append(record)
        self.dump(doc)

    def delete(self, collection: str, record_id: str, student_id: str | None = None) -> bool:
        doc = self.load()
        rows = doc.get(self._key(collection), [])
        kept = [r for r in rows if not _matches(r, record_id, student_id)]
        if len(kept) == len(rows):
            return False
        doc[self._key(collection)] = kept
        self.dump(doc)
        return True

    # single values outside the collections (the session slot)

    def get_value(self, key: str) -> Any | None:
        return self.load().get(key)

    def set_value(self, key: str, value: Any) -> None:
        doc = self.load()
        doc[key] = value
        self.dump(doc)

    def remove_value(self, key: str) -> None:
        doc = self.load()
        if doc.pop(key, None) is not None:
            self.dump(doc)

    def reset(self) -> None:
        doc = self.load()
        self.dump({k: v for k, v in doc.items() if not k.startswith(NAMESPACE)})
        logger.info("local_data_reset")


class KeyValueBackend(IRecordBackend):
    """Remote variant: ``student:{id}``, ``adaptation:{studentId}:{id}``, ..."""

    prefixes = {
        "students": "student",
        "users": "user",
        "adaptations": "adaptation",
        "reports": "report",
    }

    def __init__(self, kv: IKeyValueStore):
        self.kv = kv

    def _key(self, collection: str, record_id: str, student_id: str | None) -> str:
        prefix = self.prefixes[collection]
        if collection in STUDENT_SCOPED:
            return f"{prefix}:{student_id}:{record_id}"
        return f"{prefix}:{record_id}"

    def _scope(self, collection: str, student_id: str | None) -> str:
        prefix = f"{self.prefixes[collection]}:"
        if collection in STUDENT_SCOPED and student_id is not None:
            prefix += f"{student_id}:"
        return prefix

    def list(self, collection: str, student_id: str | None = None) -> list[dict]:
        return self.kv.get_by_prefix(self._scope(collection, student_id))

    def get(self, collection: str, record_id: str, student_id: str | None = None) -> dict | None:
        if collection in STUDENT_SCOPED and student_id is None:
            return next((doc for doc in self.list(collection) if doc.get("id") == record_id), None)
        return self.kv.get(self._key(collection, record_id, student_id))

    def save(self, collection: str, record: dict) -> None:
        self.kv.set(self._key(collection, record["id"], record.get("studentId")), record)

    def delete(self, collection: str, record_id: str, student_id: str | None = None) -> bool:
        doc = self.get(collection, record_id, student_id)
        if doc is None:
            return False
        self.kv.delete(self._key(collection, record_id, doc.get("studentId")))
        return True
