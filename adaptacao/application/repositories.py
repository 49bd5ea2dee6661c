from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Generic, TypeVar

import structlog

from ..domain.entities import Adaptation, Record, Report, Role, Student, User
from ..domain.errors import NotFound
from .dto import AdaptationCreate, ReportCreate, StudentCreate
from .ports import IRecordBackend

logger = structlog.get_logger()

R = TypeVar("R", bound=Record)


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def today() -> str:
    return date.today().isoformat()


class RecordRepository(Generic[R]):
    """CRUD over one collection of the backend.

    Subclasses name the collection, the model and the fields an update can
    never overwrite.
    """

    collection: str
    model: type[R]
    not_found = "Record not found"
    protected: tuple[str, ...] = ("id", "createdAt")

    def __init__(self, backend: IRecordBackend):
        self.backend = backend

    def _to_domain(self, doc: dict) -> R:
        return self.model.model_validate(doc)

    def list(self, student_id: str | None = None) -> list[R]:
        rows = [self._to_domain(doc) for doc in self.backend.list(self.collection, student_id)]
        return sorted(rows, key=lambda r: r.created_at)

    def find(self, record_id: str, student_id: str | None = None) -> R | None:
        doc = self.backend.get(self.collection, record_id, student_id)
        return self._to_domain(doc) if doc else None

    def get(self, record_id: str, student_id: str | None = None) -> R:
        record = self.find(record_id, student_id)
        if record is None:
            raise NotFound(self.not_found)
        return record

    def _insert(self, doc: dict) -> R:
        doc.update(id=new_id(), createdAt=utc_now())
        record = self._to_domain(doc)
        self.backend.save(self.collection, record.to_document())
        return record

    def _merge(self, record_id: str, student_id: str | None, changes: dict, **stamps) -> R:
        existing = self.get(record_id, student_id)
        doc = existing.to_document()
        doc.update({k: v for k, v in changes.items() if k not in self.protected})
        doc.update(id=existing.id, updatedAt=utc_now(), **stamps)
        record = self._to_domain(doc)
        self.backend.save(self.collection, record.to_document())
        return record

    def delete(self, record_id: str, student_id: str | None = None) -> None:
        if not self.backend.delete(self.collection, record_id, student_id):
            raise NotFound(self.not_found)


class StudentRepository(RecordRepository[Student]):
    collection = "students"
    model = Student
    not_found = "Student not found"
    protected = ("id", "createdAt", "createdBy")

    def create(self, data: StudentCreate, actor: User) -> Student:
        doc = data.changes()
        doc["createdBy"] = actor.id
        return self._insert(doc)

    def update(self, student_id: str, changes: dict, actor: User) -> Student:
        return self._merge(student_id, None, changes, updatedBy=actor.id)

    def delete(self, record_id: str, student_id: str | None = None) -> None:
        super().delete(record_id)
        # independent deletes, a failure half way leaves orphans behind
        purged = 0
        for collection in ("adaptations", "reports"):
            for doc in self.backend.list(collection, record_id):
                purged += self.backend.delete(collection, doc["id"], record_id)
        logger.info("student_cascade_purged", student_id=record_id, purged=purged)


class AdaptationRepository(RecordRepository[Adaptation]):
    collection = "adaptations"
    model = Adaptation
    not_found = "Adaptation not found"
    protected = ("id", "studentId", "createdAt", "createdBy")

    def create(self, data: AdaptationCreate, actor: User) -> Adaptation:
        doc = data.changes()
        doc.setdefault("date", today())
        doc["createdBy"] = actor.id
        return self._insert(doc)

    def update(self, adaptation_id: str, student_id: str | None, changes: dict) -> Adaptation:
        return self._merge(adaptation_id, student_id, changes)


class ReportRepository(RecordRepository[Report]):
    collection = "reports"
    model = Report
    not_found = "Report not found"
    protected = ("id", "studentId", "teacherId", "teacherName", "createdAt")

    def create(self, data: ReportCreate, author: User) -> Report:
        doc = data.changes()
        doc.setdefault("date", today())
        doc.update(teacherId=author.id, teacherName=author.name)
        return self._insert(doc)

    def update(self, report_id: str, student_id: str | None, changes: dict) -> Report:
        return self._merge(report_id, student_id, changes)


class UserRepository:
    collection = "users"

    def __init__(self, backend: IRecordBackend):
        self.backend = backend

    def get(self, user_id: str) -> User | None:
        doc = self.backend.get(self.collection, user_id)
        return User.from_document(doc) if doc else None

    def get_by_email(self, email: str) -> User | None:
        for doc in self.backend.list(self.collection):
            if doc["email"] == email:
                return User.from_document(doc)
        return None

    def list(self) -> list[User]:
        return [User.from_document(doc) for doc in self.backend.list(self.collection)]

    def create(self, email: str, name: str, role: Role) -> User:
        user = User(id=new_id(), email=email, name=name, role=role)
        self.backend.save(self.collection, user.to_document())
        return user
