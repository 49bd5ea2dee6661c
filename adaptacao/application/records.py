from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import structlog
from pydantic import BaseModel, ValidationError

from ..domain.entities import Adaptation, Report, Student, StudentReport, User
from ..domain.errors import ValidationFailed
from ..domain.policy import require_authenticated, require_coordinator, require_report_author
from .dto import (
    AdaptationCreate,
    AdaptationUpdate,
    ReportCreate,
    ReportUpdate,
    StudentCreate,
    StudentUpdate,
)
from .ports import IRecordBackend
from .repositories import AdaptationRepository, ReportRepository, StudentRepository, UserRepository

logger = structlog.get_logger()


def parse_input(model: type[BaseModel], payload: Mapping[str, Any] | BaseModel) -> Any:
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True, exclude_unset=True)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or "body"
        raise ValidationFailed(f"{field}: {first['msg']}") from e


def _date_key(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def newest_first(reports: list[Report]) -> list[Report]:
    return sorted(reports, key=lambda r: _date_key(r.date), reverse=True)


class RecordsService:
    """Authorization-gated operations on students, adaptations and reports.

    ``identity`` is the signed-in user of the current request (or session)
    and is passed to every call; ``None`` means anonymous. Payloads are
    validated only after the policy check passed, so a caller without the
    right role gets Forbidden whatever it sends.
    """

    def __init__(self, backend: IRecordBackend):
        self.students = StudentRepository(backend)
        self.adaptations = AdaptationRepository(backend)
        self.reports = ReportRepository(backend)
        self.users = UserRepository(backend)

    # --- students

    def list_students(self, identity: User | None) -> list[Student]:
        require_authenticated(identity)
        return self.students.list()

    def create_student(self, identity: User | None, payload: Mapping[str, Any]) -> Student:
        actor = require_coordinator(identity)
        student = self.students.create(parse_input(StudentCreate, payload), actor)
        logger.info("student_created", student_id=student.id, user_id=actor.id)
        return student

    def update_student(self, identity: User | None, student_id: str, payload: Mapping[str, Any]) -> Student:
        actor = require_coordinator(identity)
        changes = parse_input(StudentUpdate, payload).changes()
        student = self.students.update(student_id, changes, actor)
        logger.info("student_updated", student_id=student_id, user_id=actor.id)
        return student

    def delete_student(self, identity: User | None, student_id: str) -> None:
        actor = require_coordinator(identity)
        self.students.delete(student_id)
        logger.info("student_deleted", student_id=student_id, user_id=actor.id)

    # --- adaptations

    def list_adaptations(self, identity: User | None, student_id: str) -> list[Adaptation]:
        require_authenticated(identity)
        return self.adaptations.list(student_id)

    def create_adaptation(self, identity: User | None, payload: Mapping[str, Any]) -> Adaptation:
        actor = require_coordinator(identity)
        adaptation = self.adaptations.create(parse_input(AdaptationCreate, payload), actor)
        logger.info("adaptation_created", adaptation_id=adaptation.id, student_id=adaptation.student_id)
        return adaptation

    def update_adaptation(
        self, identity: User | None, student_id: str, adaptation_id: str, payload: Mapping[str, Any]
    ) -> Adaptation:
        require_coordinator(identity)
        changes = parse_input(AdaptationUpdate, payload).changes()
        adaptation = self.adaptations.update(adaptation_id, student_id, changes)
        logger.info("adaptation_updated", adaptation_id=adaptation_id, student_id=student_id)
        return adaptation

    def delete_adaptation(self, identity: User | None, student_id: str, adaptation_id: str) -> None:
        require_coordinator(identity)
        self.adaptations.delete(adaptation_id, student_id)
        logger.info("adaptation_deleted", adaptation_id=adaptation_id, student_id=student_id)

    # --- reports

    def list_reports(self, identity: User | None, student_id: str) -> list[Report]:
        require_authenticated(identity)
        return self.reports.list(student_id)

    def create_report(self, identity: User | None, payload: Mapping[str, Any]) -> Report:
        author = require_authenticated(identity)
        report = self.reports.create(parse_input(ReportCreate, payload), author)
        logger.info("report_created", report_id=report.id, student_id=report.student_id, teacher_id=author.id)
        return report

    def update_report(
        self, identity: User | None, student_id: str, report_id: str, payload: Mapping[str, Any]
    ) -> Report:
        require_authenticated(identity)
        require_report_author(identity, self.reports.get(report_id, student_id))
        changes = parse_input(ReportUpdate, payload).changes()
        report = self.reports.update(report_id, student_id, changes)
        logger.info("report_updated", report_id=report_id, student_id=student_id)
        return report

    def delete_report(self, identity: User | None, student_id: str, report_id: str) -> None:
        require_authenticated(identity)
        require_report_author(identity, self.reports.get(report_id, student_id))
        self.reports.delete(report_id, student_id)
        logger.info("report_deleted", report_id=report_id, student_id=student_id)

    # --- aggregate

    def student_report(self, identity: User | None, student_id: str) -> StudentReport:
        require_authenticated(identity)
        student = self.students.get(student_id)
        return StudentReport(
            student=student,
            adaptations=self.adaptations.list(student_id),
            reports=newest_first(self.reports.list(student_id)),
        )
