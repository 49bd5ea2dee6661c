from __future__ import annotations

from typing import Any, Mapping

from ..domain.entities import Adaptation, Report, Student, StudentReport, User
from .identity import FixedCredentialTable, initialize_default_users
from .records import RecordsService
from .use_cases.sign_in import SignIn

SESSION_KEY = "adaptacao_current_user"


class RecordsApi:
    """What the UI talks to. Every call returns the value or raises a RecordsError."""

    def sign_in(self, email: str, password: str) -> User: ...
    def sign_out(self) -> None: ...
    def current_user(self) -> User | None: ...

    def get_students(self) -> list[Student]: ...
    def create_student(self, data: Mapping[str, Any]) -> Student: ...
    def update_student(self, student_id: str, changes: Mapping[str, Any]) -> Student: ...
    def delete_student(self, student_id: str) -> None: ...

    def get_adaptations(self, student_id: str) -> list[Adaptation]: ...
    def create_adaptation(self, data: Mapping[str, Any]) -> Adaptation: ...
    def update_adaptation(self, student_id: str, adaptation_id: str, changes: Mapping[str, Any]) -> Adaptation: ...
    def delete_adaptation(self, student_id: str, adaptation_id: str) -> None: ...

    def get_reports(self, student_id: str) -> list[Report]: ...
    def create_report(self, data: Mapping[str, Any]) -> Report: ...
    def update_report(self, student_id: str, report_id: str, changes: Mapping[str, Any]) -> Report: ...
    def delete_report(self, student_id: str, report_id: str) -> None: ...

    def get_student_report(self, student_id: str) -> StudentReport: ...


class LocalRecordsApi(RecordsApi):
    """In-process variant over the JSON document backend.

    The signed-in user lives in the document's session slot, so it survives
    a new instance over the same file until ``sign_out``.
    """

    def __init__(self, backend, credentials=None):
        self.backend = backend
        self.service = RecordsService(backend)
        self._sign_in = SignIn(self.service.users, credentials or FixedCredentialTable())
        initialize_default_users(self.service.users)

    def sign_in(self, email: str, password: str) -> User:
        user = self._sign_in.execute(email, password)
        self.backend.set_value(SESSION_KEY, user.to_document())
        return user

    def sign_out(self) -> None:
        self.backend.remove_value(SESSION_KEY)

    def current_user(self) -> User | None:
        doc = self.backend.get_value(SESSION_KEY)
        return User.from_document(doc) if doc else None

    def reset(self) -> None:
        """Clear every namespaced key, then put the default profiles back."""
        self.backend.reset()
        initialize_default_users(self.service.users)

    def get_students(self) -> list[Student]:
        return self.service.list_students(self.current_user())

    def create_student(self, data: Mapping[str, Any]) -> Student:
        return self.service.create_student(self.current_user(), data)

    def update_student(self, student_id: str, changes: Mapping[str, Any]) -> Student:
        return self.service.update_student(self.current_user(), student_id, changes)

    def delete_student(self, student_id: str) -> None:
        self.service.delete_student(self.current_user(), student_id)

    def get_adaptations(self, student_id: str) -> list[Adaptation]:
        return self.service.list_adaptations(self.current_user(), student_id)

    def create_adaptation(self, data: Mapping[str, Any]) -> Adaptation:
        return self.service.create_adaptation(self.current_user(), data)

    def update_adaptation(self, student_id: str, adaptation_id: str, changes: Mapping[str, Any]) -> Adaptation:
        return self.service.update_adaptation(self.current_user(), student_id, adaptation_id, changes)

    def delete_adaptation(self, student_id: str, adaptation_id: str) -> None:
        self.service.delete_adaptation(self.current_user(), student_id, adaptation_id)

    def get_reports(self, student_id: str) -> list[Report]:
        return self.service.list_reports(self.current_user(), student_id)

    def create_report(self, data: Mapping[str, Any]) -> Report:
        return self.service.create_report(self.current_user(), data)

    def update_report(self, student_id: str, report_id: str, changes: Mapping[str, Any]) -> Report:
        return self.service.update_report(self.current_user(), student_id, report_id, changes)

    def delete_report(self, student_id: str, report_id: str) -> None:
        self.service.delete_report(self.current_user(), student_id, report_id)

    def get_student_report(self, student_id: str) -> StudentReport:
        return self.service.student_report(self.current_user(), student_id)
