from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    COORDINATOR = "coordenador"
    TEACHER = "professor"


class ReportResult(str, Enum):
    POSITIVE = "positivo"
    NEUTRAL = "neutro"
    NEGATIVE = "negativo"


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    role: Role = Role.TEACHER

    @property
    def is_coordinator(self) -> bool:
        return self.role == Role.COORDINATOR

    def to_document(self) -> dict:
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role.value}

    @classmethod
    def from_document(cls, doc: dict) -> User:
        return cls(id=doc["id"], email=doc["email"], name=doc.get("name", ""), role=Role(doc["role"]))


class Record(BaseModel):
    """Stored record; camelCase on the wire and in storage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    created_at: str
    updated_at: str | None = None

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Student(Record):
    name: str
    course: str
    class_: str = Field(alias="class")
    birth_date: str
    registration_number: str
    guardian_name: str | None = None
    guardian_contact: str | None = None
    created_by: str
    updated_by: str | None = None


class Adaptation(Record):
    student_id: str
    description: str
    justification: str
    date: str
    created_by: str


class Report(Record):
    student_id: str
    teacher_id: str
    teacher_name: str
    subject: str
    date: str
    result: ReportResult = ReportResult.NEUTRAL
    description: str


class StudentReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    student: Student
    adaptations: list[Adaptation] = []
    reports: list[Report] = []
