from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from ..domain.entities import ReportResult, Role


class _Input(BaseModel):
    # unknown keys (id, createdAt, teacherId, ...) are dropped, never merged
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def changes(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)


class StudentCreate(_Input):
    name: str = Field(min_length=1)
    course: str = Field(min_length=1)
    class_: str = Field(min_length=1, alias="class")
    birth_date: str = Field(min_length=1)
    registration_number: str = Field(min_length=1)
    guardian_name: str | None = None
    guardian_contact: str | None = None


class StudentUpdate(_Input):
    # required fields may be left out, but not blanked
    name: str | None = Field(default=None, min_length=1)
    course: str | None = Field(default=None, min_length=1)
    class_: str | None = Field(default=None, min_length=1, alias="class")
    birth_date: str | None = Field(default=None, min_length=1)
    registration_number: str | None = Field(default=None, min_length=1)
    guardian_name: str | None = None
    guardian_contact: str | None = None


class AdaptationCreate(_Input):
    student_id: str = Field(min_length=1)
    description: str = Field(min_length=1)
    justification: str = Field(min_length=1)
    date: str | None = None


class AdaptationUpdate(_Input):
    description: str | None = Field(default=None, min_length=1)
    justification: str | None = Field(default=None, min_length=1)
    date: str | None = None


class ReportCreate(_Input):
    student_id: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    result: ReportResult = ReportResult.NEUTRAL
    description: str = Field(min_length=1)
    date: str | None = None


class ReportUpdate(_Input):
    subject: str | None = Field(default=None, min_length=1)
    result: ReportResult | None = None
    description: str | None = Field(default=None, min_length=1)
    date: str | None = None


class SignupInput(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Role
