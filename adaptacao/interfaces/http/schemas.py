from pydantic import BaseModel, EmailStr

from ...domain.entities import Adaptation, Report, Role, Student


class LoginReq(BaseModel):
    email: EmailStr
    password: str

class TokenResp(BaseModel):
    access_token: str
    token_type: str = "bearer"

class UserResp(BaseModel):
    id: str
    email: str
    name: str
    role: Role

class UserEnvelope(BaseModel):
    user: UserResp

class StudentEnvelope(BaseModel):
    student: Student

class StudentList(BaseModel):
    students: list[Student]

class AdaptationEnvelope(BaseModel):
    adaptation: Adaptation

class AdaptationList(BaseModel):
    adaptations: list[Adaptation]

class ReportEnvelope(BaseModel):
    report: Report

class ReportList(BaseModel):
    reports: list[Report]

class SuccessResp(BaseModel):
    success: bool = True
