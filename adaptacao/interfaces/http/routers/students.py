from fastapi import APIRouter, Body, Depends

from ....application.records import RecordsService
from ....domain.entities import StudentReport, User
from ..authz import get_identity, get_reader, get_service
from ..schemas import StudentEnvelope, StudentList, SuccessResp

router = APIRouter(tags=["students"])


@router.get("/students", response_model=StudentList, response_model_exclude_none=True)
def list_students(identity: User = Depends(get_reader), service: RecordsService = Depends(get_service)):
    return {"students": service.list_students(identity)}


# --- coordinator-only CRUD:

@router.post("/students", response_model=StudentEnvelope, response_model_exclude_none=True)
def create_student(payload: dict = Body(...),
                   identity: User = Depends(get_identity),
                   service: RecordsService = Depends(get_service)):
    return {"student": service.create_student(identity, payload)}


@router.put("/students/{student_id}", response_model=StudentEnvelope, response_model_exclude_none=True)
def update_student(student_id: str,
                   payload: dict = Body(...),
                   identity: User = Depends(get_identity),
                   service: RecordsService = Depends(get_service)):
    return {"student": service.update_student(identity, student_id, payload)}


@router.delete("/students/{student_id}", response_model=SuccessResp)
def delete_student(student_id: str,
                   identity: User = Depends(get_identity),
                   service: RecordsService = Depends(get_service)):
    # adaptations and reports of the student go with it
    service.delete_student(identity, student_id)
    return SuccessResp()


# --- full student report (student + adaptations + reports, newest first)

@router.get("/student-report/{student_id}", response_model=StudentReport, response_model_exclude_none=True)
def student_report(student_id: str,
                   identity: User = Depends(get_reader),
                   service: RecordsService = Depends(get_service)):
    return service.student_report(identity, student_id)
