from fastapi import APIRouter, Body, Depends

from ....application.records import RecordsService
from ....domain.entities import User
from ..authz import get_identity, get_reader, get_service
from ..schemas import ReportEnvelope, ReportList, SuccessResp

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/{student_id}", response_model=ReportList, response_model_exclude_none=True)
def list_reports(student_id: str,
                 identity: User = Depends(get_reader),
                 service: RecordsService = Depends(get_service)):
    return {"reports": service.list_reports(identity, student_id)}


@router.post("", response_model=ReportEnvelope, response_model_exclude_none=True)
def create_report(payload: dict = Body(...),
                  identity: User = Depends(get_identity),
                  service: RecordsService = Depends(get_service)):
    # teacherId/teacherName always come from the token, never from the body
    return {"report": service.create_report(identity, payload)}


# --- author-only changes:

@router.put("/{student_id}/{report_id}", response_model=ReportEnvelope, response_model_exclude_none=True)
def update_report(student_id: str, report_id: str,
                  payload: dict = Body(...),
                  identity: User = Depends(get_identity),
                  service: RecordsService = Depends(get_service)):
    return {"report": service.update_report(identity, student_id, report_id, payload)}


@router.delete("/{student_id}/{report_id}", response_model=SuccessResp)
def delete_report(student_id: str, report_id: str,
                  identity: User = Depends(get_identity),
                  service: RecordsService = Depends(get_service)):
    service.delete_report(identity, student_id, report_id)
    return SuccessResp()
