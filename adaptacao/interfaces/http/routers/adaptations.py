from fastapi import APIRouter, Body, Depends

from ....application.records import RecordsService
from ....domain.entities import User
from ..authz import get_identity, get_reader, get_service
from ..schemas import AdaptationEnvelope, AdaptationList, SuccessResp

router = APIRouter(prefix="/adaptations", tags=["adaptations"])


@router.get("/{student_id}", response_model=AdaptationList, response_model_exclude_none=True)
def list_adaptations(student_id: str,
                     identity: User = Depends(get_reader),
                     service: RecordsService = Depends(get_service)):
    return {"adaptations": service.list_adaptations(identity, student_id)}


# --- coordinator-only CRUD:

@router.post("", response_model=AdaptationEnvelope, response_model_exclude_none=True)
def create_adaptation(payload: dict = Body(...),
                      identity: User = Depends(get_identity),
                      service: RecordsService = Depends(get_service)):
    return {"adaptation": service.create_adaptation(identity, payload)}


@router.put("/{student_id}/{adaptation_id}", response_model=AdaptationEnvelope, response_model_exclude_none=True)
def update_adaptation(student_id: str, adaptation_id: str,
                      payload: dict = Body(...),
                      identity: User = Depends(get_identity),
                      service: RecordsService = Depends(get_service)):
    return {"adaptation": service.update_adaptation(identity, student_id, adaptation_id, payload)}


@router.delete("/{student_id}/{adaptation_id}", response_model=SuccessResp)
def delete_adaptation(student_id: str, adaptation_id: str,
                      identity: User = Depends(get_identity),
                      service: RecordsService = Depends(get_service)):
    service.delete_adaptation(identity, student_id, adaptation_id)
    return SuccessResp()
