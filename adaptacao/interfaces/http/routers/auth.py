from fastapi import APIRouter, Body, Depends, Request

from ....application.ports import IKeyValueStore
from ....application.records import RecordsService
from ....application.use_cases.register_user import RegisterUser
from ....application.use_cases.sign_in import SignIn
from ....domain.entities import User
from ....infrastructure.kv_store import get_kv_store
from ....infrastructure.repositories import KvCredentialRepository
from ....infrastructure.security import PasswordHasher, create_access_token
from ..authz import get_identity, get_service
from ..rate_limit import LOGIN_LIMIT, limiter, signup_limit
from ..schemas import LoginReq, TokenResp, UserEnvelope

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=UserEnvelope)
@limiter.limit(signup_limit)
def signup(
    request: Request,
    payload: dict = Body(...),
    service: RecordsService = Depends(get_service),
    kv: IKeyValueStore = Depends(get_kv_store),
):
    uc = RegisterUser(users=service.users, credentials=KvCredentialRepository(kv), hasher=PasswordHasher())
    user = uc.execute(payload)
    return {"user": user.to_document()}


@router.post("/login", response_model=TokenResp)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    payload: LoginReq,
    service: RecordsService = Depends(get_service),
    kv: IKeyValueStore = Depends(get_kv_store),
):
    user = SignIn(service.users, KvCredentialRepository(kv)).execute(str(payload.email), payload.password)
    # role goes into the token as well
    return TokenResp(access_token=create_access_token(sub=user.id, role=user.role.value))


@router.get("/me", response_model=UserEnvelope)
def me(identity: User = Depends(get_identity)):
    return {"user": identity.to_document()}
