from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from ...application.ports import IKeyValueStore
from ...application.records import RecordsService
from ...domain.entities import User
from ...domain.errors import NotFound, Unauthorized
from ...infrastructure.backends import KeyValueBackend
from ...infrastructure.kv_store import get_kv_store
from ...infrastructure.security import decode_token

# missing header is reported as 401 by get_user_id, not as HTTPBearer's own error
bearer = HTTPBearer(auto_error=False)


def get_backend(kv: IKeyValueStore = Depends(get_kv_store)) -> KeyValueBackend:
    return KeyValueBackend(kv)


def get_service(backend: KeyValueBackend = Depends(get_backend)) -> RecordsService:
    return RecordsService(backend)


def get_user_id(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str:
    if creds is None:
        raise Unauthorized("Not authenticated")
    try:
        return decode_token(creds.credentials)
    except JWTError:
        raise Unauthorized("Invalid token")


def get_identity(
    user_id: str = Depends(get_user_id),
    service: RecordsService = Depends(get_service),
) -> User:
    user = service.users.get(user_id)
    if user is None:
        raise NotFound("Profile not found")
    return user


def get_reader(
    user_id: str = Depends(get_user_id),
    service: RecordsService = Depends(get_service),
) -> User:
    """Reads only need a valid token; a missing profile reads with the lowest role."""
    return service.users.get(user_id) or User(id=user_id, email="", name="")
