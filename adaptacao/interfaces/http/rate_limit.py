from slowapi import Limiter
from slowapi.util import get_remote_address

from ...config import settings

limiter = Limiter(key_func=get_remote_address)


def signup_limit() -> str:
    return f"{settings.RATE_LIMIT_PER_MINUTE}/minute"


# stricter for login (brute force)
LOGIN_LIMIT = "10/minute"
