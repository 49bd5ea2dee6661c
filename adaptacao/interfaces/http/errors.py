import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from ...domain.errors import Forbidden, NotFound, RecordsError, Unauthorized, ValidationFailed

logger = structlog.get_logger()

STATUS_CODES = {
    Unauthorized: 401,
    Forbidden: 403,
    NotFound: 404,
    ValidationFailed: 400,
}


def status_for(exc: RecordsError) -> int:
    for error_class, status_code in STATUS_CODES.items():
        if isinstance(exc, error_class):
            return status_code
    return 500


async def records_error_handler(request: Request, exc: RecordsError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log("request_failed", method=request.method, path=request.url.path,
        status_code=status_code, error=exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})
