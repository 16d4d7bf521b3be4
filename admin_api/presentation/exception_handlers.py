import admin_api.domain.exceptions as domexc
import admin_api.application.exceptions as appexc
from admin_api.common.exceptions import format_exception_string
from admin_api.presentation.schemas import AlertsResponse
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger('admin_api')

SYSTEM_ERROR_TEXT = "Internal Server Error"


def _alerts(status: int, *texts: str) -> JSONResponse:
    return JSONResponse(AlertsResponse.errors(*texts).model_dump(), status_code=status)


def register_exception_handlers(app):

    @app.exception_handler(appexc.AuthBaseException)
    async def auth_exception_handler(request, exc: appexc.AuthBaseException):
        mapping = {
            appexc.CredentialsException: 401,
            appexc.TokenExpiredException: 401,
        }
        status = mapping.get(type(exc), 401)
        return _alerts(status, str(exc))


    @app.exception_handler(domexc.ResourceException)
    async def resource_exception_handler(request, exc: domexc.ResourceException):
        mapping = {
            domexc.ApiErrorType.VALIDATION: 400,
            domexc.ApiErrorType.CONFLICT: 409,
            domexc.ApiErrorType.MISSING: 404,
            domexc.ApiErrorType.SYSTEM: 500,
        }
        status = mapping.get(exc.kind, 500)
        if status == 500:
            logger.error(format_exception_string(exc, source=f'{request.method} {request.url.path}',
                                                 comment='resource operation failed'))
            return _alerts(status, SYSTEM_ERROR_TEXT)
        if isinstance(exc, domexc.ResourceValidationError):
            return _alerts(status, *(str(e) for e in exc.errors))
        return _alerts(status, str(exc))


    @app.exception_handler(domexc.AccessException)
    async def access_exception_handler(request, exc: domexc.AccessException):
        mapping = {
            domexc.ResourceNotAuthorized: 403,
        }
        status = mapping.get(type(exc), 403)
        return _alerts(status, str(exc))
