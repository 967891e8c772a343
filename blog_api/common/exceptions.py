from typing import Any, Sequence

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


class APIException(Exception):
    """
    Every error the API hands back to a caller is one of these.
    Subclasses tag the failure kind and carry its default status/message.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Request.'
    error_type = 'invalid_request'

    def __init__(self, message: str | None = None, code: int | None = None, error_details: Any = None):
        self.message = message or self.default_detail
        self.code = code or self.status_code
        self.error_details = error_details
        super().__init__(self.message)

    def __str__(self) -> str:
        return f'{self.__class__.__name__}({self.message})'

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {'message': self.message}
        if self.error_details is not None:
            content['errorDetails'] = self.error_details
        return content


class ClientInputError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request body.'
    error_type = 'client_input'


class ConfigurationError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Server configuration error.'
    error_type = 'configuration'


class UpstreamProviderError(APIException):
    """
    GitHub answered with an error. Status, message and body are GitHub's.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'GitHub API request failed'
    error_type = 'upstream_provider'


class TransportError(APIException):
    """
    GitHub could not be reached at all, so there is no upstream status
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Could not reach GitHub.'
    error_type = 'transport'


class NotFoundRoute(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'API Endpoint Not Found'
    error_type = 'not_found_route'


DEFAULT_UNHANDLED_MESSAGE = 'An unexpected server error occurred.'


def to_response(exc: APIException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.code,
        content=jsonable_encoder(exc.to_content()),
    )


def unhandled_exception_response(exc: Exception) -> JSONResponse:
    code = getattr(exc, 'status_code', None)
    if not isinstance(code, int):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return to_response(APIException(message=str(exc) or DEFAULT_UNHANDLED_MESSAGE, code=code))


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """
    This catches tagged errors and is registered at the app level
    """
    log = logger.error if exc.code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
    log(
        '{} {} failed: {}',
        request.method,
        request.url.path,
        exc.message,
        error_type=exc.error_type,
        http_status_code=exc.code,
    )
    return to_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Routing misses. A known path with the wrong method is still "not found" for the editor.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        logger.warning(f'[404 Not Found] Path: {request.method} {request.url.path}')
        return to_response(NotFoundRoute())
    return to_response(APIException(message=str(exc.detail), code=exc.status_code))


def format_validation_errors(errors: Sequence[Any]) -> list[dict[str, Any]]:
    return [
        {
            'loc': error['loc'],
            'message': error['msg'],
            'input': error.get('input'),
            'type': error['type'],
        }
        for error in errors
    ]


async def inbound_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    This catches pydantic validation errors and is registered at the app level
    """
    details = format_validation_errors(exc.errors())
    logger.warning('{} {} rejected: invalid body', request.method, request.url.path, errors=len(details))
    return to_response(ClientInputError(error_details=details))


class UnhandledExceptionMiddleware(BaseHTTPMiddleware):
    """
    Last line of defense: whatever escaped the handlers still becomes a JSON body
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.opt(exception=exc).error(f'[Global Error Handler] Unhandled error: {exc!r}')
            return unhandled_exception_response(exc)
