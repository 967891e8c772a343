import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.common import context


def get_user_ip_address_from_header(forwarded_header: str | None) -> str:
    """
    Expects the result of "x-forwarded-for" which will be
    a list of IPs separated by a ',' accounting for all
    proxy servers encountered
    """
    user_ip = forwarded_header.split(',')[0] if forwarded_header else ''
    return user_ip.strip()


def _get_additional_request_log_meta(request: Request, start_time: float) -> dict:
    return dict(
        endpoint=request.url.path,
        user_agent=request.headers.get('user-agent', 'unknown'),
        duration=round((time.time() - start_time), 3),
        http_method=request.method,
        user_ip=get_user_ip_address_from_header(request.headers.get('x-forwarded-for')),
        client_host=request.client.host if request.client else '',
    )


def _get_request_id(request: Request) -> str:
    # Set by the reverse proxy when there is one
    return request.headers.get('X-Request-ID', str(uuid.uuid4()))


class RequestResponseMiddleware(BaseHTTPMiddleware):
    """
    Inject request id to context and log every response with its duration
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.time()
        request_id = _get_request_id(request)
        token = context.set_request_id(request_id)

        try:
            with logger.contextualize(request_id=request_id):
                response = await call_next(request)

                level = response.status_code // 100
                if level == 4:
                    log_level = logger.warning
                elif level == 5:
                    log_level = logger.error
                else:
                    log_level = logger.info

                log_level(
                    '{} {} {}',
                    request.method.upper(),
                    request.url.path,
                    response.status_code,
                    http_status_code=response.status_code,
                    **_get_additional_request_log_meta(request, start_time=start_time),
                )
        finally:
            context.reset(token)

        response.headers['X-Request-ID'] = request_id
        return response
