import json
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import ValidationError
from starlette.requests import Request

from blog_api.common.domain import RequestDomain
from blog_api.common.exceptions import ClientInputError, format_validation_errors
from blog_api.settings import Settings

FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')

RequestDomainT = TypeVar('RequestDomainT', bound=RequestDomain)


def get_settings(request: Request) -> Settings:
    """
    Settings live on the app so tests can build a server with their own
    """
    return request.app.state.settings


async def read_body_fields(request: Request) -> Any:
    """
    Decode a JSON or form body into plain data.
    Empty bodies and unknown content types carry no fields.
    """
    content_type = request.headers.get('content-type', '').split(';')[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        # Uploaded files are not post fields
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw or (content_type and 'json' not in content_type):
        return {}

    try:
        return json.loads(raw)
    except ValueError as e:
        raise ClientInputError(
            error_details=[{'loc': ['body'], 'message': str(e), 'input': None, 'type': 'json_invalid'}]
        ) from e


def request_body(domain: type[RequestDomainT]) -> Callable[[Request], Awaitable[RequestDomainT]]:
    """
    Dependency that validates a JSON or form body with the given request domain

        payload: PostCreateRequest = Depends(request_body(PostCreateRequest))
    """

    async def parse_request_body(request: Request) -> RequestDomainT:
        fields = await read_body_fields(request)
        try:
            return domain.model_validate(fields)
        except ValidationError as e:
            raise ClientInputError(error_details=format_validation_errors(e.errors())) from e

    return parse_request_body
