"""
Request scoped context used by the log formatters
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar('_request_id', default=None)


def set_request_id(request_id: str) -> Token[str | None]:
    return _request_id.set(request_id)


def reset(token: Token[str | None]) -> None:
    _request_id.reset(token)


def get_safe_request_id() -> str | None:
    """
    safely accessible at anypoint in application lifecycle
    """
    return _request_id.get()
