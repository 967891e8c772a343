from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

LIVENESS_MESSAGE = 'Blog API Server is up and running!'


@router.get('/', response_class=PlainTextResponse)
def status_get() -> str:
    """
    Fast check to ensure API is running.
    The editor and uptime checks hit this, keep the body stable.
    """
    return LIVENESS_MESSAGE
