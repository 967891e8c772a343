"""Blog post routes: create, update and read through GitHub."""

from fastapi import APIRouter, Depends, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from blog_api.app.posts.domains import (
    ContentTarget,
    PostCreateRequest,
    PostCreateResponse,
    PostUpdateRequest,
    PostUpdateResponse,
)
from blog_api.app.posts.service import PostService
from blog_api.common.dependencies import request_body

router = APIRouter()


@router.post('/create-post')
def create_post(
    response: Response,
    payload: PostCreateRequest = Depends(request_body(PostCreateRequest)),
    post_service: PostService = Depends(PostService.factory),
) -> PostCreateResponse:
    status_code, result = post_service.create_post(payload)
    response.status_code = status_code
    return result


@router.post('/update-post')
def update_post(
    response: Response,
    payload: PostUpdateRequest = Depends(request_body(PostUpdateRequest)),
    post_service: PostService = Depends(PostService.factory),
) -> PostUpdateResponse:
    status_code, result = post_service.update_post(payload)
    response.status_code = status_code
    return result


def _relay_contents(post_service: PostService, target: ContentTarget) -> Response:
    github_response = post_service.get_contents(target)
    if target.is_markdown:
        return PlainTextResponse(
            content=github_response.data,
            status_code=github_response.status,
            media_type='text/plain; charset=utf-8',
        )
    return JSONResponse(content=jsonable_encoder(github_response.data), status_code=github_response.status)


@router.get('/github/contents/{folder}/{filename}')
def get_file_contents(
    folder: str,
    filename: str,
    post_service: PostService = Depends(PostService.factory),
) -> Response:
    """Single file: raw text for markdown, JSON metadata otherwise."""
    return _relay_contents(post_service, ContentTarget.for_file(folder, filename))


@router.get('/github/contents/{folder}')
def get_folder_contents(
    folder: str,
    post_service: PostService = Depends(PostService.factory),
) -> Response:
    """Directory listing as JSON."""
    return _relay_contents(post_service, ContentTarget.for_folder(folder))
