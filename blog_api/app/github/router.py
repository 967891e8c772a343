"""GitHub API router for the editor's OAuth login."""

from fastapi import APIRouter, Depends

from blog_api.app.github.domains import GitHubAuthResponse, GitHubCallbackRequest
from blog_api.app.github.oauth_service import GitHubOAuthService
from blog_api.common.dependencies import request_body

router = APIRouter()


@router.post('/auth/github')
def github_callback(
    payload: GitHubCallbackRequest = Depends(request_body(GitHubCallbackRequest)),
    oauth_service: GitHubOAuthService = Depends(GitHubOAuthService.factory),
) -> GitHubAuthResponse:
    """Exchange the OAuth code for a token the editor keeps."""
    return oauth_service.exchange_code(payload.code)
