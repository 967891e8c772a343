from typing import Any

from pydantic import BaseModel, ConfigDict

from blog_api.common.domain import BaseDomain, RequestDomain


class GitHubResponse(BaseDomain):
    """Status and body exactly as GitHub returned them."""

    status: int
    data: Any = None


# API request/response domains
class GitHubCallbackRequest(RequestDomain):
    """Request payload for the editor's OAuth callback."""

    code: str | None = None  # OAuth authorization code


class GitHubUserSummary(BaseModel):
    # GitHub's own snake_case keys are kept on the wire
    model_config = ConfigDict(extra='ignore')

    login: str
    avatar_url: str | None = None
    name: str | None = None


class GitHubAuthResponse(BaseDomain):
    """Token handed straight back to the editor, never stored server side."""

    token: str
    user: GitHubUserSummary
    message: str = 'GitHub authentication successful.'
