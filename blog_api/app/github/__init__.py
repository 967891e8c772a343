from blog_api.app.github.client import ACCEPT_JSON, ACCEPT_RAW, GitHubClient
from blog_api.app.github.domains import (
    GitHubAuthResponse,
    GitHubCallbackRequest,
    GitHubResponse,
    GitHubUserSummary,
)
from blog_api.app.github.oauth_service import GitHubOAuthService

__all__ = [
    # Constants
    'ACCEPT_JSON',
    'ACCEPT_RAW',
    # Domains
    'GitHubResponse',
    'GitHubCallbackRequest',
    'GitHubUserSummary',
    'GitHubAuthResponse',
    # Services
    'GitHubClient',
    'GitHubOAuthService',
]
