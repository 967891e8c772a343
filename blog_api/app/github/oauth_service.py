"""GitHub OAuth Service for exchanging the editor's authorization code."""

from typing import Any

import requests
from fastapi import Depends
from loguru import logger

from blog_api.app.github.client import GitHubClient
from blog_api.app.github.domains import GitHubAuthResponse, GitHubUserSummary
from blog_api.app.github.exceptions import (
    MissingCode,
    OAuthExchangeFailed,
    OAuthProviderError,
    TokenMissing,
)
from blog_api.common.dependencies import get_settings
from blog_api.common.exceptions import ConfigurationError, UpstreamProviderError
from blog_api.settings import Settings


class GitHubOAuthService:
    """Handle the GitHub OAuth App code exchange for the blog editor.

    The flow is:
    1. Editor sends the user to GitHub's authorize page
    2. GitHub redirects back to the editor with a code
    3. Editor posts the code here, we exchange it for an access token
    4. We fetch the user's profile and hand token + profile back

    Nothing is persisted; the token lives with the editor.
    """

    def __init__(self, settings: Settings, github_client: GitHubClient):
        self.settings = settings
        self.github_client = github_client

    @classmethod
    def factory(cls, settings: Settings = Depends(get_settings)) -> 'GitHubOAuthService':
        """Factory method to create GitHubOAuthService instance."""
        return cls(settings=settings, github_client=GitHubClient(settings))

    def _log_configuration(self) -> None:
        # Presence only, secrets are never logged
        logger.info(
            '[Auth CB] OAuth configuration',
            client_id_set=bool(self.settings.github_oauth_client_id),
            client_secret_set=bool(self.settings.github_oauth_client_secret),
            redirect_uri=self.settings.github_oauth_redirect_uri,
        )

    def exchange_code(self, code: str | None) -> GitHubAuthResponse:
        """
        Exchange authorization code for access token and user summary.

        Args:
            code: The authorization code from GitHub

        Returns:
            GitHubAuthResponse with the token and minimal user info

        Raises:
            MissingCode: If no code was sent
            ConfigurationError: If the OAuth app is not configured
            OAuthProviderError: If GitHub rejected the code
            TokenMissing: If GitHub answered without a token
            OAuthExchangeFailed: Anything else that went wrong talking to GitHub
        """
        if not code:
            raise MissingCode()

        logger.info('[Auth CB] Received OAuth code. Exchanging for token...')
        self._log_configuration()

        if not self.settings.has_oauth_credentials:
            logger.error('[Auth CB] OAuth environment variables are not properly set.')
            raise ConfigurationError('Server OAuth configuration error.')

        try:
            token_data = self.request_access_token(code)

            if token_data.get('error'):
                description = token_data.get('error_description') or token_data.get('error')
                logger.error(
                    '[Auth CB] GitHub OAuth error',
                    error=token_data.get('error'),
                    description=token_data.get('error_description'),
                )
                raise OAuthProviderError(f'GitHub OAuth Error: {description}')

            access_token = token_data.get('access_token')
            if not access_token:
                logger.error('[Auth CB] Access token not received from GitHub.')
                raise TokenMissing()

            user = GitHubUserSummary.model_validate(self.get_user_info(access_token))
        except (OAuthProviderError, TokenMissing):
            raise
        except Exception as e:
            logger.exception('[Auth CB] Error during GitHub OAuth process')
            description = _provider_error_description(e)
            if description:
                raise OAuthExchangeFailed(f'GitHub API Error: {description}') from e
            raise OAuthExchangeFailed() from e

        logger.info('[Auth CB] User authenticated successfully', github_username=user.login)

        return GitHubAuthResponse(token=access_token, user=user)

    def request_access_token(self, code: str) -> dict[str, Any]:
        """
        POST the code to GitHub's token endpoint.

        GitHub reports bad codes with a 200 and an `error` field, so the body
        is returned as-is for the caller to inspect.
        """
        response = requests.post(
            self.settings.github_oauth_token_url,
            data={
                'client_id': self.settings.github_oauth_client_id,
                'client_secret': self.settings.github_oauth_client_secret,
                'code': code,
                'redirect_uri': self.settings.github_oauth_redirect_uri,
            },
            headers={'Accept': 'application/json', 'User-Agent': self.settings.github_user_agent},
            timeout=self.settings.github_timeout,
        )
        response.raise_for_status()

        token_data = response.json()
        logger.info(
            '[Auth CB] GitHub token response received',
            has_access_token=bool(token_data.get('access_token')),
            error=token_data.get('error'),
            scope=token_data.get('scope'),
        )
        return token_data

    def get_user_info(self, access_token: str) -> dict[str, Any]:
        """
        Fetch GitHub user details using access token.
        """
        return self.github_client.call('GET', '/user', access_token).data


def _provider_error_description(exc: Exception) -> str | None:
    """
    Pull GitHub's `error_description` out of a failed exchange, if it sent one
    """
    body: Any = None
    if isinstance(exc, UpstreamProviderError):
        body = exc.error_details
    elif isinstance(exc, requests.HTTPError) and exc.response is not None:
        try:
            body = exc.response.json()
        except ValueError:
            body = None

    if isinstance(body, dict):
        return body.get('error_description')
    return None
