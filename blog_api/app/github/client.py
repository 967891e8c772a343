"""GitHub REST API client used by every content operation."""

from typing import Any

import requests
from fastapi import Depends
from loguru import logger

from blog_api.app.github.domains import GitHubResponse
from blog_api.common.dependencies import get_settings
from blog_api.common.exceptions import UpstreamProviderError
from blog_api.settings import Settings

# The Contents API picks its representation from the Accept header
ACCEPT_JSON = 'application/vnd.github.v3+json'
ACCEPT_RAW = 'application/vnd.github.v3.raw'


class GitHubClient:
    """Issue a single call against the GitHub REST API and normalize failures."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @classmethod
    def factory(cls, settings: Settings = Depends(get_settings)) -> 'GitHubClient':
        """Factory method to create GitHubClient instance."""
        return cls(settings)

    def _get_headers(self, token: str | None, accept_header: str) -> dict[str, str]:
        """Get standard headers for GitHub API requests."""
        return {
            'Authorization': f'token {token}',
            'Accept': accept_header,
            'User-Agent': self.settings.github_user_agent,
        }

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        if 'json' in response.headers.get('Content-Type', ''):
            try:
                return response.json()
            except ValueError:
                pass
        # Raw media types come without a charset; post files are utf-8
        return response.content.decode('utf-8', errors='replace')

    def call(
        self,
        method: str,
        path: str,
        token: str | None,
        body: dict[str, Any] | None = None,
        accept_header: str = ACCEPT_JSON,
    ) -> GitHubResponse:
        """
        Call GitHub and hand back its status and body untouched.

        Args:
            method: HTTP verb
            path: API path starting with '/', e.g. /repos/{owner}/{repo}/contents/{path}
            token: token sent as the Authorization header
            body: JSON payload for writes
            accept_header: ACCEPT_JSON for metadata, ACCEPT_RAW for file bytes

        Returns:
            GitHubResponse with GitHub's status and decoded body

        Raises:
            UpstreamProviderError: GitHub answered with a non 2xx status
            requests.RequestException: GitHub could not be reached, raised unchanged
        """
        url = f'{self.settings.github_api_url}{path}'
        logger.info(
            '[GitHub API] Calling: {} {}',
            method,
            url,
            token_used=bool(token),
            accept=accept_header,
        )

        try:
            response = requests.request(
                method,
                url,
                json=body,
                headers=self._get_headers(token, accept_header),
                timeout=self.settings.github_timeout,
            )
        except requests.RequestException as e:
            logger.error('[GitHub API] Error for {} {}: {}', method, url, repr(e))
            raise

        data = self._parse_body(response)
        if not response.ok:
            logger.error(
                '[GitHub API] Error for {} {}',
                method,
                url,
                status=response.status_code,
                response=response.text,
            )
            message = data.get('message') if isinstance(data, dict) else None
            raise UpstreamProviderError(
                message=message or UpstreamProviderError.default_detail,
                code=response.status_code,
                error_details=data,
            )

        return GitHubResponse(status=response.status_code, data=data)
