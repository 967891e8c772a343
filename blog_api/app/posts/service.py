"""Post Service for reading and writing blog posts through the GitHub Contents API."""

import base64
from contextlib import contextmanager
from typing import Iterator

import requests
from fastapi import Depends
from loguru import logger

from blog_api.app.github.client import ACCEPT_JSON, ACCEPT_RAW, GitHubClient
from blog_api.app.github.domains import GitHubResponse
from blog_api.app.posts.domains import (
    ContentTarget,
    PostCreateRequest,
    PostCreateResponse,
    PostUpdateRequest,
    PostUpdateResponse,
)
from blog_api.app.posts.exceptions import MissingFields
from blog_api.common.dependencies import get_settings
from blog_api.common.exceptions import ConfigurationError, TransportError, UpstreamProviderError
from blog_api.settings import Settings


def encode_content(text: str) -> str:
    """The Contents API takes file bodies base64 encoded."""
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


@contextmanager
def relay_github_errors(prefix: str) -> Iterator[None]:
    """
    Re-raise GitHub failures with a message saying which operation failed.
    GitHub's status and body ride along untouched.
    """
    try:
        yield
    except UpstreamProviderError as e:
        raise UpstreamProviderError(
            message=f'{prefix}: {e.message}',
            code=e.code,
            error_details=e.error_details,
        ) from e
    except requests.RequestException as e:
        raise TransportError(message=f'{prefix}: {e}') from e


class PostService:
    """Service for blog post content operations using the server held token."""

    def __init__(self, settings: Settings, github_client: GitHubClient):
        self.settings = settings
        self.github_client = github_client

    @classmethod
    def factory(cls, settings: Settings = Depends(get_settings)) -> 'PostService':
        """Factory method to create PostService instance."""
        return cls(settings=settings, github_client=GitHubClient(settings))

    def _require_credentials(self, operation: str) -> None:
        if not self.settings.has_content_credentials:
            logger.error(f'Server Error: GitHub credentials for {operation} not configured.')
            raise ConfigurationError(f'Server configuration error for {operation}.')

    def _contents_path(self, relative_path: str) -> str:
        return f'/repos/{self.settings.github_username}/{self.settings.repo_name}/contents/{relative_path}'

    def create_post(self, payload: PostCreateRequest) -> tuple[int, PostCreateResponse]:
        """
        Create a new post file.

        No sha is sent, so GitHub refuses to overwrite an existing file and
        that refusal is relayed to the caller.

        Returns:
            GitHub's status and the response body for the editor
        """
        self._require_credentials('post creation')

        missing = payload.get_missing_fields()
        if missing:
            logger.warning('[API /create-post] Missing fields', missing=missing)
            raise MissingFields('Missing required fields for creating post.')

        path = self._contents_path(f'{payload.target_dir}/{payload.file_name}')
        body = {'message': payload.commit_message, 'content': encode_content(payload.file_content)}

        with relay_github_errors('Failed to create post'):
            github_response = self.github_client.call('PUT', path, self.settings.github_token, body)

        logger.info('[API /create-post] Post created successfully on GitHub', file_name=payload.file_name)
        return github_response.status, PostCreateResponse(data=github_response.data)

    def update_post(self, payload: PostUpdateRequest) -> tuple[int, PostUpdateResponse]:
        """
        Overwrite an existing post file.

        The caller's sha must match the current blob or GitHub rejects the write.
        The new blob sha is returned so the editor can save again without refetching.
        """
        self._require_credentials('post update')

        missing = payload.get_missing_fields()
        if missing:
            logger.warning('[API /update-post] Missing fields', missing=missing)
            raise MissingFields(
                'Missing required fields for updating post (filePath, newContent, commitMessage, sha).'
            )

        path = self._contents_path(payload.file_path)
        body = {
            'message': payload.commit_message,
            'content': encode_content(payload.new_content),
            'sha': payload.sha,
        }

        with relay_github_errors('Failed to update post'):
            github_response = self.github_client.call('PUT', path, self.settings.github_token, body)

        data = github_response.data
        content = data.get('content') if isinstance(data, dict) else None
        new_sha = content.get('sha') if isinstance(content, dict) else None

        logger.info('[API /update-post] Post updated successfully on GitHub', file_path=payload.file_path)
        return github_response.status, PostUpdateResponse(data=data, new_sha=new_sha)

    def get_contents(self, target: ContentTarget) -> GitHubResponse:
        """
        Fetch a file or a folder listing.

        Markdown files come back as raw text, everything else as GitHub's JSON
        (file metadata or directory listing).
        """
        logger.info('[API /contents] GET', path=target.path, is_file=target.is_file)
        self._require_credentials('fetching content')

        accept_header = ACCEPT_RAW if target.is_markdown else ACCEPT_JSON
        with relay_github_errors('Failed to fetch from GitHub'):
            return self.github_client.call(
                'GET', self._contents_path(target.path), self.settings.github_token, accept_header=accept_header
            )
