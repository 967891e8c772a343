"""Unit tests for the post service, GitHub client mocked out."""

import base64
from unittest import mock

import pytest
import requests

from blog_api.app.github.client import ACCEPT_JSON, ACCEPT_RAW, GitHubClient
from blog_api.app.github.domains import GitHubResponse
from blog_api.app.posts.domains import ContentTarget, PostCreateRequest, PostUpdateRequest
from blog_api.app.posts.exceptions import MissingFields
from blog_api.app.posts.service import PostService, encode_content, relay_github_errors
from blog_api.common.exceptions import ConfigurationError, TransportError, UpstreamProviderError


@pytest.fixture(scope='function')
def github_client() -> mock.Mock:
    return mock.Mock(spec=GitHubClient)


@pytest.fixture(scope='function')
def post_service(settings, github_client) -> PostService:
    return PostService(settings=settings, github_client=github_client)


class TestEncodeContent:
    def test_hello(self):
        assert encode_content('Hello') == 'SGVsbG8='
        assert base64.b64decode(encode_content('Hello')).decode('utf-8') == 'Hello'

    def test_non_ascii_text_survives(self):
        text = '# 안녕하세요\n\nCafé ☕'
        assert base64.b64decode(encode_content(text)).decode('utf-8') == text


class TestContentTarget:
    @pytest.mark.parametrize(
        'filename, expected',
        [
            ('intro.md', True),
            ('INTRO.MD', True),
            ('intro.Md', True),
            ('intro.png', False),
            ('intro.md.bak', False),
            ('md', False),
        ],
    )
    def test_file_markdown_detection(self, filename: str, expected: bool):
        assert ContentTarget.for_file('posts', filename).is_markdown is expected

    def test_folder_is_never_markdown(self):
        target = ContentTarget.for_folder('notes.md')
        assert target.is_file is False
        assert target.is_markdown is False
        assert target.path == 'notes.md'

    def test_file_path_joins_folder_and_name(self):
        assert ContentTarget.for_file('posts', 'intro.md').path == 'posts/intro.md'


class TestRelayGitHubErrors:
    def test_upstream_error_gets_prefix_and_keeps_status(self):
        with pytest.raises(UpstreamProviderError) as exc_info:
            with relay_github_errors('Failed to create post'):
                raise UpstreamProviderError(message='Conflict', code=409, error_details={'message': 'Conflict'})

        assert exc_info.value.code == 409
        assert exc_info.value.message == 'Failed to create post: Conflict'
        assert exc_info.value.error_details == {'message': 'Conflict'}

    def test_transport_error_becomes_500(self):
        with pytest.raises(TransportError) as exc_info:
            with relay_github_errors('Failed to update post'):
                raise requests.ConnectionError('connection refused')

        assert exc_info.value.code == 500
        assert exc_info.value.message == 'Failed to update post: connection refused'
        assert exc_info.value.error_details is None


class TestPostService:
    def test_create_post_checks_credentials_before_fields(self, unconfigured_settings, github_client):
        service = PostService(settings=unconfigured_settings, github_client=github_client)

        with pytest.raises(ConfigurationError):
            service.create_post(PostCreateRequest())

        github_client.call.assert_not_called()

    def test_create_post(self, post_service, github_client):
        github_client.call.return_value = GitHubResponse(status=201, data={'content': {'sha': 'abc'}})

        status_code, result = post_service.create_post(
            PostCreateRequest(target_dir='posts', file_name='a.md', commit_message='add', file_content='Hello')
        )

        assert status_code == 201
        assert result.data == {'content': {'sha': 'abc'}}
        github_client.call.assert_called_once_with(
            'PUT',
            '/repos/octo/blog/contents/posts/a.md',
            'server-pat',
            {'message': 'add', 'content': 'SGVsbG8='},
        )

    def test_create_post_missing_fields(self, post_service, github_client):
        with pytest.raises(MissingFields) as exc_info:
            post_service.create_post(PostCreateRequest(target_dir='posts', file_name='a.md'))

        assert exc_info.value.code == 400
        github_client.call.assert_not_called()

    def test_update_post_extracts_new_sha(self, post_service, github_client):
        github_client.call.return_value = GitHubResponse(status=200, data={'content': {'sha': 'new'}})

        status_code, result = post_service.update_post(
            PostUpdateRequest(file_path='posts/a.md', new_content='Hi', commit_message='edit', sha='old')
        )

        assert status_code == 200
        assert result.new_sha == 'new'
        assert result.model_dump(by_alias=True)['newSha'] == 'new'
        body = github_client.call.call_args.args[3]
        assert body == {'message': 'edit', 'content': encode_content('Hi'), 'sha': 'old'}

    def test_update_post_requires_sha(self, post_service, github_client):
        with pytest.raises(MissingFields):
            post_service.update_post(
                PostUpdateRequest(file_path='posts/a.md', new_content='Hi', commit_message='edit')
            )

        github_client.call.assert_not_called()

    def test_get_contents_picks_accept_header(self, post_service, github_client):
        github_client.call.return_value = GitHubResponse(status=200, data='# Hi')

        post_service.get_contents(ContentTarget.for_file('posts', 'a.md'))
        assert github_client.call.call_args.kwargs['accept_header'] == ACCEPT_RAW

        post_service.get_contents(ContentTarget.for_folder('posts'))
        assert github_client.call.call_args.kwargs['accept_header'] == ACCEPT_JSON
        assert github_client.call.call_args.args[1] == '/repos/octo/blog/contents/posts'
