import json
from typing import Any, Callable
from unittest import mock

import pytest
import requests

from blog_api.settings import Settings

TEST_GITHUB_TOKEN = 'server-pat'
TEST_GITHUB_USERNAME = 'octo'
TEST_REPO_NAME = 'blog'
TEST_API_URL = 'https://api.github.com'


@pytest.fixture(autouse=True)
def no_network_access():
    """
    Tests should never reach GitHub for real
    """
    with mock.patch(
        'requests.sessions.Session.send',
        side_effect=Exception('🛑 Network access attempted! 🛑\n Not permitted during tests!'),
    ):
        yield


@pytest.fixture(scope='function')
def settings() -> Settings:
    """
    Fully configured settings, no process environment involved
    """
    return Settings(
        environment='testing',
        github_token=TEST_GITHUB_TOKEN,
        github_username=TEST_GITHUB_USERNAME,
        repo_name=TEST_REPO_NAME,
        github_oauth_client_id='client-id',
        github_oauth_client_secret='client-secret',
        github_oauth_redirect_uri='https://note.example.com/auth/callback',
        github_api_url=TEST_API_URL,
    )


@pytest.fixture(scope='function')
def unconfigured_settings() -> Settings:
    return Settings(environment='testing')


def build_github_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str | None = None,
    content_type: str | None = None,
) -> requests.Response:
    """
    A real requests.Response as GitHub would send it back
    """
    response = requests.Response()
    response.status_code = status_code
    response.encoding = 'utf-8'
    if json_data is not None:
        response._content = json.dumps(json_data).encode('utf-8')
        response.headers['Content-Type'] = content_type or 'application/json; charset=utf-8'
    else:
        response._content = (text or '').encode('utf-8')
        response.headers['Content-Type'] = content_type or 'text/plain; charset=utf-8'
    return response


@pytest.fixture(scope='function')
def github_response() -> Callable[..., requests.Response]:
    """
    Fixture that builds fake GitHub responses
    def sample_test(github_response, mock_github_request):
        mock_github_request.return_value = github_response(201, {'content': {'sha': 'abc'}})
    """
    return build_github_response


@pytest.fixture(scope='function')
def mock_github_request():
    """
    Every GitHubClient call goes through requests.request
    """
    with mock.patch('blog_api.app.github.client.requests.request') as mocked:
        yield mocked


@pytest.fixture(scope='function')
def mock_token_post():
    """
    The OAuth token exchange goes through requests.post
    """
    with mock.patch('blog_api.app.github.oauth_service.requests.post') as mocked:
        yield mocked
