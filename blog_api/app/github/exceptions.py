"""GitHub domain exceptions."""

from fastapi import status

from blog_api.common.exceptions import APIException, ClientInputError


class MissingCode(ClientInputError):
    default_detail = 'Authorization code is missing.'
    error_type = 'missing_code'


class OAuthProviderError(ClientInputError):
    """GitHub's token endpoint answered with an explicit error."""

    default_detail = 'GitHub OAuth Error'
    error_type = 'oauth_provider'


class TokenMissing(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Failed to retrieve access token from GitHub.'
    error_type = 'token_missing'


class OAuthExchangeFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'An error occurred during the GitHub authentication process.'
    error_type = 'oauth_exchange'
