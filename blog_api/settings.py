from decouple import Choices, Csv, config
from pydantic import BaseModel, ConfigDict

ENVIRONMENTS = ['local', 'testing', 'staging', 'production']

DEFAULT_CORS_ORIGINS = ('http://localhost:50011', 'https://note.hanks.kr')
DEFAULT_CORS_METHODS = ('GET', 'POST', 'PUT', 'DELETE', 'OPTIONS')
DEFAULT_CORS_HEADERS = ('Content-Type', 'Authorization')


class Settings(BaseModel):
    """
    Process wide configuration. Built once at startup and handed to the server,
    read-only afterwards.
    """

    model_config = ConfigDict(frozen=True)

    environment: str = 'local'
    debug: bool = False
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = 3003

    # Server held credentials for content operations
    github_token: str | None = None
    github_username: str | None = None
    repo_name: str | None = None

    # OAuth app used by the editor login
    github_oauth_client_id: str | None = None
    github_oauth_client_secret: str | None = None
    github_oauth_redirect_uri: str | None = None

    github_api_url: str = 'https://api.github.com'
    github_oauth_token_url: str = 'https://github.com/login/oauth/access_token'
    github_user_agent: str = 'MyBlogApp-Server/1.0'
    github_timeout: float | None = None

    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    cors_allowed_methods: tuple[str, ...] = DEFAULT_CORS_METHODS
    cors_allowed_headers: tuple[str, ...] = DEFAULT_CORS_HEADERS

    sentry_dsn: str | None = None

    @property
    def is_local(self) -> bool:
        return self.environment == 'local'

    @property
    def is_deployed_env(self) -> bool:
        return self.environment in ('staging', 'production')

    @property
    def has_content_credentials(self) -> bool:
        return bool(self.github_token and self.github_username and self.repo_name)

    @property
    def has_oauth_credentials(self) -> bool:
        return bool(
            self.github_oauth_client_id and self.github_oauth_client_secret and self.github_oauth_redirect_uri
        )


def _optional_float(value: str) -> float | None:
    return float(value) if value else None


def load_settings() -> Settings:
    """
    Read settings from the environment (or a .env file) exactly once
    """
    return Settings(
        environment=config('ENVIRONMENT', default='local', cast=Choices(ENVIRONMENTS)),
        debug=config('DEBUG', default=False, cast=bool),
        log_level=config('LOG_LEVEL', default='INFO'),
        host=config('HOST', default='0.0.0.0'),
        # PORT wins over the legacy HANDLER_PORT
        port=config('PORT', default=config('HANDLER_PORT', default=3003, cast=int), cast=int),
        github_token=config('GITHUB_TOKEN', default=None),
        github_username=config('GITHUB_USERNAME', default=None),
        repo_name=config('REPO_NAME', default=None),
        github_oauth_client_id=config('GITHUB_OAUTH_CLIENT_ID', default=None),
        github_oauth_client_secret=config('GITHUB_OAUTH_CLIENT_SECRET', default=None),
        github_oauth_redirect_uri=config('GITHUB_OAUTH_REDIRECT_URI', default=None),
        github_api_url=config('GITHUB_API_URL', default='https://api.github.com'),
        github_oauth_token_url=config(
            'GITHUB_OAUTH_TOKEN_URL', default='https://github.com/login/oauth/access_token'
        ),
        github_user_agent=config('GITHUB_USER_AGENT', default='MyBlogApp-Server/1.0'),
        github_timeout=config('GITHUB_TIMEOUT', default='', cast=_optional_float),
        cors_origins=config(
            'BACKEND_CORS_ORIGINS', default=','.join(DEFAULT_CORS_ORIGINS), cast=Csv(post_process=tuple)
        ),
        cors_allowed_methods=config(
            'CORS_ALLOWED_METHODS', default=','.join(DEFAULT_CORS_METHODS), cast=Csv(post_process=tuple)
        ),
        cors_allowed_headers=config(
            'CORS_ALLOWED_HEADERS', default=','.join(DEFAULT_CORS_HEADERS), cast=Csv(post_process=tuple)
        ),
        sentry_dsn=config('SENTRY_DSN', default=None),
    )
