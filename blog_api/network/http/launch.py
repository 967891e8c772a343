from blog_api import setup
from blog_api.settings import load_settings

settings = load_settings()
setup.run(settings)

from blog_api.network.http.server import create_server  # noqa: E402

# Imported by uvicorn, e.g. `uvicorn blog_api.network.http.launch:server`
server = create_server(settings)


def main() -> None:
    import uvicorn

    # log_config=None keeps uvicorn on the intercepted stdlib loggers
    uvicorn.run(server, host=settings.host, port=settings.port, log_config=None)


if __name__ == '__main__':
    main()
