from blog_api.settings import Settings


def run(settings: Settings) -> None:
    """
    Run before the server entry point (launch.py or uvicorn directly)
    """
    from loguru import logger

    from blog_api.common.logs import configure_logging

    configure_logging(settings)

    logger.info('application setup complete ✅')
