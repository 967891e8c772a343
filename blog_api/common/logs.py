import json
import logging
import sys
from typing import Any, Callable

from loguru import logger

from blog_api.common import context
from blog_api.settings import Settings

LEVEL_ICONS = {
    'DEBUG': '🔬',
    'WARNING': '⚠️',
    'ERROR': '💣💥',
    'CRITICAL': '🚨',
}
DEFAULT_ICON = '✏️'

# Noisy or duplicated by RequestResponseMiddleware
QUIET_LOGGERS = ('uvicorn.access', 'urllib3.connectionpool')


class InterceptHandler(logging.Handler):
    """
    Hand stdlib records (uvicorn, urllib3, ...) over to loguru.
    https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def deployed_log_formatter(record: dict[str, Any]) -> str:
    """
    One JSON object per line for the log shipper
    """
    extra = record['extra']
    payload: dict[str, Any] = {
        'timestamp': record['time'].isoformat(),
        'level': record['level'].name,
        'logger': record['name'],
        'message': record['message'],
        # Startup logs run outside any request
        'request_id': extra.get('request_id') or context.get_safe_request_id() or '',
    }
    payload.update({key: value for key, value in extra.items() if key not in payload})

    exc = record['exception']
    if exc is not None:
        payload['error'] = {
            'exception_type': exc.type.__name__ if exc.type else '',
            'message': str(exc.value),
        }
        record['exception'] = None

    extra['serialized'] = json.dumps(payload, default=str)
    return '{extra[serialized]}\n'


def _print_rich_traceback(record: dict[str, Any]) -> None:
    from rich.console import Console
    from rich.traceback import Traceback

    exc = record['exception']
    Console(stderr=True).print(
        Traceback.from_exception(
            exc_type=exc.type,
            exc_value=exc.value,
            traceback=exc.traceback,
            show_locals=True,
            locals_max_length=5,
            locals_max_string=25,
            max_frames=10,
        )
    )


def build_local_log_formatter(debug: bool) -> Callable[[dict[str, Any]], str]:
    """
    Console format for local runs. Request logs show their duration in place of the icon.
    With debug on, tracebacks are rendered by rich with locals.
    """

    def local_log_formatter(record: dict[str, Any]) -> str:
        level_name = record['level'].name
        duration = record['extra'].get('duration')

        if duration is not None and level_name not in LEVEL_ICONS:
            prefix = f'<magenta>⏱️ {duration}s</magenta>'
        else:
            prefix = LEVEL_ICONS.get(level_name, DEFAULT_ICON)

        request_id = record['extra'].get('request_id')
        location = '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>'
        if request_id:
            location = '<dim>{extra[request_id]:.8}</dim> ' + location

        log_format = f'<green>{{time:HH:mm:ss.SSS}}</green> | {prefix} {location} - <level>{{message}}</level>\n'

        if record['exception'] is not None:
            if debug:
                _print_rich_traceback(record)
            else:
                log_format += '{exception}\n'
        return log_format

    return local_log_formatter


def configure_logging(settings: Settings) -> None:
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.log_level)

    # Everything already created reports through the root handler
    for name in list(logging.root.manager.loggerDict):
        named_logger = logging.getLogger(name)
        named_logger.handlers = []
        named_logger.propagate = True

    for name in QUIET_LOGGERS:
        logging.getLogger(name).propagate = False

    formatter = deployed_log_formatter if settings.is_deployed_env else build_local_log_formatter(settings.debug)

    logger.remove()
    logger.add(
        sys.stdout,
        level=settings.log_level,
        format=formatter,
        backtrace=False,
        diagnose=False,
    )
    logger.info('logging configured', level=settings.log_level, environment=settings.environment)
