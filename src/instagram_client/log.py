import logging
import sys

import structlog

from ._constants import LOGGER_NAME

bound_logging_vars = structlog.contextvars.bound_contextvars

LOG = logging.getLogger(LOGGER_NAME)


class TerminalColorMarks:
    BOLD = "\033[1m"
    BLUE = "\033[94m"
    END = "\033[0m"


def get_logging_contextvars():
    return structlog.contextvars.get_contextvars()


def __get_json_handler() -> logging.Handler:
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    return handler


def __get_text_handler() -> logging.Handler:
    formatter = logging.Formatter(
        f"{TerminalColorMarks.BOLD}{TerminalColorMarks.BLUE}%(name)s |{TerminalColorMarks.END} %(asctime)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    return handler


def get_logger(format: str = "text", level: int = logging.INFO) -> logging.Logger:
    """Attach a console handler to the library logger.

    The library never configures handlers on import; applications call this
    once. Repeated calls replace the handler instead of stacking another one.
    """
    if format == "json":
        handler = __get_json_handler()
    else:
        handler = __get_text_handler()

    for existing in list(LOG.handlers):
        if getattr(existing, "_instagram_client_handler", False):
            LOG.removeHandler(existing)
    handler._instagram_client_handler = True  # type: ignore[attr-defined]

    LOG.addHandler(handler)
    LOG.setLevel(level)
    return LOG
