"""structlog configuration shared by the CLI and the song sources."""

import logging

import structlog


def _get_json_processors() -> list:
    return [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(level: int | str = logging.WARNING) -> None:
    """Route JSON log lines through stdlib logging on stderr.

    Safe to call more than once; later calls only change the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger().setLevel(level)
    structlog.configure(
        processors=_get_json_processors(),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


log = structlog.get_logger()
