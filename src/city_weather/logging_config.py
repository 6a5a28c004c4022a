"""Centralized logging configuration."""

import logging

from city_weather.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL):
    """
    Configure one log format for the service and the libraries it drives.
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    log_level = logging.getLevelName(level)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs every request line at INFO, which duplicates our own client logs
    library_levels = {
        "uvicorn": log_level,
        "uvicorn.access": log_level,
        "uvicorn.error": log_level,
        "fastapi": log_level,
        "httpx": logging.WARNING,
        "httpcore": logging.WARNING,
    }

    for logger_name, logger_level in library_levels.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(logger_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Records flow to the root handler configured above
        logger.propagate = True
