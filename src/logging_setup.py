"""Logging configuration for the estimator API."""

import logging
import sys

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = (
    '{{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s", '
    '"service_name": "train-ticket-estimator", "environment": "{environment}"}}'
)


def build_formatter(json_output: bool, environment: str) -> logging.Formatter:
    if json_output:
        return logging.Formatter(JSON_FORMAT.format(environment=environment))
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
) -> None:
    """Send every log record to stdout at the configured level.

    httpx request lines are only shown when the service runs at DEBUG,
    where they help trace price lookups.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(json_output, environment))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    client_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(client_level)
