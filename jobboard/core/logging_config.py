"""
Structured logging configuration for the application.

JSON-formatted logs for deployments, plain text for local development.
Every JSON record carries the service name so logs from several
deployments can share one sink.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

NOISY_LOGGERS = ("urllib3", "boto3", "botocore", "s3transfer", "multipart")


class CustomJsonFormatter(JsonFormatter):
    """
    JSON formatter that stamps service, timestamp, level and origin on each record.
    """

    def __init__(self, *args, service: str = "jobboard", **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = self.service
        log_record['timestamp'] = datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z')
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName

        # Source location only for warnings and above
        if record.levelno >= logging.WARNING:
            log_record['line'] = record.lineno
            log_record['pathname'] = record.pathname


def setup_logging(log_level: str = "INFO", json_logs: bool = True, service: str = "jobboard") -> None:
    """
    Configure root logging once at startup.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        json_logs: JSON records for deployments, plain text for local development
        service: Value of the "service" field on JSON records
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)

    if json_logs:
        formatter = CustomJsonFormatter('%(message)s', service=service)
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
