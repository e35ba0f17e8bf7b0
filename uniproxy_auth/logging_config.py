"""
Logging configuration that keeps panel API tokens out of log output.
"""

import logging
import logging.config
import re
from typing import Any, Dict

_TOKEN_PATTERN = re.compile(r"(token=)[^&\s\"']+")


def redact_token(text: str) -> str:
    """Replace the value of any ``token=`` query parameter with asterisks."""
    return _TOKEN_PATTERN.sub(r"\1***", text)


def mask_credential(credential: str) -> str:
    """Shorten a credential to a prefix safe for logs."""
    if len(credential) <= 4:
        return "***"
    return f"{credential[:4]}***"


class TokenRedactionFilter(logging.Filter):
    """Filter that masks panel tokens in request URLs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record in place; never drops it."""
        message = record.getMessage()
        redacted = redact_token(message)
        if redacted != message:
            # httpx logs "HTTP Request: GET <url>" with the URL as an argument
            record.msg = redacted
            record.args = None
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with token redaction."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "token_redaction": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["token_redaction"]
            }
        },
        "loggers": {
            "uniproxy_auth": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING" if level != "DEBUG" else "DEBUG",
                "propagate": False
            },
            "httpcore": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
