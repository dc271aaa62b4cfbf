import sys
import logging
from typing import Any

from loguru import logger

from teams_graph.config.settings import AppSettings

SENSITIVE_KEYS = ["key", "token", "password", "secret", "authorization"]
MASK = "********"


def mask_secret(value: str) -> str:
    """Keeps the first and last four characters of long secrets."""
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return MASK


def make_sensitive_data_filter(settings: AppSettings):
    """Builds a loguru filter that masks the GitHub token in log records."""

    def mask_extra(value: Any) -> Any:
        if isinstance(value, dict):
            masked = {}
            for key, item in value.items():
                if isinstance(item, str) and any(
                    sk in str(key).lower() for sk in SENSITIVE_KEYS
                ):
                    masked[key] = mask_secret(item)
                else:
                    masked[key] = mask_extra(item)
            return masked
        if isinstance(value, list):
            return [mask_extra(item) for item in value]
        return value

    def sensitive_data_filter(record: dict[str, Any]) -> bool:
        if "extra" in record and isinstance(record["extra"], dict):
            record["extra"].update(mask_extra(record["extra"]))

        token = settings.github_token
        if token and token in record["message"]:
            record["message"] = record["message"].replace(token, MASK)

        return True  # Keep the record after masking

    return sensitive_data_filter


class InterceptHandler(logging.Handler):
    """Routes standard logging records (httpx, httpcore) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(settings: AppSettings) -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,  # Frame locals would include the token
        filter=make_sensitive_data_filter(settings),
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.debug(f"Logging initialized with level: {settings.log_level}")
