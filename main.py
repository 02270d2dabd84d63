import logging
import sys

from uvicorn import Config, Server
from loguru import logger

from summarize_api.settings import get_settings


def get_log_level(level_name: str, default_level: int = logging.INFO) -> int:
    """Convert log level name to numeric level."""
    level_name = level_name.upper()
    level_mapping = logging.getLevelNamesMapping()
    return level_mapping.get(level_name, default_level)


settings = get_settings()
LOG_LEVEL = get_log_level(settings.log_level)
JSON_LOGS = settings.json_logs


class InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, httpx, openai) to loguru."""

    def emit(self, record):
        # custom stdlib levels have no loguru name; keep the number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # skip logging-module frames so loguru reports the real call site
        frame, depth = sys._getframe(6), 6
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging():
    # the root logger is the single entry point into loguru
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(LOG_LEVEL)
    # uvicorn, httpx and openai log through their own loggers;
    # route them all to the root logger
    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
    logger.configure(
        handlers=[{"sink": sys.stdout, "serialize": JSON_LOGS, "level": LOG_LEVEL}]
    )


if __name__ == "__main__":
    if not settings.provider_configured:
        logger.warning("OPENAI_API_KEY is not set; /api/summarize will fail")
    server = Server(
        Config(
            "summarize_api.main:app",
            host=settings.host,
            port=settings.port,
            log_level=LOG_LEVEL,
            log_config=None,
        ),
    )
    # uvicorn configures its loggers while building Config; override after
    setup_logging()
    server.run()
