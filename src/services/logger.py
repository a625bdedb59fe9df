import logging
import sys
from loguru import logger
from src.config import settings

# stdlib loggers of the libraries on the request path, routed into loguru
LIBRARY_LOGGERS = {
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.INFO,
    "notion_client": logging.WARNING,
    "httpx": logging.WARNING,  # one INFO line per request otherwise
}

class InterceptHandler(logging.Handler):
    """Forwards stdlib logging records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

def setup_logging():
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    # Serverless hosts have no writable disk, so the file sink is optional
    if settings.LOG_TO_FILE:
        log_file = settings.DATA_DIR / "app.log"
        logger.add(log_file, rotation="10 MB", level="DEBUG")

    for name, level in LIBRARY_LOGGERS.items():
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(level)
        std_logger.propagate = False

setup_logging()
