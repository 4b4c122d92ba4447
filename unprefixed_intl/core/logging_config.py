"""Logging configuration."""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

# Log levels for different components
LOGGING_CONFIG = {
    "unprefixed_intl": logging.INFO,
    "unprefixed_intl.core": logging.INFO,
    "unprefixed_intl.features": logging.INFO,

    # Reduce noise from libraries
    "openai": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "telegram": logging.WARNING,
    "telegram.ext": logging.WARNING,
    "google": logging.WARNING,

    "asyncio": logging.ERROR,
    "urllib3": logging.ERROR,
}


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        result = super().format(record)
        # Reset levelname for other handlers
        record.levelname = levelname
        return result


def setup_logging(log_file: bool = False, debug: bool = False, log_dir: Path = Path("logs")) -> None:
    """Configure console (and optionally rotating file) logging."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(
        ColoredFormatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s", datefmt="%H:%M:%S")
    )
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_filename = log_dir / f"intl_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    for logger_name, level in LOGGING_CONFIG.items():
        logging.getLogger(logger_name).setLevel(logging.DEBUG if debug and logger_name.startswith("unprefixed_intl") else level)

    logging.getLogger(__name__).info(
        f"Logging configured (console={'DEBUG' if debug else 'INFO'}, "
        f"file={'ENABLED' if log_file else 'DISABLED'})"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with proper configuration."""
    return logging.getLogger(name)
