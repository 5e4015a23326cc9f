"""Logging configuration"""
import logging
import sys
from datetime import datetime
from pathlib import Path


def setup_logging(
    log_level: str = "INFO",
    log_dir: str = "logs",
    app_name: str = "nyayasetu",
) -> None:
    """
    Configure root logging.

    Args:
        log_level: root log level
        log_dir: directory for the daily log files
        app_name: prefix of the log file names
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, date_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    today = datetime.now().strftime("%Y-%m-%d")
    file_handler = logging.FileHandler(log_path / f"{app_name}_{today}.log", encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    error_handler = logging.FileHandler(log_path / f"{app_name}_error_{today}.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    root_logger.addHandler(error_handler)

    for noisy in ("uvicorn", "uvicorn.access", "pymongo", "httpx", "httpcore", "passlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.info("Logging configured: level=%s, dir=%s", log_level, log_dir)


class RequestLogger:
    """Request/response log lines for the API"""

    def __init__(self, logger_name: str = "api"):
        self.logger = logging.getLogger(logger_name)

    def log_response(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        ip: str | None = None,
    ) -> None:
        msg = f"RESPONSE {method} {path} status={status_code} duration={duration_ms:.2f}ms"
        if ip:
            msg += f" ip={ip}"

        if status_code >= 500:
            self.logger.error(msg)
        elif status_code >= 400:
            self.logger.warning(msg)
        else:
            self.logger.info(msg)

    def log_error(
        self,
        method: str,
        path: str,
        error: str,
        traceback: str | None = None,
    ) -> None:
        msg = f"ERROR {method} {path} error={error}"
        if traceback:
            msg += f"\n{traceback}"
        self.logger.error(msg)


request_logger = RequestLogger()
