r"""
Logging configuration with 7-day rolling file retention
Writes to {app data dir}\Logs\camconfig.log with automatic cleanup
"""
import os
import sys
import logging
from logging.handlers import TimedRotatingFileHandler
from datetime import datetime, timedelta

from app_config import LOG_FILE
from utils_paths import get_log_dir


def cleanup_old_logs(log_dir, days_to_keep=7):
    """
    Remove log files older than specified days

    Args:
        log_dir: Directory containing log files
        days_to_keep: Number of days to retain (default: 7)

    Returns:
        Number of files removed
    """
    if not os.path.exists(log_dir):
        return 0

    cutoff_date = datetime.now() - timedelta(days=days_to_keep)
    removed = 0

    for filename in os.listdir(log_dir):
        file_path = os.path.join(log_dir, filename)

        # Only process files, not directories
        if not os.path.isfile(file_path):
            continue

        file_mtime = datetime.fromtimestamp(os.path.getmtime(file_path))
        if file_mtime < cutoff_date:
            try:
                os.remove(file_path)
                removed += 1
            except OSError as e:
                logging.getLogger(__name__).warning(f"Failed to remove {filename}: {e}")

    return removed


def setup_logging(log_dir=None, debug=False):
    r"""
    Configure logging with file rotation and cleanup

    Sets up:
    - Console logging (INFO level, DEBUG when debug is set)
    - File logging with daily rotation (DEBUG level)
    - Automatic cleanup of logs older than 7 days

    Args:
        log_dir: Directory for log files (default: utils_paths.get_log_dir())
        debug: Start with library debug output enabled

    Returns:
        The configured root logger
    """
    log_dir = log_dir or get_log_dir()
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, LOG_FILE)

    cleanup_old_logs(log_dir, days_to_keep=7)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)  # Capture everything, handlers filter

    # Remove any existing handlers (in case setup_logging is called multiple times)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(console_handler)

    # File handler - Daily rotation, keep 7 days
    try:
        file_handler = TimedRotatingFileHandler(
            log_file,
            when='midnight',
            interval=1,
            backupCount=7,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)
        logger.info(f"Logging initialized - Log file: {log_file}")
    except OSError as e:
        # If file logging fails, at least we have console
        logger.error(f"Failed to initialize file logging: {e}")
        logger.warning("Continuing with console logging only")

    set_debug(debug)
    return logger


def set_debug(enabled):
    """Toggle debug output of the camconfig library logger"""
    from camconfig.logger import app_logger
    app_logger.set_debug(enabled)

