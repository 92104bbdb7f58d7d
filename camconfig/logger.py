"""
Thread-safe debug logger for the camera configuration layer
"""
import logging
import threading


LOGGER_NAME = 'camconfig'


class AppLogger:
    """
    Library logger with a process-wide debug switch.

    Debug messages are only forwarded while debug is enabled; the switch
    never changes what the capability layer resolves.
    """

    def __init__(self, name=LOGGER_NAME):
        self.file_logger = logging.getLogger(name)
        self.log_callbacks = []
        self._debug = False
        self._lock = threading.Lock()

    def set_debug(self, enabled):
        """Enable or disable debug output"""
        self._debug = bool(enabled)
        self.file_logger.setLevel(logging.DEBUG if self._debug else logging.INFO)

    def is_debug(self):
        return self._debug

    def add_callback(self, callback):
        """Register a callable receiving every formatted message"""
        with self._lock:
            self.log_callbacks.append(callback)

    def remove_callback(self, callback):
        with self._lock:
            if callback in self.log_callbacks:
                self.log_callbacks.remove(callback)

    def log(self, message, level="INFO"):
        """Send a message to the logging tree and to registered callbacks"""
        if level == "DEBUG" and not self._debug:
            return

        log_level = getattr(logging, level, logging.INFO)
        self.file_logger.log(log_level, message)

        with self._lock:
            callbacks = list(self.log_callbacks)
        for callback in callbacks:
            try:
                callback(f"{level}: {message}")
            except Exception as e:
                self.file_logger.warning(f"Log callback failed: {e}")

    def info(self, message):
        """Log info message"""
        self.log(message, "INFO")

    def error(self, message):
        """Log error message"""
        self.log(message, "ERROR")

    def warning(self, message):
        """Log warning message"""
        self.log(message, "WARNING")

    def debug(self, message):
        """Log debug message (dropped unless debug is enabled)"""
        self.log(message, "DEBUG")


# Singleton pattern to ensure only one logger instance
_logger_instance = None
_logger_lock = threading.Lock()


def get_app_logger():
    """Get or create the singleton logger instance"""
    global _logger_instance
    if _logger_instance is None:
        with _logger_lock:
            if _logger_instance is None:
                _logger_instance = AppLogger()
    return _logger_instance


# Global logger instance (singleton)
app_logger = get_app_logger()
