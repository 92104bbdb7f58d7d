"""
Camera configuration errors
"""


class CameraConfigError(Exception):
    """Base class for errors raised by the capability layer"""


class InvalidArgumentError(CameraConfigError, ValueError):
    """A value outside its enumeration (or an impossible size) reached the core"""


class UnsupportedBackendError(CameraConfigError, RuntimeError):
    """
    A capability backend was requested where the platform cannot provide it.

    This is a programming error in the caller and is never retried.
    """
