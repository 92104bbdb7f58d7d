"""
camconfig - camera size and zoom-ratio resolution with memoisation.

Usage:
    from camconfig import get_configuration_provider, CameraFace, CameraSizeFor

    provider = get_configuration_provider()
    sizes = provider.resolve_sizes(camera, CameraFace.FACE_REAR,
                                   CameraSizeFor.SIZE_FOR_PREVIEW)
    ratios = provider.resolve_zoom_ratios(camera, CameraFace.FACE_REAR)
"""

__version__ = "1.0.0"

from .camera import (
    AspectRatio,
    CameraConfigError,
    CameraFace,
    CameraSizeFor,
    CameraType,
    FlashMode,
    InvalidArgumentError,
    MediaQuality,
    MediaType,
    Size,
    UnsupportedBackendError,
)
from .cache import ResultCache
from .config import (
    ConfigurationProvider,
    DEFAULT_CONFIG,
    get_configuration_provider,
)

__all__ = [
    'AspectRatio',
    'CameraConfigError',
    'CameraFace',
    'CameraSizeFor',
    'CameraType',
    'FlashMode',
    'InvalidArgumentError',
    'MediaQuality',
    'MediaType',
    'Size',
    'UnsupportedBackendError',
    'ResultCache',
    'ConfigurationProvider',
    'DEFAULT_CONFIG',
    'get_configuration_provider',
]
