"""
Camera capability layer for camconfig.

Provides a unified interface over the two capability-query backends:
- Legacy camera API (parameter bag, also reports zoom ratios)
- Structured camera API (stream configuration map, platform level 21+)

Package structure:
    camconfig/camera/
    ├── __init__.py         # This file - exports
    ├── interface.py        # Value types, enums, cache keys, CapabilityAdapter ABC
    ├── errors.py           # InvalidArgumentError, UnsupportedBackendError
    ├── factory.py          # create_adapter(), get_available_backends()
    ├── utils.py            # Native listing conversion, zoom scaling
    ├── calculator.py       # CameraSizeCalculator
    ├── legacy/             # Legacy backend
    │   └── adapter.py      # LegacyCameraAdapter
    └── structured/         # Structured backend
        └── adapter.py      # StructuredCameraAdapter

Usage:
    from camconfig.camera import create_adapter_for_source

    adapter = create_adapter_for_source(camera, api_level=19)
    sizes = adapter.get_sizes(CameraSizeFor.SIZE_FOR_PREVIEW)
"""

from .errors import (
    CameraConfigError,
    InvalidArgumentError,
    UnsupportedBackendError,
)

from .interface import (
    CapabilityAdapter,
    Size,
    AspectRatio,
    CameraFace,
    CameraSizeFor,
    CameraType,
    MediaType,
    MediaQuality,
    FlashMode,
    SizeKey,
    RatioKey,
    size_key,
    ratio_key,
    ZOOM_RATIO_SCALE,
    STRUCTURED_MIN_API_LEVEL,
)

from .factory import (
    create_adapter,
    create_adapter_for_source,
    get_available_backends,
    get_backend_info,
    preferred_camera_type,
)

# Adapter imports from subpackages
from .legacy import LegacyCameraAdapter
from .structured import StructuredCameraAdapter, OutputTarget

from .calculator import CameraSizeCalculator
from .utils import sizes_from_list, scale_zoom_ratios

__all__ = [
    # Errors
    'CameraConfigError',
    'InvalidArgumentError',
    'UnsupportedBackendError',
    # Interface and value types
    'CapabilityAdapter',
    'Size',
    'AspectRatio',
    'CameraFace',
    'CameraSizeFor',
    'CameraType',
    'MediaType',
    'MediaQuality',
    'FlashMode',
    'SizeKey',
    'RatioKey',
    'size_key',
    'ratio_key',
    'ZOOM_RATIO_SCALE',
    'STRUCTURED_MIN_API_LEVEL',
    # Factory functions
    'create_adapter',
    'create_adapter_for_source',
    'get_available_backends',
    'get_backend_info',
    'preferred_camera_type',
    # Adapters
    'LegacyCameraAdapter',
    'StructuredCameraAdapter',
    'OutputTarget',
    # Utilities
    'CameraSizeCalculator',
    'sizes_from_list',
    'scale_zoom_ratios',
]
