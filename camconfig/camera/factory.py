"""
Capability Backend Factory

Factory module for creating capability adapters based on platform level.
Provides a unified way to instantiate the correct capability backend.
"""
from typing import Any, Callable, Dict, List, Optional, Type, Union

from .errors import UnsupportedBackendError
from .interface import CapabilityAdapter, CameraType, STRUCTURED_MIN_API_LEVEL


# Available backends registry
_BACKENDS: Dict[str, Type[CapabilityAdapter]] = {}


def _register_backends():
    """Register available capability backends (lazy loading)"""
    global _BACKENDS

    if _BACKENDS:
        return  # Already registered

    from .legacy import LegacyCameraAdapter
    from .structured import StructuredCameraAdapter

    _BACKENDS['legacy'] = LegacyCameraAdapter
    _BACKENDS['camera1'] = LegacyCameraAdapter  # Alias
    _BACKENDS['structured'] = StructuredCameraAdapter
    _BACKENDS['camera2'] = StructuredCameraAdapter  # Alias


_TYPE_NAMES = {
    CameraType.TYPE_CAMERA1: 'legacy',
    CameraType.TYPE_CAMERA2: 'structured',
}


def preferred_camera_type(api_level: Optional[int]) -> CameraType:
    """
    Pick the backend generation for a platform.

    Args:
        api_level: Declared platform level (None means unknown)

    Returns:
        TYPE_CAMERA2 when the structured API exists, else TYPE_CAMERA1
    """
    if api_level is not None and api_level >= STRUCTURED_MIN_API_LEVEL:
        return CameraType.TYPE_CAMERA2
    return CameraType.TYPE_CAMERA1


def get_available_backends(api_level: Optional[int] = None) -> List[str]:
    """
    Get list of capability backend names usable on a platform.

    Args:
        api_level: Declared platform level; None lists every backend

    Returns:
        List of backend names that can be used with create_adapter()
    """
    _register_backends()

    names = []
    for name in _TYPE_NAMES.values():
        if name == 'structured' and api_level is not None \
                and api_level < STRUCTURED_MIN_API_LEVEL:
            continue
        names.append(name)
    return sorted(names)


def get_backend_info(api_level: Optional[int] = None) -> Dict[str, Dict[str, Any]]:
    """
    Get detailed information about capability backends.

    Returns:
        Dict mapping backend name to info dict with:
            - name: Display name
            - description: Short description
            - available: Whether backend works on this platform
            - aliases: Alternative names for this backend
    """
    available = get_available_backends(api_level)

    return {
        'legacy': {
            'name': 'Legacy camera API',
            'description': 'Sizes and zoom ratios from the camera parameter bag',
            'available': 'legacy' in available,
            'aliases': ['camera1'],
            'camera_type': CameraType.TYPE_CAMERA1,
        },
        'structured': {
            'name': 'Structured camera API',
            'description': 'Output sizes from the stream configuration map',
            'available': 'structured' in available,
            'aliases': ['camera2'],
            'camera_type': CameraType.TYPE_CAMERA2,
            'min_api_level': STRUCTURED_MIN_API_LEVEL,
        },
    }


def create_adapter(
    backend: Union[str, CameraType, int],
    source: Any,
    api_level: Optional[int] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> CapabilityAdapter:
    """
    Create a capability adapter for the specified backend.

    Args:
        backend: Backend name ('legacy', 'structured', aliases) or CameraType
        source: Native capability source (camera or configuration map)
        api_level: Declared platform level
        logger: Log callback function

    Returns:
        CapabilityAdapter wrapping the source

    Raises:
        ValueError: If backend is not recognized
        UnsupportedBackendError: If the platform lacks the structured API
    """
    _register_backends()

    if isinstance(backend, str):
        backend_lower = backend.lower().strip()
    else:
        backend_lower = _TYPE_NAMES[CameraType.coerce(backend)]

    if backend_lower not in _BACKENDS:
        raise ValueError(
            f"Unknown capability backend: '{backend}'. "
            f"Available backends: {', '.join(get_available_backends())}"
        )

    adapter_class = _BACKENDS[backend_lower]
    if adapter_class is _BACKENDS['structured']:
        return adapter_class(source, api_level=api_level, logger=logger)
    return adapter_class(source, logger=logger)


def create_adapter_for_source(
    source: Any,
    api_level: Optional[int] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> CapabilityAdapter:
    """
    Create an adapter by looking at what the source exposes.

    A source with get_parameters() is a legacy camera; one with
    get_output_sizes() is a stream configuration map.

    Raises:
        UnsupportedBackendError: If the source fits neither backend, or is a
            configuration map on a platform without the structured API
    """
    if isinstance(source, CapabilityAdapter):
        return source
    if hasattr(source, 'get_output_sizes'):
        return create_adapter('structured', source, api_level, logger)
    if hasattr(source, 'get_parameters'):
        return create_adapter('legacy', source, api_level, logger)
    raise UnsupportedBackendError(
        f"No capability backend accepts a {type(source).__name__}"
    )
