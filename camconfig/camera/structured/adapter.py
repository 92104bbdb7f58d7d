"""
Structured Camera Capability Adapter

Reads supported sizes from the structured capability API, where output
sizes are listed per output target in a stream configuration map.

Expected collaborator shape:
    configuration_map.get_output_sizes(target) -> sizes

Only available on platforms at or above STRUCTURED_MIN_API_LEVEL.
"""
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from ..errors import InvalidArgumentError, UnsupportedBackendError
from ..interface import (
    CapabilityAdapter,
    CameraSizeFor,
    CameraType,
    Size,
    STRUCTURED_MIN_API_LEVEL,
)
from ..utils import format_sizes, sizes_from_list


class OutputTarget(Enum):
    """Discriminator passed to get_output_sizes()"""
    JPEG = 0x100                        # Still-image format code
    SURFACE_TEXTURE = "SurfaceTexture"  # Preview surface class
    MEDIA_RECORDER = "MediaRecorder"    # Video recorder class


_OUTPUT_TARGETS = {
    CameraSizeFor.SIZE_FOR_PICTURE: OutputTarget.JPEG,
    CameraSizeFor.SIZE_FOR_PREVIEW: OutputTarget.SURFACE_TEXTURE,
    CameraSizeFor.SIZE_FOR_VIDEO: OutputTarget.MEDIA_RECORDER,
}


def output_target_for(size_for) -> OutputTarget:
    """Map a size purpose to the output target the map is queried with"""
    try:
        return _OUTPUT_TARGETS[CameraSizeFor.coerce(size_for)]
    except InvalidArgumentError:
        raise InvalidArgumentError(f"Unsupported size for {size_for!r}") from None


def is_supported(api_level: Optional[int]) -> bool:
    """Whether a platform level exposes the structured capability API"""
    return api_level is not None and api_level >= STRUCTURED_MIN_API_LEVEL


class StructuredCameraAdapter(CapabilityAdapter):
    """
    Adapter for the structured stream-configuration-map API.

    Zoom ratios are not read through this backend.
    """

    def __init__(
        self,
        configuration_map: Any,
        api_level: Optional[int] = None,
        logger: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize structured adapter.

        Args:
            configuration_map: Stream configuration map of one camera
            api_level: Declared platform level; None skips the check
            logger: Callback for log messages

        Raises:
            UnsupportedBackendError: If api_level predates the structured API
        """
        if api_level is not None and not is_supported(api_level):
            raise UnsupportedBackendError(
                f"Structured capability API needs platform level "
                f"{STRUCTURED_MIN_API_LEVEL}, running on {api_level}"
            )
        self._map = configuration_map
        self._logger = logger

    def _log(self, message: str) -> None:
        """Log message via callback"""
        if self._logger:
            self._logger(message)
        else:
            from ...logger import app_logger
            app_logger.debug(f"[Structured] {message}")

    @property
    def camera_type(self) -> CameraType:
        return CameraType.TYPE_CAMERA2

    def get_sizes(self, size_for) -> Tuple[Size, ...]:
        target = output_target_for(size_for)
        sizes = sizes_from_list(self._map.get_output_sizes(target))

        self._log(f"{target.name}: {format_sizes(sizes)}")
        return sizes
