"""
Legacy Camera Capability Adapter

Reads supported sizes and zoom ratios from the legacy camera API, where
every capability hangs off a parameter bag returned by
camera.get_parameters().

Expected collaborator shape:
    camera.get_parameters() -> parameters
    parameters.get_supported_picture_sizes() -> sizes
    parameters.get_supported_preview_sizes() -> sizes
    parameters.get_supported_video_sizes()   -> sizes
    parameters.get_zoom_ratios()             -> [int, ...] (hundredths)
"""
from typing import Any, Callable, Optional, Tuple

from ..errors import InvalidArgumentError
from ..interface import (
    CapabilityAdapter,
    CameraSizeFor,
    CameraType,
    Size,
)
from ..utils import format_sizes, scale_zoom_ratios, sizes_from_list


# Parameter-bag accessor for each size purpose
_SIZE_ACCESSORS = {
    CameraSizeFor.SIZE_FOR_PICTURE: 'get_supported_picture_sizes',
    CameraSizeFor.SIZE_FOR_PREVIEW: 'get_supported_preview_sizes',
    CameraSizeFor.SIZE_FOR_VIDEO: 'get_supported_video_sizes',
}


class LegacyCameraAdapter(CapabilityAdapter):
    """
    Adapter for the legacy parameter-bag camera API.

    The parameter bag is fetched on every query; the adapter holds no
    results of its own.
    """

    def __init__(
        self,
        camera: Any,
        logger: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize legacy adapter.

        Args:
            camera: Open legacy camera exposing get_parameters()
            logger: Callback for log messages
        """
        self._camera = camera
        self._logger = logger

    def _log(self, message: str) -> None:
        """Log message via callback"""
        if self._logger:
            self._logger(message)
        else:
            from ...logger import app_logger
            app_logger.debug(f"[Legacy] {message}")

    @property
    def camera_type(self) -> CameraType:
        return CameraType.TYPE_CAMERA1

    def get_sizes(self, size_for) -> Tuple[Size, ...]:
        try:
            size_for = CameraSizeFor.coerce(size_for)
        except InvalidArgumentError:
            raise InvalidArgumentError(f"Unsupported size for {size_for!r}") from None

        parameters = self._camera.get_parameters()
        accessor = getattr(parameters, _SIZE_ACCESSORS[size_for])
        sizes = sizes_from_list(accessor())

        self._log(f"{size_for.name}: {format_sizes(sizes)}")
        return sizes

    def get_zoom_ratios(self) -> Tuple[float, ...]:
        """
        Read the zoom ratios supported by the camera.

        Returns:
            Ratios scaled from hardware hundredths, in hardware order
        """
        ratios = scale_zoom_ratios(self._camera.get_parameters().get_zoom_ratios())
        self._log(f"Zoom ratios: {len(ratios)} steps")
        return ratios
