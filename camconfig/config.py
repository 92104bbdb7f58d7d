"""
Configuration provider for the camera capability layer

Holds the size / zoom-ratio caches, the cache switch and the default
camera settings. One shared instance is created lazily through
get_configuration_provider(); components that want isolation can build
their own ConfigurationProvider and pass it around instead.
"""
import json
import os
import threading

from utils_paths import get_app_data_dir
from app_config import MAIN_CONFIG_FILE

from .cache import ResultCache
from .logger import app_logger
from .camera.calculator import CameraSizeCalculator
from .camera.errors import InvalidArgumentError, UnsupportedBackendError
from .camera.factory import create_adapter_for_source, preferred_camera_type
from .camera.interface import (
    AspectRatio,
    CapabilityAdapter,
    CameraFace,
    FlashMode,
    MediaQuality,
    MediaType,
    describe_key,
    ratio_key,
    size_key,
)
from .camera.legacy import LegacyCameraAdapter


DEFAULT_CONFIG = {
    # Memory cache for resolved sizes and zoom ratios
    "use_cache_values": True,

    # Camera defaults
    "default_camera_face": "FACE_REAR",
    "default_media_type": "TYPE_PICTURE",
    "default_media_quality": "QUALITY_HIGH",
    "default_aspect_ratio": "3:4",
    "default_flash_mode": "FLASH_AUTO",
    "voice_enabled": True,
    "auto_focus": True,

    # Video limits (-1 = unlimited)
    "default_video_file_size": -1,  # bytes
    "default_video_duration": -1,   # milliseconds

    "debug": False,
}


def _as_bool(value):
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"Expected a boolean, got {value!r}")
    return value


def _as_limit(value):
    if isinstance(value, bool) or not isinstance(value, int) or value < -1:
        raise InvalidArgumentError(f"Expected an integer >= -1, got {value!r}")
    return value


def _as_aspect_ratio(value):
    if isinstance(value, AspectRatio):
        return value
    return AspectRatio.parse(value)


# Validation/conversion for each configurable field
_FIELD_TYPES = {
    "use_cache_values": _as_bool,
    "default_camera_face": CameraFace.coerce,
    "default_media_type": MediaType.coerce,
    "default_media_quality": MediaQuality.coerce,
    "default_aspect_ratio": _as_aspect_ratio,
    "default_flash_mode": FlashMode.coerce,
    "voice_enabled": _as_bool,
    "auto_focus": _as_bool,
    "default_video_file_size": _as_limit,
    "default_video_duration": _as_limit,
    "debug": _as_bool,
}


def _to_json_value(value):
    if isinstance(value, (CameraFace, MediaType, MediaQuality, FlashMode)):
        return value.name
    if isinstance(value, AspectRatio):
        return str(value)
    return value


class ConfigurationProvider:
    """
    Resolves camera sizes and zoom ratios and remembers the answers.

    Cache keys combine camera face, size purpose and backend generation as
    a tuple, so distinct queries never share a slot. Results are returned
    as tuples and are shared between callers.
    """

    _instance = None
    _instance_lock = threading.Lock()

    def __init__(self, api_level=None, config_path=None):
        """
        Args:
            api_level: Declared platform level, decides whether the
                structured backend may be used
            config_path: JSON file with saved defaults (loaded if present)
        """
        self.api_level = api_level
        self.camera_type = preferred_camera_type(api_level)
        self.config_path = config_path
        self.size_calculator = CameraSizeCalculator()

        self._size_cache = ResultCache("Size")
        self._ratio_cache = ResultCache("Zoom ratio")

        self.data = {}
        for key, value in DEFAULT_CONFIG.items():
            self.data[key] = _FIELD_TYPES[key](value)

        if config_path and os.path.exists(config_path):
            self.load(config_path)

    @classmethod
    def instance(cls, api_level=None, config_path=None):
        """
        Get or create the shared provider.

        Arguments only take effect on the call that creates the instance.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls(api_level=api_level, config_path=config_path)
                    app_logger.debug(
                        f"Configuration provider created (backend {cls._instance.camera_type.name})"
                    )
        return cls._instance

    @classmethod
    def _reset_instance(cls):
        with cls._instance_lock:
            cls._instance = None

    # ------------------------------------------------------------------
    # Capability resolution

    def adapter_for(self, source):
        """
        Wrap a native capability source in the adapter for this platform.

        Adapters are passed through unchanged.

        Raises:
            UnsupportedBackendError: If the source needs a backend this
                platform does not provide
        """
        if isinstance(source, CapabilityAdapter):
            return source
        return create_adapter_for_source(source, api_level=self.api_level)

    def resolve_sizes(self, backend, camera_face, size_for):
        """
        Get the supported sizes of a camera for one purpose.

        Args:
            backend: CapabilityAdapter, legacy camera or configuration map
            camera_face: CameraFace of the camera
            size_for: CameraSizeFor (picture, preview or video)

        Returns:
            Tuple of Size in hardware order

        Raises:
            InvalidArgumentError: If camera_face or size_for is unsupported
        """
        adapter = self.adapter_for(backend)
        key = size_key(camera_face, size_for, adapter.camera_type)

        if not self.is_caching_enabled():
            app_logger.debug(f"Size cache disabled, querying {describe_key(key)}")
            return tuple(adapter.get_sizes(key.size_for))

        return self._size_cache.get_or_compute(key, lambda: adapter.get_sizes(key.size_for))

    def resolve_zoom_ratios(self, backend, camera_face):
        """
        Get the supported zoom ratios of a camera.

        Only the legacy backend reports zoom ratios.

        Returns:
            Tuple of float ratios (hardware units x 0.01), in hardware order

        Raises:
            UnsupportedBackendError: If backend is not a legacy camera
        """
        adapter = self.adapter_for(backend)
        if not isinstance(adapter, LegacyCameraAdapter):
            raise UnsupportedBackendError(
                f"Zoom ratios are only available from the legacy backend, got {adapter.describe()}"
            )
        key = ratio_key(camera_face)

        if not self.is_caching_enabled():
            app_logger.debug(f"Zoom ratio cache disabled, querying {describe_key(key)}")
            return tuple(adapter.get_zoom_ratios())

        return self._ratio_cache.get_or_compute(key, adapter.get_zoom_ratios)

    def set_caching_enabled(self, enabled):
        """Turn the memory cache on or off (existing entries are kept)"""
        self.set("use_cache_values", enabled)
        app_logger.info(f"Capability cache {'enabled' if enabled else 'disabled'}")

    def is_caching_enabled(self):
        return self.data["use_cache_values"]

    def clear_cache(self):
        """Drop every cached size and zoom ratio"""
        self._size_cache.clear()
        self._ratio_cache.clear()

    @property
    def size_cache(self):
        return self._size_cache

    @property
    def ratio_cache(self):
        return self._ratio_cache

    # ------------------------------------------------------------------
    # Defaults

    def get(self, key, default=None):
        """Get configuration value"""
        return self.data.get(key, default)

    def set(self, key, value):
        """
        Set configuration value.

        Raises:
            InvalidArgumentError: If the value is invalid for a known key
        """
        convert = _FIELD_TYPES.get(key)
        self.data[key] = convert(value) if convert else value

    @property
    def default_camera_face(self):
        return self.data["default_camera_face"]

    @default_camera_face.setter
    def default_camera_face(self, value):
        self.set("default_camera_face", value)

    @property
    def default_media_type(self):
        return self.data["default_media_type"]

    @default_media_type.setter
    def default_media_type(self, value):
        self.set("default_media_type", value)

    @property
    def default_media_quality(self):
        return self.data["default_media_quality"]

    @default_media_quality.setter
    def default_media_quality(self, value):
        self.set("default_media_quality", value)

    @property
    def default_aspect_ratio(self):
        return self.data["default_aspect_ratio"]

    @default_aspect_ratio.setter
    def default_aspect_ratio(self, value):
        self.set("default_aspect_ratio", value)

    @property
    def default_flash_mode(self):
        return self.data["default_flash_mode"]

    @default_flash_mode.setter
    def default_flash_mode(self, value):
        self.set("default_flash_mode", value)

    @property
    def voice_enabled(self):
        return self.data["voice_enabled"]

    @voice_enabled.setter
    def voice_enabled(self, value):
        self.set("voice_enabled", value)

    @property
    def auto_focus(self):
        return self.data["auto_focus"]

    @auto_focus.setter
    def auto_focus(self, value):
        self.set("auto_focus", value)

    @property
    def default_video_file_size(self):
        return self.data["default_video_file_size"]

    @default_video_file_size.setter
    def default_video_file_size(self, value):
        self.set("default_video_file_size", value)

    @property
    def default_video_duration(self):
        return self.data["default_video_duration"]

    @default_video_duration.setter
    def default_video_duration(self, value):
        self.set("default_video_duration", value)

    @property
    def debug(self):
        return self.data["debug"]

    @debug.setter
    def debug(self, value):
        self.set_debug(value)

    def set_debug(self, enabled):
        """Switch debug logging; has no effect on resolved values"""
        self.set("debug", enabled)
        app_logger.set_debug(enabled)

    # ------------------------------------------------------------------
    # Persistence

    def _default_path(self):
        return self.config_path or os.path.join(get_app_data_dir(), MAIN_CONFIG_FILE)

    def to_dict(self):
        """Default values as JSON-friendly data"""
        return {key: _to_json_value(self.data[key]) for key in DEFAULT_CONFIG}

    def load(self, path=None):
        """
        Load saved defaults from a JSON file, keeping defaults for any
        field that is missing or invalid.

        Returns:
            True if the file was read
        """
        path = path or self._default_path()
        if not os.path.exists(path):
            return False

        try:
            with open(path, 'r') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            app_logger.error(f"Error loading config {path}: {e}")
            return False

        if not isinstance(loaded, dict):
            app_logger.error(f"Error loading config {path}: expected an object")
            return False

        for key, value in loaded.items():
            if key not in _FIELD_TYPES:
                continue
            try:
                self.set(key, value)
            except InvalidArgumentError as e:
                app_logger.warning(f"Ignoring invalid config value {key}={value!r}: {e}")

        app_logger.set_debug(self.debug)
        return True

    def save(self, path=None):
        """Save current defaults to a JSON file"""
        path = path or self._default_path()
        try:
            with open(path, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
            return True
        except OSError as e:
            app_logger.error(f"Error saving config {path}: {e}")
            return False


def get_configuration_provider():
    """Get or create the process-wide ConfigurationProvider"""
    return ConfigurationProvider.instance()
