"""
Camera Capability Interface

Defines the value types, classification enums, cache keys and the abstract
base class shared by the capability backends. Both backends (legacy
parameter-bag and structured configuration-map) must implement
CapabilityAdapter so the configuration provider can treat them alike.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from math import gcd
from typing import Any, NamedTuple, Tuple

import numpy as np

from .errors import InvalidArgumentError


# Hardware zoom ratios are reported in hundredths (100 == 1.0x)
ZOOM_RATIO_SCALE = 0.01

# First platform API level exposing the structured capability map
STRUCTURED_MIN_API_LEVEL = 21


class _CoercibleEnum(IntEnum):
    """IntEnum that can be built from a raw int, a member name or a member"""

    @classmethod
    def coerce(cls, value: Any):
        """
        Convert an external value into a member of this enum.

        Args:
            value: Member, member name (case-insensitive) or raw integer

        Returns:
            The matching enum member

        Raises:
            InvalidArgumentError: If the value is not part of the enumeration
        """
        if isinstance(value, cls):
            return value
        # A member of another axis must never be accepted by value
        if isinstance(value, Enum):
            raise InvalidArgumentError(
                f"Unsupported {cls.__name__} value: {value!r}"
            )
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError:
                pass
        raise InvalidArgumentError(f"Unsupported {cls.__name__} value: {value!r}")


class CameraFace(_CoercibleEnum):
    """Direction the sensor points"""
    FACE_FRONT = 0
    FACE_REAR = 1


class CameraSizeFor(_CoercibleEnum):
    """What a queried size is used for"""
    SIZE_FOR_PICTURE = 0
    SIZE_FOR_PREVIEW = 1
    SIZE_FOR_VIDEO = 2


class CameraType(_CoercibleEnum):
    """Capability-query backend generation"""
    TYPE_CAMERA1 = 0   # Legacy parameter-bag API
    TYPE_CAMERA2 = 1   # Structured configuration-map API


class MediaType(_CoercibleEnum):
    TYPE_PICTURE = 0
    TYPE_VIDEO = 1


class MediaQuality(_CoercibleEnum):
    QUALITY_AUTO = 0
    QUALITY_LOWEST = 1
    QUALITY_LOW = 2
    QUALITY_MEDIUM = 3
    QUALITY_HIGH = 4
    QUALITY_HIGHEST = 5


class FlashMode(_CoercibleEnum):
    FLASH_ON = 0
    FLASH_OFF = 1
    FLASH_AUTO = 2


@dataclass(frozen=True)
class Size:
    """A (width, height) pair as declared by the camera hardware"""
    width: int
    height: int

    def __post_init__(self):
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidArgumentError(f"Size {name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidArgumentError(f"Size {name} must be positive, got {value}")
            object.__setattr__(self, name, int(value))

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> 'AspectRatio':
        return AspectRatio.of(self.width, self.height)

    @classmethod
    def from_list(cls, native) -> Tuple['Size', ...]:
        """Convert a backend's native size listing, keeping its order"""
        from .utils import sizes_from_list
        return sizes_from_list(native)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class AspectRatio:
    """Reduced x:y ratio, e.g. 3:4 for a portrait 4:3 sensor"""
    x: int
    y: int

    @classmethod
    def of(cls, x: int, y: int) -> 'AspectRatio':
        if x <= 0 or y <= 0:
            raise InvalidArgumentError(f"Aspect ratio terms must be positive, got {x}:{y}")
        divisor = gcd(int(x), int(y))
        return cls(int(x) // divisor, int(y) // divisor)

    @classmethod
    def parse(cls, text: str) -> 'AspectRatio':
        """Parse "x:y" text (as stored in the config file)"""
        try:
            x, y = (int(part) for part in str(text).split(':'))
        except ValueError:
            raise InvalidArgumentError(f"Invalid aspect ratio: {text!r}") from None
        return cls.of(x, y)

    def ratio(self) -> float:
        return self.x / self.y

    def inverse(self) -> 'AspectRatio':
        return AspectRatio(self.y, self.x)

    def matches(self, size: Size, tolerance: float = 0.01) -> bool:
        """
        Whether a size has this aspect ratio, ignoring orientation.

        Camera sizes are reported landscape while the default ratio is
        portrait, so both are compared short side over long side.
        """
        ours = min(self.x, self.y) / max(self.x, self.y)
        theirs = min(size.width, size.height) / max(size.width, size.height)
        return abs(ours - theirs) <= tolerance

    def __str__(self) -> str:
        return f"{self.x}:{self.y}"


class SizeKey(NamedTuple):
    """Cache key for a size query"""
    face: CameraFace
    size_for: CameraSizeFor
    camera_type: CameraType


class RatioKey(NamedTuple):
    """Cache key for a zoom-ratio query"""
    face: CameraFace
    camera_type: CameraType


def size_key(face, size_for, camera_type) -> SizeKey:
    """
    Build the cache key of a size query.

    Raw values are validated here so that an out-of-range axis fails
    instead of landing on another query's cache slot.
    """
    return SizeKey(
        CameraFace.coerce(face),
        CameraSizeFor.coerce(size_for),
        CameraType.coerce(camera_type),
    )


def ratio_key(face) -> RatioKey:
    """Build the cache key of a zoom-ratio query (legacy backend only)"""
    return RatioKey(CameraFace.coerce(face), CameraType.TYPE_CAMERA1)


class CapabilityAdapter(ABC):
    """
    Abstract base class for capability backends.

    An adapter wraps one native capability source and translates its
    listing into Size tuples. Adapters never cache; memoisation is the
    configuration provider's job.
    """

    @property
    @abstractmethod
    def camera_type(self) -> CameraType:
        """Backend generation used in cache keys"""
        pass

    @abstractmethod
    def get_sizes(self, size_for: CameraSizeFor) -> Tuple[Size, ...]:
        """
        Query the supported sizes for one purpose.

        Args:
            size_for: Picture, preview or video

        Returns:
            Sizes in the order the hardware reported them

        Raises:
            InvalidArgumentError: If size_for is not a CameraSizeFor value
        """
        pass

    def describe(self) -> str:
        """Short label for log messages"""
        return f"{type(self).__name__}({self.camera_type.name})"


def describe_key(key: Any) -> str:
    """Readable form of a cache key for logs, e.g. FACE_REAR|SIZE_FOR_PREVIEW|TYPE_CAMERA1"""
    if not isinstance(key, tuple):
        return str(key)
    return "|".join(getattr(part, 'name', str(part)) for part in key)
