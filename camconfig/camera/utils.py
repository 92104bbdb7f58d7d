"""
Utility functions for normalising native capability listings
"""
from typing import Iterable, Optional, Tuple

import numpy as np

from .errors import InvalidArgumentError
from .interface import Size, ZOOM_RATIO_SCALE


def sizes_from_list(native) -> Tuple[Size, ...]:
    """
    Convert a backend's native size listing into Size values

    Accepts what the two backends hand back:
    - a sequence of objects with width/height attributes
    - a sequence of (width, height) pairs
    - an (N, 2) integer array

    Args:
        native: Native listing (None is treated as empty)

    Returns:
        Tuple of Size in source order
    """
    if native is None:
        return ()

    if isinstance(native, np.ndarray):
        if native.size == 0:
            return ()
        if native.ndim != 2 or native.shape[1] != 2:
            raise InvalidArgumentError(
                f"Expected an (N, 2) size array, got shape {native.shape}"
            )
        return tuple(Size(int(w), int(h)) for w, h in native.tolist())

    sizes = []
    for item in native:
        if isinstance(item, (tuple, list, np.ndarray)):
            width, height = item
        else:
            width, height = item.width, item.height
        sizes.append(Size(width, height))
    return tuple(sizes)


def scale_zoom_ratios(units: Optional[Iterable[int]]) -> Tuple[float, ...]:
    """
    Scale integer hardware zoom units to zoom ratios

    Args:
        units: Zoom units in hundredths (e.g. [100, 250])

    Returns:
        Tuple of float ratios in source order (e.g. (1.0, 2.5))
    """
    if units is None:
        return ()
    values = np.asarray(list(units), dtype=np.int64)
    return tuple((values * ZOOM_RATIO_SCALE).tolist())


def format_sizes(sizes: Iterable[Size], limit: int = 6) -> str:
    """Compact text for log lines, e.g. "1920x1080, 1280x720 (+3 more)" """
    sizes = list(sizes)
    text = ", ".join(str(size) for size in sizes[:limit])
    if len(sizes) > limit:
        text += f" (+{len(sizes) - limit} more)"
    return text or "<empty>"
