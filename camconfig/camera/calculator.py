"""
Camera size calculator

Picks the picture, preview and video size to use out of the sizes a
capability backend reported.
"""
from typing import Iterable, Optional

from .interface import AspectRatio, MediaQuality, Size


# Target size for each video quality bucket (HIGHEST takes the largest)
VIDEO_QUALITY_TARGETS = {
    MediaQuality.QUALITY_LOWEST: Size(320, 240),
    MediaQuality.QUALITY_LOW: Size(640, 480),
    MediaQuality.QUALITY_MEDIUM: Size(1280, 720),
    MediaQuality.QUALITY_HIGH: Size(1920, 1080),
    MediaQuality.QUALITY_AUTO: Size(1920, 1080),
}


def _closest_by_area(sizes, target: Size) -> Size:
    # Ties go to the larger size
    return min(sizes, key=lambda s: (abs(s.area - target.area), -s.area))


class CameraSizeCalculator:
    """Default size selection strategy"""

    def get_picture_size(
        self,
        sizes: Iterable[Size],
        aspect_ratio: AspectRatio,
        expected_size: Optional[Size] = None,
    ) -> Optional[Size]:
        """
        Choose the picture size.

        Sizes matching the aspect ratio are preferred. Among them the one
        closest to expected_size wins, or the largest when none is given.

        Returns:
            Chosen size, or None when sizes is empty
        """
        sizes = list(sizes)
        if not sizes:
            return None

        candidates = [s for s in sizes if aspect_ratio.matches(s)] or sizes
        if expected_size is None:
            return max(candidates, key=lambda s: s.area)
        return _closest_by_area(candidates, expected_size)

    def get_preview_size(
        self,
        sizes: Iterable[Size],
        picture_size: Size,
    ) -> Optional[Size]:
        """
        Choose a preview size for a picture size.

        Keeps the picture's aspect ratio when possible and takes the
        largest preview not bigger than the picture.
        """
        sizes = list(sizes)
        if not sizes:
            return None

        candidates = [s for s in sizes if picture_size.aspect_ratio.matches(s)] or sizes
        not_larger = [s for s in candidates if s.area <= picture_size.area]
        if not_larger:
            return max(not_larger, key=lambda s: s.area)
        return min(candidates, key=lambda s: s.area)

    def get_video_size(
        self,
        sizes: Iterable[Size],
        media_quality,
    ) -> Optional[Size]:
        """Choose the video size closest to the quality's target size"""
        sizes = list(sizes)
        if not sizes:
            return None

        quality = MediaQuality.coerce(media_quality)
        if quality == MediaQuality.QUALITY_HIGHEST:
            return max(sizes, key=lambda s: s.area)
        return _closest_by_area(sizes, VIDEO_QUALITY_TARGETS[quality])
