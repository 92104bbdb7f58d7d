"""
Structured camera backend.

Reads capabilities from the stream configuration map API.
"""

from .adapter import (
    StructuredCameraAdapter,
    OutputTarget,
    output_target_for,
    is_supported,
)

__all__ = [
    'StructuredCameraAdapter',
    'OutputTarget',
    'output_target_for',
    'is_supported',
]
