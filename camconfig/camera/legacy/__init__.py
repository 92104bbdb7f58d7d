"""
Legacy camera backend.

Reads capabilities from the parameter-bag camera API.
"""

from .adapter import LegacyCameraAdapter

__all__ = ['LegacyCameraAdapter']
