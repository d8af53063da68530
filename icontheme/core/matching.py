"""Size and scale matching for icon directories."""

from __future__ import annotations

from icontheme.core.models import DirectoryType, IconDirectoryDescriptor


def directory_matches_size(directory: IconDirectoryDescriptor, size: int, scale: int) -> bool:
    """Return True if icons in ``directory`` satisfy the requested size exactly."""
    if directory.scale != scale:
        return False
    if directory.type is DirectoryType.FIXED:
        return directory.size == size
    if directory.type is DirectoryType.SCALED:
        return directory.min_size <= size <= directory.max_size
    return directory.size - directory.threshold <= size <= directory.size + directory.threshold


def directory_size_distance(directory: IconDirectoryDescriptor, size: int, scale: int) -> int:
    """Return how far ``directory`` is from the requested size, in device pixels.

    Unlike :func:`directory_matches_size` the scales need not agree; both
    sides are multiplied out so directories of different scales compare.

    For threshold directories the out-of-range test uses ``size +/-
    threshold`` while the reported gap is measured from ``min_size`` and
    ``max_size``.
    """
    scaled = size * scale
    if directory.type is DirectoryType.FIXED:
        return abs(directory.size * directory.scale - scaled)

    if directory.type is DirectoryType.SCALED:
        if scaled < directory.min_size * directory.scale:
            return directory.min_size * directory.scale - scaled
        if scaled > directory.max_size * directory.scale:
            return scaled - directory.max_size * directory.scale
        return 0

    if scaled < (directory.size - directory.threshold) * directory.scale:
        return directory.min_size * directory.scale - scaled
    if scaled > (directory.size + directory.threshold) * directory.scale:
        return scaled - directory.max_size * directory.scale
    return 0
