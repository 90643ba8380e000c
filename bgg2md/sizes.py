"""
Heuristic mapping between GeekText [size] values and Markdown heading depth.
"""

import re
from typing import Optional

from .config import DEFAULT_CONFIG

SIZE_VALUE_PATTERN = re.compile(r'[0-9]+')


def size_to_heading(size, config=None) -> Optional[str]:
    """Map a font size to heading hashes.

    Thresholds are scanned highest first; the first one the size reaches
    wins. Values that are not plain ASCII digits and sizes below every
    threshold have no mapping.

    >>> size_to_heading('18')
    '##'
    >>> size_to_heading('9') is None
    True
    """
    config = config if config is not None else DEFAULT_CONFIG
    value = str(size).strip()
    # ASCII digits only: int() also accepts "2_4" and other scripts' digits
    if not SIZE_VALUE_PATTERN.fullmatch(value):
        return None
    n = int(value)

    for threshold, depth in config.SIZE_HEADING_THRESHOLDS:
        if n >= threshold:
            return '#' * depth
    return None


def heading_to_size(hashes, config=None) -> int:
    """Map heading hashes (or a depth) back to a representative font size."""
    config = config if config is not None else DEFAULT_CONFIG
    depth = hashes if isinstance(hashes, int) else len(hashes)
    return config.HEADING_SIZES.get(depth, config.HEADING_SIZE_FALLBACK)
