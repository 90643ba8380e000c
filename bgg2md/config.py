"""
Configuration constants for the bgg2md converter.

This module centralizes the thresholds, canonical addresses and limits used
by both conversion directions. Pass a ConversionConfig (or subclass) to any
converter to override them; DEFAULT_CONFIG is used otherwise.
"""


class ConversionConfig:
    """Default configuration values for GeekText <-> Markdown conversion."""

    # === Size <-> Heading ===
    # (threshold, heading depth), scanned highest threshold first
    SIZE_HEADING_THRESHOLDS = (
        (24, 1),
        (18, 2),
        (16, 3),
        (14, 4),
        (12, 5),
        (10, 6),
    )
    # Representative [size] per heading depth (depth 6 and deeper -> 10)
    HEADING_SIZES = {1: 24, 2: 18, 3: 16, 4: 14, 5: 12}
    HEADING_SIZE_FALLBACK = 10
    # Longer (or multi-line) sized text stays a paragraph
    HEADING_MAX_LENGTH = 120

    # === Canonical Addresses ===
    SITE_BASE_URL = 'https://boardgamegeek.com'
    THING_PATH = 'thing'
    USER_PATH = 'user'
    # Markdown links carry no numeric user id
    USER_ID_PLACEHOLDER = 0

    # === Placeholder Tokens ===
    # Private-use code points, never produced or matched by any pass
    PLACEHOLDER_OPEN = '\ue000'
    PLACEHOLDER_CLOSE = '\ue001'

    # === Security Limits (CLI and HTTP surfaces) ===
    MAX_INPUT_SIZE = 5 * 1024 * 1024  # 5 MB max input text


# Global default config instance
DEFAULT_CONFIG = ConversionConfig()
