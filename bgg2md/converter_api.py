"""
High-level convenience API for bgg2md.

Provides simple functions to convert between GeekText and Markdown without
needing to know which pipeline class handles which direction.
"""

import logging
from typing import NamedTuple

from marko import Markdown

from .BggToMarkdown import bgg_to_markdown
from .MarkdownToBgg import markdown_to_bgg
from .frontmatter_parser import split_frontmatter, attach_frontmatter
from .config import DEFAULT_CONFIG
from .exceptions import SecurityError

logger = logging.getLogger('bgg2md')

BGG_TO_MD = "bgg2md"
MD_TO_BGG = "md2bgg"


class ConvertedDocument(NamedTuple):
    text: str
    metadata: dict


def check_input_size(text, config=None):
    """Raise SecurityError when `text` exceeds the configured input limit."""
    config = config if config is not None else DEFAULT_CONFIG
    size = len(text.encode("utf-8"))
    if size > config.MAX_INPUT_SIZE:
        raise SecurityError(f"Input too large: {size} bytes (max {config.MAX_INPUT_SIZE} bytes)")


def convert(text, direction=BGG_TO_MD, config=None):
    """Convert `text` in the given direction.

    Args:
        text: Source text. Empty or falsy input is returned unchanged.
        direction: BGG_TO_MD or MD_TO_BGG. Any other value is treated as
                   MD_TO_BGG.
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.
    """
    if direction == BGG_TO_MD:
        return bgg_to_markdown(text, config=config)
    if direction != MD_TO_BGG:
        logger.debug("Unknown direction %r, converting Markdown to GeekText", direction)
    return markdown_to_bgg(text, config=config)


def convert_document(text, direction=BGG_TO_MD, metadata=None, config=None):
    """Front-matter aware conversion.

    Markdown input has its YAML front matter split off before conversion
    and returned as `metadata`. For GeekText input, `metadata` (if any) is
    written as front matter at the top of the Markdown output.
    A leading `---` block that is not a YAML mapping stays in the body.
    """
    if direction == BGG_TO_MD:
        body = bgg_to_markdown(text, config=config) or ''
        metadata = dict(metadata or {})
        return ConvertedDocument(attach_frontmatter(body, metadata), metadata)

    found, body = split_frontmatter(text or '')
    if found:
        logger.debug("Stripped front matter keys: %s", ", ".join(sorted(found)))
    return ConvertedDocument(convert(body, direction, config=config), found)


def render_html(markdown_text):
    """Render Markdown to an HTML fragment (GFM: strikethrough, tables, raw <u>)."""
    if not markdown_text:
        return ''
    return Markdown(extensions=['gfm']).convert(markdown_text)
