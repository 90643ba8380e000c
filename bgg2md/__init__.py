"""
bgg2md - Convert between BoardGameGeek GeekText and Markdown

This package converts forum posts written in GeekText bracket-tag markup to
Markdown and back, keeping code blocks out of reach of the markup rewriting.
"""

from .BggToMarkdown import BggToMarkdown, bgg_to_markdown
from .MarkdownToBgg import MarkdownToBgg, markdown_to_bgg
from .protector import ProtectionRule, ProtectedText, protect_segments
from .sizes import size_to_heading, heading_to_size
from .frontmatter_parser import split_frontmatter, attach_frontmatter
from .config import ConversionConfig, DEFAULT_CONFIG
from .exceptions import Bgg2MdError, SecurityError
from .converter_api import (
    BGG_TO_MD,
    MD_TO_BGG,
    ConvertedDocument,
    check_input_size,
    convert,
    convert_document,
    render_html,
)

__version__ = "0.1.0"
__all__ = [
    "BggToMarkdown",
    "MarkdownToBgg",
    "bgg_to_markdown",
    "markdown_to_bgg",
    "ProtectionRule",
    "ProtectedText",
    "protect_segments",
    "size_to_heading",
    "heading_to_size",
    "split_frontmatter",
    "attach_frontmatter",
    "ConversionConfig",
    "DEFAULT_CONFIG",
    "Bgg2MdError",
    "SecurityError",
    "BGG_TO_MD",
    "MD_TO_BGG",
    "ConvertedDocument",
    "check_input_size",
    "convert",
    "convert_document",
    "render_html",
]
