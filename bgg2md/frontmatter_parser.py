"""
YAML front matter handling using python-frontmatter.
"""

import logging

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

logger = logging.getLogger('bgg2md')


def split_frontmatter(markdown_text: str) -> tuple[dict, str]:
    """
    Split a Markdown string into its YAML front matter and body.

    Only a leading block that loads as a YAML mapping counts as front
    matter. A post that merely opens with a `---` rule (plain text, a
    scalar, or invalid YAML between two rules) is returned unchanged.

    Args:
        markdown_text: Markdown content as string

    Returns:
        (metadata_dict, markdown_content_without_frontmatter)
    """
    if not frontmatter.checks(markdown_text):
        return {}, markdown_text

    handler = YAMLHandler()
    try:
        block, _ = handler.split(markdown_text)
        found = handler.load(block)
    except (ValueError, yaml.YAMLError) as e:
        logger.debug("Leading '---' block is not YAML front matter: %s", e)
        return {}, markdown_text

    if not isinstance(found, dict):
        logger.debug("Leading '---' block is not a mapping, keeping it as text")
        return {}, markdown_text

    post = frontmatter.loads(markdown_text)
    return dict(post.metadata), post.content


def attach_frontmatter(markdown_text: str, metadata: dict) -> str:
    """
    Prefix Markdown with a YAML front matter block built from `metadata`.

    Returns the text unchanged when there is no metadata.
    """
    if not metadata:
        return markdown_text
    post = frontmatter.Post(markdown_text, **metadata)
    return frontmatter.dumps(post) + "\n"
