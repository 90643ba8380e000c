import re
import logging

from .config import DEFAULT_CONFIG
from .protector import ProtectionRule, protect_segments
from .scanner import tag_pattern, closing_pattern, rewrite_spans
from .sizes import size_to_heading

logger = logging.getLogger('bgg2md')

BLANK_EDGES_PATTERN = re.compile(r'^(?:\r?\n)+|(?:\r?\n)+$')


def trim_blank_lines(body):
    """Drop leading and trailing newlines, keeping everything in between."""
    return BLANK_EDGES_PATTERN.sub('', body)


class BggToMarkdown:
    """GeekText -> Markdown pipeline.

    The stages in STAGES run in that order over the working text; each one
    handles a single construct family.
    """

    CODE_RULE = ProtectionRule('CODE', tag_pattern('code'), closing_pattern('code'))

    STAGES = (
        'code',
        'inline_code',
        'styles',
        'links',
        'references',
        'quotes',
        'lists',
        'sizes',
        'line_breaks',
    )

    # (tag, markdown open, markdown close); [-] is an alias of [s]
    STYLE_TAGS = (
        ('b', '**', '**'),
        ('i', '*', '*'),
        ('u', '<u>', '</u>'),
        ('s', '~~', '~~'),
        ('-', '~~', '~~'),
    )

    LIST_ITEM_SPLIT = re.compile(r'\n?\[\*\]\s*', re.IGNORECASE)
    LIST_MARKER_REMNANT = re.compile(r'\[/?\*\]', re.IGNORECASE)
    LINE_BREAK_PATTERN = re.compile(r'\[br\s*/?\]', re.IGNORECASE)

    def __init__(self, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG

    @staticmethod
    def convert_text(text, config=None):
        """Convert GeekText to Markdown. Empty input is returned unchanged."""
        if not text:
            return text
        return BggToMarkdown(config).convert(text)

    def convert(self, text):
        protected = protect_segments(text, [self.CODE_RULE], config=self.config)
        out = protected.text
        for stage in self.STAGES:
            out = getattr(self, '_convert_' + stage)(out, protected)
        logger.debug("Ran %d stages over %d characters of GeekText", len(self.STAGES), len(text))
        return protected.restore(out)

    def _rewrite(self, text, name, render, attribute=None):
        out, count = rewrite_spans(text, tag_pattern(name, attribute), closing_pattern(name), render)
        if count:
            logger.debug("Converted %d [%s] tag(s)", count, name)
        return out

    # --- Stages ---

    def _convert_code(self, text, protected):
        def _fence(chunk):
            body = chunk[chunk.index(']') + 1:chunk.rindex('[')]
            return "\n```\n" + trim_blank_lines(body) + "\n```\n"

        protected.transform(self.CODE_RULE.name, _fence)
        return text

    def _convert_inline_code(self, text, protected):
        return self._rewrite(text, 'tt', lambda m, body: '`' + body + '`')

    def _convert_styles(self, text, protected):
        for tag, md_open, md_close in self.STYLE_TAGS:
            text = self._rewrite(
                text, re.escape(tag),
                lambda m, body, o=md_open, c=md_close: o + body + c,
            )
        return text

    def _convert_links(self, text, protected):
        text = self._rewrite(text, 'url', lambda m, body: f"[{body}]({m.group(1)})", attribute=r'[^\]]+')
        text = self._rewrite(text, 'url', lambda m, body: f"[{body.strip()}]({body.strip()})")
        return self._rewrite(text, 'img', lambda m, body: f"![]({body.strip()})")

    def _convert_references(self, text, protected):
        base = self.config.SITE_BASE_URL.rstrip('/')
        thing_path = self.config.THING_PATH
        user_path = self.config.USER_PATH

        text = self._rewrite(
            text, 'thing',
            lambda m, body: f"[{body}]({base}/{thing_path}/{m.group(1)})",
            attribute=r'\d+',
        )
        return self._rewrite(
            text, 'user',
            lambda m, body: f"[@{body}]({base}/{user_path}/{body})",
            attribute=r'\d+',
        )

    def _convert_quotes(self, text, protected):
        def _quote(m, body):
            lines = re.split(r'\r?\n', trim_blank_lines(body))
            return "\n".join("> " + line for line in lines) + "\n\n"

        return self._rewrite(text, 'quote', _quote)

    def _list_items(self, body):
        fragments = self.LIST_ITEM_SPLIT.split(body.replace('\r\n', '\n'))
        items = []
        for fragment in fragments:
            item = self.LIST_MARKER_REMNANT.sub('', fragment.strip()).strip()
            if item:
                items.append(item)
        return items

    def _convert_lists(self, text, protected):
        def _unordered(m, body):
            items = self._list_items(body)
            if not items:
                return ''
            return "\n" + "\n".join(f"- {item}" for item in items) + "\n"

        def _ordered(m, body):
            items = self._list_items(body)
            if not items:
                return ''
            return "\n" + "\n".join(f"{i}. {item}" for i, item in enumerate(items, 1)) + "\n"

        text = self._rewrite(text, 'list', _unordered)
        return self._rewrite(text, 'olist', _ordered)

    def _convert_sizes(self, text, protected):
        def _size(m, body):
            hashes = size_to_heading(m.group(1), config=self.config)
            inner = body.strip()
            if hashes and '\n' not in inner and len(inner) <= self.config.HEADING_MAX_LENGTH:
                return f"\n{hashes} {inner}\n\n"
            return inner

        return self._rewrite(text, 'size', _size, attribute=r'[^\]]*')

    def _convert_line_breaks(self, text, protected):
        return self.LINE_BREAK_PATTERN.sub("  \n", text)


def bgg_to_markdown(text, config=None):
    """Convert GeekText to Markdown.

    Args:
        text: GeekText source. Empty or falsy input is returned unchanged.
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.
    """
    return BggToMarkdown.convert_text(text, config=config)
