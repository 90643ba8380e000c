import re
import logging

from .config import DEFAULT_CONFIG
from .protector import ProtectionRule, protect_segments
from .sizes import heading_to_size
from .BggToMarkdown import trim_blank_lines

logger = logging.getLogger('bgg2md')


class MarkdownToBgg:
    """Markdown -> GeekText pipeline.

    Mirror of BggToMarkdown: fenced code is protected first, then the
    stages in STAGES run in order, then protected spans are restored.
    """

    CODE_RULE = ProtectionRule('CODE', re.compile(r'```[^\n]*\n'), re.compile(r'\n```'))
    INLINE_CODE_RULE = 'TT'

    STAGES = (
        'code',
        'inline_code',
        'quotes',
        'headings',
        'emphasis',
        'links',
        'lists',
        'line_breaks',
        'underline',
    )

    # Fenced code chunk: opening fence (+ discarded info string), body, closing fence
    FENCE_PATTERN = re.compile(r'\A```[^\n]*\n([\s\S]*)\n```\Z')
    INLINE_CODE_PATTERN = re.compile(r'`([^`\n]+)`')
    QUOTE_LINE_PATTERN = re.compile(r'^>\s?')
    HEADING_PATTERN = re.compile(r'^(#{1,6})[ \t]+(.+)$', re.MULTILINE)

    BOLD_PATTERNS = (
        re.compile(r'\*\*([\s\S]*?)\*\*'),
        re.compile(r'(?<!\w)__(?=\S)([\s\S]*?\S)__(?!\w)'),
    )
    ITALIC_PATTERNS = (
        re.compile(r'(?<!\*)\*(?=[^\s*])([\s\S]*?[^\s*])\*(?!\*)'),
        # No intraword underscores (snake_case_names stay untouched)
        re.compile(r'(?<!\w)_(?=[^\s_])([\s\S]*?[^\s_])_(?!\w)'),
    )
    STRIKE_PATTERN = re.compile(r'~~([\s\S]*?)~~')

    # Link text may hold one level of brackets, e.g. [b]...[/b] from bold,
    # but never starts at a closing tag such as [/b]
    LINK_TEXT = r'((?!/)(?:[^\[\]\n]|\[[^\[\]\n]*\])+)'
    # Targets carry a scheme or are site-relative, so `**Price**(USD)` stays text
    LINK_TARGET = r'\(\s*((?:[A-Za-z][A-Za-z0-9+.-]*:|/|#)[^)\s]*)(?:\s+"[^"]*")?\s*\)'
    IMAGE_PATTERN = re.compile(r'!\[([^\]]*)\]' + LINK_TARGET)
    LINK_PATTERN = re.compile(r'\[' + LINK_TEXT + r'\]' + LINK_TARGET)
    THING_URL_PATTERN = re.compile(
        r'boardgamegeek\.com/(?:thing|boardgame|boardgameexpansion)/(\d+)', re.IGNORECASE)
    USER_URL_PATTERN = re.compile(r'boardgamegeek\.com/user/([A-Za-z0-9_-]+)', re.IGNORECASE)

    BULLET_ITEM_PATTERN = re.compile(r'^([ \t]*)[-*+][ \t]+(.+)$')
    ORDERED_ITEM_PATTERN = re.compile(r'^([ \t]*)\d+\.[ \t]+(.+)$')

    HARD_BREAK_PATTERN = re.compile(r' {2,}\n')
    UNDERLINE_PATTERN = re.compile(r'<u>([\s\S]*?)</u>', re.IGNORECASE)

    def __init__(self, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG

    @staticmethod
    def convert_text(text, config=None):
        """Convert Markdown to GeekText. Empty input is returned unchanged."""
        if not text:
            return text
        return MarkdownToBgg(config).convert(text)

    def convert(self, text):
        protected = protect_segments(text, [self.CODE_RULE], config=self.config)
        out = protected.text
        for stage in self.STAGES:
            out = getattr(self, '_convert_' + stage)(out, protected)
        logger.debug("Ran %d stages over %d characters of Markdown", len(self.STAGES), len(text))
        return protected.restore(out)

    # --- Stages ---

    def _convert_code(self, text, protected):
        def _code_tag(chunk):
            match = self.FENCE_PATTERN.match(chunk)
            if not match:
                return chunk
            return f"[code]\n{trim_blank_lines(match.group(1))}\n[/code]"

        protected.transform(self.CODE_RULE.name, _code_tag)
        return text

    def _convert_inline_code(self, text, protected):
        # Converted spans are protected so emphasis never reaches inside them
        return self.INLINE_CODE_PATTERN.sub(
            lambda m: protected.add(self.INLINE_CODE_RULE, f"[tt]{m.group(1)}[/tt]"), text)

    def _convert_quotes(self, text, protected):
        """Wrap each run of `>` lines in a quote tag; nested markers nest tags."""
        out = []
        depth = 0
        for line in re.split(r'\r?\n', text):
            level = 0
            while True:
                marker = self.QUOTE_LINE_PATTERN.match(line)
                if not marker:
                    break
                line = line[marker.end():]
                level += 1

            while depth < level:
                out.append("[quote]")
                depth += 1
            while depth > level:
                out.append("[/quote]")
                depth -= 1
            out.append(line)

        out.extend("[/quote]" for _ in range(depth))
        return "\n".join(out)

    def _convert_headings(self, text, protected):
        def _heading(m):
            size = heading_to_size(m.group(1), config=self.config)
            return f"[size={size}]{m.group(2).strip()}[/size]"

        return self.HEADING_PATTERN.sub(_heading, text)

    def _convert_emphasis(self, text, protected):
        for pattern in self.BOLD_PATTERNS:
            text = pattern.sub(r'[b]\1[/b]', text)
        for pattern in self.ITALIC_PATTERNS:
            text = pattern.sub(r'[i]\1[/i]', text)
        return self.STRIKE_PATTERN.sub(r'[s]\1[/s]', text)

    def _link_tag(self, m):
        label, href = m.group(1), m.group(2)
        thing = self.THING_URL_PATTERN.search(href)
        if thing:
            return f"[thing={thing.group(1)}]{label}[/thing]"
        user = self.USER_URL_PATTERN.search(href)
        if user:
            return f"[user={self.config.USER_ID_PLACEHOLDER}]{user.group(1)}[/user]"
        return f"[url={href}]{label}[/url]"

    def _convert_links(self, text, protected):
        # Images first, so the link pattern never sees the ![...] form
        text = self.IMAGE_PATTERN.sub(lambda m: f"[img]{m.group(2)}[/img]", text)
        return self.LINK_PATTERN.sub(self._link_tag, text)

    def _collapse_lists(self, text, item_pattern, tag):
        lines = text.split("\n")
        out = []
        i = 0
        while i < len(lines):
            first = item_pattern.match(lines[i])
            if not first:
                out.append(lines[i])
                i += 1
                continue

            indent = first.group(1)
            items = []
            while i < len(lines):
                m = item_pattern.match(lines[i])
                if not m or m.group(1) != indent:
                    break
                items.append(m.group(2).strip())
                i += 1

            out.append(f"[{tag}]")
            out.extend(f"[*] {item}" for item in items)
            out.append(f"[/{tag}]")
        return "\n".join(out)

    def _convert_lists(self, text, protected):
        text = self._collapse_lists(text, self.BULLET_ITEM_PATTERN, 'list')
        return self._collapse_lists(text, self.ORDERED_ITEM_PATTERN, 'olist')

    def _convert_line_breaks(self, text, protected):
        return self.HARD_BREAK_PATTERN.sub("[br]\n", text)

    def _convert_underline(self, text, protected):
        return self.UNDERLINE_PATTERN.sub(r'[u]\1[/u]', text)


def markdown_to_bgg(text, config=None):
    """Convert Markdown to GeekText.

    Args:
        text: Markdown source. Empty or falsy input is returned unchanged.
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.
    """
    return MarkdownToBgg.convert_text(text, config=config)
