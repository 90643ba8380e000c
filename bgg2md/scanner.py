"""
Cursor-based recognizer for paired bracket tags.

Each call walks the working text once: find an opening tag, find the first
closing tag after it, hand (opening match, body) to a renderer, splice the
replacement in and continue after it. The replacement is never rescanned.
"""

import re


def tag_pattern(name, attribute=None):
    """Compile a case-insensitive opening tag pattern.

    Args:
        name: Tag name as a regex fragment (e.g. 'b', '-', 'size')
        attribute: Regex fragment for the `=value` part, captured as group 1.
                   None for a bare tag.
    """
    if attribute is None:
        return re.compile(r'\[' + name + r'\]', re.IGNORECASE)
    return re.compile(r'\[' + name + r'=(' + attribute + r')\]', re.IGNORECASE)


def closing_pattern(name):
    return re.compile(r'\[/' + name + r'\]', re.IGNORECASE)


def next_span(text, pos, open_re, close_re):
    """Find the next `open ... close` span at or after `pos`.

    Returns:
        (opening match, body, span end) or None when there is no complete span
    """
    open_match = open_re.search(text, pos)
    if not open_match:
        return None
    close_match = close_re.search(text, open_match.end())
    if not close_match:
        return None
    return open_match, text[open_match.end():close_match.start()], close_match.end()


def rewrite_spans(text, open_re, close_re, render):
    """Replace every non-overlapping `open ... close` span.

    The first closing tag after an opening tag ends the span. Scanning
    stops at the first opening tag that has no closing tag after it.

    Args:
        text: Working text
        open_re: Compiled opening tag pattern
        close_re: Compiled closing tag pattern
        render: Callable (opening match, body) -> replacement string

    Returns:
        (new text, number of spans replaced)
    """
    out = []
    pos = 0
    count = 0
    while True:
        span = next_span(text, pos, open_re, close_re)
        if span is None:
            break
        open_match, body, end = span
        out.append(text[pos:open_match.start()])
        out.append(render(open_match, body))
        pos = end
        count += 1
    out.append(text[pos:])
    return ''.join(out), count
