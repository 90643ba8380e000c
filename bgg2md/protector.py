"""
Segment protection for the conversion pipelines.

Spans that later passes must not touch (code blocks, inline code) are
swapped for opaque placeholder tokens before any rewriting and put back
once all passes have run.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple, Optional, Pattern

from .config import DEFAULT_CONFIG

logger = logging.getLogger('bgg2md')


class ProtectionRule(NamedTuple):
    """A protected span: `start` alone, or `start` through the next `end`."""
    name: str
    start: Pattern
    end: Optional[Pattern] = None


class ProtectedText:
    """Working text plus the token -> original mapping of one conversion call."""

    def __init__(self, text: str, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.text = text
        self.segments = {}
        self._counter = 0
        self._consumed = set()
        self._token_re = re.compile(
            re.escape(self.config.PLACEHOLDER_OPEN)
            + r'([A-Z_]+)(\d+)'
            + re.escape(self.config.PLACEHOLDER_CLOSE)
        )

    def add(self, name: str, original: str) -> str:
        """Store `original` and return the fresh token standing in for it."""
        token = f"{self.config.PLACEHOLDER_OPEN}{name}{self._counter}{self.config.PLACEHOLDER_CLOSE}"
        self._counter += 1
        self.segments[token] = original
        return token

    def protect(self, rule: ProtectionRule) -> int:
        """Replace every span matching `rule` in the working text.

        Scanning for the rule stops at the first start match that has no
        end match after it; the remainder stays unprotected.

        Returns:
            Number of spans protected
        """
        text = self.text
        pos = 0
        count = 0
        while True:
            start_match = rule.start.search(text, pos)
            if not start_match:
                break
            start_idx = start_match.start()
            end_idx = start_match.end()
            if rule.end is not None:
                end_match = rule.end.search(text, end_idx)
                if not end_match:
                    logger.debug("Unterminated %s span at offset %d left unprotected", rule.name, start_idx)
                    break
                end_idx = end_match.end()
            if end_idx == start_idx:
                # Empty match; step over it to keep the scan moving
                pos = start_idx + 1
                continue

            token = self.add(rule.name, text[start_idx:end_idx])
            text = text[:start_idx] + token + text[end_idx:]
            pos = start_idx + len(token)
            count += 1

        self.text = text
        return count

    def transform(self, name: str, func: Callable[[str], str]) -> None:
        """Rewrite the stored originals of every `name` segment in place."""
        for token, original in self.segments.items():
            match = self._token_re.fullmatch(token)
            if match and match.group(1) == name:
                self.segments[token] = func(original)

    def restore(self, text: str) -> str:
        """Replace every known token in `text` with its stored segment.

        Unknown tokens are left verbatim. A segment that itself contains
        tokens is expanded in turn; a token met again while its own segment
        is still being expanded is left verbatim.
        """
        out = []
        expanding = set()
        # (string, position, token whose segment the string is)
        stack = [(text, 0, None)]
        while stack:
            chunk, pos, owner = stack.pop()
            match = self._token_re.search(chunk, pos)
            if not match:
                out.append(chunk[pos:])
                expanding.discard(owner)
                continue

            out.append(chunk[pos:match.start()])
            stack.append((chunk, match.end(), owner))

            token = match.group(0)
            if token not in self.segments:
                logger.warning("No protected segment for placeholder %r", token)
                out.append(token)
                continue
            if token in expanding:
                logger.warning("Placeholder %r occurs inside its own segment", token)
                out.append(token)
                continue
            if token in self._consumed:
                logger.warning("Placeholder %r restored more than once", token)
            self._consumed.add(token)
            expanding.add(token)
            stack.append((self.segments[token], 0, token))

        missing = len(self.segments) - len(self._consumed)
        if missing:
            logger.warning("%d protected segment(s) were not restored", missing)
        return "".join(out)


def protect_segments(text: str, rules, config=None) -> ProtectedText:
    """Protect every span matched by `rules`, applied in order.

    Args:
        text: Source text
        rules: Iterable of ProtectionRule
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        ProtectedText whose `.text` is the working text and whose
        `.restore()` reverses the substitution
    """
    protected = ProtectedText(text, config=config)
    for rule in rules:
        count = protected.protect(rule)
        if count:
            logger.debug("Protected %d %s segment(s)", count, rule.name)
    return protected
