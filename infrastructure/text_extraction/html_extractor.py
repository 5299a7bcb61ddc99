"""HTML extractor that keeps visible text only."""
from __future__ import annotations

from html.parser import HTMLParser

from domain.interfaces import TextExtractor

_SKIPPED_TAGS = {"script", "style", "noscript", "template"}


class _VisibleTextParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs) -> None:
        if tag in _SKIPPED_TAGS:
            self._skip_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag in _SKIPPED_TAGS and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data: str) -> None:
        if self._skip_depth:
            return
        fragment = data.strip()
        if fragment:
            self._parts.append(fragment)

    def text(self) -> str:
        return " ".join(self._parts)


class HtmlExtractor(TextExtractor):
    """Strip markup from a page, dropping script and style bodies."""

    def extract(self, source: bytes | str) -> str:
        raw = source.decode("utf-8", errors="ignore") if isinstance(source, bytes) else source
        parser = _VisibleTextParser()
        parser.feed(raw)
        parser.close()
        return parser.text()


__all__ = ["HtmlExtractor"]
