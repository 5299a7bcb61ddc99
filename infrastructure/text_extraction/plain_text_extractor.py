"""Text extractor for plain files such as .txt and .md."""
from __future__ import annotations

from domain.interfaces import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decode raw bytes, dropping a byte-order mark and normalising newlines.

    Undecodable bytes are skipped rather than failing the whole document.
    """

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def extract(self, source: bytes | str) -> str:
        text = source.decode(self.encoding, errors="ignore") if isinstance(source, bytes) else source
        return text.replace("\r\n", "\n").replace("\r", "\n")


__all__ = ["PlainTextExtractor"]
