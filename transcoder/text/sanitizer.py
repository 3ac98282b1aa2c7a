"""Cleanup of raw txtwrite page output.

Processing flow:
1. Normalize CRLF / CR line breaks to LF.
2. Drop UTF-8 non-breaking-space and block-element byte sequences.
3. Decode UTF-8 and drop zero-width characters and byte-order marks.
4. Escape every remaining non-ASCII code point as &#xHEX;.
5. Collapse whitespace runs to one space and trim.

The result is plain ASCII, safe for JSON/HTTP transport.
"""

import re

_LINE_BREAK_RE = re.compile(rb"\r\n?")
# U+00A0 and U+2580..U+259F (block elements) encoded as UTF-8.
_ARTIFACT_BYTES_RE = re.compile(rb"\xc2\xa0|\xe2\x96[\x80-\x9f]")
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\ufeff]")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def _char_reference(match: re.Match[str]) -> str:
    return f"&#x{ord(match.group(0)):X};"


def clean_page_text(raw: bytes) -> str:
    """Turn the raw bytes of one page file into a single cleaned ASCII line."""
    data = _LINE_BREAK_RE.sub(b"\n", raw)
    data = _ARTIFACT_BYTES_RE.sub(b"", data)
    text = data.decode("utf-8", errors="replace")
    text = _ZERO_WIDTH_RE.sub("", text)
    text = _NON_ASCII_RE.sub(_char_reference, text)
    return _WHITESPACE_RE.sub(" ", text).strip()
