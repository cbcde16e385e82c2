"""Find web addresses, e-mail addresses and URLs in text for autolinking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional, Union

_SAFE_PREFIXES = (b"http://", b"https://", b"/", b"#", b"ftp://", b"mailto:")
_SPACE = frozenset(b" \t\n\v\f\r")
_TRAILING_PUNCTUATION = frozenset(b"?!.,:")
_EMAIL_LOCAL_EXTRA = frozenset(b".+-_")
_PAIRS = {ord('"'): ord('"'), ord("'"): ord("'"), ord(")"): ord("("), ord("]"): ord("["), ord("}"): ord("{")}


class AutolinkFlags(IntFlag):
    """Options for URL matching."""

    NONE = 0
    SHORT_DOMAINS = 1


@dataclass(frozen=True)
class AutolinkMatch:
    """A link found in text.

    ``link`` is the text of the link, ``rewind`` how many bytes it starts
    before the offset searched from, and ``end`` how many bytes it reaches
    past that offset.
    """

    link: bytes
    rewind: int
    end: int


def _isalpha(c: int) -> bool:
    return 65 <= c <= 90 or 97 <= c <= 122


def _isalnum(c: int) -> bool:
    return _isalpha(c) or 48 <= c <= 57


def _isspace(c: int) -> bool:
    return c in _SPACE


def _ispunct(c: int) -> bool:
    return 33 <= c <= 126 and not _isalnum(c)


def _as_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def is_safe(url: Union[bytes, str]) -> bool:
    """Whether ``url`` starts with a safe scheme or path followed by an alphanumeric."""
    data = _as_bytes(url)
    for prefix in _SAFE_PREFIXES:
        size = len(prefix)
        if len(data) > size and data[:size].lower() == prefix and _isalnum(data[size]):
            return True
    return False


def _delimit(data: bytes, link_end: int) -> int:
    """Trim trailing punctuation and unbalanced closers from a candidate link."""
    bracket = data.find(b"<", 0, link_end)
    if bracket >= 0:
        link_end = bracket

    while link_end > 0:
        last = data[link_end - 1]
        if last in _TRAILING_PUNCTUATION:
            link_end -= 1
        elif last == ord(";"):
            new_end = link_end - 2
            if new_end < 0:
                link_end -= 1
                continue
            while new_end > 0 and _isalpha(data[new_end]):
                new_end -= 1
            if new_end < link_end - 2 and data[new_end] == ord("&"):
                link_end = new_end
            else:
                link_end -= 1
        else:
            break

    if link_end == 0:
        return 0

    closer = data[link_end - 1]
    opener = _PAIRS.get(closer)
    if opener is not None:
        span = data[:link_end]
        opening = span.count(opener)
        closing = 0 if opener == closer else span.count(closer)
        if closing != opening:
            link_end -= 1

    return link_end


def _check_domain(data: bytes, allow_short: bool) -> int:
    if not data or not _isalnum(data[0]):
        return 0
    dots = 0
    i = 1
    while i < len(data) - 1:
        c = data[i]
        if c in b".:":
            dots += 1
        elif not _isalnum(c) and c != ord("-"):
            break
        i += 1
    if allow_short:
        return i
    return i if dots else 0


def _extend_to_space(data: bytes, link_end: int) -> int:
    while link_end < len(data) and not _isspace(data[link_end]):
        link_end += 1
    return link_end


def _check_offset(data: bytes, offset: int) -> None:
    if not 0 <= offset <= len(data):
        raise IndexError("offset outside the data")


def match_www(data: Union[bytes, str], offset: int) -> Optional[AutolinkMatch]:
    """Match a ``www.`` address starting at ``offset``, or return ``None``."""
    text = _as_bytes(data)
    _check_offset(text, offset)
    if offset > 0:
        before = text[offset - 1]
        if not _ispunct(before) and not _isspace(before):
            return None
    view = text[offset:]
    if len(view) < 4 or not view.startswith(b"www."):
        return None
    link_end = _check_domain(view, False)
    if link_end == 0:
        return None
    link_end = _delimit(view, _extend_to_space(view, link_end))
    if link_end == 0:
        return None
    return AutolinkMatch(view[:link_end], 0, link_end)


def match_email(data: Union[bytes, str], offset: int) -> Optional[AutolinkMatch]:
    """Match an e-mail address around the ``@`` at ``offset``, or return ``None``."""
    text = _as_bytes(data)
    _check_offset(text, offset)
    rewind = 0
    while rewind < offset:
        c = text[offset - 1 - rewind]
        if not (_isalnum(c) or c in _EMAIL_LOCAL_EXTRA):
            break
        rewind += 1
    if rewind == 0:
        return None

    view = text[offset:]
    size = len(view)
    ats = dots = 0
    link_end = 0
    while link_end < size:
        c = view[link_end]
        if _isalnum(c):
            pass
        elif c == ord("@"):
            ats += 1
        elif c == ord(".") and link_end < size - 1:
            dots += 1
        elif c not in b"-_":
            break
        link_end += 1

    if link_end < 2 or ats != 1 or dots == 0 or not _isalpha(view[link_end - 1]):
        return None
    link_end = _delimit(view, link_end)
    if link_end == 0:
        return None
    return AutolinkMatch(text[offset - rewind:offset + link_end], rewind, link_end)


def match_url(
    data: Union[bytes, str],
    offset: int,
    flags: AutolinkFlags = AutolinkFlags.NONE,
) -> Optional[AutolinkMatch]:
    """Match a URL whose ``://`` starts at ``offset``, or return ``None``."""
    text = _as_bytes(data)
    _check_offset(text, offset)
    view = text[offset:]
    if len(view) < 4 or view[1] != ord("/") or view[2] != ord("/"):
        return None
    rewind = 0
    while rewind < offset and _isalpha(text[offset - 1 - rewind]):
        rewind += 1
    if not is_safe(text[offset - rewind:]):
        return None

    link_end = len(b"://")
    domain_len = _check_domain(view[link_end:], bool(flags & AutolinkFlags.SHORT_DOMAINS))
    if domain_len == 0:
        return None
    link_end = _delimit(view, _extend_to_space(view, link_end + domain_len))
    if link_end == 0:
        return None
    return AutolinkMatch(text[offset - rewind:offset + link_end], rewind, link_end)