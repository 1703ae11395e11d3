"""String helpers for post content.

Includes the emoji -> shortcode/entity pass used before sending text to
servers that can't store characters outside the Basic Multilingual Plane.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Sequence

from services.emoticons import CODE_POINT_SHORTCODES

_BMP_MAX = 0xFFFF
_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)

# \d is any Unicode decimal digit, which int() also accepts
_INT_RE = re.compile(r"[+-]?\d+")
_INT32_RANGE = range(-(2**31), 2**31)
_INT64_RANGE = range(-(2**63), 2**63)


# ---------------------------------------------------------------------------
# Emoji -> shortcodes / numeric references
# ---------------------------------------------------------------------------


def _is_surrogate(code_point: int) -> bool:
    return code_point in _HIGH_SURROGATES or code_point in _LOW_SURROGATES


def replace_surrogate_pairs_with_entities(text: str | None) -> str:
    """Replace characters outside the BMP with smiley shortcodes or ``&#x..;``.

    Characters that need a surrogate pair in UTF-16 become their WordPress
    shortcode when there is one (U+1F603 -> ``:D``) and a lowercase hex
    character reference otherwise (U+1F9E0 -> ``&#x1f9e0;``). BMP characters
    are copied through.

    Text decoded with ``surrogatepass`` may still hold raw surrogate code
    units: a high/low pair is combined first, a lone surrogate is written as
    a reference to itself.
    """
    if not text:
        return ""

    out: list[str] = []
    length = len(text)
    offset = 0
    while offset < length:
        code_point = ord(text[offset])
        step = 1
        if (
            code_point in _HIGH_SURROGATES
            and offset + 1 < length
            and ord(text[offset + 1]) in _LOW_SURROGATES
        ):
            code_point = 0x10000 + ((code_point - 0xD800) << 10) + (ord(text[offset + 1]) - 0xDC00)
            step = 2

        if code_point > _BMP_MAX or _is_surrogate(code_point):
            out.append(CODE_POINT_SHORTCODES.get(code_point) or f"&#x{code_point:x};")
        else:
            out.append(text[offset])
        offset += step
    return "".join(out)


# ---------------------------------------------------------------------------
# Comparison / null handling
# ---------------------------------------------------------------------------


def compare(s1: str | None, s2: str | None) -> int:
    """Three-way compare; ``None`` sorts before any string."""
    if s1 is s2:
        return 0
    if s1 is None:
        return -1
    if s2 is None:
        return 1
    return (s1 > s2) - (s1 < s2)


def compare_ignore_case(s1: str | None, s2: str | None) -> int:
    if s1 is None or s2 is None:
        return compare(s1, s2)
    return compare(s1.casefold(), s2.casefold())


def not_null_str(s: str | None) -> str:
    return "" if s is None else s


def merge_string_lists(first: Sequence[str] | None, second: Sequence[str] | None) -> list[str]:
    """Concatenate two lists, treating ``None``/empty as absent. Duplicates are kept."""
    if not first:
        return list(second or [])
    if not second:
        return list(first)
    return [*first, *second]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def capitalize(s: str | None) -> str | None:
    """Title-case the first character only; the rest is left as is."""
    if not s:
        return s
    first = s[0]
    if first.istitle():
        return s
    return first.title() + s[1:]


def remove_trailing_slash(s: str | None) -> str | None:
    if not s or not s.endswith("/"):
        return s
    return s[:-1]


def convert_html_tags_for_upload(source: str) -> str:
    """``<b>``/``<i>`` -> ``<strong>``/``<em>``."""
    return (
        source.replace("<b>", "<strong>")
        .replace("</b>", "</strong>")
        .replace("<i>", "<em>")
        .replace("</i>", "</em>")
    )


def convert_html_tags_for_display(source: str) -> str:
    """``<strong>``/``<em>`` -> ``<b>``/``<i>``."""
    return (
        source.replace("<strong>", "<b>")
        .replace("</strong>", "</b>")
        .replace("<em>", "<i>")
        .replace("</em>", "</i>")
    )


def add_p_tags(source: str) -> str:
    """Wrap blank-line separated blocks in ``<p>``; single newlines become ``<br>``."""
    blocks = source.split("\n\n")
    while blocks and not blocks[-1]:
        blocks.pop()
    if not blocks:
        return source

    wrapped: list[str] = []
    for block in blocks:
        trimmed = block.strip()
        if not trimmed:
            continue
        trimmed = (
            trimmed.replace("<br />", "<br>")
            .replace("<br/>", "<br>")
            .replace("<br>\n", "<br>")
            .replace("\n", "<br>")
        )
        wrapped.append(f"<p>{trimmed}</p>")
    return "".join(wrapped)


def strip_non_valid_xml_characters(s: str | None) -> str:
    """Drop characters outside the XML 1.0 ``Char`` production."""
    if not s:
        return ""
    return "".join(
        ch
        for ch in s
        if ch in "\t\n\r"
        or "\x20" <= ch <= "\ud7ff"
        or "\ue000" <= ch <= "\ufffd"
        or "\U00010000" <= ch <= "\U0010ffff"
    )


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


def md5_hash(s: str) -> str:
    """32-char lowercase hex MD5 of the UTF-8 bytes (gravatar-style ids)."""
    return hashlib.md5(s.encode("utf-8"), usedforsecurity=False).hexdigest()


def sha256_hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _parse_int(s: str | None, default: int, bounds: range) -> int:
    if s is None or not _INT_RE.fullmatch(s):
        return default
    value = int(s)
    return value if value in bounds else default


def string_to_int(s: str | None, default: int = 0) -> int:
    """Parse a signed 32-bit decimal, returning ``default`` on anything else."""
    return _parse_int(s, default, _INT32_RANGE)


def string_to_long(s: str | None, default: int = 0) -> int:
    """Like ``string_to_int`` with a signed 64-bit range."""
    return _parse_int(s, default, _INT64_RANGE)
