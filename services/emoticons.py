"""Legacy WordPress smiley images <-> emoji <-> shortcodes.

Old posts embed smilies as images such as ``.../icon_smile.gif``. These helpers
swap those images for the equivalent emoji, either inside a parsed rich-text
document or on a raw HTML string.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TypeVar

import structlog

from core.config import get_settings
from services.rich_text import RichText, RichTextDocument

log = structlog.get_logger()

# Legacy icon file name -> emoji text
LEGACY_ICON_EMOJI: Mapping[str, str] = MappingProxyType(
    {
        "icon_mrgreen.gif": "\U0001f600",
        "icon_neutral.gif": "\U0001f614",
        "icon_twisted.gif": "\U0001f616",
        "icon_arrow.gif": "\u27a1",
        "icon_eek.gif": "\U0001f632",
        "icon_smile.gif": "\U0001f60a",
        "icon_confused.gif": "\U0001f615",
        "icon_cool.gif": "\U0001f60a",
        "icon_evil.gif": "\U0001f621",
        "icon_biggrin.gif": "\U0001f603",
        "icon_idea.gif": "\U0001f4a1",
        "icon_redface.gif": "\U0001f633",
        "icon_razz.gif": "\U0001f61d",
        "icon_rolleyes.gif": "\U0001f60f",
        "icon_wink.gif": "\U0001f609",
        "icon_cry.gif": "\U0001f622",
        "icon_surprised.gif": "\U0001f632",
        "icon_lol.gif": "\U0001f603",
        "icon_mad.gif": "\U0001f621",
        "icon_sad.gif": "\U0001f61e",
        "icon_exclaim.gif": "\u2757",
        "icon_question.gif": "\u2753",
    }
)

# Code point -> WordPress smiley shortcode
CODE_POINT_SHORTCODES: Mapping[int, str] = MappingProxyType(
    {
        10145: ":arrow:",
        128161: ":idea:",
        128512: ":mrgreen:",
        128515: ":D",
        128522: ":)",
        128521: ";)",
        128532: ":|",
        128533: ":?",
        128534: ":twisted:",
        128542: ":(",
        128545: ":evil:",
        128546: ":'(",
        128562: ":o",
        128563: ":oops:",
        128527: ":roll:",
        10071: ":!:",
        10067: ":?:",
    }
)

# Cheap pre-filter: every legacy icon file name starts with this
_LEGACY_ICON_MARKER = "icon_"

_DocT = TypeVar("_DocT", bound=RichTextDocument)


def lookup_emoji_for_legacy_icon_file(url: str | None, fallback: str = "") -> str:
    """Return the emoji for the icon file at the end of ``url``, else ``fallback``.

    Only the last path segment is compared, exactly and case-sensitively.
    """
    if url is None:
        return fallback
    file_name = url[url.rfind("/") + 1 :]
    return LEGACY_ICON_EMOJI.get(file_name, fallback)


def replace_legacy_icons_in_rich_text(document: _DocT, color: str | None = None) -> _DocT:
    """Replace legacy smiley images in ``document`` with coloured emoji text.

    Images that aren't legacy smilies are left alone. The document is changed
    in place and returned.
    """
    accent = color or get_settings().emoticon_color
    replaced = 0
    for embed in document.image_embeds():
        emoji = lookup_emoji_for_legacy_icon_file(embed.source)
        if not emoji:
            continue
        document.replace_embed(embed, emoji, color=accent)
        replaced += 1
    if replaced:
        log.debug("legacy_icons_replaced", count=replaced)
    return document


def replace_legacy_icons_in_html(html_text: str | None) -> str | None:
    """HTML-in, HTML-out variant of ``replace_legacy_icons_in_rich_text``.

    Input without ``icon_`` is returned untouched, skipping the parse. When it
    is parsed, the serialized output may differ from the input in unrelated
    markup (entities, quoting, unclosed tags).
    """
    if not html_text or _LEGACY_ICON_MARKER not in html_text:
        return html_text
    document = replace_legacy_icons_in_rich_text(RichText.from_html(html_text))
    return document.to_html()
