"""Content helpers: emoticons, Photon URLs, rich text, strings, media types."""

from services.emoticons import (
    CODE_POINT_SHORTCODES,
    LEGACY_ICON_EMOJI,
    lookup_emoji_for_legacy_icon_file,
    replace_legacy_icons_in_html,
    replace_legacy_icons_in_rich_text,
)
from services.photon import PhotonQuality, PhotonRequest, build_photon_url, is_mshots_url
from services.rich_text import ImageEmbed, RichText, RichTextDocument
from services.strings import replace_surrogate_pairs_with_entities

__all__ = [
    "CODE_POINT_SHORTCODES",
    "LEGACY_ICON_EMOJI",
    "ImageEmbed",
    "PhotonQuality",
    "PhotonRequest",
    "RichText",
    "RichTextDocument",
    "build_photon_url",
    "is_mshots_url",
    "lookup_emoji_for_legacy_icon_file",
    "replace_legacy_icons_in_html",
    "replace_legacy_icons_in_rich_text",
    "replace_surrogate_pairs_with_entities",
]
