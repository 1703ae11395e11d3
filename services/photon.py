"""Photon image URLs (https://developer.wordpress.com/docs/photon/).

``build_photon_url`` rewrites an arbitrary image URL so it is served resized
and re-encoded by Photon. The URL's shape decides what happens to it:

1. empty -> ``""``; no ``://`` -> returned unmodified
2. ``#fragment`` and ``?query`` are dropped
3. mshots screenshots get plain ``w``/``h`` and skip Photon entirely
4. private Atomic sites go through the authenticated file proxy
5. URLs already on a Photon host, or on WordPress.com, just get the query
6. anything else is routed through the main Photon host

Malformed URLs never raise: the private-site branch answers ``""``, every
other branch hands back something usable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

import structlog

from core.config import get_settings
from core.exceptions import MalformedUrlError

log = structlog.get_logger()

_SCHEME_SEPARATOR = "://"
_MSHOTS_MARKER = "/mshots/"

# Schemes accepted for private-site image URLs
_URL_SCHEMES = frozenset({"http", "https", "ftp", "file", "jar"})


class PhotonQuality(Enum):
    """Quality tier -> Photon ``quality`` value. Only affects JPEGs."""

    HIGH = 100
    MEDIUM = 65
    LOW = 35


@dataclass(frozen=True, slots=True)
class PhotonRequest:
    """Resize parameters for one Photon URL. Zero width/height means unset."""

    width: int = 0
    height: int = 0
    quality: PhotonQuality = PhotonQuality.MEDIUM
    is_private_atomic_site: bool = False

    def query_params(self) -> list[str]:
        """``key=value`` pairs in Photon order: strip, quality, then sizing."""
        # strip=info removes Exif, IPTC and comment data from the output image
        params = ["strip=info", f"quality={self.quality.value}"]
        if self.width > 0 and self.height > 0:
            params.append(f"resize={self.width},{self.height}")
        elif self.width > 0:
            params.append(f"w={self.width}")
        elif self.height > 0:
            params.append(f"h={self.height}")
        return params


def is_mshots_url(image_url: str | None) -> bool:
    """True if ``image_url`` is an obvious mshots (site screenshot) URL."""
    return image_url is not None and _MSHOTS_MARKER in image_url


def _remove_query(url: str) -> str:
    return url.partition("?")[0]


def _query_of(url: str) -> str:
    return url.partition("?")[2]


def _is_https(url: str) -> bool:
    return url[:8].lower() == "https://"


def _host_of(netloc: str) -> str:
    """Host part of ``netloc`` as written: no userinfo, no port, case kept."""
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        return host[: host.find("]") + 1]
    return host.partition(":")[0]


def _atomic_proxy_url(image_url: str, query: str) -> str:
    """Route an image on a private Atomic site through the authenticated proxy.

    :raises MalformedUrlError: if the URL has an unknown scheme, a bad port or no host.
    """
    settings = get_settings()
    try:
        parts = urlsplit(image_url)
        _ = parts.port  # ValueError for a non-numeric or out-of-range port
    except ValueError as exc:
        raise MalformedUrlError(f"Cannot parse image URL: {image_url!r}") from exc
    if parts.scheme.lower() not in _URL_SCHEMES:
        raise MalformedUrlError(f"Unsupported scheme in image URL: {image_url!r}")
    slug = _host_of(parts.netloc)
    if not slug:
        raise MalformedUrlError(f"Image URL has no host: {image_url!r}")

    return (
        f"{settings.atomic_proxy_url_prefix}{slug}{settings.atomic_proxy_url_suffix}"
        f"?path={parts.path}&{query}"
    )


def build_photon_url(
    image_url: str | None,
    width: int,
    height: int,
    quality: PhotonQuality = PhotonQuality.MEDIUM,
    *,
    is_private_atomic_site: bool = False,
) -> str:
    """Return a Photon URL for ``image_url`` resized to ``width`` x ``height``.

    Returns ``""`` for empty input and when a private-site proxy URL can't be
    built; callers should fall back to the original URL in that case.
    """
    if not image_url:
        return ""

    # make sure it's valid
    scheme_pos = image_url.find(_SCHEME_SEPARATOR)
    if scheme_pos == -1:
        return image_url

    # some image urls carry a bogus #fragment, drop it before the query
    fragment_pos = image_url.find("#")
    if fragment_pos > 0:
        image_url = image_url[:fragment_pos]

    url_with_query = image_url
    image_url = _remove_query(image_url)

    if is_mshots_url(image_url):
        return f"{image_url}?w={width}&h={height}"

    request = PhotonRequest(
        width=width,
        height=height,
        quality=quality,
        is_private_atomic_site=is_private_atomic_site,
    )
    params = request.query_params()

    if request.is_private_atomic_site:
        try:
            return _atomic_proxy_url(image_url, "&".join(params))
        except MalformedUrlError as exc:
            log.warning("photon_malformed_url", url=image_url, error=exc.message)
            return ""

    settings = get_settings()

    # already a photon url: keep the host, carry over ssl=1
    if any(host in image_url for host in settings.photon_image_hosts):
        if "ssl=1" in _query_of(url_with_query):
            params.append("ssl=1")
        return f"{image_url}?{'&'.join(params)}"

    # wordpress.com handles the same params itself and can serve private blogs
    if settings.wpcom_domain in image_url:
        return f"{image_url}?{'&'.join(params)}"

    # photon needs ssl=1 to fetch https sources
    if _is_https(image_url):
        params.append("ssl=1")

    # scheme_pos comes from the unstripped input, so it can overrun the stripped url
    begin = scheme_pos + len(_SCHEME_SEPARATOR)
    if begin > len(image_url):
        log.debug("photon_scheme_out_of_range", url=image_url)
        return image_url
    return f"https://{settings.photon_host}/{image_url[begin:]}?{'&'.join(params)}"


def get_photon_url(image_url: str, size: int) -> str:
    """Old-style fixed-width Photon URL: ``http://<host>/<url without scheme>?w=<size>``."""
    stripped = image_url.replace("http://", "").replace("https://", "")
    return f"http://{get_settings().photon_host}/{stripped}?w={size}"
