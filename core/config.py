"""Application configuration via Pydantic Settings v2."""

import re
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class Settings(BaseSettings):
    """Hosts, proxy endpoints and presentation defaults. Everything is optional."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Photon ===
    photon_host: str = "i0.wp.com"
    photon_image_hosts: Annotated[list[str], NoDecode] = ["i0.wp.com", "i1.wp.com", "i2.wp.com"]
    wpcom_domain: str = "wordpress.com"
    atomic_proxy_url_prefix: str = "https://public-api.wordpress.com/wpcom/v2/sites/"
    atomic_proxy_url_suffix: str = "/atomic-auth-proxy/file"

    # === Emoticons ===
    emoticon_color: str = "#21759b"

    # === Logging ===
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("photon_image_hosts", mode="before")
    @classmethod
    def _parse_image_hosts(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, list):
            hosts = v
        else:
            hosts = [x.strip() for x in str(v).split(",") if x.strip()]
        if not hosts:
            msg = "PHOTON_IMAGE_HOSTS must contain at least one host"
            raise ValueError(msg)
        return hosts

    @field_validator("atomic_proxy_url_prefix")
    @classmethod
    def _proxy_prefix_must_be_https(cls, v: str) -> str:
        if not v.startswith("https://"):
            msg = "ATOMIC_PROXY_URL_PREFIX must start with https://"
            raise ValueError(msg)
        return v

    @field_validator("emoticon_color")
    @classmethod
    def _color_must_be_hex(cls, v: str) -> str:
        if not _HEX_COLOR_RE.match(v):
            msg = "EMOTICON_COLOR must look like #rrggbb"
            raise ValueError(msg)
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            msg = f"Unknown LOG_LEVEL: {v}"
            raise ValueError(msg)
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance (cached after first call)."""
    return Settings()
