"""Configuration settings for lrcfetch."""

import os
from typing import List

from . import __version__
from .exceptions import ConfigError

# Providers known to the resolver, in default fallback order
KNOWN_PROVIDERS = ("lrclib", "kugou")
DEFAULT_PROVIDER_ORDER = "lrclib,kugou"

# HTTP settings (can be overridden via environment variables)
HTTP_TIMEOUT = float(os.getenv("LRCFETCH_TIMEOUT", "30"))
MAX_RETRIES = int(os.getenv("LRCFETCH_MAX_RETRIES", "2"))
RETRY_DELAY = float(os.getenv("LRCFETCH_RETRY_DELAY", "0.5"))
USER_AGENT = os.getenv(
    "LRCFETCH_USER_AGENT",
    f"lrcfetch/{__version__} (https://github.com/lrcfetch/lrcfetch)",
)

# Status codes worth retrying on the same request
TRANSIENT_STATUS_CODES = frozenset({429, 502, 503, 504})

# LrcLib
LRCLIB_BASE_URL = os.getenv("LRCFETCH_LRCLIB_URL", "https://lrclib.net").rstrip("/")
LRCLIB_CLIENT_HEADER = f"lrcfetch/{__version__} (https://github.com/lrcfetch/lrcfetch)"

# KuGou
KUGOU_SONG_SEARCH_URL = "https://mobileservice.kugou.com/api/v3/search/song"
KUGOU_LYRICS_SEARCH_URL = "https://krcs.kugou.com/search"
KUGOU_LYRICS_DOWNLOAD_URL = "https://krcs.kugou.com/download"
KUGOU_MAX_TOLERANCE = 5  # seconds


def parse_provider_order(value: str) -> List[str]:
    """
    Parse a comma-separated provider list such as ``"kugou, lrclib"``.

    Names are lower-cased, blanks are skipped and duplicates keep their
    first position.

    Raises:
        ConfigError: If the list is empty or names an unknown provider
    """
    order: List[str] = []
    for part in value.split(","):
        name = part.strip().lower()
        if not name:
            continue
        if name not in KNOWN_PROVIDERS:
            raise ConfigError(
                f"Unknown lyrics provider: {name}. "
                f"Known providers: {', '.join(KNOWN_PROVIDERS)}"
            )
        if name not in order:
            order.append(name)

    if not order:
        raise ConfigError("Provider order must name at least one provider")
    return order


def get_provider_order() -> List[str]:
    """Get provider fallback order from environment or default."""
    return parse_provider_order(os.getenv("LRCFETCH_PROVIDERS", DEFAULT_PROVIDER_ORDER))


def validate_config() -> None:
    """Validate configuration values."""
    if HTTP_TIMEOUT <= 0:
        raise ConfigError("Invalid HTTP timeout")

    if MAX_RETRIES < 0:
        raise ConfigError("Invalid retry count")

    if RETRY_DELAY < 0:
        raise ConfigError("Invalid retry delay")

    if not USER_AGENT.strip():
        raise ConfigError("User agent cannot be empty")

    if not LRCLIB_BASE_URL.startswith(("http://", "https://")):
        raise ConfigError(f"Invalid LrcLib URL: {LRCLIB_BASE_URL}")


# Validate config on import
validate_config()
