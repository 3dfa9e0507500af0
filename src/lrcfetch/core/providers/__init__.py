"""Lyrics backends."""

from .base import LyricsProvider
from .kugou import KugouProvider
from .lrclib import LrcLibProvider

PROVIDERS = {
    KugouProvider.name: KugouProvider,
    LrcLibProvider.name: LrcLibProvider,
}

__all__ = ["LyricsProvider", "KugouProvider", "LrcLibProvider", "PROVIDERS"]
