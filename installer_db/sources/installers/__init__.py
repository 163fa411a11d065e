"""
Installer Sources

Adapter factories for the installer products. Each factory takes the shared
fetch collaborator and returns one adapter; orchestration/registry.py lists
them in run order.
"""

from typing import Optional

from ..base import HttpFetcher, JsonFeedAdapter, StaticAdapter, TableScrapingAdapter
from . import config


def android_sdkmanager(fetcher: Optional[HttpFetcher] = None) -> TableScrapingAdapter:
    return TableScrapingAdapter(config.ANDROID_SDKMANAGER, fetcher)


def cygwin_installer(fetcher: Optional[HttpFetcher] = None) -> StaticAdapter:
    return StaticAdapter('cygwin', config.CYGWIN_ENTRIES, fetcher)


def msys2_installer(fetcher: Optional[HttpFetcher] = None) -> StaticAdapter:
    return StaticAdapter('msys2', config.MSYS2_ENTRIES, fetcher)


def rustup_installer(fetcher: Optional[HttpFetcher] = None) -> StaticAdapter:
    return StaticAdapter('rustup', config.RUSTUP_ENTRIES, fetcher)


def vscode(fetcher: Optional[HttpFetcher] = None) -> JsonFeedAdapter:
    return JsonFeedAdapter(config.VSCODE, fetcher)


def miniconda(fetcher: Optional[HttpFetcher] = None) -> TableScrapingAdapter:
    return TableScrapingAdapter(config.MINICONDA, fetcher)


__all__ = [
    'android_sdkmanager',
    'cygwin_installer',
    'msys2_installer',
    'rustup_installer',
    'vscode',
    'miniconda',
]
