"""
Static single-entry sources

For vendors that publish one fixed "latest" URL per architecture and no page
to scrape. Every entry is registered under the "latest" version.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .base_adapter import BaseAdapter
from .http_fetcher import FetchOptions, HttpFetcher
from .models import LATEST, DistributableFile, VersionSet


@dataclass(frozen=True)
class StaticEntry:
    url: str
    os: str
    arch: str


class StaticAdapter(BaseAdapter):
    """Adapter for an enumerated list of (url, os, arch) triples"""

    def __init__(self, product_name: str, entries: Sequence[StaticEntry], fetcher: Optional[HttpFetcher] = None):
        super().__init__(product_name, fetcher=fetcher, use_proxy=False)
        self.entries = tuple(entries)

    def fetch(self, options: FetchOptions = FetchOptions()) -> VersionSet:
        version_set = VersionSet()
        for entry in self.entries:
            version_set.add(LATEST, DistributableFile.build(
                url=entry.url,
                os=entry.os,
                arch=entry.arch,
                extra=LATEST,
            ))
        self.logger.info(f"✅ {self.product_name}: {len(self.entries)} static entries")
        return version_set
