"""
JSON Release Feed Engine

OBJECTIVE:
Generic adapter for structured release feeds. The feed lists product items,
each with a download URL, checksum, version string, build label and platform
descriptor:

    {"products": [{"url": "...", "sha256hash": "...", "name": "1.95.3",
                   "build": "stable", "platform": {"os": "...", "prettyname": "..."}}]}

Site rules are declarative (FeedDescriptor): substring deny-list, suffix-based
allow rules and ordered arch overrides. Arch overrides win over generic
file-name based detection.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .base_adapter import BaseAdapter
from .classifier import classify_arch, classify_os
from .exceptions import ParseException
from .http_fetcher import FetchOptions, HttpFetcher
from .models import DEFAULT_CHECKSUM_TYPE, DistributableFile, VersionSet


@dataclass(frozen=True)
class UrlRule:
    """Accept URLs ending with ``suffix``, optionally requiring/forbidding a substring"""
    suffix: str
    requires: Optional[str] = None
    forbids: Optional[str] = None

    def matches(self, url: str) -> bool:
        if not url.endswith(self.suffix):
            return False
        if self.requires and self.requires not in url:
            return False
        if self.forbids and self.forbids in url:
            return False
        return True


@dataclass(frozen=True)
class FeedDescriptor:
    """Declarative filtering rules for one release feed"""
    product_name: str
    feed_url: str
    exclude_substrings: Tuple[str, ...] = ()
    accept_rules: Tuple[UrlRule, ...] = ()
    arch_overrides: Tuple[Tuple[str, str], ...] = ()
    checksum_type: str = DEFAULT_CHECKSUM_TYPE
    use_proxy: bool = True


@dataclass
class FeedItem:
    url: str
    checksum: str
    version: str
    build: str
    platform_os: str
    platform_name: str

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> 'FeedItem':
        """
        Raises:
            ValueError: If the platform descriptor is not an object
        """
        platform = raw.get('platform') or {}
        if not isinstance(platform, dict):
            raise ValueError(f"platform must be an object, got {type(platform).__name__}")
        return cls(
            url=str(raw.get('url') or ''),
            checksum=str(raw.get('sha256hash') or ''),
            version=str(raw.get('name') or ''),
            build=str(raw.get('build') or ''),
            platform_os=str(platform.get('os') or ''),
            platform_name=str(platform.get('prettyname') or ''),
        )


def url_allowed(url: str, descriptor: FeedDescriptor) -> bool:
    """Deny-list first, then the first matching allow rule accepts"""
    if not url:
        return False
    if any(part in url for part in descriptor.exclude_substrings):
        return False
    return any(rule.matches(url) for rule in descriptor.accept_rules)


def arch_for_url(url: str, descriptor: FeedDescriptor) -> str:
    for part, arch in descriptor.arch_overrides:
        if part in url:
            return arch
    return classify_arch(url)


class JsonFeedAdapter(BaseAdapter):
    """Adapter driven by a FeedDescriptor"""

    def __init__(self, descriptor: FeedDescriptor, fetcher: Optional[HttpFetcher] = None):
        super().__init__(descriptor.product_name, descriptor.feed_url, fetcher, descriptor.use_proxy)
        self.descriptor = descriptor

    def fetch(self, options: FetchOptions = FetchOptions()) -> VersionSet:
        self.logger.info(f"🌐 Fetching feed {self.homepage}")
        content = self._get_text(self.homepage, options)
        return self.parse(content)

    def parse(self, content: str) -> VersionSet:
        """Turn a feed body into the product's VersionSet"""
        items = self._load_items(content)
        version_set = VersionSet()
        rejected = 0

        for item in items:
            if not item.version or not url_allowed(item.url, self.descriptor):
                rejected += 1
                continue
            try:
                record = DistributableFile.build(
                    url=item.url,
                    os=classify_os(item.platform_name or item.platform_os),
                    arch=arch_for_url(item.url, self.descriptor),
                    checksum=item.checksum,
                    checksum_type=self.descriptor.checksum_type,
                    extra=f"v{item.version}",
                )
            except ValidationError as e:
                self.logger.debug(f"Skipping feed item {item.url!r}: {e}")
                rejected += 1
                continue
            version_set.add(item.version, record)

        self.logger.info(
            f"✅ {self.product_name}: {len(items) - rejected} of {len(items)} feed items accepted"
        )
        return version_set

    def _load_items(self, content: str) -> List[FeedItem]:
        try:
            data = json.loads(content)
        except (json.JSONDecodeError, TypeError) as e:
            raise ParseException(f"Invalid JSON data: {e}", source_name=self.product_name,
                                 raw_data_sample=(content or '')[:200])

        products = data.get('products') if isinstance(data, dict) else None
        if not isinstance(products, list):
            raise ParseException("Feed has no 'products' list", source_name=self.product_name,
                                 raw_data_sample=(content or '')[:200])
        items = []
        for raw in products:
            if not isinstance(raw, dict):
                continue
            try:
                items.append(FeedItem.from_raw(raw))
            except ValueError as e:
                self.logger.debug(f"Skipping malformed feed item {raw.get('url')!r}: {e}")
        return items
