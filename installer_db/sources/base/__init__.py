"""
Base Infrastructure for the Installer Version Collector

This module provides the foundational classes and utilities that all installer sources use.

Key Components:
- BaseAdapter: Abstract interface producing one product's VersionSet
- TableScrapingAdapter / JsonFeedAdapter / StaticAdapter: the three source protocols
- HttpFetcher / FetchOptions: fetch collaborator and per-request settings
- classify_os / classify_arch: platform tag inference
- DistributableFile / VersionSet / ProductCatalog: common record types
"""

from .base_adapter import BaseAdapter
from .classifier import classify_arch, classify_os
from .exceptions import (
    ConfigException,
    CriticalSourceError,
    FetchException,
    InstallerSourceException,
    ParseException,
    PublishException,
    UploadException,
    ValidationException,
)
from .http_fetcher import FetchOptions, FetchResponse, HttpFetcher
from .json_feed import FeedDescriptor, JsonFeedAdapter, UrlRule
from .latest_resolver import resolve_latest_alias
from .models import LATEST, DistributableFile, ProductCatalog, VersionSet
from .static_source import StaticAdapter, StaticEntry
from .table_scraper import TableDescriptor, TableScrapingAdapter

__all__ = [
    'BaseAdapter',
    'classify_arch',
    'classify_os',
    'ConfigException',
    'CriticalSourceError',
    'FetchException',
    'InstallerSourceException',
    'ParseException',
    'PublishException',
    'UploadException',
    'ValidationException',
    'FetchOptions',
    'FetchResponse',
    'HttpFetcher',
    'FeedDescriptor',
    'JsonFeedAdapter',
    'UrlRule',
    'resolve_latest_alias',
    'LATEST',
    'DistributableFile',
    'ProductCatalog',
    'VersionSet',
    'StaticAdapter',
    'StaticEntry',
    'TableDescriptor',
    'TableScrapingAdapter',
]
