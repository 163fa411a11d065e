"""
Base Adapter for the Installer Version Collector

Abstract base class that every installer source inherits from.
One adapter produces the VersionSet of exactly one product.

Protocols implemented on top of this class:
- table_scraper.TableScrapingAdapter: directory-listing / download tables (HTML)
- json_feed.JsonFeedAdapter: structured release feeds (JSON)
- static_source.StaticAdapter: hard-coded "latest" URLs, no page to scrape
"""

import abc
import logging
from typing import Optional

from .exceptions import FetchException
from .http_fetcher import FetchOptions, HttpFetcher
from .models import VersionSet


class BaseAdapter(abc.ABC):
    """Abstract base class for all installer source adapters"""

    def __init__(self, product_name: str, homepage: str = '', fetcher: Optional[HttpFetcher] = None,
                 use_proxy: bool = True):
        """
        Initialize adapter

        Args:
            product_name: Key of the product in the ProductCatalog and name of its version file
            homepage: Page or feed the adapter reads
            fetcher: Fetch collaborator, shared between adapters of one run
            use_proxy: Whether requests of this source may go through the configured proxy
        """
        self.product_name = product_name
        self.homepage = homepage
        self.fetcher = fetcher
        self.use_proxy = use_proxy
        self.logger = logging.getLogger(f"adapter.{product_name}")

    @abc.abstractmethod
    def fetch(self, options: FetchOptions = FetchOptions()) -> VersionSet:
        """
        Collect the current snapshot of this product

        Raises:
            FetchException: the page could not be retrieved
            ParseException: the page could not be parsed
        """

    def _effective_options(self, options: FetchOptions) -> FetchOptions:
        return options if self.use_proxy else options.direct()

    def _get_text(self, url: str, options: FetchOptions) -> str:
        if self.fetcher is None:
            raise FetchException("No fetcher configured", source_name=self.product_name, url=url)
        try:
            return self.fetcher.get_text(url, self._effective_options(options))
        except FetchException as e:
            e.source_name = e.source_name or self.product_name
            raise

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.product_name!r})"
