"""
HTML Table Scraping Engine

OBJECTIVE:
One generic engine for directory-listing style download pages. Every site is
described by a declarative TableDescriptor (selector, column mapping, filename
filter) instead of carrying its own scraping control flow.

DATA FORMAT: HTML pages with a download table
IMPLEMENTATION APPROACH: BeautifulSoup + requests with CSS selectors

STEPS PROGRAM WILL FOLLOW:
1. Fetch the page text through the fetch collaborator
2. Parse it with BeautifulSoup and select the target table
3. Extract platform label, file name/link and checksum by column position
4. Skip header rows, blank rows and rows missing required cells
5. Drop artifacts rejected by the descriptor's filename filter
6. Classify OS/arch and build one DistributableFile per row
7. Key each record by the version token of its file name, or "latest"
8. Optionally resolve "latest" against the secondary listing of the page

INTEGRATION WITH LOCAL CODES:
- Descriptors live in sources/installers/config.py
- Classification from sources/base/classifier.py
- "latest" resolution from sources/base/latest_resolver.py
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from pydantic import ValidationError

from .base_adapter import BaseAdapter
from .classifier import classify_arch, classify_os
from .exceptions import CriticalSourceError, ParseException
from .http_fetcher import FetchOptions, HttpFetcher
from .latest_resolver import VERSION_PATTERN, resolve_latest_alias
from .models import DEFAULT_CHECKSUM_TYPE, LATEST, DistributableFile, VersionSet


@dataclass(frozen=True)
class TableDescriptor:
    """Declarative scraping rules for one download table"""
    product_name: str
    homepage: str
    table_selector: str = 'table'
    table_index: int = 0
    header_rows: int = 0
    platform_column: Optional[int] = None
    filename_column: int = 0
    filename_selector: Optional[str] = None
    link_from_href: bool = False
    checksum_column: Optional[int] = None
    checksum_type: str = DEFAULT_CHECKSUM_TYPE
    base_url: Optional[str] = None
    exclude_substrings: Tuple[str, ...] = ()
    fixed_arch: Optional[str] = None
    version_pattern: str = VERSION_PATTERN.pattern
    latest_marker: Optional[str] = None
    resolve_latest: bool = False
    use_proxy: bool = True
    critical: bool = False


@dataclass
class TableRow:
    """Raw cells extracted from one table row"""
    platform: str = ''
    file_name: str = ''
    link: str = ''
    checksum: str = ''


@dataclass
class ScrapeStats:
    rows_seen: int = 0
    rows_skipped: int = 0
    rows_filtered: int = 0
    files_added: int = 0
    secondary: List[Tuple[str, str]] = field(default_factory=list)


def _cell_text(cells, index: Optional[int]) -> str:
    if index is None or index >= len(cells):
        return ''
    return cells[index].get_text(strip=True)


class TableScrapingAdapter(BaseAdapter):
    """Adapter driven by a TableDescriptor"""

    def __init__(self, descriptor: TableDescriptor, fetcher: Optional[HttpFetcher] = None):
        super().__init__(descriptor.product_name, descriptor.homepage, fetcher, descriptor.use_proxy)
        self.descriptor = descriptor
        self.version_pattern = re.compile(descriptor.version_pattern)

    def fetch(self, options: FetchOptions = FetchOptions()) -> VersionSet:
        self.logger.info(f"🌐 Fetching {self.homepage}")
        html = self._get_text(self.homepage, options)
        return self.parse(html)

    def parse(self, html: str) -> VersionSet:
        """Turn a page body into the product's VersionSet"""
        table = self._select_table(html)
        version_set = VersionSet()
        stats = ScrapeStats()

        for index, tr in enumerate(table.find_all('tr')):
            if index < self.descriptor.header_rows:
                continue
            cells = tr.find_all('td')
            if not cells:
                continue
            stats.rows_seen += 1

            row = self._extract_row(cells)
            if not self._has_required_cells(row):
                stats.rows_skipped += 1
                continue
            if self._is_excluded(row.file_name):
                stats.rows_filtered += 1
                continue

            if self.descriptor.latest_marker and self.descriptor.latest_marker not in row.file_name:
                # un-labeled listing, only used to resolve "latest"
                stats.secondary.append((row.file_name, row.checksum))
                continue

            version = self._version_for(row.file_name)
            try:
                item = self._build_file(row, version)
            except ValidationError as e:
                self.logger.debug(f"Skipping row {row.file_name!r}: {e}")
                stats.rows_skipped += 1
                continue
            version_set.add(version, item)
            stats.files_added += 1

        if self.descriptor.resolve_latest:
            resolve_latest_alias(version_set, stats.secondary, self.version_pattern)

        self.logger.info(
            f"✅ {self.product_name}: {stats.files_added} files in {len(version_set)} versions "
            f"({stats.rows_seen} rows, {stats.rows_skipped} skipped, {stats.rows_filtered} filtered)"
        )
        return version_set

    def _select_table(self, html: str):
        try:
            soup = BeautifulSoup(html, 'html.parser')
        except Exception as e:
            self._parse_failure(f"Error parsing HTML: {e}", html)
        tables = soup.select(self.descriptor.table_selector)
        if len(tables) <= self.descriptor.table_index:
            self._parse_failure(
                f"Table {self.descriptor.table_selector!r}[{self.descriptor.table_index}] not found "
                f"({len(tables)} candidates)",
                html
            )
        return tables[self.descriptor.table_index]

    def _parse_failure(self, message: str, html: str):
        exc_type = CriticalSourceError if self.descriptor.critical else ParseException
        raise exc_type(message, source_name=self.product_name, raw_data_sample=(html or '')[:200])

    def _extract_row(self, cells) -> TableRow:
        descriptor = self.descriptor
        row = TableRow(
            platform=_cell_text(cells, descriptor.platform_column).lower(),
            checksum=_cell_text(cells, descriptor.checksum_column),
        )
        if descriptor.filename_column >= len(cells):
            return row

        cell = cells[descriptor.filename_column]
        element = cell.select_one(descriptor.filename_selector) if descriptor.filename_selector else cell
        if element is None:
            return row
        row.file_name = element.get_text(strip=True)

        if descriptor.link_from_href:
            anchor = element if element.name == 'a' else element.find('a')
            href = anchor.get('href', '') if anchor is not None else ''
            if href and not href.startswith('http'):
                href = urljoin(self.homepage, href)
            row.link = href
        elif row.file_name and descriptor.base_url:
            row.link = urljoin(descriptor.base_url.rstrip('/') + '/', row.file_name)
        return row

    def _has_required_cells(self, row: TableRow) -> bool:
        if self.descriptor.platform_column is not None and not row.platform:
            return False
        return bool(row.file_name and row.link)

    def _is_excluded(self, file_name: str) -> bool:
        return any(part in file_name for part in self.descriptor.exclude_substrings)

    def _version_for(self, file_name: str) -> str:
        if self.descriptor.latest_marker:
            return LATEST
        match = self.version_pattern.search(file_name)
        return match.group(0) if match else LATEST

    def _build_file(self, row: TableRow, version: str) -> DistributableFile:
        os_label = row.platform if self.descriptor.platform_column is not None else row.file_name
        return DistributableFile.build(
            url=row.link,
            os=classify_os(os_label),
            arch=self.descriptor.fixed_arch or classify_arch(row.file_name),
            checksum=row.checksum,
            checksum_type=self.descriptor.checksum_type,
            extra=LATEST if version == LATEST else f"v{version}",
        )
