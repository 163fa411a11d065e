"""
Installer Sources

This package implements the version-discovery side of the collector.

Architecture:
- base/: Common infrastructure used by all sources (models, classifier, fetcher, protocols)
- installers/: Descriptors and adapter factories for the installer products

All sources follow the same pattern:
1. Fetch: retrieve the page/feed through the fetch collaborator
2. Parse: extract candidate files and classify them by OS/arch
3. Collect: return one VersionSet per product to the aggregator

Usage:
    from installer_db.sources.base import HttpFetcher, FetchOptions
    from installer_db.sources.installers import vscode

    version_set = vscode(HttpFetcher()).fetch(FetchOptions())
"""

from .base import (
    BaseAdapter,
    DistributableFile,
    InstallerSourceException,
    ProductCatalog,
    VersionSet,
)

__all__ = [
    'BaseAdapter',
    'DistributableFile',
    'InstallerSourceException',
    'ProductCatalog',
    'VersionSet',
]
