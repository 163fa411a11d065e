"""
Installer Version Collector

Scrapes vendor download pages for the latest installer artifacts, normalizes
their platform/arch metadata and publishes one version file per product.
"""

__version__ = "1.0.0"
