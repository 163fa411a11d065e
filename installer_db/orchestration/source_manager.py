"""
Version Aggregation System

OBJECTIVE:
Runs every registered installer source in a fixed order and collects their
VersionSets into the run's ProductCatalog.

ARCHITECTURE OVERVIEW:
- Sources come from orchestration/registry.py (DEFAULT_REGISTRY)
- Each adapter fetches through the shared HttpFetcher with the run's FetchOptions
- One failing source never aborts the others: the failure is logged, recorded
  in the AggregationResult and the product stays absent from the catalog
- A CriticalSourceError (fail-fast source) is logged and re-raised

INTEGRATION WITH OVERALL PROGRAM:
- Driven by scripts/run_collector.py
- The catalog is handed to publish/publisher.py afterwards
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional

from ..sources.base import (
    CriticalSourceError,
    FetchOptions,
    HttpFetcher,
    InstallerSourceException,
    ProductCatalog,
    VersionSet,
)
from .registry import DEFAULT_REGISTRY, AdapterRegistration, active_registrations

logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    """Result of one fetch-all run"""
    start_time: datetime
    end_time: Optional[datetime] = None
    products_fetched: List[str] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


class VersionAggregator:
    """
    Owner of the ProductCatalog for the duration of a run

    RESPONSIBILITIES:
    1. Invoke every registered adapter sequentially, in registry order
    2. Store each adapter's VersionSet under its product name
    3. Continue past individual source failures
    4. Expose the catalog read-only after completion
    """

    def __init__(self, fetcher: Optional[HttpFetcher] = None,
                 options: FetchOptions = FetchOptions(),
                 registry: Optional[Iterable[AdapterRegistration]] = None,
                 disabled: Iterable[str] = ()):
        self.fetcher = fetcher if fetcher is not None else HttpFetcher()
        self.options = options
        self.registrations = active_registrations(
            DEFAULT_REGISTRY if registry is None else registry, disabled
        )
        self._catalog = ProductCatalog()
        self.results_history: List[AggregationResult] = []

    @property
    def catalog(self) -> Mapping[str, VersionSet]:
        return self._catalog.view()

    def fetch_all(self) -> AggregationResult:
        """
        Fetch every registered source

        Raises:
            CriticalSourceError: a fail-fast source returned an unparseable page
        """
        result = AggregationResult(start_time=datetime.now())
        self.results_history.append(result)
        logger.info(f"🚀 Fetching {len(self.registrations)} sources: {[reg.name for reg in self.registrations]}")

        for registration in self.registrations:
            logger.info(f"📥 {registration.description}...")
            try:
                product_name = self._run(registration)
                result.products_fetched.append(product_name)
            except CriticalSourceError as e:
                result.errors[registration.name] = str(e)
                result.end_time = datetime.now()
                logger.error(f"❌ Critical source failed, aborting run: {e}")
                raise
            except InstallerSourceException as e:
                result.errors[registration.name] = str(e)
                logger.error(f"❌ Source {registration.name} failed: {e}")
            except Exception as e:
                result.errors[registration.name] = f"Unexpected error: {e}"
                logger.error(f"❌ Source {registration.name} failed unexpectedly: {e}", exc_info=True)

        result.end_time = datetime.now()
        logger.info(f"🎉 Fetch {'COMPLETED' if result.success else 'COMPLETED WITH ERRORS'} "
                    f"in {result.end_time - result.start_time}")
        logger.info(f"Products fetched: {len(result.products_fetched)}")
        if result.errors:
            logger.warning(f"Errors encountered: {len(result.errors)}")
            for name, error in result.errors.items():
                logger.warning(f"  - {name}: {error}")
        return result

    def fetch_one(self, name: str) -> VersionSet:
        """Fetch a single registered source and store its result"""
        for registration in self.registrations:
            if registration.name == name:
                product_name = self._run(registration)
                return self._catalog[product_name]
        available = [reg.name for reg in self.registrations]
        raise KeyError(f"Source '{name}' not found. Available sources: {available}")

    def _run(self, registration: AdapterRegistration) -> str:
        adapter = registration.factory(self.fetcher)
        version_set = adapter.fetch(self.options)
        self._catalog.store(adapter.product_name, version_set)
        logger.info(f"✅ {adapter.product_name}: {len(version_set)} versions")
        return adapter.product_name

    def get_status(self) -> Dict[str, object]:
        """Summary of the last run"""
        if not self.results_history:
            return {"status": "not_started", "last_run": None}

        last_result = self.results_history[-1]
        return {
            "status": "success" if last_result.success else "error",
            "last_run": last_result.end_time.isoformat() if last_result.end_time else None,
            "products_fetched": list(last_result.products_fetched),
            "errors": dict(last_result.errors),
        }
