"""
Installer Version Collector entry point

Fetches every registered installer source, writes one version file per product
into WORK_DIR and uploads it to the configured storage.

Usage:
    python -m installer_db
    python -m installer_db --sources vscode,miniconda --no-upload
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from ..config.settings import load_settings
from ..orchestration.registry import DEFAULT_REGISTRY
from ..orchestration.source_manager import VersionAggregator
from ..publish.publisher import Publisher
from ..publish.uploaders import build_uploader
from ..sources.base.exceptions import ConfigException, CriticalSourceError
from ..sources.base.http_fetcher import HttpFetcher

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = 'collector.log'

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    logging.getLogger().setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Installer Version Collector")
    parser.add_argument("--sources", type=str,
                        help="Comma-separated list of sources to fetch (default: all)")
    parser.add_argument("--work-dir", type=str,
                        help="Directory for version files (overrides WORK_DIR)")
    parser.add_argument("--no-upload", action="store_true",
                        help="Write version files without uploading them")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def disabled_sources(selected: Optional[str], configured: List[str]) -> List[str]:
    """
    Names the registry should skip for this run

    Raises:
        ConfigException: If --sources names an unknown source
    """
    if not selected:
        return list(configured)
    wanted = [name.strip() for name in selected.split(',') if name.strip()]
    known = [reg.name for reg in DEFAULT_REGISTRY]
    unknown = [name for name in wanted if name not in known]
    if unknown:
        raise ConfigException(f"Unknown sources {unknown}. Available sources: {known}",
                              config_key='--sources')
    return [name for name in known if name not in wanted or name in configured]


def run_collector(argv: Optional[List[str]] = None) -> int:
    """
    Orchestrates one collection run:
    1. Loads settings (.env, environment, command line).
    2. Fetches every registered source into the product catalog.
    3. Writes and uploads one version file per non-empty product.
    """
    args = build_parser().parse_args(argv)
    load_dotenv()
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    overrides = {'WORK_DIR': args.work_dir} if args.work_dir else {}
    try:
        settings = load_settings(**overrides)
        disabled = disabled_sources(args.sources, settings.DISABLED_SOURCES)
        work_dir = settings.work_dir()
        uploader = None if args.no_upload else build_uploader(settings)
    except ConfigException as e:
        logger.error(f"❌ Configuration error: {e}")
        return 1

    file_handler = logging.FileHandler(work_dir / LOG_FILE_NAME)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)

    fetcher = HttpFetcher()
    aggregator = VersionAggregator(
        fetcher=fetcher,
        options=settings.fetch_options(),
        disabled=disabled,
    )
    try:
        aggregator.fetch_all()
    except CriticalSourceError as e:
        logger.error(f"❌ Run aborted: {e}")
        return 1
    finally:
        fetcher.close()

    result = Publisher(work_dir, uploader).publish(aggregator.catalog)
    logger.info(f"📊 Published {len(result.uploaded)} products, wrote {len(result.written)}, "
                f"skipped {len(result.skipped)}, failed {len(result.errors)}")
    return 0


def main(argv: Optional[List[str]] = None):
    sys.exit(run_collector(argv))


if __name__ == "__main__":
    main()
