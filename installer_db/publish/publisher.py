"""
Publish Gateway

OBJECTIVE:
Serialize each product's VersionSet to an indented JSON document named after
the product (<work_dir>/<product>.version.json) and hand the file to the
upload collaborator.

RULES:
- Products with an empty VersionSet are skipped: no file, no upload
- A write or upload failure is logged and recorded for that product only;
  the remaining products are still processed
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from ..sources.base.exceptions import PublishException, UploadException
from ..sources.base.models import VersionSet
from .uploaders import BaseUploader

logger = logging.getLogger(__name__)

VERSION_FILE_NAME_PATTERN = "%s.version.json"


def version_file_name(product_name: str) -> str:
    return VERSION_FILE_NAME_PATTERN % product_name


def dump_version_set(version_set: VersionSet) -> str:
    return json.dumps(version_set.to_dict(), indent=2, ensure_ascii=False)


def write_version_set(version_set: VersionSet, path: Path) -> Path:
    """
    Write one VersionSet to ``path``

    Raises:
        PublishException: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_version_set(version_set), encoding='utf-8')
    except (OSError, TypeError, ValueError) as e:
        raise PublishException(f"Failed to write {path}: {e}", path=str(path))
    return path


def load_version_set(path: Path) -> VersionSet:
    """Read a published version file back"""
    with open(path, 'r', encoding='utf-8') as f:
        return VersionSet.from_dict(json.load(f))


@dataclass
class PublishResult:
    """Outcome of one publish pass"""
    written: List[str] = field(default_factory=list)
    uploaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


class Publisher:
    """Writes one version file per product and uploads it"""

    def __init__(self, work_dir: Path, uploader: Optional[BaseUploader] = None):
        self.work_dir = Path(work_dir)
        self.uploader = uploader

    def publish(self, catalog: Mapping[str, VersionSet]) -> PublishResult:
        result = PublishResult()
        logger.info(f"🚀 Publishing {len(catalog)} products to {self.work_dir}")

        for product_name, version_set in catalog.items():
            if not version_set:
                logger.info(f"⏭️ {product_name}: no versions, skipped")
                result.skipped.append(product_name)
                continue

            path = self.work_dir / version_file_name(product_name)
            try:
                write_version_set(version_set, path)
                result.written.append(product_name)
                if self.uploader is None:
                    logger.info(f"✅ {product_name}: wrote {path.name} (upload disabled)")
                    continue
                self.uploader.upload(path)
                result.uploaded.append(product_name)
                logger.info(f"✅ {product_name}: published {path.name}")
            except UploadException as e:
                result.errors[product_name] = str(e)
                logger.error(f"❌ Upload failed for {product_name}: {e}")
            except PublishException as e:
                result.errors[product_name] = str(e)
                logger.error(f"❌ Write failed for {product_name}: {e}")

        if result.errors:
            logger.warning(f"Publish finished with {len(result.errors)} errors")
        return result
