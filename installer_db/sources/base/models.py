"""
Data Model for the Installer Version Collector

OBJECTIVE:
Common record types shared by every source adapter, the aggregator and the
publish gateway.

- DistributableFile: one downloadable artifact (url, os, arch, checksum, label)
- VersionSet: version label -> ordered list of DistributableFile
- ProductCatalog: product name -> VersionSet, the complete output of one run

RELATIONS TO LOCAL CODES:
- Tags come from sources/base/classifier.py
- Serialized by publish/publisher.py, one JSON document per product
"""

from collections import OrderedDict
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .classifier import ARCH_TAGS, OS_TAGS
from .exceptions import ValidationException

LATEST = 'latest'
DEFAULT_CHECKSUM_TYPE = 'sha256'


class DistributableFile(BaseModel):
    """One downloadable artifact for a product/version/platform/arch combination"""

    model_config = ConfigDict(frozen=True)

    url: str
    os: str
    arch: str
    sum: str = ''
    sum_type: str = ''
    extra: str = ''

    @field_validator('url')
    @classmethod
    def _check_url(cls, value: str) -> str:
        parsed = urlparse(value or '')
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"download url must be absolute: {value!r}")
        return value

    @field_validator('os')
    @classmethod
    def _check_os(cls, value: str) -> str:
        if value not in OS_TAGS:
            raise ValueError(f"unsupported os tag: {value!r}")
        return value

    @field_validator('arch')
    @classmethod
    def _check_arch(cls, value: str) -> str:
        if value not in ARCH_TAGS:
            raise ValueError(f"unsupported arch tag: {value!r}")
        return value

    @model_validator(mode='after')
    def _check_checksum_pair(self) -> 'DistributableFile':
        if bool(self.sum) != bool(self.sum_type):
            raise ValueError("sum and sum_type must be set together")
        return self

    @classmethod
    def build(cls, url: str, os: str, arch: str, checksum: Optional[str] = None,
              checksum_type: str = DEFAULT_CHECKSUM_TYPE, extra: str = '') -> 'DistributableFile':
        """Create a record, setting the checksum type only when a checksum is present"""
        checksum = (checksum or '').strip()
        return cls(
            url=url,
            os=os,
            arch=arch,
            sum=checksum,
            sum_type=checksum_type if checksum else '',
            extra=extra,
        )


class VersionSet:
    """Ordered mapping from version label to the files published for that version"""

    def __init__(self, entries: Optional[Mapping[str, List[DistributableFile]]] = None):
        self._entries: 'OrderedDict[str, List[DistributableFile]]' = OrderedDict()
        for version, files in (entries or {}).items():
            for item in files:
                self.add(version, item)
            self._entries.setdefault(version, [])

    def add(self, version: str, item: DistributableFile) -> None:
        self._entries.setdefault(version, []).append(item)

    def rename(self, old: str, new: str) -> None:
        """Move every file of ``old`` under ``new``; ``old`` is removed"""
        if old == new or old not in self._entries:
            return
        moved = self._entries.pop(old)
        self._entries.setdefault(new, []).extend(moved)

    def versions(self) -> List[str]:
        return list(self._entries.keys())

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            version: [item.model_dump() for item in files]
            for version, files in self._entries.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, List[Mapping[str, Any]]]) -> 'VersionSet':
        """
        Rebuild a VersionSet from its JSON-ready form

        Raises:
            ValidationException: If a stored record is not a valid DistributableFile
        """
        version_set = cls()
        for version, files in data.items():
            version_set._entries.setdefault(version, [])
            for raw in files:
                try:
                    item = DistributableFile.model_validate(raw)
                except ValidationError as e:
                    raise ValidationException(f"Invalid file record under {version!r}: {e}",
                                              validation_field=version)
                version_set.add(version, item)
        return version_set

    def __contains__(self, version: object) -> bool:
        return version in self._entries

    def __getitem__(self, version: str) -> List[DistributableFile]:
        return self._entries[version]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionSet):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def __repr__(self) -> str:
        counts = {version: len(files) for version, files in self._entries.items()}
        return f"VersionSet({counts})"


class ProductCatalog:
    """Product name -> VersionSet for the duration of one run"""

    def __init__(self):
        self._products: Dict[str, VersionSet] = {}

    def store(self, product_name: str, version_set: VersionSet) -> None:
        """Replace the snapshot of one product"""
        self._products[product_name] = version_set

    def view(self) -> Mapping[str, VersionSet]:
        return MappingProxyType(self._products)

    def __contains__(self, product_name: object) -> bool:
        return product_name in self._products

    def __getitem__(self, product_name: str) -> VersionSet:
        return self._products[product_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)
