"""
"latest" Alias Resolution

Some mirrors expose a mutable "latest" file next to the dated/versioned files
it was copied from. Both share the same checksum, so the concrete version can
be recovered from the versioned file name.

Two passes:
1. collect the checksums of every file keyed under "latest"
2. scan the secondary listing in page order; the first file whose checksum is
   in that set and whose name carries a version token wins

Zero matches leave "latest" untouched. Multiple matches resolve to the first.
"""

import logging
import re
from typing import Iterable, Optional, Pattern, Set, Tuple, Union

from .models import LATEST, VersionSet

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r'\d+(?:\.\d+)+')


def latest_checksums(version_set: VersionSet) -> Set[str]:
    if LATEST not in version_set:
        return set()
    return {item.sum for item in version_set[LATEST] if item.sum}


def find_version_for_checksums(checksums: Set[str], listing: Iterable[Tuple[str, str]],
                               pattern: Pattern = VERSION_PATTERN) -> Optional[str]:
    """Return the version token of the first listed file whose checksum is known"""
    if not checksums:
        return None
    for file_name, checksum in listing:
        checksum = (checksum or '').strip()
        if not checksum or checksum not in checksums:
            continue
        match = pattern.search(file_name or '')
        if match:
            return match.group(0)
    return None


def resolve_latest_alias(version_set: VersionSet, listing: Iterable[Tuple[str, str]],
                         pattern: Union[str, Pattern] = VERSION_PATTERN) -> Optional[str]:
    """
    Rename the "latest" key of ``version_set`` to a concrete version when possible

    Args:
        version_set: Product snapshot containing a "latest" entry
        listing: (file name, checksum) pairs of the un-labeled listing, in page order
        pattern: Version token pattern applied to matching file names

    Returns:
        The resolved version label, or None when "latest" stays unresolved
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    version = find_version_for_checksums(latest_checksums(version_set), listing, pattern)
    if not version:
        logger.debug("No versioned file shares a checksum with 'latest'")
        return None
    version_set.rename(LATEST, version)
    logger.info(f"Resolved '{LATEST}' to version {version}")
    return version
