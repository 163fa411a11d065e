"""
Platform / Architecture Classifier

Pure functions mapping a free-text label (platform name, file name or URL)
to a normalized operating-system tag and a normalized CPU-architecture tag.

Matching is a case-insensitive substring search over an ordered token table.
The first matching token wins and no match yields 'unknown'.
"""

from typing import Any, List, Tuple

OS_WINDOWS = 'windows'
OS_LINUX = 'linux'
OS_DARWIN = 'darwin'
OS_ANY = 'any'
OS_UNKNOWN = 'unknown'

ARCH_AMD64 = 'amd64'
ARCH_ARM64 = 'arm64'
ARCH_386 = '386'
ARCH_ALL = 'all'
ARCH_ANY = 'any'
ARCH_UNKNOWN = 'unknown'

OS_TAGS = (OS_WINDOWS, OS_LINUX, OS_DARWIN, OS_ANY, OS_UNKNOWN)
ARCH_TAGS = (ARCH_AMD64, ARCH_ARM64, ARCH_386, ARCH_ALL, ARCH_ANY, ARCH_UNKNOWN)

# 'darwin' contains 'win', so darwin tokens come first.
OS_TOKENS: List[Tuple[str, str]] = [
    ('darwin', OS_DARWIN),
    ('macos', OS_DARWIN),
    ('mac', OS_DARWIN),
    ('osx', OS_DARWIN),
    ('apple', OS_DARWIN),
    ('windows', OS_WINDOWS),
    ('win32', OS_WINDOWS),
    ('win64', OS_WINDOWS),
    ('win', OS_WINDOWS),
    ('linux', OS_LINUX),
]

# 'x86_64' contains 'x86', so 64-bit tokens come first.
ARCH_TOKENS: List[Tuple[str, str]] = [
    ('arm64', ARCH_ARM64),
    ('aarch64', ARCH_ARM64),
    ('x86_64', ARCH_AMD64),
    ('x86-64', ARCH_AMD64),
    ('amd64', ARCH_AMD64),
    ('x64', ARCH_AMD64),
    ('i686', ARCH_386),
    ('i386', ARCH_386),
    ('x86', ARCH_386),
    ('386', ARCH_386),
]


def _match(text: Any, tokens: List[Tuple[str, str]], default: str) -> str:
    if not text or not isinstance(text, str):
        return default
    lowered = text.lower()
    for token, tag in tokens:
        if token in lowered:
            return tag
    return default


def classify_os(text: Any) -> str:
    """Return the OS tag for a platform label, file name or URL"""
    return _match(text, OS_TOKENS, OS_UNKNOWN)


def classify_arch(text: Any) -> str:
    """Return the architecture tag for a platform label, file name or URL"""
    return _match(text, ARCH_TOKENS, ARCH_UNKNOWN)
