"""
Installer Sources Configuration

OBJECTIVE: Declarative scraping rules for every installer source

INTEGRATION: Consumed by sources/installers/__init__.py to build adapters
LOADED BY: orchestration/registry.py (DEFAULT_REGISTRY)

Sources (only the latest version is published for each):
1. android sdkmanager   https://developer.android.com/studio?hl=en          (HTML table)
2. cygwin installer     https://cygwin.com/install.html                     (static)
3. msys2 installer      https://github.com/msys2/msys2-installer/releases   (static)
4. rust installer       https://forge.rust-lang.org/infra/other-installation-methods.html (static)
5. vscode               https://code.visualstudio.com/sha?build=stable      (JSON feed)
6. miniconda            https://repo.anaconda.com/miniconda/                 (HTML table + latest resolution)
"""

from ..base.classifier import (
    ARCH_ALL,
    ARCH_AMD64,
    ARCH_ANY,
    ARCH_ARM64,
    OS_DARWIN,
    OS_LINUX,
    OS_WINDOWS,
)
from ..base.json_feed import FeedDescriptor, UrlRule
from ..base.static_source import StaticEntry
from ..base.table_scraper import TableDescriptor

# https://dl.google.com/android/repository/commandlinetools-win-11076708_latest.zip
ANDROID_SDKMANAGER = TableDescriptor(
    product_name='sdkmanager',
    homepage='https://developer.android.com/studio?hl=en',
    table_selector='table.download',
    table_index=1,
    header_rows=1,
    platform_column=0,
    filename_column=1,
    filename_selector='button',
    checksum_column=3,
    base_url='https://dl.google.com/android/repository',
    fixed_arch=ARCH_ALL,
    version_pattern=r'\d+',
    critical=True,
)

MINICONDA = TableDescriptor(
    product_name='miniconda',
    homepage='https://repo.anaconda.com/miniconda/',
    table_selector='table',
    filename_column=0,
    filename_selector='a',
    link_from_href=True,
    checksum_column=3,
    exclude_substrings=(
        '.pkg',
        'Miniconda2-latest-',
        'Miniconda-latest-',
    ),
    latest_marker='latest',
    resolve_latest=True,
    # the mirror is reached directly
    use_proxy=False,
)

VSCODE = FeedDescriptor(
    product_name='vscode',
    feed_url='https://code.visualstudio.com/sha?build=stable',
    exclude_substrings=('_cli', 'armhf', 'armv7hl'),
    accept_rules=(
        UrlRule('.exe', forbids='User'),
        UrlRule('.tar.gz'),
        UrlRule('.zip', requires='darwin'),
        UrlRule('.deb'),
        UrlRule('.rpm'),
    ),
    arch_overrides=(
        ('win32-arm64', ARCH_ARM64),
        ('win32-x64', ARCH_AMD64),
        ('universal', ARCH_ANY),
        ('VSCode-darwin.zip', ARCH_AMD64),
    ),
)

CYGWIN_ENTRIES = (
    StaticEntry('https://cygwin.com/setup-x86_64.exe', OS_WINDOWS, ARCH_AMD64),
)

MSYS2_ENTRIES = (
    StaticEntry(
        'https://github.com/msys2/msys2-installer/releases/download/nightly-x86_64/msys2-x86_64-latest.exe',
        OS_WINDOWS,
        ARCH_AMD64,
    ),
)

RUSTUP_BASE_URL = 'https://static.rust-lang.org/rustup/dist'

RUSTUP_ENTRIES = (
    StaticEntry(f'{RUSTUP_BASE_URL}/x86_64-apple-darwin/rustup-init', OS_DARWIN, ARCH_AMD64),
    StaticEntry(f'{RUSTUP_BASE_URL}/aarch64-apple-darwin/rustup-init', OS_DARWIN, ARCH_ARM64),
    StaticEntry(f'{RUSTUP_BASE_URL}/x86_64-unknown-linux-gnu/rustup-init', OS_LINUX, ARCH_AMD64),
    StaticEntry(f'{RUSTUP_BASE_URL}/aarch64-unknown-linux-gnu/rustup-init', OS_LINUX, ARCH_ARM64),
    StaticEntry(f'{RUSTUP_BASE_URL}/x86_64-pc-windows-msvc/rustup-init.exe', OS_WINDOWS, ARCH_AMD64),
    StaticEntry(f'{RUSTUP_BASE_URL}/aarch64-pc-windows-msvc/rustup-init.exe', OS_WINDOWS, ARCH_ARM64),
)
