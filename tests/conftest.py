"""
Shared fixtures: a fake fetch collaborator and a recording uploader.
"""

from pathlib import Path
from typing import Dict, List, Tuple, Union

import pytest

from installer_db.publish.uploaders import BaseUploader
from installer_db.sources.base.exceptions import FetchException, UploadException
from installer_db.sources.base.http_fetcher import FetchOptions


class FakeFetcher:
    """Serves canned bodies by URL; an Exception value is raised instead."""

    def __init__(self, pages: Dict[str, Union[str, Exception]] = None):
        self.pages = dict(pages or {})
        self.calls: List[Tuple[str, FetchOptions]] = []

    def get_text(self, url: str, options: FetchOptions = FetchOptions()) -> str:
        self.calls.append((url, options))
        page = self.pages.get(url)
        if page is None:
            raise FetchException("Unexpected response status 404 (0 bytes)", status_code=404, url=url)
        if isinstance(page, Exception):
            raise page
        return page

    def close(self):
        pass


class RecordingUploader(BaseUploader):
    """Remembers uploaded paths; names in ``fail_on`` raise UploadException."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.uploaded: List[Path] = []

    def upload(self, path: Path) -> str:
        path = Path(path)
        if path.name in self.fail_on:
            raise UploadException(f"refused {path.name}", path=str(path))
        self.uploaded.append(path)
        return str(path)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def recording_uploader():
    return RecordingUploader()


ANDROID_PAGE = """
<html><body>
<table class="download"><tr><th>Platform</th><th>Package</th></tr>
<tr><td>Windows</td><td><button>android-studio-2024.2.1.11-windows.exe</button></td></tr>
</table>
<table class="download">
  <tr><th>Platform</th><th>SDK tools package</th><th>Size</th><th>SHA-256 checksum</th></tr>
  <tr><td>Windows</td><td><button>tool-11076708-win.zip</button></td><td>153.6 MB</td><td>abc123</td></tr>
  <tr><td></td><td></td><td></td><td></td></tr>
</table>
</body></html>
"""

MINICONDA_PAGE = """
<html><body>
<table>
  <tr><th>Filename</th><th>Size</th><th>Last Modified</th><th>SHA256</th></tr>
  <tr><td><a href="Miniconda3-latest-Windows-x86_64.exe">Miniconda3-latest-Windows-x86_64.exe</a></td>
      <td>80.0M</td><td>2024-11-05 10:00:00</td><td>deadbeef</td></tr>
  <tr><td><a href="Miniconda3-latest-MacOSX-arm64.pkg">Miniconda3-latest-MacOSX-arm64.pkg</a></td>
      <td>100.0M</td><td>2024-11-05 10:00:00</td><td>cafe0001</td></tr>
  <tr><td><a href="Miniconda3-latest-Linux-aarch64.sh">Miniconda3-latest-Linux-aarch64.sh</a></td>
      <td>90.0M</td><td>2024-11-05 10:00:00</td><td>feedface</td></tr>
  <tr><td><a href="Miniconda2-latest-Linux-x86_64.sh">Miniconda2-latest-Linux-x86_64.sh</a></td>
      <td>40.0M</td><td>2019-10-25 10:00:00</td><td>0badc0de</td></tr>
  <tr><td><a href="pkg-2024.10.01.exe">pkg-2024.10.01.exe</a></td>
      <td>79.0M</td><td>2024-10-01 10:00:00</td><td>11111111</td></tr>
  <tr><td><a href="pkg-2024.11.05.exe">pkg-2024.11.05.exe</a></td>
      <td>80.0M</td><td>2024-11-05 10:00:00</td><td>deadbeef</td></tr>
  <tr><td><a href="https://mirror.example.org/pkg-2024.11.05-1.sh">pkg-2024.11.05-1.sh</a></td>
      <td>90.0M</td><td>2024-11-05 10:00:00</td><td>feedface</td></tr>
</table>
</body></html>
"""


@pytest.fixture
def android_page():
    return ANDROID_PAGE


@pytest.fixture
def miniconda_page():
    return MINICONDA_PAGE


SETTINGS_ENV_VARS = (
    "WORK_DIR", "ENABLE_PROXY", "PROXY_URI", "DEFAULT_PROXY", "REQUEST_TIMEOUT",
    "STORAGE_TYPE", "STORAGE_USERNAME", "STORAGE_TOKEN", "STORAGE_REPO",
    "STORAGE_BRANCH", "STORAGE_DIR", "LOCAL_STORAGE_DIR", "DISABLED_SOURCES",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep the developer's environment out of settings-driven tests."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
