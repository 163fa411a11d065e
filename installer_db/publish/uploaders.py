"""
Upload Collaborators

Deliver a published version file to remote storage.

- LocalDirectoryUploader: copy into a directory (default storage)
- GithubUploader: create or update the file through the GitHub contents API
- GiteeUploader: create or update the file through the Gitee v5 contents API

Every failure surfaces as UploadException; the publish gateway decides what
to do with it.
"""

import abc
import base64
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ..config.settings import CollectorSettings, StorageType
from ..sources.base.exceptions import UploadException

logger = logging.getLogger(__name__)


class BaseUploader(abc.ABC):
    """Abstract upload collaborator"""

    @abc.abstractmethod
    def upload(self, path: Path) -> str:
        """
        Upload one local file

        Returns:
            Location of the uploaded file

        Raises:
            UploadException: If the file cannot be delivered
        """


class LocalDirectoryUploader(BaseUploader):
    """Copies version files into a target directory"""

    def __init__(self, target_dir: Path):
        self.target_dir = Path(target_dir)

    def upload(self, path: Path) -> str:
        path = Path(path)
        target = self.target_dir / path.name
        if target.resolve() == path.resolve():
            return str(target)
        try:
            self.target_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)
        except OSError as e:
            raise UploadException(f"Copy to {target} failed: {e}", path=str(path))
        logger.info(f"📦 Copied {path.name} to {self.target_dir}")
        return str(target)


class RepoContentsUploader(BaseUploader):
    """Create-or-update upload through a git hosting contents API"""

    api_base = ''

    def __init__(self, username: str, token: str, repo: str, branch: str = 'main',
                 directory: str = '', timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.username = username
        self.token = token
        self.repo = repo
        self.branch = branch
        self.directory = directory.strip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def remote_path(self, path: Path) -> str:
        name = Path(path).name
        return f"{self.directory}/{name}" if self.directory else name

    def contents_url(self, remote_path: str) -> str:
        return f"{self.api_base}/repos/{self.username}/{self.repo}/contents/{remote_path}"

    def upload(self, path: Path) -> str:
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise UploadException(f"Cannot read {path}: {e}", path=str(path))

        remote_path = self.remote_path(path)
        url = self.contents_url(remote_path)
        try:
            sha = self._existing_sha(url)
            response = self._write(url, content, sha, f"update {remote_path}")
        except requests.RequestException as e:
            raise UploadException(f"Upload request failed: {e}", path=str(path), url=url)

        if response.status_code not in (200, 201):
            raise UploadException(
                f"Upload rejected with status {response.status_code}: {response.text[:200]}",
                path=str(path), url=url, status_code=response.status_code
            )
        logger.info(f"☁️ Uploaded {path.name} to {self.repo}/{remote_path}")
        return url

    @abc.abstractmethod
    def _existing_sha(self, url: str) -> Optional[str]:
        """Blob sha of the remote file, None when it does not exist yet"""

    @abc.abstractmethod
    def _write(self, url: str, content: bytes, sha: Optional[str], message: str) -> requests.Response:
        """Create or update the remote file"""

    @staticmethod
    def _encode(content: bytes) -> str:
        return base64.b64encode(content).decode('ascii')

    @staticmethod
    def _sha_from(response: requests.Response) -> Optional[str]:
        if response.status_code != 200:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        # a directory listing (or gitee's empty list) means no file yet
        if isinstance(data, dict):
            return data.get('sha')
        return None


class GithubUploader(RepoContentsUploader):
    """Uploads through https://api.github.com contents API"""

    api_base = 'https://api.github.com'

    def _headers(self) -> Dict[str, str]:
        return {
            'Accept': 'application/vnd.github+json',
            'Authorization': f"Bearer {self.token}",
        }

    def _existing_sha(self, url: str) -> Optional[str]:
        response = self.session.get(url, params={'ref': self.branch},
                                    headers=self._headers(), timeout=self.timeout)
        return self._sha_from(response)

    def _write(self, url: str, content: bytes, sha: Optional[str], message: str) -> requests.Response:
        payload: Dict[str, Any] = {
            'message': message,
            'content': self._encode(content),
            'branch': self.branch,
        }
        if sha:
            payload['sha'] = sha
        return self.session.put(url, json=payload, headers=self._headers(), timeout=self.timeout)


class GiteeUploader(RepoContentsUploader):
    """Uploads through https://gitee.com/api/v5 contents API"""

    api_base = 'https://gitee.com/api/v5'

    def _existing_sha(self, url: str) -> Optional[str]:
        response = self.session.get(url, params={'access_token': self.token, 'ref': self.branch},
                                    timeout=self.timeout)
        return self._sha_from(response)

    def _write(self, url: str, content: bytes, sha: Optional[str], message: str) -> requests.Response:
        payload: Dict[str, Any] = {
            'access_token': self.token,
            'message': message,
            'content': self._encode(content),
            'branch': self.branch,
        }
        if sha:
            payload['sha'] = sha
            return self.session.put(url, json=payload, timeout=self.timeout)
        return self.session.post(url, json=payload, timeout=self.timeout)


def build_uploader(settings: CollectorSettings) -> BaseUploader:
    """Pick the upload collaborator selected by STORAGE_TYPE"""
    settings.validate_storage()
    if settings.STORAGE_TYPE == StorageType.GITHUB:
        cls = GithubUploader
    elif settings.STORAGE_TYPE == StorageType.GITEE:
        cls = GiteeUploader
    else:
        target = Path(settings.LOCAL_STORAGE_DIR).expanduser() if settings.LOCAL_STORAGE_DIR else settings.work_dir()
        return LocalDirectoryUploader(target)
    return cls(
        username=settings.STORAGE_USERNAME,
        token=settings.STORAGE_TOKEN,
        repo=settings.STORAGE_REPO,
        branch=settings.STORAGE_BRANCH,
        directory=settings.STORAGE_DIR,
        timeout=settings.REQUEST_TIMEOUT,
    )
