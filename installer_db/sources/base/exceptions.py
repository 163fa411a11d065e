"""
Installer Collector Errors

Every failure of a collection run is an InstallerSourceException carrying the
product it happened for (source_name) and a details dict for the logs.

What the run does with each:
- FetchException: download page or feed unreachable, or answered with a
  non-200/empty body. The product is left out of the catalog.
- ParseException: the body arrived but its shape is wrong (no download
  table, invalid JSON, no "products" list). The product is left out.
  - CriticalSourceError: same, for a source whose loss aborts the run
    (exit status 1).
- ConfigException: a setting or command-line value is unusable. The run
  stops before anything is fetched.
- ValidationException: a stored version file holds an invalid file record.
- PublishException: a version file could not be serialized or written.
  - UploadException: the written file could not be delivered to storage.

Rows or feed items that are merely incomplete are not errors: adapters skip
them and log at debug level.
"""

from typing import Any, Dict, Optional


class InstallerSourceException(Exception):
    """A collection run failure, tagged with the product it concerns"""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.source_name = source_name
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        message = super().__str__()
        return f"[{self.source_name}] {message}" if self.source_name else message


class FetchException(InstallerSourceException):
    """A download page or feed could not be retrieved"""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 status_code: Optional[int] = None, url: Optional[str] = None, **kwargs):
        self.status_code = status_code
        self.url = url
        super().__init__(message, source_name, dict(kwargs, status_code=status_code, url=url))


class ParseException(InstallerSourceException):
    """A page or feed body does not have the expected structure"""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 raw_data_sample: Optional[str] = None, **kwargs):
        # first characters of the body, enough to tell an error page apart
        self.raw_data_sample = raw_data_sample
        super().__init__(message, source_name, dict(kwargs, raw_data_sample=raw_data_sample))


class CriticalSourceError(ParseException):
    """Unparseable body from a source the run cannot do without"""


class ConfigException(InstallerSourceException):
    """A setting or command-line option is missing or invalid"""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 config_key: Optional[str] = None, **kwargs):
        self.config_key = config_key
        super().__init__(message, source_name, dict(kwargs, config_key=config_key))


class ValidationException(InstallerSourceException):
    """A stored file record failed validation; validation_field is its version key"""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 validation_field: Optional[str] = None, **kwargs):
        self.validation_field = validation_field
        super().__init__(message, source_name, dict(kwargs, validation_field=validation_field))


class PublishException(InstallerSourceException):
    """A version file could not be serialized or written"""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 path: Optional[str] = None, **kwargs):
        self.path = path
        super().__init__(message, source_name, dict(kwargs, path=path))


class UploadException(PublishException):
    """A written version file could not be delivered to storage"""
