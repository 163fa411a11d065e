from .publisher import (
    PublishResult,
    Publisher,
    dump_version_set,
    load_version_set,
    version_file_name,
    write_version_set,
)
from .uploaders import (
    BaseUploader,
    GiteeUploader,
    GithubUploader,
    LocalDirectoryUploader,
    build_uploader,
)

__all__ = [
    'PublishResult',
    'Publisher',
    'dump_version_set',
    'load_version_set',
    'version_file_name',
    'write_version_set',
    'BaseUploader',
    'GiteeUploader',
    'GithubUploader',
    'LocalDirectoryUploader',
    'build_uploader',
]
