"""Object naming and upload preparation for GCS-hosted reports."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike

from kaiki.storage import UploadItem, prepare_uploads


def build_gcs_key(path_prefix: str | None, storage_key: str, relative_path: str) -> str:
    """Join an optional prefix, the storage key and a relative path into an object name."""
    if path_prefix:
        return f"{path_prefix}/{storage_key}/{relative_path}"
    return f"{storage_key}/{relative_path}"


def gcs_report_url(bucket_name: str, path_prefix: str | None, storage_key: str) -> str:
    """Return the public URL of the report's index.html in the bucket."""
    prefix = path_prefix or ""
    if not prefix:
        return f"https://storage.googleapis.com/{bucket_name}/{storage_key}/index.html"
    return f"https://storage.googleapis.com/{bucket_name}/{prefix}/{storage_key}/index.html"


@dataclass(frozen=True)
class GcsLocation:
    """Where reports are stored in a GCS bucket."""

    bucket_name: str
    path_prefix: str | None = None

    def build_key(self, storage_key: str, relative_path: str) -> str:
        """Return the object name for ``relative_path`` under ``storage_key``."""
        return build_gcs_key(self.path_prefix, storage_key, relative_path)

    def report_url(self, storage_key: str) -> str:
        """Return the public report URL for ``storage_key``."""
        return gcs_report_url(self.bucket_name, self.path_prefix, storage_key)

    def uploads(self, storage_key: str, source_dir: str | PathLike[str]) -> list[UploadItem]:
        """Prepare every uploadable file in ``source_dir`` under ``storage_key``."""
        return prepare_uploads(source_dir, lambda relative: self.build_key(storage_key, relative))