from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class CertificateStorage(Protocol):
    """Binary object storage: upload by path, resolve a public URL."""

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        raise NotImplementedError

    def public_url(self, path: str) -> str:
        raise NotImplementedError


class LocalCertificateStorage(CertificateStorage):
    """Files under a local directory, served by the app at `url_prefix`."""

    def __init__(self, root_dir: str | Path, *, url_prefix: str = "/uploads"):
        self._root = Path(root_dir).resolve()
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        if self._root not in target.parents:
            raise StorageError("Invalid storage path")
        return target

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # "xb": never overwrite an existing object.
            with open(target, "xb") as fh:
                fh.write(data)
        except FileExistsError as e:
            raise StorageError("A file already exists at this path") from e
        except OSError as e:
            logger.exception("Could not write %s", target)
            raise StorageError("Could not store the file") from e

    def public_url(self, path: str) -> str:
        return f"{self._url_prefix}/{path}"


class InMemoryCertificateStorage(CertificateStorage):
    def __init__(self, *, url_prefix: str = "/uploads"):
        self._url_prefix = url_prefix.rstrip("/")
        self.objects: dict[str, tuple[bytes, str]] = {}

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        if path in self.objects:
            raise StorageError("A file already exists at this path")
        self.objects[path] = (bytes(data), content_type)

    def public_url(self, path: str) -> str:
        return f"{self._url_prefix}/{path}"
