from pathlib import Path, PurePosixPath
import shutil
from typing import BinaryIO
from fastapi import UploadFile
from catalog_io.core.config import settings


class LocalBlobStorage:
    """Blob store on the local filesystem.

    Blob keys are relative POSIX paths under ``root``; public URLs are the
    key appended to ``public_base_url``.
    """

    def __init__(self, root: str | Path, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _full_path(self, path: str) -> Path:
        key = PurePosixPath(path)
        if key.is_absolute() or ".." in key.parts:
            raise ValueError(f"Invalid blob path: {path}")
        return self.root.joinpath(*key.parts)

    def open_read(self, path: str) -> BinaryIO:
        return self._full_path(path).open("rb")

    def open_write(self, path: str) -> BinaryIO:
        full = self._full_path(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        return full.open("wb")

    def exists(self, path: str) -> bool:
        return self._full_path(path).is_file()

    def get_size(self, path: str) -> int:
        return self._full_path(path).stat().st_size

    def remove(self, path: str) -> None:
        self._full_path(path).unlink(missing_ok=True)

    def get_absolute_url(self, path: str) -> str:
        return f"{self.public_base_url}/{path.lstrip('/')}"

    def save_upload(self, file: UploadFile, path: str) -> int:
        with self.open_write(path) as f:
            shutil.copyfileobj(file.file, f)
        return self.get_size(path)


def ensure_dirs():
    Path(settings.BLOB_ROOT).mkdir(parents=True, exist_ok=True)


def get_blob_storage() -> LocalBlobStorage:
    return LocalBlobStorage(settings.BLOB_ROOT, settings.PUBLIC_BASE_URL)
