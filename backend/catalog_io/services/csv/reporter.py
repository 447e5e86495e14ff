from __future__ import annotations

import io
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from catalog_io.core.logging import logger
from catalog_io.services.csv.configuration import ImportConfiguration

if TYPE_CHECKING:
    from catalog_io.services.files import LocalBlobStorage
    from catalog_io.services.imports.errors import ImportRowError

ERROR_COLUMN = "Error description"
LINE_TERMINATOR = "\r\n"


def get_report_file_path(file_path: str) -> str:
    """``imports/data.csv`` -> ``imports/data_report.csv``"""
    path = PurePosixPath(file_path)
    return str(path.with_name(f"{path.stem}_report{path.suffix}"))


class CsvImportReporter:
    """Append-only error report in the dialect of the imported file.

    The header goes first, then one line per failed row: the raw row text as
    it was read plus the reason in an extra column. A report nobody wrote an
    error into is removed from storage on close.
    """

    def __init__(self, blob_storage: LocalBlobStorage, file_path: str, configuration: ImportConfiguration):
        self.blob_storage = blob_storage
        self.file_path = file_path
        self.delimiter = configuration.delimiter
        self.encoding = configuration.encoding
        self.report_is_not_empty = False
        self._writer: io.TextIOWrapper | None = None

    def open(self) -> None:
        self._writer = io.TextIOWrapper(
            self.blob_storage.open_write(self.file_path), encoding=self.encoding, newline=""
        )

    def write_header(self, header: str) -> None:
        self._writer.write(f"{header}{self.delimiter}{ERROR_COLUMN}{LINE_TERMINATOR}")

    def write(self, error: ImportRowError) -> None:
        self.report_is_not_empty = True
        self._writer.write(f"{error.raw_row}{self.delimiter}{self._quote(error.error)}{LINE_TERMINATOR}")

    def close(self) -> None:
        if self._writer is None:
            return
        self._writer.close()
        self._writer = None
        if not self.report_is_not_empty:
            self.blob_storage.remove(self.file_path)
        else:
            logger.info("import_report_written", path=self.file_path)

    def __enter__(self) -> "CsvImportReporter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _quote(self, value: str) -> str:
        if any(ch in value for ch in (self.delimiter, '"', "\r", "\n")):
            return '"' + value.replace('"', '""') + '"'
        return value
