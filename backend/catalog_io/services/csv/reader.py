"""Row-at-a-time decoder for delimited files.

One physical line is one record. The reader keeps the raw text and the
1-based line number of the current row next to the decoded value, and hands
rows that cannot be decoded to ``error_handler`` instead of raising.
"""
from __future__ import annotations

import csv
from typing import BinaryIO, Callable

from pydantic import ValidationError as PydanticValidationError

from catalog_io.core.logging import logger
from catalog_io.schemas.records import CsvRecord
from catalog_io.services.csv.column_map import ColumnMap
from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.csv.errors import (
    BadDataError,
    CsvFormatError,
    HeaderValidationError,
    InvalidEncodingError,
    InvalidValueError,
    MissingFieldError,
    RequiredValueError,
    RowDecodeError,
)

ErrorHandler = Callable[[RowDecodeError], None]


def split_line(line: str, delimiter: str) -> list[str]:
    """Split one physical line; raises ``csv.Error`` on broken quoting."""
    return next(csv.reader([line], delimiter=delimiter, strict=True))


class CsvRecordReader:
    def __init__(
        self,
        stream: BinaryIO,
        column_map: ColumnMap,
        configuration: ImportConfiguration,
        error_handler: ErrorHandler | None = None,
    ):
        self._stream = stream
        self.column_map = column_map
        self.configuration = configuration
        self.error_handler = error_handler

        self.header: list[str] | None = None
        self.header_raw: str | None = None
        self.row = 0
        self.raw_record: str | None = None

        self._line_number = 0
        self._positions: dict[str, int] = {}
        self._header_names: dict[str, str] = {}
        self._last_failed_row: int | None = None
        self._undecodable = False

    def read(self) -> bool:
        """Advance to the next non-blank line. Returns False at end of stream."""
        while True:
            line = self._stream.readline()
            if not line:
                self.raw_record = None
                return False
            self._line_number += 1
            try:
                text = line.decode(self.configuration.encoding)
                undecodable = False
            except UnicodeDecodeError:
                # the row is kept and counted; it fails when decoded
                text = line.decode(self.configuration.encoding, errors="replace")
                undecodable = True
            if self._line_number == 1:
                text = text.lstrip("\ufeff")
            text = text.rstrip("\r\n")
            if not text.strip():
                continue
            self.row = self._line_number
            self.raw_record = text
            self._undecodable = undecodable
            return True

    def read_header(self) -> bool:
        if not self.read():
            return False
        try:
            header = split_line(self.raw_record, self.configuration.delimiter)
        except csv.Error as e:
            raise CsvFormatError(f"The header row is malformed: {e}") from e
        self.header_raw = self.raw_record
        self.header = [h.strip() for h in header]
        self._positions = self.column_map.positions(self.header)
        self._header_names = {}
        for field, idx in self._positions.items():
            self._header_names[field] = self.header[idx]
            alias = self.column_map.record_type.model_fields[field].alias
            if alias:
                self._header_names[alias] = self.header[idx]
        return True

    def validate_header(self) -> None:
        missing = self.column_map.missing_columns(self.header or [])
        if missing:
            raise HeaderValidationError(missing)

    def get_record(self) -> CsvRecord | None:
        """Decode the current row, or report it and return None."""
        try:
            return self._decode()
        except RowDecodeError as e:
            self._report(e)
            return None

    def _decode(self) -> CsvRecord:
        if self._undecodable:
            raise InvalidEncodingError(self.row, self.raw_record, self.configuration.encoding)

        try:
            fields = split_line(self.raw_record, self.configuration.delimiter)
        except csv.Error:
            raise BadDataError(self.row, self.raw_record) from None

        if any(idx >= len(fields) for idx in self._positions.values()):
            columns = [h for h in self.header[len(fields):] if h]
            raise MissingFieldError(self.row, self.raw_record, columns)

        values: dict[str, str | None] = {}
        required_empty: list[str] = []
        for column in self.column_map.columns:
            idx = self._positions.get(column.field)
            if idx is None:
                continue
            value = fields[idx]
            if value.strip():
                values[column.field] = value
            elif column.required:
                required_empty.append(self.header[idx])
        if required_empty:
            raise RequiredValueError(self.row, self.raw_record, required_empty)

        try:
            return self.column_map.record_type.model_validate(values)
        except PydanticValidationError as e:
            loc = e.errors()[0]["loc"]
            key = str(loc[0]) if loc else ""
            raise InvalidValueError(self.row, self.raw_record, self._header_names.get(key, key)) from None

    def _report(self, error: RowDecodeError) -> None:
        if error.row == self._last_failed_row:
            return
        self._last_failed_row = error.row
        logger.debug("csv_row_decode_failed", row=error.row, error=error.message)
        if self.error_handler is not None:
            self.error_handler(error)
