from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Generic, Iterator, TypeVar

from catalog_io.core.logging import logger
from catalog_io.schemas.records import CsvRecord
from catalog_io.services.csv.column_map import ColumnMap
from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.csv.errors import CsvFormatError
from catalog_io.services.csv.reader import CsvRecordReader, ErrorHandler

T = TypeVar("T", bound=CsvRecord)


@dataclass(frozen=True)
class ImportRecord(Generic[T]):
    row: int
    raw_record: str
    record: T


class ImportPagedDataSource(Generic[T]):
    """Serves a seekable byte stream as pages of decoded records.

    Header and total-count discovery run as isolated passes that rewind the
    stream and restore its position, so they can be called at any time
    without moving the page cursor. Only the current page is held in memory.
    """

    def __init__(
        self,
        stream: BinaryIO,
        record_type: type[T],
        page_size: int,
        configuration: ImportConfiguration | None = None,
        column_map: ColumnMap | None = None,
        error_handler: ErrorHandler | None = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._stream = stream
        self.record_type = record_type
        self.page_size = page_size
        self.configuration = configuration or ImportConfiguration()
        self.column_map = column_map or ColumnMap.for_record(record_type)
        self.error_handler = error_handler

        self._reader: CsvRecordReader | None = None
        self._total_count: int | None = None

        self.current_page_number = 0
        self.processed_count = 0
        self.items: list[ImportRecord[T]] = []

        with self._rewound() as reader:
            if not reader.read_header():
                raise CsvFormatError("The file has no header row.")

    def register_schema(self, column_map: ColumnMap) -> None:
        if self._reader is not None:
            logger.warning("csv_schema_registration_ignored", reason="fetching already started")
            return
        self.column_map = column_map
        self._total_count = None

    def get_header_raw(self) -> str:
        with self._rewound() as reader:
            try:
                if not reader.read_header():
                    return ""
            except CsvFormatError:
                return ""
            if self.column_map.missing_columns(reader.header):
                return ""
            return reader.header_raw

    def get_total_count(self) -> int:
        if self._total_count is not None:
            return self._total_count

        count = 0
        with self._rewound() as reader:
            try:
                reader.read_header()
                reader.validate_header()
            except CsvFormatError:
                # an unusable header line still counts as a row
                count += 1
            while reader.read():
                count += 1

        self._total_count = count
        return count

    def fetch(self) -> bool:
        if self.processed_count >= self.get_total_count():
            self.items = []
            return False

        reader = self._main_reader()
        items: list[ImportRecord[T]] = []
        consumed = 0
        while consumed < self.page_size and reader.read():
            consumed += 1
            record = reader.get_record()
            if record is not None:
                items.append(ImportRecord(row=reader.row, raw_record=reader.raw_record, record=record))

        self.items = items
        if not consumed:
            return False

        self.processed_count += consumed
        self.current_page_number += 1
        return True

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "ImportPagedDataSource[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _main_reader(self) -> CsvRecordReader:
        if self._reader is None:
            self._stream.seek(0)
            reader = CsvRecordReader(self._stream, self.column_map, self.configuration, self.error_handler)
            if not reader.read_header():
                raise CsvFormatError("The file has no header row.")
            reader.validate_header()
            self._reader = reader
        return self._reader

    @contextmanager
    def _rewound(self) -> Iterator[CsvRecordReader]:
        position = self._stream.tell()
        self._stream.seek(0)
        try:
            yield CsvRecordReader(self._stream, self.column_map, self.configuration)
        finally:
            self._stream.seek(position)
