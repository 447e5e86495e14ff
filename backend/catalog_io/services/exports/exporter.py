import datetime as dt
import io
from typing import Callable

import pandas as pd
from sqlalchemy.orm import Session

from catalog_io.core.config import settings
from catalog_io.core.constants import EXPORT_DESCRIPTION, EXPORT_FILE_NAME_PREFIXES
from catalog_io.core.logging import logger
from catalog_io.schemas.exports import ExportDataRequest, ExportProgressInfo
from catalog_io.schemas.records import CsvRecord
from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.exports.data_source import ExportPagedDataSource
from catalog_io.services.files import LocalBlobStorage
from catalog_io.services.imports.cancellation import CancellationToken, OperationCancelledError
from catalog_io.services.imports.errors import UnknownDataTypeError

LINE_TERMINATOR = "\r\n"


def default_export_path(prefix: str, ext: str) -> str:
    ts = dt.datetime.utcnow().strftime("%Y%m%d_%H%M%S")
    return f"exports/{prefix}_{ts}.{ext}"


def _columns(record_type: type[CsvRecord]) -> list[str]:
    return [f.alias or name for name, f in record_type.model_fields.items()]


def _frame(records: list[CsvRecord], columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame([r.model_dump(by_alias=True) for r in records], columns=columns)


class CsvDataExporter:
    def __init__(
        self,
        db: Session,
        blob_storage: LocalBlobStorage,
        configuration: ImportConfiguration | None = None,
        page_size: int | None = None,
        limit: int | None = None,
    ):
        self.db = db
        self.blob_storage = blob_storage
        self.configuration = configuration or ImportConfiguration.from_settings()
        self.page_size = page_size or settings.EXPORT_PAGE_SIZE
        self.limit = limit if limit is not None else settings.EXPORT_LIMIT_OF_LINES

    def export(
        self,
        request: ExportDataRequest,
        progress_callback: Callable[[ExportProgressInfo], None],
        cancellation_token: CancellationToken,
    ) -> ExportProgressInfo:
        prefix = EXPORT_FILE_NAME_PREFIXES.get(request.data_type)
        if prefix is None:
            raise UnknownDataTypeError(request.data_type)

        progress = ExportProgressInfo(description="Export has started")
        file_path = default_export_path(prefix, "csv")
        data_source = ExportPagedDataSource(
            self.db, request.data_type, self.page_size, object_ids=request.object_ids, limit=self.limit
        )
        columns = _columns(data_source.record_type)
        completed = False

        try:
            progress.total_count = data_source.get_total_count()
            progress_callback(progress)

            with io.TextIOWrapper(
                self.blob_storage.open_write(file_path), encoding=self.configuration.encoding, newline=""
            ) as writer:
                _frame([], columns).to_csv(
                    writer, sep=self.configuration.delimiter, index=False, lineterminator=LINE_TERMINATOR
                )
                while True:
                    cancellation_token.throw_if_cancellation_requested()
                    if not data_source.fetch():
                        break
                    _frame(data_source.items, columns).to_csv(
                        writer,
                        sep=self.configuration.delimiter,
                        index=False,
                        header=False,
                        lineterminator=LINE_TERMINATOR,
                    )
                    progress.processed_count = data_source.processed_count
                    progress.description = EXPORT_DESCRIPTION.format(progress.processed_count, progress.total_count)
                    progress_callback(progress)
            completed = True
        except OperationCancelledError:
            logger.info("export_cancelled", data_type=request.data_type, processed=progress.processed_count)
        except Exception as e:
            logger.exception("export_failed", data_type=request.data_type, error=str(e))
            progress.errors.append(str(e) or e.__class__.__name__)
            progress_callback(progress)
        finally:
            if completed:
                progress.file_url = self.blob_storage.get_absolute_url(file_path)
            else:
                self.blob_storage.remove(file_path)
            progress.description = (
                f"Export completed: {EXPORT_DESCRIPTION.format(progress.processed_count, progress.total_count)}"
            )
            progress_callback(progress)
            logger.info(
                "export_finished",
                data_type=request.data_type,
                path=file_path,
                processed=progress.processed_count,
                completed=completed,
            )

        return progress
