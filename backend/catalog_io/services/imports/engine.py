"""Paged import pipeline shared by every importable data type.

    fetch page -> validate page -> persist valid records -> write errors to
    the report in row order -> publish progress -> repeat

Rows that fail to decode are reported from the data source's error hook
while the page is being read; rows that break business rules are reported
after validation. Both land in one ``ImportErrorsContext`` so a row is
reported once, with all its messages merged.
"""
from __future__ import annotations

from collections import defaultdict
from functools import partial
from typing import Callable

from sqlalchemy.orm import Session

from catalog_io.core.constants import IMPORT_DESCRIPTION
from catalog_io.core.logging import logger
from catalog_io.schemas.imports import ImportDataRequest, ImportProgressInfo
from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.csv.data_source import ImportPagedDataSource, ImportRecord
from catalog_io.services.csv.errors import RowDecodeError
from catalog_io.services.csv.reporter import CsvImportReporter, get_report_file_path
from catalog_io.services.files import LocalBlobStorage
from catalog_io.services.imports.cancellation import CancellationToken, OperationCancelledError
from catalog_io.services.imports.errors import ImportErrorsContext, ImportRowError
from catalog_io.services.imports.importers import Importer
from catalog_io.services.imports.validators import ValidationError

ProgressCallback = Callable[[ImportProgressInfo], None]


def _validate_parameters(request, progress_callback, cancellation_token) -> None:
    if request is None:
        raise ValueError("request is required")
    if progress_callback is None:
        raise ValueError("progress_callback is required")
    if cancellation_token is None:
        raise ValueError("cancellation_token is required")


def _handle_error(progress_callback: ProgressCallback, progress: ImportProgressInfo, error: str | None = None) -> None:
    if error is not None:
        progress.errors.append(error)
    progress_callback(progress)


class ImportEngine:
    def __init__(
        self,
        importer: Importer,
        db: Session | None,
        blob_storage: LocalBlobStorage,
        configuration: ImportConfiguration | None = None,
    ):
        self.importer = importer
        self.db = db
        self.blob_storage = blob_storage
        self.configuration = configuration or ImportConfiguration.from_settings()

    def import_data(
        self,
        request: ImportDataRequest,
        progress_callback: ProgressCallback,
        cancellation_token: CancellationToken,
    ) -> ImportProgressInfo:
        _validate_parameters(request, progress_callback, cancellation_token)

        log = logger.bind(data_type=self.importer.data_type, file_path=request.file_path)
        log.info("import_started")

        errors_context = ImportErrorsContext()
        progress = ImportProgressInfo(description="Import has started")
        report_path = get_report_file_path(request.file_path)
        reporter: CsvImportReporter | None = None

        try:
            reporter = CsvImportReporter(self.blob_storage, report_path, self.configuration)
            with reporter:
                cancellation_token.throw_if_cancellation_requested()
                error_handler = partial(self._handle_decode_error, errors_context, progress, progress_callback)
                with self._open_data_source(request, error_handler) as data_source:
                    self._run(data_source, reporter, errors_context, progress, progress_callback, cancellation_token)
        except OperationCancelledError:
            log.info("import_cancelled", processed=progress.processed_count, total=progress.total_count)
        except Exception as e:
            log.exception("import_fatal_error", error=str(e))
            if self.db is not None:
                self.db.rollback()
            _handle_error(progress_callback, progress, str(e) or e.__class__.__name__)
        finally:
            self._complete(progress, reporter, report_path, progress_callback)
            log.info(
                "import_finished",
                processed=progress.processed_count,
                total=progress.total_count,
                errors=progress.error_count,
                created=progress.created_count,
                updated=progress.updated_count,
            )

        return progress

    def _open_data_source(self, request: ImportDataRequest, error_handler) -> ImportPagedDataSource:
        stream = self.blob_storage.open_read(request.file_path)
        try:
            return ImportPagedDataSource(
                stream,
                self.importer.record_type,
                self.configuration.page_size,
                self.configuration,
                column_map=self.importer.column_map(),
                error_handler=error_handler,
            )
        except Exception:
            stream.close()
            raise

    def _run(
        self,
        data_source: ImportPagedDataSource,
        reporter: CsvImportReporter,
        errors_context: ImportErrorsContext,
        progress: ImportProgressInfo,
        progress_callback: ProgressCallback,
        cancellation_token: CancellationToken,
    ) -> None:
        header_raw = data_source.get_header_raw()
        if header_raw:
            reporter.write_header(header_raw)

        progress.total_count = data_source.get_total_count()
        progress_callback(progress)

        progress.description = "Fetching..."
        progress_callback(progress)

        validator = self.importer.validator_factory(self.db)

        while True:
            cancellation_token.throw_if_cancellation_requested()
            try:
                if not data_source.fetch():
                    break
                progress.processed_count = data_source.processed_count
                self._process_page(data_source.items, validator, errors_context, progress)
            finally:
                # rows already counted as failed reach the report even if the page aborts
                for error in errors_context.ordered():
                    reporter.write(error)
                errors_context.clear()

            logger.debug(
                "import_page_processed",
                page=data_source.current_page_number,
                processed=progress.processed_count,
                errors=progress.error_count,
            )

            if progress.processed_count != progress.total_count:
                progress.description = IMPORT_DESCRIPTION.format(progress.processed_count, progress.total_count)
                progress_callback(progress)

    def _process_page(self, records: list[ImportRecord], validator, errors_context, progress) -> None:
        if not records:
            return

        violations = validator.validate(records)
        self._collect_violations(violations, errors_context, progress)

        valid = [x.record for x in records if not errors_context.contains_row(x.row)]
        if valid:
            created, updated = self.importer.chunk_processor(self.db, valid)
            progress.created_count += created
            progress.updated_count += updated

    def _collect_violations(
        self,
        violations: list[ValidationError],
        errors_context: ImportErrorsContext,
        progress: ImportProgressInfo,
    ) -> None:
        by_row: dict[int, list[ValidationError]] = defaultdict(list)
        for v in violations:
            by_row[v.row_num].append(v)

        for row, items in by_row.items():
            error = ImportRowError(row=row, raw_row=items[0].raw_row, error=" ".join(v.message for v in items))
            self._add_error(errors_context, progress, error)

    def _handle_decode_error(
        self,
        errors_context: ImportErrorsContext,
        progress: ImportProgressInfo,
        progress_callback: ProgressCallback,
        error: RowDecodeError,
    ) -> None:
        if errors_context.contains_row(error.row):
            return
        self._add_error(errors_context, progress, ImportRowError(row=error.row, raw_row=error.raw_record, error=error.message))
        _handle_error(progress_callback, progress)

    @staticmethod
    def _add_error(errors_context: ImportErrorsContext, progress: ImportProgressInfo, error: ImportRowError) -> None:
        if errors_context.add(error):
            progress.error_count += 1
        logger.debug("import_row_failed", row=error.row, error=error.error)

    def _complete(
        self,
        progress: ImportProgressInfo,
        reporter: CsvImportReporter | None,
        report_path: str,
        progress_callback: ProgressCallback,
    ) -> None:
        completed = "Import completed with errors" if progress.error_count > 0 else "Import completed"
        progress.description = f"{completed}: {IMPORT_DESCRIPTION.format(progress.processed_count, progress.total_count)}"

        if reporter is not None and reporter.report_is_not_empty:
            progress.report_url = self.blob_storage.get_absolute_url(report_path)

        progress_callback(progress)
