import datetime as dt
from typing import Callable
import structlog
from sqlalchemy.orm import Session

from catalog_io.worker.celery_app import celery_app
from catalog_io.core.logging import logger
from catalog_io.db.session import SessionLocal
from catalog_io.crud.imports import apply_progress, get_import_run, is_cancellation_requested, set_import_status
from catalog_io.schemas.imports import ImportDataRequest, ImportProgressInfo
from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.files import LocalBlobStorage, get_blob_storage
from catalog_io.services.imports.cancellation import CancellationToken
from catalog_io.services.imports.engine import ImportEngine
from catalog_io.services.imports.importers import get_importer


class ImportRunCancellationToken(CancellationToken):
    """Polls ``ImportRun.cancel_requested`` in a short-lived session of its own."""

    def __init__(self, session_factory: Callable[[], Session], import_run_id: int):
        self.session_factory = session_factory
        self.import_run_id = import_run_id
        self.cancelled = False

    @property
    def is_cancellation_requested(self) -> bool:
        if not self.cancelled:
            db = self.session_factory()
            try:
                self.cancelled = is_cancellation_requested(db, self.import_run_id)
            finally:
                db.close()
        return self.cancelled


def _final_status(progress: ImportProgressInfo, cancelled: bool) -> str:
    if cancelled:
        return "cancelled"
    if progress.errors:
        return "failed"
    if progress.error_count:
        return "success_with_errors"
    return "success"


def run_import_job(
    db: Session,
    import_run_id: int,
    blob_storage: LocalBlobStorage | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> ImportProgressInfo | None:
    run = get_import_run(db, import_run_id)
    if not run:
        logger.error("import_run_missing", import_run_id=import_run_id)
        return None

    # unknown data types fail here, before any file is opened
    importer = get_importer(run.data_type)
    request = ImportDataRequest(file_path=run.file_path, data_type=run.data_type)

    set_import_status(db, import_run_id, "running", started_at=dt.datetime.utcnow())

    token = ImportRunCancellationToken(session_factory, import_run_id)
    engine = ImportEngine(importer, db, blob_storage or get_blob_storage(), ImportConfiguration.from_settings())
    progress = engine.import_data(request, lambda p: apply_progress(db, import_run_id, p), token)

    status = _final_status(progress, token.cancelled)
    set_import_status(db, import_run_id, status, finished_at=dt.datetime.utcnow())

    logger.info(
        "import_run_finished",
        import_run_id=import_run_id,
        status=status,
        processed=progress.processed_count,
        errors=progress.error_count,
    )
    return progress


@celery_app.task(name="imports.run_import", bind=True)
def run_import_task(self, import_run_id: int):
    structlog.contextvars.bind_contextvars(import_run_id=import_run_id)
    db: Session = SessionLocal()
    try:
        run_import_job(db, import_run_id)

    except Exception as e:
        logger.exception("import_failed", import_run_id=import_run_id, error=str(e))

        # the session may hold an aborted transaction
        try:
            db.rollback()
            set_import_status(db, import_run_id, "failed", finished_at=dt.datetime.utcnow())
        except Exception as e2:
            logger.exception(
                "import_failed_status_update_failed",
                import_run_id=import_run_id,
                error=str(e2),
            )
            # fall back to a fresh session in case this one is unusable
            try:
                db2: Session = SessionLocal()
                try:
                    set_import_status(db2, import_run_id, "failed", finished_at=dt.datetime.utcnow())
                finally:
                    db2.close()
            except Exception as e3:
                logger.exception(
                    "import_failed_status_update_failed_second_attempt",
                    import_run_id=import_run_id,
                    error=str(e3),
                )

        raise

    finally:
        db.close()
        structlog.contextvars.clear_contextvars()
