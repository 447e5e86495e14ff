import datetime as dt
from sqlalchemy.orm import Session
from catalog_io.db.models.import_run import ImportRun
from catalog_io.schemas.imports import ImportProgressInfo

def get_import_run(db: Session, import_run_id: int) -> ImportRun | None:
    return db.query(ImportRun).filter(ImportRun.id==import_run_id).one_or_none()

def create_import_run(db: Session, file_path: str, data_type: str) -> ImportRun:
    run = ImportRun(file_path=file_path, data_type=data_type, status="queued", errors=[])
    db.add(run)
    db.commit()
    db.refresh(run)
    return run

def set_import_status(
    db: Session,
    import_run_id: int,
    status: str,
    started_at: dt.datetime | None = None,
    finished_at: dt.datetime | None = None,
):
    run = db.query(ImportRun).filter(ImportRun.id==import_run_id).one()
    run.status = status
    if started_at is not None:
        run.started_at = started_at
    if finished_at is not None:
        run.finished_at = finished_at
    db.commit()

def apply_progress(db: Session, import_run_id: int, progress: ImportProgressInfo):
    run = db.query(ImportRun).filter(ImportRun.id==import_run_id).one()
    run.description = progress.description
    run.total_count = progress.total_count
    run.processed_count = progress.processed_count
    run.error_count = progress.error_count
    run.created_count = progress.created_count
    run.updated_count = progress.updated_count
    run.errors = list(progress.errors)
    run.report_url = progress.report_url
    db.commit()

def request_cancellation(db: Session, import_run_id: int) -> ImportRun | None:
    run = get_import_run(db, import_run_id)
    if run is None:
        return None
    run.cancel_requested = True
    db.commit()
    db.refresh(run)
    return run

def is_cancellation_requested(db: Session, import_run_id: int) -> bool:
    return bool(db.query(ImportRun.cancel_requested).filter(ImportRun.id==import_run_id).scalar())

def list_imports(db: Session):
    return db.query(ImportRun).order_by(ImportRun.id.desc()).all()
