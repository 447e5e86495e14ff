from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from sqlalchemy.orm import Session
from pathlib import Path
import uuid

from catalog_io.core.deps import get_db, get_blobs
from catalog_io.schemas.imports import (
    ImportRunCreate,
    ImportRunOut,
    ImportValidationResult,
    UploadOut,
)
from catalog_io.services.files import LocalBlobStorage
from catalog_io.services.imports.errors import UnknownDataTypeError
from catalog_io.services.imports.file_validator import validate_import_file
from catalog_io.services.imports.importers import Importer, get_importer
from catalog_io.crud.imports import create_import_run, get_import_run, list_imports, request_cancellation
from catalog_io.worker.tasks import run_import_task

router = APIRouter()


def _importer_or_400(data_type: str) -> Importer:
    try:
        return get_importer(data_type)
    except UnknownDataTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/upload", response_model=UploadOut)
def upload_csv(
    file: UploadFile = File(...),
    blobs: LocalBlobStorage = Depends(get_blobs),
):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only .csv supported")

    # unique key so parallel uploads of the same file name do not collide
    file_path = f"imports/{uuid.uuid4().hex}_{Path(file.filename).name}"
    size = blobs.save_upload(file, file_path)
    return UploadOut(file_path=file_path, size=size)


@router.post("/validate", response_model=ImportValidationResult)
def validate_file(
    data: ImportRunCreate,
    blobs: LocalBlobStorage = Depends(get_blobs),
):
    importer = _importer_or_400(data.data_type)
    errors = validate_import_file(blobs, data.file_path, importer)
    return ImportValidationResult(file_path=data.file_path, errors=errors)


@router.post("/run", response_model=ImportRunOut)
def run_import(
    data: ImportRunCreate,
    db: Session = Depends(get_db),
    blobs: LocalBlobStorage = Depends(get_blobs),
):
    _importer_or_400(data.data_type)
    if not blobs.exists(data.file_path):
        raise HTTPException(status_code=404, detail=f"File {data.file_path} not found")

    run = create_import_run(db, data.file_path, data.data_type)
    run_import_task.delay(run.id)
    return run


@router.get("", response_model=list[ImportRunOut])
def get_imports(db: Session = Depends(get_db)):
    return list_imports(db)


@router.get("/{import_run_id}", response_model=ImportRunOut)
def get_import(import_run_id: int, db: Session = Depends(get_db)):
    run = get_import_run(db, import_run_id)
    if not run:
        raise HTTPException(status_code=404, detail="Import run not found")
    return run


@router.post("/{import_run_id}/cancel", response_model=ImportRunOut)
def cancel_import(import_run_id: int, db: Session = Depends(get_db)):
    run = request_cancellation(db, import_run_id)
    if not run:
        raise HTTPException(status_code=404, detail="Import run not found")
    return run
