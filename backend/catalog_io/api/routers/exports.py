from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catalog_io.core.deps import get_db, get_blobs
from catalog_io.schemas.exports import ExportDataRequest, ExportProgressInfo
from catalog_io.services.exports.exporter import CsvDataExporter
from catalog_io.services.files import LocalBlobStorage
from catalog_io.services.imports.cancellation import ManualCancellationToken
from catalog_io.services.imports.errors import UnknownDataTypeError

router = APIRouter()


@router.post("/run", response_model=ExportProgressInfo)
def run_export(
    request: ExportDataRequest,
    db: Session = Depends(get_db),
    blobs: LocalBlobStorage = Depends(get_blobs),
):
    exporter = CsvDataExporter(db, blobs)
    try:
        return exporter.export(request, lambda _progress: None, ManualCancellationToken())
    except UnknownDataTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
