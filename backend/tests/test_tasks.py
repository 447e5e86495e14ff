import pytest

from catalog_io.crud.imports import create_import_run, get_import_run, request_cancellation
from catalog_io.services.imports.errors import UnknownDataTypeError
from catalog_io.worker.tasks import run_import_job

from conftest import PRODUCTS_HEADER

FILE = "imports/products.csv"


def _run(db, blobs, session_factory, data_type="PhysicalProduct", cancel=False):
    run = create_import_run(db, FILE, data_type)
    if cancel:
        request_cancellation(db, run.id)
    run_import_job(db, run.id, blob_storage=blobs, session_factory=session_factory)
    db.expire_all()
    return get_import_run(db, run.id)


def test_successful_run(db, blobs, session_factory, put_file):
    put_file(FILE, PRODUCTS_HEADER, "p1;A;S1;;;", "p2;B;S2;;;")
    run = _run(db, blobs, session_factory)
    assert run.status == "success"
    assert run.total_count == 2
    assert run.processed_count == 2
    assert run.created_count == 2
    assert run.started_at is not None and run.finished_at is not None
    assert run.description == "Import completed: 2 out of 2 have been imported."


def test_run_with_row_errors(db, blobs, session_factory, put_file):
    put_file(FILE, PRODUCTS_HEADER, "p1;A;S1;;;", "p2;;S2;;;")
    run = _run(db, blobs, session_factory)
    assert run.status == "success_with_errors"
    assert run.error_count == 1
    assert run.report_url == "http://test/blobs/imports/products_report.csv"


def test_fatal_error_marks_run_failed(db, blobs, session_factory, put_file):
    put_file(FILE, "Product Id;Product Name", "p1;A")
    run = _run(db, blobs, session_factory)
    assert run.status == "failed"
    assert run.errors == ["Header with name(s) 'Product SKU' was not found."]


def test_cancel_requested_before_start(db, blobs, session_factory, put_file):
    put_file(FILE, PRODUCTS_HEADER, "p1;A;S1;;;")
    run = _run(db, blobs, session_factory, cancel=True)
    assert run.status == "cancelled"
    assert run.processed_count == 0


def test_unknown_data_type_raises(db, blobs, session_factory):
    with pytest.raises(UnknownDataTypeError):
        _run(db, blobs, session_factory, data_type="Unknown")


def test_missing_run_is_ignored(db, blobs, session_factory):
    assert run_import_job(db, 404, blob_storage=blobs, session_factory=session_factory) is None
