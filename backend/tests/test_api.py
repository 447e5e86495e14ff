from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from catalog_io.api.routers import imports as imports_router
from catalog_io.core.deps import get_blobs, get_db
from catalog_io.crud.catalog import save_products
from catalog_io.main import app
from catalog_io.schemas.records import CsvPhysicalProduct

from conftest import PRODUCTS_HEADER


@pytest.fixture
def client(session_factory, blobs, monkeypatch):
    queued = []
    monkeypatch.setattr(imports_router, "run_import_task", SimpleNamespace(delay=queued.append))

    def _db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_blobs] = lambda: blobs
    c = TestClient(app)
    c.queued = queued
    yield c
    app.dependency_overrides.clear()


def _upload(client, content: str, name="products.csv"):
    return client.post("/imports/upload", files={"file": (name, content.encode("utf-8"), "text/csv")})


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_upload_validate_and_run(client, blobs):
    r = _upload(client, f"{PRODUCTS_HEADER}\r\np1;A;S1;;;\r\n")
    assert r.status_code == 200
    file_path = r.json()["file_path"]
    assert file_path.startswith("imports/") and file_path.endswith("_products.csv")
    assert blobs.exists(file_path)

    r = client.post("/imports/validate", json={"file_path": file_path, "data_type": "PhysicalProduct"})
    assert r.json()["errors"] == []

    r = client.post("/imports/run", json={"file_path": file_path, "data_type": "PhysicalProduct"})
    assert r.status_code == 200
    run = r.json()
    assert run["status"] == "queued"
    assert client.queued == [run["id"]]

    assert client.get(f"/imports/{run['id']}").json()["file_path"] == file_path
    assert [x["id"] for x in client.get("/imports").json()] == [run["id"]]
    assert client.post(f"/imports/{run['id']}/cancel").status_code == 200


def test_upload_rejects_other_formats(client):
    assert _upload(client, "x", name="products.xlsx").status_code == 400


def test_validate_reports_file_problems(client):
    r = client.post("/imports/validate", json={"file_path": "imports/none.csv", "data_type": "PhysicalProduct"})
    assert r.json()["errors"] == [{"error_code": "file-not-existed", "parameters": {}}]


def test_unknown_data_type_is_bad_request(client):
    r = client.post("/imports/validate", json={"file_path": "a.csv", "data_type": "Nope"})
    assert r.status_code == 400


def test_run_for_missing_file_is_not_found(client):
    r = client.post("/imports/run", json={"file_path": "imports/none.csv", "data_type": "PhysicalProduct"})
    assert r.status_code == 404
    assert client.queued == []


def test_missing_run_is_not_found(client):
    assert client.get("/imports/999").status_code == 404
    assert client.post("/imports/999/cancel").status_code == 404


def test_export_run(client, session_factory):
    db = session_factory()
    try:
        save_products(db, [CsvPhysicalProduct(product_id="p1", name="A", sku="S1")])
    finally:
        db.close()
    r = client.post("/exports/run", json={"data_type": "PhysicalProduct"})
    assert r.status_code == 200
    assert r.json()["processed_count"] == 1
    assert r.json()["file_url"].startswith("http://test/blobs/exports/Physical_products_")
