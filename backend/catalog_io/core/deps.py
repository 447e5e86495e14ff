from catalog_io.db.session import SessionLocal
from catalog_io.services.files import LocalBlobStorage, get_blob_storage

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_blobs() -> LocalBlobStorage:
    return get_blob_storage()
