import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from catalog_io.db.base import Base
import catalog_io.db.models  # noqa: F401
from catalog_io.services.files import LocalBlobStorage

PRODUCTS_HEADER = "Product Id;Product Name;Product SKU;Product Type;Main Product Id;Weight"
REVIEWS_HEADER = "Description Id;Product Name;Product SKU;Description Type;Language;Description Content"


@pytest.fixture
def session_factory(tmp_path):
    # file-based so separate sessions (cancellation polling) see committed rows
    engine = create_engine(f"sqlite:///{tmp_path / 'catalog.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def blobs(tmp_path):
    return LocalBlobStorage(tmp_path / "blobs", "http://test/blobs")


@pytest.fixture
def put_file(blobs):
    def _put(path: str, *lines: str, newline: str = "\r\n", bom: bool = False) -> str:
        text = newline.join(lines) + newline
        with blobs.open_write(path) as f:
            if bom:
                f.write(b"\xef\xbb\xbf")
            f.write(text.encode("utf-8"))
        return path
    return _put
