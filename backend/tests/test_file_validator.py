from catalog_io.core.config import Settings
from catalog_io.core.constants import ValidationErrors
from catalog_io.services.imports.file_validator import validate_import_file
from catalog_io.services.imports.importers import PHYSICAL_PRODUCT_IMPORTER

from conftest import PRODUCTS_HEADER


def _codes(blobs, path, limits=None):
    errors = validate_import_file(blobs, path, PHYSICAL_PRODUCT_IMPORTER, limits=limits or Settings())
    return [e.error_code for e in errors]


def test_acceptable_file(blobs, put_file):
    put_file("a.csv", PRODUCTS_HEADER, "p1;A;S1;;;")
    assert _codes(blobs, "a.csv") == []


def test_missing_file(blobs):
    assert _codes(blobs, "nope.csv") == [ValidationErrors.FILE_NOT_EXISTED]


def test_file_too_big(blobs, put_file):
    put_file("a.csv", PRODUCTS_HEADER, *["p;A;S;;;" * 20] * 8000)
    assert _codes(blobs, "a.csv") == [ValidationErrors.EXCEEDING_FILE_MAX_SIZE]


def test_wrong_delimiter(blobs, put_file):
    put_file("a.csv", PRODUCTS_HEADER.replace(";", ","), "p1,A,S1,,,")
    assert _codes(blobs, "a.csv") == [ValidationErrors.WRONG_DELIMITER]


def test_header_only(blobs, put_file):
    put_file("a.csv", PRODUCTS_HEADER, "")
    assert _codes(blobs, "a.csv") == [ValidationErrors.NO_DATA]


def test_missing_columns_reported_with_names(blobs, put_file):
    put_file("a.csv", "Product Id;Vendor", "p1;V")
    errors = validate_import_file(blobs, "a.csv", PHYSICAL_PRODUCT_IMPORTER, limits=Settings())
    assert errors[0].error_code == ValidationErrors.MISSING_REQUIRED_COLUMNS
    assert errors[0].parameters == {"columns": "Product Name, Product SKU"}


def test_line_limit(blobs, put_file):
    put_file("a.csv", PRODUCTS_HEADER, *[f"p{i};A;S{i};;;" for i in range(4)])
    errors = validate_import_file(
        blobs, "a.csv", PHYSICAL_PRODUCT_IMPORTER, limits=Settings(IMPORT_LIMIT_OF_LINES=3)
    )
    assert errors[0].error_code == ValidationErrors.EXCEEDING_LINE_LIMITS
    assert errors[0].parameters == {"max_lines_number": "3", "lines_number": "4"}
