import io

import pytest

from catalog_io.schemas.records import CsvEditorialReview, CsvPhysicalProduct
from catalog_io.services.csv.column_map import ColumnMap
from catalog_io.services.csv.data_source import ImportPagedDataSource
from catalog_io.services.csv.errors import BadDataError, CsvFormatError, HeaderValidationError

from conftest import PRODUCTS_HEADER


def _source(*lines: str, page_size: int = 2, errors: list | None = None) -> ImportPagedDataSource:
    data = ("\r\n".join(lines) + "\r\n").encode("utf-8")
    handler = errors.append if errors is not None else None
    return ImportPagedDataSource(io.BytesIO(data), CsvPhysicalProduct, page_size, error_handler=handler)


def _rows(n: int) -> list[str]:
    return [f"p{i};Product {i};SKU-{i};;;" for i in range(1, n + 1)]


def test_total_count_skips_blank_lines():
    ds = _source(PRODUCTS_HEADER, "p1;A;S1;;;", "", "p2;B;S2;;;", "   ", "p3;C;S3;;;")
    assert ds.get_total_count() == 3


def test_total_count_includes_invalid_header():
    ds = _source("Product Id;Product Name", "p1;A", "p2;B")
    assert ds.get_total_count() == 3
    assert ds.get_header_raw() == ""


def test_header_raw_is_the_original_text():
    ds = _source(PRODUCTS_HEADER, *_rows(1))
    assert ds.get_header_raw() == PRODUCTS_HEADER


def test_pages_until_exhausted():
    ds = _source(PRODUCTS_HEADER, *_rows(5))
    sizes = []
    while ds.fetch():
        sizes.append(len(ds.items))
    assert sizes == [2, 2, 1]
    assert ds.processed_count == 5
    assert ds.current_page_number == 3
    assert ds.items == []


def test_items_keep_row_and_raw_text():
    ds = _source(PRODUCTS_HEADER, "", *_rows(2))
    assert ds.fetch()
    assert [x.row for x in ds.items] == [3, 4]
    assert ds.items[0].raw_record == "p1;Product 1;SKU-1;;;"
    assert ds.items[1].record.sku == "SKU-2"


def test_failed_rows_are_consumed_and_reported():
    errors = []
    ds = _source(PRODUCTS_HEADER, "p1;A;S1;;;", 'p2;"B"x;S2;;;', "p3;C;S3;;;", page_size=3, errors=errors)
    assert ds.fetch()
    assert [x.row for x in ds.items] == [2, 4]
    assert ds.processed_count == 3
    assert len(errors) == 1
    assert isinstance(errors[0], BadDataError)
    assert errors[0].row == 3


def test_discovery_between_fetches_keeps_cursor():
    ds = _source(PRODUCTS_HEADER, *_rows(4))
    assert ds.fetch()
    assert ds.get_header_raw() == PRODUCTS_HEADER
    ds._total_count = None
    assert ds.get_total_count() == 4
    assert ds.fetch()
    assert [x.record.product_id for x in ds.items] == ["p3", "p4"]
    assert not ds.fetch()


def test_invalid_header_fails_on_fetch():
    ds = _source("Product Id;Product Name", "p1;A")
    with pytest.raises(HeaderValidationError):
        ds.fetch()


def test_empty_stream_has_no_header():
    with pytest.raises(CsvFormatError):
        ImportPagedDataSource(io.BytesIO(b"\r\n\r\n"), CsvPhysicalProduct, 10)


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        _source(PRODUCTS_HEADER, page_size=0)


def test_register_schema_before_fetch_rebinds_columns():
    ds = _source("Id;Name;Code", "p1;A;S1")
    assert ds.get_header_raw() == ""
    ds.register_schema(ColumnMap.for_record(CsvPhysicalProduct, {"product_id": "Id", "name": "Name", "sku": "Code"}))
    assert ds.get_header_raw() == "Id;Name;Code"
    assert ds.get_total_count() == 1
    assert ds.fetch()
    assert ds.items[0].record.sku == "S1"


def test_register_schema_after_fetch_is_ignored():
    ds = _source(PRODUCTS_HEADER, *_rows(3))
    ds.fetch()
    ds.register_schema(ColumnMap.for_record(CsvEditorialReview))
    assert ds.column_map.record_type is CsvPhysicalProduct
    assert ds.fetch()
    assert ds.items[0].record.product_id == "p3"
