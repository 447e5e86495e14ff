from catalog_io.core.constants import ValidationErrors
from catalog_io.crud.catalog import save_products
from catalog_io.schemas.records import CsvEditorialReview, CsvPhysicalProduct
from catalog_io.services.csv.data_source import ImportRecord
from catalog_io.services.imports.validators import EditorialReviewsValidator, ProductsValidator, is_negative


def _products(*records: CsvPhysicalProduct) -> list[ImportRecord]:
    return [ImportRecord(row=i + 2, raw_record=f"raw{i}", record=r) for i, r in enumerate(records)]


def _p(pid, sku, main=None, **kw) -> CsvPhysicalProduct:
    return CsvPhysicalProduct(product_id=pid, name=f"Name {pid}", sku=sku, main_product_id=main, **kw)


def test_is_negative():
    assert is_negative(-1)
    assert not is_negative(0)
    assert not is_negative(None)


def test_valid_products_have_no_violations(db):
    errs = ProductsValidator(db).validate(_products(_p("p1", "S1"), _p("p2", "S2", main="p1")))
    assert errs == []


def test_sku_must_be_unique_within_page(db):
    errs = ProductsValidator(db).validate(_products(_p("p1", "S1"), _p("p2", "s1"), _p("p3", "S1")))
    assert [(e.row_num, e.code) for e in errs] == [
        (3, ValidationErrors.NOT_UNIQUE_VALUE),
        (4, ValidationErrors.NOT_UNIQUE_VALUE),
    ]
    assert errs[0].raw_row == "raw1"
    assert errs[0].column == "Product SKU"


def test_max_length(db):
    errs = ProductsValidator(db).validate(_products(_p("p1", "S" * 65)))
    assert errs[0].code == ValidationErrors.EXCEEDING_MAX_LENGTH
    assert errs[0].message == "Value in column 'Product SKU' may have maximum 64 characters."


def test_main_product_rules(db):
    save_products(db, [_p("base", "B0"), _p("variant", "V0", main="base")])
    errs = ProductsValidator(db).validate(
        _products(
            _p("p1", "S1", main="p1"),
            _p("p2", "S2", main="missing"),
            _p("p3", "S3", main="variant"),
            _p("p4", "S4", main="base"),
            _p("p5", "S5", main="p4"),
        )
    )
    assert [(e.row_num, e.code) for e in errs] == [
        (2, ValidationErrors.CYCLE_SELF_REFERENCE),
        (3, ValidationErrors.MAIN_PRODUCT_IS_NOT_EXISTS),
        (4, ValidationErrors.MAIN_PRODUCT_IS_VARIATION),
        (6, ValidationErrors.MAIN_PRODUCT_IS_VARIATION),
    ]


def test_reviews_dictionaries_and_references(db):
    save_products(db, [_p("p1", "S1")])
    v = EditorialReviewsValidator(db, ["en-US"], ["QuickReview"])
    records = [
        ImportRecord(2, "a", CsvEditorialReview(product_sku="S1", review_type="quickreview", language_code="EN-us", content="x")),
        ImportRecord(3, "b", CsvEditorialReview(product_sku="S1", review_type="Long", language_code="en-US", content="x")),
        ImportRecord(4, "c", CsvEditorialReview(product_sku="S9", review_type="QuickReview", language_code="en-US", content="x")),
    ]
    errs = v.validate(records)
    assert [(e.row_num, e.code, e.column) for e in errs] == [
        (3, ValidationErrors.INVALID_VALUE, "Description Type"),
        (4, ValidationErrors.PRODUCT_NOT_EXISTS, "Product SKU"),
    ]


def test_id_columns_are_length_checked(db):
    errs = ProductsValidator(db).validate(_products(_p("p" * 129, "S1", category_id="c" * 129)))
    assert [e.message for e in errs if e.code == ValidationErrors.EXCEEDING_MAX_LENGTH] == [
        "Value in column 'Product Id' may have maximum 128 characters.",
        "Value in column 'Category Id' may have maximum 128 characters.",
    ]
    review = CsvEditorialReview(review_id="r" * 129, product_sku="S1", review_type="QuickReview", language_code="en-US", content="x")
    errs = EditorialReviewsValidator(db, ["en-US"], ["QuickReview"]).validate([ImportRecord(2, "a", review)])
    assert errs[0].message == "Value in column 'Description Id' may have maximum 128 characters."


def test_product_id_must_be_unique_within_page(db):
    errs = ProductsValidator(db).validate(_products(_p("p1", "S1"), _p("P1", "S2")))
    assert [(e.row_num, e.column) for e in errs] == [(3, "Product Id")]


def test_sku_taken_by_another_stored_product(db):
    save_products(db, [_p("p1", "S1")])
    v = ProductsValidator(db)
    assert v.validate(_products(_p("p1", "S1"))) == []
    assert v.validate(_products(CsvPhysicalProduct(name="No id", sku="S1"))) == []
    errs = v.validate(_products(_p("p2", "S1")))
    assert [(e.code, e.column) for e in errs] == [(ValidationErrors.NOT_UNIQUE_VALUE, "Product SKU")]
