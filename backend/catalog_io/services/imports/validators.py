from dataclasses import dataclass
from typing import Any, Iterable

from sqlalchemy.orm import Session

from catalog_io.core.constants import VALIDATION_MESSAGES, ProductTypes, ValidationErrors
from catalog_io.crud.catalog import get_products_by_ids, get_products_by_skus, get_reviews_by_ids
from catalog_io.schemas.records import CsvEditorialReview, CsvPhysicalProduct, CsvRecord
from catalog_io.services.csv.data_source import ImportRecord

@dataclass
class ValidationError:
    message: str
    code: str | None = None
    row_num: int | None = None
    column: str | None = None
    raw_row: str | None = None

def is_negative(v: Any) -> bool:
    try:
        return float(v) < 0
    except Exception:
        return False

def column_name(record_type: type[CsvRecord], field: str) -> str:
    return record_type.model_fields[field].alias or field

def violation(item: ImportRecord, code: str, *args: Any, column: str | None = None) -> ValidationError:
    return ValidationError(
        message=VALIDATION_MESSAGES[code].format(*args),
        code=code,
        row_num=item.row,
        column=column,
        raw_row=item.raw_record,
    )


class RecordsValidator:
    """Business rules over one page of decoded records.

    ``validate`` returns every violation found; a record may have several.
    """
    record_type: type[CsvRecord] = CsvRecord
    max_lengths: dict[str, int] = {}

    def validate(self, records: list[ImportRecord]) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for rule in self.rules():
            errors.extend(rule(records))
        return errors

    def rules(self):
        return [self.check_max_lengths]

    def check_max_lengths(self, records: list[ImportRecord]) -> Iterable[ValidationError]:
        for item in records:
            for field, limit in self.max_lengths.items():
                value = getattr(item.record, field)
                if value is not None and len(value) > limit:
                    column = column_name(self.record_type, field)
                    yield violation(item, ValidationErrors.EXCEEDING_MAX_LENGTH, column, limit, column=column)

    def check_unique(self, records: list[ImportRecord], field: str) -> Iterable[ValidationError]:
        seen: set[str] = set()
        column = column_name(self.record_type, field)
        for item in records:
            value = getattr(item.record, field)
            if not value:
                continue
            key = value.lower()
            if key in seen:
                yield violation(item, ValidationErrors.NOT_UNIQUE_VALUE, column, column=column)
            seen.add(key)


class ProductsValidator(RecordsValidator):
    record_type = CsvPhysicalProduct
    max_lengths = {
        "product_id": 128,
        "name": 1024,
        "sku": 64,
        "product_type": 64,
        "category_id": 128,
        "main_product_id": 128,
        "gtin": 64,
        "vendor": 128,
    }

    def __init__(self, db: Session):
        self.db = db

    def rules(self):
        return [
            self.check_max_lengths,
            self.check_product_type,
            self.check_non_negative,
            lambda records: self.check_unique(records, "product_id"),
            lambda records: self.check_unique(records, "sku"),
            self.check_sku_owner,
            self.check_main_product,
        ]

    def check_product_type(self, records):
        column = column_name(self.record_type, "product_type")
        for item in records:
            value = item.record.product_type
            if value and value.lower() != ProductTypes.PHYSICAL.lower():
                yield violation(item, ValidationErrors.INVALID_VALUE, column, column=column)

    def check_non_negative(self, records):
        for field in ("weight", "max_quantity"):
            column = column_name(self.record_type, field)
            for item in records:
                if is_negative(getattr(item.record, field)):
                    yield violation(item, ValidationErrors.INVALID_VALUE, column, column=column)

    def check_sku_owner(self, records):
        """A SKU already stored for another product cannot be taken over by id."""
        column = column_name(self.record_type, "sku")
        stored = get_products_by_skus(self.db, [x.record.sku for x in records])
        for item in records:
            owner = stored.get(item.record.sku)
            if owner is not None and item.record.product_id and owner.id != item.record.product_id:
                yield violation(item, ValidationErrors.NOT_UNIQUE_VALUE, column, column=column)

    def check_main_product(self, records):
        column = column_name(self.record_type, "main_product_id")
        in_page = {x.record.product_id: x.record for x in records if x.record.product_id}
        existing = get_products_by_ids(self.db, [x.record.main_product_id for x in records])

        for item in records:
            main_id = item.record.main_product_id
            if not main_id:
                continue
            if main_id == item.record.product_id:
                yield violation(item, ValidationErrors.CYCLE_SELF_REFERENCE, column=column)
                continue
            if main_id in in_page:
                main_is_variation = bool(in_page[main_id].main_product_id)
            elif main_id in existing:
                main_is_variation = bool(existing[main_id].main_product_id)
            else:
                yield violation(item, ValidationErrors.MAIN_PRODUCT_IS_NOT_EXISTS, column=column)
                continue
            if main_is_variation:
                yield violation(item, ValidationErrors.MAIN_PRODUCT_IS_VARIATION, column=column)


class EditorialReviewsValidator(RecordsValidator):
    record_type = CsvEditorialReview
    max_lengths = {"review_id": 128, "product_name": 1024, "review_type": 128, "language_code": 64}

    def __init__(self, db: Session, languages: list[str], review_types: list[str]):
        self.db = db
        self.languages = {x.lower() for x in languages}
        self.review_types = {x.lower() for x in review_types}

    def rules(self):
        return [
            self.check_max_lengths,
            self.check_dictionaries,
            lambda records: self.check_unique(records, "review_id"),
            self.check_references,
        ]

    def check_dictionaries(self, records):
        language_column = column_name(self.record_type, "language_code")
        type_column = column_name(self.record_type, "review_type")
        for item in records:
            if item.record.language_code.lower() not in self.languages:
                yield violation(item, ValidationErrors.INVALID_VALUE, language_column, column=language_column)
            if item.record.review_type.lower() not in self.review_types:
                yield violation(item, ValidationErrors.INVALID_VALUE, type_column, column=type_column)

    def check_references(self, records):
        products = get_products_by_skus(self.db, [x.record.product_sku for x in records])
        reviews = get_reviews_by_ids(self.db, [x.record.review_id for x in records])
        for item in records:
            if item.record.product_sku not in products:
                yield violation(
                    item,
                    ValidationErrors.PRODUCT_NOT_EXISTS,
                    item.record.product_sku,
                    column=column_name(self.record_type, "product_sku"),
                )
            if item.record.review_id and item.record.review_id not in reviews:
                yield violation(
                    item,
                    ValidationErrors.REVIEW_NOT_EXISTS,
                    item.record.review_id,
                    column=column_name(self.record_type, "review_id"),
                )
