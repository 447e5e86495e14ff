from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from catalog_io.core.constants import DataTypes
from catalog_io.crud.catalog import count_products, count_reviews, page_products, page_reviews
from catalog_io.db.models.editorial_review import EditorialReview
from catalog_io.db.models.product import Product
from catalog_io.schemas.records import CsvEditorialReview, CsvPhysicalProduct, CsvRecord
from catalog_io.services.imports.errors import UnknownDataTypeError


def product_to_record(p: Product) -> CsvPhysicalProduct:
    return CsvPhysicalProduct(
        product_id=p.id,
        name=p.name,
        sku=p.sku,
        product_type=p.product_type,
        category_id=p.category_id,
        main_product_id=p.main_product_id,
        gtin=p.gtin,
        vendor=p.vendor,
        is_active=p.is_active,
        can_be_purchased=p.can_be_purchased,
        weight=p.weight,
        max_quantity=p.max_quantity,
    )


def review_to_record(r: EditorialReview) -> CsvEditorialReview:
    return CsvEditorialReview(
        review_id=r.id,
        product_name=r.product.name,
        product_sku=r.product.sku,
        review_type=r.review_type,
        language_code=r.language_code,
        content=r.content,
    )


@dataclass(frozen=True)
class ExportSource:
    record_type: type[CsvRecord]
    count: Callable
    page: Callable
    to_record: Callable


EXPORT_SOURCES = {
    DataTypes.PHYSICAL_PRODUCT: ExportSource(CsvPhysicalProduct, count_products, page_products, product_to_record),
    DataTypes.EDITORIAL_REVIEW: ExportSource(CsvEditorialReview, count_reviews, page_reviews, review_to_record),
}


class ExportPagedDataSource:
    """Pages catalog entities out of the database as CSV records, ordered by id."""

    def __init__(
        self,
        db: Session,
        data_type: str,
        page_size: int,
        object_ids: list[str] | None = None,
        limit: int | None = None,
    ):
        source = EXPORT_SOURCES.get(data_type)
        if source is None:
            raise UnknownDataTypeError(data_type)
        self.db = db
        self.source = source
        self.page_size = page_size
        self.object_ids = object_ids
        self.limit = limit
        self.current_page_number = 0
        self.processed_count = 0
        self.items: list[CsvRecord] = []
        self._total_count: int | None = None

    @property
    def record_type(self) -> type[CsvRecord]:
        return self.source.record_type

    def get_total_count(self) -> int:
        if self._total_count is None:
            total = self.source.count(self.db, self.object_ids)
            self._total_count = min(total, self.limit) if self.limit is not None else total
        return self._total_count

    def fetch(self) -> bool:
        remaining = self.get_total_count() - self.processed_count
        if remaining <= 0:
            self.items = []
            return False

        entities = self.source.page(self.db, self.processed_count, min(self.page_size, remaining), self.object_ids)
        self.items = [self.source.to_record(e) for e in entities]
        if not self.items:
            return False
        self.processed_count += len(self.items)
        self.current_page_number += 1
        return True
