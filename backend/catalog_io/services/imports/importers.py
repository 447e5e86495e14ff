from dataclasses import dataclass, field
from typing import Callable

from sqlalchemy.orm import Session

from catalog_io.core.config import settings
from catalog_io.core.constants import DataTypes
from catalog_io.crud.catalog import save_products, save_reviews
from catalog_io.schemas.records import CsvEditorialReview, CsvPhysicalProduct, CsvRecord
from catalog_io.services.csv.column_map import ColumnMap
from catalog_io.services.imports.errors import UnknownDataTypeError
from catalog_io.services.imports.validators import (
    EditorialReviewsValidator,
    ProductsValidator,
    RecordsValidator,
)

ChunkProcessor = Callable[[Session, list[CsvRecord]], tuple[int, int]]


@dataclass(frozen=True)
class Importer:
    """One importable entity kind, as configuration for the shared engine.

    ``chunk_processor`` persists the records of a page that passed
    validation and returns ``(created, updated)``.
    """
    data_type: str
    record_type: type[CsvRecord]
    validator_factory: Callable[[Session], RecordsValidator]
    chunk_processor: ChunkProcessor
    column_overrides: dict[str, str] = field(default_factory=dict)

    def column_map(self) -> ColumnMap:
        return ColumnMap.for_record(self.record_type, self.column_overrides)


PHYSICAL_PRODUCT_IMPORTER = Importer(
    data_type=DataTypes.PHYSICAL_PRODUCT,
    record_type=CsvPhysicalProduct,
    validator_factory=ProductsValidator,
    chunk_processor=save_products,
)

EDITORIAL_REVIEW_IMPORTER = Importer(
    data_type=DataTypes.EDITORIAL_REVIEW,
    record_type=CsvEditorialReview,
    validator_factory=lambda db: EditorialReviewsValidator(db, settings.languages(), settings.review_types()),
    chunk_processor=save_reviews,
)

IMPORTERS: dict[str, Importer] = {
    i.data_type: i for i in (PHYSICAL_PRODUCT_IMPORTER, EDITORIAL_REVIEW_IMPORTER)
}


def get_importer(data_type: str) -> Importer:
    importer = IMPORTERS.get(data_type)
    if importer is None:
        raise UnknownDataTypeError(data_type)
    return importer
