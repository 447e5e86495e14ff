from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class CsvRecord(BaseModel):
    """Base for importable rows: one CSV line decoded into a frozen model.

    Field aliases are the column headers; fields without a default are
    required columns.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)


class CsvPhysicalProduct(CsvRecord):
    product_id: str | None = Field(default=None, alias="Product Id")
    name: str = Field(alias="Product Name")
    sku: str = Field(alias="Product SKU")
    product_type: str | None = Field(default=None, alias="Product Type")
    category_id: str | None = Field(default=None, alias="Category Id")
    main_product_id: str | None = Field(default=None, alias="Main Product Id")
    gtin: str | None = Field(default=None, alias="GTIN")
    vendor: str | None = Field(default=None, alias="Vendor")
    is_active: bool | None = Field(default=None, alias="Is Active")
    can_be_purchased: bool | None = Field(default=None, alias="Can Be Purchased")
    weight: Decimal | None = Field(default=None, alias="Weight")
    max_quantity: int | None = Field(default=None, alias="Max Quantity")


class CsvEditorialReview(CsvRecord):
    review_id: str | None = Field(default=None, alias="Description Id")
    product_name: str | None = Field(default=None, alias="Product Name")
    product_sku: str = Field(alias="Product SKU")
    review_type: str = Field(alias="Description Type")
    language_code: str = Field(alias="Language")
    content: str = Field(alias="Description Content")
