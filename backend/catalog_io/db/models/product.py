from decimal import Decimal
from sqlalchemy import Boolean, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_io.db.base import Base
from catalog_io.db.models._mixins import TimestampMixin

class Product(Base, TimestampMixin):
    __tablename__ = "product"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(1024))
    sku: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    product_type: Mapped[str] = mapped_column(String(64), default="Physical")
    category_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    main_product_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    gtin: Mapped[str | None] = mapped_column(String(64), nullable=True)
    vendor: Mapped[str | None] = mapped_column(String(128), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    can_be_purchased: Mapped[bool] = mapped_column(Boolean, default=True)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(18, 4), nullable=True)
    max_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    reviews = relationship("EditorialReview", back_populates="product", cascade="all, delete-orphan")
