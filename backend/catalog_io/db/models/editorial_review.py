from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_io.db.base import Base
from catalog_io.db.models._mixins import TimestampMixin

class EditorialReview(Base, TimestampMixin):
    __tablename__ = "editorial_review"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    product_id: Mapped[str] = mapped_column(ForeignKey("product.id", ondelete="CASCADE"), index=True)
    review_type: Mapped[str] = mapped_column(String(128))
    language_code: Mapped[str] = mapped_column(String(64))
    content: Mapped[str] = mapped_column(Text)

    product = relationship("Product", back_populates="reviews")
