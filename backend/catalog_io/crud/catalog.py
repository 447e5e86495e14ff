import uuid
from sqlalchemy.orm import Session

from catalog_io.core.constants import ProductTypes
from catalog_io.db.models.product import Product
from catalog_io.db.models.editorial_review import EditorialReview
from catalog_io.schemas.records import CsvEditorialReview, CsvPhysicalProduct


def _new_id() -> str:
    return uuid.uuid4().hex


def get_products_by_ids(db: Session, ids: list[str]) -> dict[str, Product]:
    ids = sorted(set(x for x in ids if x))
    if not ids:
        return {}
    return {p.id: p for p in db.query(Product).filter(Product.id.in_(ids)).all()}


def get_products_by_skus(db: Session, skus: list[str]) -> dict[str, Product]:
    skus = sorted(set(x for x in skus if x))
    if not skus:
        return {}
    return {p.sku: p for p in db.query(Product).filter(Product.sku.in_(skus)).all()}


def get_reviews_by_ids(db: Session, ids: list[str]) -> dict[str, EditorialReview]:
    ids = sorted(set(x for x in ids if x))
    if not ids:
        return {}
    return {r.id: r for r in db.query(EditorialReview).filter(EditorialReview.id.in_(ids)).all()}


def save_products(db: Session, records: list[CsvPhysicalProduct]) -> tuple[int, int]:
    """Create or update products by id, falling back to SKU. Returns (created, updated)."""
    by_id = get_products_by_ids(db, [r.product_id for r in records])
    by_sku = get_products_by_skus(db, [r.sku for r in records])
    created = updated = 0

    for r in records:
        p = by_id.get(r.product_id) if r.product_id else None
        if p is None:
            p = by_sku.get(r.sku)
        if p is None:
            p = Product(id=r.product_id or _new_id(), sku=r.sku, name=r.name)
            db.add(p)
            by_sku[p.sku] = p
            created += 1
        else:
            updated += 1

        p.name = r.name
        p.sku = r.sku
        p.product_type = r.product_type or ProductTypes.PHYSICAL
        p.category_id = r.category_id
        p.main_product_id = r.main_product_id
        p.gtin = r.gtin
        p.vendor = r.vendor
        p.weight = r.weight
        p.max_quantity = r.max_quantity
        if r.is_active is not None:
            p.is_active = r.is_active
        if r.can_be_purchased is not None:
            p.can_be_purchased = r.can_be_purchased

    db.commit()
    return created, updated


def save_reviews(db: Session, records: list[CsvEditorialReview]) -> tuple[int, int]:
    products = get_products_by_skus(db, [r.product_sku for r in records])
    existing = get_reviews_by_ids(db, [r.review_id for r in records])
    created = updated = 0

    for r in records:
        review = existing.get(r.review_id) if r.review_id else None
        if review is None:
            review = EditorialReview(id=r.review_id or _new_id())
            db.add(review)
            created += 1
        else:
            updated += 1
        review.product_id = products[r.product_sku].id
        review.review_type = r.review_type
        review.language_code = r.language_code
        review.content = r.content

    db.commit()
    return created, updated


def count_products(db: Session, ids: list[str] | None = None) -> int:
    q = db.query(Product)
    if ids:
        q = q.filter(Product.id.in_(ids))
    return q.count()


def page_products(db: Session, skip: int, take: int, ids: list[str] | None = None) -> list[Product]:
    q = db.query(Product)
    if ids:
        q = q.filter(Product.id.in_(ids))
    return q.order_by(Product.id).offset(skip).limit(take).all()


def count_reviews(db: Session, ids: list[str] | None = None) -> int:
    q = db.query(EditorialReview)
    if ids:
        q = q.filter(EditorialReview.id.in_(ids))
    return q.count()


def page_reviews(db: Session, skip: int, take: int, ids: list[str] | None = None) -> list[EditorialReview]:
    q = db.query(EditorialReview)
    if ids:
        q = q.filter(EditorialReview.id.in_(ids))
    return q.order_by(EditorialReview.id).offset(skip).limit(take).all()
