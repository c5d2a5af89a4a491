# services/products.py
"""Product catalog.

Besides the usual lookups this module owns the only code paths that write
``Product.current_stock``. Each of them is a single ``UPDATE`` statement that
computes the new value inside the database, so two requests touching the
same product cannot interleave a read and a write.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import case, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.product import Product
from models.reference import Category
from schemas.product import ProductCreate, ProductUpdate
from utils.errors import DuplicateCode, InvalidReference, NotFound

logger = logging.getLogger(__name__)

# Catalog fields a PATCH may clear
_NULLABLE = {"kategori_id", "barcode"}


def _ensure_category(db: Session, kategori_id: Optional[int]) -> None:
    if kategori_id is None:
        return
    if db.query(Category.id).filter(Category.id == kategori_id).first() is None:
        raise InvalidReference(f"Category with ID {kategori_id} not found")


def _norm_code(code: str) -> str:
    return code.strip()


# ==========================================
#  QUERIES
# ==========================================
def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if product is None:
        raise NotFound(f"Product with ID {product_id} not found")
    return product


def get_product_by_code(db: Session, kode_brg: str) -> Product:
    product = db.query(Product).filter(Product.kode_brg == _norm_code(kode_brg)).first()
    if product is None:
        raise NotFound(f"Product with code {kode_brg} not found")
    return product


def list_products(db: Session) -> List[Product]:
    return db.query(Product).filter(Product.is_active.is_(True)).order_by(Product.kode_brg).all()


def search_products(db: Session, query: str) -> List[Product]:
    like = f"%{query.strip()}%"
    return (
        db.query(Product)
        .filter(or_(Product.nama_brg.ilike(like), Product.kode_brg.ilike(like), Product.barcode.ilike(like)))
        .order_by(Product.nama_brg)
        .all()
    )


def list_low_stock(db: Session) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.is_active.is_(True), Product.current_stock <= Product.stok_min)
        .order_by(Product.current_stock.asc())
        .all()
    )


# ==========================================
#  CATALOG WRITES
# ==========================================
def create_product(db: Session, data: ProductCreate) -> Product:
    code = _norm_code(data.kode_brg)
    if db.query(Product.id).filter(Product.kode_brg == code).first() is not None:
        raise DuplicateCode(f"Product code {code} already exists")
    _ensure_category(db, data.kategori_id)

    product = Product(**data.model_dump(exclude={"kode_brg"}), kode_brg=code, current_stock=Decimal("0"))
    db.add(product)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCode(f"Product code {code} already exists")
    db.refresh(product)
    logger.info("Product %s created (id=%s)", product.kode_brg, product.id)
    return product


def update_product(db: Session, product_id: int, patch: ProductUpdate) -> Product:
    product = get_product(db, product_id)
    changes = {
        k: v for k, v in patch.model_dump(exclude_unset=True).items()
        if v is not None or k in _NULLABLE
    }

    if "kategori_id" in changes:
        _ensure_category(db, changes["kategori_id"])

    if changes.get("kode_brg") is not None:
        code = _norm_code(changes["kode_brg"])
        conflict = db.query(Product.id).filter(Product.kode_brg == code, Product.id != product.id).first()
        if conflict is not None:
            raise DuplicateCode(f"Product code {code} already exists")
        changes["kode_brg"] = code

    for field, value in changes.items():
        setattr(product, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCode(f"Product code {product.kode_brg} already exists")
    db.refresh(product)
    return product


def deactivate_product(db: Session, product_id: int) -> Product:
    product = get_product(db, product_id)
    product.is_active = False
    db.commit()
    db.refresh(product)
    logger.info("Product %s deactivated", product.kode_brg)
    return product


# ==========================================
#  STOCK PRIMITIVES (ledger use only, caller commits)
# ==========================================
def apply_stock_delta(db: Session, product_id: int, delta: Decimal) -> Product:
    """Add ``delta`` to the stock, flooring the result at zero."""
    new_value = Product.current_stock + delta
    updated = (
        db.query(Product)
        .filter(Product.id == product_id)
        .update({Product.current_stock: case((new_value < 0, 0), else_=new_value)}, synchronize_session=False)
    )
    if not updated:
        raise NotFound(f"Product with ID {product_id} not found")
    return _reload(db, product_id)


def consume_stock(db: Session, product_id: int, quantity: Decimal) -> bool:
    """Take ``quantity`` out of stock only if that much is on hand.

    Returns False (and changes nothing) when the stock is short at the moment
    the UPDATE runs.
    """
    updated = (
        db.query(Product)
        .filter(Product.id == product_id, Product.current_stock >= quantity)
        .update({Product.current_stock: Product.current_stock - quantity}, synchronize_session=False)
    )
    if updated:
        _reload(db, product_id)
    return bool(updated)


def set_stock(db: Session, product_id: int, quantity: Decimal) -> Product:
    updated = (
        db.query(Product)
        .filter(Product.id == product_id)
        .update({Product.current_stock: quantity}, synchronize_session=False)
    )
    if not updated:
        raise NotFound(f"Product with ID {product_id} not found")
    return _reload(db, product_id)


def lock_product(db: Session, product_id: int) -> Optional[Product]:
    # FOR UPDATE is ignored by SQLite, which serialises writers anyway
    return (
        db.query(Product)
        .filter(Product.id == product_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def _reload(db: Session, product_id: int) -> Product:
    return db.query(Product).filter(Product.id == product_id).populate_existing().one()
