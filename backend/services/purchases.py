# services/purchases.py
"""Purchase receipts ("pembelian").

Recording a line books the received quantity into stock in the same
transaction. Changing the quantity or deleting the line books the difference
back out against the product stored on the line. A reversal larger than the
stock on hand floors at 0, as a manual ``out`` does.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.purchase import Purchase
from models.stock import AdjustmentType, LedgerRefType
from schemas.purchase import PurchaseCreate, PurchaseExcelRow, PurchaseUpdate
from services import products as catalog
from services.batch import BatchResult, parse_row_date, run_batch
from services.stock_ledger import apply_entry, fmt_qty
from utils.errors import DuplicateCode, NotFound

logger = logging.getLogger(__name__)

# Columns that may not be blanked through a PATCH
_REQUIRED = {"f_beli", "tgl_beli", "nama_brg", "jumlah", "satuan", "hrg_beli", "disc1", "disc2", "disc3", "disc_rp"}
_ZERO_DEFAULTS = ("disc1", "disc2", "disc3", "disc_rp")


def _ensure_unique_document(db: Session, f_beli: str, exclude_id: int = None) -> None:
    q = db.query(Purchase.id).filter(Purchase.f_beli == f_beli)
    if exclude_id is not None:
        q = q.filter(Purchase.id != exclude_id)
    if q.first() is not None:
        raise DuplicateCode(f"Purchase document {f_beli} already exists")


def _commit(db: Session, f_beli: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCode(f"Purchase document {f_beli} already exists")


# ==========================================
#  QUERIES
# ==========================================
def get_purchase(db: Session, purchase_id: int) -> Purchase:
    purchase = db.query(Purchase).filter(Purchase.id == purchase_id).first()
    if purchase is None:
        raise NotFound(f"Purchase with ID {purchase_id} not found")
    return purchase


def list_purchases(db: Session) -> List[Purchase]:
    return db.query(Purchase).order_by(Purchase.tgl_beli.desc(), Purchase.id.desc()).all()


def list_purchases_by_date_range(db: Session, start: date, end: date) -> List[Purchase]:
    return (
        db.query(Purchase)
        .filter(Purchase.tgl_beli >= start, Purchase.tgl_beli <= end)
        .order_by(Purchase.tgl_beli, Purchase.id)
        .all()
    )


def list_purchases_by_supplier(db: Session, codesup: str) -> List[Purchase]:
    return (
        db.query(Purchase)
        .filter(Purchase.codesup == codesup)
        .order_by(Purchase.tgl_beli.desc(), Purchase.id.desc())
        .all()
    )


# ==========================================
#  WRITES
# ==========================================
def create_purchase(db: Session, data: PurchaseCreate, actor_id: int) -> Purchase:
    try:
        _ensure_unique_document(db, data.f_beli)
        product = catalog.get_product_by_code(db, data.kode_brg)

        purchase = Purchase(**data.model_dump(), product_id=product.id)
        db.add(purchase)
        db.flush()

        apply_entry(
            db,
            product_id=product.id,
            kind=AdjustmentType.IN,
            quantity=data.jumlah,
            reason=f"Purchase receipt {data.f_beli}",
            notes=f"Supplier: {data.codesup}" if data.codesup else None,
            actor_id=actor_id,
            ref_type=LedgerRefType.PURCHASE.value,
            ref_id=str(purchase.id),
        )
        _commit(db, data.f_beli)
    except Exception:
        db.rollback()
        raise

    db.refresh(purchase)
    logger.info("Purchase %s recorded: %s x%s", purchase.f_beli, purchase.kode_brg, fmt_qty(purchase.jumlah))
    return purchase


def update_purchase(db: Session, purchase_id: int, patch: PurchaseUpdate, actor_id: int) -> Purchase:
    purchase = get_purchase(db, purchase_id)
    changes = {
        k: v for k, v in patch.model_dump(exclude_unset=True).items()
        if v is not None or k not in _REQUIRED
    }

    try:
        if "f_beli" in changes:
            _ensure_unique_document(db, changes["f_beli"], exclude_id=purchase.id)

        old_qty = purchase.jumlah
        new_qty = changes.get("jumlah", old_qty)
        delta = Decimal(new_qty) - Decimal(old_qty)
        if delta != 0:
            ref_id = str(purchase.id)
            apply_entry(
                db,
                product_id=purchase.product_id,
                kind=AdjustmentType.IN if delta > 0 else AdjustmentType.OUT,
                quantity=abs(delta),
                reason=f"Purchase {purchase.f_beli} quantity changed from {fmt_qty(old_qty)} to {fmt_qty(new_qty)}",
                actor_id=actor_id,
                ref_type=LedgerRefType.PURCHASE.value,
                ref_id=ref_id,
            )

        for field, value in changes.items():
            setattr(purchase, field, value)
        _commit(db, purchase.f_beli)
    except Exception:
        db.rollback()
        raise

    db.refresh(purchase)
    return purchase


def delete_purchase(db: Session, purchase_id: int, actor_id: int) -> None:
    purchase = get_purchase(db, purchase_id)
    ref_id = str(purchase.id)
    try:
        apply_entry(
            db,
            product_id=purchase.product_id,
            kind=AdjustmentType.OUT,
            quantity=purchase.jumlah,
            reason=f"Purchase {purchase.f_beli} deleted",
            actor_id=actor_id,
            ref_type=LedgerRefType.PURCHASE.value,
            ref_id=ref_id,
        )
        db.delete(purchase)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Purchase %s deleted", ref_id)


# ==========================================
#  SPREADSHEET IMPORT
# ==========================================
def row_to_purchase(row: Any) -> PurchaseCreate:
    parsed = PurchaseExcelRow.model_validate(row)
    fields = parsed.model_dump()
    fields["tgl_beli"] = parse_row_date(parsed.tgl_beli)
    fields["dateopr"] = parse_row_date(parsed.dateopr) if parsed.dateopr else None
    for name in _ZERO_DEFAULTS:
        if fields[name] is None:
            fields[name] = Decimal("0")
    return PurchaseCreate(**fields)


def import_purchases(db: Session, rows: Iterable[Any], actor_id: int) -> BatchResult:
    return run_batch(db, rows, lambda row: create_purchase(db, row_to_purchase(row), actor_id))
