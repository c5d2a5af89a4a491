# services/sales.py
"""Point-of-sale lines ("penjualan").

A sale takes its quantity out of stock with a conditional update, so it is
refused outright when the stock on hand is short. Deleting a sale puts the
full quantity back.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.sales import Sale
from models.stock import AdjustmentType, LedgerRefType
from schemas.sales import SaleCreate, SalesExcelRow, SaleUpdate
from services import products as catalog
from services.batch import BatchResult, parse_row_date, run_batch
from services.stock_ledger import apply_entry, fmt_qty
from utils.errors import DuplicateCode, NotFound

logger = logging.getLogger(__name__)

_REQUIRED = {"tgl_jual", "f_jual", "nama_brg", "jumlah", "satuan", "hrg_jual", "disc1", "disc2", "disc3", "disc_rp"}


def _ensure_unique_document(db: Session, f_jual: str, exclude_id: int = None) -> None:
    q = db.query(Sale.id).filter(Sale.f_jual == f_jual)
    if exclude_id is not None:
        q = q.filter(Sale.id != exclude_id)
    if q.first() is not None:
        raise DuplicateCode(f"Sales document {f_jual} already exists")


def _commit(db: Session, f_jual: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCode(f"Sales document {f_jual} already exists")


# ==========================================
#  QUERIES
# ==========================================
def get_sale(db: Session, sale_id: int) -> Sale:
    sale = db.query(Sale).filter(Sale.id == sale_id).first()
    if sale is None:
        raise NotFound(f"Sale with ID {sale_id} not found")
    return sale


def list_sales(db: Session) -> List[Sale]:
    return db.query(Sale).order_by(Sale.tgl_jual.desc(), Sale.id.desc()).all()


def list_sales_by_date_range(db: Session, start: date, end: date) -> List[Sale]:
    return (
        db.query(Sale)
        .filter(Sale.tgl_jual >= start, Sale.tgl_jual <= end)
        .order_by(Sale.tgl_jual, Sale.id)
        .all()
    )


def list_sales_by_product(db: Session, kode_brg: str) -> List[Sale]:
    return (
        db.query(Sale)
        .filter(Sale.kode_brg == kode_brg)
        .order_by(Sale.tgl_jual.desc(), Sale.id.desc())
        .all()
    )


# ==========================================
#  WRITES
# ==========================================
def create_sale(db: Session, data: SaleCreate, actor_id: int) -> Sale:
    try:
        _ensure_unique_document(db, data.f_jual)
        product = catalog.get_product_by_code(db, data.kode_brg)

        sale = Sale(**data.model_dump(), product_id=product.id)
        db.add(sale)
        db.flush()

        apply_entry(
            db,
            product_id=product.id,
            kind=AdjustmentType.OUT,
            quantity=data.jumlah,
            reason=f"Sale {data.f_jual}",
            notes=f"Customer: {data.codelg}" if data.codelg else None,
            actor_id=actor_id,
            strict=True,
            ref_type=LedgerRefType.SALE.value,
            ref_id=str(sale.id),
        )
        _commit(db, data.f_jual)
    except Exception:
        db.rollback()
        raise

    db.refresh(sale)
    logger.info("Sale %s recorded: %s x%s", sale.f_jual, sale.kode_brg, fmt_qty(sale.jumlah))
    return sale


def update_sale(db: Session, sale_id: int, patch: SaleUpdate, actor_id: int) -> Sale:
    sale = get_sale(db, sale_id)
    changes = {
        k: v for k, v in patch.model_dump(exclude_unset=True).items()
        if v is not None or k not in _REQUIRED
    }

    try:
        if "f_jual" in changes:
            _ensure_unique_document(db, changes["f_jual"], exclude_id=sale.id)

        old_qty = sale.jumlah
        new_qty = changes.get("jumlah", old_qty)
        # positive: fewer units sold, stock goes back up
        delta = Decimal(old_qty) - Decimal(new_qty)
        if delta != 0:
            ref_id = str(sale.id)
            apply_entry(
                db,
                product_id=sale.product_id,
                kind=AdjustmentType.IN if delta > 0 else AdjustmentType.OUT,
                quantity=abs(delta),
                reason=f"Sale {sale.f_jual} quantity changed from {fmt_qty(old_qty)} to {fmt_qty(new_qty)}",
                actor_id=actor_id,
                strict=True,
                ref_type=LedgerRefType.SALE.value,
                ref_id=ref_id,
            )

        for field, value in changes.items():
            setattr(sale, field, value)
        _commit(db, sale.f_jual)
    except Exception:
        db.rollback()
        raise

    db.refresh(sale)
    return sale


def delete_sale(db: Session, sale_id: int, actor_id: int) -> None:
    sale = get_sale(db, sale_id)
    ref_id = str(sale.id)
    try:
        apply_entry(
            db,
            product_id=sale.product_id,
            kind=AdjustmentType.IN,
            quantity=sale.jumlah,
            reason=f"Sale {sale.f_jual} deleted",
            actor_id=actor_id,
            ref_type=LedgerRefType.SALE.value,
            ref_id=ref_id,
        )
        db.delete(sale)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Sale %s deleted, stock restored", ref_id)


# ==========================================
#  SPREADSHEET IMPORT
# ==========================================
def row_to_sale(row: Any) -> SaleCreate:
    parsed = SalesExcelRow.model_validate(row)
    fields = parsed.model_dump()
    fields["tgl_jual"] = parse_row_date(parsed.tgl_jual)
    for name in ("disc1", "disc2", "disc3", "disc_rp"):
        if fields[name] is None:
            fields[name] = Decimal("0")
    return SaleCreate(**fields)


def import_sales(db: Session, rows: Iterable[Any], actor_id: int) -> BatchResult:
    return run_batch(db, rows, lambda row: create_sale(db, row_to_sale(row), actor_id))
