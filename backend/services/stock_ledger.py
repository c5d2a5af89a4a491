# services/stock_ledger.py
"""Stock ledger.

Every change to a product's stock is recorded as a ``StockAdjustment`` row and
applied to ``Product.current_stock`` in the same transaction. Entries are
never updated or deleted; reversing a sale or purchase writes a new,
compensating entry.

Effects by type:

* ``in``      stock + quantity
* ``out``     stock - quantity, floored at 0 (strict mode rejects instead)
* ``opname``  stock = quantity
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from models.stock import AdjustmentType, StockAdjustment
from models.users import User
from services import products as catalog
from utils.errors import InsufficientStock, InvalidInput, NotFound

logger = logging.getLogger(__name__)

# Quantities are stored as Numeric(15, 2)
QUANTITY_STEP = Decimal("0.01")


@dataclass(frozen=True)
class OpnameCommand:
    """Physical count of one product, taken by ``actor_id``."""

    product_id: int
    actual_quantity: Decimal
    actor_id: int


@dataclass
class OpnameSummary:
    success: int = 0
    failed: int = 0
    unchanged: int = 0
    errors: List[str] = field(default_factory=list)


def fmt_qty(value: Decimal) -> str:
    """Render a quantity without trailing zeros or exponent (50.00 -> 50)."""
    text = format(Decimal(value).normalize(), "f")
    return "0" if text in ("-0", "") else text


def _ensure_actor(db: Session, actor_id: int) -> None:
    if actor_id is None:
        raise InvalidInput("An acting user is required for stock changes")
    if db.query(User.id).filter(User.id == actor_id).first() is None:
        raise NotFound(f"User with ID {actor_id} not found")


def apply_entry(
    db: Session,
    *,
    product_id: int,
    kind: AdjustmentType,
    quantity: Decimal,
    reason: str,
    actor_id: int,
    notes: Optional[str] = None,
    strict: bool = False,
    ref_type: Optional[str] = None,
    ref_id: Optional[str] = None,
) -> StockAdjustment:
    """Apply one entry and stage it in the session without committing.

    With ``strict`` an ``out`` entry that exceeds the stock on hand raises
    ``InsufficientStock`` and leaves the stock untouched instead of clamping.
    """
    quantity = Decimal(quantity)
    if quantity < 0:
        raise InvalidInput("Quantity must not be negative")
    if quantity != quantity.quantize(QUANTITY_STEP):
        raise InvalidInput(f"Quantity {quantity} has more than 2 decimal places")

    product = catalog.get_product(db, product_id)
    _ensure_actor(db, actor_id)
    before = product.current_stock

    if kind == AdjustmentType.IN:
        catalog.apply_stock_delta(db, product_id, quantity)
    elif kind == AdjustmentType.OUT:
        if strict:
            if not catalog.consume_stock(db, product_id, quantity):
                db.refresh(product)
                available = product.current_stock
                raise InsufficientStock(
                    "Insufficient stock. "
                    f"Available: {fmt_qty(available)}, Required: {fmt_qty(quantity)}"
                )
        else:
            catalog.apply_stock_delta(db, product_id, -quantity)
    elif kind == AdjustmentType.OPNAME:
        catalog.set_stock(db, product_id, quantity)
    else:
        raise InvalidInput(f"Invalid adjustment type: {kind}")

    entry = StockAdjustment(
        product_id=product_id,
        adjustment_type=kind,
        quantity=quantity,
        reason=reason,
        notes=notes,
        user_id=actor_id,
        ref_type=ref_type,
        ref_id=ref_id,
    )
    db.add(entry)
    db.flush()

    logger.debug(
        "Ledger %s %s x%s on product %s: %s -> %s",
        kind.value, ref_type or "manual", fmt_qty(quantity), product_id,
        fmt_qty(before), fmt_qty(catalog.get_product(db, product_id).current_stock),
    )
    return entry


def record_adjustment(
    db: Session,
    *,
    product_id: int,
    kind: AdjustmentType,
    quantity: Decimal,
    reason: str,
    actor_id: int,
    notes: Optional[str] = None,
) -> StockAdjustment:
    """Apply a manual adjustment and commit it together with the stock change."""
    try:
        entry = apply_entry(
            db,
            product_id=product_id,
            kind=kind,
            quantity=quantity,
            reason=reason,
            notes=notes,
            actor_id=actor_id,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(entry)
    logger.info("Stock adjustment %s recorded for product %s (%s %s)", entry.id, product_id, kind.value, fmt_qty(quantity))
    return entry


def reconcile(db: Session, counts: Iterable[OpnameCommand]) -> OpnameSummary:
    """Stock opname: bring each product's stock to its counted quantity.

    Entries are independent. A count that already matches the stock writes
    nothing and is reported in ``unchanged`` (and in ``success``).
    """
    summary = OpnameSummary()

    for count in counts:
        try:
            product = catalog.lock_product(db, count.product_id)
            if product is None:
                db.rollback()
                summary.errors.append(f"Product with ID {count.product_id} not found")
                summary.failed += 1
                continue

            current = product.current_stock
            actual = Decimal(count.actual_quantity)
            difference = actual - current

            if difference == 0:
                db.rollback()
                summary.unchanged += 1
                summary.success += 1
                continue

            record_adjustment(
                db,
                product_id=count.product_id,
                kind=AdjustmentType.OPNAME,
                quantity=actual,
                reason=f"Stock opname: difference of {fmt_qty(difference)}",
                notes=f"Previous stock: {fmt_qty(current)}, Actual stock: {fmt_qty(actual)}",
                actor_id=count.actor_id,
            )
            summary.success += 1
        except Exception as e:
            db.rollback()
            message = getattr(e, "message", None) or str(e) or "Unknown error"
            if not hasattr(e, "message"):
                logger.exception("Stock opname failed for product %s", count.product_id)
            summary.errors.append(f"Product ID {count.product_id}: {message}")
            summary.failed += 1

    logger.info(
        "Stock opname finished: %s ok (%s unchanged), %s failed",
        summary.success, summary.unchanged, summary.failed,
    )
    return summary


# ==========================================
#  QUERIES
# ==========================================
def list_adjustments(db: Session) -> List[StockAdjustment]:
    return db.query(StockAdjustment).order_by(StockAdjustment.created_at, StockAdjustment.id).all()


def list_adjustments_by_product(db: Session, product_id: int) -> List[StockAdjustment]:
    return (
        db.query(StockAdjustment)
        .filter(StockAdjustment.product_id == product_id)
        .order_by(StockAdjustment.created_at, StockAdjustment.id)
        .all()
    )


def list_adjustments_by_date_range(db: Session, start: date, end: date) -> List[StockAdjustment]:
    """Entries created from the start of ``start`` to the last instant of ``end``."""
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    return (
        db.query(StockAdjustment)
        .filter(
            StockAdjustment.created_at >= datetime.combine(start, time.min),
            StockAdjustment.created_at <= datetime.combine(end, time.max),
        )
        .order_by(StockAdjustment.created_at, StockAdjustment.id)
        .all()
    )
