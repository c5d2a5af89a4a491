# backend/models/stock.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# How an entry moves stock: IN adds, OUT subtracts (clamped at zero for manual
# corrections), OPNAME sets the counted quantity
class AdjustmentType(str, enum.Enum):
    IN = "in"
    OUT = "out"
    OPNAME = "opname"


# What caused an entry that was not a manual adjustment
class LedgerRefType(str, enum.Enum):
    PURCHASE = "purchase"
    SALE = "sale"


# One immutable stock ledger entry. Rows are only ever inserted.
class StockAdjustment(Base):
    __tablename__ = "stock_adjustments"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    adjustment_type = Column(
        Enum(AdjustmentType, name="adjustment_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    # Always non-negative; the type decides the direction
    quantity = Column(Numeric(15, 2), CheckConstraint("quantity >= 0"), nullable=False)

    reason = Column(String, nullable=False)
    notes = Column(String, nullable=True)

    # Source transaction line (document id), if any
    ref_type = Column(String(20), nullable=True, index=True)
    ref_id = Column(String, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    product = relationship("Product")
    user = relationship("User")
