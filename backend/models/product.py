# backend/models/product.py
from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Model Product
# Catalog entry for a single sellable item. Prices and stock thresholds are
# decimals; current_stock is the on-hand quantity and is only ever written by
# the stock ledger (services.products stock primitives).
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    kode_brg = Column(String, unique=True, nullable=False, index=True)
    nama_brg = Column(String, nullable=False, index=True)
    kategori_id = Column(Integer, ForeignKey("categories.id"), nullable=True)

    satuan_default = Column(String, nullable=False)
    isi_per_satuan = Column(Numeric(10, 2), CheckConstraint("isi_per_satuan > 0"), nullable=False)

    # Prices
    harga_beli = Column(Numeric(15, 2), CheckConstraint("harga_beli >= 0"), nullable=False)
    harga_jual = Column(Numeric(15, 2), CheckConstraint("harga_jual >= 0"), nullable=False)

    # Stock thresholds and the on-hand quantity
    stok_min = Column(Numeric(10, 2), CheckConstraint("stok_min >= 0"), nullable=False)
    stok_max = Column(Numeric(10, 2), CheckConstraint("stok_max >= 0"), nullable=False)
    current_stock = Column(
        Numeric(15, 2), CheckConstraint("current_stock >= 0"), nullable=False, default=0, server_default="0"
    )

    barcode = Column(String, nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("Category")
