# backend/models/sales.py
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, CheckConstraint, func
from database import Base
from utils.pricing import effective_price, line_total


# One point-of-sale line ("penjualan" row), keyed by its own document id f_jual
class Sale(Base):
    __tablename__ = "sales"
    # ids are never reused on SQLite, ledger entries refer to them
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    tgl_jual = Column(Date, nullable=False, index=True)
    f_jual = Column(String, unique=True, nullable=False, index=True)
    acc = Column(String, nullable=True)

    # Product the stock was booked against; reversals go back to it
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    # Product snapshot
    kode_brg = Column(String, nullable=False, index=True)
    nama_brg = Column(String, nullable=False)
    satuan = Column(String, nullable=False)

    jumlah = Column(Numeric(15, 2), CheckConstraint("jumlah > 0"), nullable=False)
    hrg_jual = Column(Numeric(15, 2), nullable=False)
    disc1 = Column(Numeric(10, 2), nullable=False, default=0)
    disc2 = Column(Numeric(10, 2), nullable=False, default=0)
    disc3 = Column(Numeric(10, 2), nullable=False, default=0)
    disc_rp = Column(Numeric(15, 2), nullable=False, default=0)
    ppn = Column(Numeric(15, 2), nullable=True)

    # Customer snapshot
    codelg = Column(String, nullable=True)
    nama_lg = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def harga_net(self):
        return effective_price(self.hrg_jual, self.disc1, self.disc2, self.disc3, self.disc_rp)

    @property
    def total(self):
        return line_total(self.jumlah, self.hrg_jual, self.disc1, self.disc2, self.disc3, self.disc_rp)
