# backend/models/purchase.py
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, CheckConstraint, func
from database import Base
from utils.pricing import effective_price, line_total


# One purchase line ("pembelian" row). Every line carries its own document id
# (f_beli). Product name/unit are copied at receipt time and are not joined
# back to the catalog.
class Purchase(Base):
    __tablename__ = "purchases"
    # ids are never reused on SQLite, ledger entries refer to them
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    f_beli = Column(String, unique=True, nullable=False, index=True)
    no_pb = Column(String, nullable=True)
    tgl_beli = Column(Date, nullable=False, index=True)

    # Product the stock was booked against; reversals go back to it
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    # Product snapshot
    kode_brg = Column(String, nullable=False, index=True)
    nama_brg = Column(String, nullable=False)
    satuan = Column(String, nullable=False)

    jumlah = Column(Numeric(15, 2), CheckConstraint("jumlah > 0"), nullable=False)
    hrg_beli = Column(Numeric(15, 2), nullable=False)
    disc1 = Column(Numeric(10, 2), nullable=False, default=0)
    disc2 = Column(Numeric(10, 2), nullable=False, default=0)
    disc3 = Column(Numeric(10, 2), nullable=False, default=0)
    disc_rp = Column(Numeric(15, 2), nullable=False, default=0)

    # Supplier snapshot
    codesup = Column(String, nullable=True, index=True)
    nama = Column(String, nullable=True)

    # Legacy columns carried over from the old purchasing system
    acc = Column(String, nullable=True)
    opr = Column(String, nullable=True)
    dateopr = Column(Date, nullable=True)
    f_order = Column(String, nullable=True)
    jt_tempo = Column(Integer, nullable=True)
    hrg_beli_lama = Column(Numeric(15, 2), nullable=True)
    tunai = Column(Numeric(15, 2), nullable=True)
    ppn = Column(Numeric(15, 2), nullable=True)
    lama = Column(Integer, nullable=True)
    isi = Column(Integer, nullable=True)
    grup = Column(String, nullable=True)
    profit = Column(Numeric(15, 2), nullable=True)
    hrg_lama = Column(Numeric(15, 2), nullable=True)
    hrg_jual = Column(Numeric(15, 2), nullable=True)
    q_barcode = Column(String, nullable=True)
    barcode = Column(String, nullable=True)
    lama1 = Column(Integer, nullable=True)
    urutan = Column(Integer, nullable=True)
    alamat = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Net unit price after the discount chain
    @property
    def harga_net(self):
        return effective_price(self.hrg_beli, self.disc1, self.disc2, self.disc3, self.disc_rp)

    @property
    def total(self):
        return line_total(self.jumlah, self.hrg_beli, self.disc1, self.disc2, self.disc3, self.disc_rp)
