# backend/schemas/purchase.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import date, datetime


# Columns of the legacy purchasing export that are stored and echoed back untouched
class PurchaseLegacyFields(BaseModel):
    acc: Optional[str] = None
    opr: Optional[str] = None
    dateopr: Optional[date] = None
    f_order: Optional[str] = None
    jt_tempo: Optional[int] = None
    hrg_beli_lama: Optional[Decimal] = None
    tunai: Optional[Decimal] = None
    ppn: Optional[Decimal] = None
    lama: Optional[int] = None
    isi: Optional[int] = None
    grup: Optional[str] = None
    profit: Optional[Decimal] = None
    hrg_lama: Optional[Decimal] = None
    hrg_jual: Optional[Decimal] = None
    q_barcode: Optional[str] = None
    barcode: Optional[str] = None
    lama1: Optional[int] = None
    urutan: Optional[int] = None
    alamat: Optional[str] = None


# Input schema for recording a received purchase line
class PurchaseCreate(PurchaseLegacyFields):
    f_beli: str = Field(min_length=1)
    no_pb: Optional[str] = None
    tgl_beli: date
    kode_brg: str = Field(min_length=1)
    nama_brg: str
    jumlah: Decimal = Field(gt=0, decimal_places=2)
    satuan: str
    hrg_beli: Decimal = Field(ge=0)
    disc1: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    disc2: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    disc3: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    disc_rp: Decimal = Field(default=Decimal("0"), ge=0)
    codesup: Optional[str] = None
    nama: Optional[str] = None


# PATCH schema; the product of a recorded line cannot be switched
class PurchaseUpdate(PurchaseLegacyFields):
    model_config = ConfigDict(extra="forbid")

    f_beli: Optional[str] = Field(None, min_length=1)
    no_pb: Optional[str] = None
    tgl_beli: Optional[date] = None
    nama_brg: Optional[str] = None
    jumlah: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    satuan: Optional[str] = None
    hrg_beli: Optional[Decimal] = Field(None, ge=0)
    disc1: Optional[Decimal] = Field(None, ge=0, le=100)
    disc2: Optional[Decimal] = Field(None, ge=0, le=100)
    disc3: Optional[Decimal] = Field(None, ge=0, le=100)
    disc_rp: Optional[Decimal] = Field(None, ge=0)
    codesup: Optional[str] = None
    nama: Optional[str] = None


class PurchaseResponse(PurchaseCreate):
    id: int
    product_id: int
    harga_net: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# One row of the purchase spreadsheet, already split into fields by the client.
# Dates arrive as text and numbers may arrive as text; both are checked per row.
class PurchaseExcelRow(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    f_beli: str
    no_pb: Optional[str] = None
    tgl_beli: str
    kode_brg: str
    nama_brg: str
    jumlah: Decimal = Field(decimal_places=2)
    satuan: str
    hrg_beli: Decimal
    disc1: Optional[Decimal] = None
    disc2: Optional[Decimal] = None
    disc3: Optional[Decimal] = None
    disc_rp: Optional[Decimal] = None
    codesup: Optional[str] = None
    nama: Optional[str] = None
    acc: Optional[str] = None
    opr: Optional[str] = None
    dateopr: Optional[str] = None
    f_order: Optional[str] = None
    jt_tempo: Optional[int] = None
    hrg_beli_lama: Optional[Decimal] = None
    tunai: Optional[Decimal] = None
    ppn: Optional[Decimal] = None
    lama: Optional[int] = None
    isi: Optional[int] = None
    grup: Optional[str] = None
    profit: Optional[Decimal] = None
    hrg_lama: Optional[Decimal] = None
    hrg_jual: Optional[Decimal] = None
    q_barcode: Optional[str] = None
    barcode: Optional[str] = None
    lama1: Optional[int] = None
    urutan: Optional[int] = None
    alamat: Optional[str] = None
