# backend/schemas/sales.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import date, datetime


# Input schema for a point-of-sale line
class SaleCreate(BaseModel):
    tgl_jual: date
    f_jual: str = Field(min_length=1)
    acc: Optional[str] = None
    kode_brg: str = Field(min_length=1)
    nama_brg: str
    jumlah: Decimal = Field(gt=0, decimal_places=2)
    satuan: str
    hrg_jual: Decimal = Field(gt=0)
    disc1: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    disc2: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    disc3: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    disc_rp: Decimal = Field(default=Decimal("0"), ge=0)
    ppn: Optional[Decimal] = None
    codelg: Optional[str] = None
    nama_lg: Optional[str] = None


# PATCH schema; kode_brg is fixed once the sale is recorded
class SaleUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tgl_jual: Optional[date] = None
    f_jual: Optional[str] = Field(None, min_length=1)
    acc: Optional[str] = None
    nama_brg: Optional[str] = None
    jumlah: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    satuan: Optional[str] = None
    hrg_jual: Optional[Decimal] = Field(None, gt=0)
    disc1: Optional[Decimal] = Field(None, ge=0, le=100)
    disc2: Optional[Decimal] = Field(None, ge=0, le=100)
    disc3: Optional[Decimal] = Field(None, ge=0, le=100)
    disc_rp: Optional[Decimal] = Field(None, ge=0)
    ppn: Optional[Decimal] = None
    codelg: Optional[str] = None
    nama_lg: Optional[str] = None


class SaleResponse(SaleCreate):
    id: int
    product_id: int
    harga_net: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# One row of the sales spreadsheet as sent by the dashboard
class SalesExcelRow(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    tgl_jual: str
    f_jual: str
    acc: Optional[str] = None
    kode_brg: str
    nama_brg: str
    jumlah: Decimal = Field(decimal_places=2)
    satuan: str
    hrg_jual: Decimal
    disc1: Optional[Decimal] = None
    disc2: Optional[Decimal] = None
    disc3: Optional[Decimal] = None
    disc_rp: Optional[Decimal] = None
    ppn: Optional[Decimal] = None
    codelg: Optional[str] = None
    nama_lg: Optional[str] = None
