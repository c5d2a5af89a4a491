# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared catalog attributes
class ProductBase(ORMBase):
    kode_brg: str = Field(min_length=1, description="Kode barang (unique product code)")
    nama_brg: str = Field(min_length=1, description="Nama barang")
    kategori_id: Optional[int] = None
    satuan_default: str
    isi_per_satuan: Decimal = Field(gt=0)
    harga_beli: Decimal = Field(ge=0)
    harga_jual: Decimal = Field(gt=0)
    stok_min: Decimal = Field(ge=0)
    stok_max: Decimal = Field(ge=0)
    barcode: Optional[str] = None


# Schema for creating a new product; stock always starts at zero
class ProductCreate(ProductBase):
    pass


# Schema for PATCH requests - all fields optional, stock is not editable here
class ProductUpdate(ORMBase):
    model_config = ConfigDict(extra="forbid")

    kode_brg: Optional[str] = Field(None, min_length=1)
    nama_brg: Optional[str] = Field(None, min_length=1)
    kategori_id: Optional[int] = None
    satuan_default: Optional[str] = None
    isi_per_satuan: Optional[Decimal] = Field(None, gt=0)
    harga_beli: Optional[Decimal] = Field(None, ge=0)
    harga_jual: Optional[Decimal] = Field(None, gt=0)
    stok_min: Optional[Decimal] = Field(None, ge=0)
    stok_max: Optional[Decimal] = Field(None, ge=0)
    barcode: Optional[str] = None


class ProductResponse(ProductBase):
    id: int
    current_stock: Decimal
    is_active: bool
    created_at: datetime
    updated_at: datetime
