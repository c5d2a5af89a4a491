# backend/schemas/reference.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import datetime


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CategoryResponse(CategoryCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnitCreate(BaseModel):
    name: str = Field(min_length=1)
    abbreviation: str = Field(min_length=1)
    conversion_factor: Decimal = Field(gt=0)
    base_unit_id: Optional[int] = None


class UnitResponse(UnitCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
