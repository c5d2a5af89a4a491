# backend/schemas/stock.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from models.stock import AdjustmentType


# Manual stock adjustment; the acting user comes from the auth token
class StockAdjustmentCreate(BaseModel):
    product_id: int
    adjustment_type: AdjustmentType
    quantity: Decimal = Field(ge=0, decimal_places=2)
    reason: str = Field(min_length=1)
    notes: Optional[str] = None


class StockAdjustmentResponse(BaseModel):
    id: int
    product_id: int
    adjustment_type: AdjustmentType
    quantity: Decimal
    reason: str
    notes: Optional[str] = None
    user_id: int
    ref_type: Optional[str] = None
    ref_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# One physical count in a stock opname batch
class OpnameEntry(BaseModel):
    product_id: int
    actual_quantity: Decimal = Field(ge=0, decimal_places=2)


class OpnameRequest(BaseModel):
    items: List[OpnameEntry]


class OpnameResult(BaseModel):
    success: int
    failed: int
    unchanged: int
    errors: List[str]
