# backend/routes/stock.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
import schemas.stock as stock_schemas
from services import stock_ledger
from utils.audit import client_ip, write_log
from utils.errors import InvalidInput
from utils.tokenJWT import role_required

router = APIRouter(prefix="/stock", tags=["Stock"])

# Admin, manager and warehouse staff may move stock by hand
can_manage_stock = role_required(UserRole.ADMIN, UserRole.MANAGER, UserRole.WAREHOUSE)


@router.get("/adjustments", response_model=List[stock_schemas.StockAdjustmentResponse])
def list_adjustments(
    product_id: Optional[int] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_manage_stock),
):
    if (start_date is None) != (end_date is None):
        raise InvalidInput("start_date and end_date must be given together")

    if start_date is not None:
        entries = stock_ledger.list_adjustments_by_date_range(db, start_date, end_date)
        if product_id is not None:
            entries = [e for e in entries if e.product_id == product_id]
        return entries
    if product_id is not None:
        return stock_ledger.list_adjustments_by_product(db, product_id)
    return stock_ledger.list_adjustments(db)


@router.post("/adjustments", response_model=stock_schemas.StockAdjustmentResponse, status_code=status.HTTP_201_CREATED)
def create_adjustment(
    payload: stock_schemas.StockAdjustmentCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_manage_stock),
):
    entry = stock_ledger.record_adjustment(
        db,
        product_id=payload.product_id,
        kind=payload.adjustment_type,
        quantity=payload.quantity,
        reason=payload.reason,
        notes=payload.notes,
        actor_id=current_user.id,
    )
    write_log(
        db, user_id=current_user.id, action="STOCK_ADJUSTMENT", resource="stock", resource_id=entry.id,
        ip=client_ip(request),
        meta={"product_id": entry.product_id, "type": entry.adjustment_type.value, "quantity": str(entry.quantity)},
    )
    return entry


@router.post("/opname", response_model=stock_schemas.OpnameResult)
def stock_opname(
    payload: stock_schemas.OpnameRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_manage_stock),
):
    counts = [
        stock_ledger.OpnameCommand(
            product_id=item.product_id,
            actual_quantity=item.actual_quantity,
            actor_id=current_user.id,
        )
        for item in payload.items
    ]
    summary = stock_ledger.reconcile(db, counts)
    write_log(
        db, user_id=current_user.id, action="STOCK_OPNAME", resource="stock",
        status="SUCCESS" if not summary.failed else "PARTIAL", ip=client_ip(request),
        meta={"success": summary.success, "failed": summary.failed, "unchanged": summary.unchanged},
    )
    return stock_schemas.OpnameResult(
        success=summary.success,
        failed=summary.failed,
        unchanged=summary.unchanged,
        errors=summary.errors,
    )
