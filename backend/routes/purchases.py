# backend/routes/purchases.py
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
from schemas.batch import ImportResult
import schemas.purchase as purchase_schemas
from services import purchases as service
from utils.audit import client_ip, write_log
from utils.errors import InvalidInput
from utils.tokenJWT import role_required

router = APIRouter(prefix="/purchases", tags=["Purchases"])

can_receive = role_required(UserRole.ADMIN, UserRole.MANAGER, UserRole.WAREHOUSE)


@router.get("", response_model=List[purchase_schemas.PurchaseResponse])
def list_purchases(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    codesup: Optional[str] = Query(None, description="Supplier code"),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_receive),
):
    if (start_date is None) != (end_date is None):
        raise InvalidInput("start_date and end_date must be given together")

    if start_date is not None:
        items = service.list_purchases_by_date_range(db, start_date, end_date)
        if codesup:
            items = [p for p in items if p.codesup == codesup]
        return items
    if codesup:
        return service.list_purchases_by_supplier(db, codesup)
    return service.list_purchases(db)


@router.get("/{purchase_id}", response_model=purchase_schemas.PurchaseResponse)
def get_purchase(purchase_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_receive)):
    return service.get_purchase(db, purchase_id)


@router.post("", response_model=purchase_schemas.PurchaseResponse, status_code=status.HTTP_201_CREATED)
def create_purchase(
    payload: purchase_schemas.PurchaseCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_receive),
):
    purchase = service.create_purchase(db, payload, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="PURCHASE_CREATE", resource="purchases",
              resource_id=purchase.id, ip=client_ip(request),
              meta={"f_beli": purchase.f_beli, "kode_brg": purchase.kode_brg, "jumlah": str(purchase.jumlah)})
    return purchase


@router.patch("/{purchase_id}", response_model=purchase_schemas.PurchaseResponse)
def update_purchase(
    purchase_id: int,
    payload: purchase_schemas.PurchaseUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_receive),
):
    purchase = service.update_purchase(db, purchase_id, payload, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="PURCHASE_UPDATE", resource="purchases",
              resource_id=purchase.id, ip=client_ip(request),
              meta={"fields": sorted(payload.model_dump(exclude_unset=True))})
    return purchase


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_purchase(
    purchase_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_receive),
):
    service.delete_purchase(db, purchase_id, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="PURCHASE_DELETE", resource="purchases",
              resource_id=purchase_id, ip=client_ip(request))


# Rows are taken as plain objects so one malformed row cannot reject the whole upload
@router.post("/import", response_model=ImportResult)
def import_purchases(
    request: Request,
    rows: List[Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_receive),
):
    result = service.import_purchases(db, rows, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="PURCHASE_IMPORT", resource="purchases",
              status="SUCCESS" if not result.failed else "PARTIAL", ip=client_ip(request),
              meta={"rows": len(rows), "success": result.success, "failed": result.failed})
    return ImportResult(success=result.success, failed=result.failed, errors=result.errors)
