# backend/routes/sales.py
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
from schemas.batch import ImportResult
import schemas.sales as sales_schemas
from services import sales as service
from utils.audit import client_ip, write_log
from utils.errors import InvalidInput
from utils.tokenJWT import role_required

router = APIRouter(prefix="/sales", tags=["Sales"])

can_sell = role_required(UserRole.ADMIN, UserRole.MANAGER, UserRole.CASHIER)


@router.get("", response_model=List[sales_schemas.SaleResponse])
def list_sales(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    kode_brg: Optional[str] = Query(None, description="Product code"),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_sell),
):
    if (start_date is None) != (end_date is None):
        raise InvalidInput("start_date and end_date must be given together")

    if start_date is not None:
        items = service.list_sales_by_date_range(db, start_date, end_date)
        if kode_brg:
            items = [s for s in items if s.kode_brg == kode_brg]
        return items
    if kode_brg:
        return service.list_sales_by_product(db, kode_brg)
    return service.list_sales(db)


@router.get("/{sale_id}", response_model=sales_schemas.SaleResponse)
def get_sale(sale_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_sell)):
    return service.get_sale(db, sale_id)


@router.post("", response_model=sales_schemas.SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: sales_schemas.SaleCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_sell),
):
    sale = service.create_sale(db, payload, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="SALE_CREATE", resource="sales",
              resource_id=sale.id, ip=client_ip(request),
              meta={"f_jual": sale.f_jual, "kode_brg": sale.kode_brg, "jumlah": str(sale.jumlah)})
    return sale


@router.patch("/{sale_id}", response_model=sales_schemas.SaleResponse)
def update_sale(
    sale_id: int,
    payload: sales_schemas.SaleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_sell),
):
    sale = service.update_sale(db, sale_id, payload, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="SALE_UPDATE", resource="sales",
              resource_id=sale.id, ip=client_ip(request),
              meta={"fields": sorted(payload.model_dump(exclude_unset=True))})
    return sale


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(
    sale_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_sell),
):
    service.delete_sale(db, sale_id, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="SALE_DELETE", resource="sales",
              resource_id=sale_id, ip=client_ip(request))


@router.post("/import", response_model=ImportResult)
def import_sales(
    request: Request,
    rows: List[Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_sell),
):
    result = service.import_sales(db, rows, actor_id=current_user.id)
    write_log(db, user_id=current_user.id, action="SALE_IMPORT", resource="sales",
              status="SUCCESS" if not result.failed else "PARTIAL", ip=client_ip(request),
              meta={"rows": len(rows), "success": result.success, "failed": result.failed})
    return ImportResult(success=result.success, failed=result.failed, errors=result.errors)
