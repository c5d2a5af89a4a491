# backend/routes/reference.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
from schemas import reference as schemas
from services import reference as service
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, role_required

router = APIRouter(tags=["Reference data"])

can_edit_catalog = role_required(UserRole.ADMIN, UserRole.MANAGER)


@router.post("/categories", response_model=schemas.CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: schemas.CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_catalog),
):
    category = service.create_category(db, payload)
    write_log(db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
              resource_id=category.id, ip=client_ip(request), meta={"name": category.name})
    return category


@router.get("/categories", response_model=List[schemas.CategoryResponse])
def list_categories(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_categories(db)


@router.get("/categories/{category_id}", response_model=schemas.CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_category(db, category_id)


@router.post("/units", response_model=schemas.UnitResponse, status_code=status.HTTP_201_CREATED)
def create_unit(
    payload: schemas.UnitCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_catalog),
):
    unit = service.create_unit(db, payload)
    write_log(db, user_id=current_user.id, action="UNIT_CREATE", resource="units",
              resource_id=unit.id, ip=client_ip(request), meta={"abbreviation": unit.abbreviation})
    return unit


@router.get("/units", response_model=List[schemas.UnitResponse])
def list_units(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_units(db)


@router.get("/units/{unit_id}", response_model=schemas.UnitResponse)
def get_unit(unit_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_unit(db, unit_id)
