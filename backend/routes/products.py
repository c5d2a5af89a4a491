# backend/routes/products.py
from typing import List

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
import schemas.product as product_schemas
from services import products as catalog
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, role_required

router = APIRouter(prefix="/products", tags=["Products"])

# Catalog changes are limited to admins and managers
can_edit_catalog = role_required(UserRole.ADMIN, UserRole.MANAGER)


# ==========================================
#  READ
# ==========================================
@router.get("", response_model=List[product_schemas.ProductResponse])
def list_products(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return catalog.list_products(db)


@router.get("/low-stock", response_model=List[product_schemas.ProductResponse])
def low_stock(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return catalog.list_low_stock(db)


@router.get("/search", response_model=List[product_schemas.ProductResponse])
def search(
    q: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return catalog.search_products(db, q)


@router.get("/by-code/{kode_brg}", response_model=product_schemas.ProductResponse)
def get_by_code(kode_brg: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return catalog.get_product_by_code(db, kode_brg)


@router.get("/{product_id}", response_model=product_schemas.ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return catalog.get_product(db, product_id)


# ==========================================
#  WRITE
# ==========================================
@router.post("", response_model=product_schemas.ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_catalog),
):
    product = catalog.create_product(db, payload)
    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
              resource_id=product.id, ip=client_ip(request), meta={"kode_brg": product.kode_brg})
    return product


@router.patch("/{product_id}", response_model=product_schemas.ProductResponse)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_catalog),
):
    product = catalog.update_product(db, product_id, payload)
    write_log(db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products",
              resource_id=product.id, ip=client_ip(request),
              meta={"fields": sorted(payload.model_dump(exclude_unset=True))})
    return product


@router.delete("/{product_id}", response_model=product_schemas.ProductResponse)
def deactivate_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_catalog),
):
    product = catalog.deactivate_product(db, product_id)
    write_log(db, user_id=current_user.id, action="PRODUCT_DEACTIVATE", resource="products",
              resource_id=product.id, ip=client_ip(request), meta={"kode_brg": product.kode_brg})
    return product
