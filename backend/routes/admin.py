# backend/routes/admin.py
from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
from schemas.user import RoleUpdate, UserResponse
from utils.audit import client_ip, write_log
from utils.errors import NotFound
from utils.tokenJWT import role_required

router = APIRouter(tags=["Admin"])

admin_only = role_required(UserRole.ADMIN)


# List back-office users, optionally filtered by role (Admin only)
@router.get("/users", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    query = db.query(User)
    if role:
        query = query.filter(User.role == role.value)
    return query.order_by(User.id).all()


# Update user role (Admin only)
@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    new_role: RoleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound(f"User with ID {user_id} not found")

    previous = user.role
    user.role = new_role.role.value
    db.commit()
    db.refresh(user)

    write_log(db, user_id=current_user.id, action="USER_ROLE_UPDATE", resource="users", resource_id=user.id,
              ip=client_ip(request), meta={"from": previous, "to": user.role})
    return user
