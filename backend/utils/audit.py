from typing import Any, Optional

from fastapi import Request
from sqlalchemy.orm import Session
from models.log import Log


def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


def write_log(
    db: Session,
    *,
    user_id: Optional[int],
    action: str,
    resource: str,
    resource_id: Any = None,
    status: str = "SUCCESS",
    ip: Optional[str] = None,
    meta: Optional[dict] = None,
) -> Log:
    entry = Log(
        user_id=user_id,
        action=action,
        resource=resource,
        resource_id=str(resource_id) if resource_id is not None else None,
        status=status,
        ip=ip,
        meta=meta or {},
    )
    db.add(entry)
    db.commit()
    return entry
