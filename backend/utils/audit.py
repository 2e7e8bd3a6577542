# backend/utils/audit.py
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session

from models.log import Log
from models.users import User


def write_log(
    db: Session,
    *,
    user: Optional[User],
    action: str,
    resource: str,
    request: Optional[Request] = None,
    status: str = "SUCCESS",
    meta: Optional[dict] = None,
):
    """Append one audit entry for a back-office action and commit it."""
    ip = request.client.host if request is not None and request.client else None
    entry = Log(
        user_id=user.id if user is not None else None,
        action=action,
        resource=resource,
        status=status,
        ip=ip,
        meta=meta or {},
    )
    db.add(entry)
    db.commit()
