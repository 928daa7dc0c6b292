from typing import Optional
from fastapi import Request
from sqlalchemy.orm import Session
from models.log import Log
from models.users import User


def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", ip=None, meta=None):
    meta = dict(meta or {})
    # A token can outlive its account; keep the id in meta so the foreign key holds
    if user_id is not None and db.get(User, user_id) is None:
        meta["actor_id"] = user_id
        user_id = None
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta)
    db.add(entry)
    db.commit()
