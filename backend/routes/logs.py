# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Any
from datetime import date, datetime, time
from pydantic import BaseModel, ConfigDict

from database import get_db
from models.log import Log
from schemas.user import TokenData
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/logs", tags=["Logs"])


class LogResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None

    model_config = ConfigDict(from_attributes=True)

class LogPage(BaseModel):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int


# Browse the audit trail (Admin only)
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="Filter by action"),
    user_id: Optional[int] = Query(None, description="Filter by acting user id"),
    resource: Optional[str] = Query(None, description="Filter by resource"),
    status: Optional[str] = Query(None, description="Filter by status (SUCCESS/FAIL)"),
    date_from: Optional[date] = Query(None, description="From date (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, description="To date (YYYY-MM-DD), inclusive"),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))

    if user_id is not None:
        query = query.filter(Log.user_id == user_id)

    if resource:
        query = query.filter(Log.resource.ilike(f"%{resource}%"))

    if status:
        query = query.filter(Log.status == status.upper())

    if date_from:
        query = query.filter(Log.ts >= datetime.combine(date_from, time.min))

    if date_to:
        # Cover the whole final day
        query = query.filter(Log.ts <= datetime.combine(date_to, time.max))

    # Newest first
    query = query.order_by(Log.ts.desc(), Log.id.desc())

    total = query.count()
    logs = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": [LogResponse.model_validate(entry) for entry in logs],
        "total": total,
        "page": page,
        "page_size": page_size,
    }
