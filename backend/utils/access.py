# utils/access.py
from fastapi import HTTPException, status
from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from schemas.user import TokenData


# Fetch a row by primary key or fail with 404
def get_or_404(db: Session, model, obj_id: int, detail: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj


# Owner-or-admin policy: the owning user or any admin passes
def ensure_owner_or_admin(owner_id: int, current_user: TokenData, detail: str = "Forbidden"):
    if not current_user.is_admin and owner_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


# Callers look the row up first so unknown ids stay 404 for every role
def ensure_admin(current_user: TokenData, detail: str = "Admin access required"):
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def commit_or_404(db: Session, detail: str):
    """Commit the pending mutation.

    The existence check and the mutation run as separate statements, so the
    row may disappear in between; SQLAlchemy reports that as StaleDataError,
    which is answered with 404 instead of a phantom success.
    """
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def delete_or_404(db: Session, obj, detail: str):
    """Delete a row loaded earlier in this session, cascades included.

    A DELETE matching no rows only warns in SQLAlchemy, so the row is
    claimed first with a no-op conditional UPDATE: zero matched rows means
    another request already removed it, otherwise the row stays locked
    until commit.
    """
    model = type(obj)
    claimed = db.execute(
        update(model)
        .where(model.id == obj.id)
        .values(id=model.id)
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount == 0:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

    db.delete(obj)
    commit_or_404(db, detail)
