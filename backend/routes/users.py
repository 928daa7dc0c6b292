# backend/routes/users.py
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.user import TokenData, UserEnvelope, UserRead, UserResponse, UserUpdate, UsersPage
from utils.access import commit_or_404, delete_or_404, ensure_owner_or_admin, get_or_404
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/users", tags=["Users"])


# Retrieve a list of users with filtering, sorting, and pagination (Admin only)
@router.get("", response_model=UsersPage)
def list_users(
    q: Optional[str] = Query(None, description="Search by email"),
    role: Optional[str] = Query(None, description="Filter by role"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    sort_by: Literal["id", "email", "role"] = "id",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    query = db.query(User)

    # Filter by email
    if q:
        query = query.filter(User.email.ilike(f"%{q.lower()}%"))

    # Filter by role
    if role:
        query = query.filter(User.role == role.lower())

    sort_map = {
        "id": User.id,
        "email": User.email,
        "role": User.role,
    }
    col = sort_map[sort_by]
    query = query.order_by(col.asc() if order == "asc" else col.desc())

    total = query.count()
    users = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "users": [UserResponse.model_validate(u) for u in users],
        "total": total,
        "page": page,
        "page_size": page_size,
    }


# Retrieve current authenticated user details
@router.get("/me", response_model=UserRead)
def get_me(db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    # The token may outlive the account it was issued for
    user = get_or_404(db, User, current_user.id, "User not found")
    return {"user": UserResponse.model_validate(user)}


# Update a profile (owner or admin); only admins may change roles
@router.put("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: int,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    user = get_or_404(db, User, user_id, "User not found")
    ensure_owner_or_admin(user.id, current_user, "You cannot modify this user")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if "role" in changes and changes["role"] != user.role and not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only an admin can change roles")

    if "email" in changes:
        new_email = changes["email"].strip().lower()
        taken = (
            db.query(User)
            .filter(func.lower(User.email) == new_email, User.id != user.id)
            .first()
        )
        if taken:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
        user.email = new_email

    if "role" in changes:
        user.role = changes["role"]

    commit_or_404(db, "User not found")
    db.refresh(user)

    write_log(db, user_id=current_user.id, action="USER_UPDATE", resource="users",
              ip=client_ip(request), meta={"target_id": user.id, "fields": sorted(changes)})

    return {"message": "User updated", "user": UserResponse.model_validate(user)}


# Delete an account (owner or admin)
@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    user = get_or_404(db, User, user_id, "User not found")
    ensure_owner_or_admin(user.id, current_user, "You cannot delete this user")

    email = user.email
    delete_or_404(db, user, "User not found")

    write_log(db, user_id=None if current_user.id == user_id else current_user.id,
              action="USER_DELETE", resource="users", ip=client_ip(request),
              meta={"target_id": user_id, "email": email})

    return {"message": f"User {email} has been deleted"}
