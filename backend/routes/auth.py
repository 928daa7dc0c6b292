# backend/routes/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from sqlalchemy import func
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token, get_settings
from utils.audit import write_log, client_ip
from config import Settings
from models import users as models
from schemas import user as schemas
from database import get_db

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


# Register a new user
@router.post("/register", response_model=schemas.UserEnvelope, status_code=status.HTTP_201_CREATED)
def register(
    user: schemas.UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    # Normalize email input
    normalized_email = user.email.strip().lower()

    if user.role == "admin" and not settings.ALLOW_ADMIN_REGISTRATION:
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": normalized_email, "reason": "Admin signup disabled"})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin accounts cannot be self-registered")

    # Check for existing user
    db_user = db.query(models.User).filter(func.lower(models.User.email) == normalized_email).first()
    if db_user:
        write_log(
            db,
            user_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=client_ip(request),
            meta={"email": normalized_email, "reason": "Email exists"},
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    # Create new user instance with hashed password
    new_user = models.User(email=normalized_email, password_hash=get_password_hash(user.password), role=user.role)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Registered user %s with role %s", new_user.id, new_user.role)

    # Log successful registration event
    write_log(
        db,
        user_id=new_user.id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"email": new_user.email, "role": new_user.role},
    )

    return {"message": "User registered", "user": schemas.UserResponse.model_validate(new_user)}


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(
    payload: schemas.UserLogin,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    normalized_email = payload.email.strip().lower()
    db_user = db.query(models.User).filter(func.lower(models.User.email) == normalized_email).first()

    if not db_user:
        write_log(db, user_id=None, action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": normalized_email, "reason": "Unknown email"})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": normalized_email, "reason": "Bad password"})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    # Generate access token
    access_token = create_access_token(data={"id": db_user.id, "role": db_user.role}, settings=settings)

    # Log successful login event
    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"email": db_user.email})

    return {"message": "Login successful", "token": access_token, "token_type": "bearer"}
