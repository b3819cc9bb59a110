# evrecharge/routes/users.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from evrecharge import auth, models, schemas
from evrecharge.config import Settings
from evrecharge.database import get_db
from evrecharge.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"]
)

# User Registration: creates the profile with the default "user" role
@router.post("/signup", response_model=schemas.UserProfile, status_code=status.HTTP_201_CREATED)
def signup(user: schemas.UserCreate, db: Session = Depends(get_db)):
    existing_user = db.query(models.User).filter(models.User.email == user.email).first()
    if existing_user:
        raise HTTPException(status_code=409, detail="This email address is already in use.")

    new_user = models.User(
        full_name=user.full_name,
        email=user.email,
        password_hash=auth.get_password_hash(user.password),
        role="user",
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info(f"User {new_user.id} registered")
    return new_user

# User Login (JWT)
@router.post("/login", response_model=schemas.TokenResponse)
def login(
    user: schemas.UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    db_user = db.query(models.User).filter(models.User.email == user.email).first()
    if not db_user or not auth.verify_password(user.password, db_user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = auth.create_access_token(data={"sub": db_user.id}, settings=settings)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": db_user,
    }

@router.get("/me", response_model=schemas.UserProfile)
def me(current_user: models.User = Depends(auth.get_current_user)):
    return current_user
