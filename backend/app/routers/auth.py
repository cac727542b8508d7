"""Account registration and token endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import UserIdentity, create_access_token, get_current_user
from ..services import UserService, UserServiceError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=schemas.UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db)) -> schemas.UserRead:
    """Create an account for a new email address."""

    try:
        return UserService.register(db, payload.email, payload.password)
    except UserServiceError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post("/token", response_model=schemas.TokenResponse)
def obtain_access_token(
    payload: schemas.LoginRequest, db: Session = Depends(get_db)
) -> schemas.TokenResponse:
    """Authenticate a user and return an access token."""

    user = UserService.authenticate(db, payload.email, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email o password non corretti",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_access_token(UserIdentity(id=user.id, email=user.email))
    return schemas.TokenResponse(access_token=token)


@router.get("/me", response_model=schemas.UserRead)
def read_current_user(
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.UserRead:
    return UserService.get_user(db, current_user.id)
