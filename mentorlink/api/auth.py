from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentorlink.database import get_db
from mentorlink.schemas import LoginRequest, MessageResponse, RegisterRequest, Token
from mentorlink.services import identity_service

router = APIRouter(tags=["Authentication"])


# ===== REGISTER ENDPOINT =====

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Register new user, create its default profile and return a token"""
    user = identity_service.register_identity(
        db,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )
    return {"token": identity_service.issue_token(user)}


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return access token"""
    user = identity_service.verify_credential(
        db,
        username=credentials.username,
        password=credentials.password,
    )
    return {"token": identity_service.issue_token(user)}


# ===== LOGOUT ENDPOINT =====

@router.post("/logout", response_model=MessageResponse)
def logout():
    # Tokens are stateless; the client drops its copy.
    return {"message": "User logged out successfully"}
