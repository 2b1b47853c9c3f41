from pydantic import BaseModel, EmailStr, Field
from typing import Optional

# ======================
# TOKEN SCHEMAS
# ======================

class Token(BaseModel):
    token: str


class TokenData(BaseModel):
    username: Optional[str] = None
    user_id: Optional[int] = None


class Identity(BaseModel):
    """Resolved caller of an authenticated request."""
    id: int
    username: str


# ======================
# USER AUTHENTICATION SCHEMAS
# ======================

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    # Bcrypt limit is 72 bytes; longer input is truncated before hashing
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str
