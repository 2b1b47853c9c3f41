import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from mentorlink import models, schemas
from mentorlink.config import settings
from mentorlink.database import get_db
from mentorlink.errors import AuthError

logger = logging.getLogger(__name__)


# ==========================
# AUTH CONFIG
# ==========================

# auto_error is off so a missing header (401) can be told apart from a bad token (403).
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/login", auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto"
)


# ==========================
# PASSWORD UTILS
# ==========================

def _truncate_for_bcrypt(password: str) -> str:
    """
    Bcrypt max input length = 72 bytes
    Truncate safely to avoid crash
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
        password = password_bytes.decode("utf-8", errors="ignore")
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_truncate_for_bcrypt(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_truncate_for_bcrypt(password))


# ==========================
# JWT TOKEN
# ==========================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> schemas.TokenData:
    """Verify signature and expiry; raise InvalidToken on any failure."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as exc:
        logger.warning("Token verification failed: %s", exc)
        raise AuthError("Forbidden", kind="InvalidToken", status_code=403)

    username = payload.get("sub")
    user_id = payload.get("id")
    if username is None or user_id is None:
        raise AuthError("Forbidden", kind="InvalidToken", status_code=403)

    return schemas.TokenData(username=username, user_id=user_id)


# ==========================
# ACCESS GATE
# ==========================

def authenticate(db: Session, token: Optional[str]) -> schemas.Identity:
    if not token:
        raise AuthError("Unauthorized", kind="MissingToken", status_code=401)

    token_data = decode_access_token(token)

    user = db.query(models.User).filter(
        models.User.id == token_data.user_id
    ).first()

    # Tokens outlive deleted accounts; treat them as invalid.
    if user is None or user.username != token_data.username:
        raise AuthError("Forbidden", kind="InvalidToken", status_code=403)

    return schemas.Identity(id=user.id, username=user.username)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> schemas.Identity:
    return authenticate(db, token)
